"""Image generation module."""

from genai_samples.images.models import GeneratedImage
from genai_samples.images.service import ImagenService

__all__ = [
    "GeneratedImage",
    "ImagenService",
]
