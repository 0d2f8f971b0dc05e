"""Image-to-text module."""

from genai_samples.multimodal.describer import ImageDescriber
from genai_samples.multimodal.loader import ImageLoader, ImageSource

__all__ = [
    "ImageDescriber",
    "ImageLoader",
    "ImageSource",
]
