"""Embedding service module."""

from genai_samples.embeddings.models import EmbeddingResult, TaskType
from genai_samples.embeddings.service import EmbeddingService, VertexEmbeddingService

__all__ = [
    "EmbeddingResult",
    "EmbeddingService",
    "TaskType",
    "VertexEmbeddingService",
]
