"""Vector store module."""

from genai_samples.vectorstore.models import SearchResult, VectorRecord
from genai_samples.vectorstore.service import QdrantVectorStore, VectorStore, point_id

__all__ = [
    "QdrantVectorStore",
    "SearchResult",
    "VectorRecord",
    "VectorStore",
    "point_id",
]
