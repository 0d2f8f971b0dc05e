"""RAG pipeline module."""

from genai_samples.rag.models import RAGQuery, RAGResponse, SourceAttribution
from genai_samples.rag.pipeline import RAGPipeline

__all__ = [
    "RAGPipeline",
    "RAGQuery",
    "RAGResponse",
    "SourceAttribution",
]
