"""Observability module for metrics and monitoring."""

from genai_samples.observability.metrics import (
    MetricsMiddleware,
    get_metrics,
    track_embedding_request,
    track_image_request,
    track_llm_request,
    track_rag_query,
    track_retrieval_request,
    track_tool_call,
    track_vectorstore_operation,
)

__all__ = [
    "MetricsMiddleware",
    "get_metrics",
    "track_embedding_request",
    "track_image_request",
    "track_llm_request",
    "track_rag_query",
    "track_retrieval_request",
    "track_tool_call",
    "track_vectorstore_operation",
]
