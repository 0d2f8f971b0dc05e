"""Prometheus metrics for the samples.

Every metric is prefixed with ``genai_``. Status labels are either
``success`` or ``error``.
"""

import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware

_MODEL_CALL_BUCKETS = [0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0]
_FAST_CALL_BUCKETS = [0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]

# HTTP
HTTP_REQUEST_DURATION = Histogram(
    "genai_http_request_duration_seconds",
    "API request latency",
    ["method", "endpoint", "status_code"],
    buckets=_FAST_CALL_BUCKETS + [5.0, 10.0, 30.0],
)
HTTP_REQUEST_TOTAL = Counter(
    "genai_http_requests_total",
    "API requests served",
    ["method", "endpoint", "status_code"],
)

# Gemini generation
GEMINI_REQUEST_DURATION = Histogram(
    "genai_gemini_request_duration_seconds",
    "Latency of generate_content calls",
    ["model", "status"],
    buckets=_MODEL_CALL_BUCKETS,
)
GEMINI_REQUEST_TOTAL = Counter(
    "genai_gemini_requests_total",
    "generate_content calls",
    ["model", "status"],
)
GEMINI_TOKENS_TOTAL = Counter(
    "genai_gemini_tokens_total",
    "Tokens reported in usage metadata",
    ["model", "kind"],
)

# Embeddings
EMBEDDING_REQUEST_DURATION = Histogram(
    "genai_embedding_request_duration_seconds",
    "Latency of embed_content calls",
    ["model", "status"],
    buckets=_FAST_CALL_BUCKETS,
)
EMBEDDING_REQUEST_TOTAL = Counter(
    "genai_embedding_requests_total",
    "embed_content calls",
    ["model", "status"],
)
EMBEDDING_TEXTS = Histogram(
    "genai_embedding_texts_per_request",
    "Texts sent in one embed_content call",
    ["model"],
    buckets=[1, 2, 5, 10, 25, 50, 100, 250],
)

# Retrieval and RAG
RETRIEVAL_RESULTS_RETURNED = Histogram(
    "genai_retrieval_results_returned",
    "Documents returned per retrieval",
    buckets=[0, 1, 2, 3, 5, 10, 20],
)
RETRIEVAL_TOP_SCORE = Histogram(
    "genai_retrieval_top_score",
    "Cosine similarity of the best document",
    buckets=[-0.5, 0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0],
)
RAG_QUERY_DURATION = Histogram(
    "genai_rag_query_duration_seconds",
    "End-to-end RAG query latency",
    ["status"],
    buckets=_MODEL_CALL_BUCKETS,
)
RAG_QUERY_TOTAL = Counter(
    "genai_rag_queries_total",
    "RAG queries answered",
    ["status"],
)

# Imagen
IMAGE_REQUEST_TOTAL = Counter(
    "genai_image_requests_total",
    "generate_images calls",
    ["model", "status"],
)
IMAGES_GENERATED_TOTAL = Counter(
    "genai_images_generated_total",
    "Images returned by the image model",
    ["model"],
)

# Function calling
TOOL_CALLS_TOTAL = Counter(
    "genai_tool_calls_total",
    "Function calls executed on behalf of the model",
    ["tool", "status"],
)

# Qdrant
VECTORSTORE_OPERATION_DURATION = Histogram(
    "genai_vectorstore_operation_duration_seconds",
    "Qdrant call latency",
    ["operation", "status"],
    buckets=_FAST_CALL_BUCKETS,
)


def _status(success: bool) -> str:
    return "success" if success else "error"


class MetricsMiddleware(BaseHTTPMiddleware):
    """Records latency and count of every API request except /metrics."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        endpoint = self._normalize_endpoint(request.url.path)
        status_code = 500
        start = time.perf_counter()
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            labels = {
                "method": request.method,
                "endpoint": endpoint,
                "status_code": str(status_code),
            }
            HTTP_REQUEST_DURATION.labels(**labels).observe(time.perf_counter() - start)
            HTTP_REQUEST_TOTAL.labels(**labels).inc()

    def _normalize_endpoint(self, path: str) -> str:
        """Collapse paths to their route group to bound label cardinality."""
        if path.startswith("/health"):
            return "/health"
        if path.startswith("/api/v1/"):
            route = path.removeprefix("/api/v1/").split("/", 1)[0]
            return f"/api/v1/{route}"
        return path


def get_metrics() -> bytes:
    """Render the default registry in the Prometheus text format."""
    return generate_latest()


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST


def track_llm_request(
    model: str,
    duration: float,
    prompt_tokens: int,
    completion_tokens: int,
    success: bool = True,
) -> None:
    """Record one generate_content call.

    Token counts are only added for successful calls.

    Args:
        model: Gemini model name.
        duration: Call latency in seconds.
        prompt_tokens: Prompt tokens from usage metadata.
        completion_tokens: Candidate tokens from usage metadata.
        success: Whether the call returned a response.
    """
    status = _status(success)
    GEMINI_REQUEST_DURATION.labels(model=model, status=status).observe(duration)
    GEMINI_REQUEST_TOTAL.labels(model=model, status=status).inc()

    if success:
        GEMINI_TOKENS_TOTAL.labels(model=model, kind="prompt").inc(prompt_tokens)
        GEMINI_TOKENS_TOTAL.labels(model=model, kind="completion").inc(completion_tokens)


def track_embedding_request(
    model: str,
    duration: float,
    batch_size: int,
    success: bool = True,
) -> None:
    """Record one embed_content call and how many texts it carried."""
    status = _status(success)
    EMBEDDING_REQUEST_DURATION.labels(model=model, status=status).observe(duration)
    EMBEDDING_REQUEST_TOTAL.labels(model=model, status=status).inc()
    EMBEDDING_TEXTS.labels(model=model).observe(batch_size)


def track_retrieval_request(
    results_returned: int,
    top_score: float | None,
) -> None:
    """Record a retrieval.

    Args:
        results_returned: Number of documents returned.
        top_score: Best cosine similarity, None when nothing was returned.
    """
    RETRIEVAL_RESULTS_RETURNED.observe(results_returned)
    if top_score is not None:
        RETRIEVAL_TOP_SCORE.observe(top_score)


def track_rag_query(duration: float, success: bool = True) -> None:
    status = _status(success)
    RAG_QUERY_DURATION.labels(status=status).observe(duration)
    RAG_QUERY_TOTAL.labels(status=status).inc()


def track_image_request(model: str, images: int, success: bool = True) -> None:
    """Record one generate_images call and the images it returned."""
    IMAGE_REQUEST_TOTAL.labels(model=model, status=_status(success)).inc()
    if success:
        IMAGES_GENERATED_TOTAL.labels(model=model).inc(images)


def track_tool_call(tool: str, success: bool = True) -> None:
    TOOL_CALLS_TOTAL.labels(tool=tool, status=_status(success)).inc()


def track_vectorstore_operation(
    operation: str,
    duration: float,
    success: bool = True,
) -> None:
    VECTORSTORE_OPERATION_DURATION.labels(
        operation=operation, status=_status(success)
    ).observe(duration)
