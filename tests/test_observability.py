"""Tests for observability module."""

from httpx import AsyncClient

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


class TestMetricsEndpoint:
    """Tests for /metrics endpoint."""

    async def test_metrics_endpoint_returns_prometheus_format(
        self, client: AsyncClient
    ) -> None:
        """Metrics endpoint returns Prometheus format."""
        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]
        assert b"# HELP" in response.content


class TestMetricsFunctions:
    """Tests for metrics tracking functions."""

    def test_get_metrics_returns_bytes(self) -> None:
        """get_metrics returns bytes."""
        assert isinstance(get_metrics(), bytes)

    def test_track_llm_request_success(self) -> None:
        """track_llm_request records tokens for successful requests."""
        track_llm_request(
            model="gemini-2.0-flash",
            duration=1.5,
            prompt_tokens=100,
            completion_tokens=50,
            success=True,
        )

        metrics = get_metrics().decode()
        assert "genai_gemini_request_duration_seconds" in metrics
        assert 'genai_gemini_tokens_total{model="gemini-2.0-flash",kind="prompt"}' in metrics

    def test_track_llm_request_failure(self) -> None:
        """track_llm_request records failed request."""
        track_llm_request(
            model="gemini-2.0-flash",
            duration=0.5,
            prompt_tokens=0,
            completion_tokens=0,
            success=False,
        )

        metrics = get_metrics().decode()
        assert 'genai_gemini_requests_total{model="gemini-2.0-flash",status="error"}' in metrics

    def test_track_embedding_request(self) -> None:
        """track_embedding_request records request."""
        track_embedding_request(
            model="text-multilingual-embedding-002",
            duration=0.1,
            batch_size=2,
        )

        metrics = get_metrics().decode()
        assert "genai_embedding_request_duration_seconds" in metrics
        assert "genai_embedding_texts_per_request" in metrics

    def test_track_retrieval_request(self) -> None:
        """track_retrieval_request accepts negative top scores."""
        track_retrieval_request(results_returned=1, top_score=-0.2)

        metrics = get_metrics().decode()
        assert "genai_retrieval_results_returned" in metrics
        assert "genai_retrieval_top_score" in metrics

    def test_track_retrieval_request_without_results(self) -> None:
        """An empty retrieval records no top score."""
        track_retrieval_request(results_returned=0, top_score=None)
        assert "genai_retrieval_results_returned" in get_metrics().decode()

    def test_track_rag_query(self) -> None:
        """track_rag_query records duration and status."""
        track_rag_query(duration=2.0, success=True)
        assert 'genai_rag_queries_total{status="success"}' in get_metrics().decode()

    def test_track_image_request(self) -> None:
        """track_image_request counts generated images."""
        track_image_request(model="imagen-3.0-generate-002", images=2)

        metrics = get_metrics().decode()
        assert 'genai_images_generated_total{model="imagen-3.0-generate-002"}' in metrics

    def test_track_tool_call(self) -> None:
        """track_tool_call counts calls per function."""
        track_tool_call("getCurrentWeather")
        assert 'genai_tool_calls_total{tool="getCurrentWeather",status="success"}' in (
            get_metrics().decode()
        )

    def test_track_vectorstore_operation(self) -> None:
        """track_vectorstore_operation records latency."""
        track_vectorstore_operation("search", 0.02)
        assert "genai_vectorstore_operation_duration_seconds" in get_metrics().decode()


class TestMetricsMiddleware:
    """Tests for MetricsMiddleware."""

    async def test_middleware_records_request_metrics(self, client: AsyncClient) -> None:
        """Middleware records HTTP request metrics."""
        await client.get("/health")

        metrics = get_metrics().decode()
        assert 'endpoint="/health"' in metrics
        assert "genai_http_requests_total" in metrics

    def test_normalizes_endpoints(self) -> None:
        """Health and API paths are grouped to limit cardinality."""
        middleware = MetricsMiddleware(app=lambda scope, receive, send: None)

        assert middleware._normalize_endpoint("/health/ready") == "/health"
        assert middleware._normalize_endpoint("/api/v1/query") == "/api/v1/query"
        assert middleware._normalize_endpoint("/api/v1/query/extra") == "/api/v1/query"
        assert middleware._normalize_endpoint("/metrics") == "/metrics"
