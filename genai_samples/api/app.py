"""FastAPI application entry point.

Configures the application with logging, metrics, exception handling,
health checks and the generation/RAG routes.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from genai_samples import __version__
from genai_samples.api.routes import router
from genai_samples.config import get_settings
from genai_samples.container import ServiceContainer
from genai_samples.exceptions import ErrorCode, GenAISamplesError
from genai_samples.logging_config import get_logger, setup_logging
from genai_samples.observability.metrics import (
    MetricsMiddleware,
    get_metrics,
    get_metrics_content_type,
)

logger = get_logger(__name__)

_STATUS_CODES = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.IMAGE_LOAD_ERROR: 400,
    ErrorCode.COLLECTION_NOT_FOUND: 404,
    ErrorCode.NO_CANDIDATES: 404,
    ErrorCode.COLLECTION_EXISTS: 409,
    ErrorCode.LLM_RATE_LIMIT: 429,
    ErrorCode.EMBEDDING_SERVICE_ERROR: 502,
    ErrorCode.IMAGE_GENERATION_ERROR: 502,
    ErrorCode.LLM_SERVICE_ERROR: 502,
    ErrorCode.LLM_EMPTY_RESPONSE: 502,
    ErrorCode.CONFIGURATION_ERROR: 503,
    ErrorCode.LLM_TIMEOUT: 504,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Services are started on the first request that needs them and closed
    on shutdown.
    """
    settings = get_settings()
    setup_logging(level=settings.log_level)
    app.state.container = ServiceContainer(settings)
    logger.info(
        "Starting GenAI Samples API",
        extra={
            "version": __version__,
            "environment": settings.environment.value,
        },
    )

    yield

    await app.state.container.close()
    logger.info("Shutting down GenAI Samples API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="GenAI Samples",
        description="Gemini text, image, function calling and RAG samples",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(MetricsMiddleware)
    app.add_exception_handler(GenAISamplesError, genai_exception_handler)

    app.add_api_route("/health", health_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/health/ready", readiness_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/health/live", liveness_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/metrics", metrics_endpoint, methods=["GET"], tags=["Observability"])
    app.include_router(router)

    return app


async def genai_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Convert GenAISamplesError exceptions to structured JSON responses."""
    if not isinstance(exc, GenAISamplesError):
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": ErrorCode.INTERNAL_ERROR.value,
                    "message": str(exc),
                    "details": {},
                }
            },
        )

    logger.error(
        f"Request failed: {exc.message}",
        extra={
            "error_code": exc.code.value,
            "path": request.url.path,
            "details": exc.details,
        },
    )

    return JSONResponse(
        status_code=get_status_code(exc.code),
        content=exc.to_dict(),
    )


def get_status_code(code: ErrorCode) -> int:
    """Map an error code to an HTTP status code."""
    return _STATUS_CODES.get(code, 500)


async def health_check() -> dict[str, Any]:
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
    }


async def readiness_check(request: Request) -> dict[str, Any]:
    """Kubernetes readiness probe.

    Services start lazily, so an idle container still counts as ready.
    """
    container: ServiceContainer | None = getattr(request.app.state, "container", None)
    checks: dict[str, str] = {
        "config": "ok",
        "services": "started" if container is not None and container.started else "idle",
    }

    return {
        "status": "ready" if checks["config"] == "ok" else "not_ready",
        "checks": checks,
        "timestamp": datetime.now(UTC).isoformat(),
    }


async def liveness_check() -> dict[str, str]:
    """Kubernetes liveness probe."""
    return {"status": "alive"}


async def metrics_endpoint() -> Response:
    """Expose Prometheus metrics."""
    return Response(content=get_metrics(), media_type=get_metrics_content_type())


app = create_app()
