"""Construction and release of the shared google-genai client."""

from google import genai
from google.genai import types

from genai_samples.config import VertexSettings
from genai_samples.exceptions import ConfigurationError
from genai_samples.logging_config import get_logger

logger = get_logger(__name__)


def build_genai_client(settings: VertexSettings) -> genai.Client:
    """Create a google-genai client from settings.

    An API key selects the Gemini Developer API; otherwise Vertex AI is used
    and a project ID is required.

    Args:
        settings: Vertex AI connection settings.

    Returns:
        Configured client.

    Raises:
        ConfigurationError: If neither an API key nor a project is set.
    """
    http_options = types.HttpOptions(timeout=int(settings.timeout * 1000))

    if settings.api_key is not None:
        logger.info("Using Gemini Developer API")
        return genai.Client(
            api_key=settings.api_key.get_secret_value(),
            http_options=http_options,
        )

    if not settings.project:
        raise ConfigurationError(
            "VERTEX_PROJECT must be set when no API key is configured",
            details={"location": settings.location},
        )

    logger.info(
        "Using Vertex AI",
        extra={"project": settings.project, "location": settings.location},
    )
    return genai.Client(
        vertexai=True,
        project=settings.project,
        location=settings.location,
        http_options=http_options,
    )


async def close_genai_client(client: genai.Client) -> None:
    """Release the client's async and sync transports."""
    await client.aio.aclose()
    client.close()
