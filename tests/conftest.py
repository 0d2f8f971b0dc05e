"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from genai_samples.api.app import app


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client for FastAPI app.

    Yields:
        AsyncClient configured for testing.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def genai_client() -> MagicMock:
    """Mock google-genai client with async model methods."""
    mock_client = MagicMock()
    mock_client.aio.models.generate_content = AsyncMock()
    mock_client.aio.models.embed_content = AsyncMock()
    mock_client.aio.models.generate_images = AsyncMock()
    mock_client.aio.aclose = AsyncMock()
    return mock_client
