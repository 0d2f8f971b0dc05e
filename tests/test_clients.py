"""Tests for genai client construction."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import SecretStr

from genai_samples.clients import build_genai_client, close_genai_client
from genai_samples.config import VertexSettings
from genai_samples.exceptions import ConfigurationError, ErrorCode


class TestBuildGenaiClient:
    """Tests for build_genai_client."""

    def test_api_key_selects_developer_api(self) -> None:
        """An API key builds a Gemini Developer API client."""
        settings = VertexSettings(api_key=SecretStr("test-key"), timeout=30.0)

        with patch("genai_samples.clients.genai.Client") as mock_client:
            build_genai_client(settings)

        kwargs = mock_client.call_args.kwargs
        assert kwargs["api_key"] == "test-key"
        assert "vertexai" not in kwargs
        assert kwargs["http_options"].timeout == 30000

    def test_vertex_with_project(self) -> None:
        """Without an API key the Vertex AI backend is used."""
        settings = VertexSettings(project="my-project", location="asia-northeast3")

        with patch("genai_samples.clients.genai.Client") as mock_client:
            build_genai_client(settings)

        kwargs = mock_client.call_args.kwargs
        assert kwargs["vertexai"] is True
        assert kwargs["project"] == "my-project"
        assert kwargs["location"] == "asia-northeast3"

    def test_missing_project(self) -> None:
        """Vertex AI needs a project."""
        settings = VertexSettings(project=None, api_key=None)

        with patch("genai_samples.clients.genai.Client") as mock_client:
            with pytest.raises(ConfigurationError) as exc_info:
                build_genai_client(settings)

        assert exc_info.value.code == ErrorCode.CONFIGURATION_ERROR
        mock_client.assert_not_called()


class TestCloseGenaiClient:
    """Tests for close_genai_client."""

    async def test_closes_both_transports(self) -> None:
        """Async and sync transports are released."""
        client = MagicMock()
        client.aio.aclose = AsyncMock()

        await close_genai_client(client)

        client.aio.aclose.assert_awaited_once()
        client.close.assert_called_once()
