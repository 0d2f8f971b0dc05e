"""Embedding service interface and Vertex AI implementation."""

import time
from abc import ABC, abstractmethod

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from genai_samples.clients import build_genai_client, close_genai_client
from genai_samples.config import EmbeddingSettings, VertexSettings, get_settings
from genai_samples.embeddings.models import EmbeddingResult, TaskType
from genai_samples.exceptions import DimensionMismatchError, EmbeddingError, ErrorCode
from genai_samples.logging_config import get_logger
from genai_samples.observability.metrics import track_embedding_request

logger = get_logger(__name__)


class EmbeddingService(ABC):
    """Abstract base class for embedding services.

    Defines the interface for generating text embeddings.
    """

    @abstractmethod
    async def embed(
        self,
        text: str,
        task_type: TaskType = TaskType.RETRIEVAL_DOCUMENT,
    ) -> EmbeddingResult:
        """Generate embedding for a single text.

        Args:
            text: Text to embed.
            task_type: How the embedding will be used.

        Returns:
            EmbeddingResult with vector.

        Raises:
            EmbeddingError: If embedding fails.
        """
        ...

    @abstractmethod
    async def embed_batch(
        self,
        texts: list[str],
        task_type: TaskType = TaskType.RETRIEVAL_DOCUMENT,
    ) -> list[EmbeddingResult]:
        """Generate embeddings for multiple texts.

        Args:
            texts: List of texts to embed.
            task_type: How the embeddings will be used.

        Returns:
            List of EmbeddingResult objects, in input order.

        Raises:
            EmbeddingError: If embedding fails.
        """
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model name used for embeddings."""
        ...

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Get the embedding dimensions."""
        ...


class VertexEmbeddingService(EmbeddingService):
    """Embedding service backed by the Vertex AI text embedding models.

    Requests a fixed output dimensionality so every vector produced by one
    deployment can be compared with every other.
    """

    def __init__(
        self,
        settings: EmbeddingSettings | None = None,
        client: genai.Client | None = None,
        vertex_settings: VertexSettings | None = None,
    ) -> None:
        """Initialize the embedding service.

        Args:
            settings: Embedding configuration. Uses defaults if not provided.
            client: Shared genai client. Creates one on first use if not provided.
            vertex_settings: Connection settings for a self-created client.
        """
        self._settings = settings or get_settings().embedding
        self._vertex_settings = vertex_settings
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> genai.Client:
        """Get or create the genai client."""
        if self._client is None:
            self._client = build_genai_client(
                self._vertex_settings or get_settings().vertex
            )
        return self._client

    async def close(self) -> None:
        """Close the genai client if we own it."""
        if self._owns_client and self._client is not None:
            await close_genai_client(self._client)
            self._client = None

    @property
    def model_name(self) -> str:
        """Get the model name."""
        return self._settings.model

    @property
    def dimensions(self) -> int:
        """Get embedding dimensions."""
        return self._settings.dimensions

    async def embed(
        self,
        text: str,
        task_type: TaskType = TaskType.RETRIEVAL_DOCUMENT,
    ) -> EmbeddingResult:
        """Generate embedding for a single text."""
        results = await self.embed_batch([text], task_type=task_type)
        return results[0]

    async def embed_batch(
        self,
        texts: list[str],
        task_type: TaskType = TaskType.RETRIEVAL_DOCUMENT,
    ) -> list[EmbeddingResult]:
        """Generate embeddings for multiple texts, batching requests."""
        if not texts:
            return []

        client = self._get_client()

        all_results: list[EmbeddingResult] = []
        batch_size = self._settings.batch_size

        for i in range(0, len(texts), batch_size):
            batch = texts[i : i + batch_size]
            batch_results = await self._embed_batch_request(client, batch, task_type)
            all_results.extend(batch_results)

        return all_results

    async def _embed_batch_request(
        self,
        client: genai.Client,
        texts: list[str],
        task_type: TaskType,
    ) -> list[EmbeddingResult]:
        """Make embedding request for a batch.

        Raises:
            EmbeddingError: If the request fails or returns no vectors.
            DimensionMismatchError: If a vector has the wrong length.
        """
        start = time.perf_counter()
        try:
            response = await client.aio.models.embed_content(
                model=self._settings.model,
                contents=texts,
                config=types.EmbedContentConfig(
                    task_type=task_type.value,
                    output_dimensionality=self._settings.dimensions,
                ),
            )
        except genai_errors.APIError as e:
            track_embedding_request(
                self._settings.model, time.perf_counter() - start, len(texts), False
            )
            logger.error(
                f"Embedding request failed: {e.code}",
                extra={"model": self._settings.model, "status": e.code},
            )
            raise EmbeddingError(
                f"Embedding service returned {e.code}",
                code=ErrorCode.EMBEDDING_SERVICE_ERROR,
                details={"status_code": e.code, "message": e.message},
            ) from e
        except httpx.HTTPError as e:
            track_embedding_request(
                self._settings.model, time.perf_counter() - start, len(texts), False
            )
            logger.error(f"Embedding request error: {e}")
            raise EmbeddingError(
                f"Failed to connect to embedding service: {e}",
                code=ErrorCode.EMBEDDING_SERVICE_ERROR,
                details={"model": self._settings.model},
            ) from e

        track_embedding_request(
            self._settings.model, time.perf_counter() - start, len(texts), True
        )

        embeddings = response.embeddings or []
        if len(embeddings) != len(texts):
            raise EmbeddingError(
                f"Expected {len(texts)} embeddings, got {len(embeddings)}",
                code=ErrorCode.EMPTY_EMBEDDING,
                details={"expected": len(texts), "actual": len(embeddings)},
            )

        results: list[EmbeddingResult] = []
        for text, content_embedding in zip(texts, embeddings):
            values = list(content_embedding.values or [])
            if not values:
                raise EmbeddingError(
                    "Embedding service returned an empty vector",
                    code=ErrorCode.EMPTY_EMBEDDING,
                    details={"model": self._settings.model},
                )
            if len(values) != self._settings.dimensions:
                raise DimensionMismatchError(
                    expected=self._settings.dimensions,
                    actual=len(values),
                )

            results.append(
                EmbeddingResult(
                    text=text,
                    embedding=values,
                    model=self._settings.model,
                    dimensions=len(values),
                    task_type=task_type,
                )
            )

        return results
