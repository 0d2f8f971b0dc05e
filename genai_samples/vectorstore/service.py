"""Vector store interface and Qdrant implementation."""

import time
from abc import ABC, abstractmethod
from typing import Any
from uuid import NAMESPACE_URL, uuid5

from qdrant_client import AsyncQdrantClient
from qdrant_client.models import (
    Distance,
    FieldCondition,
    Filter,
    MatchValue,
    PointIdsList,
    PointStruct,
    VectorParams,
)

from genai_samples.config import QdrantSettings, get_settings
from genai_samples.exceptions import ErrorCode, VectorStoreError
from genai_samples.logging_config import get_logger
from genai_samples.observability.metrics import track_vectorstore_operation
from genai_samples.vectorstore.models import SearchResult, VectorRecord

logger = get_logger(__name__)

# Payload key holding the caller's document id.
DOC_ID_KEY = "doc_id"


def point_id(doc_id: str) -> str:
    """Map an arbitrary document id to a stable Qdrant point id.

    Qdrant only accepts unsigned integers or UUIDs as point ids.
    """
    return str(uuid5(NAMESPACE_URL, f"genai-samples:{doc_id}"))


class VectorStore(ABC):
    """Abstract base class for vector stores.

    Defines the interface for storing and searching vectors.
    """

    @abstractmethod
    async def create_collection(
        self,
        name: str,
        dimensions: int,
    ) -> None:
        """Create a new collection.

        Raises:
            VectorStoreError: If the collection exists or creation fails.
        """
        ...

    @abstractmethod
    async def ensure_collection(
        self,
        name: str,
        dimensions: int,
    ) -> bool:
        """Create a collection unless it already exists.

        Returns:
            True if the collection was created by this call.

        Raises:
            VectorStoreError: If creation fails.
        """
        ...

    @abstractmethod
    async def delete_collection(self, name: str) -> None:
        """Delete a collection.

        Raises:
            VectorStoreError: If deletion fails.
        """
        ...

    @abstractmethod
    async def collection_exists(self, name: str) -> bool:
        """Check if a collection exists."""
        ...

    @abstractmethod
    async def upsert(
        self,
        collection: str,
        records: list[VectorRecord],
    ) -> int:
        """Insert or update records.

        Returns:
            Number of records upserted.

        Raises:
            VectorStoreError: If upsert fails.
        """
        ...

    @abstractmethod
    async def search(
        self,
        collection: str,
        vector: list[float],
        limit: int = 10,
        filters: dict[str, Any] | None = None,
    ) -> list[SearchResult]:
        """Search for the nearest vectors.

        Args:
            collection: Collection name.
            vector: Query vector.
            limit: Maximum results to return.
            filters: Optional payload equality filters.

        Returns:
            Results ordered by descending similarity.

        Raises:
            VectorStoreError: If search fails.
        """
        ...

    @abstractmethod
    async def delete(
        self,
        collection: str,
        ids: list[str],
    ) -> int:
        """Delete records by document id.

        Returns:
            Number of records deleted.

        Raises:
            VectorStoreError: If deletion fails.
        """
        ...


class QdrantVectorStore(VectorStore):
    """Qdrant vector store using cosine distance."""

    def __init__(
        self,
        settings: QdrantSettings | None = None,
        client: AsyncQdrantClient | None = None,
    ) -> None:
        """Initialize Qdrant vector store.

        Args:
            settings: Qdrant configuration.
            client: Existing client (for testing).
        """
        self._settings = settings or get_settings().qdrant
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> AsyncQdrantClient:
        """Get or create Qdrant client."""
        if self._client is None:
            api_key = None
            if self._settings.api_key:
                api_key = self._settings.api_key.get_secret_value()

            self._client = AsyncQdrantClient(
                url=self._settings.url,
                api_key=api_key,
            )
        return self._client

    async def close(self) -> None:
        """Close the Qdrant client."""
        if self._owns_client and self._client is not None:
            await self._client.close()
            self._client = None

    async def create_collection(
        self,
        name: str,
        dimensions: int,
    ) -> None:
        """Create a new Qdrant collection."""
        client = await self._get_client()

        try:
            exists = await client.collection_exists(name)
            if exists:
                raise VectorStoreError(
                    f"Collection already exists: {name}",
                    code=ErrorCode.COLLECTION_EXISTS,
                    details={"collection": name},
                )

            await client.create_collection(
                collection_name=name,
                vectors_config=VectorParams(
                    size=dimensions,
                    distance=Distance.COSINE,
                ),
            )
            logger.info(f"Created collection: {name}", extra={"dimensions": dimensions})

        except VectorStoreError:
            raise
        except Exception as e:
            raise VectorStoreError(
                f"Failed to create collection: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": name, "error": str(e)},
            ) from e

    async def ensure_collection(
        self,
        name: str,
        dimensions: int,
    ) -> bool:
        """Create the collection if it does not exist yet."""
        if await self.collection_exists(name):
            return False
        await self.create_collection(name, dimensions)
        return True

    async def delete_collection(self, name: str) -> None:
        """Delete a Qdrant collection."""
        client = await self._get_client()

        try:
            exists = await client.collection_exists(name)
            if not exists:
                raise VectorStoreError(
                    f"Collection not found: {name}",
                    code=ErrorCode.COLLECTION_NOT_FOUND,
                    details={"collection": name},
                )

            await client.delete_collection(name)
            logger.info(f"Deleted collection: {name}")

        except VectorStoreError:
            raise
        except Exception as e:
            raise VectorStoreError(
                f"Failed to delete collection: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": name, "error": str(e)},
            ) from e

    async def collection_exists(self, name: str) -> bool:
        """Check if collection exists."""
        client = await self._get_client()
        try:
            return await client.collection_exists(name)
        except Exception as e:
            raise VectorStoreError(
                f"Failed to check collection: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": name, "error": str(e)},
            ) from e

    async def upsert(
        self,
        collection: str,
        records: list[VectorRecord],
    ) -> int:
        """Upsert records into collection."""
        if not records:
            return 0

        client = await self._get_client()
        start = time.perf_counter()

        try:
            points = [
                PointStruct(
                    id=point_id(record.id),
                    vector=record.vector,
                    payload={**record.payload, DOC_ID_KEY: record.id},
                )
                for record in records
            ]

            await client.upsert(
                collection_name=collection,
                points=points,
            )

        except Exception as e:
            track_vectorstore_operation("upsert", time.perf_counter() - start, False)
            raise VectorStoreError(
                f"Failed to upsert records: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": collection, "error": str(e)},
            ) from e

        track_vectorstore_operation("upsert", time.perf_counter() - start)
        logger.debug(
            f"Upserted {len(points)} records",
            extra={"collection": collection},
        )
        return len(points)

    async def search(
        self,
        collection: str,
        vector: list[float],
        limit: int = 10,
        filters: dict[str, Any] | None = None,
    ) -> list[SearchResult]:
        """Search for similar vectors."""
        client = await self._get_client()
        start = time.perf_counter()

        try:
            query_filter = None
            if filters:
                conditions = [
                    FieldCondition(key=k, match=MatchValue(value=v))
                    for k, v in filters.items()
                ]
                query_filter = Filter(must=conditions)  # type: ignore[arg-type]

            results = await client.query_points(
                collection_name=collection,
                query=vector,
                limit=limit,
                query_filter=query_filter,
                with_payload=True,
            )

        except Exception as e:
            track_vectorstore_operation("search", time.perf_counter() - start, False)
            raise VectorStoreError(
                f"Failed to search: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": collection, "error": str(e)},
            ) from e

        track_vectorstore_operation("search", time.perf_counter() - start)

        search_results: list[SearchResult] = []
        for point in results.points:
            payload = dict(point.payload) if point.payload else {}
            search_results.append(
                SearchResult(
                    id=str(payload.pop(DOC_ID_KEY, point.id)),
                    score=point.score if point.score is not None else 0.0,
                    payload=payload,
                )
            )
        return search_results

    async def delete(
        self,
        collection: str,
        ids: list[str],
    ) -> int:
        """Delete records by document id."""
        if not ids:
            return 0

        client = await self._get_client()

        try:
            await client.delete(
                collection_name=collection,
                points_selector=PointIdsList(points=[point_id(i) for i in ids]),  # type: ignore[misc]
            )

            logger.debug(
                f"Deleted {len(ids)} records",
                extra={"collection": collection},
            )
            return len(ids)

        except Exception as e:
            raise VectorStoreError(
                f"Failed to delete records: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": collection, "error": str(e)},
            ) from e
