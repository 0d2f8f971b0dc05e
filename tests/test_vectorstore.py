"""Tests for vector store module."""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from qdrant_client.models import Distance

from genai_samples.config import QdrantSettings
from genai_samples.exceptions import ErrorCode, VectorStoreError
from genai_samples.vectorstore.models import SearchResult, VectorRecord
from genai_samples.vectorstore.service import DOC_ID_KEY, QdrantVectorStore, point_id


class TestVectorRecord:
    """Tests for VectorRecord model."""

    def test_create_record(self) -> None:
        """Record can be created with required fields."""
        record = VectorRecord(id="doc1", vector=[0.1, 0.2, 0.3])
        assert record.id == "doc1"
        assert record.payload == {}

    def test_empty_id_rejected(self) -> None:
        """Records need an id."""
        with pytest.raises(ValueError):
            VectorRecord(id="", vector=[0.1])


class TestSearchResult:
    """Tests for SearchResult model."""

    def test_create_result(self) -> None:
        """Result can be created."""
        result = SearchResult(id="doc1", score=0.95, payload={"content": "hello"})
        assert result.id == "doc1"
        assert result.score == 0.95


class TestPointId:
    """Tests for document id to point id mapping."""

    def test_is_uuid(self) -> None:
        """Point ids are valid UUIDs."""
        assert uuid.UUID(point_id("doc1")).version == 5

    def test_deterministic(self) -> None:
        """The same document id always maps to the same point."""
        assert point_id("doc1") == point_id("doc1")
        assert point_id("doc1") != point_id("doc2")


class TestQdrantVectorStore:
    """Tests for QdrantVectorStore."""

    def _create_mock_client(self) -> AsyncMock:
        """Create a mock Qdrant client."""
        client = AsyncMock()
        client.collection_exists = AsyncMock(return_value=False)
        client.create_collection = AsyncMock()
        client.delete_collection = AsyncMock()
        client.upsert = AsyncMock()
        mock_response = MagicMock()
        mock_response.points = []
        client.query_points = AsyncMock(return_value=mock_response)
        client.delete = AsyncMock()
        client.close = AsyncMock()
        return client

    def _store(self, mock_client: AsyncMock) -> QdrantVectorStore:
        settings = QdrantSettings(url="http://localhost:6333")
        return QdrantVectorStore(settings=settings, client=mock_client)

    @pytest.mark.asyncio
    async def test_create_collection(self) -> None:
        """Collection is created with cosine distance."""
        mock_client = self._create_mock_client()
        store = self._store(mock_client)

        await store.create_collection("test", dimensions=256)

        call_kwargs = mock_client.create_collection.call_args.kwargs
        assert call_kwargs["collection_name"] == "test"
        assert call_kwargs["vectors_config"].size == 256
        assert call_kwargs["vectors_config"].distance == Distance.COSINE

    @pytest.mark.asyncio
    async def test_create_collection_already_exists(self) -> None:
        """Creating existing collection raises error."""
        mock_client = self._create_mock_client()
        mock_client.collection_exists = AsyncMock(return_value=True)
        store = self._store(mock_client)

        with pytest.raises(VectorStoreError) as exc_info:
            await store.create_collection("test", dimensions=256)

        assert exc_info.value.code == ErrorCode.COLLECTION_EXISTS

    @pytest.mark.asyncio
    async def test_ensure_collection_creates(self) -> None:
        """A missing collection is created."""
        mock_client = self._create_mock_client()
        store = self._store(mock_client)

        created = await store.ensure_collection("test", dimensions=256)

        assert created is True
        mock_client.create_collection.assert_called_once()

    @pytest.mark.asyncio
    async def test_ensure_collection_existing(self) -> None:
        """An existing collection is left alone."""
        mock_client = self._create_mock_client()
        mock_client.collection_exists = AsyncMock(return_value=True)
        store = self._store(mock_client)

        created = await store.ensure_collection("test", dimensions=256)

        assert created is False
        mock_client.create_collection.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_collection_not_found(self) -> None:
        """Deleting non-existent collection raises error."""
        mock_client = self._create_mock_client()
        store = self._store(mock_client)

        with pytest.raises(VectorStoreError) as exc_info:
            await store.delete_collection("test")

        assert exc_info.value.code == ErrorCode.COLLECTION_NOT_FOUND

    @pytest.mark.asyncio
    async def test_delete_collection(self) -> None:
        """Collection can be deleted."""
        mock_client = self._create_mock_client()
        mock_client.collection_exists = AsyncMock(return_value=True)
        store = self._store(mock_client)

        await store.delete_collection("test")

        mock_client.delete_collection.assert_called_once_with("test")

    @pytest.mark.asyncio
    async def test_upsert_maps_ids(self) -> None:
        """Document ids become UUID point ids and stay in the payload."""
        mock_client = self._create_mock_client()
        store = self._store(mock_client)

        records = [
            VectorRecord(id="doc1", vector=[0.1, 0.2], payload={"content": "hello"}),
            VectorRecord(id="doc2", vector=[0.3, 0.4], payload={"content": "world"}),
        ]

        count = await store.upsert("test", records)

        assert count == 2
        points = mock_client.upsert.call_args.kwargs["points"]
        assert [p.id for p in points] == [point_id("doc1"), point_id("doc2")]
        assert points[0].payload == {"content": "hello", DOC_ID_KEY: "doc1"}

    @pytest.mark.asyncio
    async def test_upsert_empty_list(self) -> None:
        """Upserting empty list returns 0."""
        mock_client = self._create_mock_client()
        store = self._store(mock_client)

        assert await store.upsert("test", []) == 0
        mock_client.upsert.assert_not_called()

    @pytest.mark.asyncio
    async def test_upsert_failure(self) -> None:
        """Client errors are wrapped in VectorStoreError."""
        mock_client = self._create_mock_client()
        mock_client.upsert = AsyncMock(side_effect=RuntimeError("connection refused"))
        store = self._store(mock_client)

        with pytest.raises(VectorStoreError) as exc_info:
            await store.upsert("test", [VectorRecord(id="doc1", vector=[0.1])])

        assert exc_info.value.code == ErrorCode.VECTOR_STORE_ERROR

    @pytest.mark.asyncio
    async def test_search_restores_doc_id(self) -> None:
        """Results carry the original document id."""
        mock_client = self._create_mock_client()

        mock_point = MagicMock()
        mock_point.id = point_id("doc1")
        mock_point.score = 0.95
        mock_point.payload = {"content": "hello", DOC_ID_KEY: "doc1"}
        mock_response = MagicMock()
        mock_response.points = [mock_point]
        mock_client.query_points = AsyncMock(return_value=mock_response)
        store = self._store(mock_client)

        results = await store.search("test", vector=[0.1, 0.2], limit=1)

        assert len(results) == 1
        assert results[0].id == "doc1"
        assert results[0].score == 0.95
        assert results[0].payload == {"content": "hello"}

        call_kwargs = mock_client.query_points.call_args.kwargs
        assert call_kwargs["limit"] == 1
        assert call_kwargs["query_filter"] is None

    @pytest.mark.asyncio
    async def test_search_with_filters(self) -> None:
        """Search can filter results."""
        mock_client = self._create_mock_client()
        store = self._store(mock_client)

        await store.search("test", vector=[0.1, 0.2], filters={"source": "doc1"})

        call_kwargs = mock_client.query_points.call_args.kwargs
        assert call_kwargs["query_filter"] is not None

    @pytest.mark.asyncio
    async def test_delete_records(self) -> None:
        """Records are deleted by their mapped point ids."""
        mock_client = self._create_mock_client()
        store = self._store(mock_client)

        count = await store.delete("test", ids=["doc1", "doc2"])

        assert count == 2
        selector = mock_client.delete.call_args.kwargs["points_selector"]
        assert selector.points == [point_id("doc1"), point_id("doc2")]

    @pytest.mark.asyncio
    async def test_close(self) -> None:
        """Store closes a client it owns."""
        mock_client = self._create_mock_client()
        store = self._store(mock_client)
        store._owns_client = True

        await store.close()

        mock_client.close.assert_called_once()
