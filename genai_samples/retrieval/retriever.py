"""Retriever interface and implementations."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from genai_samples.embeddings.models import TaskType
from genai_samples.embeddings.service import EmbeddingService
from genai_samples.exceptions import ErrorCode, GenAISamplesError, NoCandidatesError, RetrievalError
from genai_samples.logging_config import get_logger
from genai_samples.observability.metrics import track_retrieval_request
from genai_samples.retrieval.models import RetrievalResult
from genai_samples.retrieval.similarity import rank_by_similarity
from genai_samples.vectorstore.models import VectorRecord
from genai_samples.vectorstore.service import VectorStore

logger = get_logger(__name__)


class Retriever(ABC):
    """Abstract base class for retrievers.

    Defines the interface for indexing documents and retrieving the ones
    relevant to a query.
    """

    @abstractmethod
    async def index(self, documents: Mapping[str, str]) -> int:
        """Embed and store documents.

        Args:
            documents: Mapping of document id to content.

        Returns:
            Number of documents indexed.

        Raises:
            RetrievalError: If indexing fails.
        """
        ...

    @abstractmethod
    async def retrieve(
        self,
        query: str,
        top_k: int = 5,
        filters: dict[str, Any] | None = None,
    ) -> list[RetrievalResult]:
        """Retrieve relevant documents for a query.

        Args:
            query: The search query.
            top_k: Maximum number of results to return.
            filters: Optional metadata filters.

        Returns:
            List of retrieval results ordered by relevance.

        Raises:
            RetrievalError: If retrieval fails.
        """
        ...


class InMemoryRetriever(Retriever):
    """Brute-force cosine similarity over embeddings held in memory.

    Suited to a handful of documents; every query scans all of them.
    """

    def __init__(
        self,
        embedding_service: EmbeddingService,
        score_threshold: float = -1.0,
    ) -> None:
        """Initialize the in-memory retriever.

        Args:
            embedding_service: Service for generating embeddings.
            score_threshold: Minimum cosine similarity to include in results.
        """
        self._embedding_service = embedding_service
        self._score_threshold = score_threshold
        self._documents: dict[str, str] = {}
        self._embeddings: dict[str, list[float]] = {}

    def __len__(self) -> int:
        return len(self._embeddings)

    async def index(self, documents: Mapping[str, str]) -> int:
        """Embed documents and keep them in memory."""
        if not documents:
            return 0

        doc_ids = list(documents)
        try:
            results = await self._embedding_service.embed_batch(
                [documents[doc_id] for doc_id in doc_ids],
                task_type=TaskType.RETRIEVAL_DOCUMENT,
            )
        except GenAISamplesError:
            raise
        except Exception as e:
            raise RetrievalError(
                f"Failed to index documents: {e}",
                code=ErrorCode.RETRIEVAL_ERROR,
                details={"documents": len(doc_ids), "error": str(e)},
            ) from e

        for doc_id, result in zip(doc_ids, results):
            self._documents[doc_id] = documents[doc_id]
            self._embeddings[doc_id] = result.embedding

        logger.info(f"Indexed {len(doc_ids)} documents in memory")
        return len(doc_ids)

    async def retrieve(
        self,
        query: str,
        top_k: int = 5,
        filters: dict[str, Any] | None = None,
    ) -> list[RetrievalResult]:
        """Rank indexed documents by cosine similarity to the query.

        Filters are not supported here and are ignored.

        Raises:
            NoCandidatesError: If nothing has been indexed.
        """
        if not query.strip():
            return []
        if not self._embeddings:
            raise NoCandidatesError("No documents indexed")

        try:
            embedding_result = await self._embedding_service.embed(
                query, task_type=TaskType.RETRIEVAL_QUERY
            )
            ranked = rank_by_similarity(
                self._embeddings,
                embedding_result.embedding,
                top_k=top_k,
            )
        except GenAISamplesError:
            raise
        except Exception as e:
            logger.error(f"Retrieval failed: {e}")
            raise RetrievalError(
                f"Failed to retrieve documents: {e}",
                code=ErrorCode.RETRIEVAL_ERROR,
                details={"query": query[:100], "error": str(e)},
            ) from e

        results = [
            RetrievalResult(
                content=self._documents[candidate.id],
                score=candidate.score,
                source=candidate.id,
            )
            for candidate in ranked
            if candidate.score >= self._score_threshold
        ]

        track_retrieval_request(len(results), results[0].score if results else None)
        logger.debug(
            f"Retrieved {len(results)} results for query",
            extra={"candidates": len(self._embeddings), "top_k": top_k},
        )
        return results


class SemanticRetriever(Retriever):
    """Semantic search retriever using embeddings and a vector store.

    Embeds the query and asks the store for its nearest neighbours.
    """

    def __init__(
        self,
        embedding_service: EmbeddingService,
        vector_store: VectorStore,
        collection: str,
        score_threshold: float = -1.0,
    ) -> None:
        """Initialize the semantic retriever.

        Args:
            embedding_service: Service for generating embeddings.
            vector_store: Vector database for similarity search.
            collection: Name of the collection to search.
            score_threshold: Minimum cosine similarity to include; the default
                keeps the nearest document whatever its score.
        """
        self._embedding_service = embedding_service
        self._vector_store = vector_store
        self._collection = collection
        self._score_threshold = score_threshold

    async def index(self, documents: Mapping[str, str]) -> int:
        """Embed documents and upsert them into the collection.

        The collection is created on first use with the embedding dimensions.
        """
        if not documents:
            return 0

        doc_ids = list(documents)
        try:
            await self._vector_store.ensure_collection(
                self._collection,
                self._embedding_service.dimensions,
            )
            results = await self._embedding_service.embed_batch(
                [documents[doc_id] for doc_id in doc_ids],
                task_type=TaskType.RETRIEVAL_DOCUMENT,
            )
            records = [
                VectorRecord(
                    id=doc_id,
                    vector=result.embedding,
                    payload={"content": documents[doc_id], "source": doc_id},
                )
                for doc_id, result in zip(doc_ids, results)
            ]
            count = await self._vector_store.upsert(self._collection, records)

        except GenAISamplesError:
            raise
        except Exception as e:
            raise RetrievalError(
                f"Failed to index documents: {e}",
                code=ErrorCode.RETRIEVAL_ERROR,
                details={"collection": self._collection, "error": str(e)},
            ) from e

        logger.info(
            f"Indexed {count} documents",
            extra={"collection": self._collection},
        )
        return count

    async def retrieve(
        self,
        query: str,
        top_k: int = 5,
        filters: dict[str, Any] | None = None,
    ) -> list[RetrievalResult]:
        """Retrieve documents using the vector store's nearest-neighbour search."""
        if not query.strip():
            return []

        try:
            embedding_result = await self._embedding_service.embed(
                query, task_type=TaskType.RETRIEVAL_QUERY
            )

            search_results = await self._vector_store.search(
                collection=self._collection,
                vector=embedding_result.embedding,
                limit=top_k,
                filters=filters,
            )

        except GenAISamplesError:
            raise
        except Exception as e:
            logger.error(f"Retrieval failed: {e}")
            raise RetrievalError(
                f"Failed to retrieve documents: {e}",
                code=ErrorCode.RETRIEVAL_ERROR,
                details={"query": query[:100], "error": str(e)},
            ) from e

        results: list[RetrievalResult] = []
        for sr in search_results:
            if sr.score < self._score_threshold:
                continue

            results.append(
                RetrievalResult(
                    content=sr.payload.get("content", ""),
                    score=sr.score,
                    source=sr.payload.get("source", sr.id),
                    metadata=sr.payload,
                )
            )

        track_retrieval_request(len(results), results[0].score if results else None)
        logger.debug(
            f"Retrieved {len(results)} results for query",
            extra={
                "query_length": len(query),
                "top_k": top_k,
                "results_count": len(results),
            },
        )

        return results
