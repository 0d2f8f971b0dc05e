"""Service wiring with a single shared genai client and vector store."""

from types import TracebackType

from google import genai

from genai_samples.clients import build_genai_client, close_genai_client
from genai_samples.config import Settings, get_settings
from genai_samples.embeddings.service import VertexEmbeddingService
from genai_samples.images.service import ImagenService
from genai_samples.llm.client import GeminiClient
from genai_samples.logging_config import get_logger
from genai_samples.multimodal.describer import ImageDescriber
from genai_samples.rag.pipeline import RAGPipeline
from genai_samples.retrieval.retriever import InMemoryRetriever, SemanticRetriever
from genai_samples.tools.agent import FunctionCallingAgent
from genai_samples.tools.registry import ToolRegistry
from genai_samples.tools.weather import register_weather_tool
from genai_samples.vectorstore.service import QdrantVectorStore

logger = get_logger(__name__)


class ServiceContainer:
    """Builds every service on top of one genai client and one Qdrant store.

    Use as an async context manager; the clients are released on exit
    whether or not the body raised. Clients passed in are shared and left
    open.

    Example:
        async with ServiceContainer() as services:
            result = await services.llm.generate_text("Tell me about Seoul")
    """

    def __init__(
        self,
        settings: Settings | None = None,
        genai_client: genai.Client | None = None,
        vector_store: QdrantVectorStore | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._genai_client = genai_client
        self._owns_genai_client = genai_client is None
        self._vector_store = vector_store
        self._owns_vector_store = vector_store is None
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def start(self) -> None:
        """Create the clients and services.

        Raises:
            ConfigurationError: If no credentials are configured.
        """
        if self._started:
            return

        settings = self._settings
        if self._genai_client is None:
            self._genai_client = build_genai_client(settings.vertex)
        if self._vector_store is None:
            self._vector_store = QdrantVectorStore(settings.qdrant)

        client = self._genai_client
        self.llm = GeminiClient(settings.generation, client=client)
        self.embeddings = VertexEmbeddingService(settings.embedding, client=client)
        self.images = ImagenService(settings.image, client=client)
        self.describer = ImageDescriber(self.llm)

        self.in_memory_retriever = InMemoryRetriever(self.embeddings)
        self.semantic_retriever = SemanticRetriever(
            self.embeddings,
            self._vector_store,
            collection=settings.qdrant.collection_name,
        )
        self.in_memory_rag = RAGPipeline(self.in_memory_retriever, self.llm)
        self.rag = RAGPipeline(self.semantic_retriever, self.llm)

        self.tools = register_weather_tool(ToolRegistry())
        self.agent = FunctionCallingAgent(self.llm, self.tools)

        self._started = True
        logger.info(
            "Services started",
            extra={
                "model": settings.generation.model,
                "embedding_model": settings.embedding.model,
                "collection": settings.qdrant.collection_name,
            },
        )

    @property
    def vector_store(self) -> QdrantVectorStore | None:
        return self._vector_store

    async def close(self) -> None:
        """Release the image loader and any clients this container created."""
        try:
            if self._started:
                await self.describer.close()
        finally:
            try:
                if self._owns_vector_store and self._vector_store is not None:
                    await self._vector_store.close()
                    self._vector_store = None
            finally:
                if self._owns_genai_client and self._genai_client is not None:
                    await close_genai_client(self._genai_client)
                    self._genai_client = None
                self._started = False
                logger.info("Services closed")

    async def __aenter__(self) -> "ServiceContainer":
        try:
            self.start()
        except Exception:
            await self.close()
            raise
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
