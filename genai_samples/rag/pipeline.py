"""RAG pipeline orchestrator."""

import time

from genai_samples.llm.client import LLMClient
from genai_samples.llm.prompts import RAGPromptTemplate
from genai_samples.logging_config import get_logger
from genai_samples.observability.metrics import track_rag_query
from genai_samples.rag.models import RAGQuery, RAGResponse, SourceAttribution
from genai_samples.retrieval.retriever import Retriever

logger = get_logger(__name__)

NO_CONTEXT_ANSWER = "I could not find relevant information to answer your question."


class RAGPipeline:
    """Orchestrates the RAG pipeline.

    Combines retrieval and generation into a single query interface. Works
    the same over the in-memory and the vector store retrievers.
    """

    def __init__(
        self,
        retriever: Retriever,
        llm_client: LLMClient,
        prompt_template: RAGPromptTemplate | None = None,
    ) -> None:
        """Initialize the RAG pipeline.

        Args:
            retriever: Document retriever.
            llm_client: LLM client for generation.
            prompt_template: Prompt template for RAG.
        """
        self._retriever = retriever
        self._llm_client = llm_client
        self._prompt_template = prompt_template or RAGPromptTemplate()

    @property
    def retriever(self) -> Retriever:
        return self._retriever

    async def query(self, request: RAGQuery) -> RAGResponse:
        """Execute a RAG query.

        Args:
            request: The RAG query request.

        Returns:
            RAGResponse with answer and sources.

        Raises:
            RetrievalError: If retrieval fails.
            LLMError: If generation fails.
        """
        logger.info(
            "Processing RAG query",
            extra={"question_length": len(request.question), "top_k": request.top_k},
        )
        start = time.perf_counter()

        try:
            response = await self._run(request)
        except Exception:
            track_rag_query(time.perf_counter() - start, success=False)
            raise

        track_rag_query(time.perf_counter() - start)
        return response

    async def _run(self, request: RAGQuery) -> RAGResponse:
        retrieval_results = await self._retriever.retrieve(
            query=request.question,
            top_k=request.top_k,
        )

        filtered_results = [
            r for r in retrieval_results if r.score >= request.score_threshold
        ]

        logger.debug(
            f"Retrieved {len(filtered_results)} documents",
            extra={
                "total_retrieved": len(retrieval_results),
                "after_threshold": len(filtered_results),
            },
        )

        if not filtered_results:
            return RAGResponse(
                answer=NO_CONTEXT_ANSWER,
                sources=[],
                model=self._llm_client.model_name,
                tokens_used=0,
            )

        system_prompt, user_prompt = self._prompt_template.build_prompt(
            question=request.question,
            documents=[r.content for r in filtered_results],
        )

        generation_result = await self._llm_client.generate_text(
            prompt=user_prompt,
            system_prompt=system_prompt,
        )

        sources = [
            SourceAttribution(
                source=r.source,
                content=r.content[:200] + "..." if len(r.content) > 200 else r.content,
                score=r.score,
            )
            for r in filtered_results
        ]

        logger.info(
            "RAG query completed",
            extra={
                "sources_count": len(sources),
                "tokens_used": generation_result.total_tokens,
            },
        )

        return RAGResponse(
            answer=generation_result.content,
            sources=sources,
            model=generation_result.model,
            tokens_used=generation_result.total_tokens,
        )

    async def query_simple(self, question: str, top_k: int = 1) -> str:
        """Simple query interface returning just the answer."""
        response = await self.query(RAGQuery(question=question, top_k=top_k))
        return response.answer
