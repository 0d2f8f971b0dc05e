"""API routes for generation, image description and RAG."""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from genai_samples.api.dependencies import (
    get_describer,
    get_llm_client,
    get_rag_pipeline,
    get_retriever,
)
from genai_samples.llm.client import GeminiClient
from genai_samples.logging_config import get_logger
from genai_samples.multimodal.describer import ImageDescriber
from genai_samples.multimodal.loader import ImageSource
from genai_samples.rag.models import RAGQuery, RAGResponse
from genai_samples.rag.pipeline import RAGPipeline
from genai_samples.retrieval.retriever import Retriever

logger = get_logger(__name__)


router = APIRouter(prefix="/api/v1")


class GenerateRequest(BaseModel):
    """Request body for text generation."""

    prompt: str = Field(min_length=1, description="User prompt")
    system_prompt: str | None = Field(default=None, description="Optional system prompt")
    temperature: float | None = Field(
        default=None,
        ge=0.0,
        le=2.0,
        description="Sampling temperature override",
    )


class GenerateResponse(BaseModel):
    """Response from text generation."""

    content: str = Field(description="Generated text")
    model: str = Field(description="Model used")
    tokens_used: int = Field(description="Tokens consumed")


class DescribeRequest(BaseModel):
    """Request body for image description."""

    uri: str = Field(min_length=1, description="gs:// or http(s):// image URI")
    mime_type: str | None = Field(default=None, description="Image MIME type")
    instruction: str | None = Field(default=None, description="What to ask about the image")


class QueryRequest(BaseModel):
    """Request body for RAG query."""

    question: str = Field(min_length=1, description="Question to answer")
    top_k: int = Field(default=1, ge=1, le=20, description="Number of documents")
    score_threshold: float = Field(
        default=-1.0,
        ge=-1.0,
        le=1.0,
        description="Minimum cosine similarity",
    )


class QueryResponse(BaseModel):
    """Response from RAG query."""

    answer: str = Field(description="Generated answer")
    sources: list[dict[str, Any]] = Field(description="Source attributions")
    model: str = Field(description="Model used")
    tokens_used: int = Field(description="Tokens consumed")


class IngestRequest(BaseModel):
    """Request body for document ingestion."""

    documents: dict[str, str] = Field(
        min_length=1,
        description="Document contents keyed by document id",
    )


class IngestResponse(BaseModel):
    """Response from document ingestion."""

    success: bool = Field(description="Whether ingestion succeeded")
    documents_indexed: int = Field(description="Number of documents indexed")


@router.post("/generate", response_model=GenerateResponse, tags=["Generation"])
async def generate_endpoint(
    request: GenerateRequest,
    llm_client: GeminiClient = Depends(get_llm_client),
) -> GenerateResponse:
    """Generate text for a prompt."""
    result = await llm_client.generate_text(
        prompt=request.prompt,
        system_prompt=request.system_prompt,
        temperature=request.temperature,
    )
    return GenerateResponse(
        content=result.content,
        model=result.model,
        tokens_used=result.total_tokens,
    )


@router.post("/describe", response_model=GenerateResponse, tags=["Generation"])
async def describe_endpoint(
    request: DescribeRequest,
    describer: ImageDescriber = Depends(get_describer),
) -> GenerateResponse:
    """Describe an image."""
    result = await describer.describe(
        ImageSource(uri=request.uri, mime_type=request.mime_type),
        instruction=request.instruction,
    )
    return GenerateResponse(
        content=result.content,
        model=result.model,
        tokens_used=result.total_tokens,
    )


@router.post("/query", response_model=QueryResponse, tags=["RAG"])
async def query_endpoint(
    request: QueryRequest,
    pipeline: RAGPipeline = Depends(get_rag_pipeline),
) -> QueryResponse:
    """Answer a question from the indexed documents."""
    rag_response = await pipeline.query(query_request_to_rag_query(request))
    return rag_response_to_query_response(rag_response)


@router.post("/ingest", response_model=IngestResponse, tags=["RAG"])
async def ingest_endpoint(
    request: IngestRequest,
    retriever: Retriever = Depends(get_retriever),
) -> IngestResponse:
    """Embed and index documents."""
    count = await retriever.index(request.documents)
    logger.info(f"Ingested {count} documents")
    return IngestResponse(success=True, documents_indexed=count)


def rag_response_to_query_response(rag_response: RAGResponse) -> QueryResponse:
    """Convert internal RAGResponse to API QueryResponse."""
    return QueryResponse(
        answer=rag_response.answer,
        sources=[
            {
                "source": s.source,
                "content": s.content,
                "score": s.score,
            }
            for s in rag_response.sources
        ],
        model=rag_response.model,
        tokens_used=rag_response.tokens_used,
    )


def query_request_to_rag_query(request: QueryRequest) -> RAGQuery:
    """Convert API QueryRequest to internal RAGQuery."""
    return RAGQuery(
        question=request.question,
        top_k=request.top_k,
        score_threshold=request.score_threshold,
    )
