"""RAG pipeline data models."""

from pydantic import BaseModel, Field


class SourceAttribution(BaseModel):
    """Attribution to a retrieved document.

    Attributes:
        source: Document id.
        content: Relevant content snippet.
        score: Cosine similarity to the question.
    """

    source: str = Field(description="Document id")
    content: str = Field(description="Relevant content snippet")
    score: float = Field(description="Cosine similarity to the question")


class RAGQuery(BaseModel):
    """Input for a RAG query.

    Attributes:
        question: The user's question.
        top_k: Number of documents to retrieve.
        score_threshold: Minimum similarity for a document to be used.
    """

    question: str = Field(min_length=1, description="User question")
    top_k: int = Field(default=1, ge=1, le=20, description="Documents to retrieve")
    score_threshold: float = Field(
        default=-1.0,
        ge=-1.0,
        le=1.0,
        description="Minimum cosine similarity",
    )


class RAGResponse(BaseModel):
    """Response from a RAG query."""

    answer: str = Field(description="Generated answer")
    sources: list[SourceAttribution] = Field(
        default_factory=list,
        description="Source attributions",
    )
    model: str = Field(description="LLM model used")
    tokens_used: int = Field(default=0, description="Total tokens consumed")
