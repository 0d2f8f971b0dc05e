"""Retrieval data models."""

from typing import Any

from pydantic import BaseModel, Field


class ScoredCandidate(BaseModel):
    """A candidate document paired with its similarity to the query.

    Attributes:
        id: Document identifier.
        score: Cosine similarity in [-1, 1].
    """

    id: str = Field(description="Document identifier")
    score: float = Field(ge=-1.0, le=1.0, description="Cosine similarity")


class RetrievalResult(BaseModel):
    """Result from a retrieval operation.

    Attributes:
        content: The retrieved text content.
        score: Relevance score (higher is more relevant).
        source: Source document identifier.
        metadata: Additional metadata stored with the document.
    """

    content: str = Field(description="Retrieved text content")
    score: float = Field(description="Relevance score")
    source: str = Field(description="Source document identifier")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional metadata",
    )
