"""Records written to and read from Qdrant.

Both models speak in document ids. The store maps them to UUID point ids on
the way in and back again on the way out, so callers never see point ids.
"""

from typing import Any

from pydantic import BaseModel, Field


class VectorRecord(BaseModel):
    """A document embedding ready to upsert.

    Attributes:
        id: Document id such as ``"doc1"``; any non-empty string.
        vector: Embedding with the collection's dimensionality.
        payload: Stored alongside the vector, usually ``content`` and ``source``.
    """

    id: str = Field(min_length=1, description="Document id")
    vector: list[float] = Field(description="Document embedding")
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Payload stored with the point",
    )


class SearchResult(BaseModel):
    """A nearest-neighbour hit.

    Attributes:
        id: Document id restored from the payload.
        score: Cosine similarity in [-1, 1].
        payload: Stored payload without the internal id key.
    """

    id: str = Field(description="Document id")
    score: float = Field(description="Cosine similarity")
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Payload stored with the point",
    )
