"""Cosine similarity and nearest-embedding search.

Candidates are always scanned in ascending id order and only a strictly
higher score replaces the running best, so equal scores resolve to the
smallest id. Dimension checks fail fast on the first mismatching candidate
in that same order.
"""

import math
from collections.abc import Mapping, Sequence

from genai_samples.exceptions import DimensionMismatchError, NoCandidatesError
from genai_samples.logging_config import get_logger
from genai_samples.retrieval.models import ScoredCandidate

logger = get_logger(__name__)

Vector = Sequence[float]


def cosine_similarity(a: Vector, b: Vector) -> float:
    """Compute the cosine of the angle between two vectors.

    A zero-norm vector has no direction; its similarity to anything is
    defined as 0.0 rather than raising.

    Args:
        a: First vector.
        b: Second vector, same length as ``a``.

    Returns:
        Similarity in [-1, 1].

    Raises:
        DimensionMismatchError: If the vectors differ in length.
    """
    if len(a) != len(b):
        raise DimensionMismatchError(expected=len(a), actual=len(b))

    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for x, y in zip(a, b):
        dot += x * y
        norm_a += x * x
        norm_b += y * y

    if norm_a == 0.0 or norm_b == 0.0:
        logger.debug(
            "Zero-norm vector in similarity, scoring as 0",
            extra={"dimensions": len(a)},
        )
        return 0.0

    score = dot / (math.sqrt(norm_a) * math.sqrt(norm_b))
    # Rounding can push |score| a hair past 1
    return max(-1.0, min(1.0, score))


def _score_candidates(
    document_embeddings: Mapping[str, Vector],
    query_embedding: Vector,
) -> list[ScoredCandidate]:
    if not document_embeddings:
        raise NoCandidatesError()

    scored: list[ScoredCandidate] = []
    for doc_id in sorted(document_embeddings):
        embedding = document_embeddings[doc_id]
        if len(embedding) != len(query_embedding):
            raise DimensionMismatchError(
                expected=len(query_embedding),
                actual=len(embedding),
                candidate_id=doc_id,
            )
        scored.append(
            ScoredCandidate(
                id=doc_id,
                score=cosine_similarity(embedding, query_embedding),
            )
        )
    return scored


def find_most_similar(
    document_embeddings: Mapping[str, Vector],
    query_embedding: Vector,
) -> ScoredCandidate:
    """Find the document whose embedding is closest to the query.

    Args:
        document_embeddings: Mapping of document id to embedding vector.
        query_embedding: Query embedding vector.

    Returns:
        The best-matching document id and its score.

    Raises:
        NoCandidatesError: If the mapping is empty.
        DimensionMismatchError: If a candidate's length differs from the query's.
    """
    best_id = ""
    best_score = -2.0  # below any cosine value

    for candidate in _score_candidates(document_embeddings, query_embedding):
        if candidate.score > best_score:
            best_id = candidate.id
            best_score = candidate.score

    return ScoredCandidate(id=best_id, score=best_score)


def rank_by_similarity(
    document_embeddings: Mapping[str, Vector],
    query_embedding: Vector,
    top_k: int | None = None,
) -> list[ScoredCandidate]:
    """Rank all documents by similarity to the query.

    Ordering is score descending, then id ascending, so the first element
    always equals ``find_most_similar`` on the same input.

    Args:
        document_embeddings: Mapping of document id to embedding vector.
        query_embedding: Query embedding vector.
        top_k: Keep only the best ``top_k`` candidates (all if None).

    Returns:
        Ranked candidates.

    Raises:
        NoCandidatesError: If the mapping is empty.
        DimensionMismatchError: If a candidate's length differs from the query's.
    """
    scored = _score_candidates(document_embeddings, query_embedding)
    # sorted() is stable and the input is already in id order
    ranked = sorted(scored, key=lambda c: c.score, reverse=True)
    if top_k is not None:
        ranked = ranked[:top_k]
    return ranked
