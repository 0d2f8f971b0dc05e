"""Retrieval module: nearest-embedding search and retrievers."""

from genai_samples.retrieval.models import RetrievalResult, ScoredCandidate
from genai_samples.retrieval.retriever import InMemoryRetriever, Retriever, SemanticRetriever
from genai_samples.retrieval.similarity import (
    cosine_similarity,
    find_most_similar,
    rank_by_similarity,
)

__all__ = [
    "InMemoryRetriever",
    "RetrievalResult",
    "Retriever",
    "ScoredCandidate",
    "SemanticRetriever",
    "cosine_similarity",
    "find_most_similar",
    "rank_by_similarity",
]
