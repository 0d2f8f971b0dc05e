"""Application exception hierarchy.

All custom exceptions inherit from GenAISamplesError.
Each exception has an error code for structured error handling.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # General errors (1xxx)
    INTERNAL_ERROR = "GAI-1000"
    CONFIGURATION_ERROR = "GAI-1001"
    VALIDATION_ERROR = "GAI-1002"

    # Image errors (2xxx)
    IMAGE_GENERATION_ERROR = "GAI-2000"
    IMAGE_LOAD_ERROR = "GAI-2001"

    # Embedding errors (3xxx)
    EMBEDDING_SERVICE_ERROR = "GAI-3000"
    EMBEDDING_DIMENSION_MISMATCH = "GAI-3001"
    EMPTY_EMBEDDING = "GAI-3002"

    # Vector store errors (4xxx)
    VECTOR_STORE_ERROR = "GAI-4000"
    COLLECTION_NOT_FOUND = "GAI-4001"
    COLLECTION_EXISTS = "GAI-4002"

    # LLM errors (5xxx)
    LLM_SERVICE_ERROR = "GAI-5000"
    LLM_TIMEOUT = "GAI-5001"
    LLM_RATE_LIMIT = "GAI-5002"
    LLM_EMPTY_RESPONSE = "GAI-5003"

    # Retrieval errors (6xxx)
    RETRIEVAL_ERROR = "GAI-6000"
    NO_CANDIDATES = "GAI-6001"

    # Tool calling errors (7xxx)
    TOOL_ERROR = "GAI-7000"
    UNKNOWN_TOOL = "GAI-7001"
    NO_FUNCTION_CALLS = "GAI-7002"
    TOOL_ROUNDS_EXCEEDED = "GAI-7003"


class GenAISamplesError(Exception):
    """Base exception for all sample errors.

    Attributes:
        message: Human-readable error message.
        code: Structured error code.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
            }
        }


class ConfigurationError(GenAISamplesError):
    """Configuration or environment error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class ValidationError(GenAISamplesError):
    """Input validation error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details)


class ImageError(GenAISamplesError):
    """Image generation or loading error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.IMAGE_GENERATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EmbeddingError(GenAISamplesError):
    """Embedding service error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.EMBEDDING_SERVICE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class DimensionMismatchError(EmbeddingError):
    """Two vectors compared in one operation have different lengths.

    Raised instead of silently truncating the longer vector.
    """

    def __init__(
        self,
        expected: int,
        actual: int,
        candidate_id: str | None = None,
    ) -> None:
        self.expected = expected
        self.actual = actual
        self.candidate_id = candidate_id

        message = f"Embedding dimension mismatch: expected {expected}, got {actual}"
        details: dict[str, Any] = {"expected": expected, "actual": actual}
        if candidate_id is not None:
            message += f" for candidate {candidate_id!r}"
            details["candidate_id"] = candidate_id

        super().__init__(message, ErrorCode.EMBEDDING_DIMENSION_MISMATCH, details)


class VectorStoreError(GenAISamplesError):
    """Vector store operation error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VECTOR_STORE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class LLMError(GenAISamplesError):
    """LLM service error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.LLM_SERVICE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class RetrievalError(GenAISamplesError):
    """Retrieval operation error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RETRIEVAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class NoCandidatesError(RetrievalError):
    """Similarity search attempted over an empty candidate set."""

    def __init__(
        self,
        message: str = "No candidate documents to search",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.NO_CANDIDATES, details)


class ToolError(GenAISamplesError):
    """Function calling error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TOOL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
