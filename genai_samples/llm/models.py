"""Conversation and result types for Gemini calls."""

from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Who wrote a message.

    Gemini has no system turn: system messages become the request's
    ``system_instruction`` and assistant messages are sent as ``model``.
    """

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """One turn of a text conversation."""

    role: Role = Field(description="Message role")
    content: str = Field(description="Message text")


class GenerationResult(BaseModel):
    """Text from the first candidate of a generate_content response.

    Attributes:
        content: Concatenated text parts of the candidate.
        model: Model version reported by the API, else the requested model.
        prompt_tokens: ``usage_metadata.prompt_token_count``.
        completion_tokens: ``usage_metadata.candidates_token_count``.
        total_tokens: ``usage_metadata.total_token_count``.
        finish_reason: Candidate finish reason such as ``STOP`` or ``SAFETY``.
    """

    content: str = Field(description="Generated text")
    model: str = Field(description="Model that answered")
    prompt_tokens: int = Field(default=0, description="Prompt token count")
    completion_tokens: int = Field(default=0, description="Candidate token count")
    total_tokens: int = Field(default=0, description="Total token count")
    finish_reason: str | None = Field(default=None, description="Finish reason")
