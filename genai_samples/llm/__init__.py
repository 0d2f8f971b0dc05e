"""Gemini client module."""

from genai_samples.llm.client import GeminiClient, LLMClient
from genai_samples.llm.models import GenerationResult, Message, Role
from genai_samples.llm.prompts import PromptTemplate, RAGPromptTemplate

__all__ = [
    "GeminiClient",
    "GenerationResult",
    "LLMClient",
    "Message",
    "PromptTemplate",
    "RAGPromptTemplate",
    "Role",
]
