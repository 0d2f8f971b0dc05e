"""Prompt templates for RAG."""

from abc import ABC, abstractmethod
from typing import Any


class PromptTemplate(ABC):
    """Abstract base class for prompt templates."""

    @abstractmethod
    def format(self, **kwargs: Any) -> str:
        """Format the template with provided variables.

        Args:
            **kwargs: Template variables.

        Returns:
            Formatted prompt string.
        """
        ...


class RAGPromptTemplate(PromptTemplate):
    """Prompt template grounding an answer in retrieved documents."""

    DEFAULT_SYSTEM_PROMPT = """You are a helpful assistant that answers questions using the documents you are given.

Rules:
- Answer based on the provided documents
- If the documents do not contain the answer, say so
- Answer in the language of the question"""

    DEFAULT_USER_TEMPLATE = """Answer the question based on the following document:
Document: {context}
Question: {question}"""

    def __init__(
        self,
        system_prompt: str | None = None,
        user_template: str | None = None,
    ) -> None:
        self.system_prompt = system_prompt or self.DEFAULT_SYSTEM_PROMPT
        self.user_template = user_template or self.DEFAULT_USER_TEMPLATE

    def format(self, **kwargs: Any) -> str:
        """Format the user template; needs 'context' and 'question'."""
        return self.user_template.format(**kwargs)

    def format_context(self, documents: list[str], separator: str = "\n\n---\n\n") -> str:
        """Join retrieved documents into a single context string."""
        return separator.join(documents)

    def build_prompt(
        self,
        question: str,
        documents: list[str],
    ) -> tuple[str, str]:
        """Build complete prompt from question and documents.

        Returns:
            Tuple of (system_prompt, user_prompt).
        """
        context = self.format_context(documents)
        user_prompt = self.format(context=context, question=question)
        return self.system_prompt, user_prompt
