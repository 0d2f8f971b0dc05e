"""LLM client interface and Gemini implementation."""

import time
from abc import ABC, abstractmethod

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from genai_samples.clients import build_genai_client, close_genai_client
from genai_samples.config import GenerationSettings, VertexSettings, get_settings
from genai_samples.exceptions import ErrorCode, LLMError
from genai_samples.llm.models import GenerationResult, Message, Role
from genai_samples.logging_config import get_logger
from genai_samples.observability.metrics import track_llm_request

logger = get_logger(__name__)

# Gemini calls the assistant "model"; system messages go to system_instruction.
_SDK_ROLES = {
    Role.USER: "user",
    Role.ASSISTANT: "model",
}


class LLMClient(ABC):
    """Abstract base class for LLM clients.

    Defines the interface for generating text with LLMs.
    """

    @abstractmethod
    async def generate(
        self,
        messages: list[Message],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> GenerationResult:
        """Generate text from messages.

        Args:
            messages: Conversation messages.
            temperature: Sampling temperature override.
            max_tokens: Maximum tokens override.

        Returns:
            GenerationResult with generated text.

        Raises:
            LLMError: If generation fails.
        """
        ...

    @abstractmethod
    async def generate_text(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> GenerationResult:
        """Generate text from a simple prompt.

        Args:
            prompt: User prompt.
            system_prompt: Optional system prompt.
            temperature: Sampling temperature override.
            max_tokens: Maximum tokens override.

        Returns:
            GenerationResult with generated text.

        Raises:
            LLMError: If generation fails.
        """
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model name."""
        ...


class GeminiClient(LLMClient):
    """LLM client for Gemini models through the google-genai SDK.

    Besides plain chat-style generation it exposes multimodal generation and
    a tool-enabled call that returns the raw SDK response for function
    calling loops.
    """

    def __init__(
        self,
        settings: GenerationSettings | None = None,
        client: genai.Client | None = None,
        vertex_settings: VertexSettings | None = None,
    ) -> None:
        """Initialize the Gemini client.

        Args:
            settings: Generation configuration.
            client: Shared genai client (for testing or sharing).
            vertex_settings: Connection settings for a self-created client.
        """
        self._settings = settings or get_settings().generation
        self._vertex_settings = vertex_settings
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> genai.Client:
        """Get or create the genai client."""
        if self._client is None:
            self._client = build_genai_client(
                self._vertex_settings or get_settings().vertex
            )
        return self._client

    async def close(self) -> None:
        """Close the genai client if we own it."""
        if self._owns_client and self._client is not None:
            await close_genai_client(self._client)
            self._client = None

    @property
    def model_name(self) -> str:
        """Get the model name."""
        return self._settings.model

    async def generate(
        self,
        messages: list[Message],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> GenerationResult:
        """Generate text from a conversation."""
        system_prompts = [m.content for m in messages if m.role == Role.SYSTEM]
        contents = [
            types.Content(
                role=_SDK_ROLES[msg.role],
                parts=[types.Part.from_text(text=msg.content)],
            )
            for msg in messages
            if msg.role != Role.SYSTEM
        ]

        config = self._build_config(
            temperature=temperature,
            max_tokens=max_tokens,
            system_instruction="\n\n".join(system_prompts) or None,
        )
        response = await self._generate_content(contents, config)
        return self._to_result(response)

    async def generate_text(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> GenerationResult:
        """Generate text from a simple prompt."""
        messages: list[Message] = []

        if system_prompt:
            messages.append(Message(role=Role.SYSTEM, content=system_prompt))

        messages.append(Message(role=Role.USER, content=prompt))

        return await self.generate(
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )

    async def generate_multimodal(
        self,
        parts: list[types.Part],
        temperature: float | None = None,
        safety_settings: list[types.SafetySetting] | None = None,
    ) -> GenerationResult:
        """Generate text from mixed parts (images, text) in one user turn.

        Args:
            parts: Content parts, e.g. an image part followed by an instruction.
            temperature: Sampling temperature override.
            safety_settings: Harm-category block thresholds.

        Returns:
            GenerationResult with generated text.

        Raises:
            LLMError: If generation fails.
        """
        contents = [types.Content(role="user", parts=parts)]
        config = self._build_config(
            temperature=temperature,
            safety_settings=safety_settings,
        )
        response = await self._generate_content(contents, config)
        return self._to_result(response)

    async def generate_with_tools(
        self,
        contents: list[types.Content],
        tools: list[types.Tool],
        temperature: float | None = 0.0,
    ) -> types.GenerateContentResponse:
        """Generate with function declarations available to the model.

        The SDK response is returned as-is so the caller can read the
        function calls and the model turn that produced them.

        Raises:
            LLMError: If generation fails or no candidate is returned.
        """
        config = self._build_config(temperature=temperature)
        config.tools = tools
        config.automatic_function_calling = types.AutomaticFunctionCallingConfig(
            disable=True
        )

        response = await self._generate_content(contents, config)
        if not response.candidates:
            raise LLMError(
                "Got empty response from model",
                code=ErrorCode.LLM_EMPTY_RESPONSE,
                details={"model": self._settings.model},
            )
        return response

    def _build_config(
        self,
        temperature: float | None = None,
        max_tokens: int | None = None,
        system_instruction: str | None = None,
        safety_settings: list[types.SafetySetting] | None = None,
    ) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=(
                temperature if temperature is not None else self._settings.temperature
            ),
            max_output_tokens=max_tokens or self._settings.max_output_tokens,
            system_instruction=system_instruction,
            safety_settings=safety_settings,
        )

    async def _generate_content(
        self,
        contents: list[types.Content],
        config: types.GenerateContentConfig,
    ) -> types.GenerateContentResponse:
        """Call the model, mapping SDK and transport failures to LLMError."""
        client = self._get_client()
        model = self._settings.model
        start = time.perf_counter()

        try:
            response = await client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=config,
            )

        except genai_errors.APIError as e:
            track_llm_request(model, time.perf_counter() - start, 0, 0, success=False)
            logger.error(f"Gemini request failed: {e.code}")

            if e.code == 429:
                raise LLMError(
                    "Rate limit exceeded",
                    code=ErrorCode.LLM_RATE_LIMIT,
                    details={"status_code": e.code},
                ) from e

            if e.code in (408, 504):
                raise LLMError(
                    "Gemini request timed out",
                    code=ErrorCode.LLM_TIMEOUT,
                    details={"status_code": e.code},
                ) from e

            raise LLMError(
                f"Gemini returned {e.code}: {e.message}",
                code=ErrorCode.LLM_SERVICE_ERROR,
                details={"status_code": e.code, "status": e.status},
            ) from e

        except httpx.TimeoutException as e:
            track_llm_request(model, time.perf_counter() - start, 0, 0, success=False)
            logger.error(f"Gemini request timed out: {e}")
            raise LLMError(
                "Gemini request timed out",
                code=ErrorCode.LLM_TIMEOUT,
                details={"model": model},
            ) from e

        except httpx.HTTPError as e:
            track_llm_request(model, time.perf_counter() - start, 0, 0, success=False)
            logger.error(f"Gemini connection error: {e}")
            raise LLMError(
                f"Failed to connect to Gemini: {e}",
                code=ErrorCode.LLM_SERVICE_ERROR,
                details={"model": model},
            ) from e

        usage = response.usage_metadata
        track_llm_request(
            model,
            time.perf_counter() - start,
            (usage.prompt_token_count or 0) if usage else 0,
            (usage.candidates_token_count or 0) if usage else 0,
        )
        return response

    def _to_result(self, response: types.GenerateContentResponse) -> GenerationResult:
        """Convert an SDK response to a GenerationResult."""
        if not response.candidates:
            raise LLMError(
                "Got empty response from model",
                code=ErrorCode.LLM_EMPTY_RESPONSE,
                details={"model": self._settings.model},
            )

        candidate = response.candidates[0]
        text = response.text
        if not text:
            raise LLMError(
                "Model response contains no text",
                code=ErrorCode.LLM_EMPTY_RESPONSE,
                details={
                    "model": self._settings.model,
                    "finish_reason": str(candidate.finish_reason),
                },
            )

        usage = response.usage_metadata
        return GenerationResult(
            content=text,
            model=response.model_version or self._settings.model,
            prompt_tokens=(usage.prompt_token_count or 0) if usage else 0,
            completion_tokens=(usage.candidates_token_count or 0) if usage else 0,
            total_tokens=(usage.total_token_count or 0) if usage else 0,
            finish_reason=(
                candidate.finish_reason.value if candidate.finish_reason else None
            ),
        )
