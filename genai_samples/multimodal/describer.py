"""Describes images with a multimodal Gemini model."""

from google.genai import types

from genai_samples.llm.client import GeminiClient
from genai_samples.llm.models import GenerationResult
from genai_samples.logging_config import get_logger
from genai_samples.multimodal.loader import ImageLoader, ImageSource

logger = get_logger(__name__)

DEFAULT_SAFETY_SETTINGS = [
    types.SafetySetting(
        category=types.HarmCategory.HARM_CATEGORY_HARASSMENT,
        threshold=types.HarmBlockThreshold.BLOCK_LOW_AND_ABOVE,
    ),
    types.SafetySetting(
        category=types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
        threshold=types.HarmBlockThreshold.BLOCK_LOW_AND_ABOVE,
    ),
]


class ImageDescriber:
    """Asks the model to describe an image."""

    DEFAULT_INSTRUCTION = "Describe this image."

    def __init__(
        self,
        llm_client: GeminiClient,
        loader: ImageLoader | None = None,
        temperature: float = 0.4,
        safety_settings: list[types.SafetySetting] | None = None,
    ) -> None:
        self._llm_client = llm_client
        self._loader = loader or ImageLoader()
        self._temperature = temperature
        self._safety_settings = (
            safety_settings if safety_settings is not None else DEFAULT_SAFETY_SETTINGS
        )

    async def close(self) -> None:
        await self._loader.close()

    async def describe(
        self,
        source: ImageSource,
        instruction: str | None = None,
    ) -> GenerationResult:
        """Describe an image.

        Args:
            source: Image to describe.
            instruction: What to ask about the image, e.g. the output language.

        Returns:
            GenerationResult with the description.

        Raises:
            ImageError: If the image cannot be loaded.
            LLMError: If generation fails.
        """
        image_part = await self._loader.load(source)
        parts = [
            image_part,
            types.Part.from_text(text=instruction or self.DEFAULT_INSTRUCTION),
        ]

        logger.info("Describing image", extra={"uri": source.uri})
        return await self._llm_client.generate_multimodal(
            parts,
            temperature=self._temperature,
            safety_settings=self._safety_settings,
        )
