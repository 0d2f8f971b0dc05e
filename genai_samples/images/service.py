"""Imagen image generation service."""

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from genai_samples.clients import build_genai_client, close_genai_client
from genai_samples.config import ImageSettings, VertexSettings, get_settings
from genai_samples.exceptions import ErrorCode, ImageError, ValidationError
from genai_samples.images.models import GeneratedImage
from genai_samples.logging_config import get_logger
from genai_samples.observability.metrics import track_image_request

logger = get_logger(__name__)


class ImagenService:
    """Generates images from text prompts with an Imagen model.

    Images are returned in memory; persisting them is up to the caller.
    """

    def __init__(
        self,
        settings: ImageSettings | None = None,
        client: genai.Client | None = None,
        vertex_settings: VertexSettings | None = None,
    ) -> None:
        self._settings = settings or get_settings().image
        self._vertex_settings = vertex_settings
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> genai.Client:
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
        return self._settings.model

    async def generate_images(
        self,
        prompt: str,
        number_of_images: int | None = None,
        language: str | None = None,
        enhance_prompt: bool | None = None,
    ) -> list[GeneratedImage]:
        """Generate images for a prompt.

        Args:
            prompt: Text description of the image.
            number_of_images: Override for images per request.
            language: Prompt language hint, e.g. "ko" for a Korean prompt.
            enhance_prompt: Let the service rewrite the prompt first.

        Returns:
            Generated images in response order.

        Raises:
            ValidationError: If the prompt is blank.
            ImageError: If the request fails or yields no images.
        """
        if not prompt.strip():
            raise ValidationError("Image prompt must not be empty")

        config = types.GenerateImagesConfig(
            number_of_images=number_of_images or self._settings.number_of_images,
            language=language or self._settings.language,
            enhance_prompt=(
                enhance_prompt
                if enhance_prompt is not None
                else self._settings.enhance_prompt
            ),
        )

        client = self._get_client()
        try:
            response = await client.aio.models.generate_images(
                model=self._settings.model,
                prompt=prompt,
                config=config,
            )
        except genai_errors.APIError as e:
            track_image_request(self._settings.model, 0, success=False)
            logger.error(f"Image generation failed: {e.code}")
            raise ImageError(
                f"Image service returned {e.code}: {e.message}",
                code=ErrorCode.IMAGE_GENERATION_ERROR,
                details={"status_code": e.code, "model": self._settings.model},
            ) from e

        images: list[GeneratedImage] = []
        for idx, generated in enumerate(response.generated_images or []):
            if generated.image is None or not generated.image.image_bytes:
                logger.warning(
                    "Image filtered by the service",
                    extra={"index": idx, "reason": generated.rai_filtered_reason},
                )
                continue
            images.append(
                GeneratedImage(
                    index=idx,
                    image_bytes=generated.image.image_bytes,
                    mime_type=generated.image.mime_type or "image/png",
                    enhanced_prompt=generated.enhanced_prompt,
                    filtered_reason=generated.rai_filtered_reason,
                )
            )

        if not images:
            track_image_request(self._settings.model, 0, success=False)
            raise ImageError(
                "Image service returned no images",
                code=ErrorCode.IMAGE_GENERATION_ERROR,
                details={"model": self._settings.model},
            )

        track_image_request(self._settings.model, len(images))
        logger.info(
            f"Generated {len(images)} images",
            extra={"model": self._settings.model, "enhance_prompt": config.enhance_prompt},
        )
        return images
