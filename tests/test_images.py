"""Tests for image generation."""

from unittest.mock import MagicMock

import pytest
from google.genai import errors as genai_errors
from google.genai import types

from genai_samples.config import ImageSettings
from genai_samples.exceptions import ErrorCode, ImageError, ValidationError
from genai_samples.images.models import GeneratedImage
from genai_samples.images.service import ImagenService


def _image(data: bytes | None, enhanced: str | None = None) -> types.GeneratedImage:
    return types.GeneratedImage(
        image=types.Image(image_bytes=data, mime_type="image/png") if data else None,
        enhanced_prompt=enhanced,
        rai_filtered_reason=None if data else "Filtered by safety settings",
    )


class TestGeneratedImage:
    """Tests for GeneratedImage model."""

    def test_size(self) -> None:
        """Size is the number of encoded bytes."""
        image = GeneratedImage(index=0, image_bytes=b"\x89PNG1234")
        assert image.size == 8
        assert image.mime_type == "image/png"


class TestImagenService:
    """Tests for ImagenService."""

    async def test_generate_images(self, genai_client: MagicMock) -> None:
        """Images are returned in memory, in response order."""
        genai_client.aio.models.generate_images.return_value = types.GenerateImagesResponse(
            generated_images=[_image(b"first"), _image(b"second")]
        )

        service = ImagenService(settings=ImageSettings(), client=genai_client)
        images = await service.generate_images("A whale in space", number_of_images=2)

        assert [i.image_bytes for i in images] == [b"first", b"second"]
        assert [i.index for i in images] == [0, 1]

        kwargs = genai_client.aio.models.generate_images.call_args.kwargs
        assert kwargs["model"] == "imagen-3.0-generate-002"
        assert kwargs["prompt"] == "A whale in space"
        assert kwargs["config"].number_of_images == 2

    async def test_language_and_enhance_prompt(self, genai_client: MagicMock) -> None:
        """Language hint and prompt enhancement are forwarded."""
        genai_client.aio.models.generate_images.return_value = types.GenerateImagesResponse(
            generated_images=[_image(b"img", enhanced="An idol in hanbok at Gyeongbokgung")]
        )

        service = ImagenService(client=genai_client)
        images = await service.generate_images(
            "따뜻한 봄날, 경복궁을 거닐고 있는 한복을 입은 아이돌",
            language="ko",
            enhance_prompt=True,
        )

        config = genai_client.aio.models.generate_images.call_args.kwargs["config"]
        assert config.language == "ko"
        assert config.enhance_prompt is True
        assert images[0].enhanced_prompt == "An idol in hanbok at Gyeongbokgung"

    async def test_defaults_from_settings(self, genai_client: MagicMock) -> None:
        """Unset options fall back to settings."""
        genai_client.aio.models.generate_images.return_value = types.GenerateImagesResponse(
            generated_images=[_image(b"img")]
        )

        settings = ImageSettings(number_of_images=3, enhance_prompt=False)
        service = ImagenService(settings=settings, client=genai_client)
        await service.generate_images("A cat")

        config = genai_client.aio.models.generate_images.call_args.kwargs["config"]
        assert config.number_of_images == 3
        assert config.enhance_prompt is False

    async def test_filtered_images_skipped(self, genai_client: MagicMock) -> None:
        """Images without bytes are left out."""
        genai_client.aio.models.generate_images.return_value = types.GenerateImagesResponse(
            generated_images=[_image(None), _image(b"kept")]
        )

        service = ImagenService(client=genai_client)
        images = await service.generate_images("A cat")

        assert len(images) == 1
        assert images[0].index == 1

    async def test_no_images(self, genai_client: MagicMock) -> None:
        """A response with no usable images raises ImageError."""
        genai_client.aio.models.generate_images.return_value = types.GenerateImagesResponse(
            generated_images=[_image(None)]
        )

        service = ImagenService(client=genai_client)

        with pytest.raises(ImageError) as exc_info:
            await service.generate_images("A cat")

        assert exc_info.value.code == ErrorCode.IMAGE_GENERATION_ERROR

    async def test_blank_prompt(self, genai_client: MagicMock) -> None:
        """A blank prompt is rejected before any request."""
        service = ImagenService(client=genai_client)

        with pytest.raises(ValidationError):
            await service.generate_images("   ")

        genai_client.aio.models.generate_images.assert_not_called()

    async def test_api_error(self, genai_client: MagicMock) -> None:
        """API errors raise ImageError."""
        genai_client.aio.models.generate_images.side_effect = genai_errors.ClientError(
            400, {"error": {"code": 400, "message": "Bad prompt", "status": "INVALID_ARGUMENT"}}
        )

        service = ImagenService(client=genai_client)

        with pytest.raises(ImageError) as exc_info:
            await service.generate_images("A cat")

        assert exc_info.value.details["status_code"] == 400
