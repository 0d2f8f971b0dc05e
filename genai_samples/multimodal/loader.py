"""Turns image references into model content parts."""

import mimetypes
from urllib.parse import urlparse

import httpx
from google.genai import types
from pydantic import BaseModel, Field

from genai_samples.exceptions import ErrorCode, ImageError
from genai_samples.logging_config import get_logger

logger = get_logger(__name__)


class ImageSource(BaseModel):
    """Reference to an image the model should look at.

    Attributes:
        uri: ``gs://`` object URI or ``http(s)://`` URL.
        mime_type: Image MIME type; guessed from the extension when omitted.
    """

    uri: str = Field(description="Image URI")
    mime_type: str | None = Field(default=None, description="Image MIME type")

    def resolved_mime_type(self) -> str:
        """Return the explicit MIME type or one guessed from the path."""
        if self.mime_type:
            return self.mime_type
        guessed, _ = mimetypes.guess_type(urlparse(self.uri).path)
        if guessed is None:
            raise ImageError(
                f"Cannot determine MIME type for {self.uri}",
                code=ErrorCode.IMAGE_LOAD_ERROR,
                details={"uri": self.uri},
            )
        return guessed


class ImageLoader:
    """Builds content parts for images.

    Cloud Storage objects are passed by reference; web images are
    downloaded and sent inline.
    """

    def __init__(self, client: httpx.AsyncClient | None = None, timeout: float = 30.0) -> None:
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def load(self, source: ImageSource) -> types.Part:
        """Build a content part for the image.

        Raises:
            ImageError: On unsupported schemes or failed downloads.
        """
        scheme = urlparse(source.uri).scheme
        mime_type = source.resolved_mime_type()

        if scheme == "gs":
            return types.Part.from_uri(file_uri=source.uri, mime_type=mime_type)

        if scheme in ("http", "https"):
            data = await self._download(source.uri)
            return types.Part.from_bytes(data=data, mime_type=mime_type)

        raise ImageError(
            f"Unsupported image URI scheme: {scheme or '(none)'}",
            code=ErrorCode.IMAGE_LOAD_ERROR,
            details={"uri": source.uri},
        )

    async def _download(self, url: str) -> bytes:
        client = await self._get_client()
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Image download failed: {e.response.status_code}",
                extra={"url": url},
            )
            raise ImageError(
                f"Image download returned {e.response.status_code}",
                code=ErrorCode.IMAGE_LOAD_ERROR,
                details={"url": url, "status_code": e.response.status_code},
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Image download error: {e}", extra={"url": url})
            raise ImageError(
                f"Failed to download image: {e}",
                code=ErrorCode.IMAGE_LOAD_ERROR,
                details={"url": url},
            ) from e

        logger.debug("Downloaded image", extra={"url": url, "bytes": len(response.content)})
        return response.content
