"""Image generation data models."""

from pydantic import BaseModel, Field


class GeneratedImage(BaseModel):
    """One image returned by the image model.

    Attributes:
        index: Position of the image in the response.
        image_bytes: Encoded image data.
        mime_type: Image MIME type.
        enhanced_prompt: Prompt actually used when prompt enhancement ran.
        filtered_reason: Responsible-AI filter reason, if the service reported one.
    """

    index: int = Field(ge=0, description="Position in the response")
    image_bytes: bytes = Field(description="Encoded image data")
    mime_type: str = Field(default="image/png", description="Image MIME type")
    enhanced_prompt: str | None = Field(default=None, description="Rewritten prompt")
    filtered_reason: str | None = Field(default=None, description="RAI filter reason")

    @property
    def size(self) -> int:
        """Size of the encoded image in bytes."""
        return len(self.image_bytes)
