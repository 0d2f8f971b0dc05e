"""Application configuration using Pydantic Settings.

All configuration is loaded from environment variables.
No secrets are hardcoded.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class VertexSettings(BaseSettings):
    """Google Cloud / Vertex AI connection configuration.

    When ``api_key`` is set the Gemini Developer API is used instead of
    Vertex AI and ``project``/``location`` are ignored.
    """

    model_config = SettingsConfigDict(env_prefix="VERTEX_")

    project: str | None = Field(
        default=None,
        description="GCP project ID",
    )
    location: str = Field(
        default="us-central1",
        description="Vertex AI region",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Gemini Developer API key (optional)",
    )
    timeout: float = Field(
        default=120.0,
        description="Request timeout in seconds",
    )


class GenerationSettings(BaseSettings):
    """Gemini text generation configuration."""

    model_config = SettingsConfigDict(env_prefix="GEMINI_")

    model: str = Field(
        default="gemini-2.0-flash",
        description="Model name to use for generation",
    )
    temperature: float = Field(
        default=0.4,
        description="Sampling temperature (lower = more deterministic)",
    )
    max_output_tokens: int = Field(
        default=2048,
        description="Maximum tokens in response",
    )


class ImageSettings(BaseSettings):
    """Imagen image generation configuration."""

    model_config = SettingsConfigDict(env_prefix="IMAGEN_")

    model: str = Field(
        default="imagen-3.0-generate-002",
        description="Imagen model name",
    )
    number_of_images: int = Field(
        default=1,
        ge=1,
        le=4,
        description="Images generated per request",
    )
    language: str | None = Field(
        default=None,
        description="Prompt language hint (e.g. 'ko', 'en', 'auto')",
    )
    enhance_prompt: bool = Field(
        default=False,
        description="Let the service rewrite the prompt before generating",
    )


class EmbeddingSettings(BaseSettings):
    """Embedding service configuration."""

    model_config = SettingsConfigDict(env_prefix="EMBEDDING_")

    model: str = Field(
        default="text-multilingual-embedding-002",
        description="Embedding model name",
    )
    dimensions: int = Field(
        default=256,
        ge=1,
        description="Output dimensionality requested from the model",
    )
    batch_size: int = Field(
        default=32,
        description="Batch size for embedding requests",
    )


class QdrantSettings(BaseSettings):
    """Qdrant vector database configuration."""

    model_config = SettingsConfigDict(env_prefix="QDRANT_")

    url: str = Field(
        default="http://localhost:6333",
        description="Qdrant server URL",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Qdrant API key (optional for local)",
    )
    collection_name: str = Field(
        default="documents",
        description="Default collection name",
    )


class Settings(BaseSettings):
    """Main application settings.

    Aggregates all configuration sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application settings
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # API settings
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host",
    )
    api_port: int = Field(
        default=8000,
        description="API server port",
    )

    # Nested settings
    vertex: VertexSettings = Field(default_factory=VertexSettings)
    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    image: ImageSettings = Field(default_factory=ImageSettings)
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    qdrant: QdrantSettings = Field(default_factory=QdrantSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()
