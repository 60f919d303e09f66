"""
Embedding and generation model settings.

The Google credential is shared by the embedding and chat models. It is
optional at startup; ingestion and chat fail with a configuration error
while it is missing.

Dependencies: pydantic, pydantic_settings
System role: Model configuration for embedding and grounded generation
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Google Generative AI model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    google_api_key: SecretStr | None = Field(
        default=None,
        validation_alias="GOOGLE_API_KEY",
        description="Credential for the embedding and chat models",
    )
    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Embedding model ID",
    )
    embedding_dimension: int = Field(
        default=1024,
        ge=1,
        description="Fixed embedding size; must match the vector collection",
    )
    chat_model: str = Field(default="gemini-2.5-flash", description="Chat model ID")
    temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    request_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Timeout in seconds for each embedding or generation call",
    )

    @property
    def has_credential(self) -> bool:
        """Whether a non-empty API key is configured."""
        return bool(self.google_api_key and self.google_api_key.get_secret_value().strip())
