"""Model configuration with environment variable loading.

Pydantic-based configuration for the Gemini model behind the relay.
The API key lives here and nowhere else; client-side configuration
never sees it.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_FALLBACK_MODEL = "gemini-2.0-flash-lite"


class ModelConfig(BaseModel):
    """Configuration for the upstream Gemini model.

    Attributes:
        api_key: API key for model access.
        model_name: Primary model identifier.
        fallback_model: Model tried once when the primary is rate limited.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        top_p: Nucleus sampling probability mass.
        top_k: Number of highest-probability tokens considered.
        max_output_tokens: Maximum tokens in generated response.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", os.getenv("GOOGLE_API_KEY", "")),
        description="API key for Gemini",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
        description="Primary model to use",
    )
    fallback_model: str | None = Field(
        default_factory=lambda: os.getenv("GEMINI_FALLBACK_MODEL", DEFAULT_FALLBACK_MODEL) or None,
        description="Fallback model for rate-limited calls",
    )
    temperature: float = Field(
        default=1.0,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    top_p: float = Field(default=0.95, gt=0.0, le=1.0)
    top_k: int = Field(default=64, ge=1)
    max_output_tokens: int = Field(
        default_factory=lambda: int(os.getenv("MAX_OUTPUT_TOKENS", "512")),
        ge=1,
        le=65536,
        description="Maximum tokens in generated response",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set GEMINI_API_KEY or GOOGLE_API_KEY in .env")
        return v.strip()


def get_model_config() -> ModelConfig:
    """Create model configuration from environment.

    Returns:
        Configured ModelConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return ModelConfig()
