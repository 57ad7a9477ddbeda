"""Chat client configuration with environment variable loading.

Everything the UI-side clients need to reach the relay or the model.
The API key is deliberately absent.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from relaychat.agent.config import DEFAULT_FALLBACK_MODEL, DEFAULT_MODEL

# Load environment variables from .env file
load_dotenv()

MAX_RETRY_DELAY_S = 60.0


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class ClientConfig(BaseModel):
    """Configuration for the chat clients.

    Attributes:
        api_base_url: Base URL of the relay server.
        chat_path: Path of the relay chat route.
        request_timeout_ms: Time allowed for a request to be answered.
        throttle_ms: Minimum interval between dispatches (0 disables).
        model_name: Primary model for direct calls.
        fallback_model: Model tried once when the primary is rate limited.
        auto_retry_on_quota: Wait out a server-suggested delay and retry once.
        max_retry_delay_s: Longest suggested delay that is worth waiting for.
    """

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:8000"),
    )
    chat_path: str = Field(
        default_factory=lambda: os.getenv("RELAY_CHAT_PATH", "/api/chat"),
    )
    request_timeout_ms: int = Field(
        default_factory=lambda: int(os.getenv("REQUEST_TIMEOUT_MS", "30000")),
        ge=1,
    )
    throttle_ms: int = Field(
        default_factory=lambda: int(os.getenv("CLIENT_THROTTLE_MS", "1000")),
        ge=0,
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
    )
    fallback_model: str | None = Field(
        default_factory=lambda: os.getenv("GEMINI_FALLBACK_MODEL", DEFAULT_FALLBACK_MODEL) or None,
    )
    auto_retry_on_quota: bool = Field(
        default_factory=lambda: _env_flag("AUTO_RETRY_ON_QUOTA"),
    )
    max_retry_delay_s: float = Field(default=MAX_RETRY_DELAY_S, gt=0.0)

    @property
    def request_timeout_s(self) -> float:
        return self.request_timeout_ms / 1000


def get_client_config() -> ClientConfig:
    """Create client configuration from environment."""
    return ClientConfig()
