"""Agno-based access to the upstream Gemini model.

Responsibilities:
    - Model configuration and credential loading
    - One-time readiness check at startup
    - Streaming and one-shot completions
    - Normalizing provider failures into UpstreamError / RateLimitError

Nothing here knows about HTTP or the UI.
"""

from relaychat.agent.chat_agent import ModelService, ModelStatus, initialize_model_service
from relaychat.agent.config import ModelConfig, get_model_config
from relaychat.agent.errors import RateLimitError, UpstreamError

__all__ = [
    "ModelConfig",
    "ModelService",
    "ModelStatus",
    "RateLimitError",
    "UpstreamError",
    "get_model_config",
    "initialize_model_service",
]
