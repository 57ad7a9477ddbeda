"""Pick the chat client for the configured mode."""

import logging
import os

from relaychat.agent.chat_agent import initialize_model_service
from relaychat.client.base import BaseChatClient
from relaychat.client.config import ClientConfig
from relaychat.client.direct import DirectChatClient
from relaychat.client.relay import RelayChatClient

logger = logging.getLogger(__name__)

RELAY_MODE = "relay"
DIRECT_MODE = "direct"


def create_chat_client(
    mode: str | None = None,
    config: ClientConfig | None = None,
) -> BaseChatClient:
    """Create a chat client for the UI.

    Direct mode needs a configured model on this process; when the model is
    unavailable the relay client is used instead.

    Args:
        mode: "relay" or "direct". Read from CHAT_MODE when omitted.
        config: Optional client configuration.

    Returns:
        A ready chat client.
    """
    mode = (mode or os.getenv("CHAT_MODE", RELAY_MODE)).lower()
    if mode == DIRECT_MODE:
        status = initialize_model_service()
        if status.ready and status.service is not None:
            return DirectChatClient(status.service, config)
        logger.warning(f"Direct mode unavailable ({status.reason}), using relay")
    elif mode != RELAY_MODE:
        logger.warning(f"Unknown CHAT_MODE {mode!r}, using relay")
    return RelayChatClient(config)
