"""Chat clients used by the UI.

Both clients validate, throttle and time-limit requests, and expose the
response as an async iterator of text chunks:

    - RelayChatClient: streams from the relay endpoint over HTTP
    - DirectChatClient: calls the model in-process with caching and
      rate-limit retry/fallback
"""

from relaychat.client.base import BaseChatClient
from relaychat.client.config import ClientConfig, get_client_config
from relaychat.client.direct import DirectChatClient
from relaychat.client.relay import RelayChatClient
from relaychat.client.throttle import Throttle

__all__ = [
    "BaseChatClient",
    "ClientConfig",
    "DirectChatClient",
    "RelayChatClient",
    "Throttle",
    "get_client_config",
]
