"""Shared request gate for the chat clients.

Every client turns a prompt into an async iterator of text chunks. The
iterator never raises for expected failures: each failure path ends by
yielding a single human-readable message, since the UI treats every chunk
as displayable text.
"""

import logging
import math
import time
from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator, AsyncIterator, Callable

from relaychat.client.config import ClientConfig, get_client_config
from relaychat.client.throttle import Throttle

logger = logging.getLogger(__name__)

EMPTY_PROMPT_MESSAGE = "Please enter a prompt."
THROTTLE_MESSAGE = "You're sending requests too fast. Please wait ~{seconds}s."
TIMEOUT_MESSAGE = "The request timed out after {seconds}s. Please try again."
RATE_LIMIT_MESSAGE = "The model is rate limited (quota exceeded)."


def timeout_message(timeout_s: float) -> str:
    return TIMEOUT_MESSAGE.format(seconds=f"{timeout_s:g}")


def rate_limit_message(retry_after: float | None) -> str:
    """Describe a final rate-limit failure, including the wait if known."""
    if retry_after is None:
        return f"{RATE_LIMIT_MESSAGE} Please try again later."
    return f"{RATE_LIMIT_MESSAGE} Please retry in ~{max(1, math.ceil(retry_after))}s."


class BaseChatClient(ABC):
    """Validation and throttling in front of a concrete dispatch.

    Attributes:
        config: Client configuration.
        throttle: Per-client dispatch gate.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or get_client_config()
        self.throttle = Throttle(self.config.throttle_ms, clock=clock)

    def admit(self, prompt: str | None) -> str | None:
        """Check whether a prompt may be dispatched now.

        Args:
            prompt: Prompt text as entered.

        Returns:
            None if the prompt was admitted (the throttle is stamped),
            otherwise the diagnostic message explaining the rejection.
        """
        if not prompt or not prompt.strip():
            return EMPTY_PROMPT_MESSAGE

        wait = self.throttle.acquire()
        if wait is not None:
            logger.info(f"Request throttled, {wait}s until next dispatch")
            return THROTTLE_MESSAGE.format(seconds=wait)
        return None

    async def stream_chat(self, prompt: str | None) -> AsyncGenerator[str]:
        """Stream response chunks for a prompt.

        Args:
            prompt: The user's prompt.

        Yields:
            Response text chunks, or a single diagnostic message.
        """
        rejection = self.admit(prompt)
        if rejection is not None:
            yield rejection
            return

        async for chunk in self.dispatch(prompt.strip()):
            yield chunk

    @abstractmethod
    def dispatch(self, prompt: str) -> AsyncIterator[str]:
        """Send an admitted prompt and yield the response chunks."""

    async def aclose(self) -> None:
        """Release any resources held by the client."""

    async def __aenter__(self) -> "BaseChatClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()
