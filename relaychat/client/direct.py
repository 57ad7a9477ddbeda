"""Chat client that calls the model service in-process.

Non-streaming: each prompt produces one chunk holding the whole response.
Successful responses are cached per (model, prompt) for the lifetime of the
client. Quota failures get at most one wait-and-retry on the primary model
and one attempt on the fallback model.
"""

import asyncio
import logging
import time
from collections.abc import AsyncGenerator, Awaitable, Callable

from relaychat.agent.chat_agent import ModelService
from relaychat.agent.errors import RateLimitError, UpstreamError
from relaychat.client.base import BaseChatClient, rate_limit_message, timeout_message
from relaychat.client.config import ClientConfig

logger = logging.getLogger(__name__)

DIRECT_ERROR_MESSAGE = "An error occurred while contacting the model API."


class DirectChatClient(BaseChatClient):
    """Call the model without a relay, with caching and quota fallback.

    Attributes:
        cache: Successful responses keyed by (model, prompt). Never evicted.
    """

    def __init__(
        self,
        service: ModelService,
        config: ClientConfig | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        super().__init__(config, clock=clock)
        self._service = service
        self._sleep = sleep
        self.cache: dict[tuple[str, str], str] = {}

    async def dispatch(self, prompt: str) -> AsyncGenerator[str]:
        """Yield the full response for an admitted prompt as one chunk."""
        cached = self.cache.get((self.config.model_name, prompt))
        if cached is not None:
            logger.debug(f"Cache hit for model {self.config.model_name}")
            yield cached
            return
        yield await self._complete(prompt)

    async def _attempt(self, prompt: str, model_name: str) -> str:
        text = await asyncio.wait_for(
            self._service.generate(prompt, model_name=model_name),
            timeout=self.config.request_timeout_s,
        )
        self.cache[(model_name, prompt)] = text
        return text

    async def _complete(self, prompt: str) -> str:
        primary = self.config.model_name
        try:
            return await self._attempt(prompt, primary)
        except RateLimitError as e:
            retry_after = e.retry_after
            logger.warning(f"Model {primary} rate limited (retry_after={retry_after})")
        except TimeoutError:
            logger.warning(f"Model {primary} timed out after {self.config.request_timeout_s:g}s")
            return timeout_message(self.config.request_timeout_s)
        except UpstreamError as e:
            logger.error(f"Model {primary} failed: {e}")
            return DIRECT_ERROR_MESSAGE
        except Exception:
            logger.exception(f"Unexpected error calling model {primary}")
            return DIRECT_ERROR_MESSAGE

        if (
            self.config.auto_retry_on_quota
            and retry_after is not None
            and retry_after <= self.config.max_retry_delay_s
        ):
            logger.info(f"Retrying {primary} in {retry_after:g}s")
            await self._sleep(retry_after)
            try:
                return await self._attempt(prompt, primary)
            except RateLimitError as e:
                retry_after = e.retry_after if e.retry_after is not None else retry_after
                logger.warning(f"Retry of {primary} rate limited again")
            except Exception as e:
                logger.warning(f"Retry of {primary} failed: {e}")

        fallback = self.config.fallback_model
        if fallback and fallback != primary:
            logger.info(f"Falling back to {fallback}")
            try:
                return await self._attempt(prompt, fallback)
            except RateLimitError as e:
                retry_after = e.retry_after if e.retry_after is not None else retry_after
                logger.warning(f"Fallback model {fallback} rate limited")
            except Exception as e:
                logger.warning(f"Fallback model {fallback} failed: {e}")

        return rate_limit_message(retry_after)
