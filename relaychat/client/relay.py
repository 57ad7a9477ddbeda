"""Chat client that talks to the relay endpoint over HTTP."""

import asyncio
import logging
import time
from collections.abc import AsyncGenerator, Callable

import httpx

from relaychat.client.base import BaseChatClient, timeout_message
from relaychat.client.config import ClientConfig

logger = logging.getLogger(__name__)

RELAY_ERROR_MESSAGE = "An error occurred while contacting the backend chat API."
INTERRUPTED_MESSAGE = "\n\n[Response interrupted. Please try again.]"


class RelayChatClient(BaseChatClient):
    """Stream chat responses from the relay's POST chat route.

    Uses an owned httpx.AsyncClient unless one is passed in; a borrowed
    client is left open by aclose().
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(config, clock=clock)
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=self.config.api_base_url,
            timeout=httpx.Timeout(self.config.request_timeout_s),
        )

    async def aclose(self) -> None:
        if self._owns_client and not self._http.is_closed:
            await self._http.aclose()

    async def dispatch(self, prompt: str) -> AsyncGenerator[str]:
        """POST the prompt and yield decoded text as it arrives.

        Args:
            prompt: An admitted, trimmed prompt.

        Yields:
            Response text chunks, or a single diagnostic message.
        """
        request = self._http.build_request(
            "POST",
            self.config.chat_path,
            json={"prompt": prompt},
        )
        try:
            response = await asyncio.wait_for(
                self._http.send(request, stream=True),
                timeout=self.config.request_timeout_s,
            )
        except (TimeoutError, httpx.TimeoutException):
            logger.warning(f"Relay request timed out after {self.config.request_timeout_s:g}s")
            yield timeout_message(self.config.request_timeout_s)
            return
        except httpx.HTTPError as e:
            logger.error(f"Relay request failed: {e}")
            yield RELAY_ERROR_MESSAGE
            return
        except Exception:
            logger.exception("Unexpected error contacting relay")
            yield RELAY_ERROR_MESSAGE
            return

        try:
            if response.is_error:
                detail = (await response.aread()).decode("utf-8", errors="replace").strip()
                logger.warning(f"Relay returned {response.status_code}")
                yield (
                    f"Server error: {response.status_code} {response.reason_phrase}"
                    f"{' - ' + detail if detail else ''}"
                )
                return

            # aiter_text decodes incrementally, so multi-byte characters split
            # across network chunks come out whole.
            async for text in response.aiter_text():
                if text:
                    yield text
        except httpx.HTTPError as e:
            logger.warning(f"Relay stream interrupted: {e}")
            yield INTERRUPTED_MESSAGE
        except Exception:
            logger.exception("Unexpected error reading relay stream")
            yield INTERRUPTED_MESSAGE
        finally:
            await response.aclose()
