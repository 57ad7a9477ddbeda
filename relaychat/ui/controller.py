"""In-memory conversation state driving the chat page.

The controller owns the input buffer, the prompt history and the response
being streamed. Each dispatch is tagged with a generation number; chunks
from an older generation are dropped, so a new send or a new chat cleanly
supersedes a stream that is still running.
"""

import logging
from collections.abc import Callable
from contextlib import aclosing
from enum import Enum

from relaychat.client.base import BaseChatClient
from relaychat.models.schemas import StreamSession
from relaychat.ui.formatting import format_for_display

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "An error occurred. Please try again."


class Phase(str, Enum):
    """Where the current submission is in its lifecycle."""

    IDLE = "idle"
    SENDING = "sending"
    STREAMING = "streaming"
    DONE = "done"
    FAILED = "failed"
    REJECTED = "rejected"


class ConversationController:
    """Manages prompt history and the streamed response for one conversation.

    Attributes:
        client: Chat client used to dispatch prompts.
        input_text: Text currently in the input box.
        recent_prompt: Prompt whose response is on display.
        history: Dispatched prompts, oldest first.
        raw_text: Unformatted response text received so far.
        display_html: Formatted version of raw_text (or a message).
        loading: Whether a response is in flight.
        show_result: Whether the result area should be visible.
        phase: Lifecycle phase of the latest submission.
        session: Stream session for the latest dispatch.
        generation: Tag of the latest dispatch.
    """

    def __init__(self, client: BaseChatClient) -> None:
        self.client = client
        self.input_text = ""
        self.recent_prompt = ""
        self.history: list[str] = []
        self.raw_text = ""
        self.display_html = ""
        self.loading = False
        self.show_result = False
        self.phase = Phase.IDLE
        self.session: StreamSession | None = None
        self.generation = 0
        self._listeners: list[Callable[[], None]] = []

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register a callback run after every state change.

        Returns:
            Function that removes the callback again.
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Conversation listener failed")

    def _is_current(self, generation: int) -> bool:
        return generation == self.generation

    async def send(self, prompt: str | None = None) -> None:
        """Dispatch a prompt and apply the streamed response.

        Args:
            prompt: Prompt to replay from history. When omitted the buffered
                input text is sent and recorded in the history.
        """
        replay = prompt is not None
        effective = (prompt if replay else self.input_text).strip()
        if not effective:
            return

        rejection = self.client.admit(effective)
        if rejection is not None:
            self.show_result = True
            self.display_html = format_for_display(rejection)
            self.phase = Phase.REJECTED
            self._notify()
            return

        if not replay:
            self.history.append(effective)

        self.generation += 1
        generation = self.generation
        session = StreamSession(prompt=effective, generation=generation)
        self.session = session
        self.recent_prompt = effective
        self.raw_text = ""
        self.display_html = ""
        self.loading = True
        self.show_result = True
        self.phase = Phase.SENDING
        self._notify()

        try:
            async with aclosing(self.client.dispatch(effective)) as stream:
                async for chunk in stream:
                    if not self._is_current(generation):
                        logger.debug(f"Dropping chunks of superseded request {session.request_id}")
                        break
                    session.append(chunk)
                    # Re-format the whole buffer: a ** pair may span chunks
                    self.raw_text = session.accumulated_text
                    self.display_html = format_for_display(self.raw_text)
                    self.phase = Phase.STREAMING
                    self._notify()
            if self._is_current(generation):
                session.complete()
                self.phase = Phase.DONE
        except Exception:
            logger.exception(f"Chat request {session.request_id} failed")
            session.fail()
            if self._is_current(generation):
                self.display_html = ERROR_MESSAGE
                self.phase = Phase.FAILED
        finally:
            if self._is_current(generation):
                self.loading = False
                self.input_text = ""
                self._notify()

    def new_chat(self) -> None:
        """Start over: supersede any running stream and clear all state."""
        self.generation += 1
        self.input_text = ""
        self.recent_prompt = ""
        self.history.clear()
        self.raw_text = ""
        self.display_html = ""
        self.loading = False
        self.show_result = False
        self.phase = Phase.IDLE
        self.session = None
        self._notify()
