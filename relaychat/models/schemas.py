import uuid
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class StreamState(str, Enum):
    """Lifecycle of a streamed response."""

    PENDING = "pending"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"


class PromptRequest(BaseModel):
    """Request payload for the relay chat endpoint.

    The prompt is optional at the schema level so the route can answer a
    missing prompt with its own error body instead of a 422.

    Attributes:
        prompt: The user's prompt text.
    """

    prompt: str | None = None

    @field_validator("prompt", mode="before")
    @classmethod
    def strip_prompt(cls, v: str | None) -> str | None:
        """Strip whitespace from prompt before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class ErrorResponse(BaseModel):
    """JSON error body returned by the relay."""

    error: str


class StreamSession(BaseModel):
    """A dispatched prompt and the text streamed back for it so far.

    Attributes:
        request_id: Unique identifier for this dispatch.
        generation: Controller generation the session belongs to.
        prompt: The prompt that was sent.
        accumulated_text: Concatenation of every chunk received.
        state: Current lifecycle state.
        created_at: UTC timestamp of dispatch.
    """

    request_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    generation: int = Field(default=0, ge=0)
    prompt: str
    accumulated_text: str = ""
    state: StreamState = StreamState.PENDING
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_terminal(self) -> bool:
        return self.state in (StreamState.COMPLETED, StreamState.FAILED)

    def append(self, chunk: str) -> None:
        """Append a received chunk. Text only ever grows."""
        if self.is_terminal:
            raise ValueError(f"Cannot append to a {self.state.value} session")
        self.accumulated_text += chunk
        self.state = StreamState.STREAMING

    def complete(self) -> None:
        self.state = StreamState.COMPLETED

    def fail(self) -> None:
        self.state = StreamState.FAILED
