"""Pydantic models for the relay API and conversation state.

Models:
    - PromptRequest: Incoming relay request payload
    - ErrorResponse: JSON error body returned by the relay
    - StreamState: Lifecycle of a streamed response
    - StreamSession: One dispatched prompt and its accumulated text
"""

from relaychat.models.schemas import ErrorResponse, PromptRequest, StreamSession, StreamState

__all__ = ["ErrorResponse", "PromptRequest", "StreamSession", "StreamState"]
