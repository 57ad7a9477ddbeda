"""Relay chat endpoint.

Accepts a prompt, calls the upstream model with the server-held key, and
streams generated text back as plain chunked text.
"""

import logging
import os
import uuid
from collections.abc import AsyncGenerator, AsyncIterator

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response, StreamingResponse

from relaychat.agent.chat_agent import ModelStatus
from relaychat.models.schemas import ErrorResponse, PromptRequest

logger = logging.getLogger(__name__)

RELAY_CHAT_PATH = os.getenv("RELAY_CHAT_PATH", "/api/chat")

PROMPT_REQUIRED = "Prompt is required"
INTERNAL_ERROR = "Internal server error"

router = APIRouter(tags=["chat"])


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build a JSON error response with the relay's error body shape."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def get_model_status(request: Request) -> ModelStatus:
    """Return the model status recorded at startup."""
    return request.app.state.model_status


async def _relay_chunks(
    stream: AsyncIterator[str],
    first: str,
    request_id: str,
) -> AsyncGenerator[str]:
    """Forward upstream fragments as they arrive.

    A failure after the response has started is re-raised so the server
    drops the connection without the terminating chunk. Clients then see an
    incomplete body instead of a short but apparently complete one.
    """
    sent = 0
    try:
        if first:
            sent += 1
            yield first
        async for chunk in stream:
            sent += 1
            yield chunk
        logger.info(f"[{request_id}] Stream complete ({sent} chunks)")
    except Exception:
        logger.exception(f"[{request_id}] Upstream failed after {sent} chunks, aborting response")
        raise
    finally:
        await stream.aclose()


@router.post(
    RELAY_CHAT_PATH,
    response_class=StreamingResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def chat(
    payload: PromptRequest,
    model_status: ModelStatus = Depends(get_model_status),
) -> Response:
    """Stream a model response for a prompt.

    Args:
        payload: Request body with the prompt.
        model_status: Model readiness determined at startup.

    Returns:
        Chunked text/plain stream of generated text.

    Raises:
        400: Missing or empty prompt.
        500: Model not configured, or upstream failure before any text
            was produced.
    """
    if not payload.prompt:
        return error_response(status.HTTP_400_BAD_REQUEST, PROMPT_REQUIRED)

    if not model_status.ready or model_status.service is None:
        logger.error(f"Model service unavailable: {model_status.reason or 'not initialized'}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)

    request_id = uuid.uuid4().hex
    logger.info(f"[{request_id}] Relaying prompt ({len(payload.prompt)} chars)")

    # Pull the first fragment before committing to a 200 so early upstream
    # failures still get a JSON error status.
    stream = model_status.service.stream(payload.prompt)
    try:
        first = await anext(stream)
    except StopAsyncIteration:
        first = ""
    except Exception:
        logger.exception(f"[{request_id}] Upstream call failed before streaming")
        await stream.aclose()
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)

    return StreamingResponse(
        _relay_chunks(stream, first, request_id),
        media_type="text/plain; charset=utf-8",
        headers={"Cache-Control": "no-cache", "X-Request-ID": request_id},
    )
