"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
error handlers and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from relaychat.agent.chat_agent import ModelStatus, initialize_model_service
from relaychat.api.chat import PROMPT_REQUIRED, error_response
from relaychat.api.chat import router as chat_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    model_status: ModelStatus = app.state.model_status
    if model_status.ready:
        logger.info("Starting Relay Chat API...")
    else:
        logger.warning(f"Starting Relay Chat API without a model: {model_status.reason}")
    yield
    logger.info("Shutting down Relay Chat API...")


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed chat bodies with the relay's 400 error shape."""
    logger.debug(f"Rejected request body on {request.url.path} ({len(exc.errors())} errors)")
    return error_response(status.HTTP_400_BAD_REQUEST, PROMPT_REQUIRED)


def create_app(model_status: ModelStatus | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        model_status: Pre-built model status. Initialized from the
            environment when not provided.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Relay Chat API",
        description=(
            "Streaming relay for Gemini chat. Holds the API key server-side and "
            "forwards generated text to the caller as it arrives."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.state.model_status = model_status or initialize_model_service()

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
        expose_headers=["X-Request-ID"],
    )

    application.add_exception_handler(RequestValidationError, validation_error_handler)
    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        ready = application.state.model_status.ready
        return {
            "status": "healthy",
            "service": "relaychat",
            "model": "ready" if ready else "unavailable",
        }

    return application
