"""FastAPI relay for the chat front-end.

Holds the Gemini API key server-side and streams generated text to the caller.

Endpoints:
    - GET /health: Service health status and model readiness
    - POST /api/chat: Streamed text response for a prompt
"""

from relaychat.api.app import create_app

__all__ = ["create_app"]
