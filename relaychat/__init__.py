"""Relay Chat - streaming chat front-end for Google Gemini.

Combines FastAPI for the streaming relay, Agno for model access,
NiceGUI for the chat interface, and Pydantic for data validation.

Components:
    - api: relay endpoint that holds the API key and streams model output
    - agent: upstream model access and error classification
    - client: throttled, timeout-guarded chat clients yielding text chunks
    - ui: conversation state, display formatting and the chat page
    - models: request/response and stream session schemas
"""

__version__ = "0.1.0"
