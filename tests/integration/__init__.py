"""Integration tests for components working together as a system.

Coverage:
    - Relay endpoint with real HTTP requests through ASGITransport
    - RelayChatClient streaming from the actual FastAPI app
    - ConversationController driven end to end through the relay

Only the upstream model is faked.
"""
