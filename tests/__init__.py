"""Test package for Relay Chat.

Provides coverage for all components with unit tests for isolated logic
and integration tests for the relay and the client talking to it.

Structure:
    - unit/: Individual function and class tests
    - integration/: Relay endpoint and client-to-relay workflows

The upstream model is always replaced by a scripted fake; no API key is needed.
Leverages pytest with pytest-check for soft assertions.
"""
