"""Unit tests for individual components in isolation.

Ensures fast execution with minimal dependencies.

Coverage:
    - agent/: Model configuration, error classification, Agno wrapper
    - client/: Throttle, relay client, direct client
    - ui/: Display formatting and conversation controller
    - models/: Pydantic validation and stream session behavior

Uses fakes and mocks for the network and the model. Leverages pytest-check
for multiple assertions per test.
"""
