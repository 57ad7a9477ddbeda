"""Pytest fixtures and shared test configuration.

Provides reusable fakes and fixtures for unit and integration tests.

Fixtures:
    - clock: Manually advanced clock for throttle timing
    - fake_service: Scripted stand-in for the Agno model service
    - app: FastAPI relay wired to the fake service
    - async_client: HTTPX client for API testing
    - client_config: Client configuration independent of the environment
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from relaychat.agent.chat_agent import ModelStatus
from relaychat.api.app import create_app
from relaychat.client.config import ClientConfig

PRIMARY_MODEL = "gemini-primary"
FALLBACK_MODEL = "gemini-fallback"


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeModelService:
    """Scripted replacement for ModelService.

    Attributes:
        chunks: Fragments yielded by stream().
        stream_error: Raised before the first fragment when set.
        fail_after: Number of fragments to yield before raising mid_stream_error.
        outcomes: Per-model queue of generate() results (str or exception).
        calls: (prompt, model_name) for every call made.
    """

    def __init__(self, chunks: list[str] | None = None) -> None:
        self.chunks = list(chunks or [])
        self.stream_error: Exception | None = None
        self.fail_after: int | None = None
        self.mid_stream_error: Exception | None = None
        self.outcomes: dict[str | None, list[str | Exception]] = {}
        self.calls: list[tuple[str, str | None]] = []
        self.model_name = PRIMARY_MODEL

    async def stream(self, prompt: str, model_name: str | None = None) -> AsyncGenerator[str]:
        self.calls.append((prompt, model_name))
        if self.stream_error is not None:
            raise self.stream_error
        for index, chunk in enumerate(self.chunks):
            if self.fail_after is not None and index == self.fail_after:
                raise self.mid_stream_error or RuntimeError("upstream dropped")
            yield chunk

    async def generate(self, prompt: str, model_name: str | None = None) -> str:
        self.calls.append((prompt, model_name))
        outcome = self.outcomes[model_name].pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def clock() -> FakeClock:
    """Return a clock frozen until advanced."""
    return FakeClock()


@pytest.fixture
def fake_service() -> FakeModelService:
    """Return a model service fake streaming a short bold answer."""
    return FakeModelService(["**Hi** there", ", how can", " I help?"])


@pytest.fixture
def client_config() -> ClientConfig:
    """Return client configuration with explicit defaults.

    Returns:
        ClientConfig that does not depend on environment variables.
    """
    return ClientConfig(
        api_base_url="http://test",
        chat_path="/api/chat",
        request_timeout_ms=30000,
        throttle_ms=1000,
        model_name=PRIMARY_MODEL,
        fallback_model=FALLBACK_MODEL,
        auto_retry_on_quota=False,
    )


@pytest.fixture
def app(fake_service: FakeModelService) -> FastAPI:
    """Create the relay app backed by the fake model service."""
    return create_app(model_status=ModelStatus(ready=True, service=fake_service))


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
