"""Agno-backed access to the upstream Gemini model.

Wraps Agno's Agent so the relay and the direct client see a small,
stable interface: stream fragments of text for a prompt, or fetch the whole
completion at once. Provider failures are normalized into UpstreamError /
RateLimitError so callers never depend on Agno or google-genai exception types.

Each prompt is a single-turn request. No storage is attached to the agents,
so nothing outlives the process.
"""

import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass

from agno.agent import Agent
from agno.models.google import Gemini

from relaychat.agent.config import ModelConfig, get_model_config
from relaychat.agent.errors import UpstreamError, classify_upstream_error

logger = logging.getLogger(__name__)

_CONTENT_EVENT = "RunContent"
_ERROR_EVENT = "RunError"


def _is_error_status(status: object) -> bool:
    value = getattr(status, "value", status)
    return isinstance(value, str) and value.lower() == "error"


class ModelService:
    """Service for calling the Gemini model through Agno.

    Agents are built lazily, one per model name, so the fallback model
    costs nothing until it is first needed.
    """

    def __init__(self, config: ModelConfig | None = None) -> None:
        """Initialize the model service.

        Args:
            config: Optional model configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_model_config()
        self._agents: dict[str, Agent] = {}

    @property
    def config(self) -> ModelConfig:
        return self._config

    @property
    def model_name(self) -> str:
        return self._config.model_name

    def _create_agent(self, model_name: str) -> Agent:
        """Create an Agno agent for one Gemini model.

        Args:
            model_name: Gemini model identifier.

        Returns:
            Agent configured with the generation parameters from config.
        """
        model = Gemini(
            id=model_name,
            api_key=self._config.api_key,
            temperature=self._config.temperature,
            top_p=self._config.top_p,
            top_k=self._config.top_k,
            max_output_tokens=self._config.max_output_tokens,
        )
        return Agent(
            model=model,
            description="A helpful, concise assistant.",
            # Output as markdown; the UI renders **bold** and line breaks
            markdown=True,
        )

    def _get_agent(self, model_name: str | None) -> Agent:
        name = model_name or self._config.model_name
        if name not in self._agents:
            logger.debug(f"Creating agent for model {name}")
            self._agents[name] = self._create_agent(name)
        return self._agents[name]

    async def stream(
        self,
        prompt: str,
        model_name: str | None = None,
    ) -> AsyncGenerator[str]:
        """Stream response fragments for a prompt.

        Args:
            prompt: The user's prompt.
            model_name: Model to use. Defaults to the configured primary.

        Yields:
            Text fragments as they arrive.

        Raises:
            UpstreamError: If the model call fails (RateLimitError for quota).
        """
        agent = self._get_agent(model_name)
        try:
            async for event in agent.arun(prompt, stream=True):
                kind = getattr(event, "event", _CONTENT_EVENT)
                if kind == _ERROR_EVENT:
                    message = str(getattr(event, "content", "") or "Model run failed")
                    raise classify_upstream_error(UpstreamError(message))
                if kind != _CONTENT_EVENT:
                    continue
                content = getattr(event, "content", None)
                if isinstance(content, str) and content:
                    yield content
        except UpstreamError:
            raise
        except Exception as e:
            raise classify_upstream_error(e) from e

    async def generate(self, prompt: str, model_name: str | None = None) -> str:
        """Get the complete response for a prompt.

        Args:
            prompt: The user's prompt.
            model_name: Model to use. Defaults to the configured primary.

        Returns:
            Complete response text.

        Raises:
            UpstreamError: If the model call fails (RateLimitError for quota).
        """
        agent = self._get_agent(model_name)
        try:
            response = await agent.arun(prompt)
        except Exception as e:
            raise classify_upstream_error(e) from e

        if _is_error_status(getattr(response, "status", None)):
            raise classify_upstream_error(
                UpstreamError(str(response.content or "Model run failed"))
            )
        content = response.content
        return content if isinstance(content, str) else str(content or "")


@dataclass(frozen=True)
class ModelStatus:
    """Outcome of the one-time model service initialization.

    Attributes:
        ready: Whether the service can take requests.
        reason: Why the service is unavailable, if it is.
        service: The initialized service when ready.
    """

    ready: bool
    reason: str | None = None
    service: ModelService | None = None


def initialize_model_service(config: ModelConfig | None = None) -> ModelStatus:
    """Build the model service once at startup.

    A missing API key or an unusable configuration yields an unavailable
    status rather than an exception, so the app can still start and report
    the reason.

    Args:
        config: Optional model configuration. Loads from environment if not provided.

    Returns:
        ModelStatus describing readiness.
    """
    try:
        service = ModelService(config=config or get_model_config())
    except ValueError as e:
        reason = "API key not configured" if "API key" in str(e) else "invalid model configuration"
        logger.warning(f"Model service unavailable: {reason}")
        return ModelStatus(ready=False, reason=reason)

    logger.info(f"Model service ready (model={service.model_name})")
    return ModelStatus(ready=True, service=service)
