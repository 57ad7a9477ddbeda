"""Unit tests for chat client selection."""

from unittest.mock import patch

from relaychat.agent.chat_agent import ModelStatus
from relaychat.client.config import ClientConfig
from relaychat.client.direct import DirectChatClient
from relaychat.client.factory import create_chat_client
from relaychat.client.relay import RelayChatClient
from tests.conftest import FakeModelService


class TestCreateChatClient:
    """Tests for create_chat_client."""

    async def test_relay_mode(self, client_config: ClientConfig) -> None:
        """Relay mode builds the HTTP client."""
        client = create_chat_client("relay", client_config)

        assert isinstance(client, RelayChatClient)
        await client.aclose()

    async def test_mode_from_environment(self, client_config: ClientConfig) -> None:
        """CHAT_MODE picks the mode when none is passed."""
        with patch.dict("os.environ", {"CHAT_MODE": "RELAY"}):
            client = create_chat_client(config=client_config)

        assert isinstance(client, RelayChatClient)
        await client.aclose()

    @patch("relaychat.client.factory.initialize_model_service")
    async def test_direct_mode_with_ready_model(
        self, mock_init, client_config: ClientConfig
    ) -> None:
        """Direct mode wraps the initialized model service."""
        service = FakeModelService()
        mock_init.return_value = ModelStatus(ready=True, service=service)

        client = create_chat_client("direct", client_config)

        assert isinstance(client, DirectChatClient)
        assert client._service is service
        assert client.config is client_config

    @patch("relaychat.client.factory.initialize_model_service")
    async def test_direct_mode_falls_back_to_relay(
        self, mock_init, client_config: ClientConfig
    ) -> None:
        """Without a usable model the relay client is returned."""
        mock_init.return_value = ModelStatus(ready=False, reason="API key not configured")

        client = create_chat_client("direct", client_config)

        assert isinstance(client, RelayChatClient)
        await client.aclose()

    async def test_unknown_mode_uses_relay(self, client_config: ClientConfig) -> None:
        """An unrecognized mode is treated as relay."""
        client = create_chat_client("carrier-pigeon", client_config)

        assert isinstance(client, RelayChatClient)
        await client.aclose()
