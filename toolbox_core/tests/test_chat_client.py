import httpx

from toolbox_core.chat.client import ChatClient
from toolbox_core.domain.exceptions import ProviderError, TransportFailure
from toolbox_core.domain.models import Message, ProviderConfig
from toolbox_core.providers.anthropic_client import AnthropicClient


class StubProvider:
    name = "openai"
    display_name = "OpenAI"

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def complete(self, history, system_prompt=None):
        self.calls.append((list(history), system_prompt))
        if self.error is not None:
            raise self.error
        return self.reply


CONFIG = ProviderConfig(provider="openai", model="gpt-3.5-turbo")


def test_send_success():
    provider = StubProvider(reply="hello there")
    client = ChatClient(provider, CONFIG)
    history = [Message.create("user", "hi")]
    result = client.send(history, "be nice")
    assert result.ok
    assert result.text == "hello there"
    assert result.display_text == "hello there"
    assert provider.calls == [(history, "be nice")]


def test_send_provider_error_becomes_failed_result():
    err = ProviderError(code="API_ERROR", message="Invalid API key", http_status=401)
    client = ChatClient(StubProvider(error=err), CONFIG)
    result = client.send([Message.create("user", "hi")])
    assert not result.ok
    assert result.error is err
    assert result.display_text == "Error: Invalid API key"


def test_send_transport_failure_becomes_failed_result():
    err = TransportFailure(code="NETWORK_ERROR", message="Name or service not known")
    client = ChatClient(StubProvider(error=err), CONFIG)
    result = client.send([Message.create("user", "hi")])
    assert isinstance(result.error, TransportFailure)
    assert result.display_text == "Error: Name or service not known"


def test_provider_and_model_names():
    client = ChatClient(StubProvider(), CONFIG)
    assert client.provider_name == "OpenAI"
    assert client.model_name == "gpt-3.5-turbo"


def test_send_end_to_end_network_failure(fake_http):
    captured = fake_http(error=httpx.ConnectError("offline"))

    class SettingsStub:
        anthropic_api_key = "sk-ant"
        anthropic_base_url = "https://api.anthropic.com/v1"
        http_timeout = None

    config = ProviderConfig(provider="anthropic", model="claude-3-haiku-20240307")
    client = ChatClient(AnthropicClient(config, SettingsStub()), config)
    result = client.send([Message.create("user", "hi")])
    assert captured["calls"] == 1
    assert result.display_text == "Error: offline"


def test_from_settings_selects_provider():
    class SettingsStub:
        gemini_api_key = "your_gemini_api_key_here"
        gemini_model = None
        openai_api_key = None
        openai_model = None
        anthropic_api_key = "sk-ant"
        anthropic_model = None

    client = ChatClient.from_settings(SettingsStub())
    assert client.provider_name == "Anthropic"
    assert client.model_name == "claude-3-haiku-20240307"
