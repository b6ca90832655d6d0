"""Tests for Ollama client (mocked)."""

from unittest.mock import MagicMock, patch

import pytest

pytest.importorskip("ollama")

from tmsai.llm.errors import ProviderCallFailed


@patch("tmsai.llm.providers.ollama_client.ollama")
def test_ollama_client_generate_mock(mock_ollama):
    """Ollama client sends the prompt and returns the reply text."""
    mock_client = MagicMock()
    mock_client.chat.return_value = {"message": {"content": "Hello"}}
    mock_ollama.Client.return_value = mock_client

    from tmsai.llm.providers.ollama_client import OllamaClient

    client = OllamaClient(max_tokens=200, temperature=0.1)
    assert client.available
    assert client.generate("test prompt") == "Hello"
    kwargs = mock_client.chat.call_args.kwargs
    assert kwargs["model"] == "llama3:8b"
    assert kwargs["options"] == {"num_predict": 200, "temperature": 0.1}
    assert kwargs["messages"][1] == {"role": "user", "content": "test prompt"}
    mock_ollama.Client.assert_called_once_with(host="http://localhost:11434", timeout=60)


@patch("tmsai.llm.providers.ollama_client.ollama")
def test_ollama_client_stream_mock(mock_ollama):
    mock_client = MagicMock()
    mock_client.chat.return_value = iter([
        {"message": {"content": "Hel"}},
        {"message": {"content": ""}},
        {"message": {"content": "lo"}},
    ])
    mock_ollama.Client.return_value = mock_client

    from tmsai.llm.providers.ollama_client import OllamaClient

    assert list(OllamaClient().stream("hi")) == ["Hel", "lo"]
    assert mock_client.chat.call_args.kwargs["options"] is None


@patch("tmsai.llm.providers.ollama_client.ollama")
def test_ollama_connection_error_becomes_call_failed(mock_ollama):
    mock_ollama.ResponseError = type("ResponseError", (Exception,), {})
    mock_ollama.RequestError = type("RequestError", (Exception,), {})
    mock_client = MagicMock()
    mock_client.chat.side_effect = ConnectionError("refused")
    mock_ollama.Client.return_value = mock_client

    from tmsai.llm.providers.ollama_client import OllamaClient

    with pytest.raises(ProviderCallFailed) as exc:
        OllamaClient().generate("hi")
    assert exc.value.provider == "ollama"


def test_ollama_read_timeout_becomes_call_failed():
    httpx = pytest.importorskip("httpx")
    from tmsai.llm.providers.ollama_client import OllamaClient

    client = OllamaClient(timeout=1)
    with patch.object(client._client, "chat", side_effect=httpx.ReadTimeout("timed out")):
        with pytest.raises(ProviderCallFailed) as exc:
            client.generate("hi")
    assert isinstance(exc.value.__cause__, httpx.ReadTimeout)


def test_ollama_transport_error_in_stream_becomes_call_failed():
    httpx = pytest.importorskip("httpx")
    from tmsai.llm.providers.ollama_client import OllamaClient

    client = OllamaClient()
    with patch.object(client._client, "chat", side_effect=httpx.ConnectError("refused")):
        with pytest.raises(ProviderCallFailed) as exc:
            list(client.stream("hi"))
    assert exc.value.operation == "stream"


def test_agent_wraps_ollama_timeout(service, context):
    httpx = pytest.importorskip("httpx")
    from tmsai.agents import FleetManagementAgent
    from tmsai.agents.errors import AgentError
    from tmsai.llm.providers.ollama_client import OllamaClient

    local = OllamaClient()
    service.router.register("local", local)
    agent = FleetManagementAgent(service, model="local")
    agent.set_context(context)
    with patch.object(local._client, "chat", side_effect=httpx.ReadTimeout("timed out")):
        with pytest.raises(AgentError) as exc:
            agent.analyze_fuel_efficiency([{"id": "v1"}], {"start": "2025-05-01", "end": "2025-05-31"})
    assert isinstance(exc.value.__cause__, ProviderCallFailed)
