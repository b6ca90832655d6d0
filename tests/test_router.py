"""Tests for model routing."""

import pytest

from tmsai.llm.errors import ProviderUnavailable, UnknownModelError
from tmsai.llm.providers import AnthropicProvider, OllamaClient, OpenAIProvider
from tmsai.llm.router import ModelRouter, create_provider


def test_route_uses_default_model(router, provider):
    assert router.route("hello") == "ok"
    assert provider.calls == [("hello", None)]


def test_route_passes_context(router, provider):
    router.route("hello", "fake", {"org": "org-1"})
    assert provider.calls[-1][1] == {"org": "org-1"}


def test_route_stream(router):
    assert "".join(router.route_stream("hi", "fake")) == "Hello"


def test_unknown_model_lists_available(router):
    with pytest.raises(UnknownModelError) as exc:
        router.route("hi", "gpt5")
    assert exc.value.model == "gpt5"
    assert "fake" in str(exc.value)


def test_route_stream_unknown_model_raises_on_iteration(router):
    stream = router.route_stream("hi", "nope")
    with pytest.raises(UnknownModelError):
        next(stream)


def test_register_and_is_available(router, provider):
    router.register("other", OpenAIProvider(api_key=None))
    assert router.available_models() == ["fake", "other"]
    assert router.is_available("fake")
    assert not router.is_available("other")
    assert not router.is_available("missing")
    with pytest.raises(ProviderUnavailable):
        router.route("hi", "other")


def test_create_provider_by_type():
    assert isinstance(create_provider({"type": "openai", "model": "gpt-4"}), OpenAIProvider)
    assert isinstance(create_provider({"type": "anthropic"}), AnthropicProvider)
    assert isinstance(create_provider({"type": "ollama", "model": "llama3:8b"}), OllamaClient)


def test_create_provider_unknown_type():
    with pytest.raises(ValueError):
        create_provider({"type": "bard"})


def test_from_config_builds_every_provider():
    config = {
        "providers": {
            "gpt4": {"type": "openai", "model": "gpt-4"},
            "claude": {"type": "anthropic", "model": "claude-3-sonnet-20240229"},
        },
        "routing": {"default_model": "claude"},
    }
    router = ModelRouter.from_config(config)
    assert router.default_model == "claude"
    assert router.available_models() == ["gpt4", "claude"]
    assert router.get("gpt4").model == "gpt-4"
    # no api keys configured
    assert not router.is_available("gpt4")
