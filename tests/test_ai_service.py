"""Tests for the assistant service."""

import logging

import pytest

from tmsai.llm.errors import ProviderCallFailed, UnknownModelError
from tmsai.service.ai_service import AIService, create_ai_service
from tmsai.service.cache import ResponseCache
from tmsai.service.context import TMSContext
from tmsai.service.errors import StoreError
from tmsai.service.store import InMemoryStore


def test_chat_returns_reply_and_passes_context(service, provider):
    assert service.chat("What is due?", "user-1") == "ok"
    prompt, context = provider.calls[0]
    assert prompt == "What is due?"
    assert isinstance(context, TMSContext)
    assert context.user.organization == "org-1"


def test_chat_saves_conversation(service, store):
    service.chat("hi", "user-1")
    saved = store.records["ai_conversations"]
    assert len(saved) == 1
    assert saved[0]["user_id"] == "user-1"
    assert saved[0]["message"] == "hi"
    assert saved[0]["response"] == "ok"
    assert saved[0]["model"] == "fake"
    assert saved[0]["timestamp"]


def test_repeated_message_served_from_cache(service, provider, store):
    service.chat("hi", "user-1")
    provider.reply = "changed"
    assert service.chat("hi", "user-1") == "ok"
    assert len(provider.calls) == 1
    assert len(store.records["ai_conversations"]) == 1


def test_clear_cache_forces_new_call(service, provider):
    service.chat("hi", "user-1")
    service.clear_cache()
    provider.reply = "fresh"
    assert service.chat("hi", "user-1") == "fresh"


def test_stream_saves_once_exhausted(service, store):
    stream = service.chat_stream("hi", "user-1")
    assert next(stream) == "Hel"
    assert "ai_conversations" not in store.records
    assert list(stream) == ["lo"]
    assert store.records["ai_conversations"][0]["response"] == "Hello"


def test_save_failure_is_logged_not_raised(router, sample_records, caplog):
    class ReadOnlyStore(InMemoryStore):
        def insert(self, table, row):
            raise StoreError("insert", table)

    service = AIService(router, ReadOnlyStore(sample_records))
    with caplog.at_level(logging.ERROR):
        assert service.chat("hi", "user-1") == "ok"
    assert "Error saving conversation" in caplog.text


def test_provider_failure_propagates_uncached(service, provider):
    def boom(prompt, context=None):
        raise ProviderCallFailed("fake")

    provider.generate = boom
    with pytest.raises(ProviderCallFailed):
        service.chat("hi", "user-1")
    assert len(service.cache) == 0


def test_unknown_model(service):
    with pytest.raises(UnknownModelError):
        service.chat("hi", "user-1", model="gpt9")


def test_get_context_and_models(service):
    assert service.get_context() is None
    service.chat("hi", "user-1")
    assert service.get_context().user.id == "user-1"
    assert service.available_models() == ["fake"]


def test_create_ai_service_from_config():
    config = {
        "providers": {"local": {"type": "ollama", "model": "llama3:8b"}},
        "routing": {"default_model": "local"},
        "cache": {"ttl_seconds": 10},
        "store": {"url": "", "key": ""},
    }
    service = create_ai_service(config)
    assert service.available_models() == ["local"]
    assert service.router.default_model == "local"
    assert service.cache.ttl_seconds == 10
    assert isinstance(service.store, InMemoryStore)


def test_empty_cache_passed_in_is_kept(router, store, provider, context_manager):
    now = [0.0]
    cache = ResponseCache(ttl_seconds=10, clock=lambda: now[0])
    service = AIService(router, store, cache=cache, context_manager=context_manager)
    assert service.cache is cache
    assert service.context_manager is context_manager

    service.chat("Fleet status?", "user-1")
    now[0] = 5
    service.chat("Fleet status?", "user-1")
    assert len(provider.calls) == 1
    now[0] = 11
    service.chat("Fleet status?", "user-1")
    assert len(provider.calls) == 2
