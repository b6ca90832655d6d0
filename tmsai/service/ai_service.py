"""Chat entry point shared by every agent."""

import logging
from datetime import datetime, timezone
from typing import Any, Iterator

from tmsai.config import get_config
from tmsai.llm.router import ModelRouter
from tmsai.service.cache import ResponseCache
from tmsai.service.context import ContextManager, TMSContext
from tmsai.service.errors import StoreError
from tmsai.service.store import DataStore, create_store

logger = logging.getLogger(__name__)


class AIService:
    """
    Answer a user's message with the configured model.

    Each call rebuilds the user's context from the data store, serves a
    cached reply when the same user sent the same message to the same
    model recently, and logs the exchange to the store. Provider and
    context failures propagate; logging failures do not.
    """

    def __init__(
        self,
        router: ModelRouter,
        store: DataStore,
        cache: ResponseCache | None = None,
        context_manager: ContextManager | None = None,
    ) -> None:
        self.router = router
        self.store = store
        self.cache = cache if cache is not None else ResponseCache()
        self.context_manager = context_manager if context_manager is not None else ContextManager(store)

    def chat(self, message: str, user_id: str, model: str | None = None) -> str:
        model = model or self.router.default_model
        context = self.context_manager.build_context(user_id)

        cache_key = ResponseCache.make_key(user_id, message, model)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Cache hit for user %s on %s", user_id, model)
            return cached

        response = self.router.route(message, model, context)
        self.cache.set(cache_key, response)
        self._save_conversation(user_id, message, response, model)
        return response

    def chat_stream(self, message: str, user_id: str, model: str | None = None) -> Iterator[str]:
        """Yield reply chunks; the full reply is logged once the stream is exhausted."""
        model = model or self.router.default_model
        context = self.context_manager.build_context(user_id)
        parts: list[str] = []
        for chunk in self.router.route_stream(message, model, context):
            parts.append(chunk)
            yield chunk
        self._save_conversation(user_id, message, "".join(parts), model)

    def _save_conversation(self, user_id: str, message: str, response: str, model: str) -> None:
        try:
            self.store.insert("conversations", {
                "user_id": user_id,
                "message": message,
                "response": response,
                "model": model,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            })
        except StoreError as e:
            logger.error("Error saving conversation: %s", e)

    def get_context(self) -> TMSContext | None:
        return self.context_manager.get_context()

    def clear_cache(self) -> None:
        self.cache.clear()

    def available_models(self) -> list[str]:
        return self.router.available_models()


def create_ai_service(config: dict[str, Any] | None = None, store: DataStore | None = None) -> AIService:
    """Build the service graph once at start-up; pass the result to consumers."""
    config = config if config is not None else get_config()
    router = ModelRouter.from_config(config)
    cache = ResponseCache(config.get("cache", {}).get("ttl_seconds", 300))
    return AIService(router, store or create_store(config), cache)
