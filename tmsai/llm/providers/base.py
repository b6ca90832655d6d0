"""Common shape of a text-generation provider."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterator

from tmsai.llm.errors import ProviderUnavailable
from tmsai.llm.prompt_manager import format_prompt, to_json

logger = logging.getLogger(__name__)


class ProviderClient(ABC):
    """
    Send a prompt to a remote model and return its text.

    Construction never fails on a missing credential: the client is marked
    unavailable and every call raises ``ProviderUnavailable`` instead.
    """

    name = "provider"

    def __init__(
        self,
        model: str,
        max_tokens: int = 1000,
        temperature: float = 0.7,
        timeout: int = 60,
    ) -> None:
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout
        self._client: Any = None
        self._unavailable_reason: str | None = None

    @property
    def available(self) -> bool:
        return self._client is not None

    def _mark_unavailable(self, reason: str) -> None:
        self._unavailable_reason = reason
        logger.warning("%s provider will not be available: %s", self.name, reason)

    def _require_client(self) -> Any:
        if self._client is None:
            raise ProviderUnavailable(self.name, self._unavailable_reason)
        return self._client

    def build_system_prompt(self, context: Any = None) -> str:
        return format_prompt("system", context=to_json(context or {}))

    @abstractmethod
    def generate(self, prompt: str, context: Any = None) -> str:
        """Return the complete reply to prompt."""

    @abstractmethod
    def stream(self, prompt: str, context: Any = None) -> Iterator[str]:
        """Yield the reply to prompt as text chunks."""
