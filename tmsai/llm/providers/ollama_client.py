"""Ollama client for locally served models."""

import logging
from typing import Any, Iterator

from tmsai.llm.errors import ProviderCallFailed
from tmsai.llm.providers.base import ProviderClient

try:
    import httpx
    import ollama
except ImportError:
    httpx = None
    ollama = None

logger = logging.getLogger(__name__)


class OllamaClient(ProviderClient):
    """Client for the Ollama chat API. Needs no credential, only a reachable server."""

    name = "ollama"

    def __init__(
        self,
        model: str = "llama3:8b",
        base_url: str = "http://localhost:11434",
        timeout: int = 60,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> None:
        super().__init__(model, max_tokens, temperature, timeout)
        self.base_url = base_url
        if ollama is None:
            self._mark_unavailable("ollama package required. Install with: pip install ollama")
            return
        self._client = ollama.Client(host=self.base_url, timeout=self.timeout)

    @staticmethod
    def _call_errors() -> tuple[type[BaseException], ...]:
        # httpx timeouts and transport errors pass through the SDK unwrapped
        return (ollama.ResponseError, ollama.RequestError, httpx.HTTPError, ConnectionError)

    def _options(self) -> dict[str, Any]:
        options: dict[str, Any] = {}
        if self.max_tokens is not None:
            options["num_predict"] = self.max_tokens
        if self.temperature is not None:
            options["temperature"] = self.temperature
        return options

    def _messages(self, prompt: str, context: Any) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": self.build_system_prompt(context)},
            {"role": "user", "content": prompt},
        ]

    def generate(self, prompt: str, context: Any = None) -> str:
        client = self._require_client()
        try:
            response = client.chat(
                model=self.model,
                messages=self._messages(prompt, context),
                options=self._options() or None,
            )
        except self._call_errors() as e:
            logger.error("Ollama error: %s", e)
            raise ProviderCallFailed(self.name) from e
        return response["message"]["content"]

    def stream(self, prompt: str, context: Any = None) -> Iterator[str]:
        client = self._require_client()
        try:
            for chunk in client.chat(
                model=self.model,
                messages=self._messages(prompt, context),
                options=self._options() or None,
                stream=True,
            ):
                content = chunk["message"]["content"]
                if content:
                    yield content
        except self._call_errors() as e:
            logger.error("Ollama stream error: %s", e)
            raise ProviderCallFailed(self.name, "stream") from e
