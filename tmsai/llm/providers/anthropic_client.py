"""Anthropic messages provider."""

import logging
from typing import Any, Iterator

from tmsai.llm.errors import ProviderCallFailed
from tmsai.llm.providers.base import ProviderClient

try:
    import anthropic
except ImportError:
    anthropic = None

logger = logging.getLogger(__name__)


class AnthropicProvider(ProviderClient):
    """Client for the Anthropic messages API."""

    name = "anthropic"

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-3-sonnet-20240229",
        max_tokens: int = 1000,
        temperature: float = 0.7,
        timeout: int = 60,
    ) -> None:
        super().__init__(model, max_tokens, temperature, timeout)
        if anthropic is None:
            self._mark_unavailable("anthropic package required. Install with: pip install anthropic")
            return
        if not api_key:
            self._mark_unavailable("Anthropic API key not found")
            return
        try:
            self._client = anthropic.Anthropic(api_key=api_key, timeout=timeout)
        except anthropic.AnthropicError as e:
            logger.error("Failed to initialize Anthropic client: %s", e)
            self._mark_unavailable(str(e))

    def _request(self, prompt: str, context: Any) -> dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "system": self.build_system_prompt(context),
            "messages": [{"role": "user", "content": prompt}],
        }

    def generate(self, prompt: str, context: Any = None) -> str:
        client = self._require_client()
        try:
            response = client.messages.create(**self._request(prompt, context))
        except anthropic.AnthropicError as e:
            logger.error("Anthropic API error: %s", e)
            raise ProviderCallFailed(self.name) from e
        return "".join(block.text for block in response.content if block.type == "text")

    def stream(self, prompt: str, context: Any = None) -> Iterator[str]:
        client = self._require_client()
        try:
            with client.messages.stream(**self._request(prompt, context)) as events:
                for text in events.text_stream:
                    if text:
                        yield text
        except anthropic.AnthropicError as e:
            logger.error("Anthropic stream error: %s", e)
            raise ProviderCallFailed(self.name, "stream") from e
