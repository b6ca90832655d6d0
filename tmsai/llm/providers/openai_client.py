"""OpenAI chat-completions provider."""

import logging
from typing import Any, Iterator

from tmsai.llm.errors import ProviderCallFailed
from tmsai.llm.providers.base import ProviderClient

try:
    import openai
except ImportError:
    openai = None

logger = logging.getLogger(__name__)


class OpenAIProvider(ProviderClient):
    """Client for the OpenAI chat completions API."""

    name = "openai"

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4",
        max_tokens: int = 1000,
        temperature: float = 0.7,
        timeout: int = 60,
        base_url: str | None = None,
    ) -> None:
        super().__init__(model, max_tokens, temperature, timeout)
        if openai is None:
            self._mark_unavailable("openai package required. Install with: pip install openai")
            return
        if not api_key:
            self._mark_unavailable("OpenAI API key not found")
            return
        try:
            self._client = openai.OpenAI(api_key=api_key, base_url=base_url, timeout=timeout)
        except openai.OpenAIError as e:
            logger.error("Failed to initialize OpenAI client: %s", e)
            self._mark_unavailable(str(e))

    def _messages(self, prompt: str, context: Any) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": self.build_system_prompt(context)},
            {"role": "user", "content": prompt},
        ]

    def generate(self, prompt: str, context: Any = None) -> str:
        client = self._require_client()
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=self._messages(prompt, context),
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except openai.OpenAIError as e:
            logger.error("OpenAI API error: %s", e)
            raise ProviderCallFailed(self.name) from e
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    def stream(self, prompt: str, context: Any = None) -> Iterator[str]:
        client = self._require_client()
        try:
            chunks = client.chat.completions.create(
                model=self.model,
                messages=self._messages(prompt, context),
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                stream=True,
            )
            for chunk in chunks:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        except openai.OpenAIError as e:
            logger.error("OpenAI stream error: %s", e)
            raise ProviderCallFailed(self.name, "stream") from e
