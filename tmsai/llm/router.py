"""Route prompts to a named provider."""

import logging
from typing import Any, Iterator

from tmsai.llm.errors import UnknownModelError
from tmsai.llm.providers import AnthropicProvider, OllamaClient, OpenAIProvider, ProviderClient

logger = logging.getLogger(__name__)

PROVIDER_TYPES: dict[str, type[ProviderClient]] = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
    "ollama": OllamaClient,
}


def create_provider(settings: dict[str, Any]) -> ProviderClient:
    """Build a provider from one entry of the ``providers`` config section."""
    options = dict(settings)
    ptype = options.pop("type", None)
    if ptype not in PROVIDER_TYPES:
        raise ValueError(f"Unknown provider type: {ptype!r} (expected one of {sorted(PROVIDER_TYPES)})")
    return PROVIDER_TYPES[ptype](**options)


class ModelRouter:
    """Registry of model name -> provider client."""

    def __init__(self, providers: dict[str, ProviderClient] | None = None, default_model: str = "gpt4") -> None:
        self._providers: dict[str, ProviderClient] = dict(providers or {})
        self.default_model = default_model

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "ModelRouter":
        providers = {name: create_provider(settings) for name, settings in config.get("providers", {}).items()}
        default_model = config.get("routing", {}).get("default_model", "gpt4")
        return cls(providers, default_model)

    def register(self, name: str, provider: ProviderClient) -> None:
        self._providers[name] = provider

    def get(self, model: str | None = None) -> ProviderClient:
        model = model or self.default_model
        provider = self._providers.get(model)
        if provider is None:
            raise UnknownModelError(model, self.available_models())
        return provider

    def route(self, prompt: str, model: str | None = None, context: Any = None) -> str:
        return self.get(model).generate(prompt, context)

    def route_stream(self, prompt: str, model: str | None = None, context: Any = None) -> Iterator[str]:
        provider = self.get(model)
        yield from provider.stream(prompt, context)

    def available_models(self) -> list[str]:
        return list(self._providers)

    def is_available(self, model: str) -> bool:
        provider = self._providers.get(model)
        return provider is not None and provider.available
