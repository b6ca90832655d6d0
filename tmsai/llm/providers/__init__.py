"""Model provider clients."""

from tmsai.llm.providers.base import ProviderClient
from tmsai.llm.providers.anthropic_client import AnthropicProvider
from tmsai.llm.providers.ollama_client import OllamaClient
from tmsai.llm.providers.openai_client import OpenAIProvider

__all__ = ["ProviderClient", "AnthropicProvider", "OllamaClient", "OpenAIProvider"]
