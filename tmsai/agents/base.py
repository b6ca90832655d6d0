"""Shared request/extract cycle for every agent."""

import logging
from datetime import datetime, timezone
from typing import Any, TypeVar

from tmsai.agents.errors import AgentContextError, AgentError
from tmsai.config import get_config
from tmsai.llm.errors import ProviderError
from tmsai.llm.json_extractor import ExtractionResult, ResponseParser
from tmsai.llm.prompt_manager import format_prompt
from tmsai.service.ai_service import AIService
from tmsai.service.context import TMSContext
from tmsai.service.errors import ContextError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class BaseAgent:
    """
    Build a prompt, ask the assistant service, extract a typed reply.

    Service failures surface as ``AgentError``; unusable replies resolve to
    the operation's fallback. ``last_extraction`` records whether the most
    recent reply was genuine or a fallback.
    """

    role = "AI Agent"

    def __init__(
        self,
        service: AIService,
        parser: ResponseParser | None = None,
        model: str | None = None,
    ) -> None:
        self.service = service
        self.parser = parser or ResponseParser.from_config(get_config())
        self.model = model
        self.context: TMSContext | None = None
        self.last_extraction: ExtractionResult | None = None
        self.limits = get_config().get("prompts", {}).get("truncate", {})

    def set_context(self, context: TMSContext) -> None:
        self.context = context

    def _require_context(self) -> TMSContext:
        if self.context is None:
            raise AgentContextError()
        return self.context

    def _limit(self, name: str, default: int) -> int:
        return int(self.limits.get(name, default))

    def _prompt(self, template: str, **kwargs: Any) -> str:
        return format_prompt(template, role=self.role, **kwargs)

    def _chat(self, prompt: str, operation: str) -> str:
        context = self._require_context()
        try:
            return self.service.chat(prompt, context.user.id, self.model)
        except (ProviderError, ContextError) as e:
            logger.error("%s: %s failed: %s", type(self).__name__, operation, e)
            raise AgentError(operation) from e

    def _ask(
        self,
        prompt: str,
        operation: str,
        fallback: Any,
        shape: Any = None,
        array: bool = False,
    ) -> Any:
        """Send prompt and extract a reply; fallback may be a callable of the raw text."""
        response = self._chat(prompt, operation)
        if callable(fallback):
            fallback = fallback(response)
        self.last_extraction = self.parser.extract_result(response, fallback, shape=shape, array=array)
        return self.last_extraction.value


def range_bounds(time_range: Any) -> tuple[str, str]:
    """(start, end) from a TimeRange or a {"start", "end"} mapping."""
    if isinstance(time_range, dict):
        return str(time_range.get("start", "")), str(time_range.get("end", ""))
    return str(time_range.start), str(time_range.end)
