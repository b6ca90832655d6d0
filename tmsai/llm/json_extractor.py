"""Extract and validate JSON from LLM responses.

Model replies are free text: a JSON payload may be wrapped in prose, in a
markdown fence, or missing altogether. ``ResponseParser`` locates the
payload, validates it against the expected shape and otherwise hands back
the caller's fallback, so a prose reply never breaks a user-facing flow.
"""

import json
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

BALANCED = "balanced"
GREEDY = "greedy"
STRATEGIES = (BALANCED, GREEDY)

NO_JSON = "no_json"
MALFORMED_JSON = "malformed_json"
SCHEMA_MISMATCH = "schema_mismatch"

_CLOSERS = {"{": "}", "[": "]"}
_GREEDY_PATTERNS = {
    "{": re.compile(r"\{[\s\S]*\}"),
    "[": re.compile(r"\[[\s\S]*\]"),
}


@dataclass(frozen=True)
class ExtractionResult(Generic[T]):
    """Outcome of one extraction: the value plus whether it is the fallback."""

    value: T
    used_fallback: bool
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return not self.used_fallback


def find_balanced_span(text: str, opener: str = "{") -> str | None:
    """
    Return the first complete bracketed block in text.

    Starts at the first ``opener`` and stops at its matching closer, so a
    reply holding several objects yields only the first. Brackets inside
    JSON string literals do not count towards the depth.
    """
    closer = _CLOSERS[opener]
    start = text.find(opener)
    if start == -1:
        return None
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def find_greedy_span(text: str, opener: str = "{") -> str | None:
    """Return the text from the first opener to the last closer."""
    match = _GREEDY_PATTERNS[opener].search(text)
    return match.group() if match else None


@lru_cache(maxsize=256)
def _adapter(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


def _shape_name(shape: Any, fallback: Any) -> str:
    target = shape if shape is not None else type(fallback)
    return getattr(target, "__name__", str(target))


class ResponseParser:
    """Turn raw model text into a typed value, or the caller's fallback."""

    def __init__(self, strategy: str = BALANCED) -> None:
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown extraction strategy: {strategy!r} (expected one of {STRATEGIES})")
        self.strategy = strategy

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "ResponseParser":
        return cls(config.get("extraction", {}).get("strategy", BALANCED))

    def find_json(self, text: str, opener: str = "{") -> str | None:
        """Locate the embedded JSON text using the configured strategy."""
        if self.strategy == GREEDY:
            return find_greedy_span(text, opener)
        return find_balanced_span(text, opener)

    def extract_result(
        self,
        raw_text: str,
        fallback: T,
        shape: Any = None,
        array: bool = False,
    ) -> ExtractionResult[T]:
        """
        Extract a value of the fallback's shape from raw_text.

        ``shape`` overrides the expected type; by default a pydantic model
        fallback validates against its own class, and a dict or list
        fallback only requires a JSON object or array. Never raises.
        """
        opener = "[" if array else "{"
        text = raw_text if isinstance(raw_text, str) else ""
        span = self.find_json(text, opener) if text else None
        if span is None:
            reason = MALFORMED_JSON if opener in text else NO_JSON
            return self._fall_back(fallback, reason, shape)

        try:
            data = json.loads(span)
        except (ValueError, RecursionError):
            return self._fall_back(fallback, MALFORMED_JSON, shape)

        try:
            value = self._validate(data, fallback, shape)
        except (ValidationError, TypeError, ValueError):
            return self._fall_back(fallback, SCHEMA_MISMATCH, shape)
        return ExtractionResult(value=value, used_fallback=False)

    def extract(self, raw_text: str, fallback: T, shape: Any = None, array: bool = False) -> T:
        """Extract a typed value from raw_text, or return fallback."""
        return self.extract_result(raw_text, fallback, shape=shape, array=array).value

    def _validate(self, data: Any, fallback: Any, shape: Any) -> Any:
        if shape is not None:
            return _adapter(shape).validate_python(data)
        if isinstance(fallback, BaseModel):
            return type(fallback).model_validate(data)
        if isinstance(fallback, dict) and not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        if isinstance(fallback, list) and not isinstance(data, list):
            raise TypeError(f"expected a JSON array, got {type(data).__name__}")
        return data

    def _fall_back(self, fallback: T, reason: str, shape: Any) -> ExtractionResult[T]:
        logger.warning(
            "Model response unusable (%s); returning fallback %s",
            reason,
            _shape_name(shape, fallback),
            extra={"reason": reason},
        )
        return ExtractionResult(value=fallback, used_fallback=True, reason=reason)


_default_parser = ResponseParser()


def extract_json(text: str) -> dict[str, Any] | None:
    """
    Extract first JSON object from text.

    Handles LLM responses that may include prose around the JSON.
    """
    result = _default_parser.extract_result(text, {})
    return None if result.used_fallback else result.value


def extract_json_with_fallback(text: str) -> dict[str, Any]:
    """Extract JSON or return fallback with raw text."""
    return _default_parser.extract(text, {"raw": text})
