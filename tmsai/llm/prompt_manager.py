"""Load and format prompts from config files."""

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Callable, Iterable

NOT_AVAILABLE = "N/A"
NONE_SPECIFIED = "None specified"


def _plain(value: Any) -> Any:
    if hasattr(value, "model_dump"):
        return value.model_dump(by_alias=True)
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    return str(value)


def get_prompts_dir() -> Path:
    """Return path to prompts directory."""
    return Path(__file__).resolve().parent.parent.parent / "config" / "prompts"


def load_prompt(name: str) -> str:
    """Load prompt template by name (without .txt)."""
    path = get_prompts_dir() / f"{name}.txt"
    if not path.exists():
        raise FileNotFoundError(f"Prompt not found: {path}")
    return path.read_text(encoding="utf-8").strip()


def format_prompt(name: str, /, **kwargs: Any) -> str:
    """Load and format prompt with given variables."""
    template = load_prompt(name)
    return template.format(**kwargs)


def to_json(value: Any) -> str:
    """Pretty JSON for embedding records, models and dataclasses in a prompt."""
    return json.dumps(value, indent=2, default=_plain)


def json_or_none(value: Any, marker: str = NONE_SPECIFIED) -> str:
    """JSON for optional inputs, or a marker when absent."""
    return to_json(value) if value else marker


def truncate(text: Any, limit: int) -> str:
    """First ``limit`` characters of text."""
    return str(text if text is not None else "")[:limit]


def field(record: dict[str, Any], *keys: str, default: str = NOT_AVAILABLE) -> Any:
    """First truthy value among keys, else default."""
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return default


def bullet_lines(records: Iterable[dict[str, Any]], render: Callable[[dict[str, Any]], str]) -> str:
    """One ``- `` line per record."""
    return "\n".join(f"- {render(r)}" for r in records)


def count_where(records: Iterable[dict[str, Any]], key: str, value: Any) -> int:
    return sum(1 for r in records if r.get(key) == value)
