"""Configuration loader with environment variable overrides."""

import os
from pathlib import Path
from typing import Any

import yaml


_config: dict[str, Any] | None = None

# (env var, section path) pairs applied after the YAML file is read
_ENV_OVERRIDES: list[tuple[str, tuple[str, ...]]] = [
    ("OPENAI_API_KEY", ("providers", "gpt4", "api_key")),
    ("ANTHROPIC_API_KEY", ("providers", "claude", "api_key")),
    ("TMSAI_OPENAI_MODEL", ("providers", "gpt4", "model")),
    ("TMSAI_ANTHROPIC_MODEL", ("providers", "claude", "model")),
    ("TMSAI_OLLAMA_MODEL", ("providers", "local", "model")),
    ("TMSAI_OLLAMA_BASE_URL", ("providers", "local", "base_url")),
    ("TMSAI_DEFAULT_MODEL", ("routing", "default_model")),
    ("TMSAI_SUPABASE_URL", ("store", "url")),
    ("TMSAI_SUPABASE_KEY", ("store", "key")),
    ("TMSAI_LOG_LEVEL", ("logging", "level")),
]


def get_project_root() -> Path:
    """Return the directory holding config/ and the tmsai package."""
    return Path(__file__).resolve().parent.parent.parent


def _set_path(config: dict[str, Any], path: tuple[str, ...], value: str) -> None:
    node = config
    for key in path[:-1]:
        node = node.setdefault(key, {})
    node[path[-1]] = value


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from YAML file with environment variable overrides."""
    global _config
    if _config is not None:
        return _config

    if config_path is None:
        config_path = get_project_root() / "config" / "default.yaml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        loaded = yaml.safe_load(f) or {}

    loaded.setdefault("providers", {})
    for env_var, path in _ENV_OVERRIDES:
        value = os.getenv(env_var)
        if value:
            _set_path(loaded, path, value)

    _config = loaded
    return _config


def get_config() -> dict[str, Any]:
    """Get loaded configuration. Loads if not already loaded."""
    if _config is None:
        load_config()
    return _config or {}


def reset_config() -> None:
    """Forget the cached configuration so the next access reloads it."""
    global _config
    _config = None
