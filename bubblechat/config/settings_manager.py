"""Centralized settings management for BubbleChat.

Settings Schema:
    {
        "api_key": str,               # Google API key for Gemini models
        "model": str,                 # Model ID (e.g., "gemini-2.0-flash")
        "max_iterations": int,        # Model replies processed per query
        "tool_timeout": float,        # Seconds before a tool is killed (0 disables)
        "announce_truncation": bool,  # Tell the user when the iteration bound is hit
        "theme": str,                 # Textual theme name (e.g., "textual-dark", "nord")
    }
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from dotenv import load_dotenv

from bubblechat.config.models import ModelRegistry
from bubblechat.core.config_paths import ConfigPaths
from bubblechat.core.conversation import DEFAULT_MAX_ITERATIONS

LOGGER = logging.getLogger(__name__)

DEFAULT_TOOL_TIMEOUT = 120.0

# Default theme if none is saved
DEFAULT_THEME = "textual-dark"

VALID_THEMES = {
    "textual-dark",
    "textual-light",
    "nord",
    "gruvbox",
    "dracula",
    "tokyo-night",
    "monokai",
    "textual-ansi",
}


@dataclass(frozen=True)
class ChatSettings:
    """Resolved settings for one BubbleChat process."""

    api_key: Optional[str]
    model: str
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    tool_timeout: Optional[float] = DEFAULT_TOOL_TIMEOUT
    announce_truncation: bool = True
    theme: str = DEFAULT_THEME


def load_config_data() -> Dict[str, Any]:
    """Loads configuration data from config.json."""
    config_file = ConfigPaths.get_config_file()
    if not config_file.exists():
        return {}
    try:
        content = config_file.read_text(encoding="utf-8")
        if not content.strip():
            return {}
        data = json.loads(content)
    except (json.JSONDecodeError, IOError) as e:
        LOGGER.warning(
            f"Failed to load config file: {e}. Using empty configuration.",
            exc_info=True,
        )
        return {}
    if not isinstance(data, dict):
        LOGGER.warning("Config file does not contain a JSON object; ignoring it")
        return {}
    return data


def _save_config_data(data: Dict[str, Any]) -> None:
    """Saves the configuration data to config.json."""
    config_file = ConfigPaths.get_config_file()
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(json.dumps(data, indent=4), encoding="utf-8")
    except IOError as e:
        LOGGER.error(f"Failed to save config file: {e}", exc_info=True)


def set_settings(updates: Dict[str, Any]) -> None:
    """Load existing settings, apply updates, and save back."""
    data = load_config_data()
    data.update(updates)
    _save_config_data(data)


def validate_theme(theme: str) -> bool:
    """Check if a theme name is one BubbleChat accepts."""
    return theme in VALID_THEMES


def _coerce(key: str, value: Any, cast: Callable[[Any], Any], default: Any) -> Any:
    """Cast a raw setting, logging and returning `default` if it is invalid."""
    if value is None:
        return default
    try:
        return cast(value)
    except (TypeError, ValueError):
        LOGGER.warning("Invalid value %r for setting '%s'; using %r", value, key, default)
        return default


def _positive_int(value: Any) -> int:
    number = int(value)
    if number < 1:
        raise ValueError(f"{value} is not positive")
    return number


def _optional_timeout(value: Any) -> Optional[float]:
    seconds = float(value)
    if seconds < 0:
        raise ValueError(f"{value} is negative")
    return seconds or None


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in {"1", "true", "yes", "on"}:
        return True
    if isinstance(value, str) and value.lower() in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"{value!r} is not a boolean")


def load_chat_settings(**overrides: Any) -> ChatSettings:
    """Resolve settings from overrides, config file, environment and defaults.

    Explicit overrides (e.g. CLI flags) win, then config.json, then the
    environment (`.env` files included), then built-in defaults. Overrides
    whose value is None are ignored.

    Args:
        **overrides: Any ChatSettings field

    Returns:
        The resolved ChatSettings
    """
    load_dotenv()

    data = load_config_data()
    data.update({key: value for key, value in overrides.items() if value is not None})

    api_key = (
        data.get("api_key")
        or os.environ.get("GOOGLE_API_KEY")
        or os.environ.get("GEMINI_API_KEY")
    )
    model = ModelRegistry.resolve(data.get("model") or os.environ.get("BUBBLECHAT_MODEL"))

    theme = data.get("theme", DEFAULT_THEME)
    if not validate_theme(theme):
        LOGGER.warning("Unknown theme '%s'; using %s", theme, DEFAULT_THEME)
        theme = DEFAULT_THEME

    return ChatSettings(
        api_key=api_key,
        model=model,
        max_iterations=_coerce(
            "max_iterations",
            data.get("max_iterations"),
            _positive_int,
            DEFAULT_MAX_ITERATIONS,
        ),
        tool_timeout=_coerce(
            "tool_timeout",
            data.get("tool_timeout"),
            _optional_timeout,
            DEFAULT_TOOL_TIMEOUT,
        ),
        announce_truncation=_coerce(
            "announce_truncation", data.get("announce_truncation"), _flag, True
        ),
        theme=theme,
    )
