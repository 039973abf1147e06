"""Configuration utilities for the BubbleChat application."""

from .models import ModelConfig, ModelRegistry
from .settings_manager import (
    ChatSettings,
    set_settings,
    load_chat_settings,
    load_config_data,
    validate_theme,
    DEFAULT_THEME,
    DEFAULT_TOOL_TIMEOUT,
    VALID_THEMES,
)

__all__ = [
    # Model configuration
    "ModelConfig",
    "ModelRegistry",
    # Settings management
    "ChatSettings",
    "set_settings",
    "load_chat_settings",
    "load_config_data",
    "validate_theme",
    "DEFAULT_THEME",
    "DEFAULT_TOOL_TIMEOUT",
    "VALID_THEMES",
]
