"""Centralized configuration path management for BubbleChat.

All configuration and log files live under ``~/.config/bubblechat/``,
following the XDG Base Directory layout.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class ConfigPaths:
    """Single source of truth for BubbleChat file locations."""

    BASE_DIR = (
        Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config") / "bubblechat"
    )

    @classmethod
    def get_base_dir(cls) -> Path:
        """Get base configuration directory, creating if needed.

        Returns:
            Path to ~/.config/bubblechat/
        """
        cls.BASE_DIR.mkdir(parents=True, exist_ok=True)
        return cls.BASE_DIR

    @classmethod
    def get_config_file(cls) -> Path:
        """Get path to main configuration file.

        Returns:
            Path to config.json
        """
        return cls.get_base_dir() / "config.json"

    @classmethod
    def get_log_file(cls) -> Path:
        """Get path to the application log.

        Returns:
            Path to bubblechat.log
        """
        return cls.get_base_dir() / "bubblechat.log"
