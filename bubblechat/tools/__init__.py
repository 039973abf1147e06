"""Tools the model can ask BubbleChat to run."""

from .base import ToolExecutor, ToolRegistry, ToolSpec
from .cli_tools import CommandLineTool
from .specs import build_default_registry

__all__ = [
    "CommandLineTool",
    "ToolExecutor",
    "ToolRegistry",
    "ToolSpec",
    "build_default_registry",
]
