"""Tool specifications for the built-in cloud tools.

Metadata (name, description, parameters) is kept here, separate from the
executors in `cli_tools`.
"""

from __future__ import annotations

from typing import Optional

from .base import ToolRegistry, ToolSpec
from .cli_tools import CommandLineTool

GCLOUD_SPEC = ToolSpec.command_spec(
    name="gcloud",
    description="Execute a gcloud command with current credentials and project.",
    command_description="The gcloud command to execute.",
)

KUBECTL_SPEC = ToolSpec.command_spec(
    name="kubectl",
    description="Execute a kubectl command with current credentials and context.",
    command_description="The kubectl command to execute.",
)

DEFAULT_SPECS = (GCLOUD_SPEC, KUBECTL_SPEC)


def build_default_registry(timeout: Optional[float] = None) -> ToolRegistry:
    """Create a registry holding gcloud and kubectl.

    Args:
        timeout: Per-invocation timeout in seconds for each tool (None disables it)

    Returns:
        A new ToolRegistry; each call returns an independent instance.
    """
    registry = ToolRegistry()
    for spec in DEFAULT_SPECS:
        registry.register(spec, CommandLineTool(spec.name, timeout=timeout))
    return registry
