"""Tool spec and registry primitives.

A `ToolSpec` is the declaration advertised to the model (name, description,
parameters). The registry pairs each spec with the executor that runs it, so
the declared set and the runnable set are always the same.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Tuple

from ..core.chat_types import ToolInvocationRequest
from ..core.errors import DuplicateToolError, InvalidArgumentsError, UnknownToolError

LOGGER = logging.getLogger(__name__)

ToolExecutor = Callable[[str], Awaitable[str]]

COMMAND_PARAMETER = "command"


@dataclass(frozen=True)
class ToolSpec:
    """Specification describing a tool the model can call.

    - `parameters` follows a JSONSchema-like shape: ``{name: {"type", "description"}}``.
    - `required` lists the parameter names the model must always supply.
    """

    name: str
    description: str
    parameters: Dict[str, Dict[str, Any]]
    required: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        missing = [name for name in self.required if name not in self.parameters]
        if missing:
            raise ValueError(f"Required parameters not declared for {self.name}: {missing}")

    @classmethod
    def command_spec(cls, name: str, description: str, command_description: str) -> "ToolSpec":
        """Build a spec taking one required string parameter named `command`."""
        return cls(
            name=name,
            description=description,
            parameters={
                COMMAND_PARAMETER: {
                    "type": "string",
                    "description": command_description,
                }
            },
            required=(COMMAND_PARAMETER,),
        )


class ToolRegistry:
    """In-memory registry of tool specs and their executors."""

    def __init__(self) -> None:
        self._tools: Dict[str, Tuple[ToolSpec, ToolExecutor]] = {}

    def register(self, spec: ToolSpec, executor: ToolExecutor) -> None:
        if spec.name in self._tools:
            raise DuplicateToolError(spec.name)
        self._tools[spec.name] = (spec, executor)
        LOGGER.debug("Registered tool %s", spec.name)

    def declarations(self) -> List[ToolSpec]:
        """Specs in registration order, as advertised to the model."""
        return [spec for spec, _ in self._tools.values()]

    def names(self) -> List[str]:
        return list(self._tools.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    async def dispatch(self, request: ToolInvocationRequest) -> str:
        """Run the tool named by `request` and return its output text.

        Raises:
            UnknownToolError: No tool with that name is registered
            InvalidArgumentsError: `command` is missing or not a string
            ToolExecutionError: The executor failed
        """
        entry = self._tools.get(request.name)
        if entry is None:
            raise UnknownToolError(request.name)

        _, executor = entry
        command = request.arguments.get(COMMAND_PARAMETER)
        if command is None:
            raise InvalidArgumentsError(request.name, f"missing '{COMMAND_PARAMETER}'")
        if not isinstance(command, str):
            raise InvalidArgumentsError(
                request.name,
                f"'{COMMAND_PARAMETER}' must be a string, got {type(command).__name__}",
            )

        LOGGER.info("Dispatching %s: %s", request.name, command)
        return await executor(command)
