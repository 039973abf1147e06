"""Provider-neutral chat exchange types.

The conversation loop only sees these types; adapters such as
`GeminiChat` translate SDK responses into them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Union


@dataclass(frozen=True)
class ToolInvocationRequest:
    """A function call issued by the model."""

    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)
    id: Optional[str] = None

    @property
    def command(self) -> Any:
        """The raw `command` argument, if the model supplied one."""
        return self.arguments.get("command")


@dataclass(frozen=True)
class ToolInvocationResult:
    """A tool's output, sent back to the model as the next input."""

    name: str
    output: Dict[str, Any]
    id: Optional[str] = None

    @classmethod
    def from_output(cls, request: ToolInvocationRequest, text: str) -> "ToolInvocationResult":
        """Build the result for `request` carrying `text` as its output."""
        return cls(name=request.name, output={"output": text}, id=request.id)


@dataclass(frozen=True)
class ReplyPart:
    """One content fragment of a candidate."""

    text: Optional[str] = None
    tool_calls: List[ToolInvocationRequest] = field(default_factory=list)


@dataclass(frozen=True)
class Candidate:
    """One alternative reply proposed by the model."""

    parts: List[ReplyPart] = field(default_factory=list)


@dataclass(frozen=True)
class ChatReply:
    """A model reply made of zero or more candidates."""

    candidates: List[Candidate] = field(default_factory=list)


class PartKind(Enum):
    """What a reply part turned out to be."""

    TEXT = "text"
    TOOL_CALLS = "tool_calls"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class ResolvedPart:
    """A reply part classified exactly once."""

    kind: PartKind
    text: str = ""
    tool_calls: List[ToolInvocationRequest] = field(default_factory=list)


def resolve_part(part: ReplyPart) -> ResolvedPart:
    """Classify a reply part; tool calls win over text."""
    if part.tool_calls:
        return ResolvedPart(kind=PartKind.TOOL_CALLS, tool_calls=list(part.tool_calls))
    if part.text is not None:
        return ResolvedPart(kind=PartKind.TEXT, text=part.text)
    return ResolvedPart(kind=PartKind.UNRECOGNIZED)


ChatContent = Union[str, ToolInvocationResult]


class ChatCapability(Protocol):
    """An ongoing chat with a model that remembers earlier exchanges."""

    async def send(self, content: ChatContent) -> ChatReply:
        """Send a query or a tool result and return the model's reply."""
        ...
