"""Data models for transcript entries."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class EntryKind(Enum):
    """Provenance of a transcript entry; also selects its display style."""

    ERROR = "error"  # Failure reported inline
    AGENT = "agent"  # Text from the model
    USER = "user"  # Query typed by the user
    TOOL = "tool"  # Tool invocation requested by the model

    @property
    def prefix(self) -> str:
        """Plain-text label used when rendering without styles."""
        return _PREFIXES[self]


_PREFIXES = {
    EntryKind.ERROR: "Error",
    EntryKind.AGENT: "AI",
    EntryKind.USER: "User",
    EntryKind.TOOL: "Tool",
}


@dataclass(frozen=True)
class TranscriptEntry:
    """A single immutable entry in the conversation transcript."""

    text: str
    kind: EntryKind
    timestamp: datetime = field(default_factory=datetime.now, compare=False)

    def __str__(self) -> str:
        return f"{self.kind.prefix}: {self.text}"
