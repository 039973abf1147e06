"""Append-only transcript of everything shown to the user."""

import logging
from typing import Callable, Iterator, List, Tuple

from .models import EntryKind, TranscriptEntry

LOGGER = logging.getLogger(__name__)

TranscriptListener = Callable[[TranscriptEntry], None]


class Transcript:
    """Ordered log of transcript entries.

    Insertion order is display order. Entries are never reordered or removed;
    listeners are told about each entry right after it is appended.
    """

    def __init__(self) -> None:
        self._entries: List[TranscriptEntry] = []
        self._listeners: List[TranscriptListener] = []

    def append(self, entry: TranscriptEntry) -> None:
        self._entries.append(entry)
        for listener in list(self._listeners):
            try:
                listener(entry)
            except Exception:  # noqa: BLE001
                LOGGER.exception("Transcript listener failed for %s entry", entry.kind.value)

    def add(self, text: str, kind: EntryKind) -> TranscriptEntry:
        """Create an entry from text and kind, append it, and return it."""
        entry = TranscriptEntry(text=text, kind=kind)
        self.append(entry)
        return entry

    def add_listener(self, listener: TranscriptListener) -> None:
        """Register a callback invoked after every append.

        Args:
            listener: Callable receiving the appended entry
        """
        self._listeners.append(listener)

    def remove_listener(self, listener: TranscriptListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def entries(self) -> Tuple[TranscriptEntry, ...]:
        """Snapshot of the entries appended so far."""
        return tuple(self._entries)

    def render_all(self) -> List[str]:
        """Render every entry as a plain string, one per entry."""
        return [str(entry) for entry in self._entries]

    def __iter__(self) -> Iterator[TranscriptEntry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
