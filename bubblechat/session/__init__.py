"""Conversation transcript data structures."""

from .models import EntryKind, TranscriptEntry
from .transcript import Transcript

__all__ = [
    "EntryKind",
    "TranscriptEntry",
    "Transcript",
]
