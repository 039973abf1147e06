"""Widgets that display transcript entries."""

from rich.markdown import Markdown
from rich.text import Text
from textual.widgets import Static

from ..session import EntryKind, TranscriptEntry


class TranscriptEntryWidget(Static):
    """Displays a single transcript entry, styled by its kind."""

    DEFAULT_CSS = """
    TranscriptEntryWidget {
        width: 100%;
        height: auto;
        padding: 0 1;
        margin: 0 0 1 0;
    }

    TranscriptEntryWidget.error-entry {
        color: #cc0000;
        border-left: thick #cc0000;
    }

    TranscriptEntryWidget.agent-entry {
        border-left: thick #d3d7cf;
    }

    TranscriptEntryWidget.user-entry {
        color: #729fcf;
        background: $panel;
        border-left: thick #729fcf;
    }

    TranscriptEntryWidget.tool-entry {
        color: #32afff;
        border-left: thick #32afff;
    }
    """

    LABELS = {
        EntryKind.ERROR: "❌ Error",
        EntryKind.AGENT: "🤖 AI",
        EntryKind.USER: "You",
        EntryKind.TOOL: "🔧 Tool",
    }

    def __init__(self, entry: TranscriptEntry, **kwargs):
        """Initialize the widget.

        Args:
            entry: Transcript entry to display
            **kwargs: Additional arguments passed to Static
        """
        if "classes" in kwargs:
            kwargs["classes"] = f"{kwargs['classes']} {entry.kind.value}-entry"
        else:
            kwargs["classes"] = f"{entry.kind.value}-entry"

        self.entry = entry
        super().__init__(self.build_renderable(entry), **kwargs)

    @classmethod
    def build_renderable(cls, entry: TranscriptEntry):
        """Build the rich renderable for an entry.

        Agent text is rendered as markdown; everything else as plain text so
        tool output and error messages are shown literally.
        """
        if entry.kind is EntryKind.AGENT:
            try:
                return Markdown(entry.text)
            except Exception:  # noqa: BLE001
                # Malformed markdown from the model must not crash the UI
                return Text(entry.text)

        text = Text()
        text.append(f"{cls.LABELS[entry.kind]}: ", style="bold")
        text.append(entry.text)
        return text
