"""Chat screen rendering the conversation transcript."""

import asyncio
import logging
from typing import Optional, TYPE_CHECKING

import pyperclip
from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, VerticalScroll
from textual.screen import Screen
from textual.widgets import Input, Static

from ..session import TranscriptEntry
from ..ui.chat_widgets import TranscriptEntryWidget
from ..ui.status_footer import StatusFooter

if TYPE_CHECKING:
    from ..core.conversation import ConversationSession

LOGGER = logging.getLogger(__name__)


class ChatScreen(Screen):
    """Shows the transcript and feeds typed queries to the conversation session."""

    BASE_TITLE = "BubbleChat"

    CSS = """
    ChatScreen {
        layout: vertical;
    }

    #chat-container {
        height: 1fr;
        width: 100%;
        padding: 1 2 0 2;
    }

    #chat-log {
        height: 100%;
        width: 100%;
        border: solid $primary-background;
        border-title-align: center;
        padding: 1 2;
    }

    #chat-input {
        width: 100%;
        margin: 0 2;
    }

    .info-message {
        color: $text-muted;
        padding: 0 0 1 0;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel_turn", "Cancel"),
        Binding("ctrl+y", "copy_chat", "Copy Chat"),
    ]

    def __init__(self):
        """Initialize the chat screen."""
        super().__init__()
        self.session: Optional["ConversationSession"] = None
        self.chat_log: Optional[VerticalScroll] = None
        self.chat_input: Optional[Input] = None
        self._cancel_event: Optional[asyncio.Event] = None
        self._processing = False

    def compose(self) -> ComposeResult:
        """Create child widgets for the chat screen."""
        with Container(id="chat-container"):
            with VerticalScroll(id="chat-log") as vs:
                vs.can_focus = False

        yield Input(id="chat-input", placeholder="Type your message and press Enter")
        yield StatusFooter()

    def on_mount(self) -> None:
        """Attach to the app's session and render what is already in the transcript."""
        self.chat_log = self.query_one("#chat-log", VerticalScroll)
        self.chat_input = self.query_one("#chat-input", Input)

        session = getattr(self.app, "session", None)
        if session is not None:
            self.attach_session(session)
        else:
            error = getattr(self.app, "startup_error", None) or "Chat session not initialized."
            self._mount_info_message(f"[red]{error}[/red]")

        self._update_chat_title()
        self.chat_input.focus()

    def attach_session(self, session: "ConversationSession") -> None:
        """Render the session's transcript and follow future appends.

        Args:
            session: The ConversationSession created by the app
        """
        self.session = session
        for entry in session.transcript:
            self.on_transcript_entry(entry)
        session.transcript.add_listener(self.on_transcript_entry)

        footer = self.query_one(StatusFooter)
        footer.model = getattr(session.chat, "model", "")
        footer.max_iterations = session.max_iterations

    def on_unmount(self) -> None:
        if self.session is not None:
            self.session.transcript.remove_listener(self.on_transcript_entry)

    def on_transcript_entry(self, entry: TranscriptEntry) -> None:
        """Mount a widget for an entry appended to the transcript."""
        self.chat_log.mount(TranscriptEntryWidget(entry))
        self.chat_log.scroll_end(animate=False)

    @on(Input.Submitted, "#chat-input")
    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle message submission when Enter is pressed."""
        message = event.value.strip()
        if not message:
            return

        if not self.session:
            self._mount_info_message("[red]Chat session not initialized.[/red]")
            return

        if self._processing:
            self.notify("Still working on the previous message", severity="warning")
            return

        self.chat_input.value = ""
        self._cancel_event = asyncio.Event()
        self.run_worker(self.run_query(message, self._cancel_event), exclusive=True)

    async def run_query(self, message: str, cancel_event: asyncio.Event) -> None:
        """Run one conversation turn; entries arrive through the transcript listener."""
        self._set_processing(True)
        try:
            await self.session.submit_query(message, cancel_event=cancel_event)
        finally:
            self._set_processing(False)
            self._cancel_event = None

    def action_cancel_turn(self) -> None:
        """Ask the running turn to stop at its next step."""
        if self._cancel_event is not None and not self._cancel_event.is_set():
            self._cancel_event.set()
            self.notify("Cancelling after the current step...")

    def action_copy_chat(self) -> None:
        """Copy the entire transcript to the clipboard."""
        if not self.session or not len(self.session.transcript):
            self.notify("No messages to copy", title="Info", severity="information")
            return

        try:
            pyperclip.copy("\n\n".join(self.session.transcript.render_all()))
            self.notify(
                f"Copied {len(self.session.transcript)} messages to clipboard",
                title="Success",
            )
        except pyperclip.PyperclipException as e:
            self.notify(f"Failed to copy: {e}", title="Error", severity="error")

    def _set_processing(self, processing: bool) -> None:
        self._processing = processing
        self.query_one(StatusFooter).busy = processing
        self._update_chat_title()

    def _update_chat_title(self) -> None:
        title = self.BASE_TITLE
        if self._processing:
            title += " • ⏳ Processing..."
        self.chat_log.border_title = title

    def _mount_info_message(self, content) -> None:
        """Mount an info message that is not part of the transcript."""
        self.chat_log.mount(Static(content, classes="info-message"))
        self.chat_log.scroll_end(animate=False)
