"""Main application module for BubbleChat."""

import logging
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Header

from .config.settings_manager import ChatSettings, load_chat_settings, set_settings
from .core.conversation import ConversationSession
from .services.gemini_chat import GeminiChat
from .services.prompt_service import load_system_prompt
from .services.retry_chat import RetryChat
from .screens.chat_screen import ChatScreen
from .session import EntryKind, Transcript
from .tools.specs import build_default_registry

LOGGER = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to BubbleChat! Type your message below:"


def build_session(settings: ChatSettings) -> ConversationSession:
    """Wire the tool registry, Gemini chat and transcript into a session.

    Raises:
        ValueError: If no API key is configured
    """
    registry = build_default_registry(timeout=settings.tool_timeout)
    chat = RetryChat(
        GeminiChat(
            api_key=settings.api_key,
            model=settings.model,
            system_prompt=load_system_prompt(registry.names()),
            declarations=registry.declarations(),
        )
    )
    LOGGER.info(
        "Starting chat with %s (tools: %s)", settings.model, ", ".join(registry.names())
    )
    return ConversationSession(
        chat=chat,
        registry=registry,
        transcript=Transcript(),
        max_iterations=settings.max_iterations,
        announce_truncation=settings.announce_truncation,
    )


class BubbleChatApp(App):
    """BubbleChat TUI application."""

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
    ]

    TITLE = "BubbleChat"
    SUB_TITLE = "gcloud and kubectl, conversationally"

    def __init__(self, settings: Optional[ChatSettings] = None):
        """Initialize the application.

        Args:
            settings: Resolved settings (loaded from config and environment if omitted)
        """
        super().__init__()
        self.settings = settings or load_chat_settings()
        self.session: Optional[ConversationSession] = None
        self.startup_error: Optional[str] = None
        self.theme = self.settings.theme

    def compose(self) -> ComposeResult:
        """Create child widgets for the app."""
        yield Header()

    def on_mount(self) -> None:
        """Create the session, then show the chat screen."""
        self._initialize_session()
        self.push_screen(ChatScreen())

    def _initialize_session(self) -> None:
        try:
            self.session = build_session(self.settings)
        except Exception as e:  # noqa: BLE001
            LOGGER.error("Failed to initialize chat session", exc_info=True)
            self.startup_error = f"Failed to initialize chat session: {e}"
            self.notify(self.startup_error, severity="error")
            return

        self.session.transcript.add(WELCOME_MESSAGE, EntryKind.AGENT)

    def watch_theme(self, theme: str) -> None:
        """Persist theme changes made from the command palette."""
        if theme != self.settings.theme:
            set_settings({"theme": theme})
