"""Status footer showing the model, the iteration bound and the cwd."""

import os
from pathlib import Path

from rich.text import Text
from textual.app import ComposeResult
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Label


class StatusFooter(Widget):
    """Footer displaying session information and key shortcuts."""

    DEFAULT_CSS = """
    StatusFooter {
        dock: bottom;
        height: 1;
        background: $footer-background;
        color: $footer-foreground;
        layout: horizontal;
    }

    StatusFooter > #session-info {
        width: 1fr;
        height: 1;
        padding: 0 1;
    }

    StatusFooter > #shortcuts {
        width: auto;
        height: 1;
        padding: 0 1;
        color: $footer-description-foreground;
    }
    """

    model = reactive("")
    """Model identifier of the running chat."""

    max_iterations = reactive(0)
    """Model replies processed per query."""

    busy = reactive(False)
    """Whether a query is being processed."""

    def compose(self) -> ComposeResult:
        yield Label("", id="session-info")
        yield Label("Enter send │ Esc cancel │ ^Y copy │ ^C quit", id="shortcuts")

    def on_mount(self) -> None:
        self._update_info()

    @staticmethod
    def format_path(path: str) -> str:
        """Replace the home directory prefix of `path` with ~."""
        home = str(Path.home())
        if path.startswith(home):
            return "~" + path[len(home):]
        return path

    def build_info(self) -> Text:
        text = Text()
        if self.busy:
            text.append("⏳ ", style="dim")
        text.append(self.model or "no model", style="bold cyan")
        if self.max_iterations:
            text.append(f"  ≤{self.max_iterations} steps", style="dim")
        text.append("  📁 ", style="dim")
        text.append(self.format_path(os.getcwd()), style="bold")
        return text

    def _update_info(self) -> None:
        self.query_one("#session-info", Label).update(self.build_info())

    def _watch_model(self, _: str) -> None:
        if self.is_mounted:
            self._update_info()

    def _watch_max_iterations(self, _: int) -> None:
        if self.is_mounted:
            self._update_info()

    def _watch_busy(self, _: bool) -> None:
        if self.is_mounted:
            self._update_info()
