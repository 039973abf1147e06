"""Main entry point for the BubbleChat application."""

import asyncio
import logging
import os
import sys
from typing import Optional

import click
from rich.console import Console

from .config.settings_manager import ChatSettings, load_chat_settings
from .core.config_paths import ConfigPaths
from .session import EntryKind, Transcript

ENTRY_STYLES = {
    EntryKind.ERROR: "#cc0000",
    EntryKind.AGENT: "#d3d7cf",
    EntryKind.USER: "#729fcf",
    EntryKind.TOOL: "#32afff",
}


def configure_logging(debug: bool) -> None:
    """Send log records to the log file; the terminal belongs to the UI."""
    logging.basicConfig(
        filename=ConfigPaths.get_log_file(),
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def print_transcript(transcript: Transcript, console: Console) -> None:
    """Print each transcript entry, styled by kind."""
    for entry in transcript:
        console.print(str(entry), style=ENTRY_STYLES[entry.kind], markup=False, highlight=False)


async def run_headless(settings: ChatSettings, query: str) -> Transcript:
    """Run a single query without the TUI and return the transcript."""
    from .app import build_session

    session = build_session(settings)
    await session.submit_query(query)
    return session.transcript


@click.command()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--model", default=None, help="Gemini model to use (default: gemini-2.0-flash)")
@click.option(
    "--max-iterations",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum model replies processed per query",
)
@click.option(
    "--tool-timeout",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds before a gcloud/kubectl call is killed (0 disables)",
)
@click.option(
    "--query",
    "-q",
    default=None,
    help="Run a single query, print the transcript and exit",
)
def main(
    debug: bool,
    model: Optional[str],
    max_iterations: Optional[int],
    tool_timeout: Optional[float],
    query: Optional[str],
) -> None:
    """Chat with Gemini about your cloud, letting it run gcloud and kubectl."""
    if debug:
        os.environ["TEXTUAL_DEBUG"] = "1"
    configure_logging(debug)

    try:
        settings = load_chat_settings(
            model=model,
            max_iterations=max_iterations,
            tool_timeout=tool_timeout,
        )

        if query is not None:
            if not settings.api_key:
                raise click.ClickException(
                    "No API key configured. Set GOOGLE_API_KEY or GEMINI_API_KEY."
                )
            transcript = asyncio.run(run_headless(settings, query))
            print_transcript(transcript, Console())
            if any(entry.kind is EntryKind.ERROR for entry in transcript):
                sys.exit(1)
            return

        from .app import BubbleChatApp

        BubbleChatApp(settings=settings).run()

    except KeyboardInterrupt:
        click.echo("\nExiting...")
        sys.exit(0)
    except click.ClickException:
        raise
    except Exception as e:
        if debug:
            raise
        click.echo(click.style(f"Error: {e}", fg="red"))
        sys.exit(1)


if __name__ == "__main__":
    main()
