"""Tool-augmented conversation loop."""

import asyncio
import logging
from collections import deque
from typing import Deque, Optional

from ..session import EntryKind, Transcript
from ..tools.base import ToolRegistry
from .chat_types import (
    ChatCapability,
    ChatContent,
    ChatReply,
    PartKind,
    ToolInvocationRequest,
    ToolInvocationResult,
    resolve_part,
)
from .errors import ToolError, ToolExecutionError

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 5

NO_CANDIDATES_MESSAGE = "No response from the AI agent."
NO_PARTS_MESSAGE = "No response parts from the AI agent."
UNKNOWN_PART_MESSAGE = "Unknown part type in response."
CANCELLED_MESSAGE = "Turn cancelled."


class ConversationSession:
    """One chat with the model plus the transcript of what the user saw.

    `submit_query` drives a query to completion: it alternates between asking
    the model and running the tools it requests, until the model answers with
    text only or `max_iterations` replies have been processed.

    Only the first candidate of each reply is used; other candidates are
    ignored. Tool calls are run one at a time in the order the model listed
    them because the tools change live cluster and cloud state.
    """

    def __init__(
        self,
        chat: ChatCapability,
        registry: ToolRegistry,
        transcript: Optional[Transcript] = None,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        announce_truncation: bool = True,
    ):
        """Initialize the session.

        Args:
            chat: Chat capability; owned by this session
            registry: Tool registry, read-only once the session exists
            transcript: Transcript to append to (a new one by default)
            max_iterations: Maximum number of model replies processed per turn
            announce_truncation: Append an error entry when the bound cuts a turn short
        """
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")

        self.chat = chat
        self.registry = registry
        self.transcript = transcript if transcript is not None else Transcript()
        self.max_iterations = max_iterations
        self.announce_truncation = announce_truncation

    async def submit_query(
        self, text: str, cancel_event: Optional[asyncio.Event] = None
    ) -> None:
        """Record a user query and run the turn it starts.

        Blank or whitespace-only queries are ignored.
        """
        query = text.strip()
        if not query:
            return

        self.transcript.add(query, EntryKind.USER)
        await self.run_turn(query, cancel_event=cancel_event)

    async def run_turn(
        self, query: str, cancel_event: Optional[asyncio.Event] = None
    ) -> None:
        """Run the conversation loop for a query already in the transcript."""
        if self._cancelled(cancel_event):
            return

        response = await self._send(query)
        if response is None:
            return

        pending: Optional[ChatReply] = response
        for iteration in range(self.max_iterations):
            if pending is None:
                return
            if self._cancelled(cancel_event):
                return

            if not pending.candidates:
                self._error(NO_CANDIDATES_MESSAGE)
                return

            candidate = pending.candidates[0]
            if not candidate.parts:
                self._error(NO_PARTS_MESSAGE)
                return

            LOGGER.debug(
                "Iteration %d: processing %d part(s)", iteration + 1, len(candidate.parts)
            )
            pending = None
            queue: Deque[ToolInvocationRequest] = deque()

            for part in candidate.parts:
                resolved = resolve_part(part)
                if resolved.kind is PartKind.TOOL_CALLS:
                    for call in resolved.tool_calls:
                        self.transcript.add(
                            self._describe_call(call), EntryKind.TOOL
                        )
                        queue.append(call)
                elif resolved.kind is PartKind.TEXT:
                    self.transcript.add(resolved.text, EntryKind.AGENT)
                else:
                    self._error(UNKNOWN_PART_MESSAGE)

            while queue:
                call = queue.popleft()
                if self._cancelled(cancel_event):
                    return

                try:
                    output = await self.registry.dispatch(call)
                except ToolError as e:
                    LOGGER.warning("Tool %s failed: %s", call.name, e)
                    self._error(self._describe_tool_failure(call, e))
                    continue

                if self._cancelled(cancel_event):
                    return

                reply = await self._send(ToolInvocationResult.from_output(call, output))
                if reply is None:
                    return
                pending = reply

        if pending is not None:
            LOGGER.warning(
                "Stopped after %d iterations with a reply still pending",
                self.max_iterations,
            )
            if self.announce_truncation:
                self._error(
                    f"Stopped after {self.max_iterations} iterations; "
                    "the model was still working. Ask again to continue."
                )

    async def _send(self, content: ChatContent) -> Optional[ChatReply]:
        """Send content to the model; on failure record an error and return None."""
        try:
            return await self.chat.send(content)
        except Exception as e:  # noqa: BLE001
            LOGGER.error("Chat send failed: %s", e, exc_info=True)
            self._error(str(e) or type(e).__name__)
            return None

    def _cancelled(self, cancel_event: Optional[asyncio.Event]) -> bool:
        if cancel_event is not None and cancel_event.is_set():
            LOGGER.info("Turn cancelled by user")
            self._error(CANCELLED_MESSAGE)
            return True
        return False

    def _error(self, message: str) -> None:
        self.transcript.add(message, EntryKind.ERROR)

    @staticmethod
    def _describe_call(call: ToolInvocationRequest) -> str:
        command = call.command
        if isinstance(command, str):
            return f"{call.name}: {command}"
        return f"{call.name}: {call.arguments}"

    @staticmethod
    def _describe_tool_failure(call: ToolInvocationRequest, error: ToolError) -> str:
        message = f"Error executing {call.name}: {error}"
        if isinstance(error, ToolExecutionError) and error.output:
            message += f"\n{error.output.rstrip()}"
        return message
