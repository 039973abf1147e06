"""Error taxonomy for the conversation loop and its collaborators."""

from typing import Optional


class BubbleChatError(Exception):
    """Base class for all BubbleChat errors."""


class DuplicateToolError(BubbleChatError):
    """Raised when a tool name is registered twice."""

    def __init__(self, name: str):
        super().__init__(f"Tool already registered: {name}")
        self.name = name


class ChatBackendError(BubbleChatError):
    """Raised when the chat backend rejects or fails a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TransientBackendError(ChatBackendError):
    """Raised when a transient backend failure survives every retry."""

    def __init__(self, message: str, attempts: int, status_code: Optional[int] = None):
        super().__init__(message, status_code=status_code)
        self.attempts = attempts


class ToolError(BubbleChatError):
    """Base class for failures local to a single tool invocation."""

    def __init__(self, tool_name: str, message: str):
        super().__init__(message)
        self.tool_name = tool_name


class UnknownToolError(ToolError):
    """The model asked for a tool that is not registered."""

    def __init__(self, tool_name: str):
        super().__init__(tool_name, f"unknown tool: {tool_name}")


class InvalidArgumentsError(ToolError):
    """The `command` argument is missing or is not a string."""

    def __init__(self, tool_name: str, detail: str = "missing or non-string 'command'"):
        super().__init__(tool_name, f"invalid arguments for {tool_name}: {detail}")


class ToolExecutionError(ToolError):
    """The external program failed to start, timed out or exited non-zero.

    `output` holds whatever the program printed before failing; it is added to
    the transcript. Nothing is sent to the model for a failed call.
    """

    def __init__(
        self,
        tool_name: str,
        message: str,
        output: str = "",
        return_code: Optional[int] = None,
    ):
        super().__init__(tool_name, message)
        self.output = output
        self.return_code = return_code
