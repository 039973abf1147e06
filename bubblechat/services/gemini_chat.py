"""Gemini chat session adapter built on the google-genai SDK."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from google import genai
from google.genai import errors, types

from ..core.chat_types import (
    Candidate,
    ChatContent,
    ChatReply,
    ReplyPart,
    ToolInvocationRequest,
    ToolInvocationResult,
)
from ..core.errors import ChatBackendError
from ..tools.base import ToolSpec

LOGGER = logging.getLogger(__name__)


def to_function_declaration(spec: ToolSpec) -> types.FunctionDeclaration:
    """Convert a ToolSpec into a Gemini function declaration."""
    properties = {
        name: types.Schema(
            type=types.Type(str(schema.get("type", "string")).upper()),
            description=schema.get("description"),
        )
        for name, schema in spec.parameters.items()
    }
    return types.FunctionDeclaration(
        name=spec.name,
        description=spec.description,
        parameters=types.Schema(
            type=types.Type.OBJECT,
            properties=properties,
            required=list(spec.required),
        ),
    )


def to_chat_reply(response: Any) -> ChatReply:
    """Convert a GenerateContentResponse into a provider-neutral ChatReply.

    Thought summaries are dropped; every other part keeps its position.
    """
    candidates: List[Candidate] = []
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        parts: List[ReplyPart] = []
        for part in getattr(content, "parts", None) or []:
            if getattr(part, "thought", False):
                LOGGER.debug("Skipping thought part")
                continue

            function_call = getattr(part, "function_call", None)
            if function_call is not None:
                parts.append(
                    ReplyPart(
                        tool_calls=[
                            ToolInvocationRequest(
                                name=function_call.name or "",
                                arguments=dict(function_call.args or {}),
                                id=function_call.id,
                            )
                        ]
                    )
                )
            else:
                parts.append(ReplyPart(text=getattr(part, "text", None)))
        candidates.append(Candidate(parts=parts))
    return ChatReply(candidates=candidates)


def to_message(content: ChatContent) -> Any:
    """Convert a query or a tool result into something `send_message` accepts."""
    if isinstance(content, ToolInvocationResult):
        return types.Part(
            function_response=types.FunctionResponse(
                id=content.id,
                name=content.name,
                response=content.output,
            )
        )
    return content


class GeminiChat:
    """A Gemini chat session with BubbleChat's tools declared.

    Automatic function calling is disabled: the model's function calls come
    back to the conversation loop, which runs them and sends the results.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        system_prompt: str,
        declarations: Sequence[ToolSpec],
        generation_params: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the chat session.

        Args:
            api_key: Gemini API key
            model: Model identifier, e.g. "gemini-2.0-flash"
            system_prompt: System instruction sent with every request
            declarations: Tool specs advertised to the model
            generation_params: Extra GenerateContentConfig fields (temperature, ...)

        Raises:
            ValueError: If no API key is provided
        """
        if not api_key:
            raise ValueError(
                "API key not provided. Set GOOGLE_API_KEY or GEMINI_API_KEY "
                "environment variable or add api_key to the config file."
            )

        self.model = model
        self._client = genai.Client(api_key=api_key)

        config_params: Dict[str, Any] = dict(generation_params or {})
        config_params["system_instruction"] = system_prompt
        if declarations:
            config_params["tools"] = [
                types.Tool(
                    function_declarations=[
                        to_function_declaration(spec) for spec in declarations
                    ]
                )
            ]
            config_params["automatic_function_calling"] = (
                types.AutomaticFunctionCallingConfig(disable=True)
            )

        self._chat = self._client.aio.chats.create(
            model=model,
            config=types.GenerateContentConfig(**config_params),
        )

    async def send(self, content: ChatContent) -> ChatReply:
        """Send a query or tool result and return the converted reply.

        Raises:
            ChatBackendError: The API rejected or failed the request
        """
        LOGGER.debug("Sending %s to %s", type(content).__name__, self.model)
        try:
            response = await self._chat.send_message(to_message(content))
        except errors.APIError as e:
            raise ChatBackendError(
                f"Gemini API error {e.code}: {e.message or e.status}",
                status_code=e.code,
            ) from e
        return to_chat_reply(response)
