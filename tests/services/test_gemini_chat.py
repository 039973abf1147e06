"""Tests for the Gemini chat adapter."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from google.genai import errors, types

from bubblechat.core.chat_types import ToolInvocationRequest, ToolInvocationResult
from bubblechat.core.errors import ChatBackendError
from bubblechat.services.gemini_chat import (
    GeminiChat,
    to_chat_reply,
    to_function_declaration,
    to_message,
)
from bubblechat.tools.specs import DEFAULT_SPECS, KUBECTL_SPEC


def make_response(*parts: types.Part) -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=list(parts)))]
    )


@pytest.fixture
def mock_genai():
    with patch("bubblechat.services.gemini_chat.genai") as mock:
        chat = MagicMock()
        chat.send_message = AsyncMock()
        mock.Client.return_value.aio.chats.create.return_value = chat
        yield mock


def make_chat(**kwargs) -> GeminiChat:
    params = dict(
        api_key="test-key",
        model="gemini-2.0-flash",
        system_prompt="You are helpful.",
        declarations=list(DEFAULT_SPECS),
    )
    params.update(kwargs)
    return GeminiChat(**params)


class TestConversions:
    """Test conversion to and from SDK types."""

    def test_function_declaration(self):
        declaration = to_function_declaration(KUBECTL_SPEC)

        assert declaration.name == "kubectl"
        assert declaration.parameters.type == types.Type.OBJECT
        assert declaration.parameters.properties["command"].type == types.Type.STRING
        assert declaration.parameters.required == ["command"]

    def test_reply_keeps_part_order(self):
        response = make_response(
            types.Part(text="Checking pods."),
            types.Part(
                function_call=types.FunctionCall(
                    name="kubectl", args={"command": "get pods"}, id="call-1"
                )
            ),
        )

        reply = to_chat_reply(response)

        parts = reply.candidates[0].parts
        assert parts[0].text == "Checking pods."
        assert parts[0].tool_calls == []
        assert parts[1].tool_calls == [
            ToolInvocationRequest(name="kubectl", arguments={"command": "get pods"}, id="call-1")
        ]

    def test_reply_skips_thoughts(self):
        response = make_response(
            types.Part(text="thinking...", thought=True),
            types.Part(text="Answer"),
        )

        parts = to_chat_reply(response).candidates[0].parts

        assert [p.text for p in parts] == ["Answer"]

    def test_reply_without_candidates(self):
        assert to_chat_reply(types.GenerateContentResponse()).candidates == []

    def test_message_for_query(self):
        assert to_message("list clusters") == "list clusters"

    def test_message_for_tool_result(self):
        result = ToolInvocationResult(name="gcloud", output={"output": "ok"}, id="c7")

        part = to_message(result)

        assert part.function_response.name == "gcloud"
        assert part.function_response.id == "c7"
        assert part.function_response.response == {"output": "ok"}


class TestGeminiChat:
    """Test the chat session wrapper."""

    def test_requires_api_key(self, mock_genai):
        with pytest.raises(ValueError, match="API key not provided"):
            make_chat(api_key=None)
        mock_genai.Client.assert_not_called()

    def test_creates_chat_with_tools(self, mock_genai):
        chat = make_chat(generation_params={"temperature": 0.2})

        assert chat.model == "gemini-2.0-flash"
        mock_genai.Client.assert_called_once_with(api_key="test-key")
        create = mock_genai.Client.return_value.aio.chats.create
        create.assert_called_once()
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "gemini-2.0-flash"
        config = kwargs["config"]
        assert config.system_instruction == "You are helpful."
        assert config.temperature == 0.2
        assert config.automatic_function_calling.disable is True
        names = [d.name for d in config.tools[0].function_declarations]
        assert names == ["gcloud", "kubectl"]

    def test_creates_chat_without_tools(self, mock_genai):
        make_chat(declarations=[])

        config = mock_genai.Client.return_value.aio.chats.create.call_args.kwargs["config"]
        assert config.tools is None

    @pytest.mark.asyncio
    async def test_send_converts_reply(self, mock_genai):
        chat = make_chat()
        sdk_chat = mock_genai.Client.return_value.aio.chats.create.return_value
        sdk_chat.send_message.return_value = make_response(types.Part(text="Hello"))

        reply = await chat.send("hi")

        sdk_chat.send_message.assert_awaited_once_with("hi")
        assert reply.candidates[0].parts[0].text == "Hello"

    @pytest.mark.asyncio
    async def test_send_wraps_api_errors(self, mock_genai):
        chat = make_chat()
        sdk_chat = mock_genai.Client.return_value.aio.chats.create.return_value
        sdk_chat.send_message.side_effect = errors.ClientError(
            429,
            {"error": {"code": 429, "message": "Resource exhausted", "status": "RESOURCE_EXHAUSTED"}},
        )

        with pytest.raises(ChatBackendError) as exc_info:
            await chat.send("hi")

        assert exc_info.value.status_code == 429
        assert "429" in str(exc_info.value)
