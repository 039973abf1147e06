"""Tests for the tool registry."""

from unittest.mock import AsyncMock

import pytest

from bubblechat.core.chat_types import ToolInvocationRequest
from bubblechat.core.errors import (
    DuplicateToolError,
    InvalidArgumentsError,
    UnknownToolError,
)
from bubblechat.tools.base import ToolRegistry, ToolSpec


def make_spec(name: str = "kubectl") -> ToolSpec:
    return ToolSpec.command_spec(name, f"Run {name}", f"The {name} command")


class TestToolSpec:
    """Test ToolSpec construction."""

    def test_command_spec(self):
        spec = make_spec()

        assert spec.name == "kubectl"
        assert spec.parameters["command"]["type"] == "string"
        assert spec.required == ("command",)

    def test_required_must_be_declared(self):
        with pytest.raises(ValueError):
            ToolSpec(name="bad", description="", parameters={}, required=("command",))


class TestToolRegistry:
    """Test ToolRegistry registration and dispatch."""

    def test_register_and_lookup(self):
        registry = ToolRegistry()
        spec = make_spec()
        registry.register(spec, AsyncMock())

        assert registry.declarations() == [spec]
        assert "helm" not in registry
        assert "kubectl" in registry
        assert len(registry) == 1

    def test_duplicate_registration_rejected(self):
        registry = ToolRegistry()
        registry.register(make_spec(), AsyncMock())

        with pytest.raises(DuplicateToolError) as exc_info:
            registry.register(make_spec(), AsyncMock())
        assert exc_info.value.name == "kubectl"
        assert len(registry) == 1

    def test_declarations_keep_registration_order(self):
        registry = ToolRegistry()
        registry.register(make_spec("gcloud"), AsyncMock())
        registry.register(make_spec("kubectl"), AsyncMock())

        assert [spec.name for spec in registry.declarations()] == ["gcloud", "kubectl"]
        assert registry.names() == ["gcloud", "kubectl"]

    @pytest.mark.asyncio
    async def test_dispatch_runs_executor(self):
        registry = ToolRegistry()
        executor = AsyncMock(return_value="default\nkube-system\n")
        registry.register(make_spec(), executor)

        output = await registry.dispatch(
            ToolInvocationRequest(name="kubectl", arguments={"command": "get namespaces"})
        )

        assert output == "default\nkube-system\n"
        executor.assert_awaited_once_with("get namespaces")

    @pytest.mark.asyncio
    async def test_dispatch_unknown_tool(self):
        registry = ToolRegistry()

        with pytest.raises(UnknownToolError) as exc_info:
            await registry.dispatch(ToolInvocationRequest(name="helm", arguments={"command": "ls"}))
        assert exc_info.value.tool_name == "helm"
        assert "helm" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_dispatch_missing_command(self):
        registry = ToolRegistry()
        executor = AsyncMock()
        registry.register(make_spec(), executor)

        with pytest.raises(InvalidArgumentsError, match="missing 'command'"):
            await registry.dispatch(ToolInvocationRequest(name="kubectl", arguments={}))
        executor.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_dispatch_non_string_command(self):
        registry = ToolRegistry()
        executor = AsyncMock()
        registry.register(make_spec(), executor)

        with pytest.raises(InvalidArgumentsError, match="must be a string, got int"):
            await registry.dispatch(
                ToolInvocationRequest(name="kubectl", arguments={"command": 3})
            )
        executor.assert_not_awaited()
