"""Unit tests for the tool protocol and registry."""

import pytest
from typing import Any
from unittest.mock import patch

from axdiff.browser.capture import StaticCapturer
from axdiff.browser.session import BrowserSessionManager
from axdiff.config import Settings
from axdiff.tools import BaseTool, ToolDefinition, ToolProtocol, ToolRegistry
from axdiff.tools.builtin import ChangeSnapshotTool, build_registry
from axdiff.tools.registry import check_arguments


class EchoTool(BaseTool):
    @property
    def name(self) -> str:
        return "echo"

    @property
    def description(self) -> str:
        return "Echo text back"

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {"text": {"type": "string"}},
            "required": ["text"],
        }

    async def execute(self, **params: Any) -> str:
        if "text" not in params:
            return self._error("text is required")
        return params["text"]


class BrokenTool(EchoTool):
    @property
    def name(self) -> str:
        return "broken"

    async def execute(self, **params: Any) -> str:
        raise RuntimeError("boom")


class TestToolDefinition:
    """Tests for provider schema export."""

    def test_openai_schema(self):
        schema = EchoTool().definition.to_openai_schema()
        assert schema["type"] == "function"
        assert schema["function"]["name"] == "echo"
        assert schema["function"]["parameters"]["required"] == ["text"]

    def test_anthropic_schema(self):
        schema = EchoTool().definition.to_anthropic_schema()
        assert schema["name"] == "echo"
        assert schema["input_schema"]["properties"]["text"]["type"] == "string"

    def test_defaults(self):
        definition = ToolDefinition(name="x", description="y")
        assert definition.parameters == {}
        assert definition.trust_level == "standard"


class TestBaseTool:
    def test_satisfies_protocol(self):
        assert isinstance(EchoTool(), ToolProtocol)
        assert isinstance(ChangeSnapshotTool(), ToolProtocol)

    @pytest.mark.asyncio
    async def test_error_format(self):
        assert await EchoTool().execute() == "Error: text is required"


class TestCheckArguments:
    def test_missing_required(self):
        schema = EchoTool().parameters
        assert check_arguments(schema, {}) == "Missing required argument(s): text"

    def test_unknown_argument(self):
        schema = EchoTool().parameters
        assert check_arguments(schema, {"text": "hi", "loud": True}) == "Unknown argument(s): loud"

    def test_valid(self):
        assert check_arguments(EchoTool().parameters, {"text": "hi"}) is None

    def test_schema_without_properties_accepts_anything(self):
        assert check_arguments({"type": "object"}, {"anything": 1}) is None


class TestToolRegistry:
    """Tests for ToolRegistry."""

    def test_register_and_lookup(self):
        tool = EchoTool()
        registry = ToolRegistry([tool])

        assert "echo" in registry
        assert registry.get("echo") is tool
        assert registry.names == ["echo"]
        assert list(registry) == [tool]
        assert len(registry) == 1

    def test_duplicate_name_rejected(self):
        registry = ToolRegistry([EchoTool()])
        with pytest.raises(ValueError, match="already registered"):
            registry.register(EchoTool())

    def test_unregister(self):
        registry = ToolRegistry([EchoTool()])
        assert registry.unregister("echo") is True
        assert registry.unregister("echo") is False
        assert "echo" not in registry

    def test_definitions(self):
        registry = ToolRegistry([EchoTool(), ChangeSnapshotTool()])

        openai_defs = registry.definitions()
        anthropic_defs = registry.definitions("anthropic")

        assert [d["function"]["name"] for d in openai_defs] == ["echo", "take_change_snapshot"]
        assert [d["name"] for d in anthropic_defs] == ["echo", "take_change_snapshot"]

    def test_definitions_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown schema format"):
            ToolRegistry().definitions("gemini")

    @pytest.mark.asyncio
    async def test_call(self):
        registry = ToolRegistry([EchoTool()])
        assert await registry.call("echo", {"text": "hi"}) == "hi"

    @pytest.mark.asyncio
    async def test_call_unknown(self):
        result = await ToolRegistry([EchoTool()]).call("missing")
        assert result == "Error: Unknown tool 'missing'. Available: echo"

    @pytest.mark.asyncio
    async def test_call_checks_arguments(self):
        registry = ToolRegistry([EchoTool()])
        assert await registry.call("echo") == "Error: Missing required argument(s): text"
        assert await registry.call("echo", {"text": "a", "x": 1}) == "Error: Unknown argument(s): x"

    @pytest.mark.asyncio
    async def test_call_failure_returns_error(self):
        registry = ToolRegistry([BrokenTool()])
        assert await registry.call("broken", {"text": "x"}) == "Error executing broken: boom"


class TestBuildRegistry:
    """Tests for the built-in tool registry."""

    def test_holds_change_snapshot_tool(self):
        registry = build_registry()
        assert registry.names == ["take_change_snapshot"]
        assert isinstance(registry.get("take_change_snapshot"), ChangeSnapshotTool)

    def test_fresh_instance_per_call(self):
        assert build_registry() is not build_registry()

    @pytest.mark.asyncio
    async def test_call_routes_to_session(self):
        manager = BrowserSessionManager()
        manager.open("default", StaticCapturer([{"role": "button", "name": "OK", "axId": "1"}]))
        with patch(
            "axdiff.tools.builtin.change_snapshot.get_browser_session_manager",
            return_value=manager,
        ), patch(
            "axdiff.tools.builtin.change_snapshot.get_settings",
            return_value=Settings(default_baseline_key="default", replace_baseline=True),
        ):
            result = await build_registry().call(
                "take_change_snapshot", {"baseline_key": "main", "replace_baseline": "false"}
            )

        assert result == 'No baseline found for key "main". Created a baseline with the current snapshot.'
        assert manager.get("default").baselines.get("main") is not None

    @pytest.mark.asyncio
    async def test_call_rejects_unknown_argument(self):
        result = await build_registry().call("take_change_snapshot", {"tab": 2})
        assert result == "Error: Unknown argument(s): tab"
