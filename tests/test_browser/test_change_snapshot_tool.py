# Change-snapshot tool tests
"""Tests for the take_change_snapshot agent tool."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from axdiff.browser.baseline import BaselineStore
from axdiff.browser.capture import StaticCapturer
from axdiff.browser.session import BrowserSessionManager
from axdiff.config import Settings
from axdiff.tools.builtin.change_snapshot import ChangeSnapshotTool
from axdiff.tools.protocol import BaseTool


def toggle_page(pressed=False, alert=None):
    children = [{"role": "button", "name": "Toggle", "pressed": pressed, "backendDOMNodeId": 2}]
    if alert:
        children.append({"role": "alert", "name": alert, "backendDOMNodeId": 3})
    return {"role": "RootWebArea", "name": "Test", "backendDOMNodeId": 1, "children": children}


@pytest.fixture
def settings():
    settings = Settings()
    with patch("axdiff.tools.builtin.change_snapshot.get_settings", return_value=settings):
        yield settings


@pytest.fixture
def manager():
    manager = BrowserSessionManager()
    with patch(
        "axdiff.tools.builtin.change_snapshot.get_browser_session_manager",
        return_value=manager,
    ):
        yield manager


class TestChangeSnapshotToolDefinition:
    """Tests for ChangeSnapshotTool metadata and definition."""

    def test_tool_name(self):
        assert ChangeSnapshotTool().name == "take_change_snapshot"

    def test_tool_description(self):
        tool = ChangeSnapshotTool()
        assert "baseline" in tool.description.lower()
        assert len(tool.description) > 20

    def test_tool_inherits_base(self):
        assert isinstance(ChangeSnapshotTool(), BaseTool)

    def test_parameters_schema(self):
        params = ChangeSnapshotTool().parameters

        assert params["type"] == "object"
        for key in ("baseline_key", "compare_to", "replace_baseline", "session_id"):
            assert key in params["properties"]
        assert params["properties"]["replace_baseline"]["type"] == "boolean"
        assert params["required"] == []

    def test_definition_export(self):
        tool = ChangeSnapshotTool()
        definition = tool.definition

        assert definition.name == "take_change_snapshot"
        assert definition.trust_level == "standard"
        assert definition.parameters == tool.parameters


class TestChangeSnapshotToolExecute:
    """Tests for running comparisons through the tool."""

    @pytest.mark.asyncio
    async def test_no_session(self, settings, manager):
        result = await ChangeSnapshotTool().execute()

        assert result.startswith("Error:")
        assert "default" in result

    @pytest.mark.asyncio
    async def test_creates_baseline(self, settings, manager):
        session = manager.open("default", StaticCapturer([toggle_page()]))

        result = await ChangeSnapshotTool().execute()

        assert "No baseline found for key" in result
        assert session.baselines.get("default") is not None

    @pytest.mark.asyncio
    async def test_reports_changes_without_full_tree(self, settings, manager):
        manager.open(
            "default",
            StaticCapturer([toggle_page(), toggle_page(pressed=True, alert="New socket message!")]),
        )
        tool = ChangeSnapshotTool()
        await tool.execute(baseline_key="chat")

        result = await tool.execute(baseline_key="chat", replace_baseline=False)

        assert 'Accessibility changes compared to baseline "chat":' in result
        assert "Added nodes:" in result
        assert "Changed nodes:" in result
        assert "pressed: false -> true" in result
        assert "New socket message!" in result
        assert "RootWebArea" not in result

    @pytest.mark.asyncio
    async def test_replace_baseline_false(self, settings, manager):
        session = manager.open("default", StaticCapturer([toggle_page(), toggle_page(pressed=True)]))
        tool = ChangeSnapshotTool()
        await tool.execute()
        original = session.baselines.get("default")

        await tool.execute(replace_baseline=False)

        assert session.baselines.get("default") is original

    @pytest.mark.asyncio
    async def test_replace_baseline_false_as_string(self, settings, manager):
        """A string "false" keeps the old baseline."""
        session = manager.open("default", StaticCapturer([toggle_page(), toggle_page(pressed=True)]))
        tool = ChangeSnapshotTool()
        await tool.execute()
        original = session.baselines.get("default")

        await tool.execute(replace_baseline="false")

        assert session.baselines.get("default") is original

    @pytest.mark.asyncio
    async def test_replace_baseline_true_as_string(self, settings, manager):
        settings.replace_baseline = False
        session = manager.open("default", StaticCapturer([toggle_page(), toggle_page(pressed=True)]))
        tool = ChangeSnapshotTool()
        await tool.execute()
        original = session.baselines.get("default")

        await tool.execute(replace_baseline="True")

        assert session.baselines.get("default") is not original

    @pytest.mark.asyncio
    async def test_replace_baseline_invalid(self, settings, manager):
        session = manager.open("default", StaticCapturer([toggle_page()]))
        tool = ChangeSnapshotTool()

        result = await tool.execute(replace_baseline="sometimes")

        assert result.startswith("Error:")
        assert "replace_baseline" in result
        assert session.baselines.get("default") is None
        assert session.capturer.pending == 1

    @pytest.mark.asyncio
    async def test_settings_replace_default(self, settings, manager):
        settings.replace_baseline = False
        session = manager.open("default", StaticCapturer([toggle_page(), toggle_page(pressed=True)]))
        tool = ChangeSnapshotTool()
        await tool.execute()
        original = session.baselines.get("default")

        await tool.execute()

        assert session.baselines.get("default") is original

    @pytest.mark.asyncio
    async def test_settings_default_key(self, settings, manager):
        settings.default_baseline_key = "main"
        session = manager.open("default", StaticCapturer([toggle_page()]))

        result = await ChangeSnapshotTool().execute(baseline_key="   ")

        assert 'key "main"' in result
        assert session.baselines.keys() == ["main"]

    @pytest.mark.asyncio
    async def test_named_session(self, settings, manager):
        manager.open("default", StaticCapturer())
        other = manager.open("checkout", StaticCapturer([toggle_page()]))

        await ChangeSnapshotTool().execute(session_id="checkout")

        assert other.baselines.get("default") is not None

    @pytest.mark.asyncio
    async def test_capture_unavailable(self, settings, manager):
        manager.open("default", StaticCapturer())

        result = await ChangeSnapshotTool().execute()

        assert result == "Unable to capture accessibility snapshot for the current page."

    @pytest.mark.asyncio
    async def test_capture_error_reported(self, settings, manager):
        capturer = MagicMock()
        capturer.capture = AsyncMock(side_effect=RuntimeError("Target page closed"))
        session = manager.open("default", capturer)

        result = await ChangeSnapshotTool().execute()

        assert result == "Error: Target page closed"
        assert isinstance(session.baselines, BaselineStore)
        assert len(session.baselines) == 0
