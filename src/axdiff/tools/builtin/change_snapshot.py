# Accessibility change-snapshot tool for AI agent control
# Created: 2026-10-17
#
# Lets an agent poll a live page for accessibility changes without pulling
# the whole tree back into its context.
"""Change-snapshot tool for agent use."""

from __future__ import annotations

from typing import Any

from ..protocol import BaseTool
from ...browser.baseline import resolve_key
from ...browser.change_snapshot import take_change_snapshot
from ...browser.session import get_browser_session_manager
from ...config import get_settings


_TRUE_STRINGS = frozenset({"true", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "no"})


def _parse_flag(value: Any, default: bool) -> bool | None:
    """Read a boolean tool argument given as a bool or its string spelling.

    Returns None for anything else.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    return None


class ChangeSnapshotTool(BaseTool):
    """Report accessibility changes against a stored baseline.

    The first call for a key stores a baseline. Later calls report only the
    added, removed and changed nodes, then move the baseline forward unless
    ``replace_baseline`` is false.
    """

    DEFAULT_SESSION_ID = "default"

    @property
    def name(self) -> str:
        return "take_change_snapshot"

    @property
    def description(self) -> str:
        return (
            "Capture accessibility (AX) changes compared to a stored baseline and "
            "report only the differences. Use this when polling dynamic views such "
            "as chats, live dashboards or refreshing SPA regions to confirm that "
            "expected elements appeared or attributes flipped without reading the "
            "entire tree."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "baseline_key": {
                    "type": "string",
                    "description": 'Identifier used to store the baseline snapshot. Defaults to "default".',
                },
                "compare_to": {
                    "type": "string",
                    "description": (
                        "Compare against a different baseline key. When omitted, "
                        "compares against the same key as baseline_key."
                    ),
                },
                "replace_baseline": {
                    "type": "boolean",
                    "description": (
                        "Whether to replace the stored baseline with the latest "
                        "snapshot. Defaults to true."
                    ),
                },
                "session_id": {
                    "type": "string",
                    "description": "Browser session ID (optional, uses default if not specified)",
                },
            },
            "required": [],
        }

    async def execute(self, **params: Any) -> str:
        """Run one change comparison.

        Args:
            baseline_key: Key the new snapshot is stored under
            compare_to: Key of the baseline to compare against
            replace_baseline: Whether to store the new snapshot afterwards
            session_id: Optional session identifier

        Returns:
            The change report, or an error message
        """
        session_id = params.get("session_id") or self.DEFAULT_SESSION_ID
        settings = get_settings()

        session = get_browser_session_manager().get(session_id)
        if session is None:
            return self._error(f"No browser session '{session_id}' is open")

        replace_baseline = _parse_flag(params.get("replace_baseline"), settings.replace_baseline)
        if replace_baseline is None:
            return self._error("replace_baseline must be true or false")

        try:
            result = await take_change_snapshot(
                session.capturer,
                session.baselines,
                baseline_key=resolve_key(
                    params.get("baseline_key"), default=settings.default_baseline_key
                ),
                compare_to=params.get("compare_to"),
                replace_baseline=replace_baseline,
                fingerprint_identity=settings.fingerprint_identity,
            )
        except Exception as e:
            return self._error(str(e))

        return result.text


__all__ = ["ChangeSnapshotTool"]
