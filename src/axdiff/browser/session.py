# Browser sessions and their baseline stores.
# Created: 2026-10-17
"""Session registry: one capturer and one baseline store per session."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from axdiff.browser.baseline import BaselineStore
from axdiff.browser.capture import PlaywrightCapturer, SnapshotCapturer
from axdiff.config import get_settings

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)


@dataclass
class BrowserSession:
    """A driven page plus the baselines recorded against it.

    The baseline store lives exactly as long as the session.
    """

    session_id: str
    capturer: SnapshotCapturer
    baselines: BaselineStore = field(default_factory=BaselineStore)


class BrowserSessionManager:
    """Tracks open browser sessions by id."""

    def __init__(self) -> None:
        self._sessions: dict[str, BrowserSession] = {}

    def open(self, session_id: str, capturer: SnapshotCapturer) -> BrowserSession:
        """Register a session, replacing any previous one with the same id."""
        if session_id in self._sessions:
            logger.info("Replacing browser session '%s'", session_id)
        session = BrowserSession(session_id=session_id, capturer=capturer)
        self._sessions[session_id] = session
        return session

    def open_page(self, session_id: str, page: Page) -> BrowserSession:
        """Register a session that captures a Playwright page over CDP.

        Ignored AX nodes are pruned according to
        ``Settings.capture_interesting_only``.
        """
        capturer = PlaywrightCapturer(
            page, interesting_only=get_settings().capture_interesting_only
        )
        return self.open(session_id, capturer)

    def get(self, session_id: str) -> BrowserSession | None:
        return self._sessions.get(session_id)

    def close_session(self, session_id: str) -> bool:
        """Forget a session and its baselines. Returns False if unknown."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.baselines.clear()
        logger.info("Closed browser session '%s'", session_id)
        return True

    @property
    def session_ids(self) -> list[str]:
        return list(self._sessions)


_manager: BrowserSessionManager | None = None


def get_browser_session_manager() -> BrowserSessionManager:
    """Get the process-wide session manager."""
    global _manager
    if _manager is None:
        _manager = BrowserSessionManager()
    return _manager


__all__ = ["BrowserSession", "BrowserSessionManager", "get_browser_session_manager"]
