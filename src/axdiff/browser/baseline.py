# Named baseline snapshots for change comparisons.
# Created: 2026-10-17
#
# Owned by a browser session and discarded with it. No locking: callers run
# one change comparison per key at a time.
"""Keyed store of normalized baseline snapshots."""

from __future__ import annotations

import logging

from axdiff.browser.normalizer import NormalizedSnapshot

logger = logging.getLogger(__name__)

DEFAULT_BASELINE_KEY = "default"


def resolve_key(key: str | None, default: str = DEFAULT_BASELINE_KEY) -> str:
    """Trim a caller-supplied key; None or blank maps to ``default``."""
    if key is None:
        return default
    key = key.strip()
    return key or default


class BaselineStore:
    """Baselines keyed by caller-chosen strings.

    Entries never expire; ``set`` overwrites.
    """

    def __init__(self) -> None:
        self._baselines: dict[str, NormalizedSnapshot] = {}

    def get(self, key: str | None = None) -> NormalizedSnapshot | None:
        return self._baselines.get(resolve_key(key))

    def set(self, key: str | None, snapshot: NormalizedSnapshot) -> None:
        key = resolve_key(key)
        self._baselines[key] = snapshot
        logger.debug("Stored baseline %r (%d nodes)", key, len(snapshot))

    def delete(self, key: str | None) -> bool:
        """Remove a baseline. Returns False when the key was not stored."""
        return self._baselines.pop(resolve_key(key), None) is not None

    def clear(self) -> None:
        self._baselines.clear()

    def keys(self) -> list[str]:
        return list(self._baselines)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and resolve_key(key) in self._baselines

    def __len__(self) -> int:
        return len(self._baselines)


__all__ = ["DEFAULT_BASELINE_KEY", "BaselineStore", "resolve_key"]
