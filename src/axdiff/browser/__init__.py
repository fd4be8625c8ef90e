# Accessibility snapshot diffing for browser automation
#
# Normalizes captured accessibility trees, diffs them against named
# baselines, and reports only what changed.
"""Accessibility snapshot diffing and baseline management."""

from .baseline import DEFAULT_BASELINE_KEY, BaselineStore, resolve_key
from .canonical import MISSING, canonicalize, sanitize, values_equal
from .capture import PlaywrightCapturer, SnapshotCapturer, StaticCapturer, build_raw_tree
from .change_snapshot import ChangeSnapshotResult, ChangeSnapshotStatus, take_change_snapshot
from .diff import (
    NodeChange,
    PropertyChange,
    SnapshotDiff,
    diff_node,
    diff_snapshots,
    has_snapshot_changes,
)
from .identity import fingerprint_id, resolve_node_id
from .normalizer import NormalizedNode, NormalizedSnapshot, SnapshotNormalizer, normalize_snapshot
from .report import format_diff, format_diff_lines
from .session import BrowserSession, BrowserSessionManager, get_browser_session_manager

__all__ = [
    # Identity and canonical forms
    "MISSING",
    "canonicalize",
    "sanitize",
    "values_equal",
    "fingerprint_id",
    "resolve_node_id",
    # Normalization
    "NormalizedNode",
    "NormalizedSnapshot",
    "SnapshotNormalizer",
    "normalize_snapshot",
    # Diffing
    "NodeChange",
    "PropertyChange",
    "SnapshotDiff",
    "diff_node",
    "diff_snapshots",
    "has_snapshot_changes",
    "format_diff",
    "format_diff_lines",
    # Baselines
    "DEFAULT_BASELINE_KEY",
    "BaselineStore",
    "resolve_key",
    # Capture and orchestration
    "PlaywrightCapturer",
    "SnapshotCapturer",
    "StaticCapturer",
    "build_raw_tree",
    "ChangeSnapshotResult",
    "ChangeSnapshotStatus",
    "take_change_snapshot",
    # Session
    "BrowserSession",
    "BrowserSessionManager",
    "get_browser_session_manager",
]
