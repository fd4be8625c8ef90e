# Change-snapshot orchestration
# Created: 2026-10-17
#
# capture -> normalize -> look up baseline -> diff -> format -> store.
# Capture is the only await point; the rest is synchronous.
"""Compare the current accessibility tree against a stored baseline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum, auto

from axdiff.browser.baseline import BaselineStore, resolve_key
from axdiff.browser.capture import SnapshotCapturer
from axdiff.browser.diff import SnapshotDiff, diff_snapshots
from axdiff.browser.normalizer import NormalizedSnapshot, normalize_snapshot
from axdiff.browser.report import format_diff_lines

logger = logging.getLogger(__name__)

CAPTURE_FAILED_MESSAGE = "Unable to capture accessibility snapshot for the current page."


class ChangeSnapshotStatus(StrEnum):
    CAPTURE_FAILED = auto()
    BASELINE_CREATED = auto()
    UNCHANGED = auto()
    CHANGED = auto()


@dataclass
class ChangeSnapshotResult:
    """Outcome of one change-snapshot call."""

    status: ChangeSnapshotStatus
    baseline_key: str
    compare_key: str
    lines: list[str] = field(default_factory=list)
    diff: SnapshotDiff | None = None
    snapshot: NormalizedSnapshot | None = None

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def has_changes(self) -> bool:
        return self.status == ChangeSnapshotStatus.CHANGED


async def take_change_snapshot(
    capturer: SnapshotCapturer,
    store: BaselineStore,
    baseline_key: str | None = None,
    compare_to: str | None = None,
    replace_baseline: bool = True,
    fingerprint_identity: bool = False,
) -> ChangeSnapshotResult:
    """Report accessibility changes since a stored baseline.

    Args:
        capturer: Source of the current raw tree.
        store: Baselines owned by the calling session.
        baseline_key: Key the new snapshot is stored under ("default").
        compare_to: Key to compare against; defaults to ``baseline_key``.
        replace_baseline: Overwrite ``baseline_key`` after comparing.
        fingerprint_identity: Key hint-less nodes by content fingerprint.

    Returns:
        A ChangeSnapshotResult. A failed capture leaves the store untouched.
        A missing comparison baseline is created rather than reported as an
        error.
    """
    baseline_key = resolve_key(baseline_key)
    compare_key = resolve_key(compare_to, default=baseline_key)

    raw_tree = await capturer.capture()
    if raw_tree is None:
        logger.warning("Accessibility capture returned nothing")
        return ChangeSnapshotResult(
            status=ChangeSnapshotStatus.CAPTURE_FAILED,
            baseline_key=baseline_key,
            compare_key=compare_key,
            lines=[CAPTURE_FAILED_MESSAGE],
        )

    snapshot = normalize_snapshot(raw_tree, fingerprint_identity=fingerprint_identity)
    baseline = store.get(compare_key)

    if baseline is None:
        store.set(baseline_key, snapshot)
        logger.info("Created accessibility baseline %r (%d nodes)", baseline_key, len(snapshot))
        return ChangeSnapshotResult(
            status=ChangeSnapshotStatus.BASELINE_CREATED,
            baseline_key=baseline_key,
            compare_key=compare_key,
            lines=[
                f'No baseline found for key "{compare_key}". '
                "Created a baseline with the current snapshot."
            ],
            snapshot=snapshot,
        )

    diff = diff_snapshots(baseline, snapshot)
    status = ChangeSnapshotStatus.CHANGED if diff.has_changes else ChangeSnapshotStatus.UNCHANGED
    logger.info(
        "Compared against baseline %r: %d added, %d removed, %d changed",
        compare_key, len(diff.added), len(diff.removed), len(diff.changed),
    )

    if replace_baseline:
        store.set(baseline_key, snapshot)

    return ChangeSnapshotResult(
        status=status,
        baseline_key=baseline_key,
        compare_key=compare_key,
        lines=format_diff_lines(diff, compare_key),
        diff=diff,
        snapshot=snapshot,
    )


__all__ = [
    "CAPTURE_FAILED_MESSAGE",
    "ChangeSnapshotResult",
    "ChangeSnapshotStatus",
    "take_change_snapshot",
]
