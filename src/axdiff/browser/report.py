# Text rendering for accessibility diffs.
# Created: 2026-10-17
"""Line-oriented change reports."""

from __future__ import annotations

import json
from typing import Any

from axdiff.browser.canonical import MISSING
from axdiff.browser.diff import NodeChange, SnapshotDiff
from axdiff.browser.normalizer import NormalizedNode


def format_node_summary(node: NormalizedNode | NodeChange) -> str:
    """``[role] "name" at path P``, tolerating missing role or name."""
    role = f"[{node.role}]" if node.role else "[unknown role]"
    name = f' "{node.name}"' if node.name else ""
    return f"{role}{name} at path {node.path}"


def format_diff_value(value: Any) -> str:
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, (int, float)):
        return str(value)
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError):
        return str(value)
    except RecursionError:
        return f"<{type(value).__name__}>"


def format_diff_lines(diff: SnapshotDiff, compare_key: str) -> list[str]:
    """Render a diff as report lines.

    An empty diff yields a single "no changes" line.
    """
    if not diff.has_changes:
        return [f'No accessibility changes compared to baseline "{compare_key}".']

    lines = [
        f'Accessibility changes compared to baseline "{compare_key}":',
        f"Added nodes: {len(diff.added)}, "
        f"Removed nodes: {len(diff.removed)}, "
        f"Changed nodes: {len(diff.changed)}",
    ]

    if diff.added:
        lines.append("## Added")
        lines.extend(f"- {format_node_summary(node)}" for node in diff.added)

    if diff.removed:
        lines.append("## Removed")
        lines.extend(f"- {format_node_summary(node)}" for node in diff.removed)

    if diff.changed:
        lines.append("## Changed")
        for change in diff.changed:
            lines.append(f"- {format_node_summary(change)}")
            for detail in change.changes:
                lines.append(
                    f"  - {detail.property}: "
                    f"{format_diff_value(detail.before)} -> {format_diff_value(detail.after)}"
                )

    return lines


def format_diff(diff: SnapshotDiff, compare_key: str) -> str:
    return "\n".join(format_diff_lines(diff, compare_key))


__all__ = ["format_diff", "format_diff_lines", "format_diff_value", "format_node_summary"]
