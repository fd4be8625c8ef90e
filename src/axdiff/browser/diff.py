# Accessibility snapshot diff engine
# Created: 2026-10-17
"""Added/removed/changed reports between two normalized snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from axdiff.browser.canonical import MISSING, canonicalize, values_equal
from axdiff.browser.identity import PATH_ID_PREFIX
from axdiff.browser.normalizer import NormalizedNode, NormalizedSnapshot


@dataclass(frozen=True)
class PropertyChange:
    """One attribute transition. ``MISSING`` marks an absent side."""

    property: str
    before: Any
    after: Any

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"property": self.property}
        if self.before is not MISSING:
            result["before"] = self.before
        if self.after is not MISSING:
            result["after"] = self.after
        return result


@dataclass
class NodeChange:
    """A node present in both snapshots whose data differs."""

    id: str
    path: str
    changes: list[PropertyChange] = field(default_factory=list)
    role: str | None = None
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"id": self.id, "path": self.path}
        if self.role is not None:
            result["role"] = self.role
        if self.name is not None:
            result["name"] = self.name
        result["changes"] = [change.to_dict() for change in self.changes]
        return result


@dataclass
class SnapshotDiff:
    added: list[NormalizedNode] = field(default_factory=list)
    removed: list[NormalizedNode] = field(default_factory=list)
    changed: list[NodeChange] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed or self.changed)

    def to_dict(self) -> dict[str, Any]:
        return {
            "added": [node.to_dict() for node in self.added],
            "removed": [node.to_dict() for node in self.removed],
            "changed": [change.to_dict() for change in self.changed],
        }


def diff_node(baseline: NormalizedNode, current: NormalizedNode) -> list[PropertyChange]:
    """Compare two versions of a node over the union of their data keys.

    Keys are visited in baseline order, then keys that only exist in current.
    Reported values are the stored values, not their canonical text.
    """
    keys = list(baseline.data)
    keys.extend(key for key in current.data if key not in baseline.data)

    differences: list[PropertyChange] = []
    for key in keys:
        before = baseline.data.get(key, MISSING)
        after = current.data.get(key, MISSING)
        if values_equal(before, after):
            continue
        differences.append(PropertyChange(property=key, before=before, after=after))
    return differences


# (parent id, canonical data) -> paths of positionally keyed nodes holding it
_SiblingIndex = dict[tuple[str | None, str], set[str]]


def _sibling_index(snapshot: NormalizedSnapshot) -> _SiblingIndex:
    index: _SiblingIndex = {}
    for node in snapshot.nodes.values():
        if node.id.startswith(PATH_ID_PREFIX):
            key = (node.parent_id, canonicalize(node.data))
            index.setdefault(key, set()).add(node.path)
    return index


def _held_elsewhere(index: _SiblingIndex, node: NormalizedNode, parent_id: str | None, path: str) -> bool:
    return bool(index.get((parent_id, canonicalize(node.data)), set()) - {path})


def _same_position_node(
    previous: NormalizedNode,
    current: NormalizedNode,
    baseline_siblings: _SiblingIndex,
    current_siblings: _SiblingIndex,
) -> bool:
    """Whether a positionally keyed node still holds the same element.

    Path keys only say where a node sits. A different element moved in when
    the role or name at that position changes, or when siblings under the
    same parent swapped contents: the baseline content now sits at another
    sibling position and the current content sat at another one before.
    Either case is reported as a removal plus an addition.
    """
    if not current.id.startswith(PATH_ID_PREFIX):
        return True
    if previous.role != current.role or previous.name != current.name:
        return False
    if values_equal(previous.data, current.data):
        return True
    swapped = _held_elsewhere(
        current_siblings, previous, current.parent_id, current.path
    ) and _held_elsewhere(baseline_siblings, current, previous.parent_id, previous.path)
    return not swapped


def diff_snapshots(baseline: NormalizedSnapshot, current: NormalizedSnapshot) -> SnapshotDiff:
    """Compute the minimal change set from ``baseline`` to ``current``.

    Pure and deterministic: added and changed nodes follow current's
    traversal order, removed nodes follow baseline's.
    """
    diff = SnapshotDiff()
    replaced: set[str] = set()
    baseline_siblings = _sibling_index(baseline)
    current_siblings = _sibling_index(current)

    for node_id, current_node in current.nodes.items():
        previous = baseline.nodes.get(node_id)
        if previous is None:
            diff.added.append(current_node)
            continue
        if not _same_position_node(previous, current_node, baseline_siblings, current_siblings):
            replaced.add(node_id)
            diff.added.append(current_node)
            continue
        changes = diff_node(previous, current_node)
        if changes:
            diff.changed.append(
                NodeChange(
                    id=node_id,
                    path=current_node.path,
                    changes=changes,
                    role=current_node.role if current_node.role is not None else previous.role,
                    name=current_node.name if current_node.name is not None else previous.name,
                )
            )

    for node_id, baseline_node in baseline.nodes.items():
        if node_id not in current.nodes or node_id in replaced:
            diff.removed.append(baseline_node)

    return diff


def has_snapshot_changes(diff: SnapshotDiff) -> bool:
    return diff.has_changes


__all__ = [
    "NodeChange",
    "PropertyChange",
    "SnapshotDiff",
    "diff_node",
    "diff_snapshots",
    "has_snapshot_changes",
]
