# Accessibility snapshot normalizer
# Created: 2026-10-17
#
# Walks a raw accessibility tree once and produces a flat mapping from stable
# key to normalized node, ready for diffing against a stored baseline.
"""Raw accessibility tree to normalized snapshot converter."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from axdiff.browser.canonical import sanitize
from axdiff.browser.identity import fingerprint_id, has_identity_hint, resolve_node_id

logger = logging.getLogger(__name__)

# Keys never copied into a node's comparable data
EXCLUDED_KEYS = frozenset({"children", "id"})


@dataclass
class NormalizedNode:
    """One accessibility node in comparable form.

    ``path`` is the dot-joined child index chain from the root. It is for
    display only; identity lives in ``id``.
    """

    id: str
    path: str
    data: dict[str, Any] = field(default_factory=dict)
    role: str | None = None
    name: str | None = None
    parent_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"id": self.id, "path": self.path}
        if self.role is not None:
            result["role"] = self.role
        if self.name is not None:
            result["name"] = self.name
        result["data"] = self.data
        if self.parent_id is not None:
            result["parentId"] = self.parent_id
        return result


@dataclass
class NormalizedSnapshot:
    """A normalized capture: timestamp plus nodes keyed by stable id.

    ``nodes`` keeps pre-order traversal order.
    """

    captured_at: str
    nodes: dict[str, NormalizedNode] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.nodes)

    def get(self, node_id: str) -> NormalizedNode | None:
        return self.nodes.get(node_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "capturedAt": self.captured_at,
            "nodes": {node_id: node.to_dict() for node_id, node in self.nodes.items()},
        }


def normalize_name(value: Any) -> str | None:
    """Project a raw name onto a display string.

    Accepts a string, a number, or a single-level ``{"value": ...}`` holder
    whose value is a string or number.
    """
    if isinstance(value, str):
        return value
    if _is_number(value):
        return _format_number(value)
    if isinstance(value, Mapping) and "value" in value:
        inner = value["value"]
        if isinstance(inner, str):
            return inner
        if _is_number(inner):
            return _format_number(inner)
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def sanitize_node_data(node: Mapping[str, Any]) -> dict[str, Any]:
    """Copy every attribute except the child list and raw ``id``."""
    return {
        str(key): sanitize(value)
        for key, value in node.items()
        if key not in EXCLUDED_KEYS
    }


class SnapshotNormalizer:
    """Normalizes raw accessibility trees.

    Traversal is depth-first pre-order starting at path ``"0"``. Every raw
    node produces exactly one normalized node.

    Args:
        fingerprint_identity: Key hint-less nodes by a content fingerprint
            instead of their path. Off by default, which keeps sibling
            reordering visible as a removal plus an addition.
    """

    def __init__(self, fingerprint_identity: bool = False) -> None:
        self.fingerprint_identity = fingerprint_identity

    def normalize(self, root: Mapping[str, Any]) -> NormalizedSnapshot:
        nodes: dict[str, NormalizedNode] = {}
        # (raw node, path, parent id, occurrence of its role/name among siblings)
        stack: list[tuple[Mapping[str, Any], str, str | None, int]] = [(root, "0", None, 0)]
        while stack:
            node, path, parent_id, occurrence = stack.pop()
            node_id = self._add_node(nodes, node, path, parent_id, occurrence)
            # reversed so the first child is popped next and pre-order holds
            stack.extend(reversed(self._child_entries(node, path, node_id)))

        logger.debug("Normalized accessibility snapshot with %d nodes", len(nodes))
        return NormalizedSnapshot(
            captured_at=datetime.now(tz=UTC).isoformat(),
            nodes=nodes,
        )

    def _add_node(
        self,
        nodes: dict[str, NormalizedNode],
        node: Mapping[str, Any],
        path: str,
        parent_id: str | None,
        occurrence: int,
    ) -> str:
        data = sanitize_node_data(node)
        role = data.get("role") if isinstance(data.get("role"), str) else None
        name = normalize_name(data.get("name"))

        if self.fingerprint_identity and not has_identity_hint(node):
            node_id = fingerprint_id(parent_id, role, name, occurrence)
        else:
            node_id = resolve_node_id(node, path)

        if node_id in nodes:
            logger.debug("Duplicate node id %s at path %s", node_id, path)
            node_id = f"{node_id}@{path}"

        nodes[node_id] = NormalizedNode(
            id=node_id,
            path=path,
            data=data,
            role=role,
            name=name,
            parent_id=parent_id,
        )
        return node_id

    @staticmethod
    def _child_entries(
        node: Mapping[str, Any],
        path: str,
        node_id: str,
    ) -> list[tuple[Mapping[str, Any], str, str | None, int]]:
        children = node.get("children")
        if not isinstance(children, (list, tuple)):
            return []
        entries: list[tuple[Mapping[str, Any], str, str | None, int]] = []
        seen: Counter[tuple[str | None, str | None]] = Counter()
        for index, child in enumerate(children):
            if not isinstance(child, Mapping):
                logger.warning(
                    "Skipping non-mapping child %r at path %s.%d",
                    type(child).__name__, path, index,
                )
                continue
            child_key = (
                child.get("role") if isinstance(child.get("role"), str) else None,
                normalize_name(child.get("name")),
            )
            entries.append((child, f"{path}.{index}", node_id, seen[child_key]))
            seen[child_key] += 1
        return entries


def normalize_snapshot(
    root: Mapping[str, Any],
    fingerprint_identity: bool = False,
) -> NormalizedSnapshot:
    """Normalize a raw accessibility tree into a fresh snapshot."""
    return SnapshotNormalizer(fingerprint_identity=fingerprint_identity).normalize(root)


__all__ = [
    "NormalizedNode",
    "NormalizedSnapshot",
    "SnapshotNormalizer",
    "normalize_name",
    "normalize_snapshot",
    "sanitize_node_data",
]
