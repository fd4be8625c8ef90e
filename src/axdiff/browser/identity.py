# Stable node keys for accessibility tree captures.
# Created: 2026-10-17
"""Cross-capture identity for raw accessibility nodes."""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from typing import Any

PATH_ID_PREFIX = "path:"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def resolve_node_id(node: Mapping[str, Any], path: str) -> str:
    """Build the identity key for a raw node.

    Every present hint is joined, strongest first:

    - ``backendDOMNodeId`` (int): tied to the rendered DOM element
    - ``nodeId`` (int): stable within one capture/session only
    - ``axId`` (str): accessibility subsystem identifier

    Nodes without any hint fall back to positional identity
    (``path:<path>``), which does not survive sibling reordering.
    """
    identifiers: list[str] = []

    backend_id = node.get("backendDOMNodeId")
    if _is_int(backend_id):
        identifiers.append(f"backend:{backend_id}")

    node_id = node.get("nodeId")
    if _is_int(node_id):
        identifiers.append(f"node:{node_id}")

    ax_id = node.get("axId")
    if isinstance(ax_id, str):
        identifiers.append(f"ax:{ax_id}")

    if identifiers:
        return "|".join(identifiers)
    return f"{PATH_ID_PREFIX}{path}"


def has_identity_hint(node: Mapping[str, Any]) -> bool:
    """True when resolve_node_id would not fall back to the path."""
    return (
        _is_int(node.get("backendDOMNodeId"))
        or _is_int(node.get("nodeId"))
        or isinstance(node.get("axId"), str)
    )


def fingerprint_id(
    parent_id: str | None,
    role: str | None,
    name: str | None,
    occurrence: int,
) -> str:
    """Content fingerprint for hint-less nodes (opt-in).

    ``occurrence`` counts earlier siblings with the same role and name, so
    reordering siblings with distinct content keeps their keys.
    """
    material = "\x1f".join(
        [parent_id or "", role or "", name or "", str(occurrence)]
    )
    digest = hashlib.sha1(material.encode("utf-8")).hexdigest()[:16]
    return f"fp:{digest}"


__all__ = ["PATH_ID_PREFIX", "fingerprint_id", "has_identity_hint", "resolve_node_id"]
