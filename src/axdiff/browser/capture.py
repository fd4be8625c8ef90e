# Accessibility tree capture
# Created: 2026-10-17
#
# The diff engine only consumes raw trees. Anything that can produce one
# (a live Playwright page, a recorded fixture) satisfies SnapshotCapturer.
"""Raw accessibility tree sources."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)

RawNode = Mapping[str, Any]


@runtime_checkable
class SnapshotCapturer(Protocol):
    """Produces the current raw accessibility tree, or None if unavailable."""

    async def capture(self) -> RawNode | None: ...


class StaticCapturer:
    """Replays pre-recorded raw trees in order.

    Returns None once the queue is exhausted.
    """

    def __init__(self, trees: Iterable[RawNode] = ()) -> None:
        self._trees: deque[RawNode] = deque(trees)

    def push(self, tree: RawNode) -> None:
        self._trees.append(tree)

    @property
    def pending(self) -> int:
        return len(self._trees)

    async def capture(self) -> RawNode | None:
        if not self._trees:
            return None
        return self._trees.popleft()


def _ax_value(value: Any) -> Any:
    """Unwrap a CDP ``AXValue`` (``{"type": ..., "value": ...}``)."""
    if isinstance(value, Mapping):
        return value.get("value")
    return value


def _convert_ax_node(
    ax_node: Mapping[str, Any],
    by_id: Mapping[str, Mapping[str, Any]],
    interesting_only: bool,
) -> list[dict[str, Any]]:
    children: list[dict[str, Any]] = []
    for child_id in ax_node.get("childIds", []):
        child = by_id.get(child_id)
        if child is not None:
            children.extend(_convert_ax_node(child, by_id, interesting_only))

    if interesting_only and ax_node.get("ignored"):
        return children

    raw: dict[str, Any] = {}
    role = _ax_value(ax_node.get("role"))
    if isinstance(role, str):
        raw["role"] = role
    name = _ax_value(ax_node.get("name"))
    if name is not None:
        raw["name"] = name
    for key in ("value", "description"):
        if key in ax_node:
            raw[key] = _ax_value(ax_node[key])
    for prop in ax_node.get("properties", []):
        prop_value = prop.get("value")
        if isinstance(prop_value, Mapping) and "value" in prop_value:
            raw[prop["name"]] = prop_value["value"]

    backend_id = ax_node.get("backendDOMNodeId")
    if isinstance(backend_id, int):
        raw["backendDOMNodeId"] = backend_id
    ax_id = ax_node.get("nodeId")
    if isinstance(ax_id, str):
        raw["axId"] = ax_id

    if children:
        raw["children"] = children
    return [raw]


def build_raw_tree(
    ax_nodes: list[Mapping[str, Any]],
    interesting_only: bool = True,
) -> dict[str, Any] | None:
    """Nest a flat ``Accessibility.getFullAXTree`` node list into a raw tree.

    Ignored nodes are dropped and their children hoisted when
    ``interesting_only`` is set.
    """
    if not ax_nodes:
        return None

    by_id = {node["nodeId"]: node for node in ax_nodes if "nodeId" in node}
    root = next((node for node in ax_nodes if not node.get("parentId")), ax_nodes[0])

    converted = _convert_ax_node(root, by_id, interesting_only)
    if len(converted) == 1:
        return converted[0]
    if not converted:
        return None
    return {"role": "RootWebArea", "children": converted}


class PlaywrightCapturer:
    """Captures the accessibility tree of a Playwright page over CDP.

    Chromium only. Nodes carry ``backendDOMNodeId`` and ``axId`` so the
    normalizer can key them across captures.
    """

    def __init__(self, page: Page, interesting_only: bool = True) -> None:
        self._page = page
        self.interesting_only = interesting_only

    @property
    def page(self) -> Page:
        return self._page

    async def capture(self) -> dict[str, Any] | None:
        if self._page.is_closed():
            logger.info("Page is closed, no accessibility tree to capture")
            return None

        cdp = await self._page.context.new_cdp_session(self._page)
        try:
            result = await cdp.send("Accessibility.getFullAXTree")
        finally:
            await cdp.detach()

        tree = build_raw_tree(result.get("nodes", []), self.interesting_only)
        if tree is None:
            logger.info("Accessibility tree for %s is empty", self._page.url)
        return tree


__all__ = [
    "PlaywrightCapturer",
    "RawNode",
    "SnapshotCapturer",
    "StaticCapturer",
    "build_raw_tree",
]
