# Builtin tools package.

from axdiff.tools.builtin.change_snapshot import ChangeSnapshotTool
from axdiff.tools.registry import ToolRegistry


def build_registry() -> ToolRegistry:
    """Registry holding every built-in tool."""
    return ToolRegistry([ChangeSnapshotTool()])


__all__ = [
    "ChangeSnapshotTool",
    "build_registry",
]
