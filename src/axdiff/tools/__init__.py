# Tools package.

from axdiff.tools.protocol import BaseTool, ToolDefinition, ToolProtocol
from axdiff.tools.registry import ToolRegistry

__all__ = [
    "ToolProtocol",
    "BaseTool",
    "ToolDefinition",
    "ToolRegistry",
]
