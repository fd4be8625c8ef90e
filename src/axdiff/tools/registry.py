# Registry of agent-facing tools.
# Created: 2026-10-17
#
# An agent host lists the registry's schemas in its provider's format, then
# routes each tool call back through call() by name.
"""Name-indexed tool registry with schema export and argument checks."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from axdiff.tools.protocol import ToolProtocol

logger = logging.getLogger(__name__)

SCHEMA_FORMATS = ("openai", "anthropic")

# Characters of a tool result echoed into debug logs
_LOG_PREVIEW = 200


def check_arguments(schema: Mapping[str, Any], arguments: Mapping[str, Any]) -> str | None:
    """Describe why ``arguments`` do not fit a tool's JSON schema, or None.

    Only required and unknown keys are checked. Value types are left to the
    tool itself.
    """
    missing = [key for key in schema.get("required", []) if key not in arguments]
    if missing:
        return f"Missing required argument(s): {', '.join(missing)}"

    properties = schema.get("properties")
    if properties:
        unknown = sorted(key for key in arguments if key not in properties)
        if unknown:
            return f"Unknown argument(s): {', '.join(unknown)}"
    return None


def _preview(result: str) -> str:
    if len(result) <= _LOG_PREVIEW:
        return result
    return result[:_LOG_PREVIEW] + "..."


class ToolRegistry:
    """Tools an agent host can list and call by name.

    Usage:
        registry = build_registry()
        schemas = registry.definitions("anthropic")
        report = await registry.call("take_change_snapshot", {"baseline_key": "chat"})
    """

    def __init__(self, tools: Iterable[ToolProtocol] = ()) -> None:
        self._tools: dict[str, ToolProtocol] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: ToolProtocol) -> None:
        """Add a tool. Names are unique within one registry."""
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool
        logger.debug("Registered tool %s (%s trust)", tool.name, tool.definition.trust_level)

    def unregister(self, name: str) -> bool:
        """Remove a tool. Returns False if it was not registered."""
        return self._tools.pop(name, None) is not None

    def get(self, name: str) -> ToolProtocol | None:
        return self._tools.get(name)

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolProtocol]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def definitions(self, schema: str = "openai") -> list[dict[str, Any]]:
        """Export every tool definition in a provider's schema format.

        Args:
            schema: One of ``SCHEMA_FORMATS``

        Raises:
            ValueError: For an unknown schema format
        """
        if schema not in SCHEMA_FORMATS:
            raise ValueError(
                f"Unknown schema format '{schema}'. Expected one of: {', '.join(SCHEMA_FORMATS)}"
            )
        definitions = [tool.definition for tool in self._tools.values()]
        if schema == "anthropic":
            return [definition.to_anthropic_schema() for definition in definitions]
        return [definition.to_openai_schema() for definition in definitions]

    async def call(self, name: str, arguments: Mapping[str, Any] | None = None) -> str:
        """Run a tool call from an agent.

        Never raises. Every problem comes back as an ``Error...`` string for
        the agent to read.
        """
        tool = self._tools.get(name)
        if tool is None:
            available = ", ".join(self._tools) or "none"
            return f"Error: Unknown tool '{name}'. Available: {available}"

        arguments = dict(arguments or {})
        problem = check_arguments(tool.definition.parameters, arguments)
        if problem:
            return f"Error: {problem}"

        logger.debug("Calling %s with %s", name, arguments)
        try:
            result = await tool.execute(**arguments)
        except Exception as e:
            logger.exception("Tool %s failed", name)
            return f"Error executing {name}: {e}"

        logger.debug("%s returned %s", name, _preview(result))
        return result


__all__ = ["SCHEMA_FORMATS", "ToolRegistry", "check_arguments"]
