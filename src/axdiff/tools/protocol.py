# Tool protocol shared by every agent-facing tool.
# Created: 2026-10-17

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass
class ToolDefinition:
    """Provider-neutral description of a tool."""

    name: str
    description: str
    parameters: dict[str, Any] = field(default_factory=dict)
    trust_level: str = "standard"

    def to_openai_schema(self) -> dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }

    def to_anthropic_schema(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.parameters,
        }


@runtime_checkable
class ToolProtocol(Protocol):
    """Anything the registry can expose to an agent."""

    @property
    def name(self) -> str: ...

    @property
    def definition(self) -> ToolDefinition: ...

    async def execute(self, **params: Any) -> str: ...


class BaseTool(ABC):
    """Base class for tools. Subclasses supply name, description and execute."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def description(self) -> str: ...

    @property
    def trust_level(self) -> str:
        return "standard"

    @property
    def parameters(self) -> dict[str, Any]:
        return {"type": "object", "properties": {}}

    @property
    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            parameters=self.parameters,
            trust_level=self.trust_level,
        )

    @abstractmethod
    async def execute(self, **params: Any) -> str: ...

    def _error(self, message: str) -> str:
        return f"Error: {message}"
