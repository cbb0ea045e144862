"""Immutable registry of the tools available to a chat session."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional

from toolchat.service.errors import UnknownToolError
from toolchat.tools.interfaces import Tool
from toolchat.tools.schema import tools_to_langchain_schemas
from toolchat.tools.validation import check_schema, validate_arguments
from toolchat.types.context import RunContext


@dataclass(frozen=True)
class ToolRegistry:
    """Holds tools by name; built once at startup and passed to the turn loop."""

    _tools: Mapping[str, Tool] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_tools(cls, tools: Iterable[Tool]) -> "ToolRegistry":
        """Build a registry, rejecting empty or duplicate names and bad schemas."""
        by_name: Dict[str, Tool] = {}
        for tool in tools:
            if not tool.name:
                raise ValueError("Tool name must be non-empty")
            if tool.name in by_name:
                raise ValueError(f"Duplicate tool name: {tool.name!r}")
            check_schema(tool)
            by_name[tool.name] = tool
        return cls(MappingProxyType(by_name))

    def get_tool(self, name: str) -> Optional[Tool]:
        """Return the tool with the given name, or None if not registered."""
        return self._tools.get(name)

    def resolve(self, name: str) -> Tool:
        """Return the tool with the given name. Raises UnknownToolError if missing."""
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(
                f"Unknown tool name: {name!r}. Available: {list(self._tools) or '[]'}",
                tool_name=name,
            )
        return tool

    def list_tools(self) -> Dict[str, Tool]:
        """Return a copy of the name -> tool mapping."""
        return dict(self._tools)

    def schemas(self) -> List[Dict[str, Any]]:
        """Function schemas for every tool, in registration order."""
        return tools_to_langchain_schemas(list(self._tools.values()))

    def prepare(self, name: str, args: Dict[str, Any]) -> Tool:
        """Resolve a tool and validate arguments for it without running it."""
        tool = self.resolve(name)
        validate_arguments(tool, args)
        return tool

    def dispatch(self, name: str, args: Dict[str, Any], context: RunContext) -> Dict[str, Any]:
        """Resolve, validate and run a single tool call."""
        return self.prepare(name, args).run(args, context)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools


__all__ = ["ToolRegistry"]
