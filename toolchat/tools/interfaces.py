"""Tool interface for the chat framework."""

from __future__ import annotations

from typing import Any, Dict, Protocol, runtime_checkable

from toolchat.types.context import RunContext


@runtime_checkable
class Tool(Protocol):
    """Protocol for a callable tool the model may request.

    ``parameters`` is a JSON Schema object describing the arguments; it is
    exposed verbatim to the model and used to validate calls before ``run``.
    """

    name: str
    description: str
    parameters: Dict[str, Any]

    def run(self, args: Dict[str, Any], context: RunContext) -> Dict[str, Any]:
        """Execute the tool with the given arguments and run context."""
        ...


__all__ = ["Tool"]
