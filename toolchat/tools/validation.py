"""Argument validation against a tool's declared JSON Schema."""

from __future__ import annotations

from typing import Any, Dict

import jsonschema

from toolchat.service.errors import ToolValidationError
from toolchat.tools.interfaces import Tool


def check_schema(tool: Tool) -> None:
    """Raise ValueError if the tool's parameter schema is not a valid JSON Schema."""
    try:
        jsonschema.Draft202012Validator.check_schema(tool.parameters)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Tool {tool.name!r} declares an invalid parameter schema: {e.message}") from e


def validate_arguments(tool: Tool, args: Dict[str, Any]) -> None:
    """Validate model-supplied arguments before the tool runs."""
    if not isinstance(args, dict):
        raise ToolValidationError(
            f"Arguments for {tool.name!r} must be an object, got {type(args).__name__}",
            tool_name=tool.name,
        )
    validator = jsonschema.Draft202012Validator(tool.parameters)
    errors = sorted(validator.iter_errors(args), key=lambda e: list(e.path))
    if errors:
        details = "; ".join(
            f"{'/'.join(str(p) for p in e.path) or '<root>'}: {e.message}" for e in errors
        )
        raise ToolValidationError(
            f"Invalid arguments for {tool.name!r}: {details}",
            tool_name=tool.name,
        )


__all__ = ["check_schema", "validate_arguments"]
