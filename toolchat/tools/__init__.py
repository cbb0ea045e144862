from .interfaces import Tool
from .registry import ToolRegistry
from .schema import tool_schema, tools_to_langchain_schemas
from .validation import validate_arguments

__all__ = ["Tool", "ToolRegistry", "tool_schema", "tools_to_langchain_schemas", "validate_arguments"]
