"""Function-calling schemas handed to LangChain ``bind_tools()``."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from toolchat.tools.interfaces import Tool


def tool_schema(tool: Tool) -> Dict[str, Any]:
    """OpenAI-style function declaration; every LangChain provider accepts this shape."""
    return {
        "type": "function",
        "function": {
            "name": tool.name,
            "description": tool.description,
            "parameters": tool.parameters,
        },
    }


def tools_to_langchain_schemas(tools: Iterable[Tool]) -> List[Dict[str, Any]]:
    return [tool_schema(tool) for tool in tools]


__all__ = ["tool_schema", "tools_to_langchain_schemas"]
