"""Shared LangChain message conversion used by all providers."""

from __future__ import annotations

from typing import Any, List

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage

from toolchat.types.messages import Message, ToolCall


def _normalize_tool_call(tc: object, index: int) -> ToolCall:
    """Convert LangChain tool call (dict or object) to our ToolCall.

    Some providers (Gemini) omit call ids; a positional id keeps results correlated.
    """
    if isinstance(tc, dict):
        return ToolCall(
            id=tc.get("id") or f"call_{index}",
            name=tc["name"],
            arguments=tc.get("args") or {},
        )
    return ToolCall(
        id=getattr(tc, "id", None) or f"call_{index}",
        name=getattr(tc, "name", ""),
        arguments=getattr(tc, "args", None) or {},
    )


def parse_tool_calls_from_ai_message(ai_message: object) -> list[ToolCall] | None:
    """Extract our ToolCall list from a LangChain AIMessage (or similar)."""
    raw = getattr(ai_message, "tool_calls", None) or []
    if not raw:
        return None
    return [_normalize_tool_call(tc, i) for i, tc in enumerate(raw)]


def content_to_text(content: Any) -> str:
    """Flatten AIMessage content, which may be a string or a list of content parts."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return str(content)


def to_langchain_messages(messages: List[Message]):
    """Convert internal Message objects to LangChain message types.

    Role mapping:
        system    → SystemMessage
        assistant → AIMessage (with optional tool_calls)
        user      → HumanMessage
        tool      → ToolMessage if tool_call_id is set, else HumanMessage
    """
    lc_messages = []
    for m in messages:
        if m.role == "system":
            lc_messages.append(SystemMessage(content=m.content))
        elif m.role == "assistant":
            tool_calls_lc = None
            if m.tool_calls:
                tool_calls_lc = [
                    {"id": tc.id, "name": tc.name, "args": tc.arguments}
                    for tc in m.tool_calls
                ]
            lc_messages.append(AIMessage(content=m.content, tool_calls=tool_calls_lc or []))
        elif m.role == "tool" and m.tool_call_id:
            kwargs = {"name": m.name} if m.name else {}
            lc_messages.append(ToolMessage(content=m.content, tool_call_id=m.tool_call_id, **kwargs))
        else:
            lc_messages.append(HumanMessage(content=m.content))
    return lc_messages


__all__ = ["parse_tool_calls_from_ai_message", "content_to_text", "to_langchain_messages"]
