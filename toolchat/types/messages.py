from __future__ import annotations

import json
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field


Role = Literal["system", "user", "assistant", "tool"]


class Message(BaseModel):
    """Generic chat message used across the session history and providers."""

    role: Role
    content: str
    name: Optional[str] = None  # tool name on tool result messages
    tool_calls: Optional[list["ToolCall"]] = None  # assistant messages requesting tools
    tool_call_id: Optional[str] = None  # tool result messages
    metadata: Dict[str, Any] = Field(default_factory=dict)


class ToolCall(BaseModel):
    """Represents a tool invocation requested by the model."""

    id: str  # correlates call with result
    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class ToolResult(BaseModel):
    """Outcome of executing one ToolCall; payload may be a soft error."""

    tool_call_id: str
    name: str
    payload: Dict[str, Any] = Field(default_factory=dict)

    def to_message(self) -> Message:
        return Message(
            role="tool",
            content=json.dumps(self.payload),
            name=self.name,
            tool_call_id=self.tool_call_id,
        )


__all__ = ["Role", "Message", "ToolCall", "ToolResult"]
