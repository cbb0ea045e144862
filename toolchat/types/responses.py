from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .messages import Message, ToolCall


class Usage(BaseModel):
    """Token accounting for a single model call."""

    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None


class ChatResponse(BaseModel):
    """Normalized response from a chat model."""

    message: Message
    model: str
    usage: Optional[Usage] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class TurnState(str, Enum):
    """States of the tool-calling turn loop."""

    AWAITING_MODEL_REPLY = "awaiting_model_reply"
    HAS_TOOL_REQUESTS = "has_tool_requests"
    ANSWERED = "answered"
    FAILED = "failed"
    LOOP_EXCEEDED = "loop_exceeded"

    @property
    def is_terminal(self) -> bool:
        return self in (TurnState.ANSWERED, TurnState.FAILED, TurnState.LOOP_EXCEEDED)


class TurnResult(BaseModel):
    """Final outcome of one user-to-answer exchange."""

    text: str
    state: TurnState
    model: str
    round_trips: int
    tool_calls: List[ToolCall] = Field(default_factory=list)
    usage: Optional[Usage] = None


__all__ = ["Usage", "ChatResponse", "TurnState", "TurnResult"]
