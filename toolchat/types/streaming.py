from __future__ import annotations

from typing import Any, Dict, Literal

from pydantic import BaseModel, Field


# message_* and token come from the model; tool_* from the turn loop.
StreamEventType = Literal[
    "message_start",
    "token",
    "message_end",
    "tool_start",
    "tool_end",
    "error",
]


class StreamEvent(BaseModel):
    """One event of a streamed turn, numbered from 1 within the turn."""

    event_type: StreamEventType
    data: Dict[str, Any] = Field(default_factory=dict)
    sequence: int
    run_id: str

    @property
    def text(self) -> str:
        """Token text, or "" for non-token events."""
        return self.data.get("text", "") if self.event_type == "token" else ""


__all__ = ["StreamEventType", "StreamEvent"]
