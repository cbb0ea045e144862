from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from .context import RunContext
from .messages import Message


class ChatRequest(BaseModel):
    """Everything a ChatModel needs for one round trip: full history plus bound tools."""

    messages: List[Message]
    stream: bool = False
    model: Optional[str] = None
    tool_schemas: Optional[List[Dict[str, Any]]] = None  # None sends the request unbound
    context: Optional[RunContext] = None


__all__ = ["ChatRequest"]
