"""Chat session: ordered history bound to one model and one tool set."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional
from uuid import uuid4

from toolchat.core.interfaces import ChatModel
from toolchat.tools.registry import ToolRegistry
from toolchat.types.messages import Message
from toolchat.types.responses import TurnState


@dataclass
class ChatSession:
    """Append-only message history for the lifetime of the process.

    ``state`` holds the state of the most recent (or in-flight) turn.
    """

    model: ChatModel
    tools: ToolRegistry
    history: List[Message] = field(default_factory=list)
    session_id: str = field(default_factory=lambda: str(uuid4()))
    state: Optional[TurnState] = None

    def append(self, message: Message) -> None:
        self.history.append(message)

    @property
    def model_name(self) -> str:
        return self.model.name


__all__ = ["ChatSession"]
