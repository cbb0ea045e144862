"""Base pipeline interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterator, Sequence, Union

from toolchat.session import ChatSession
from toolchat.types.context import RunContext
from toolchat.types.messages import Message, ToolResult
from toolchat.types.responses import TurnResult
from toolchat.types.streaming import StreamEvent

# User text, or already-prepared tool results when retrying a turn.
PendingInput = Union[str, Sequence[Union[Message, ToolResult]]]


class BasePipeline(ABC):
    """Abstract base for turn pipelines."""

    id: str
    capabilities: Dict[str, bool]  # e.g. {"streaming": True, "tools": True}

    @abstractmethod
    def run_turn(
        self, session: ChatSession, pending: PendingInput, context: RunContext | None = None
    ) -> TurnResult:
        """Run one turn to completion and return the final answer."""
        ...

    def stream_turn(
        self, session: ChatSession, pending: PendingInput, context: RunContext | None = None
    ) -> Iterator[StreamEvent]:
        """Stream turn events. Default: raise; override if supported."""
        raise NotImplementedError(
            f"Pipeline {self.id} does not support streaming (capabilities={self.capabilities})"
        )


__all__ = ["BasePipeline", "PendingInput"]
