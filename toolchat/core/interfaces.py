from __future__ import annotations

from typing import Iterator, Protocol, runtime_checkable

from toolchat.types.requests import ChatRequest
from toolchat.types.responses import ChatResponse
from toolchat.types.streaming import StreamEvent


@runtime_checkable
class ChatModel(Protocol):
    """
    Provider-agnostic chat model interface.

    Concrete implementations wrap LangChain chat models
    (e.g. ChatGoogleGenerativeAI, ChatOpenAI, ChatAnthropic) rather than
    calling provider SDKs directly.
    """

    name: str

    def generate(self, request: ChatRequest) -> ChatResponse:
        """Run a single non-streaming chat completion."""

        ...

    def stream(self, request: ChatRequest) -> Iterator[StreamEvent]:
        """Stream a sequence of events (tokens, metadata, etc.) for a chat completion."""

        ...


__all__ = ["ChatModel"]
