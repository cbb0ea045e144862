"""
ChatService: facade for starting sessions and running or streaming turns.

    from toolchat.service import ChatService, load_settings

    settings = load_settings()
    service = ChatService.from_settings(settings)
    session = service.start_session(tools=[...], system_prompt="...")
    result = service.run_turn(session, "What's the price of prod-123?")

For streaming:

    for event in service.stream_turn(session, "Tell me about Project BlueFox"):
        if event.event_type == "token":
            print(event.data["text"], end="")
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional

from toolchat.core.interfaces import ChatModel
from toolchat.core.registry import ModelRegistry, get_model_registry
from toolchat.pipelines.base import BasePipeline, PendingInput
from toolchat.pipelines.tool_loop import ToolLoopPipeline
from toolchat.service.errors import LLMError, LLMProviderError
from toolchat.service.logger import log_call, log_error, log_stream
from toolchat.session import ChatSession
from toolchat.tools.interfaces import Tool
from toolchat.tools.registry import ToolRegistry
from toolchat.types.context import RunContext
from toolchat.types.messages import Message
from toolchat.types.responses import TurnResult
from toolchat.types.streaming import StreamEvent

if TYPE_CHECKING:
    from toolchat.service.config import ChatSettings


def create_chat_model(
    settings: "ChatSettings", model_registry: ModelRegistry | None = None
) -> ChatModel:
    """Build the configured chat model. Raises LLMConfigurationError on a bad name or missing key."""
    import toolchat.core.providers  # noqa: F401  (registers provider prefixes)

    registry = model_registry or get_model_registry()
    return registry.get_model(settings.model, timeout=settings.model_timeout_seconds)


class ChatService:
    """Owns one chat model and one pipeline; times, logs and normalizes every turn."""

    def __init__(self, model: ChatModel, pipeline: BasePipeline | None = None) -> None:
        self.model = model
        self.pipeline = pipeline or ToolLoopPipeline()

    @classmethod
    def from_settings(
        cls, settings: "ChatSettings", model: ChatModel | None = None
    ) -> "ChatService":
        pipeline = ToolLoopPipeline(
            max_tool_iterations=settings.max_tool_iterations,
            tool_timeout_seconds=settings.tool_timeout_seconds,
        )
        return cls(model or create_chat_model(settings), pipeline)

    def start_session(
        self,
        tools: Iterable[Tool] | ToolRegistry,
        history: Optional[List[Message]] = None,
        system_prompt: str | None = None,
    ) -> ChatSession:
        """Create a session bound to this service's model and the given tools.

        Tool names are checked (unique, non-empty, valid schema) here, so a
        bad tool set fails before the first turn.
        """
        registry = tools if isinstance(tools, ToolRegistry) else ToolRegistry.from_tools(tools)
        messages: List[Message] = []
        if system_prompt:
            messages.append(Message(role="system", content=system_prompt))
        messages.extend(history or [])
        return ChatSession(model=self.model, tools=registry, history=messages)

    def run_turn(self, session: ChatSession, pending: PendingInput) -> TurnResult:
        context = RunContext.create(session_id=session.session_id)
        t0 = time.monotonic()
        try:
            result = self.pipeline.run_turn(session, pending, context)
            log_call(session, context, result, int((time.monotonic() - t0) * 1000))
            return result
        except LLMError as exc:
            log_error(session, context, exc, int((time.monotonic() - t0) * 1000))
            raise
        except Exception as exc:
            log_error(session, context, exc, int((time.monotonic() - t0) * 1000))
            raise LLMProviderError(f"Pipeline {self.pipeline.id} run failed") from exc

    def stream_turn(self, session: ChatSession, pending: PendingInput) -> Iterator[StreamEvent]:
        context = RunContext.create(session_id=session.session_id)
        t0 = time.monotonic()
        events: list[StreamEvent] = []
        try:
            for event in self.pipeline.stream_turn(session, pending, context):
                events.append(event)
                yield event
            log_stream(session, context, events, int((time.monotonic() - t0) * 1000))
        except LLMError as exc:
            log_error(session, context, exc, int((time.monotonic() - t0) * 1000), is_stream=True)
            raise
        except Exception as exc:
            log_error(session, context, exc, int((time.monotonic() - t0) * 1000), is_stream=True)
            raise LLMProviderError(f"Pipeline {self.pipeline.id} stream failed") from exc


__all__ = ["ChatService", "create_chat_model"]
