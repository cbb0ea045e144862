"""Test utilities for the toolchat framework."""

from __future__ import annotations

import os
import unittest
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import MagicMock

from toolchat.session import ChatSession
from toolchat.tools.registry import ToolRegistry
from toolchat.types.messages import Message, ToolCall
from toolchat.types.responses import ChatResponse
from toolchat.types.streaming import StreamEvent


def require_test_apis(reason: str = "Set TEST_APIS=True in the environment to run live API tests."):
    """
    Decorator to skip a test unless TEST_APIS is set to True (case-insensitive).

    Use for tests that call real provider APIs (Gemini, OpenAI, Anthropic) or Chroma.
    """
    test_apis = os.environ.get("TEST_APIS", "").strip().lower() == "true"
    return unittest.skipUnless(test_apis, reason)


class FuncTool:
    """Minimal Tool backed by a plain function, for tests."""

    description = "test tool"

    def __init__(
        self,
        name: str,
        fn: Callable[[Dict[str, Any]], Any],
        parameters: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.name = name
        self.fn = fn
        self.parameters = parameters or {"type": "object", "properties": {}}

    def run(self, args, context):
        return self.fn(args)


def reply(content: str = "", tool_calls: Optional[List[ToolCall]] = None) -> ChatResponse:
    return ChatResponse(
        message=Message(role="assistant", content=content, tool_calls=tool_calls),
        model="fake-model",
        usage=None,
        metadata={},
    )


def call(name: str, call_id: str = "call_1", **arguments) -> ToolCall:
    return ToolCall(id=call_id, name=name, arguments=arguments)


def fake_model(responses: Optional[List[ChatResponse]] = None) -> MagicMock:
    model = MagicMock()
    model.name = "fake-model"
    if responses is not None:
        model.generate.side_effect = responses
    return model


def stream_round(text: str = "", tool_calls: Optional[List[ToolCall]] = None) -> List[StreamEvent]:
    """Events a provider emits for one streamed model reply."""
    events = [StreamEvent(event_type="message_start", data={"model": "fake-model"}, sequence=1, run_id="")]
    for i, piece in enumerate(text.split(" ") if text else []):
        token = piece if i == 0 else " " + piece
        events.append(StreamEvent(event_type="token", data={"text": token}, sequence=len(events) + 1, run_id=""))
    end_data: Dict[str, Any] = {"model": "fake-model"}
    if tool_calls:
        end_data["tool_calls"] = [tc.model_dump() for tc in tool_calls]
    events.append(StreamEvent(event_type="message_end", data=end_data, sequence=len(events) + 1, run_id=""))
    return events


def make_session(model, tools=(), history=None) -> ChatSession:
    return ChatSession(model=model, tools=ToolRegistry.from_tools(tools), history=list(history or []))
