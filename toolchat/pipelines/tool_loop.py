"""Tool-calling turn loop: alternate model calls with tool execution until a plain answer."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Optional, Tuple

from toolchat.core.interfaces import ChatModel
from toolchat.pipelines.base import BasePipeline, PendingInput
from toolchat.service.errors import (
    LLMError,
    LLMProviderError,
    LLMTimeoutError,
    ToolExecutionError,
    ToolLoopExceededError,
)
from toolchat.session import ChatSession
from toolchat.tools.interfaces import Tool
from toolchat.types.context import RunContext
from toolchat.types.messages import Message, ToolCall, ToolResult
from toolchat.types.requests import ChatRequest
from toolchat.types.responses import ChatResponse, TurnResult, TurnState
from toolchat.types.streaming import StreamEvent

logger = logging.getLogger(__name__)

PreparedCall = Tuple[ToolCall, Tool]


class ToolLoopPipeline(BasePipeline):
    """Runs a turn: send pending input, execute requested tools, repeat until the model answers.

    Tool calls from one reply run concurrently; results are always sent back
    in the order the model requested them. A reply that still requests tools
    after ``max_tool_iterations`` tool rounds ends the turn with
    ``ToolLoopExceededError``.

    When a turn fails after the model asked for tools, every call left without
    a result gets an error tool result, so the next turn sends a well-formed
    transcript.
    """

    id = "tool_loop"
    capabilities = {"streaming": True, "tools": True}

    def __init__(
        self,
        max_tool_iterations: int = 10,
        tool_timeout_seconds: float | None = 30.0,
    ) -> None:
        if max_tool_iterations < 1:
            raise ValueError("max_tool_iterations must be at least 1")
        self.max_tool_iterations = max_tool_iterations
        self.tool_timeout_seconds = tool_timeout_seconds

    # -- public API ---------------------------------------------------------

    def run_turn(
        self, session: ChatSession, pending: PendingInput, context: RunContext | None = None
    ) -> TurnResult:
        context = context or RunContext.create(session_id=session.session_id)
        self._append_pending(session, pending)
        tool_schemas = session.tools.schemas() or None
        executed: List[ToolCall] = []

        try:
            for iteration in range(self.max_tool_iterations + 1):
                session.state = TurnState.AWAITING_MODEL_REPLY
                response = self._generate(session.model, self._request(session, tool_schemas, context))
                msg = response.message
                session.append(msg)

                if not msg.tool_calls:
                    session.state = TurnState.ANSWERED
                    return TurnResult(
                        text=msg.content,
                        state=session.state,
                        model=response.model,
                        round_trips=iteration + 1,
                        tool_calls=executed,
                        usage=response.usage,
                    )

                session.state = TurnState.HAS_TOOL_REQUESTS
                if iteration == self.max_tool_iterations:
                    break
                prepared = self._prepare(msg.tool_calls, session)
                results = self._execute_tool_calls(prepared, context)
                executed.extend(msg.tool_calls)
                for result in results:
                    session.append(result.to_message())
        except Exception as exc:
            session.state = TurnState.FAILED
            self._close_open_tool_calls(session, exc)
            raise

        raise self._loop_exceeded(session)

    def stream_turn(
        self, session: ChatSession, pending: PendingInput, context: RunContext | None = None
    ) -> Iterator[StreamEvent]:
        context = context or RunContext.create(session_id=session.session_id)
        run_id = context.run_id
        self._append_pending(session, pending)
        tool_schemas = session.tools.schemas() or None
        sequence = 1

        try:
            for iteration in range(self.max_tool_iterations + 1):
                session.state = TurnState.AWAITING_MODEL_REPLY
                request = self._request(session, tool_schemas, context, stream=True)
                text_parts: List[str] = []
                tool_calls: List[ToolCall] = []

                for event in session.model.stream(request):
                    if event.event_type == "error":
                        raise LLMProviderError(
                            f"{event.data.get('message', 'streaming failure')}: {event.data.get('details', '')}"
                        )
                    if event.event_type == "token":
                        text_parts.append(event.text)
                    elif event.event_type == "message_end":
                        tool_calls = [ToolCall(**tc) for tc in event.data.get("tool_calls") or []]
                    yield event.model_copy(update={"sequence": sequence, "run_id": run_id})
                    sequence += 1

                msg = Message(role="assistant", content="".join(text_parts), tool_calls=tool_calls or None)
                session.append(msg)

                if not tool_calls:
                    session.state = TurnState.ANSWERED
                    return

                session.state = TurnState.HAS_TOOL_REQUESTS
                if iteration == self.max_tool_iterations:
                    break

                # tool_start is only announced for calls that resolved and validated
                prepared = self._prepare(tool_calls, session)
                for tc, _tool in prepared:
                    yield StreamEvent(
                        event_type="tool_start",
                        data={"tool_name": tc.name, "tool_call_id": tc.id, "arguments": tc.arguments},
                        sequence=sequence,
                        run_id=run_id,
                    )
                    sequence += 1

                results = self._execute_tool_calls(prepared, context)
                for result in results:
                    yield StreamEvent(
                        event_type="tool_end",
                        data={
                            "tool_name": result.name,
                            "tool_call_id": result.tool_call_id,
                            "result": result.payload,
                        },
                        sequence=sequence,
                        run_id=run_id,
                    )
                    sequence += 1
                    session.append(result.to_message())
        except Exception as exc:
            session.state = TurnState.FAILED
            self._close_open_tool_calls(session, exc)
            raise

        raise self._loop_exceeded(session)

    # -- helpers ------------------------------------------------------------

    @staticmethod
    def _append_pending(session: ChatSession, pending: PendingInput) -> None:
        if isinstance(pending, str):
            session.append(Message(role="user", content=pending))
            return
        if not pending:
            raise ValueError("pending input must be user text or a non-empty list of tool results")
        for item in pending:
            message = item.to_message() if isinstance(item, ToolResult) else item
            if message.role != "tool" or not message.tool_call_id:
                raise ValueError("pending messages must be tool results with a tool_call_id")
            session.append(message)

    @staticmethod
    def _request(
        session: ChatSession,
        tool_schemas: Optional[List[Dict[str, Any]]],
        context: RunContext,
        stream: bool = False,
    ) -> ChatRequest:
        return ChatRequest(
            messages=list(session.history),
            stream=stream,
            model=session.model_name,
            tool_schemas=tool_schemas,
            context=context,
        )

    @staticmethod
    def _generate(model: ChatModel, request: ChatRequest) -> ChatResponse:
        try:
            return model.generate(request)
        except LLMError:
            raise
        except Exception as exc:
            raise LLMProviderError(f"Model {request.model} generate failed: {exc}") from exc

    def _loop_exceeded(self, session: ChatSession) -> ToolLoopExceededError:
        session.state = TurnState.LOOP_EXCEEDED
        exc = ToolLoopExceededError(
            f"Model still requested tools after {self.max_tool_iterations} tool rounds",
            iterations=self.max_tool_iterations,
        )
        self._close_open_tool_calls(session, exc)
        return exc

    @staticmethod
    def _close_open_tool_calls(session: ChatSession, exc: BaseException) -> None:
        """Answer every tool call of the last assistant message that has no result yet.

        History stays append-only: nothing is removed, the unanswered calls
        get an error payload naming the failure.
        """
        answered = set()
        for message in reversed(session.history):
            if message.role == "tool":
                answered.add(message.tool_call_id)
                continue
            if message.role != "assistant" or not message.tool_calls:
                return
            for tc in message.tool_calls:
                if tc.id not in answered:
                    payload = {"error": type(exc).__name__, "message": str(exc)}
                    session.append(ToolResult(tool_call_id=tc.id, name=tc.name, payload=payload).to_message())
            return

    @staticmethod
    def _prepare(tool_calls: List[ToolCall], session: ChatSession) -> List[PreparedCall]:
        """Resolve and validate every call; an unknown name or bad arguments fail before anything runs."""
        return [(tc, session.tools.prepare(tc.name, tc.arguments)) for tc in tool_calls]

    def _execute_tool_calls(self, prepared: List[PreparedCall], context: RunContext) -> List[ToolResult]:
        """Execute a batch of prepared calls concurrently; results keep request order.

        Each call runs on a daemon thread. A call still running at the deadline
        is abandoned: it cannot hold up the turn or interpreter exit.
        """
        workers = [_ToolWorker(tool, tc, context) for tc, tool in prepared]
        for worker in workers:
            worker.start()

        deadline = (
            time.monotonic() + self.tool_timeout_seconds
            if self.tool_timeout_seconds is not None
            else None
        )
        results: List[ToolResult] = []
        for worker in workers:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            worker.join(remaining)
            tc = worker.tool_call
            if worker.is_alive():
                raise LLMTimeoutError(
                    f"Tool {tc.name!r} did not finish within {self.tool_timeout_seconds}s"
                )
            if worker.error is not None:
                raise worker.error
            results.append(ToolResult(tool_call_id=tc.id, name=tc.name, payload=worker.payload))
        return results


class _ToolWorker(threading.Thread):
    """Runs one tool call; the outcome is read back after ``join``."""

    def __init__(self, tool: Tool, tool_call: ToolCall, context: RunContext) -> None:
        super().__init__(name=f"toolchat-tool-{tool_call.name}", daemon=True)
        self.tool = tool
        self.tool_call = tool_call
        self.context = context
        self.payload: Dict[str, Any] = {}
        self.error: Optional[Exception] = None

    def run(self) -> None:
        try:
            self.payload = _run_tool(self.tool, self.tool_call, self.context)
        except Exception as exc:
            self.error = exc


def _run_tool(tool: Tool, tool_call: ToolCall, context: RunContext) -> Dict[str, Any]:
    logger.info("Running tool %s with arguments %s", tool_call.name, tool_call.arguments)
    try:
        result = tool.run(tool_call.arguments, context)
    except LLMError:
        raise
    except Exception as exc:
        raise ToolExecutionError(
            f"Tool {tool_call.name!r} failed: {exc}", tool_name=tool_call.name
        ) from exc
    if isinstance(result, Mapping):
        return dict(result)
    return {"result": result}


__all__ = ["ToolLoopPipeline"]
