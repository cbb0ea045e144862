"""
Turn logging helpers.

One structured record per turn is written to the ``toolchat.calls`` logger.
These functions never raise: a logging failure must never surface to the
caller.

Fields are attached under ``extra={"call": {...}}`` so handlers and
formatters can pick them up:
- Non-streaming: final text, round trips, tool calls, usage.
- Streaming: response assembled from the events after the stream finishes
  (content from token events, tool calls from tool_start/tool_end).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List

if TYPE_CHECKING:
    from toolchat.session import ChatSession
    from toolchat.types.context import RunContext
    from toolchat.types.responses import TurnResult
    from toolchat.types.streaming import StreamEvent

logger = logging.getLogger(__name__)
call_logger = logging.getLogger("toolchat.calls")


def _base_fields(session: "ChatSession", context: "RunContext", duration_ms: int) -> Dict[str, Any]:
    return {
        "run_id": context.run_id,
        "session_id": session.session_id,
        "model": session.model_name,
        "history_length": len(session.history),
        "state": session.state.value if session.state else None,
        "duration_ms": duration_ms,
    }


def log_call(
    session: "ChatSession", context: "RunContext", result: "TurnResult", duration_ms: int
) -> None:
    """Write a success record for a non-streaming turn."""
    try:
        fields = _base_fields(session, context, duration_ms)
        fields.update(
            status="success",
            is_stream=False,
            round_trips=result.round_trips,
            tool_calls=[tc.name for tc in result.tool_calls],
            usage=result.usage.model_dump() if result.usage else None,
        )
        call_logger.info(
            "turn %s answered in %d round trip(s), %d ms",
            context.run_id,
            result.round_trips,
            duration_ms,
            extra={"call": fields},
        )
    except Exception:
        logger.exception("Failed to write turn log (non-streaming)")


def assemble_stream_response(events: "List[StreamEvent]") -> Dict[str, Any]:
    """Build a single response summary from stream events (after stream finished)."""
    content = "".join(e.text for e in events)
    # Pair tool_start with tool_end by tool_call_id
    tool_by_id: dict = {}
    for e in events:
        if e.event_type == "tool_start":
            tid = e.data.get("tool_call_id") or ""
            tool_by_id[tid] = {
                "tool_call_id": tid,
                "tool_name": e.data.get("tool_name", ""),
                "arguments": e.data.get("arguments", {}),
                "result": None,
            }
        elif e.event_type == "tool_end":
            tid = e.data.get("tool_call_id") or ""
            entry = tool_by_id.setdefault(
                tid,
                {"tool_call_id": tid, "tool_name": e.data.get("tool_name", ""), "arguments": {}},
            )
            entry["result"] = e.data.get("result")
    return {"content": content, "tool_calls": list(tool_by_id.values())}


def log_stream(
    session: "ChatSession",
    context: "RunContext",
    events: "List[StreamEvent]",
    duration_ms: int,
) -> None:
    """Write a success record after a streaming turn completes."""
    try:
        assembled = assemble_stream_response(events)
        fields = _base_fields(session, context, duration_ms)
        fields.update(
            status="success",
            is_stream=True,
            round_trips=sum(1 for e in events if e.event_type == "message_start"),
            tool_calls=[tc["tool_name"] for tc in assembled["tool_calls"]],
            response=assembled,
        )
        call_logger.info(
            "turn %s streamed %d characters, %d ms",
            context.run_id,
            len(assembled["content"]),
            duration_ms,
            extra={"call": fields},
        )
    except Exception:
        logger.exception("Failed to write turn log (streaming)")


def log_error(
    session: "ChatSession",
    context: "RunContext",
    exc: BaseException,
    duration_ms: int,
    *,
    is_stream: bool = False,
) -> None:
    """Write an error record."""
    try:
        fields = _base_fields(session, context, duration_ms)
        fields.update(
            status="error",
            is_stream=is_stream,
            error_type=type(exc).__name__,
            error_message=str(exc),
        )
        call_logger.warning(
            "turn %s failed: %s: %s",
            context.run_id,
            type(exc).__name__,
            exc,
            extra={"call": fields},
        )
    except Exception:
        logger.exception("Failed to write turn error log")


__all__ = ["log_call", "log_stream", "log_error", "assemble_stream_response"]
