from .messages import Message, ToolCall, ToolResult
from .context import RunContext
from .requests import ChatRequest
from .responses import ChatResponse, TurnResult, TurnState, Usage
from .streaming import StreamEvent

__all__ = [
    "Message",
    "ToolCall",
    "ToolResult",
    "RunContext",
    "ChatRequest",
    "ChatResponse",
    "TurnResult",
    "TurnState",
    "Usage",
    "StreamEvent",
]
