"""Base class for LangChain-backed ChatModel implementations.

Encapsulates the shared generate/stream logic so provider subclasses only
need to supply a configured LangChain chat model client.
"""

from __future__ import annotations

from typing import Iterator

from toolchat.core.interfaces import ChatModel
from toolchat.core.langchain_utils import (
    content_to_text,
    parse_tool_calls_from_ai_message,
    to_langchain_messages,
)
from toolchat.service.errors import LLMProviderError
from toolchat.types.messages import Message
from toolchat.types.requests import ChatRequest
from toolchat.types.responses import ChatResponse, Usage
from toolchat.types.streaming import StreamEvent


class BaseLangChainChatModel(ChatModel):
    """Shared generate/stream logic for all LangChain-backed providers.

    Subclasses must set ``self.name`` and ``self._client`` in their
    ``__init__`` (the LangChain chat model instance, e.g. ``ChatGoogleGenerativeAI``).
    They may override ``_provider_label`` for error messages.
    """

    name: str
    _client: object  # LangChain BaseChatModel instance
    _provider_label: str = "LLM"

    def _bound_client(self, request: ChatRequest):
        client = self._client
        if request.tool_schemas:
            client = client.bind_tools(request.tool_schemas)
        return client

    def generate(self, request: ChatRequest) -> ChatResponse:
        lc_messages = to_langchain_messages(request.messages)
        client = self._bound_client(request)
        try:
            result = client.invoke(lc_messages)
        except Exception as exc:
            raise LLMProviderError(
                f"{self._provider_label} generate failed for model={self.name}: {exc}"
            ) from exc

        message = Message(
            role="assistant",
            content=content_to_text(getattr(result, "content", "")),
            tool_calls=parse_tool_calls_from_ai_message(result),
        )

        usage = None
        usage_meta = getattr(result, "usage_metadata", None)
        if isinstance(usage_meta, dict):
            usage = Usage(
                prompt_tokens=usage_meta.get("input_tokens"),
                completion_tokens=usage_meta.get("output_tokens"),
                total_tokens=usage_meta.get("total_tokens"),
            )

        return ChatResponse(message=message, model=self.name, usage=usage, metadata={})

    def stream(self, request: ChatRequest) -> Iterator[StreamEvent]:
        lc_messages = to_langchain_messages(request.messages)
        client = self._bound_client(request)
        run_id = request.context.run_id if request.context else ""
        sequence = 1

        yield StreamEvent(
            event_type="message_start",
            data={"model": self.name},
            sequence=sequence,
            run_id=run_id,
        )
        sequence += 1

        aggregate = None
        try:
            for chunk in client.stream(lc_messages):
                aggregate = chunk if aggregate is None else aggregate + chunk
                text = content_to_text(getattr(chunk, "content", ""))
                if not text:
                    continue
                yield StreamEvent(
                    event_type="token",
                    data={"text": text},
                    sequence=sequence,
                    run_id=run_id,
                )
                sequence += 1
        except Exception as exc:
            yield StreamEvent(
                event_type="error",
                data={"message": f"{self._provider_label} streaming failure", "details": str(exc)},
                sequence=sequence,
                run_id=run_id,
            )
            return

        # Tool call chunks only become complete calls once aggregated.
        data = {"model": self.name}
        tool_calls = parse_tool_calls_from_ai_message(aggregate) if aggregate is not None else None
        if tool_calls:
            data["tool_calls"] = [tc.model_dump() for tc in tool_calls]
        yield StreamEvent(
            event_type="message_end",
            data=data,
            sequence=sequence,
            run_id=run_id,
        )


__all__ = ["BaseLangChainChatModel"]
