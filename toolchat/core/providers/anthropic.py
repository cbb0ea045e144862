from __future__ import annotations

import os

from toolchat.core.providers.base import BaseLangChainChatModel
from toolchat.core.registry import get_model_registry
from toolchat.service.errors import LLMConfigurationError, LLMProviderError

try:  # pragma: no cover
    from langchain_anthropic import ChatAnthropic
except Exception as exc:
    ChatAnthropic = None  # type: ignore[assignment]
    _import_error: Exception | None = exc
else:
    _import_error = None


class AnthropicChatModel(BaseLangChainChatModel):
    """ChatModel backed by LangChain's ChatAnthropic."""

    _provider_label = "Anthropic"
    _API_MODEL_PREFIX = "anthropic/"

    def __init__(self, model_name: str, timeout: float | None = None) -> None:
        if _import_error is not None or ChatAnthropic is None:
            raise LLMProviderError(
                "langchain-anthropic is not installed or failed to import. "
                "Install with `pip install langchain-anthropic`."
            ) from _import_error

        if not os.getenv("ANTHROPIC_API_KEY"):
            raise LLMConfigurationError(
                "ANTHROPIC_API_KEY is not set; cannot initialize AnthropicChatModel."
            )

        self.name = model_name
        api_model = model_name
        if model_name.startswith(self._API_MODEL_PREFIX):
            api_model = model_name[len(self._API_MODEL_PREFIX) :]
        self._client = ChatAnthropic(model=api_model, timeout=timeout, max_retries=0)


_registry = get_model_registry()
_registry.register_model_prefix("claude-", AnthropicChatModel)
_registry.register_model_prefix("anthropic/", AnthropicChatModel)


__all__ = ["AnthropicChatModel"]
