from __future__ import annotations

import os

from toolchat.core.providers.base import BaseLangChainChatModel
from toolchat.core.registry import get_model_registry
from toolchat.service.errors import LLMConfigurationError, LLMProviderError

try:  # pragma: no cover
    from langchain_openai import ChatOpenAI
except Exception as exc:
    ChatOpenAI = None  # type: ignore[assignment]
    _import_error: Exception | None = exc
else:
    _import_error = None


class OpenAIChatModel(BaseLangChainChatModel):
    """ChatModel backed by LangChain's ChatOpenAI."""

    _provider_label = "OpenAI"
    # routing prefix only; the OpenAI API does not know it
    _API_MODEL_PREFIX = "openai/"

    def __init__(self, model_name: str, timeout: float | None = None) -> None:
        if _import_error is not None or ChatOpenAI is None:
            raise LLMProviderError(
                "langchain-openai is not installed or failed to import. "
                "Install with `pip install langchain-openai`."
            ) from _import_error

        if not os.getenv("OPENAI_API_KEY"):
            raise LLMConfigurationError(
                "OPENAI_API_KEY is not set; cannot initialize OpenAIChatModel."
            )

        self.name = model_name
        api_model = model_name
        if model_name.startswith(self._API_MODEL_PREFIX):
            api_model = model_name[len(self._API_MODEL_PREFIX) :]
        self._client = ChatOpenAI(model=api_model, timeout=timeout, max_retries=0, stream_usage=True)


_registry = get_model_registry()
_registry.register_model_prefix("gpt-", OpenAIChatModel)
_registry.register_model_prefix("o1", OpenAIChatModel)
_registry.register_model_prefix("openai/", OpenAIChatModel)


__all__ = ["OpenAIChatModel"]
