from __future__ import annotations

import os

from toolchat.core.providers.base import BaseLangChainChatModel
from toolchat.core.registry import get_model_registry
from toolchat.service.errors import LLMConfigurationError, LLMProviderError

try:  # pragma: no cover
    from langchain_google_genai import ChatGoogleGenerativeAI
except Exception as exc:
    ChatGoogleGenerativeAI = None  # type: ignore[assignment]
    _import_error: Exception | None = exc
else:
    _import_error = None


class GeminiChatModel(BaseLangChainChatModel):
    """ChatModel backed by LangChain's ChatGoogleGenerativeAI."""

    _provider_label = "Gemini"
    _API_MODEL_PREFIX = "gemini/"

    def __init__(self, model_name: str, timeout: float | None = None) -> None:
        if _import_error is not None or ChatGoogleGenerativeAI is None:
            raise LLMProviderError(
                "langchain-google-genai is not installed or failed to import. "
                "Install with `pip install langchain-google-genai`."
            ) from _import_error

        api_key = os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
        if not api_key:
            raise LLMConfigurationError(
                "GEMINI_API_KEY or GOOGLE_API_KEY must be set to use GeminiChatModel."
            )

        self.name = model_name
        api_model = model_name
        if model_name.startswith(self._API_MODEL_PREFIX):
            api_model = model_name[len(self._API_MODEL_PREFIX) :]
        self._client = ChatGoogleGenerativeAI(
            model=api_model,
            google_api_key=api_key,
            timeout=timeout,
            max_retries=0,
        )


_registry = get_model_registry()
_registry.register_model_prefix("gemini-", GeminiChatModel)
_registry.register_model_prefix("gemini/", GeminiChatModel)


__all__ = ["GeminiChatModel"]
