from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict

from toolchat.core.interfaces import ChatModel
from toolchat.service.errors import LLMConfigurationError


ChatModelFactory = Callable[..., ChatModel]


@dataclass
class ModelRegistry:
    """
    Picks a provider for a model name by its prefix.

    Provider modules register themselves on import (``"gemini-"`` ->
    GeminiChatModel, ``"claude-"`` -> AnthropicChatModel, ...). The factory is
    called with the full model name and any provider options, e.g. ``timeout``.
    """

    _prefix_factories: Dict[str, ChatModelFactory] = field(default_factory=dict)

    def register_model_prefix(self, prefix: str, factory: ChatModelFactory) -> None:
        if not prefix:
            raise ValueError("prefix must be non-empty")
        self._prefix_factories[prefix] = factory

    def get_model(self, model_name: str, **options: Any) -> ChatModel:
        """Build the ChatModel for ``model_name``; LLMConfigurationError if no provider claims it."""
        # longest prefix wins
        for prefix in sorted(self._prefix_factories, key=len, reverse=True):
            if model_name.startswith(prefix):
                return self._prefix_factories[prefix](model_name, **options)
        known = sorted(self._prefix_factories) or "none"
        raise LLMConfigurationError(
            f"Unsupported model '{model_name}'; known prefixes: {known}"
        )

    def has_model(self, model_name: str) -> bool:
        return any(model_name.startswith(p) for p in self._prefix_factories)

    def clear(self) -> None:
        self._prefix_factories.clear()


_global_registry: ModelRegistry | None = None
_global_registry_lock = threading.Lock()


def get_model_registry() -> ModelRegistry:
    """Shared registry the provider modules register into."""
    global _global_registry
    if _global_registry is None:
        with _global_registry_lock:
            if _global_registry is None:
                _global_registry = ModelRegistry()
    return _global_registry


__all__ = ["ModelRegistry", "get_model_registry"]
