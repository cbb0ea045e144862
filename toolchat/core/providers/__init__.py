"""
Provider-specific ChatModel implementations.

These modules wrap LangChain chat model integrations for each vendor and
register their model-name prefixes on import.
"""

from .base import BaseLangChainChatModel  # noqa: F401
from .gemini import GeminiChatModel  # noqa: F401
from .openai import OpenAIChatModel  # noqa: F401
from .anthropic import AnthropicChatModel  # noqa: F401

__all__ = ["BaseLangChainChatModel", "GeminiChatModel", "OpenAIChatModel", "AnthropicChatModel"]
