"""
Provider-agnostic tool-calling chat framework.

Public entrypoint:

    from toolchat import ChatService
    service = ChatService.from_settings(load_settings())
"""

from .service.chat_service import ChatService  # noqa: F401
from .service.config import load_settings  # noqa: F401

__all__ = ["ChatService", "load_settings"]
