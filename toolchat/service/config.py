"""Settings loaded from the process environment."""

from __future__ import annotations

import os
from typing import Literal, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from toolchat.service.errors import LLMConfigurationError

DEFAULT_MODEL = "gemini-2.0-flash"

# settings field -> environment variable
ENV_VARS = {
    "model": "TOOLCHAT_MODEL",
    "model_timeout_seconds": "TOOLCHAT_MODEL_TIMEOUT_SECONDS",
    "max_tool_iterations": "TOOLCHAT_MAX_TOOL_ITERATIONS",
    "tool_timeout_seconds": "TOOLCHAT_TOOL_TIMEOUT_SECONDS",
    "stream": "TOOLCHAT_STREAM",
    "log_level": "TOOLCHAT_LOG_LEVEL",
    "memory_collection": "TOOLCHAT_MEMORY_COLLECTION",
    "memory_top_k": "TOOLCHAT_MEMORY_TOP_K",
    "chroma_path": "CHROMA_PATH",
    "chroma_host": "CHROMA_HOST",
    "chroma_port": "CHROMA_PORT",
    "wikipedia_language": "WIKIPEDIA_LANGUAGE",
    "http_timeout_seconds": "TOOLCHAT_HTTP_TIMEOUT_SECONDS",
}


class ChatSettings(BaseModel):
    """Runtime configuration for the chat CLI and its tools."""

    model: str = DEFAULT_MODEL
    model_timeout_seconds: float = Field(60.0, gt=0)
    max_tool_iterations: int = Field(10, ge=1)
    tool_timeout_seconds: float = Field(30.0, gt=0)
    stream: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    # memory (Chroma)
    memory_collection: str = "agent-memory"
    memory_top_k: int = Field(3, ge=1)
    chroma_path: Optional[str] = None  # set to use an embedded persistent client
    chroma_host: str = "localhost"
    chroma_port: int = 8000

    # Wikipedia
    wikipedia_language: str = "en"
    http_timeout_seconds: float = Field(10.0, gt=0)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ChatSettings":
        """Build settings from environment variables; unset or blank values keep defaults.

        Raises LLMConfigurationError when a value cannot be parsed.
        """
        env = os.environ if environ is None else environ
        values = {}
        for field_name, var in ENV_VARS.items():
            raw = env.get(var)
            if raw is None or not raw.strip():
                continue
            raw = raw.strip()
            values[field_name] = raw.upper() if field_name == "log_level" else raw
        try:
            return cls(**values)
        except ValidationError as exc:
            problems = "; ".join(
                f"{ENV_VARS.get(str(err['loc'][0]), err['loc'][0])}: {err['msg']}"
                for err in exc.errors()
            )
            raise LLMConfigurationError(f"Invalid configuration: {problems}") from exc


def load_settings(dotenv_path: str | None = None) -> ChatSettings:
    """Load a `.env` file (if present) into the environment, then read settings.

    Variables already set in the environment win over the file.
    """
    load_dotenv(dotenv_path=dotenv_path, override=False)
    return ChatSettings.from_env()


__all__ = ["ChatSettings", "DEFAULT_MODEL", "ENV_VARS", "load_settings"]
