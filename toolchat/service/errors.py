from __future__ import annotations


class LLMError(Exception):
    """Base error type for all chat turn failures."""


class LLMConfigurationError(LLMError):
    """Misconfiguration of settings, models, credentials or environment."""


class ExternalServiceError(LLMError):
    """A request to an external service failed."""


class LLMProviderError(ExternalServiceError):
    """Error raised from a concrete model/provider integration."""


class MemoryStoreError(ExternalServiceError):
    """Error raised by the vector store backing agent memory."""


class LLMTimeoutError(LLMError):
    """Timeout while waiting for a model or tool."""


class ToolError(LLMError):
    """Base error type for tool resolution and execution failures."""

    def __init__(self, message: str, *, tool_name: str | None = None) -> None:
        super().__init__(message)
        self.tool_name = tool_name


class UnknownToolError(ToolError):
    """The model requested a tool that is not in the registry."""


class ToolValidationError(ToolError):
    """Tool arguments do not match the tool's declared parameter schema."""


class ToolExecutionError(ToolError):
    """A tool implementation raised while running."""


class ToolLoopExceededError(LLMError):
    """The model kept requesting tools past the configured iteration cap."""

    def __init__(self, message: str, *, iterations: int) -> None:
        super().__init__(message)
        self.iterations = iterations


__all__ = [
    "LLMError",
    "LLMConfigurationError",
    "ExternalServiceError",
    "LLMProviderError",
    "MemoryStoreError",
    "LLMTimeoutError",
    "ToolError",
    "UnknownToolError",
    "ToolValidationError",
    "ToolExecutionError",
    "ToolLoopExceededError",
]
