"""Text completion abstraction layer."""
from .base import LLMProvider, LLMError, LLMTimeoutError

__all__ = ["LLMProvider", "LLMError", "LLMTimeoutError"]
