"""Completion provider implementations."""
from .mock import MockProvider
from .ollama import OllamaProvider

__all__ = ["MockProvider", "OllamaProvider"]
