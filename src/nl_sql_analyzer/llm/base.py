"""Base classes for text completion providers.

The analyzer talks to a locally hosted model through a plain text-in,
text-out interface: one request per call, returning only the generated
text. Providers translate transport failures into LLMError so callers
see one failure signal regardless of backend.
"""
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any

from ..errors import StructuredError, ErrorCategory, ErrorSeverity


class LLMError(StructuredError):
    """The completion service was unreachable or returned an error.

    The original transport exception is kept as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        category: ErrorCategory = ErrorCategory.COMPLETION,
        severity: ErrorSeverity = ErrorSeverity.ERROR
    ):
        super().__init__(
            message=message,
            category=category,
            severity=severity,
            retryable=True,
            details=details
        )


class LLMTimeoutError(LLMError):
    """Completion request exceeded the transport timeout.

    Raised by providers only; the pipeline itself never times out a call.
    """

    def __init__(self, message: str, timeout_seconds: Optional[float] = None):
        details = {}
        if timeout_seconds is not None:
            details["timeout_seconds"] = timeout_seconds
        super().__init__(
            message=message,
            details=details,
            category=ErrorCategory.TIMEOUT,
            severity=ErrorSeverity.WARNING
        )


class LLMProvider(ABC):
    """Abstract base class for text completion providers.

    Key Requirements:
    - One HTTP (or equivalent) request per ``generate`` call
    - Return only the generated text, never the transport envelope
    - Raise LLMError (or a subclass) for any transport failure
    - Must not log prompts or responses at INFO level or above
    """

    @abstractmethod
    def generate(self, base_url: str, model: str, prompt: str) -> str:
        """Generate a completion for ``prompt``.

        Args:
            base_url: Root URL of the completion service, e.g. http://localhost:11434
            model: Model identifier, e.g. "llama3"
            prompt: Full prompt text

        Returns:
            The generated text (may be empty)

        Raises:
            LLMTimeoutError: If the request exceeds the provider's timeout
            LLMError: For any other transport or service failure
        """
        pass
