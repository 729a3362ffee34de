"""Structured error taxonomy for the NL-to-SQL analyzer.

Every failure raised inside the analysis pipeline derives from
StructuredError, so the orchestrator can turn it into a uniform
``success=False`` response while logs keep the category and context.

Categories map onto the failure classes of an analysis:
- CONNECTIVITY: the database cannot be reached or authenticated against
- EXECUTION: the database rejected or failed to run the generated SQL
- COMPLETION: the text completion service is unreachable or errored
- TIMEOUT: a collaborator exceeded its transport timeout (LLMTimeoutError)

Example:
    >>> try:
    ...     raise ExecutionError("relation \"orders\" does not exist")
    ... except StructuredError as e:
    ...     print(e.to_dict()["category"])
    execution
"""
from enum import Enum
from typing import Optional, Dict, Any
from datetime import datetime, timezone


class ErrorCategory(Enum):
    """Error categories for classification."""
    CONNECTIVITY = "connectivity"   # Database unreachable / auth failure
    EXECUTION = "execution"         # Database rejected the statement
    COMPLETION = "completion"       # LLM transport errors
    TIMEOUT = "timeout"             # Collaborator transport timeouts
    CONFIGURATION = "configuration"  # Configuration/setup errors
    UNKNOWN = "unknown"             # Unclassified errors


class ErrorSeverity(Enum):
    """Error severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class StructuredError(Exception):
    """Base class for all structured errors.

    Attributes:
        message: Human-readable error message
        category: ErrorCategory classification
        severity: ErrorSeverity level
        retryable: Whether the operation can be retried by the caller
        details: Additional context (dict)
        timestamp: When the error occurred
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        retryable: bool = False,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.retryable = retryable
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to structured dictionary.

        Returns:
            Dictionary with error details in predictable schema:
            {
                "error_type": "ErrorClassName",
                "message": "Human-readable message",
                "category": "connectivity|execution|completion|...",
                "severity": "info|warning|error|critical",
                "retryable": true|false,
                "details": {...},
                "timestamp": "2024-01-01T12:00:00.000000+00:00"
            }
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "retryable": self.retryable,
            "details": self.details,
            "timestamp": self.timestamp.isoformat()
        }


class ConnectivityError(StructuredError):
    """The target database could not be reached or authenticated against."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.CONNECTIVITY,
            severity=ErrorSeverity.ERROR,
            retryable=False,
            details=details
        )


class ExecutionError(StructuredError):
    """The database rejected or failed to run a statement.

    The message is the underlying driver message, surfaced verbatim.

    Example:
        >>> raise ExecutionError(
        ...     'syntax error at or near "FORM"',
        ...     details={"sqlstate": "42601"}
        ... )
    """

    def __init__(
        self,
        message: str,
        retryable: bool = False,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.EXECUTION,
            severity=ErrorSeverity.ERROR,
            retryable=retryable,
            details=details
        )


class ConfigurationError(StructuredError):
    """Required configuration is missing or invalid.

    Example:
        >>> raise ConfigurationError(
        ...     "OLLAMA_TIMEOUT_SECONDS must be a number",
        ...     details={"variable": "OLLAMA_TIMEOUT_SECONDS"}
        ... )
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            retryable=False,
            details=details
        )
