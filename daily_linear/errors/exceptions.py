"""
Exception hierarchy for daily-linear.

Every error raised by the package derives from DailyLinearError so callers
(typically an external training-loop driver) can catch the whole family at
once. Errors are raised where they are detected and are never retried or
replaced with fallback values inside the package.
"""

from typing import Any, Optional


class DailyLinearError(Exception):
    """
    Base exception class for all daily-linear errors.

    Attributes:
        message: Human-readable error message
        error_code: Optional error code for reference and documentation
        details: Optional dictionary with additional error details
        suggestion: Optional suggestion text for how to fix the error
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Initialize a new DailyLinearError.

        Args:
            message: Human-readable error message
            error_code: Optional error code for reference and documentation
            details: Optional dictionary with additional error details
            suggestion: Optional suggestion text for how to fix the error
        """
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.suggestion = suggestion
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error to a plain dictionary."""
        return {
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
            "suggestion": self.suggestion,
        }


# --- Configuration Errors ---


class ConfigurationError(DailyLinearError):
    """
    Error raised when a model cannot be constructed from its configuration.

    Use for invalid layer-width chains, dropout rates outside [0, 1), output
    widths that do not match the task head, unreadable config files, and
    steps requested over a backend that lacks the needed capability. These
    errors are fatal for the model being built.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        context: Where the error occurred (file, section, field)
        details: Structured data about the error
        suggestion: How to fix the error

    Examples:
        >>> raise ConfigurationError(
        ...     message="Dropout rate must be in [0, 1), got 1.2",
        ...     error_code="CONFIG-InvalidDropout",
        ...     context={"field": "dropout_rate"},
        ...     details={"provided": 1.2},
        ...     suggestion="Use a dropout rate such as 0.33 or 0.5",
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
        details: Optional[dict[str, Any]] = None,
        suggestion: str = "",
    ) -> None:
        super().__init__(message, error_code, details)
        self.context = context or {}
        self.suggestion = suggestion

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize error to dictionary.

        Returns:
            Dictionary with all error information
        """
        return {
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "details": self.details,
            "suggestion": self.suggestion,
        }

    def format_user_message(self) -> str:
        """
        Format a user-friendly error message with all context.

        Returns:
            Formatted error message string
        """
        parts = [f"Error: {self.message}"]

        if self.error_code:
            parts.append(f"Code: {self.error_code}")

        if self.context:
            context_parts = []
            if "file" in self.context:
                context_parts.append(f"File: {self.context['file']}")
            if "field" in self.context:
                context_parts.append(f"Field: {self.context['field']}")
            if context_parts:
                parts.append("Location: " + ", ".join(context_parts))

        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")

        return "\n".join(parts)


class InvalidConfigurationError(ConfigurationError):
    """Exception raised when configuration values fail validation."""

    pass


class ConfigurationFileError(ConfigurationError):
    """Exception raised when a configuration file cannot be read."""

    pass


# --- Validation Errors ---


class ValidationError(DailyLinearError):
    """
    Base class for per-call validation failures on tensors handed to a model.

    The fix requires changing the data passed in, not the model configuration.
    """

    pass


class ShapeMismatchError(ValidationError):
    """
    Exception raised when an input or target tensor disagrees with the
    configured sizes.

    Mismatched data is never reshaped, padded or truncated. The details carry
    the expected and actual shapes.
    """

    def __init__(
        self,
        message: str,
        expected: Any = None,
        actual: Any = None,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        details = dict(details or {})
        if expected is not None:
            details["expected"] = expected
        if actual is not None:
            details["actual"] = actual
        super().__init__(message, error_code, details)
        self.expected = expected
        self.actual = actual


# --- Data Errors ---


class DataError(DailyLinearError):
    """Base class for errors moving tensor data in or out of the backend."""

    pass


class MaterializationError(DataError):
    """
    Exception raised when a computed tensor cannot be pulled back to the host.

    The underlying backend exception is kept as ``__cause__``.
    """

    pass
