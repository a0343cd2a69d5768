"""Centralized error definitions for humane-dates.

Malformed date phrases never raise: unrecognized spans are skipped. The
errors below cover programming-contract violations (a parse tree the
extractor does not understand), internal parse budgets, configuration
problems, and CLI input the library cannot interpret.

Usage:
    from humane_dates.errors import (
        HumaneDatesError,
        InvalidReferenceDateError,
        handle_error,
    )

    try:
        reference = parse_reference(raw)
    except HumaneDatesError as e:
        print(handle_error(e))
"""

from __future__ import annotations

from humane_dates.errors.user_messages import (
    format_error_for_cli,
    format_error_for_user,
    get_recovery_suggestion,
    get_user_message,
)


# =============================================================================
# Base Error
# =============================================================================


class HumaneDatesError(Exception):
    """Base exception for all humane-dates errors.

    Attributes:
        code: Error code for categorization
        user_message: User-friendly message (optional override)
        recoverable: Whether the error is potentially recoverable
        details: Additional error details for debugging
    """

    code: str = "HUMANE_DATES_ERROR"
    default_message: str = "An unexpected error occurred"
    recoverable: bool = True

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.message = message or self.default_message
        self._user_message = user_message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def user_message(self) -> str:
        """Get user-friendly message."""
        if self._user_message:
            return self._user_message
        return get_user_message(self)

    @property
    def recovery_suggestion(self) -> str:
        """Get recovery suggestion."""
        return get_recovery_suggestion(self)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "user_message": self.user_message,
            "recoverable": self.recoverable,
            "details": self.details,
        }


# =============================================================================
# Parsing Errors
# =============================================================================


class ParsingError(HumaneDatesError):
    """Base error for the parsing pipeline."""

    code = "PARSING_ERROR"
    default_message = "Date parsing failed"


class StepLimitExceeded(ParsingError):
    """A single grammar attempt consumed more leaf matches than allowed.

    Raised from inside the token feed and always caught by the driver,
    which treats the attempt as a grammar non-match.
    """

    code = "STEP_LIMIT_EXCEEDED"
    default_message = "Parse step budget exhausted"

    def __init__(self, limit: int, *, position: int | None = None) -> None:
        self.limit = limit
        self.position = position
        super().__init__(
            f"Parse step budget of {limit} exhausted",
            details={"limit": limit, "position": position},
        )


class GrammarError(ParsingError):
    """Parse tree shape the extractor does not recognize.

    Grammar and extractor tag sets are kept in lock-step, so this signals
    a programming error rather than bad input.
    """

    code = "GRAMMAR_ERROR"
    default_message = "Unrecognized parse tree"
    recoverable = False

    def __init__(self, tag: str | None, *, message: str | None = None) -> None:
        self.tag = tag
        super().__init__(
            message or f"No extraction rule for node tagged {tag!r}",
            details={"tag": tag},
        )


class ExtractionError(ParsingError):
    """Semantic extraction could not compute a timestamp."""

    code = "EXTRACTION_ERROR"
    default_message = "Could not compute a date from the phrase"


class InvalidReferenceDateError(ParsingError):
    """Reference timestamp supplied as text could not be interpreted."""

    code = "INVALID_REFERENCE_DATE"
    default_message = "Invalid reference date"

    def __init__(self, value: str, *, message: str | None = None) -> None:
        self.value = value
        super().__init__(
            message or f"Cannot interpret reference date {value!r}",
            details={"value": value},
        )


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(HumaneDatesError):
    """Base error for configuration issues."""

    code = "CONFIGURATION_ERROR"
    default_message = "Configuration error"
    recoverable = True


class InvalidConfigError(ConfigurationError):
    """Configuration is invalid."""

    code = "INVALID_CONFIG"
    default_message = "Invalid configuration"


class MissingConfigError(ConfigurationError):
    """Required configuration is missing."""

    code = "MISSING_CONFIG"
    default_message = "Missing required configuration"


# =============================================================================
# Error Handler
# =============================================================================


def handle_error(error: Exception) -> str:
    """Handle an error and return a user-friendly message.

    Args:
        error: The exception to handle

    Returns:
        User-friendly error message with recovery suggestion
    """
    return format_error_for_user(error)


def is_recoverable(error: Exception) -> bool:
    """Check if an error is potentially recoverable."""
    if isinstance(error, HumaneDatesError):
        return error.recoverable
    return False


__all__ = [
    "HumaneDatesError",
    "ParsingError",
    "StepLimitExceeded",
    "GrammarError",
    "ExtractionError",
    "InvalidReferenceDateError",
    "ConfigurationError",
    "InvalidConfigError",
    "MissingConfigError",
    "handle_error",
    "is_recoverable",
    "format_error_for_cli",
]
