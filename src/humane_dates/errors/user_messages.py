"""User-friendly error messages for humane-dates.

Human-readable messages and recovery suggestions keyed by error code, so
the CLI never prints a raw traceback for an expected failure.
"""

from __future__ import annotations

from typing import Any


# =============================================================================
# Error Message Catalog
# =============================================================================

ERROR_MESSAGES: dict[str, str] = {
    # Parsing errors
    "PARSING_ERROR": "We couldn't read that date phrase.",
    "STEP_LIMIT_EXCEEDED": "That phrase was too complex to read in one piece.",
    "GRAMMAR_ERROR": "The parser produced a result it doesn't know how to use.",
    "EXTRACTION_ERROR": "We couldn't turn that phrase into a date.",
    "INVALID_REFERENCE_DATE": "The reference date isn't a date we understand.",
    # Configuration errors
    "CONFIGURATION_ERROR": "There's a configuration issue.",
    "INVALID_CONFIG": "The configuration is invalid. Check settings.",
    "MISSING_CONFIG": "Required configuration is missing.",
    # Generic
    "HUMANE_DATES_ERROR": "An unexpected error occurred. Please try again.",
    "UNKNOWN_ERROR": "Something went wrong. Please try again.",
}


# =============================================================================
# Recovery Suggestions
# =============================================================================

RECOVERY_SUGGESTIONS: dict[str, str] = {
    # Parsing errors
    "PARSING_ERROR": "Try phrases like 'tomorrow at 3pm' or 'next friday'.",
    "STEP_LIMIT_EXCEEDED": "Split the phrase or raise parser.max_steps: humane-dates config set parser.max_steps <n>",
    "GRAMMAR_ERROR": "This is a bug. Please report the phrase that triggered it.",
    "EXTRACTION_ERROR": "Check that the day exists in that month.",
    "INVALID_REFERENCE_DATE": "Use ISO 8601, e.g. --reference 2024-01-15T10:00:00",
    # Configuration errors
    "CONFIGURATION_ERROR": "Check config: humane-dates config show",
    "INVALID_CONFIG": "Re-create defaults: humane-dates config init --force",
    "MISSING_CONFIG": "Create the config file: humane-dates config init",
    # Generic
    "HUMANE_DATES_ERROR": "If this persists, please report the issue.",
    "UNKNOWN_ERROR": "Report the issue if it continues.",
}


# =============================================================================
# Helper Functions
# =============================================================================


def _error_code(error: Any) -> str:
    if hasattr(error, "code"):
        return error.code
    if isinstance(error, str):
        return error
    return type(error).__name__.upper()


def get_user_message(error: Any) -> str:
    """Get user-friendly message for an error.

    Args:
        error: The error (can be Exception or error code string)

    Returns:
        User-friendly error message
    """
    return ERROR_MESSAGES.get(_error_code(error), ERROR_MESSAGES["UNKNOWN_ERROR"])


def get_recovery_suggestion(error: Any) -> str:
    """Get recovery suggestion for an error."""
    return RECOVERY_SUGGESTIONS.get(
        _error_code(error), RECOVERY_SUGGESTIONS["UNKNOWN_ERROR"]
    )


def format_error_for_user(error: Any) -> str:
    """Format a complete user-friendly error message."""
    message = get_user_message(error)
    suggestion = get_recovery_suggestion(error)

    return f"{message}\n\nSuggestion: {suggestion}"


def format_error_for_cli(error: Any) -> str:
    """Format error for CLI output.

    Args:
        error: The error to format

    Returns:
        CLI-formatted error message
    """
    message = get_user_message(error)
    suggestion = get_recovery_suggestion(error)
    code = getattr(error, "code", "ERROR")

    lines = [
        f"Error [{code}]: {message}",
        "",
        f"Suggestion: {suggestion}",
    ]

    if getattr(error, "details", None):
        lines.append("")
        lines.append("Details:")
        for key, value in error.details.items():
            lines.append(f"  {key}: {value}")

    return "\n".join(lines)
