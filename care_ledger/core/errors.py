"""Ledger exceptions and error classification utilities."""

from enum import Enum
from typing import Any

from pydantic import BaseModel

from care_ledger.core.config import Constants


class LedgerError(Exception):
    """Base class for all care_ledger errors."""


class RecordValidationError(LedgerError, ValueError):
    """A draft record has a field that is missing, mistyped or out of range."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class PersistenceReadError(LedgerError):
    """The persisted blob could not be read or decoded."""


class PersistenceWriteError(LedgerError):
    """The persisted blob could not be written."""


class ErrorCategory(Enum):
    """Categories of errors that can surface to the presentation layer."""

    INVALID_RECORD = "invalid_record"
    HISTORY_UNREADABLE = "history_unreadable"
    SAVE_FAILED = "save_failed"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Record errors
    ERR_INVALID_EMOTIONAL_WEIGHT = "ERR_INVALID_EMOTIONAL_WEIGHT"
    ERR_INVALID_TIME_SPENT = "ERR_INVALID_TIME_SPENT"
    ERR_INVALID_RECORD = "ERR_INVALID_RECORD"

    # Persistence errors
    ERR_HISTORY_UNREADABLE = "ERR_HISTORY_UNREADABLE"
    ERR_SAVE_FAILED = "ERR_SAVE_FAILED"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    category: ErrorCategory
    message: str
    suggestion: str
    severity: ErrorSeverity


def _failed_fields(exception: RecordValidationError) -> set[str]:
    """Return the top-level field names named in a validation error."""
    return {str(err["loc"][0]) for err in exception.errors if err.get("loc")}


def classify_error_with_response(exception: Exception) -> ErrorResponse:
    """Classify an error and return a structured response with recovery suggestions.

    Args:
        exception: The exception raised by a store operation

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    if isinstance(exception, RecordValidationError):
        fields = _failed_fields(exception)

        if fields & {"emotional_weight", "emotionalWeight"}:
            return ErrorResponse(
                code=ErrorCode.ERR_INVALID_EMOTIONAL_WEIGHT,
                category=ErrorCategory.INVALID_RECORD,
                message=(
                    f"Emotional weight must be between {Constants.MIN_EMOTIONAL_WEIGHT} "
                    f"and {Constants.MAX_EMOTIONAL_WEIGHT}."
                ),
                suggestion="Pick a weight from Light (1) to Heavy (5).",
                severity=ErrorSeverity.LOW,
            )

        if fields & {"time_spent_minutes", "timeSpentMinutes"}:
            return ErrorResponse(
                code=ErrorCode.ERR_INVALID_TIME_SPENT,
                category=ErrorCategory.INVALID_RECORD,
                message=(
                    f"Time spent must be between {Constants.MIN_TIME_SPENT_MINUTES} "
                    f"and {Constants.MAX_TIME_SPENT_MINUTES} minutes."
                ),
                suggestion="Round to the nearest 5 minutes and try again.",
                severity=ErrorSeverity.LOW,
            )

        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_RECORD,
            category=ErrorCategory.INVALID_RECORD,
            message="This entry is missing information or has an invalid value.",
            suggestion="Check the care type, recipient and visibility fields.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, PersistenceWriteError):
        return ErrorResponse(
            code=ErrorCode.ERR_SAVE_FAILED,
            category=ErrorCategory.SAVE_FAILED,
            message="Your ledger could not be saved, so the change was not kept.",
            suggestion="Check free disk space and permissions for the data directory, then try again.",
            severity=ErrorSeverity.HIGH,
        )

    if isinstance(exception, PersistenceReadError):
        return ErrorResponse(
            code=ErrorCode.ERR_HISTORY_UNREADABLE,
            category=ErrorCategory.HISTORY_UNREADABLE,
            message="Your saved history could not be read.",
            suggestion="A backup copy of the unreadable file was kept next to the ledger.",
            severity=ErrorSeverity.MEDIUM,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        category=ErrorCategory.UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again. If the problem persists, restart the app.",
        severity=ErrorSeverity.MEDIUM,
    )
