"""
Error handling for featkit.

Every error carries an integer code in the style of a C API status value,
grouped by category so callers can branch on ``err.code`` as well as on the
exception type.
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# Error Codes
# =============================================================================

# Success
FEATKIT_OK = 0

# General errors (1-9)
FEATKIT_ERROR_UNKNOWN = 1

# Argument errors (10-19)
FEATKIT_ERROR_INVALID_ARGUMENT = 10
FEATKIT_ERROR_DIMENSION_MISMATCH = 11

# Label errors (20-29)
FEATKIT_ERROR_NOT_BINARY = 20
FEATKIT_ERROR_INVALID_LABEL = 21

# Missing value errors (30-39)
FEATKIT_ERROR_ROW_ALL_MISSING = 30
FEATKIT_ERROR_COLUMN_ALL_MISSING = 31


_ERROR_MESSAGES = {
    FEATKIT_OK: "Success",
    FEATKIT_ERROR_UNKNOWN: "Unknown error",
    FEATKIT_ERROR_INVALID_ARGUMENT: "Invalid argument",
    FEATKIT_ERROR_DIMENSION_MISMATCH: "Dimension mismatch",
    FEATKIT_ERROR_NOT_BINARY: "Not a binary class problem",
    FEATKIT_ERROR_INVALID_LABEL: "Invalid class label",
    FEATKIT_ERROR_ROW_ALL_MISSING: "The whole row is missing",
    FEATKIT_ERROR_COLUMN_ALL_MISSING: "The whole column is missing",
}


def error_message(code: int) -> str:
    """Return the default message for an error code."""
    return _ERROR_MESSAGES.get(code, f"Unknown error (code={code})")


# =============================================================================
# Exception Classes
# =============================================================================

class FeatkitError(Exception):
    """
    Base exception for all featkit errors.

    Subclasses fix ``default_code``; the code can still be overridden
    per instance.
    """

    default_code = FEATKIT_ERROR_UNKNOWN

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        self.code = self.default_code if code is None else code
        if message is None:
            message = error_message(self.code)
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code}, message={self.message!r})"


class InvalidParameterError(FeatkitError, ValueError):
    """Invalid argument value, e.g. a non-positive number of neighbors."""

    default_code = FEATKIT_ERROR_INVALID_ARGUMENT


class SizeMismatchError(FeatkitError, ValueError):
    """Matrix row count and label vector length differ."""

    default_code = FEATKIT_ERROR_DIMENSION_MISMATCH


class LabelError(FeatkitError, ValueError):
    """Base class for class label vector errors."""

    default_code = FEATKIT_ERROR_INVALID_LABEL


class NotBinaryError(LabelError):
    """Label vector does not contain exactly two classes."""

    default_code = FEATKIT_ERROR_NOT_BINARY


class InvalidLabelError(LabelError):
    """Label value is not a valid class code."""

    default_code = FEATKIT_ERROR_INVALID_LABEL


class MissingValueImputationError(FeatkitError):
    """Imputation is structurally impossible for the given data."""


class AllValuesMissingInRowError(MissingValueImputationError):
    """A row has no observed value to compare with other rows."""

    default_code = FEATKIT_ERROR_ROW_ALL_MISSING

    def __init__(self, row: int):
        self.row = row
        super().__init__(f"The whole row {row} is missing")


class AllValuesMissingInColumnError(MissingValueImputationError):
    """A column has no observed value that a neighbor could supply."""

    default_code = FEATKIT_ERROR_COLUMN_ALL_MISSING

    def __init__(self, column: int):
        self.column = column
        super().__init__(f"The whole column {column} is missing")


__all__ = [
    "FEATKIT_OK",
    "FEATKIT_ERROR_UNKNOWN",
    "FEATKIT_ERROR_INVALID_ARGUMENT",
    "FEATKIT_ERROR_DIMENSION_MISMATCH",
    "FEATKIT_ERROR_NOT_BINARY",
    "FEATKIT_ERROR_INVALID_LABEL",
    "FEATKIT_ERROR_ROW_ALL_MISSING",
    "FEATKIT_ERROR_COLUMN_ALL_MISSING",
    "error_message",
    "FeatkitError",
    "InvalidParameterError",
    "SizeMismatchError",
    "LabelError",
    "NotBinaryError",
    "InvalidLabelError",
    "MissingValueImputationError",
    "AllValuesMissingInRowError",
    "AllValuesMissingInColumnError",
]
