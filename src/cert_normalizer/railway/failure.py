"""
Failure description — structured error information for the failure track.

An ErrorCode classifies what went wrong; a FailureDescription carries the
code, a human-readable message, the originating exception (if any) and the
moment the failure was recorded.

    >>> desc = FailureDescription(ErrorCode.NOT_FOUND, "No certificates found in input file")
    >>> desc.code
    <ErrorCode.NOT_FOUND: 'NOT_FOUND'>
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique


@unique
class ErrorCode(Enum):
    """
    Structured error codes for the failure track.

    Input problems:    VALIDATION_ERROR, NOT_FOUND
    Environment:       FILESYSTEM_ERROR, EXTERNAL_TOOL_ERROR
    Everything else:   TECHNICAL_ERROR, UNKNOWN_ERROR
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Malformed or unparsable input (bad PEM, garbage tool output)."""

    NOT_FOUND = "NOT_FOUND"
    """The requested data does not exist (e.g. no certificates in the input)."""

    FILESYSTEM_ERROR = "FILESYSTEM_ERROR"
    """Reading or writing a file failed (missing path, permissions, disk full)."""

    EXTERNAL_TOOL_ERROR = "EXTERNAL_TOOL_ERROR"
    """An external program is missing or exited with an error."""

    TECHNICAL_ERROR = "TECHNICAL_ERROR"
    """Unexpected failure inside the application."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    """Unclassified failure."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """Immutable failure descriptor: code, message, optional exception and timestamp."""

    code: ErrorCode
    message: str
    exception: BaseException | None = field(default=None, repr=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
