"""
Convenience factory methods for common Result failures.

    ResultFailures.external_tool_error("openssl exited with status 1")

instead of

    Result.failure(ErrorCode.EXTERNAL_TOOL_ERROR, "openssl exited with status 1")
"""

from __future__ import annotations

from cert_normalizer.railway.failure import ErrorCode
from cert_normalizer.railway.result import Result


class ResultFailures:
    """Factory methods for the failure types this application produces."""

    @staticmethod
    def external_tool_error(message: str, exception: BaseException | None = None) -> Result:
        return Result.failure(ErrorCode.EXTERNAL_TOOL_ERROR, message, exception)

    @staticmethod
    def from_exception(message: str, exception: BaseException) -> Result:
        """
        Map a Python exception onto the closest ErrorCode.

        Mapping:
          - OSError and subclasses (FileNotFoundError, PermissionError, ...) → FILESYSTEM_ERROR
          - ValueError (incl. UnicodeDecodeError), TypeError, KeyError → VALIDATION_ERROR
          - LookupError → NOT_FOUND
          - Everything else → UNKNOWN_ERROR
        """
        return Result.failure(map_exception_to_code(exception), message, exception)


def map_exception_to_code(exception: BaseException) -> ErrorCode:
    match exception:
        case OSError():
            return ErrorCode.FILESYSTEM_ERROR
        case ValueError() | TypeError() | KeyError():
            return ErrorCode.VALIDATION_ERROR
        case LookupError():
            return ErrorCode.NOT_FOUND
        case _:
            return ErrorCode.UNKNOWN_ERROR
