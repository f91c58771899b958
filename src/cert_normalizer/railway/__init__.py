"""
Railway-Oriented Programming (ROP) primitives.

Explicit, composable error handling — stages return Result instead of raising.

    from cert_normalizer.railway import ErrorCode, Result

    def require_certificates(found: list[str]) -> Result[list[str]]:
        if not found:
            return Result.failure(ErrorCode.NOT_FOUND, "No certificates found")
        return Result.success(found)
"""

from cert_normalizer.railway.assertions import ResultAssertions
from cert_normalizer.railway.execution import LoggingExecutionContext
from cert_normalizer.railway.failure import ErrorCode, FailureDescription
from cert_normalizer.railway.result import Failure, Result, Success
from cert_normalizer.railway.result_failures import ResultFailures

__all__ = [
    "ErrorCode",
    "Failure",
    "FailureDescription",
    "LoggingExecutionContext",
    "Result",
    "ResultAssertions",
    "ResultFailures",
    "Success",
]
