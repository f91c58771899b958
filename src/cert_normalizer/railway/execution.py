"""
Execution context — separate WHAT (pure pipeline) from HOW it runs.

A pipeline describes the work and returns Result[T]; the context times it,
logs the outcome and keeps an escaping exception on the failure track.

    ctx = LoggingExecutionContext(operation="NormalizeBundle")
    result = ctx.execute(lambda: run_pipeline(path, reader, writer))
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TypeVar

import structlog

from cert_normalizer.railway.failure import ErrorCode, FailureDescription
from cert_normalizer.railway.result import Failure, Result

T = TypeVar("T")

log = structlog.get_logger()


class LoggingExecutionContext:
    """
    Execution context that logs start, duration and outcome of a run.

    An exception escaping the computation is logged and converted into a
    TECHNICAL_ERROR failure.
    """

    def __init__(self, operation: str = "unknown") -> None:
        self._operation = operation

    def execute(self, computation: Callable[[], Result[T]]) -> Result[T]:
        log.debug("execution.started", operation=self._operation)
        start = time.monotonic()

        try:
            result = computation()
        except Exception as e:
            log.error(
                "execution.crashed",
                operation=self._operation,
                elapsed_seconds=round(time.monotonic() - start, 3),
                error=str(e),
            )
            return Failure(
                FailureDescription(ErrorCode.TECHNICAL_ERROR, f"Execution failed: {e}", e)
            )

        elapsed = round(time.monotonic() - start, 3)
        if result.is_success():
            log.info("execution.completed", operation=self._operation, elapsed_seconds=elapsed)
        else:
            log.warning(
                "execution.failed",
                operation=self._operation,
                elapsed_seconds=elapsed,
                failure=str(result.error()),
            )
        return result
