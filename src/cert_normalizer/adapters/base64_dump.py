"""
Base64 dump — turn a binary file (e.g. a DER certificate) into base64 text.

The output is a single line with no trailing newline, which the normalizer's
bare-base64 strategy picks up as one certificate.
"""

from __future__ import annotations

import base64
from pathlib import Path

import structlog

from cert_normalizer.railway.result import Result
from cert_normalizer.railway.result_failures import ResultFailures

log = structlog.get_logger()

DEFAULT_OUTPUT = Path("output.b64")


def dump_base64(input_path: Path, output_path: Path = DEFAULT_OUTPUT) -> Result[Path]:
    """Write the base64 encoding of `input_path` to `output_path`."""
    try:
        data = input_path.read_bytes()
        output_path.write_text(base64.b64encode(data).decode("ascii"), encoding="ascii")
    except OSError as e:
        return ResultFailures.from_exception(f"Cannot dump {input_path} as base64: {e}", e)

    log.info(
        "base64_dump.written",
        source=str(input_path),
        output=str(output_path),
        bytes=len(data),
    )
    return Result.success(output_path)
