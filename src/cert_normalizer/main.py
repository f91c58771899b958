"""
Application entry points — wire dependencies and run one normalization.

Composition root: loads settings, creates the concrete adapters, injects
them into the pipeline and turns the outcome into an exit status.

This is the ONLY place where concrete adapter classes are instantiated.
Everything else depends on Protocol interfaces.

Exit statuses:
  0  success — all artifacts written
  1  configuration, input or filesystem failure
  2  usage error (missing INPUT), reported by click
  3  no certificates found in the input; nothing written
"""

from __future__ import annotations

import logging
import sys
from enum import IntEnum
from pathlib import Path

import click
import structlog
from pydantic import ValidationError

from cert_normalizer import __version__
from cert_normalizer.adapters.base64_dump import DEFAULT_OUTPUT, dump_base64
from cert_normalizer.adapters.bundle_writer import FileSystemBundleWriter
from cert_normalizer.adapters.certificate_reader import create_certificate_reader
from cert_normalizer.config import AppSettings
from cert_normalizer.domain.ports import BundleWriter, CertificateReader
from cert_normalizer.pipeline import run_pipeline
from cert_normalizer.railway import ErrorCode, FailureDescription, LoggingExecutionContext
from cert_normalizer.report import render_report

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class ExitCode(IntEnum):
    OK = 0
    FAILURE = 1
    USAGE = 2
    NO_CERTIFICATES = 3


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for human-readable console logging on stderr.

    stdout is reserved for the run summary so it can be piped or captured.
    Loggers are not cached, so calling this again also reconfigures the
    module-level loggers.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def load_settings(
    output_dir: Path | None = None,
    reader: str | None = None,
    log_level: str | None = None,
) -> AppSettings:
    """
    Load settings from the environment and apply command-line overrides.

    Overrides left as None keep the configured value. Raises pydantic.ValidationError.
    """
    settings = AppSettings()
    if reader is not None:
        settings = settings.model_copy(
            update={"reader": settings.reader.model_copy(update={"backend": reader})}
        )
    if output_dir is not None:
        settings = settings.model_copy(update={"output_dir": output_dir})
    if log_level is not None:
        settings = settings.model_copy(update={"log_level": log_level.upper()})
    return settings


def _create_adapters(settings: AppSettings) -> tuple[CertificateReader, BundleWriter]:
    """Instantiate the certificate reader and the bundle writer."""
    reader = create_certificate_reader(settings.reader)
    writer = FileSystemBundleWriter(
        output_dir=settings.output_dir,
        document_name=settings.document_name,
    )
    return reader, writer


def exit_code_for(failure: FailureDescription) -> ExitCode:
    if failure.code is ErrorCode.NOT_FOUND:
        return ExitCode.NO_CERTIFICATES
    return ExitCode.FAILURE


@click.command(name="cert-normalizer")
@click.argument("input_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the bundle files (default: ./out, or OUTPUT_DIR).",
)
@click.option(
    "--reader",
    type=click.Choice(["openssl", "cryptography"]),
    default=None,
    help="Certificate reader used for subject/issuer lookup.",
)
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log verbosity on stderr.",
)
@click.version_option(__version__, prog_name="cert-normalizer")
def main(
    input_file: Path,
    output_dir: Path | None,
    reader: str | None,
    log_level: str | None,
) -> None:
    """Extract, normalize and classify the certificates found in INPUT_FILE."""
    try:
        settings = load_settings(output_dir=output_dir, reader=reader, log_level=log_level)
    except ValidationError as e:
        click.echo(f"FATAL: Configuration error — {e}", err=True)
        sys.exit(ExitCode.FAILURE)

    configure_structlog(settings.log_level)
    log = structlog.get_logger()
    log.info(
        "app.starting",
        version=__version__,
        input=str(input_file),
        output_dir=str(settings.output_dir),
        reader=settings.reader.backend,
    )

    certificate_reader, bundle_writer = _create_adapters(settings)
    ctx = LoggingExecutionContext(operation="NormalizeBundle")
    result = ctx.execute(
        lambda: run_pipeline(
            input_file,
            reader=certificate_reader,
            writer=bundle_writer,
            min_base64_run=settings.extraction.min_base64_run,
        )
    )

    if result.is_failure():
        failure = result.error()
        log.error("app.failed", code=failure.code.value, reason=failure.message)
        click.echo(f"Error: {failure.message}", err=True)
        sys.exit(exit_code_for(failure))

    click.echo(render_report(result.value()))


@click.command(name="cert-to-base64")
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_OUTPUT,
    show_default=True,
    help="File receiving the base64 text.",
)
def to_base64(input_file: Path, output: Path) -> None:
    """Dump INPUT_FILE (e.g. a DER certificate) as one line of base64."""
    configure_structlog("WARNING")
    result = dump_base64(input_file, output)
    if result.is_failure():
        click.echo(f"Error: {result.error().message}", err=True)
        sys.exit(ExitCode.FAILURE)
    click.echo(f"Saved Base64 → {result.value()}")


if __name__ == "__main__":
    main()
