"""
Pipeline — the ROP pipeline normalizing one input file into a bundle.

All I/O is injected via ports (CertificateReader, BundleWriter) except
reading the input file itself. Stages are connected on the railway:

  read_input(path)
    → extract(text)                    (NOT_FOUND when nothing is found)
      → encode each payload
        → inspect each PEM             (reader failures degrade to no metadata)
          → assemble_bundle(infos)
            → writer.write(bundle)

Nothing is written unless extraction found at least one certificate.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from cert_normalizer.domain.classifier import assemble_bundle
from cert_normalizer.domain.encoder import encode
from cert_normalizer.domain.extractor import DEFAULT_MIN_BASE64_RUN, extract
from cert_normalizer.domain.models import (
    Bundle,
    CertificateInfo,
    CertificateMetadata,
    NormalizationReport,
    PemCertificate,
)
from cert_normalizer.domain.ports import BundleWriter, CertificateReader
from cert_normalizer.railway import ErrorCode
from cert_normalizer.railway.result import Result

log = structlog.get_logger()

NO_CERTIFICATES_MESSAGE = "No certificates found in input file"


def read_input(input_path: Path) -> Result[str]:
    """Read the input as UTF-8; undecodable bytes are replaced, not fatal."""
    return Result.from_computation(
        lambda: input_path.read_bytes().decode("utf-8", errors="replace"),
        ErrorCode.FILESYSTEM_ERROR,
        f"Cannot read input file {input_path}",
    )


def inspect_certificate(pem: PemCertificate, reader: CertificateReader) -> CertificateInfo:
    """Attach reader metadata to `pem`; a reader failure leaves every field empty."""
    metadata = (
        reader.inspect(pem)
        .peek_failure(
            lambda err: log.warning(
                "reader.inspection_failed",
                certificate=pem.filename,
                code=err.code.value,
                reason=err.message,
            )
        )
        .get_or_else(CertificateMetadata())
    )
    return CertificateInfo.from_metadata(pem, metadata)


def _write_bundle(bundle: Bundle, writer: BundleWriter) -> Result[NormalizationReport]:
    return writer.write(bundle).map(
        lambda artifacts: NormalizationReport(bundle=bundle, artifacts=artifacts)
    )


def run_pipeline(
    input_path: Path,
    reader: CertificateReader,
    writer: BundleWriter,
    min_base64_run: int = DEFAULT_MIN_BASE64_RUN,
) -> Result[NormalizationReport]:
    """
    Normalize the certificates in `input_path` and write the bundle.

    Returns Result[NormalizationReport] on success, or the failure of the
    first failing stage: FILESYSTEM_ERROR (input unreadable, output not
    writable) or NOT_FOUND (no certificates in the input).
    """
    log.info("pipeline.started", input=str(input_path))
    return (
        read_input(input_path)
        .map(lambda text: extract(text, min_base64_run=min_base64_run))
        .ensure(bool, ErrorCode.NOT_FOUND, NO_CERTIFICATES_MESSAGE)
        .map(lambda raws: [encode(raw) for raw in raws])
        .map(lambda pems: [inspect_certificate(pem, reader) for pem in pems])
        .map(assemble_bundle)
        .flat_map(lambda bundle: _write_bundle(bundle, writer))
    )
