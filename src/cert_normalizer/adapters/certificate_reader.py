"""
Certificate reader adapters — subject/issuer/validity lookup for one PEM.

Adapter layer — implements the CertificateReader port two ways:
  - OpensslCertificateReader: shells out to `openssl x509` (the PEM is fed
    on stdin). Synchronous, no timeout.
  - CryptographyCertificateReader: in-process, using PyCA cryptography.

Both return Result failures instead of raising; the pipeline decides that a
failed inspection only costs that certificate its metadata.
"""

from __future__ import annotations

import subprocess

import structlog
from cryptography import x509

from cert_normalizer.config import ReaderSettings
from cert_normalizer.domain.models import CertificateMetadata, PemCertificate
from cert_normalizer.domain.ports import CertificateReader
from cert_normalizer.railway import ErrorCode
from cert_normalizer.railway.result import Result
from cert_normalizer.railway.result_failures import ResultFailures

log = structlog.get_logger()

# openssl prints `key=value` lines; these are the keys we keep.
_OPENSSL_FIELDS = {
    "subject": "subject",
    "issuer": "issuer",
    "notBefore": "not_before",
    "notAfter": "not_after",
}


def parse_openssl_output(output: str) -> CertificateMetadata:
    """
    Parse `openssl x509 -noout -subject -issuer -dates` output.

    The first occurrence of each key wins; values are trimmed. Unknown lines
    are ignored.
    """
    found: dict[str, str] = {}
    for line in output.splitlines():
        key, sep, value = line.partition("=")
        field_name = _OPENSSL_FIELDS.get(key.strip())
        if sep and field_name is not None and field_name not in found:
            found[field_name] = value.strip()
    return CertificateMetadata(**found)


class OpensslCertificateReader:
    """
    Inspect certificates with the openssl command-line tool.

    Implements the CertificateReader port.
    """

    def __init__(self, binary: str = "openssl") -> None:
        self._binary = binary

    def inspect(self, pem: PemCertificate) -> Result[CertificateMetadata]:
        """
        Run openssl on the PEM text and parse what it prints.

        Returns Result.failure(EXTERNAL_TOOL_ERROR, ...) when the binary is
        missing or exits non-zero, and Result.failure(VALIDATION_ERROR, ...)
        when the output holds neither a subject nor an issuer.
        """
        return (
            self._run(pem)
            .map(parse_openssl_output)
            .ensure(
                lambda metadata: not metadata.is_empty,
                ErrorCode.VALIDATION_ERROR,
                f"openssl reported no subject or issuer for {pem.filename}",
            )
        )

    def _run(self, pem: PemCertificate) -> Result[str]:
        command = [self._binary, "x509", "-noout", "-subject", "-issuer", "-dates"]
        return (
            Result.from_computation(
                lambda: subprocess.run(  # noqa: S603
                    command,
                    input=pem.text,
                    capture_output=True,
                    text=True,
                    errors="replace",
                    check=False,
                ),
                ErrorCode.EXTERNAL_TOOL_ERROR,
                f"Cannot run {self._binary} on {pem.filename}",
            )
            .peek_failure(
                lambda err: log.debug(
                    "reader.openssl_unavailable", binary=self._binary, error=str(err.exception)
                )
            )
            .flat_map(lambda completed: self._check_exit(completed, pem))
        )

    def _check_exit(
        self, completed: subprocess.CompletedProcess[str], pem: PemCertificate
    ) -> Result[str]:
        if completed.returncode != 0:
            return ResultFailures.external_tool_error(
                f"{self._binary} exited with status {completed.returncode} "
                f"for {pem.filename}: {completed.stderr.strip()}"
            )
        return Result.success(completed.stdout)


class CryptographyCertificateReader:
    """
    Inspect certificates in-process with PyCA cryptography.

    Implements the CertificateReader port. Names are rendered as RFC 4514
    strings, validity bounds as ISO-8601 UTC timestamps.
    """

    def inspect(self, pem: PemCertificate) -> Result[CertificateMetadata]:
        return Result.from_computation(
            lambda: self._do_inspect(pem),
            ErrorCode.VALIDATION_ERROR,
            f"Cannot parse {pem.filename} as an X.509 certificate",
        )

    def _do_inspect(self, pem: PemCertificate) -> CertificateMetadata:
        cert = x509.load_pem_x509_certificate(pem.text.encode("ascii"))
        return CertificateMetadata(
            subject=cert.subject.rfc4514_string(),
            issuer=cert.issuer.rfc4514_string(),
            not_before=cert.not_valid_before_utc.isoformat(),
            not_after=cert.not_valid_after_utc.isoformat(),
        )


def create_certificate_reader(settings: ReaderSettings) -> CertificateReader:
    """Build the reader selected by `settings.backend`."""
    if settings.backend == "cryptography":
        return CryptographyCertificateReader()
    return OpensslCertificateReader(binary=settings.openssl_binary)
