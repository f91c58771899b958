"""
Filesystem bundle writer — persists a classified Bundle as files.

Adapter layer — implements the BundleWriter port.

Layout under the output directory:
  cert-1.pem … cert-N.pem   every certificate, extraction order
  certificate.pem           the leaf
  certificate_chain.pem     the chain, concatenated (empty file if no chain)
  upload-ready.json         {"Certificate": leaf PEM, "CertificateChain": chain PEM}

Every write overwrites the whole file. The directory is created if needed.
An OSError at any step becomes a FILESYSTEM_ERROR failure; files written
before the fault stay on disk.
"""

from __future__ import annotations

from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field

from cert_normalizer.domain.models import Bundle, BundleArtifacts
from cert_normalizer.railway import ErrorCode
from cert_normalizer.railway.result import Result

log = structlog.get_logger()

LEAF_FILENAME = "certificate.pem"
CHAIN_FILENAME = "certificate_chain.pem"
DEFAULT_DOCUMENT_NAME = "upload-ready.json"


class UploadDocument(BaseModel):
    """Leaf and chain PEM text, keyed the way certificate-import APIs expect."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    certificate: str = Field(alias="Certificate")
    certificate_chain: str = Field(alias="CertificateChain")

    @classmethod
    def from_bundle(cls, bundle: Bundle) -> UploadDocument:
        return cls(certificate=bundle.leaf_pem, certificate_chain=bundle.chain_pem)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


class FileSystemBundleWriter:
    """
    Write bundles to a directory on the local filesystem.

    Implements the BundleWriter port.
    """

    def __init__(self, output_dir: Path, document_name: str = DEFAULT_DOCUMENT_NAME) -> None:
        self._output_dir = output_dir
        self._document_name = document_name

    def write(self, bundle: Bundle) -> Result[BundleArtifacts]:
        """Write every artifact for `bundle`; FILESYSTEM_ERROR on any OSError."""
        return Result.from_computation(
            lambda: self._do_write(bundle),
            ErrorCode.FILESYSTEM_ERROR,
            f"Failed to write certificate bundle to {self._output_dir}",
        )

    def _do_write(self, bundle: Bundle) -> BundleArtifacts:
        self._output_dir.mkdir(parents=True, exist_ok=True)

        certificate_files = tuple(
            self._write_file(info.pem.filename, info.pem.text) for info in bundle.certificates
        )
        leaf_file = self._write_file(LEAF_FILENAME, bundle.leaf_pem)
        chain_file = self._write_file(CHAIN_FILENAME, bundle.chain_pem)
        document_file = self._write_file(
            self._document_name, UploadDocument.from_bundle(bundle).to_json()
        )

        log.info(
            "writer.bundle_written",
            output_dir=str(self._output_dir),
            certificates=len(certificate_files),
            chain_length=len(bundle.chain),
        )

        return BundleArtifacts(
            certificate_files=certificate_files,
            leaf_file=leaf_file,
            chain_file=chain_file,
            document_file=document_file,
        )

    def _write_file(self, name: str, content: str) -> Path:
        path = self._output_dir / name
        path.write_text(content, encoding="utf-8")
        log.debug("writer.file_written", path=str(path), characters=len(content))
        return path
