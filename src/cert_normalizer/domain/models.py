"""
Domain models — immutable data structures for extracted certificates and bundles.

These are pure value objects with no behavior beyond self-validation and
derived views. They flow through the pipeline in this order:

  RawCertificate → PemCertificate → CertificateInfo → Bundle → BundleArtifacts

All models are frozen dataclasses (immutable) following functional principles.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

PEM_HEADER = "-----BEGIN CERTIFICATE-----"
PEM_FOOTER = "-----END CERTIFICATE-----"
PEM_LINE_WIDTH = 64

BASE64_ALPHABET = "A-Za-z0-9+/="
_BASE64_ONLY = re.compile(f"[{BASE64_ALPHABET}]+")


@dataclass(frozen=True, slots=True)
class RawCertificate:
    """
    A certificate payload as found in the input, before PEM normalization.

    `index` is the 1-based extraction position; `body` holds only base64
    alphabet characters (whitespace and any other characters stripped).
    """

    index: int
    body: str = field(repr=False)

    def __post_init__(self) -> None:
        if self.index < 1:
            raise ValueError(f"Extraction index must be 1-based, got {self.index}")
        if not _BASE64_ONLY.fullmatch(self.body):
            raise ValueError("Certificate body must be non-empty base64 alphabet text")


@dataclass(frozen=True, slots=True)
class PemCertificate:
    """A RawCertificate wrapped in the canonical PEM envelope (`text`)."""

    raw: RawCertificate
    text: str = field(repr=False)

    @property
    def index(self) -> int:
        return self.raw.index

    @property
    def filename(self) -> str:
        return f"cert-{self.raw.index}.pem"


@dataclass(frozen=True, slots=True)
class CertificateMetadata:
    """Identity and validity fields reported by a certificate reader."""

    subject: str | None = None
    issuer: str | None = None
    not_before: str | None = None
    not_after: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.subject is None and self.issuer is None


@dataclass(frozen=True, slots=True)
class CertificateInfo:
    """
    A PemCertificate plus whatever metadata the reader could obtain.

    Every metadata field is None when the reader is unavailable or could
    not parse the certificate.
    """

    pem: PemCertificate
    subject: str | None = None
    issuer: str | None = None
    not_before: str | None = None
    not_after: str | None = None

    @staticmethod
    def from_metadata(pem: PemCertificate, metadata: CertificateMetadata) -> CertificateInfo:
        return CertificateInfo(
            pem=pem,
            subject=metadata.subject,
            issuer=metadata.issuer,
            not_before=metadata.not_before,
            not_after=metadata.not_after,
        )

    @property
    def has_metadata(self) -> bool:
        return self.subject is not None or self.issuer is not None


@dataclass(frozen=True, slots=True)
class Classification:
    """
    Leaf position and the chain positions (0-based, extraction order).

    `by_metadata` is False when the leaf is the first certificate by fallback.
    """

    leaf_index: int
    chain_indices: tuple[int, ...] = ()
    by_metadata: bool = False


@dataclass(frozen=True, slots=True)
class Bundle:
    """
    The classified result of one run.

    `certificates` holds every extracted certificate in extraction order;
    `chain` is the same sequence with the leaf removed.
    """

    leaf: CertificateInfo
    chain: tuple[CertificateInfo, ...] = ()
    certificates: tuple[CertificateInfo, ...] = ()

    @property
    def leaf_pem(self) -> str:
        return self.leaf.pem.text

    @property
    def chain_pem(self) -> str:
        # Each PEM text already ends with a newline.
        return "".join(info.pem.text for info in self.chain)


@dataclass(frozen=True, slots=True)
class BundleArtifacts:
    """Paths of every file written for a bundle."""

    certificate_files: tuple[Path, ...]
    leaf_file: Path
    chain_file: Path
    document_file: Path

    @property
    def all_files(self) -> tuple[Path, ...]:
        return (*self.certificate_files, self.leaf_file, self.chain_file, self.document_file)


@dataclass(frozen=True, slots=True)
class NormalizationReport:
    """What a successful run produced: the classified bundle and where it was written."""

    bundle: Bundle
    artifacts: BundleArtifacts

    @property
    def total_certificates(self) -> int:
        return len(self.bundle.certificates)
