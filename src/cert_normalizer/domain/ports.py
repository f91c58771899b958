"""
Ports — Protocol-based interfaces for infrastructure adapters.

These define WHAT the pipeline needs without specifying HOW it's done:

  Domain ← Ports (protocols) ← Adapters (implementations)

Each port is a Protocol (structural typing) so adapters, and the fakes used
in tests, satisfy the contract simply by implementing the method.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from cert_normalizer.domain.models import (
    Bundle,
    BundleArtifacts,
    CertificateMetadata,
    PemCertificate,
)
from cert_normalizer.railway.result import Result


@runtime_checkable
class CertificateReader(Protocol):
    """
    Port: read subject, issuer and validity fields from one PEM certificate.

    This is the only place certificate internals are looked at; the core
    never parses X.509 itself. A failure here is non-fatal for the run:
    the pipeline degrades the certificate's metadata to "absent".
    """

    def inspect(self, pem: PemCertificate) -> Result[CertificateMetadata]: ...


@runtime_checkable
class BundleWriter(Protocol):
    """
    Port: persist a classified Bundle.

    Writes are full overwrites. A failure part-way through may leave some
    files written; that is reported, not rolled back.
    """

    def write(self, bundle: Bundle) -> Result[BundleArtifacts]: ...
