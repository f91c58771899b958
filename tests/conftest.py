"""
Shared test fixtures and helpers for the cert-normalizer test suite.

Certificates are generated on the fly with PyCA cryptography (EC P-256 keys,
fast to create) so every test works with real, parseable X.509 data:

  root CA (self-signed) → intermediate CA → leaf
"""

from __future__ import annotations

import base64
import datetime
from collections.abc import Iterator
from dataclasses import dataclass

import pytest
import structlog
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from cert_normalizer.domain.encoder import encode
from cert_normalizer.domain.models import CertificateInfo, PemCertificate, RawCertificate


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Drop any logging configuration a CLI invocation left behind."""
    yield
    structlog.reset_defaults()


@dataclass(frozen=True, slots=True)
class IssuedCertificate:
    """A generated certificate together with the key that can sign with it."""

    certificate: x509.Certificate
    key: ec.EllipticCurvePrivateKey

    @property
    def pem(self) -> str:
        return self.certificate.public_bytes(serialization.Encoding.PEM).decode("ascii")

    @property
    def der(self) -> bytes:
        return self.certificate.public_bytes(serialization.Encoding.DER)

    @property
    def body(self) -> str:
        """Base64 of the DER bytes, no line breaks."""
        return base64.b64encode(self.der).decode("ascii")

    @property
    def subject(self) -> str:
        return self.certificate.subject.rfc4514_string()

    @property
    def issuer(self) -> str:
        return self.certificate.issuer.rfc4514_string()


def issue_certificate(
    common_name: str,
    issuer: IssuedCertificate | None = None,
    is_ca: bool = False,
) -> IssuedCertificate:
    """Create a certificate for `common_name`, self-signed when `issuer` is None."""
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    signer_name = issuer.certificate.subject if issuer else name
    signer_key = issuer.key if issuer else key
    now = datetime.datetime.now(datetime.UTC)

    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(signer_name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=30))
        .add_extension(x509.BasicConstraints(ca=is_ca, path_length=None), critical=True)
        .sign(signer_key, hashes.SHA256())
    )
    return IssuedCertificate(certificate=certificate, key=key)


@dataclass(frozen=True, slots=True)
class CertificateChain:
    root: IssuedCertificate
    intermediate: IssuedCertificate
    leaf: IssuedCertificate


@pytest.fixture(scope="session")
def chain() -> CertificateChain:
    """A three-level chain: self-signed root → intermediate → leaf."""
    root = issue_certificate("Test Root CA", is_ca=True)
    intermediate = issue_certificate("Test Intermediate CA", issuer=root, is_ca=True)
    leaf = issue_certificate("leaf.example.com", issuer=intermediate)
    return CertificateChain(root=root, intermediate=intermediate, leaf=leaf)


def make_pem(index: int, body: str) -> PemCertificate:
    """Encode `body` as the canonical PEM for extraction position `index`."""
    return encode(RawCertificate(index=index, body=body))


def make_info(
    index: int,
    subject: str | None = None,
    issuer: str | None = None,
    body: str = "MIIB",
) -> CertificateInfo:
    """A CertificateInfo with the given subject/issuer and a dummy body."""
    return CertificateInfo(pem=make_pem(index, body), subject=subject, issuer=issuer)
