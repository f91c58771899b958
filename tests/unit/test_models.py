"""
Unit tests for domain models — value objects.

Verifies self-validation, frozen behavior and derived properties.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from cert_normalizer.domain.models import (
    BundleArtifacts,
    CertificateInfo,
    CertificateMetadata,
    RawCertificate,
)
from tests.conftest import make_pem


class TestRawCertificate:
    def test_valid_body(self) -> None:
        raw = RawCertificate(index=1, body="MIIB+/==")
        assert raw.body == "MIIB+/=="

    @pytest.mark.parametrize("body", ["", "MII B", "MIIB\n", "MIIB-"])
    def test_rejects_empty_or_non_alphabet_body(self, body: str) -> None:
        """
        GIVEN a body that is empty or contains non-base64 characters
        WHEN a RawCertificate is created
        THEN ValueError is raised.
        """
        with pytest.raises(ValueError):
            RawCertificate(index=1, body=body)

    def test_rejects_zero_index(self) -> None:
        with pytest.raises(ValueError, match="1-based"):
            RawCertificate(index=0, body="MIIB")

    def test_frozen_prevents_mutation(self) -> None:
        """
        GIVEN a frozen RawCertificate
        WHEN attempting to modify a field
        THEN AttributeError (FrozenInstanceError) is raised.
        """
        raw = RawCertificate(index=1, body="MIIB")
        with pytest.raises(AttributeError):
            raw.body = "AAAA"  # type: ignore[misc]

    def test_repr_hides_body(self) -> None:
        assert "MIIB" not in repr(RawCertificate(index=1, body="MIIB"))


class TestCertificateInfo:
    def test_metadata_defaults_to_none(self) -> None:
        """
        GIVEN a CertificateInfo with only the PEM
        WHEN accessed
        THEN every metadata field is None and has_metadata is False.
        """
        info = CertificateInfo(pem=make_pem(1, "MIIB"))
        assert info.subject is None
        assert info.issuer is None
        assert info.not_before is None
        assert info.not_after is None
        assert info.has_metadata is False

    def test_from_metadata_copies_every_field(self) -> None:
        metadata = CertificateMetadata(
            subject="CN=a", issuer="CN=b", not_before="2024-01-01", not_after="2025-01-01"
        )
        info = CertificateInfo.from_metadata(make_pem(1, "MIIB"), metadata)
        assert (info.subject, info.issuer, info.not_before, info.not_after) == (
            "CN=a",
            "CN=b",
            "2024-01-01",
            "2025-01-01",
        )
        assert info.has_metadata is True


class TestCertificateMetadata:
    def test_is_empty_without_subject_and_issuer(self) -> None:
        assert CertificateMetadata(not_after="2030-01-01").is_empty is True
        assert CertificateMetadata(issuer="CN=x").is_empty is False


class TestBundleArtifacts:
    def test_all_files_in_write_order(self) -> None:
        artifacts = BundleArtifacts(
            certificate_files=(Path("out/cert-1.pem"), Path("out/cert-2.pem")),
            leaf_file=Path("out/certificate.pem"),
            chain_file=Path("out/certificate_chain.pem"),
            document_file=Path("out/upload-ready.json"),
        )
        assert [p.name for p in artifacts.all_files] == [
            "cert-1.pem",
            "cert-2.pem",
            "certificate.pem",
            "certificate_chain.pem",
            "upload-ready.json",
        ]
