"""
Unit tests for the ROP pipeline — orchestrates one normalization run.

Uses mock ports (fake adapters) for the reader and the writer; the input
file is a real file under tmp_path.

Test categories:
  - Success track: certificates found, inspected, classified, written
  - NOT_FOUND: nothing extracted → writer never called
  - Read failure: input missing → FILESYSTEM_ERROR
  - Degradation: reader failures leave metadata empty, run still succeeds
  - Write failure: propagated unchanged
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

from cert_normalizer.adapters.certificate_reader import OpensslCertificateReader
from cert_normalizer.domain.models import Bundle, BundleArtifacts, CertificateMetadata
from cert_normalizer.pipeline import NO_CERTIFICATES_MESSAGE, read_input, run_pipeline
from cert_normalizer.railway import ErrorCode, Result, ResultAssertions
from tests.conftest import CertificateChain

_SUBPROCESS_RUN = "cert_normalizer.adapters.certificate_reader.subprocess.run"

# ─────────────────────── Mock Port Factories ───────────────────────


def _make_reader(*results: Result[CertificateMetadata]) -> MagicMock:
    """Create a mock CertificateReader returning the given Results in order."""
    mock = MagicMock()
    mock.inspect.side_effect = list(results)
    return mock


def _artifacts_for(bundle: Bundle, out: Path = Path("out")) -> BundleArtifacts:
    return BundleArtifacts(
        certificate_files=tuple(out / info.pem.filename for info in bundle.certificates),
        leaf_file=out / "certificate.pem",
        chain_file=out / "certificate_chain.pem",
        document_file=out / "upload-ready.json",
    )


def _make_writer() -> MagicMock:
    """Create a mock BundleWriter that succeeds with artifacts for the given bundle."""
    mock = MagicMock()
    mock.write.side_effect = lambda bundle: Result.success(_artifacts_for(bundle))
    return mock


def _write_input(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "input.txt"
    path.write_text(text, encoding="utf-8")
    return path


# ─────────────────────── Tests ───────────────────────


class TestPipelineSuccess:
    def test_leaf_and_root_bundle(self, tmp_path: Path, chain: CertificateChain) -> None:
        """
        GIVEN an input with a leaf PEM followed by the self-signed root PEM
        WHEN run_pipeline is called
        THEN the leaf is block 1, the chain is [root] and the writer gets the bundle.
        """
        input_path = _write_input(tmp_path, chain.leaf.pem + "\n" + chain.root.pem)
        reader = _make_reader(
            Result.success(CertificateMetadata(subject="CN=leaf", issuer="CN=Root")),
            Result.success(CertificateMetadata(subject="CN=Root", issuer="CN=Root")),
        )
        writer = _make_writer()

        report = ResultAssertions.assert_success(run_pipeline(input_path, reader, writer))

        assert report.total_certificates == 2
        assert report.bundle.leaf.pem.index == 1
        assert [info.pem.index for info in report.bundle.chain] == [2]
        assert report.bundle.leaf_pem == chain.leaf.pem
        assert report.bundle.chain_pem == chain.root.pem
        writer.write.assert_called_once_with(report.bundle)
        assert reader.inspect.call_count == 2

    def test_metadata_attached_to_each_certificate(
        self, tmp_path: Path, chain: CertificateChain
    ) -> None:
        input_path = _write_input(tmp_path, chain.leaf.pem)
        metadata = CertificateMetadata(
            subject="CN=leaf", issuer="CN=CA", not_before="2024", not_after="2025"
        )
        report = ResultAssertions.assert_success(
            run_pipeline(input_path, _make_reader(Result.success(metadata)), _make_writer())
        )
        info = report.bundle.leaf
        assert (info.subject, info.issuer, info.not_before, info.not_after) == (
            "CN=leaf",
            "CN=CA",
            "2024",
            "2025",
        )

    def test_min_base64_run_is_forwarded(self, tmp_path: Path) -> None:
        """
        GIVEN a 50-character bare base64 line
        WHEN run_pipeline is called with min_base64_run=40
        THEN the line is extracted as one certificate.
        """
        input_path = _write_input(tmp_path, "A" * 50)
        reader = _make_reader(Result.failure(ErrorCode.EXTERNAL_TOOL_ERROR, "no openssl"))

        report = ResultAssertions.assert_success(
            run_pipeline(input_path, reader, _make_writer(), min_base64_run=40)
        )
        assert report.bundle.leaf.pem.raw.body == "A" * 50


class TestPipelineFailure:
    def test_no_certificates_is_not_found_and_nothing_written(self, tmp_path: Path) -> None:
        """
        GIVEN an input without any certificate-like content
        WHEN run_pipeline is called
        THEN NOT_FOUND is returned and neither reader nor writer is called.
        """
        input_path = _write_input(tmp_path, "hello\nworld\n")
        reader, writer = _make_reader(), _make_writer()

        result = run_pipeline(input_path, reader, writer)

        ResultAssertions.assert_failure(result, ErrorCode.NOT_FOUND)
        assert result.error().message == NO_CERTIFICATES_MESSAGE
        reader.inspect.assert_not_called()
        writer.write.assert_not_called()

    def test_missing_input_is_filesystem_error(self, tmp_path: Path) -> None:
        reader, writer = _make_reader(), _make_writer()
        result = run_pipeline(tmp_path / "missing.txt", reader, writer)
        ResultAssertions.assert_failure(result, ErrorCode.FILESYSTEM_ERROR)
        writer.write.assert_not_called()

    def test_writer_failure_propagates(self, tmp_path: Path, chain: CertificateChain) -> None:
        """
        GIVEN a writer that fails with FILESYSTEM_ERROR
        WHEN run_pipeline is called
        THEN the pipeline returns that failure unchanged.
        """
        input_path = _write_input(tmp_path, chain.leaf.pem)
        writer = MagicMock()
        writer.write.return_value = Result.failure(ErrorCode.FILESYSTEM_ERROR, "disk full")

        result = run_pipeline(
            input_path, _make_reader(Result.success(CertificateMetadata())), writer
        )

        ResultAssertions.assert_failure(result, ErrorCode.FILESYSTEM_ERROR)
        ResultAssertions.assert_failure_message_contains(result, "disk full")


class TestReaderDegradation:
    def test_reader_failures_leave_metadata_empty(
        self, tmp_path: Path, chain: CertificateChain
    ) -> None:
        """
        GIVEN a reader that fails for every certificate
        WHEN run_pipeline is called
        THEN the run succeeds, no certificate has metadata and the first is the leaf.
        """
        input_path = _write_input(
            tmp_path, chain.leaf.pem + chain.intermediate.pem + chain.root.pem
        )
        failure = Result.failure(ErrorCode.EXTERNAL_TOOL_ERROR, "openssl missing")
        reader = _make_reader(failure, failure, failure)

        report = ResultAssertions.assert_success(run_pipeline(input_path, reader, _make_writer()))

        assert report.total_certificates == 3
        assert not any(info.has_metadata for info in report.bundle.certificates)
        assert report.bundle.leaf.pem.index == 1
        assert [info.pem.index for info in report.bundle.chain] == [2, 3]

    def test_openssl_output_that_cannot_be_decoded(
        self, tmp_path: Path, chain: CertificateChain
    ) -> None:
        """
        GIVEN the openssl reader and a subprocess call that raises UnicodeDecodeError
        WHEN run_pipeline is called
        THEN the run still succeeds and only that certificate loses its metadata.
        """
        input_path = _write_input(tmp_path, chain.leaf.pem)
        error = UnicodeDecodeError("utf-8", b"\xe9", 0, 1, "invalid start byte")

        with patch(_SUBPROCESS_RUN, side_effect=error):
            result = run_pipeline(input_path, OpensslCertificateReader(), _make_writer())

        report = ResultAssertions.assert_success(result)
        assert report.bundle.leaf.has_metadata is False


class TestReadInput:
    def test_invalid_utf8_is_replaced(self, tmp_path: Path) -> None:
        """
        GIVEN a file with bytes that are not valid UTF-8
        WHEN read_input is called
        THEN the text is returned with replacement characters instead of failing.
        """
        path = tmp_path / "input.bin"
        path.write_bytes(b"abc\xff\xfedef")
        text = ResultAssertions.assert_success(read_input(path))
        assert text.startswith("abc")
        assert text.endswith("def")
        assert "�" in text
