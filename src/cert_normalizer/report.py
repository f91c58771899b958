"""
Human-readable run summary printed by the CLI.

Lists the files written, then one inspection section per certificate with
whatever the certificate reader reported, then how the leaf was chosen.
"""

from __future__ import annotations

from cert_normalizer.domain.models import CertificateInfo, NormalizationReport

UPLOAD_HINT = (
    "For certificate import (e.g. AWS Certificate Manager):\n"
    " - Paste certificate.pem content into \"Certificate body\"\n"
    " - Paste certificate_chain.pem content into \"Certificate chain\"\n"
    " (The matching private key is required as well; it is never part of this bundle.)"
)


def _inspection_section(info: CertificateInfo, path: str) -> list[str]:
    lines = [f"=== cert-{info.pem.index} ({path}) ==="]
    if not info.has_metadata:
        lines.append("Certificate reader not available or could not parse this certificate.")
        return lines
    lines.append(f"Subject: {info.subject or 'N/A'}")
    lines.append(f"Issuer : {info.issuer or 'N/A'}")
    if info.not_before:
        lines.append(f"NotBefore: {info.not_before}")
    if info.not_after:
        lines.append(f"NotAfter : {info.not_after}")
    return lines


def render_report(report: NormalizationReport, upload_hint: bool = True) -> str:
    """Render the summary for a successful run as plain text."""
    bundle, artifacts = report.bundle, report.artifacts

    lines = [f"Wrote {path}" for path in artifacts.certificate_files]
    lines.append(f"Wrote leaf certificate -> {artifacts.leaf_file}")
    if bundle.chain:
        lines.append(f"Wrote certificate chain -> {artifacts.chain_file}")
    else:
        lines.append(f"No extra certs found; wrote empty chain file -> {artifacts.chain_file}")
    lines.append(f"Wrote upload-ready JSON -> {artifacts.document_file}")

    lines += ["", "Certificate inspection:", ""]
    for info, path in zip(bundle.certificates, artifacts.certificate_files, strict=True):
        lines += _inspection_section(info, str(path))
        lines.append("")

    lines.append(
        f"Leaf certificate: {bundle.leaf.pem.filename} "
        f"(best-effort guess, chain length {len(bundle.chain)})"
    )
    lines.append(f"Done. Files written to {artifacts.leaf_file.parent}/")
    if upload_hint:
        lines.append(UPLOAD_HINT)
    return "\n".join(lines)
