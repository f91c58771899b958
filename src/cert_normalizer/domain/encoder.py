"""
Encoder — canonical PEM rendering of extracted certificate payloads.

Canonical form: header line, body in lines of exactly 64 characters (the
last one may be shorter, never padded), footer line, one trailing newline.
decode_body() is the inverse used to check the round-trip law.
"""

from __future__ import annotations

import re

from cert_normalizer.domain.models import (
    PEM_FOOTER,
    PEM_HEADER,
    PEM_LINE_WIDTH,
    PemCertificate,
    RawCertificate,
)

_WHITESPACE = re.compile(r"\s+")


def wrap_lines(body: str, width: int = PEM_LINE_WIDTH) -> list[str]:
    """Split `body` into consecutive chunks of `width` characters."""
    return [body[start : start + width] for start in range(0, len(body), width)]


def encode(raw: RawCertificate) -> PemCertificate:
    """Render a RawCertificate as canonical PEM."""
    lines = [PEM_HEADER, *wrap_lines(raw.body), PEM_FOOTER]
    return PemCertificate(raw=raw, text="\n".join(lines) + "\n")


def decode_body(pem_text: str) -> str:
    """
    Return the base64 body of a single PEM block with line breaks removed.

    Text outside the markers is ignored; a missing marker is treated as the
    start/end of the string.
    """
    start = pem_text.find(PEM_HEADER)
    start = 0 if start < 0 else start + len(PEM_HEADER)
    end = pem_text.find(PEM_FOOTER, start)
    if end < 0:
        end = len(pem_text)
    return _WHITESPACE.sub("", pem_text[start:end])
