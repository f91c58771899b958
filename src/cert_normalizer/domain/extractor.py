"""
Extractor — find certificate payloads in arbitrary text.

Domain layer — pure functions, no I/O (logging only).

Three strategies are tried in order; the first one that finds at least one
certificate wins and the others are not consulted:

  1. pem_blocks      — well-formed BEGIN/END CERTIFICATE blocks
  2. base64_runs     — long runs of bare base64 (no PEM markers at all)
  3. salvaged_blocks — line-by-line recovery of blocks with odd markers

Every payload is reduced to base64 alphabet characters; payloads that end up
empty are dropped. Indices are 1-based over the surviving payloads.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from functools import partial
from typing import TypeAlias

import structlog

from cert_normalizer.domain.models import (
    BASE64_ALPHABET,
    PEM_FOOTER,
    PEM_HEADER,
    RawCertificate,
)

log = structlog.get_logger()

ExtractionStrategy: TypeAlias = Callable[[str], list[RawCertificate]]

DEFAULT_MIN_BASE64_RUN = 200

_PEM_BLOCK = re.compile(
    re.escape(PEM_HEADER) + r"(.*?)" + re.escape(PEM_FOOTER),
    re.DOTALL,
)
_NON_BASE64 = re.compile(f"[^{BASE64_ALPHABET}]")
_BASE64_LINE = re.compile(f"[{BASE64_ALPHABET}]+")
_METADATA_LINE = re.compile(r"^(subject|issuer)=", re.IGNORECASE)


def _to_raw_certificates(payloads: Iterable[str]) -> list[RawCertificate]:
    """Clean payloads, drop empty ones, number the rest from 1."""
    cleaned = (_NON_BASE64.sub("", payload) for payload in payloads)
    return [
        RawCertificate(index=index, body=body)
        for index, body in enumerate((body for body in cleaned if body), start=1)
    ]


# ─────────────────────── Strategies ───────────────────────


def pem_blocks(text: str) -> list[RawCertificate]:
    """Every non-greedy, case-sensitive BEGIN/END CERTIFICATE block."""
    return _to_raw_certificates(match.group(1) for match in _PEM_BLOCK.finditer(text))


def base64_runs(text: str, min_length: int = DEFAULT_MIN_BASE64_RUN) -> list[RawCertificate]:
    """
    Maximal runs of base64 characters and whitespace at least `min_length` long.

    `subject=` / `issuer=` lines (typical openssl output pasted alongside the
    data) and blank lines are removed first. Because blank lines are removed,
    two blocks separated only by blank lines form a single run.
    """
    lines = (line.strip() for line in text.splitlines())
    cleaned = "\n".join(line for line in lines if line and not _METADATA_LINE.match(line))
    run = re.compile(f"[{BASE64_ALPHABET}\\s]{{{min_length},}}")
    return _to_raw_certificates(match.group(0) for match in run.finditer(cleaned))


def salvaged_blocks(text: str) -> list[RawCertificate]:
    """
    Recover blocks whose markers differ in case or carry surrounding spaces.

    Only lines made entirely of base64 characters are kept, and only while a
    block is open. A block still open at end of input is discarded.
    """
    header, footer = PEM_HEADER.lower(), PEM_FOOTER.lower()
    payloads: list[str] = []
    buffer: list[str] | None = None

    for line in (line.strip() for line in text.splitlines()):
        marker = line.lower()
        if marker == header:
            buffer = []
        elif marker == footer:
            if buffer:
                payloads.append("".join(buffer))
            buffer = None
        elif buffer is not None and _BASE64_LINE.fullmatch(line):
            buffer.append(line)

    if buffer:
        log.debug("extractor.unterminated_block_discarded", characters=sum(map(len, buffer)))
    return _to_raw_certificates(payloads)


# ─────────────────────── Public API ───────────────────────


def default_strategies(
    min_base64_run: int = DEFAULT_MIN_BASE64_RUN,
) -> tuple[tuple[str, ExtractionStrategy], ...]:
    """The strategies in priority order, paired with a name for logging."""
    return (
        ("pem_blocks", pem_blocks),
        ("base64_runs", partial(base64_runs, min_length=min_base64_run)),
        ("salvaged_blocks", salvaged_blocks),
    )


def extract(raw_text: str, min_base64_run: int = DEFAULT_MIN_BASE64_RUN) -> list[RawCertificate]:
    """
    Extract certificate payloads from `raw_text`.

    Never raises for malformed input. An empty list means no strategy found
    anything, which the caller treats as the end of the run.
    """
    for name, strategy in default_strategies(min_base64_run):
        found = strategy(raw_text)
        if found:
            log.info("extractor.strategy_matched", strategy=name, certificates=len(found))
            return found
        log.debug("extractor.strategy_empty", strategy=name)

    log.warning("extractor.no_certificates", characters=len(raw_text))
    return []
