"""
Classifier — pick the leaf certificate and order the chain.

Domain layer — pure functions, no I/O.

Best-effort heuristic, NOT chain validation: subject and issuer strings are
compared for plain equality, exactly as the reader reported them. Formatting
differences between readers (or between a subject and the matching issuer)
defeat the match and fall back to the first certificate. Downstream
consumers must treat the leaf choice as a guess.

Policy:
  1. Collect every known subject.
  2. The leaf is the first certificate whose issuer is known and is not one
     of those subjects.
  3. Without such a certificate, the first extracted certificate is the leaf.
  4. The chain is everything else, in extraction order.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from cert_normalizer.domain.models import Bundle, CertificateInfo, Classification

log = structlog.get_logger()


def classify(infos: Sequence[CertificateInfo]) -> Classification:
    """
    Choose the leaf position and the chain positions for `infos`.

    Always succeeds for a non-empty sequence. Raises ValueError for an empty
    one, which the pipeline never produces.
    """
    if not infos:
        raise ValueError("Cannot classify an empty certificate sequence")

    subjects = {info.subject for info in infos if info.subject is not None}
    candidate = next(
        (
            position
            for position, info in enumerate(infos)
            if info.issuer is not None and info.issuer not in subjects
        ),
        None,
    )
    leaf_index = 0 if candidate is None else candidate
    chain_indices = tuple(position for position in range(len(infos)) if position != leaf_index)
    return Classification(
        leaf_index=leaf_index,
        chain_indices=chain_indices,
        by_metadata=candidate is not None,
    )


def assemble_bundle(infos: Sequence[CertificateInfo]) -> Bundle:
    """Classify `infos` and package the result as a Bundle."""
    classification = classify(infos)
    leaf = infos[classification.leaf_index]

    if classification.by_metadata:
        log.info(
            "classifier.leaf_selected",
            leaf=leaf.pem.filename,
            chain_length=len(classification.chain_indices),
        )
    else:
        log.info(
            "classifier.leaf_fallback",
            leaf=leaf.pem.filename,
            chain_length=len(classification.chain_indices),
            reason="no certificate has an issuer outside the bundle",
        )

    return Bundle(
        leaf=leaf,
        chain=tuple(infos[position] for position in classification.chain_indices),
        certificates=tuple(infos),
    )
