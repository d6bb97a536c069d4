"""Audit classifier — decides whether an audit is reported, and in which bucket."""

from __future__ import annotations

import logging

from psi_report.schemas.findings import AuditIndexEntry, Bucket, Classification, ClassifiedAudit
from psi_report.schemas.lighthouse import AuditRecord

logger = logging.getLogger(__name__)

# Same cutoff as the "A - Excellent" grade.
GOOD_SCORE_THRESHOLD = 0.9

_SKIPPED_MODES = frozenset({"notApplicable", "manual"})


def classify_audit(audit: AuditRecord, score_display_mode: str | None = None) -> Classification:
    """Classify one audit from its display mode and score.

    Rules, first match wins:

    - ``notApplicable`` / ``manual`` → excluded
    - ``informative`` → info, whatever the score
    - no score → excluded
    - ``binary`` → good only for a full pass (score 1), otherwise bad
    - anything else → good at ≥ 0.9, otherwise bad
    """
    mode = audit.score_display_mode if score_display_mode is None else score_display_mode
    score = audit.score

    if mode in _SKIPPED_MODES:
        return Classification(include=False, bucket=Bucket.EXCLUDED, score=score)
    if mode == "informative":
        return Classification(include=True, bucket=Bucket.INFO, score=score)
    if score is None:
        return Classification(include=False, bucket=Bucket.EXCLUDED, score=None)
    if mode == "binary":
        bucket = Bucket.GOOD if score >= 1 else Bucket.BAD
        return Classification(include=True, bucket=bucket, score=score)

    bucket = Bucket.GOOD if score >= GOOD_SCORE_THRESHOLD else Bucket.BAD
    return Classification(include=True, bucket=bucket, score=score)


def classify_indexed_audits(
    index: dict[str, AuditIndexEntry],
    audits: dict[str, AuditRecord],
) -> list[ClassifiedAudit]:
    """Classify every indexed audit, in index order.

    Ids referenced by a category but missing from ``audits`` are skipped.
    Excluded audits are dropped from the result.
    """
    classified: list[ClassifiedAudit] = []
    missing = 0
    for audit_id, entry in index.items():
        audit = audits.get(audit_id)
        if audit is None:
            missing += 1
            continue
        verdict = classify_audit(audit)
        if not verdict.include:
            continue
        classified.append(
            ClassifiedAudit(
                audit_id=audit_id,
                category_key=entry.category_key,
                bucket=verdict.bucket,
                score=verdict.score,
            )
        )

    if missing:
        logger.debug("%d referenced audit(s) missing from the audits map", missing)
    return classified
