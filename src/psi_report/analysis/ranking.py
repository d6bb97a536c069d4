"""Ranking, truncation and grading of findings."""

from __future__ import annotations

import math
import unicodedata

from psi_report.schemas.findings import Bucket, Finding, RankedBucket, Severity

BUCKET_LIMITS: dict[Bucket, int] = {
    Bucket.BAD: 14,
    Bucket.GOOD: 12,
    Bucket.INFO: 10,
}

SEVERITY_RANK: dict[Severity, int] = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
}
_UNKNOWN_SEVERITY_RANK = 9

GRADES: tuple[tuple[int, str], ...] = (
    (90, "A - Excellent"),
    (75, "B - Good"),
    (50, "C - Needs improvement"),
)
LOWEST_GRADE = "D - Critical"


def collation_key(text: str) -> tuple[str, str]:
    """Locale-style sort key: accents and case are ignored first, then used as tie-break."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text


def _alpha_key(finding: Finding) -> tuple:
    return collation_key(finding.category), collation_key(finding.title)


def _bad_key(finding: Finding) -> tuple:
    rank = SEVERITY_RANK.get(finding.severity, _UNKNOWN_SEVERITY_RANK)
    return (rank, *_alpha_key(finding))


def rank_findings(findings: list[Finding], bucket: Bucket) -> RankedBucket:
    """Sort a bucket's findings and cap the list.

    Bad findings sort by severity, then category, then title; good and info
    findings by category, then title.  ``count`` is the length before the cap.
    """
    if bucket not in BUCKET_LIMITS:
        raise ValueError(f"Cannot rank bucket {bucket.value!r}")

    key = _bad_key if bucket == Bucket.BAD else _alpha_key
    ordered = sorted(findings, key=key)
    return RankedBucket(items=ordered[: BUCKET_LIMITS[bucket]], count=len(findings))


def score_to_percent(score: float | None) -> int:
    """0-1 score → 0-100 integer, rounding halves up. Absent scores are 0."""
    if score is None:
        return 0
    return int(math.floor(score * 100 + 0.5))


def performance_grade(percent: int) -> str:
    for floor, grade in GRADES:
        if percent >= floor:
            return grade
    return LOWEST_GRADE
