"""Finding normalizer — turns a classified audit into a display-ready Finding."""

from __future__ import annotations

import re

from psi_report.schemas.findings import Bucket, ClassifiedAudit, Finding, Severity
from psi_report.schemas.lighthouse import AuditRecord

CATEGORY_LABELS: dict[str, str] = {
    "performance": "Performance",
    "seo": "SEO",
    "accessibility": "Accesibilidad",
    "best-practices": "Best Practices",
}
FALLBACK_CATEGORY_LABEL = "General"

FALLBACK_DESCRIPTIONS: dict[Bucket, str] = {
    Bucket.GOOD: "This check passed.",
    Bucket.BAD: "This check needs attention.",
    Bucket.INFO: "This is informational context.",
}

SEVERITY_EMOJI: dict[Severity, str] = {
    Severity.CRITICAL: "🔴",
    Severity.HIGH: "🟠",
    Severity.MEDIUM: "🟡",
    Severity.PASS: "✅",
    Severity.INFO: "ℹ️",
}

# [text](url) → text; the url may hold one level of parentheses
_MARKDOWN_LINK = re.compile(r"\[([^\]]*)\]\((?:[^()]|\([^()]*\))*\)")


def category_label(category_key: str) -> str:
    return CATEGORY_LABELS.get(category_key, FALLBACK_CATEGORY_LABEL)


def clean_description(text: str) -> str:
    """Strip markdown links down to their text and trim whitespace."""
    return _MARKDOWN_LINK.sub(r"\1", text or "").strip()


def severity_for(bucket: Bucket, score: float | None) -> Severity:
    """Severity of a finding.

    Bad findings are split by score: ≤ 0.5 critical, < 0.9 high, otherwise
    medium. A failed binary audit scores 0 and is therefore critical.
    """
    if bucket == Bucket.GOOD:
        return Severity.PASS
    if bucket == Bucket.INFO:
        return Severity.INFO
    if score is None or score <= 0.5:
        return Severity.CRITICAL
    if score < 0.9:
        return Severity.HIGH
    return Severity.MEDIUM


def emoji_for(severity: Severity) -> str:
    return SEVERITY_EMOJI.get(severity, SEVERITY_EMOJI[Severity.MEDIUM])


def normalize_finding(classified: ClassifiedAudit, audit: AuditRecord) -> Finding:
    """Build the Finding for one classified audit."""
    if classified.bucket == Bucket.EXCLUDED:
        raise ValueError(f"Excluded audit {classified.audit_id!r} cannot become a finding")

    description = clean_description(audit.description) or FALLBACK_DESCRIPTIONS[classified.bucket]
    severity = severity_for(classified.bucket, classified.score)

    return Finding(
        category=category_label(classified.category_key),
        title=audit.title.strip() or classified.audit_id,
        description=description,
        display_value=audit.display_value,
        severity=severity,
        emoji=emoji_for(severity),
    )
