"""Core Web Vitals extraction."""

from __future__ import annotations

from typing import NamedTuple

from psi_report.schemas.findings import MetricItem, MetricStatus
from psi_report.schemas.lighthouse import AuditRecord

NOT_AVAILABLE = "N/A"


class TrackedMetric(NamedTuple):
    audit_id: str
    key: str
    label: str


# Display order.
TRACKED_METRICS: tuple[TrackedMetric, ...] = (
    TrackedMetric("first-contentful-paint", "fcp", "First Contentful Paint"),
    TrackedMetric("largest-contentful-paint", "lcp", "Largest Contentful Paint"),
    TrackedMetric("total-blocking-time", "tbt", "Total Blocking Time"),
    TrackedMetric("cumulative-layout-shift", "cls", "Cumulative Layout Shift"),
    TrackedMetric("speed-index", "si", "Speed Index"),
    TrackedMetric("interactive", "tti", "Time to Interactive"),
)

# Key order of the flat mapping.
FLAT_METRIC_KEYS = ("fcp", "lcp", "cls", "tti", "tbt", "si")


def metric_status(score: float | None) -> MetricStatus:
    """Three-tier status: ≥ 0.9 good, ≥ 0.5 warn, else bad."""
    if score is None:
        return MetricStatus.NEUTRAL
    if score >= 0.9:
        return MetricStatus.GOOD
    if score >= 0.5:
        return MetricStatus.WARN
    return MetricStatus.BAD


def extract_metrics(audits: dict[str, AuditRecord]) -> list[MetricItem]:
    """Return the tracked metrics present in ``audits``, in display order.

    Missing metrics are omitted rather than padded.
    """
    items: list[MetricItem] = []
    for metric in TRACKED_METRICS:
        audit = audits.get(metric.audit_id)
        if audit is None:
            continue
        items.append(
            MetricItem(
                key=metric.key,
                label=metric.label,
                value=audit.display_value or NOT_AVAILABLE,
                status=metric_status(audit.score),
            )
        )
    return items


def flatten_metrics(items: list[MetricItem]) -> dict[str, str]:
    """``key → value`` mapping for the renderer; always has all six keys."""
    values = {item.key: item.value for item in items}
    return {key: values.get(key, NOT_AVAILABLE) for key in FLAT_METRIC_KEYS}
