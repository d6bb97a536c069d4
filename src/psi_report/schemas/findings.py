"""Pydantic models for classified audits, findings and metrics."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Bucket(str, Enum):
    """Classification outcome of a single audit."""

    GOOD = "good"
    BAD = "bad"
    INFO = "info"
    EXCLUDED = "excluded"


class Severity(str, Enum):
    PASS = "pass"
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    INFO = "info"


class MetricStatus(str, Enum):
    GOOD = "good"
    WARN = "warn"
    BAD = "bad"
    NEUTRAL = "neutral"


class AuditIndexEntry(BaseModel):
    """Owning category (and group) of an audit."""

    model_config = ConfigDict(frozen=True)

    category_key: str
    group_key: str | None = None


class Classification(BaseModel):
    """Classifier verdict for one audit."""

    model_config = ConfigDict(frozen=True)

    include: bool
    bucket: Bucket
    score: float | None = None


class ClassifiedAudit(BaseModel):
    model_config = ConfigDict(frozen=True)

    audit_id: str
    category_key: str
    bucket: Bucket
    score: float | None = None


class Finding(BaseModel):
    """A display-ready finding. Serializes with camelCase keys."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    category: str
    title: str
    description: str
    display_value: str = ""
    severity: Severity
    emoji: str


class MetricItem(BaseModel):
    """One of the tracked Core Web Vitals timings."""

    model_config = ConfigDict(frozen=True)

    key: str  # short key, e.g. "fcp"
    label: str
    value: str
    status: MetricStatus


class RankedBucket(BaseModel):
    """A sorted, capped list of findings plus the untruncated count.

    ``len(items)`` may be smaller than ``count``.
    """

    model_config = ConfigDict(frozen=True)

    items: list[Finding] = []
    count: int = 0
