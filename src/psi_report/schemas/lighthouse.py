"""Pydantic models for the parts of a Lighthouse result the engine reads.

Only the fields below are understood; everything else in the PageSpeed
response is ignored.  The models are lenient: wrong types degrade to
defaults instead of failing the whole report.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


def _coerce_score(v: object) -> float | None:
    # bool is an int subclass; a True/False score is not a Lighthouse score
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return None
    # NaN / Infinity literals are accepted by the JSON parser
    if not math.isfinite(v):
        return None
    return float(v)


def coerce_text(v: object) -> str:
    if v is None:
        return ""
    return v if isinstance(v, str) else str(v)


class AuditRef(BaseModel):
    """A category's reference to one of its audits."""

    model_config = ConfigDict(extra="ignore")

    id: str
    group: str | None = None


class AuditRecord(BaseModel):
    """A single Lighthouse audit."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = ""
    description: str = ""
    score: float | None = None
    score_display_mode: str = Field("", alias="scoreDisplayMode")
    display_value: str = Field("", alias="displayValue")

    @field_validator("score", mode="before")
    @classmethod
    def coerce_score(cls, v: object) -> float | None:
        return _coerce_score(v)

    @field_validator("title", "description", "score_display_mode", "display_value", mode="before")
    @classmethod
    def text_or_empty(cls, v: object) -> str:
        return coerce_text(v)


def parse_audits(raw: object) -> dict[str, AuditRecord]:
    """Parse the ``audits`` mapping, skipping entries that are not audit objects."""
    if not isinstance(raw, dict):
        return {}

    audits: dict[str, AuditRecord] = {}
    for audit_id, entry in raw.items():
        if not isinstance(entry, dict):
            logger.debug("Skipping non-object audit %r", audit_id)
            continue
        try:
            audits[str(audit_id)] = AuditRecord.model_validate(entry)
        except ValidationError as exc:
            logger.debug("Skipping unparseable audit %r: %s", audit_id, exc)
    return audits


def category_score(categories: object, key: str) -> float | None:
    """Return the 0-1 score of a category, or None when absent or malformed."""
    if not isinstance(categories, dict):
        return None
    record: Any = categories.get(key)
    if not isinstance(record, dict):
        return None
    return _coerce_score(record.get("score"))
