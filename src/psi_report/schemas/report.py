"""Request and response models for the report endpoints.

All models use camelCase aliases on the wire (``clientName``,
``badPointsCount`` …) and snake_case attributes in Python.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from psi_report.schemas.findings import Finding, MetricItem
from psi_report.schemas.lighthouse import coerce_text


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReportRequest(_CamelModel):
    """Inbound body shared by the JSON and PDF variants."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    psi_data: Any = None
    client_name: str = ""
    site_name: str = ""
    site_url: str = ""
    email: str = ""
    phone: str = ""

    @field_validator("client_name", "site_name", "site_url", "email", "phone", mode="before")
    @classmethod
    def text_or_empty(cls, v: object) -> str:
        # null or numeric contact fields become text
        return coerce_text(v)


class ProcessedReport(_CamelModel):
    """Everything derived from the PageSpeed data alone."""

    performance_score: int = 0
    seo_score: int = 0
    accessibility_score: int = 0
    best_practices_score: int = 0
    performance_grade: str = ""
    has_critical_issues: bool = False

    # Flat metric map: fcp, lcp, cls, tti, tbt, si
    metrics: dict[str, str] = {}
    speed_metrics: list[MetricItem] = []

    bad_points: list[Finding] = []
    good_points: list[Finding] = []
    info_points: list[Finding] = []
    bad_points_count: int = 0
    good_points_count: int = 0
    info_points_count: int = 0


class ClientInfo(_CamelModel):
    name: str = ""
    email: str = ""
    phone: str = ""


class SiteInfo(_CamelModel):
    name: str = ""
    url: str = ""


class ReportSummary(ProcessedReport):
    """JSON variant response: processed data plus request metadata."""

    success: bool = True
    filename: str
    client: ClientInfo = Field(default_factory=ClientInfo)
    site: SiteInfo = Field(default_factory=SiteInfo)
    report_date: str = ""
    timestamp: int = 0  # epoch millis


class PdfReportResponse(ReportSummary):
    """Document variant response: the summary plus the base64 PDF."""

    pdf: str
