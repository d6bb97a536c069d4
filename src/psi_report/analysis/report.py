"""Report assembly — runs the classification pipeline over a PageSpeed response.

Pipeline::

    categories ──▶ build_audit_index ──▶ classify_indexed_audits
                                              │
    audits ──────────────────────────────────▶ normalize_finding ──▶ rank_findings
       │
       └──────▶ extract_metrics

Each call allocates its own index and lists; nothing is cached.
"""

from __future__ import annotations

import logging
from datetime import datetime

from psi_report.analysis.classifier import classify_indexed_audits
from psi_report.analysis.index import build_audit_index
from psi_report.analysis.metrics import extract_metrics, flatten_metrics
from psi_report.analysis.normalizer import normalize_finding
from psi_report.analysis.ranking import performance_grade, rank_findings, score_to_percent
from psi_report.errors import ReportValidationError
from psi_report.schemas.findings import Bucket, Finding, Severity
from psi_report.schemas.lighthouse import category_score, parse_audits
from psi_report.schemas.report import (
    ClientInfo,
    ProcessedReport,
    ReportRequest,
    ReportSummary,
    SiteInfo,
)
from psi_report.shared.dates import format_report_date
from psi_report.shared.naming import display_name, report_filename

logger = logging.getLogger(__name__)


def get_lighthouse_result(psi_data: object) -> dict:
    """Return ``psiData.lighthouseResult`` or raise ``ReportValidationError``."""
    if not isinstance(psi_data, dict):
        raise ReportValidationError()
    result = psi_data.get("lighthouseResult")
    if not isinstance(result, dict):
        raise ReportValidationError()
    return result


def process_pagespeed_data(psi_data: object) -> ProcessedReport:
    """Classify, rank and score a PageSpeed Insights response."""
    result = get_lighthouse_result(psi_data)
    categories = result.get("categories")
    audits = parse_audits(result.get("audits"))

    index = build_audit_index(categories)
    buckets: dict[Bucket, list[Finding]] = {Bucket.BAD: [], Bucket.GOOD: [], Bucket.INFO: []}
    for classified in classify_indexed_audits(index, audits):
        finding = normalize_finding(classified, audits[classified.audit_id])
        buckets[classified.bucket].append(finding)

    bad = rank_findings(buckets[Bucket.BAD], Bucket.BAD)
    good = rank_findings(buckets[Bucket.GOOD], Bucket.GOOD)
    info = rank_findings(buckets[Bucket.INFO], Bucket.INFO)

    speed_metrics = extract_metrics(audits)
    performance = score_to_percent(category_score(categories, "performance"))

    logger.info(
        "Classified %d indexed audits: %d bad, %d good, %d info",
        len(index), bad.count, good.count, info.count,
    )

    return ProcessedReport(
        performance_score=performance,
        seo_score=score_to_percent(category_score(categories, "seo")),
        accessibility_score=score_to_percent(category_score(categories, "accessibility")),
        best_practices_score=score_to_percent(category_score(categories, "best-practices")),
        performance_grade=performance_grade(performance),
        has_critical_issues=any(f.severity == Severity.CRITICAL for f in buckets[Bucket.BAD]),
        metrics=flatten_metrics(speed_metrics),
        speed_metrics=speed_metrics,
        bad_points=bad.items,
        good_points=good.items,
        info_points=info.items,
        bad_points_count=bad.count,
        good_points_count=good.count,
        info_points_count=info.count,
    )


def build_report_summary(
    request: ReportRequest,
    *,
    now: datetime | None = None,
    locale: str = "es-MX",
) -> ReportSummary:
    """Process ``request.psi_data`` and attach the request metadata."""
    processed = process_pagespeed_data(request.psi_data)

    now = now or datetime.now()
    timestamp = int(now.timestamp() * 1000)
    name = display_name(
        client_name=request.client_name,
        site_name=request.site_name,
        site_url=request.site_url,
    )
    site_label = display_name(site_name=request.site_name, site_url=request.site_url)

    return ReportSummary(
        **processed.model_dump(),
        filename=report_filename(name, timestamp),
        client=ClientInfo(name=name, email=request.email, phone=request.phone),
        site=SiteInfo(name=site_label, url=request.site_url),
        report_date=format_report_date(now, locale),
        timestamp=timestamp,
    )
