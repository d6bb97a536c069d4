"""Print-ready HTML report — renders a ReportSummary through a Jinja2 template."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from psi_report.schemas.findings import Severity
from psi_report.schemas.report import ReportSummary

_TEMPLATE_DIR = Path(__file__).parent / "templates"

SEVERITY_LABELS: dict[str, str] = {
    Severity.CRITICAL.value: "CRITICAL",
    Severity.HIGH.value: "HIGH",
    Severity.MEDIUM.value: "MEDIUM",
}


def _environment() -> Environment:
    return Environment(loader=FileSystemLoader(str(_TEMPLATE_DIR)), autoescape=True)


def render_report_html(summary: ReportSummary) -> str:
    """Render a self-contained HTML document (inline CSS, no external assets)."""
    template = _environment().get_template("report.html")

    data = summary.model_dump(mode="json")
    return template.render(
        site_name=summary.client.name or summary.site.name,
        site_url=summary.site.url,
        report_date=summary.report_date,
        scores=[
            ("Performance", summary.performance_score),
            ("SEO", summary.seo_score),
            ("Accesibilidad", summary.accessibility_score),
            ("Best Practices", summary.best_practices_score),
        ],
        performance_score=summary.performance_score,
        performance_grade=summary.performance_grade,
        has_critical_issues=summary.has_critical_issues,
        speed_metrics=data["speed_metrics"],
        bad_points=data["bad_points"],
        good_points=data["good_points"],
        info_points=data["info_points"],
        bad_points_count=summary.bad_points_count,
        good_points_count=summary.good_points_count,
        info_points_count=summary.info_points_count,
        severity_labels=SEVERITY_LABELS,
    )
