"""Markdown report builder — renders a ReportSummary as a plain Markdown document."""

from __future__ import annotations

from psi_report.schemas.findings import Finding
from psi_report.schemas.report import ReportSummary


def _render_points(points: list[Finding], count: int) -> list[str]:
    lines: list[str] = []
    for i, p in enumerate(points, start=1):
        lines.append(f"{i}. {p.emoji} **{p.category}: {p.title}**")
        lines.append(f"   {p.description}")
        if p.display_value:
            lines.append(f"   *{p.display_value}*")
    if count > len(points):
        lines.append(f"\n*Showing {len(points)} of {count}.*")
    lines.append("")
    return lines


def render_markdown_summary(summary: ReportSummary) -> str:
    """Render a ReportSummary into a Markdown string."""
    sections: list[str] = []

    name = summary.client.name or summary.site.name
    sections.append(f"# Web Performance Report: {name}\n")
    if summary.site.url:
        sections.append(f"`{summary.site.url}`\n")
    sections.append(f"*Generated: {summary.report_date}*\n")

    sections.append(f"## Performance: {summary.performance_score} ({summary.performance_grade})\n")
    sections.append("| Category | Score |")
    sections.append("|----------|-------|")
    sections.append(f"| Performance | {summary.performance_score} |")
    sections.append(f"| SEO | {summary.seo_score} |")
    sections.append(f"| Accesibilidad | {summary.accessibility_score} |")
    sections.append(f"| Best Practices | {summary.best_practices_score} |")
    sections.append("")

    if summary.speed_metrics:
        sections.append("## Core Web Vitals\n")
        status_icon = {"good": "🟢", "warn": "🟡", "bad": "🔴"}
        for m in summary.speed_metrics:
            icon = status_icon.get(m.status.value, "⚪")
            sections.append(f"- {icon} **{m.label}:** {m.value}")
        sections.append("")

    sections.append(f"## Opportunities for improvement ({summary.bad_points_count})\n")
    sections.extend(_render_points(summary.bad_points, summary.bad_points_count))

    sections.append(f"## Well implemented ({summary.good_points_count})\n")
    sections.extend(_render_points(summary.good_points, summary.good_points_count))

    if summary.info_points:
        sections.append(f"## Additional context ({summary.info_points_count})\n")
        sections.extend(_render_points(summary.info_points, summary.info_points_count))

    return "\n".join(sections)
