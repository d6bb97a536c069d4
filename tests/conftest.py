"""Shared test fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from psi_report.schemas.config import ServiceConfig

API_KEY = "test-secret"


def make_audit(
    title: str = "",
    *,
    score: float | None = None,
    mode: str = "numeric",
    description: str = "",
    display_value: str | None = None,
) -> dict[str, Any]:
    audit: dict[str, Any] = {
        "title": title,
        "description": description,
        "score": score,
        "scoreDisplayMode": mode,
    }
    if display_value is not None:
        audit["displayValue"] = display_value
    return audit


def make_psi(
    categories: dict[str, dict[str, Any]],
    audits: dict[str, dict[str, Any]],
) -> dict[str, Any]:
    """Wrap categories and audits in a PageSpeed response envelope."""
    return {
        "id": "https://www.example.com/",
        "lighthouseResult": {
            "lighthouseVersion": "12.0.0",
            "categories": categories,
            "audits": audits,
        },
    }


def category(score: float | None, *audit_ids: str, group: str | None = None) -> dict[str, Any]:
    refs = [{"id": a, "weight": 1} | ({"group": group} if group else {}) for a in audit_ids]
    return {"score": score, "auditRefs": refs}


@pytest.fixture
def sample_psi() -> dict[str, Any]:
    """A small but realistic PageSpeed response covering every bucket and mode."""
    return make_psi(
        categories={
            "performance": category(
                0.62,
                "first-contentful-paint",
                "largest-contentful-paint",
                "total-blocking-time",
                "cumulative-layout-shift",
                "speed-index",
                "interactive",
                "render-blocking-resources",
                "uses-text-compression",
                "diagnostics",
                group="metrics",
            ),
            "accessibility": category(0.88, "image-alt", "color-contrast", "manual-check"),
            "best-practices": category(0.75, "is-on-https", "doctype"),
            "seo": category(0.91, "meta-description", "hreflang", "ghost-audit"),
        },
        audits={
            "first-contentful-paint": make_audit("First Contentful Paint", score=0.95, display_value="1.2 s"),
            "largest-contentful-paint": make_audit("Largest Contentful Paint", score=0.4, display_value="4.8 s"),
            "total-blocking-time": make_audit("Total Blocking Time", score=0.6, display_value="350 ms"),
            "cumulative-layout-shift": make_audit("Cumulative Layout Shift", score=0.95, display_value="0.02"),
            "speed-index": make_audit("Speed Index", score=0.7, display_value="3.9 s"),
            "interactive": make_audit("Time to Interactive", score=0.3, display_value="8.1 s"),
            "render-blocking-resources": make_audit(
                "Eliminate render-blocking resources",
                score=0.45,
                description="Resources are blocking the first paint. [Learn more](https://web.dev/rbr/).",
                display_value="Potential savings of 780 ms",
            ),
            "uses-text-compression": make_audit("Enable text compression", score=1),
            "diagnostics": make_audit("Diagnostics", mode="informative"),
            "image-alt": make_audit("Image elements have [alt] attributes", score=0, mode="binary"),
            "color-contrast": make_audit("Background and foreground colors contrast", score=1, mode="binary"),
            "manual-check": make_audit("Manual review", mode="manual"),
            "is-on-https": make_audit("Uses HTTPS", score=0, mode="binary"),
            "doctype": make_audit("Page has the HTML doctype", score=1, mode="binary"),
            "meta-description": make_audit("Document has a meta description", score=1, mode="binary"),
            "hreflang": make_audit("Document has a valid hreflang", mode="notApplicable"),
            # Not referenced by any category — must be ignored.
            "network-requests": make_audit("Network Requests", mode="informative"),
        },
    )


@pytest.fixture
def service_config() -> ServiceConfig:
    return ServiceConfig(api_key=API_KEY, environment="development")
