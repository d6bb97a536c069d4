"""Site-name extraction and report filename generation."""

from __future__ import annotations

import re
import unicodedata
from urllib.parse import urlparse

UNKNOWN_SITE = "Unknown site"
FALLBACK_SLUG = "website"
MAX_SLUG_LENGTH = 50

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def sanitize_filename(name: str) -> str:
    """Slugify ``name``: ASCII letters, digits and single hyphens, at most 50 chars.

    May return an empty string; see ``report_filename`` for the fallback.
    """
    decomposed = unicodedata.normalize("NFKD", name or "")
    ascii_only = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    slug = _NON_ALNUM.sub("-", ascii_only.lower()).strip("-")
    # Truncation can leave a dangling hyphen.
    return slug[:MAX_SLUG_LENGTH].rstrip("-")


def report_filename(name: str, timestamp_ms: int) -> str:
    slug = sanitize_filename(name) or FALLBACK_SLUG
    return f"reporte-{slug}-{timestamp_ms}.pdf"


def extract_site_name(url: str) -> str:
    """Host name of ``url`` without a leading ``www.``.

    URLs given without a scheme (``example.com/path``) are accepted.
    """
    candidate = (url or "").strip()
    if not candidate:
        return UNKNOWN_SITE
    if "://" not in candidate:
        candidate = f"http://{candidate}"

    try:
        host = urlparse(candidate).hostname
    except ValueError:
        return UNKNOWN_SITE
    if not host:
        return UNKNOWN_SITE
    return host[4:] if host.startswith("www.") else host


def display_name(*, client_name: str = "", site_name: str = "", site_url: str = "") -> str:
    """Name shown on the report: client, else site, else the URL's host."""
    for name in (client_name, site_name):
        if name and name.strip():
            return name.strip()
    return extract_site_name(site_url)
