"""Long-form report dates for the supported report locales."""

from __future__ import annotations

from datetime import datetime

_MONTHS: dict[str, tuple[str, ...]] = {
    "es-MX": (
        "enero", "febrero", "marzo", "abril", "mayo", "junio",
        "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
    ),
    "en-US": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
}


def format_report_date(when: datetime, locale: str = "es-MX") -> str:
    """``17 de octubre de 2026`` (es-MX) or ``October 17, 2026`` (en-US)."""
    months = _MONTHS.get(locale)
    if months is None:
        raise ValueError(f"Unsupported locale: {locale}")

    month = months[when.month - 1]
    if locale == "en-US":
        return f"{month} {when.day}, {when.year}"
    return f"{when.day} de {month} de {when.year}"
