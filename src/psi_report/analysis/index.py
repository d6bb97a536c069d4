"""Audit index — maps each audit id to the category (and group) that references it."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from psi_report.schemas.findings import AuditIndexEntry
from psi_report.schemas.lighthouse import AuditRef

logger = logging.getLogger(__name__)


def build_audit_index(categories: object) -> dict[str, AuditIndexEntry]:
    """Walk ``categories[*].auditRefs`` in input order.

    An audit referenced by several categories keeps the last one seen.
    Audits no category references never enter the index, so they are
    invisible to the rest of the pipeline.  Malformed input degrades to
    an empty (or partial) index; this never raises.
    """
    index: dict[str, AuditIndexEntry] = {}
    if not isinstance(categories, dict):
        return index

    for category_key, category in categories.items():
        if not isinstance(category, dict):
            continue
        refs = category.get("auditRefs")
        if not isinstance(refs, list):
            continue

        for raw_ref in refs:
            if not isinstance(raw_ref, dict):
                continue
            try:
                ref = AuditRef.model_validate(raw_ref)
            except ValidationError:
                logger.debug("Skipping malformed auditRef in %r: %r", category_key, raw_ref)
                continue
            if ref.id in index and index[ref.id].category_key != category_key:
                logger.debug(
                    "Audit %r re-assigned from %r to %r",
                    ref.id, index[ref.id].category_key, category_key,
                )
            index[ref.id] = AuditIndexEntry(category_key=str(category_key), group_key=ref.group)

    return index
