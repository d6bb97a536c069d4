"""Tests for the audit classifier."""

from __future__ import annotations

import pytest

from psi_report.analysis.classifier import classify_audit, classify_indexed_audits
from psi_report.schemas.findings import AuditIndexEntry, Bucket
from psi_report.schemas.lighthouse import AuditRecord


def _audit(score: float | None, mode: str) -> AuditRecord:
    return AuditRecord(title="Audit", score=score, scoreDisplayMode=mode)


class TestClassifyAudit:
    @pytest.mark.parametrize("mode", ["notApplicable", "manual"])
    @pytest.mark.parametrize("score", [None, 0, 0.5, 1])
    def test_not_applicable_and_manual_are_excluded(self, mode: str, score: float | None) -> None:
        verdict = classify_audit(_audit(score, mode))
        assert verdict.include is False
        assert verdict.bucket == Bucket.EXCLUDED

    @pytest.mark.parametrize("score", [None, 0, 1])
    def test_informative_goes_to_info(self, score: float | None) -> None:
        verdict = classify_audit(_audit(score, "informative"))
        assert verdict.include is True
        assert verdict.bucket == Bucket.INFO

    @pytest.mark.parametrize("mode", ["binary", "numeric", "metricSavings", ""])
    def test_missing_score_is_excluded(self, mode: str) -> None:
        verdict = classify_audit(_audit(None, mode))
        assert verdict.include is False
        assert verdict.bucket == Bucket.EXCLUDED

    def test_binary_pass_and_fail(self) -> None:
        assert classify_audit(_audit(1, "binary")).bucket == Bucket.GOOD
        assert classify_audit(_audit(0, "binary")).bucket == Bucket.BAD

    def test_binary_partial_score_is_not_a_pass(self) -> None:
        # 0.95 would be good for a numeric audit.
        assert classify_audit(_audit(0.95, "binary")).bucket == Bucket.BAD

    @pytest.mark.parametrize(
        ("score", "bucket"),
        [(0.9, Bucket.GOOD), (1.0, Bucket.GOOD), (0.89, Bucket.BAD), (0.0, Bucket.BAD)],
    )
    def test_numeric_threshold(self, score: float, bucket: Bucket) -> None:
        verdict = classify_audit(_audit(score, "numeric"))
        assert verdict.include is True
        assert verdict.bucket == bucket
        assert verdict.score == score

    def test_explicit_mode_overrides_record(self) -> None:
        audit = _audit(0.2, "numeric")
        assert classify_audit(audit, "manual").bucket == Bucket.EXCLUDED


class TestClassifyIndexedAudits:
    def test_skips_missing_and_excluded(self) -> None:
        index = {
            "a": AuditIndexEntry(category_key="performance"),
            "missing": AuditIndexEntry(category_key="performance"),
            "b": AuditIndexEntry(category_key="seo"),
            "c": AuditIndexEntry(category_key="seo"),
        }
        audits = {
            "a": _audit(0.3, "numeric"),
            "b": _audit(None, "notApplicable"),
            "c": _audit(1, "binary"),
        }
        result = classify_indexed_audits(index, audits)
        assert [(c.audit_id, c.category_key, c.bucket) for c in result] == [
            ("a", "performance", Bucket.BAD),
            ("c", "seo", Bucket.GOOD),
        ]

    def test_unindexed_audits_are_ignored(self) -> None:
        result = classify_indexed_audits({}, {"orphan": _audit(0.1, "numeric")})
        assert result == []
