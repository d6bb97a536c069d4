"""Tests for the Typer CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from psi_report.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("API_SECRET_KEY", "PSI_REPORT_ENV", "NODE_ENV", "PSI_REPORT_LOCALE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def psi_file(tmp_path: Path, sample_psi) -> Path:
    path = tmp_path / "psi.json"
    path.write_text(json.dumps(sample_psi), encoding="utf-8")
    return path


class TestProcess:
    def test_json_to_file(self, psi_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "report.json"
        result = runner.invoke(
            app, ["process", str(psi_file), "--output", str(out), "--client-name", "Acme"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["performanceScore"] == 62
        assert data["client"]["name"] == "Acme"
        assert data["filename"].startswith("reporte-acme-")

    def test_markdown_to_file(self, psi_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "report.md"
        result = runner.invoke(app, ["process", str(psi_file), "--format", "md", "--output", str(out)])
        assert result.exit_code == 0, result.output
        assert "## Opportunities for improvement (7)" in out.read_text(encoding="utf-8")

    def test_html_to_file(self, psi_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "report.html"
        result = runner.invoke(
            app,
            ["process", str(psi_file), "-f", "html", "-o", str(out), "--site-url", "https://www.acme.com"],
        )
        assert result.exit_code == 0, result.output
        assert "acme.com" in out.read_text(encoding="utf-8")

    def test_pdf_requires_output(self, psi_file: Path) -> None:
        result = runner.invoke(app, ["process", str(psi_file), "--format", "pdf"])
        assert result.exit_code == 1
        assert "--output is required" in result.output

    def test_missing_input(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["process", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_report(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text('{"kind": "not pagespeed"}', encoding="utf-8")
        result = runner.invoke(app, ["process", str(bad)])
        assert result.exit_code == 1
        assert "Invalid PageSpeed data" in result.output


class TestValidate:
    def test_valid_config(self, tmp_path: Path) -> None:
        cfg = tmp_path / "config.yml"
        cfg.write_text("api_key: abc\nreport_locale: en-US\n")
        result = runner.invoke(app, ["validate", "--config", str(cfg)])
        assert result.exit_code == 0, result.output
        assert "Config is valid" in result.output
        assert "en-US" in result.output

    def test_invalid_config(self, tmp_path: Path) -> None:
        cfg = tmp_path / "config.yml"
        cfg.write_text("report_locale: xx-XX\n")
        result = runner.invoke(app, ["validate", "--config", str(cfg)])
        assert result.exit_code == 1
        assert "Config validation failed" in result.output
