"""Typer CLI — ``psi-report process``, ``psi-report serve`` and ``psi-report validate``."""

from __future__ import annotations

import asyncio
import json
import logging
from enum import Enum
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console

from psi_report.config import load_config

# Load .env file from the working directory (if it exists)
load_dotenv()

app = typer.Typer(
    name="psi-report",
    help="PSI Report — turn PageSpeed Insights results into ranked, client-ready reports.",
    no_args_is_help=True,
)
console = Console()


class OutputFormat(str, Enum):
    json = "json"
    html = "html"
    md = "md"
    pdf = "pdf"


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )
    # uvicorn's access log duplicates our request logging
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


@app.command()
def validate(
    config: Path = typer.Option(..., "--config", "-c", help="Path to a service config YAML file."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate a configuration file without starting the service."""
    _setup_logging(verbose)

    try:
        cfg = load_config(config)
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {exc}")
        raise typer.Exit(code=1)

    console.print("[green]Config is valid![/]\n")
    console.print(f"  Environment: {cfg.environment}")
    console.print(f"  API key:     {'set' if cfg.api_key else '[yellow](not set — API rejects all report requests)[/]'}")
    console.print(f"  Locale:      {cfg.report_locale}")
    console.print(f"  Listen:      {cfg.host}:{cfg.port}")
    console.print(f"  PDF:         {cfg.pdf.format}, margin {cfg.pdf.margin}, timeout {cfg.pdf.timeout_ms} ms")


@app.command()
def process(
    input_path: Path = typer.Argument(..., help="Saved PageSpeed Insights JSON response."),
    output_format: OutputFormat = typer.Option(OutputFormat.json, "--format", "-f"),
    output: Path = typer.Option(None, "--output", "-o", help="Write here instead of stdout (required for pdf)."),
    client_name: str = typer.Option("", "--client-name", help="Name printed on the report."),
    site_url: str = typer.Option("", "--site-url", help="URL of the audited site."),
    config: Path = typer.Option(None, "--config", "-c", help="Path to a service config YAML file."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Process a saved PageSpeed response into a report.

    Examples:

        psi-report process psi.json

        psi-report process psi.json --format pdf --output report.pdf --client-name "Acme"
    """
    _setup_logging(verbose)

    from psi_report.analysis.report import build_report_summary
    from psi_report.errors import ReportValidationError
    from psi_report.schemas.report import ReportRequest

    try:
        cfg = load_config(config)
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {exc}")
        raise typer.Exit(code=1)

    if not input_path.exists():
        console.print(f"[red]Input file not found:[/] {input_path}")
        raise typer.Exit(code=1)
    if output_format == OutputFormat.pdf and output is None:
        console.print("[red]--output is required for pdf output.[/]")
        raise typer.Exit(code=1)

    try:
        psi_data = json.loads(input_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        console.print(f"[red]Input is not valid JSON:[/] {exc}")
        raise typer.Exit(code=1)

    request = ReportRequest(psi_data=psi_data, client_name=client_name, site_url=site_url)
    try:
        summary = build_report_summary(request, locale=cfg.report_locale)
    except ReportValidationError as exc:
        console.print(f"[red]{exc.message}:[/] expected a PageSpeed response with lighthouseResult.")
        raise typer.Exit(code=1)

    if output_format == OutputFormat.pdf:
        asyncio.run(_write_pdf(summary, output, cfg))
        return

    if output_format == OutputFormat.json:
        text = json.dumps(summary.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False)
    elif output_format == OutputFormat.html:
        from psi_report.output.html import render_report_html
        text = render_report_html(summary)
    else:
        from psi_report.output.markdown import render_markdown_summary
        text = render_markdown_summary(summary)

    if output is None:
        typer.echo(text)
        return
    output.write_text(text, encoding="utf-8")
    console.print(f"[green]Report written to:[/] {output}")


async def _write_pdf(summary: "ReportSummary", out_path: Path, cfg: "ServiceConfig") -> None:  # noqa: F821
    """Render the HTML report to PDF and write it."""
    from psi_report.output.html import render_report_html
    from psi_report.shared.browser import render_pdf

    console.print("[bold]Rendering PDF…[/]")
    pdf_bytes = await render_pdf(render_report_html(summary), cfg.pdf)
    out_path.write_bytes(pdf_bytes)
    console.print(f"[green]PDF written to:[/] {out_path} ({summary.filename})")


@app.command()
def serve(
    config: Path = typer.Option(None, "--config", "-c", help="Path to a service config YAML file."),
    host: str = typer.Option(None, "--host", help="Overrides the config host."),
    port: int = typer.Option(None, "--port", help="Overrides the config port."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Run the report API."""
    _setup_logging(verbose)

    import uvicorn

    from psi_report.api.app import create_app

    try:
        cfg = load_config(config)
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {exc}")
        raise typer.Exit(code=1)

    if not cfg.api_key:
        console.print("[yellow]API_SECRET_KEY is not set — every report request will be rejected.[/]")

    console.print(f"[bold]Serving on[/] http://{host or cfg.host}:{port or cfg.port}")
    uvicorn.run(create_app(cfg), host=host or cfg.host, port=port or cfg.port, log_config=None)
