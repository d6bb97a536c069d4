"""FastAPI app — the JSON and PDF report endpoints.

Both report routes apply the same gate, in this order, before any work:

1. ``x-api-key`` must match the configured secret (401 otherwise)
2. the method must be POST (405 otherwise)
3. the body must carry ``psiData.lighthouseResult`` (400 otherwise)

Serve with ``psi-report serve`` or ``uvicorn --factory psi_report.api.app:create_app``.
"""

from __future__ import annotations

import base64
import logging
import secrets
import traceback
from typing import Awaitable, Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from psi_report.analysis.report import build_report_summary, get_lighthouse_result
from psi_report.config import load_config
from psi_report.errors import (
    AuthenticationError,
    MethodNotAllowedError,
    ProcessingError,
    ReportServiceError,
    ReportValidationError,
)
from psi_report.output.html import render_report_html
from psi_report.schemas.config import PdfOptions, ServiceConfig
from psi_report.schemas.report import PdfReportResponse, ReportRequest, ReportSummary
from psi_report.shared.browser import render_pdf

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"

# Registered on the report routes so the handler, not the router, rejects
# other methods (after the API key check).
_ROUTE_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

PdfRenderFn = Callable[[str, PdfOptions], Awaitable[bytes]]


def _check_api_key(request: Request, config: ServiceConfig) -> None:
    provided = request.headers.get(API_KEY_HEADER, "")
    # An unset secret must never authenticate anyone.
    if not config.api_key or not secrets.compare_digest(
        provided.encode(), config.api_key.encode()
    ):
        logger.warning("Rejected %s %s: bad or missing API key", request.method, request.url.path)
        raise AuthenticationError()


def _check_method(request: Request) -> None:
    if request.method != "POST":
        raise MethodNotAllowedError()


async def _parse_body(request: Request) -> ReportRequest:
    try:
        payload = await request.json()
    except ValueError as exc:
        raise ReportValidationError() from exc
    if not isinstance(payload, dict):
        raise ReportValidationError()

    try:
        report_request = ReportRequest.model_validate(payload)
    except ValidationError as exc:
        raise ReportValidationError() from exc

    get_lighthouse_result(report_request.psi_data)
    return report_request


async def _gate(request: Request) -> ReportRequest:
    _check_api_key(request, request.app.state.config)
    _check_method(request)
    return await _parse_body(request)


def _summarize(report_request: ReportRequest, config: ServiceConfig) -> ReportSummary:
    summary = build_report_summary(report_request, locale=config.report_locale)
    logger.info(
        "Processed report for %s: performance %d, %d bad / %d good / %d info",
        summary.client.name, summary.performance_score,
        summary.bad_points_count, summary.good_points_count, summary.info_points_count,
    )
    return summary


def _error_response(request: Request, exc: ReportServiceError) -> JSONResponse:
    body: dict[str, object] = {"error": exc.message}
    config: ServiceConfig = request.app.state.config
    if isinstance(exc, ProcessingError) and not config.is_production and exc.cause is not None:
        body["detail"] = str(exc.cause)
        body["stack"] = "".join(traceback.format_exception(exc.cause))
    return JSONResponse(body, status_code=exc.status_code)


def create_app(
    config: ServiceConfig | None = None,
    *,
    pdf_renderer: PdfRenderFn | None = None,
) -> FastAPI:
    """Build the API.

    ``config`` defaults to ``load_config()`` (environment only).
    ``pdf_renderer`` defaults to the Playwright renderer.
    """
    app = FastAPI(title="PSI Report Service", docs_url=None, redoc_url=None)
    app.state.config = config if config is not None else load_config()
    app.state.pdf_renderer = pdf_renderer or render_pdf

    @app.exception_handler(ReportServiceError)
    async def handle_service_error(request: Request, exc: ReportServiceError) -> JSONResponse:
        return _error_response(request, exc)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.api_route("/api/process-report", methods=_ROUTE_METHODS)
    async def process_report(request: Request) -> JSONResponse:
        report_request = await _gate(request)
        try:
            summary = _summarize(report_request, request.app.state.config)
        except ReportServiceError:
            raise
        except Exception as exc:
            logger.exception("Failed to process report")
            raise ProcessingError(cause=exc) from exc

        return JSONResponse(summary.model_dump(mode="json", by_alias=True))

    @app.api_route("/api/generate-pdf-report", methods=_ROUTE_METHODS)
    async def generate_pdf_report(request: Request) -> JSONResponse:
        report_request = await _gate(request)
        config: ServiceConfig = request.app.state.config
        try:
            summary = _summarize(report_request, config)
            html = render_report_html(summary)
            pdf_bytes = await request.app.state.pdf_renderer(html, config.pdf)
        except ReportServiceError:
            raise
        except Exception as exc:
            logger.exception("Failed to generate PDF report")
            raise ProcessingError(cause=exc) from exc

        response = PdfReportResponse(
            **summary.model_dump(),
            pdf=base64.b64encode(pdf_bytes).decode(),
        )
        return JSONResponse(response.model_dump(mode="json", by_alias=True))

    return app
