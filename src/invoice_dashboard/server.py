"""JSON API over the invoice CSV.

Endpoints:
- ``GET /``                 plain-text liveness message
- ``GET /health``           ``{"status": "ok"}``
- ``GET /api/invoices``     CSV rows as JSON, untyped, keyed by CSV header
- ``GET /api/companies``    distinct client names, first-occurrence order
- ``GET /api/report``       `CompanyReport` for ``?company=...``

The CSV is re-read on every request, so edits to the file show up without a
restart.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from invoice_dashboard import __version__
from invoice_dashboard.aggregate.build_report import build_company_report, distinct_companies
from invoice_dashboard.config import Settings, get_settings
from invoice_dashboard.ingest.load_csv import load_csv_records, read_invoice_rows
from invoice_dashboard.models import CompanyReport

log = logging.getLogger(__name__)

LOAD_ERROR = {"error": "Failed to load invoice data"}


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Optional settings; defaults to `get_settings()`.

    Returns:
        Configured FastAPI instance.
    """
    s = settings or get_settings()

    app = FastAPI(title="Invoice Dashboard API", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(s.cors_origins),
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "Hello World"

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/api/invoices")
    def invoices():
        try:
            return read_invoice_rows(s.invoices_csv)
        except (OSError, ValueError):
            log.exception("Failed to read %s", s.invoices_csv)
            return JSONResponse(status_code=500, content=LOAD_ERROR)

    @app.get("/api/companies")
    def companies():
        try:
            records = load_csv_records(s.invoices_csv)
        except (OSError, ValueError):
            log.exception("Failed to read %s", s.invoices_csv)
            return JSONResponse(status_code=500, content=LOAD_ERROR)
        return distinct_companies(records)

    @app.get("/api/report", response_model=CompanyReport, response_model_by_alias=False)
    def report(
        company: str = Query(""),
        threshold_days: int | None = Query(None, ge=0),
    ):
        try:
            records = load_csv_records(s.invoices_csv)
        except (OSError, ValueError):
            log.exception("Failed to read %s", s.invoices_csv)
            return JSONResponse(status_code=500, content=LOAD_ERROR)

        threshold = s.late_threshold_days if threshold_days is None else threshold_days
        return build_company_report(records, company, threshold)

    return app


app = create_app()
