"""Pick the configured record source and return typed records.

When `INVOICES_API_URL` is set the JSON endpoint is used, otherwise the CSV
file at `INVOICES_CSV`. A source that cannot be read yields an empty list so
callers always get a usable (possibly empty) record sequence.
"""

from __future__ import annotations

import logging

from invoice_dashboard.clean.transform import records_from_rows
from invoice_dashboard.config import Settings
from invoice_dashboard.ingest.fetch_records import fetch_invoice_rows
from invoice_dashboard.ingest.load_csv import load_csv_records
from invoice_dashboard.models import InvoiceRecord

log = logging.getLogger(__name__)


def load_invoice_records(settings: Settings) -> list[InvoiceRecord]:
    """Load invoice records from the configured source.

    Args:
        settings: Settings naming the CSV path and optional API URL.

    Returns:
        Typed records, or an empty list when the source fails.
    """
    if settings.invoices_api_url:
        rows = fetch_invoice_rows(settings.invoices_api_url, settings.request_timeout)
        return records_from_rows(rows)

    try:
        return load_csv_records(settings.invoices_csv)
    except (OSError, ValueError) as e:
        log.error("Failed to load invoice data from %s: %s", settings.invoices_csv, e)
        return []
