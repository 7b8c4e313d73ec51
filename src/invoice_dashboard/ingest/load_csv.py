"""CSV record source.

Reads the invoice export (one row per invoice, headers such as
``Client Name`` and ``Date Invoiced``) with Dask. Every cell is read as text
and empty cells stay empty strings, matching what the JSON endpoint serves.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, cast

import dask.dataframe as dd

from invoice_dashboard.clean.transform import clean_invoice_ddf, frame_to_records
from invoice_dashboard.models import InvoiceRecord

log = logging.getLogger(__name__)


def read_invoices_ddf(csv_path: Path) -> Any:
    """Return a Dask DataFrame over the invoice CSV, all columns as strings.

    Raises:
        OSError: if the file does not exist or cannot be read.
        ValueError: if pandas cannot parse the file (empty file, bad quoting).
    """
    dd_mod = cast(Any, dd)
    return dd_mod.read_csv(
        str(csv_path),
        dtype=str,
        keep_default_na=False,
        blocksize=None,
    )


def read_invoice_rows(csv_path: Path) -> list[dict[str, str]]:
    """Read the CSV into untyped rows keyed by the CSV headers.

    Args:
        csv_path: Path to the invoice CSV.

    Returns:
        List of dicts, one per CSV row, values as strings.
    """
    pdf = read_invoices_ddf(csv_path).compute()
    rows = cast(list[dict[str, str]], pdf.to_dict(orient="records"))
    log.info("Read %d rows from %s", len(rows), csv_path)
    return rows


def load_csv_records(csv_path: Path) -> list[InvoiceRecord]:
    """Read and coerce the CSV into typed `InvoiceRecord` objects."""
    ddf = clean_invoice_ddf(read_invoices_ddf(csv_path))
    records = frame_to_records(ddf.compute())
    log.info("Loaded %d invoice records from %s", len(records), csv_path)
    return records
