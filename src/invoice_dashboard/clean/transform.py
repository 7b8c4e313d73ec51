"""Cleaning and coercion of untyped invoice rows.

Source rows arrive with the CSV headers as keys and string (or JSON number)
values. This module renames the columns, coerces dates and amounts once, and
builds the typed `InvoiceRecord` objects consumed by the aggregation step.
The same partition function is used for pandas frames and, through
`map_partitions`, for Dask DataFrames.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

import pandas as pd

from invoice_dashboard.aggregate.dates import parse_date
from invoice_dashboard.models import (
    CLIENT_NAME,
    DATE_INVOICED,
    DATE_PAID,
    INVOICE_AMOUNT,
    INVOICE_REFERENCE,
    PAID_AMOUNT,
    SOURCE_FIELDS,
    InvoiceRecord,
)

log = logging.getLogger(__name__)

COLUMN_MAP = {
    CLIENT_NAME: "client_name",
    DATE_INVOICED: "invoice_date",
    DATE_PAID: "paid_date",
    INVOICE_AMOUNT: "invoice_amount",
    PAID_AMOUNT: "paid_amount",
    INVOICE_REFERENCE: "invoice_reference",
}
CLEAN_COLUMNS = list(COLUMN_MAP.values())


def _text(value: Any) -> str:
    """Return `value` as text; missing values become ``""``."""
    if value is None or (pd.api.types.is_scalar(value) and pd.isna(value)):
        return ""
    return str(value)


def _strip(value: Any) -> Any:
    # lists/dicts from malformed JSON rows are not amounts
    if not pd.api.types.is_scalar(value):
        return None
    return value.strip() if isinstance(value, str) else value


def _count_bad_dates(raw: pd.Series, parsed: pd.Series) -> int:
    """Count non-empty raw values that did not parse to a date."""
    present = raw.map(lambda v: bool(_text(v).strip()))
    return int((present & parsed.isna()).sum())


def clean_invoice_frame(pdf: pd.DataFrame) -> pd.DataFrame:
    """Clean a pandas frame of source rows.

    Renames the source headers to snake_case, adds any missing column,
    parses both dates with `parse_date` (unparseable → None) and coerces
    amounts to floats (missing or non-numeric → 0.0). Client names are kept
    verbatim so company matching stays exact.

    Args:
        pdf: Frame whose columns are the source headers (extra columns are
            dropped).

    Returns:
        Frame with columns `client_name`, `invoice_date`, `paid_date`,
        `invoice_amount`, `paid_amount`, `invoice_reference`.
    """
    pdf = (
        pdf.reindex(columns=list(SOURCE_FIELDS))
        .rename(columns=COLUMN_MAP)
        .astype(object)
    )

    # -----------------------------
    # Text columns
    # -----------------------------
    for col in ("client_name", "invoice_reference"):
        pdf[col] = pdf[col].map(_text).astype(object)

    # -----------------------------
    # Dates
    # -----------------------------
    for col in ("invoice_date", "paid_date"):
        raw = pdf[col]
        pdf[col] = raw.map(parse_date).astype(object)
        bad = _count_bad_dates(raw, pdf[col])
        if bad:
            log.warning("%d value(s) in %s could not be parsed as dates", bad, col)

    # -----------------------------
    # Amounts
    # -----------------------------
    for col in ("invoice_amount", "paid_amount"):
        pdf[col] = (
            pd.to_numeric(pdf[col].map(_strip), errors="coerce")
            .fillna(0.0)
            .astype(float)
        )

    return pdf[CLEAN_COLUMNS]


def clean_invoice_ddf(ddf: Any) -> Any:
    """Apply `clean_invoice_frame` to every partition of a Dask DataFrame."""
    log.info("Starting clean_invoice_ddf transformation")
    meta = clean_invoice_frame(ddf._meta.copy())
    return ddf.map_partitions(clean_invoice_frame, meta=meta)


def frame_to_records(pdf: pd.DataFrame) -> list[InvoiceRecord]:
    """Build `InvoiceRecord` objects from a cleaned frame."""
    records: list[InvoiceRecord] = []
    for rec in pdf.to_dict(orient="records"):
        records.append(
            InvoiceRecord(
                client_name=rec["client_name"],
                invoice_date=parse_date(rec["invoice_date"]),
                paid_date=parse_date(rec["paid_date"]),
                invoice_amount=float(rec["invoice_amount"]),
                paid_amount=float(rec["paid_amount"]),
                invoice_reference=rec["invoice_reference"],
            )
        )
    return records


def records_from_rows(rows: Iterable[Mapping[str, Any]]) -> list[InvoiceRecord]:
    """Coerce untyped source rows into typed `InvoiceRecord` objects.

    Args:
        rows: Mappings keyed by the source headers, e.g. the CSV rows or the
            JSON payload of the invoices endpoint. Non-mapping items are skipped.

    Returns:
        One record per usable row, in input order.
    """
    usable = [dict(r) for r in rows if isinstance(r, Mapping)]
    if not usable:
        return []

    pdf = clean_invoice_frame(pd.DataFrame(usable))
    records = frame_to_records(pdf)
    log.info("Coerced %d invoice rows", len(records))
    return records
