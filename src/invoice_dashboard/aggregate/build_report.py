"""Aggregation functions for the company payment-timing report.

Functions in this module turn a list of typed invoice records into the views
shown by the dashboard. They hold no state and perform no I/O: every result
is recomputed from the records passed in, so the same input always yields the
same output.

Expectations:
- Input: `InvoiceRecord` objects (already coerced, see `clean.transform`),
  or `DerivedInvoice` objects for the functions that need `days_to_pay`.
- Outputs: lists, dicts or pydantic models documented on each function.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from invoice_dashboard.aggregate.dates import days_between, month_key, round_half_up
from invoice_dashboard.config import DEFAULT_LATE_THRESHOLD_DAYS
from invoice_dashboard.models import (
    CompanyReport,
    DerivedInvoice,
    InvoiceRecord,
    MonthlyAverageDays,
    MonthlyTotal,
)


# =========================================================
# COMPANY SELECTION
# =========================================================

def filter_by_company(
    records: Iterable[InvoiceRecord],
    company_name: str | None,
) -> list[InvoiceRecord]:
    """Return the records issued to `company_name`.

    Matching is exact (case-sensitive, no trimming). An empty or missing
    selection returns no records at all.
    """
    if not company_name:
        return []
    return [r for r in records if r.client_name == company_name]


def distinct_companies(records: Iterable[InvoiceRecord]) -> list[str]:
    """Return each `client_name` once, in order of first appearance."""
    return list(dict.fromkeys(r.client_name for r in records))


# =========================================================
# PER-INVOICE VIEWS
# =========================================================

def annotate_days_to_pay(records: Iterable[InvoiceRecord]) -> list[DerivedInvoice]:
    """Attach `days_to_pay` (invoice date → paid date) to every record.

    Output order and length match the input.
    """
    fields = set(InvoiceRecord.model_fields)
    return [
        DerivedInvoice(
            **r.model_dump(include=fields),
            days_to_pay=days_between(r.invoice_date, r.paid_date),
        )
        for r in records
    ]


def late_invoices(
    derived: Iterable[DerivedInvoice],
    threshold_days: int = DEFAULT_LATE_THRESHOLD_DAYS,
) -> list[DerivedInvoice]:
    """Return invoices paid strictly after `threshold_days` days.

    Invoices without a `days_to_pay` value are never late.
    """
    return [
        inv for inv in derived
        if inv.days_to_pay is not None and inv.days_to_pay > threshold_days
    ]


# =========================================================
# SUMMARY STATISTICS
# =========================================================

def average_days_to_pay(derived: Sequence[DerivedInvoice]) -> float | None:
    """Return mean `days_to_pay` rounded to one decimal.

    Returns:
        ``None`` when the input is empty or no invoice has a `days_to_pay`.
    """
    days = [inv.days_to_pay for inv in derived if inv.days_to_pay is not None]
    if not days:
        return None
    return round_half_up(sum(days) / len(days))


# =========================================================
# MONTHLY VIEWS
# =========================================================

def monthly_totals(derived: Iterable[InvoiceRecord]) -> dict[str, MonthlyTotal]:
    """Sum invoiced and paid amounts per invoice month.

    Returns:
        Dict keyed by ``YYYY-MM`` in first-occurrence order. Invoices without a
        usable invoice date are collected under the ``""`` key.
    """
    sums: dict[str, list[float]] = {}
    for inv in derived:
        bucket = sums.setdefault(month_key(inv.invoice_date), [0.0, 0.0])
        bucket[0] += inv.invoice_amount
        bucket[1] += inv.paid_amount

    return {
        month: MonthlyTotal(month=month, invoice_amount_sum=inv_sum, paid_amount_sum=paid_sum)
        for month, (inv_sum, paid_sum) in sums.items()
    }


def monthly_average_days(derived: Iterable[DerivedInvoice]) -> list[MonthlyAverageDays]:
    """Return mean `days_to_pay` per invoice month.

    Invoices with no invoice month or no `days_to_pay` are skipped, so unlike
    `monthly_totals` there is never a ``""`` entry.
    """
    days_per_month: dict[str, list[int]] = {}
    for inv in derived:
        month = month_key(inv.invoice_date)
        if not month or inv.days_to_pay is None:
            continue
        days_per_month.setdefault(month, []).append(inv.days_to_pay)

    return [
        MonthlyAverageDays(
            month=month,
            avg_days=round_half_up(sum(days) / len(days)) if days else 0.0,
        )
        for month, days in days_per_month.items()
    ]


# =========================================================
# REPORT
# =========================================================

def build_company_report(
    records: Iterable[InvoiceRecord],
    company_name: str | None,
    threshold_days: int = DEFAULT_LATE_THRESHOLD_DAYS,
) -> CompanyReport:
    """Compute every dashboard view for one company.

    Args:
        records: All known invoice records (any company).
        company_name: Selected company; empty selects nothing.
        threshold_days: Late-invoice threshold (default 30).

    Returns:
        `CompanyReport` bundling the annotated invoices and their aggregates.
    """
    derived = annotate_days_to_pay(filter_by_company(records, company_name))

    return CompanyReport(
        company=company_name or "",
        threshold_days=threshold_days,
        invoices=derived,
        average_days_to_pay=average_days_to_pay(derived),
        monthly_totals=list(monthly_totals(derived).values()),
        monthly_average_days=monthly_average_days(derived),
        late_invoices=late_invoices(derived, threshold_days),
    )
