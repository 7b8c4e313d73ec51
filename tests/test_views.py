from __future__ import annotations

from datetime import date

from invoice_dashboard.aggregate.build_report import build_company_report
from invoice_dashboard.models import InvoiceRecord
from invoice_dashboard.views import (
    format_average,
    invoices_table,
    late_invoice_lines,
    monthly_average_frame,
    monthly_totals_table,
    render_text,
)

RECORDS = [
    InvoiceRecord(client_name="A", invoice_reference="INV-1", invoice_date=date(2024, 1, 1),
                  paid_date=date(2024, 1, 20), invoice_amount=100, paid_amount=100),
    InvoiceRecord(client_name="A", invoice_reference="INV-2", invoice_date=date(2024, 1, 10),
                  paid_date=date(2024, 2, 15), invoice_amount=200, paid_amount=150),
    InvoiceRecord(client_name="A", invoice_reference="INV-3", invoice_amount=40),
]


def test_invoices_table_formats_missing_days_and_paid_flag() -> None:
    df = invoices_table(build_company_report(RECORDS, "A"))
    assert list(df["Invoice Number"]) == ["INV-1", "INV-2", "INV-3"]
    assert list(df["Days to Pay"]) == ["19", "36", "N/A"]
    assert list(df["Fully Paid?"]) == ["Yes", "No", "No"]
    assert df.loc[2, "Invoice Date"] == ""


def test_monthly_totals_table_uses_two_decimals() -> None:
    df = monthly_totals_table(build_company_report(RECORDS, "A"))
    assert df.to_dict(orient="records") == [
        {"Month": "2024-01", "Invoice Amount Total": "300.00", "Paid Amount Total": "250.00"},
        {"Month": "", "Invoice Amount Total": "40.00", "Paid Amount Total": "0.00"},
    ]


def test_monthly_average_frame_and_late_lines() -> None:
    report = build_company_report(RECORDS, "A")
    assert monthly_average_frame(report).to_dict(orient="records") == [{"month": "2024-01", "avg_days": 27.5}]
    assert late_invoice_lines(report) == ["Ref: INV-2 | Days to Pay: 36"]


def test_empty_report_renders_placeholders() -> None:
    report = build_company_report(RECORDS, "Nobody")
    assert late_invoice_lines(report) == ["None"]
    assert list(monthly_average_frame(report).columns) == ["month", "avg_days"]
    assert invoices_table(report).empty
    assert "Average Days to Pay: N/A" in render_text(report)


def test_format_average() -> None:
    assert format_average(None) == "N/A"
    assert format_average(27.5) == "27.5"
    assert format_average(3.0) == "3.0"
