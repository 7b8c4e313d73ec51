"""Display helpers turning a `CompanyReport` into tables and lines of text.

Used by the Streamlit dashboard and the CLI text output. None of these
functions compute business figures; they only format what the report holds.
"""

from __future__ import annotations

import pandas as pd

from invoice_dashboard.models import CompanyReport

NOT_AVAILABLE = "N/A"


def format_average(value: float | None) -> str:
    """Format an average days-to-pay value with one decimal, or ``N/A``."""
    return NOT_AVAILABLE if value is None else f"{value:.1f}"


def invoices_table(report: CompanyReport) -> pd.DataFrame:
    """Return the per-invoice table shown under the company selector."""
    columns = [
        "Invoice Number",
        "Invoice Date",
        "Invoice Amount",
        "Paid Amount",
        "Days to Pay",
        "Fully Paid?",
    ]
    rows = [
        {
            "Invoice Number": inv.invoice_reference,
            "Invoice Date": inv.invoice_date.isoformat() if inv.invoice_date else "",
            "Invoice Amount": inv.invoice_amount,
            "Paid Amount": inv.paid_amount,
            "Days to Pay": NOT_AVAILABLE if inv.days_to_pay is None else str(inv.days_to_pay),
            "Fully Paid?": "Yes" if inv.is_fully_paid else "No",
        }
        for inv in report.invoices
    ]
    return pd.DataFrame(rows, columns=columns)


def monthly_totals_table(report: CompanyReport) -> pd.DataFrame:
    """Return monthly totals with amounts formatted to two decimals."""
    columns = ["Month", "Invoice Amount Total", "Paid Amount Total"]
    rows = [
        {
            "Month": t.month,
            "Invoice Amount Total": f"{t.invoice_amount_sum:.2f}",
            "Paid Amount Total": f"{t.paid_amount_sum:.2f}",
        }
        for t in report.monthly_totals
    ]
    return pd.DataFrame(rows, columns=columns)


def monthly_average_frame(report: CompanyReport) -> pd.DataFrame:
    """Return `month` / `avg_days` rows for the per-month bar chart."""
    return pd.DataFrame(
        [m.model_dump() for m in report.monthly_average_days],
        columns=["month", "avg_days"],
    )


def late_invoice_lines(report: CompanyReport) -> list[str]:
    """Return one line per late invoice, or ``["None"]`` when there are none."""
    if not report.late_invoices:
        return ["None"]
    return [
        f"Ref: {inv.invoice_reference} | Days to Pay: {inv.days_to_pay}"
        for inv in report.late_invoices
    ]


def render_text(report: CompanyReport) -> str:
    """Render the full report as plain text for the terminal."""
    lines = [f"Invoices for Company: {report.company}", ""]
    lines.append(invoices_table(report).to_string(index=False))
    lines += ["", f"Average Days to Pay: {format_average(report.average_days_to_pay)}", ""]

    lines.append("Average Days to Pay Per Month")
    if report.monthly_average_days:
        lines.append(monthly_average_frame(report).to_string(index=False))
    else:
        lines.append("None")

    lines += ["", "Monthly Totals", monthly_totals_table(report).to_string(index=False), ""]
    lines.append(f"Late Invoices (Paid after {report.threshold_days} days)")
    lines += [f"- {line}" for line in late_invoice_lines(report)]
    return "\n".join(lines)
