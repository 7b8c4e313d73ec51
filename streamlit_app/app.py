from __future__ import annotations

import altair as alt
import pandas as pd
import streamlit as st

from invoice_dashboard.aggregate.build_report import build_company_report, distinct_companies
from invoice_dashboard.config import get_settings
from invoice_dashboard.ingest.source import load_invoice_records
from invoice_dashboard.logging_config import configure_logging
from invoice_dashboard.models import InvoiceRecord
from invoice_dashboard.views import (
    format_average,
    invoices_table,
    late_invoice_lines,
    monthly_average_frame,
    monthly_totals_table,
)

# =====================================================
# Page config
# =====================================================
st.set_page_config(page_title="Invoice Payment Timing", layout="wide")
st.title("🧾 Invoice Payment Timing Dashboard")

try:
    settings = get_settings()
except RuntimeError as exc:
    st.error(f"Invalid configuration: {exc}")
    st.stop()

configure_logging(settings.log_path)

# =====================================================
# Helpers
# =====================================================
@st.cache_data(show_spinner="Loading invoices...")
def load_records() -> list[InvoiceRecord]:
    """Load invoice records once per session from the configured source.

    Returns:
        List of records, empty when the source could not be read.
    """
    return load_invoice_records(settings)


def center_dataframe(df: pd.DataFrame):
    """Center-align column headers and values for display."""
    return (
        df.style
        .set_properties(**{"text-align": "center"})
        .set_table_styles(
            [{"selector": "th", "props": [("text-align", "center")]}]
        )
    )

records = load_records()
if not records:
    source = settings.invoices_api_url or settings.invoices_csv
    st.warning(f"No invoice data available from `{source}`.")

# =====================================================
# SECTION 0 — COMPANY SELECTION
# =====================================================
st.header("Select a Company")

placeholder = "-- Select Company --"
choice = st.selectbox("Company", [placeholder, *distinct_companies(records)], index=0)
selected_company = "" if choice == placeholder else choice

if not selected_company:
    st.stop()

report = build_company_report(records, selected_company, settings.late_threshold_days)

# =====================================================
# SECTION 1 — AVERAGE DAYS TO PAY PER MONTH
# =====================================================
st.header("📈 Average Days to Pay Per Month")

df_avg = monthly_average_frame(report)
if df_avg.empty:
    st.info("No paid invoices with an invoice date for this company.")
else:
    chart = (
        alt.Chart(df_avg)
        .mark_bar(color="#8884d8")
        .encode(
            x=alt.X("month:N", title="Month", sort=None),
            y=alt.Y("avg_days:Q", title="Avg Days"),
            tooltip=["month:N", "avg_days:Q"],
        )
        .properties(height=300)
    )
    st.altair_chart(chart, width="stretch")

st.divider()

# =====================================================
# SECTION 2 — INVOICES
# =====================================================
st.header(f"🏢 Invoices for Company: {selected_company}")

st.dataframe(center_dataframe(invoices_table(report)), width="stretch")
st.metric("Average Days to Pay", format_average(report.average_days_to_pay))

st.divider()

# =====================================================
# SECTION 3 — MONTHLY TOTALS
# =====================================================
st.header("📘 Monthly Totals")

st.dataframe(center_dataframe(monthly_totals_table(report)), width="stretch")

# =====================================================
# SECTION 4 — LATE INVOICES
# =====================================================
st.header(f"⏰ Late Invoices (Paid after {report.threshold_days} days)")

st.markdown("\n".join(f"- {line}" for line in late_invoice_lines(report)))
