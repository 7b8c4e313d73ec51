"""invoice_dashboard package.

Contains modules for reading invoice records (CSV file or JSON API), coercing
them into typed records, computing payment-timing views per company, and
serving those views through a JSON API, a CLI and a Streamlit dashboard.

Architecture:
- Source rows → typed records (clean) → company report (aggregate)
- pandas / Dask handle CSV reading and column coercion
- Pydantic models describe records and derived views
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
