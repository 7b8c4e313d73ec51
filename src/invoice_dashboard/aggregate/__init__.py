"""Payment-timing aggregation helpers.

This package contains the pure functions that turn typed invoice records into
the per-company views served by the API, the CLI and the dashboard
(days to pay, monthly totals, monthly averages, late invoices).
"""
