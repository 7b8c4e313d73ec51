"""Command-line interface for the invoice dashboard.

Provides subcommands: `companies`, `report`, and `serve`. Each command
is implemented as a `cmd_*` function that accepts an argparse namespace.
"""
from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from invoice_dashboard.config import Settings, get_settings
from invoice_dashboard.logging_config import configure_logging
from invoice_dashboard.ingest.source import load_invoice_records
from invoice_dashboard.aggregate.build_report import build_company_report, distinct_companies
from invoice_dashboard.views import render_text

log = logging.getLogger(__name__)


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def _settings_for(args: argparse.Namespace, s: Settings) -> Settings:
    """Return `s` with the `--csv` / `--url` overrides applied.

    Args:
        args: argparse namespace with optional `csv` and `url`.
        s: Settings read from the environment.
    """
    if args.csv is not None:
        s = dataclasses.replace(s, invoices_csv=args.csv, invoices_api_url=None)
    if args.url is not None:
        s = dataclasses.replace(s, invoices_api_url=args.url)
    return s


# --------------------------------------------------
# COMPANIES
# --------------------------------------------------
def cmd_companies(args: argparse.Namespace, s: Settings) -> int:
    """Print every company found in the record source, one per line."""
    records = load_invoice_records(s)
    companies = distinct_companies(records)
    if not companies:
        log.warning("No invoice records found.")
    for name in companies:
        print(name)
    return 0


# --------------------------------------------------
# REPORT
# --------------------------------------------------
def cmd_report(args: argparse.Namespace, s: Settings) -> int:
    """Print the payment-timing report for one company.

    Args:
        args: argparse namespace with `company`, `threshold_days`, `format`.
        s: Effective settings (record source, default threshold).

    Returns:
        0 on success, 1 when the company has no invoices.
    """
    threshold = s.late_threshold_days if args.threshold_days is None else args.threshold_days

    records = load_invoice_records(s)
    report = build_company_report(records, args.company, threshold)

    if args.format == "json":
        print(json.dumps(report.model_dump(mode="json"), indent=2))
    else:
        print(render_text(report))

    if not report.invoices:
        log.warning("No invoices found for company %r", args.company)
        return 1
    return 0


# --------------------------------------------------
# SERVE
# --------------------------------------------------
def cmd_serve(args: argparse.Namespace, s: Settings) -> int:
    """Run the JSON API with uvicorn."""
    import uvicorn

    from invoice_dashboard.server import create_app

    log.info("Serving %s on http://%s:%d", s.invoices_csv, args.host, args.port)
    uvicorn.run(create_app(s), host=args.host, port=args.port)
    return 0


# --------------------------------------------------
# CLI
# --------------------------------------------------
def _non_negative_int(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError("must not be negative")
    return n


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    The returned parser has subcommands `companies`, `report`, and `serve`
    plus global `--csv` / `--url` options selecting the record source.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(prog="invoice_dashboard")
    p.add_argument("--csv", type=Path, default=None, help="read invoices from this CSV file")
    p.add_argument("--url", default=None, help="fetch invoices from this JSON endpoint")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("companies")

    p_report = sub.add_parser("report")
    p_report.add_argument("--company", required=True)
    p_report.add_argument("--threshold-days", type=_non_negative_int, default=None)
    p_report.add_argument("--format", choices=["text", "json"], default="text")

    p_serve = sub.add_parser("serve")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=3000)

    return p


def main(argv: list[str] | None = None) -> int:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    try:
        s = _settings_for(args, get_settings())
    except RuntimeError as e:
        raise SystemExit(f"invoice_dashboard: invalid configuration: {e}") from None
    configure_logging(s.log_path, stream=sys.stderr)

    if args.cmd == "companies":
        return cmd_companies(args, s)
    elif args.cmd == "report":
        return cmd_report(args, s)
    elif args.cmd == "serve":
        return cmd_serve(args, s)
    else:
        raise SystemExit(2)


if __name__ == "__main__":
    raise SystemExit(main())
