"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads the record-source and reporting options from the environment (with
validation of the numeric values).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_LATE_THRESHOLD_DAYS = 30

@dataclass(frozen=True)
class Settings:
    """Container for dashboard configuration read from the environment.

    Attributes:
        invoices_csv: CSV file used as the record source.
        invoices_api_url: Optional JSON endpoint used instead of the CSV file.
        late_threshold_days: Days-to-pay above which an invoice is late.
        request_timeout: Timeout in seconds for the JSON endpoint.
        cors_origins: Origins allowed to call the JSON API.
        log_path: Log file written by the CLI.
    """
    invoices_csv: Path
    invoices_api_url: str | None
    late_threshold_days: int
    request_timeout: float
    cors_origins: tuple[str, ...]
    log_path: Path



def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `LATE_THRESHOLD_DAYS` or `REQUEST_TIMEOUT` is not a
            valid non-negative number.
    """
    invoices_csv = Path(os.getenv("INVOICES_CSV", "data/cleaned_invoices.csv"))
    invoices_api_url = os.getenv("INVOICES_API_URL", "").strip() or None
    log_path = Path(os.getenv("LOG_PATH", "logs/dashboard.log"))

    raw_threshold = os.getenv("LATE_THRESHOLD_DAYS", str(DEFAULT_LATE_THRESHOLD_DAYS)).strip()
    try:
        late_threshold_days = int(raw_threshold)
    except ValueError:
        raise RuntimeError(
            f"LATE_THRESHOLD_DAYS must be a whole number of days, got {raw_threshold!r}."
        ) from None
    if late_threshold_days < 0:
        raise RuntimeError("LATE_THRESHOLD_DAYS must not be negative.")

    raw_timeout = os.getenv("REQUEST_TIMEOUT", "10").strip()
    try:
        request_timeout = float(raw_timeout)
    except ValueError:
        raise RuntimeError(
            f"REQUEST_TIMEOUT must be a number of seconds, got {raw_timeout!r}."
        ) from None

    cors_origins = tuple(
        o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
    )

    return Settings(
        invoices_csv=invoices_csv,
        invoices_api_url=invoices_api_url,
        late_threshold_days=late_threshold_days,
        request_timeout=request_timeout,
        cors_origins=cors_origins or ("*",),
        log_path=log_path,
    )
