"""Date and rounding helpers shared by the aggregation and cleaning steps.

All helpers are total: anything that cannot be read as a calendar date
becomes ``None`` rather than raising, so callers only deal with two cases.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
import re
from typing import Any

import pandas as pd

# pandas resolves "now"/"today" to the wall clock and fills a missing year
# with defaults, so only strings carrying an explicit 4-digit year are parsed
YEAR_RE = re.compile(r"(?<!\d)\d{4}(?!\d)")


def parse_date(raw: Any) -> date | None:
    """Return the calendar date represented by `raw`, or None.

    Args:
        raw: A date string with a 4-digit year (ISO or any format pandas
            understands), a `date`/`datetime`, or an empty value.

    Returns:
        `datetime.date` or ``None`` for empty, malformed or non-date input.
    """
    if not raw:
        return None
    if isinstance(raw, datetime):
        # pd.NaT is a datetime subclass
        return None if pd.isna(raw) else raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str) or not YEAR_RE.search(raw):
        return None

    try:
        ts = pd.to_datetime(raw.strip(), errors="coerce")
    except (ValueError, OverflowError):
        return None
    if pd.isna(ts):
        return None
    return ts.date()


def month_key(raw: Any) -> str:
    """Return the ``YYYY-MM`` grouping key for `raw`, or ``""`` when undated."""
    d = parse_date(raw)
    if d is None:
        return ""
    return f"{d.year:04d}-{d.month:02d}"


def days_between(start_raw: Any, end_raw: Any) -> int | None:
    """Return whole days from `start_raw` to `end_raw`.

    The sign is kept: a payment recorded before the invoice date gives a
    negative count. Returns ``None`` when either side is not a date.
    """
    start = parse_date(start_raw)
    end = parse_date(end_raw)
    if start is None or end is None:
        return None
    return (end - start).days


def round_half_up(value: float, digits: int = 1) -> float:
    """Round `value` to `digits` decimals, ties away from zero."""
    quantum = Decimal(1).scaleb(-digits)
    # exact binary value, so 0.15 (stored as 0.1499...) rounds down
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
