"""HTTP record source.

Fetches the list of invoice rows served by ``GET /api/invoices`` (this
project's own JSON API, or any service honouring the same field names).
"""

from __future__ import annotations

import logging
from typing import Any

import requests

log = logging.getLogger(__name__)


def fetch_invoice_rows(url: str, timeout: float = 10.0) -> list[dict[str, Any]]:
    """Download invoice rows from a JSON endpoint.

    Failures never propagate: network errors, non-2xx responses and payloads
    that are not a JSON list are logged and an empty list is returned, so the
    dashboard falls back to its empty state.

    Args:
        url: Endpoint returning a JSON array of row objects.
        timeout: Request timeout in seconds.

    Returns:
        The rows that are JSON objects, in payload order.
    """
    log.info("Fetching invoices from %s", url)
    try:
        r = requests.get(url, headers={"Accept": "application/json"}, timeout=timeout)
        r.raise_for_status()
        payload = r.json()
    except requests.RequestException as e:
        log.error("Failed to fetch invoices from %s: %s", url, e)
        return []
    except ValueError as e:
        log.error("Invoices endpoint %s returned invalid JSON: %s", url, e)
        return []

    if not isinstance(payload, list):
        log.error("Invoices endpoint %s returned %s, expected a list", url, type(payload).__name__)
        return []

    rows = [row for row in payload if isinstance(row, dict)]
    if len(rows) != len(payload):
        log.warning("Skipped %d non-object items from %s", len(payload) - len(rows), url)
    log.info("Fetched %d invoice rows", len(rows))
    return rows
