from __future__ import annotations

import dataclasses
from datetime import date
from pathlib import Path

import pytest
import requests

from invoice_dashboard.config import get_settings
from invoice_dashboard.ingest import fetch_records
from invoice_dashboard.ingest.fetch_records import fetch_invoice_rows
from invoice_dashboard.ingest.load_csv import load_csv_records, read_invoice_rows
from invoice_dashboard.ingest.source import load_invoice_records

CSV = (
    "Client Name,Invoice Reference,Date Invoiced,Date Paid,Invoice Amount,Paid Amount\n"
    "A,INV-1,2024-01-01,2024-01-20,100,100\n"
    "A,INV-2,2024-01-10,,200,\n"
    "B,INV-3,2024-02-01,2024-03-05,50.5,50.5\n"
)


class _FakeResponse:
    def __init__(self, payload: object, status: int = 200) -> None:
        self._payload = payload
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> object:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


@pytest.fixture
def csv_path(tmp_path: Path) -> Path:
    p = tmp_path / "invoices.csv"
    p.write_text(CSV, encoding="utf-8")
    return p


def test_read_invoice_rows_keeps_values_as_text(csv_path: Path) -> None:
    rows = read_invoice_rows(csv_path)
    assert len(rows) == 3
    assert rows[1]["Date Paid"] == ""
    assert rows[1]["Paid Amount"] == ""
    assert rows[2]["Invoice Amount"] == "50.5"


def test_load_csv_records_returns_typed_records(csv_path: Path) -> None:
    records = load_csv_records(csv_path)
    assert [r.client_name for r in records] == ["A", "A", "B"]
    assert records[0].paid_date == date(2024, 1, 20)
    assert records[1].paid_date is None
    assert records[1].paid_amount == 0.0
    assert records[2].invoice_amount == 50.5


def test_read_invoice_rows_raises_for_missing_file(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        read_invoice_rows(tmp_path / "missing.csv")


def test_fetch_invoice_rows_returns_object_rows(monkeypatch) -> None:
    payload = [{"Client Name": "A"}, "junk", {"Client Name": "B"}]
    monkeypatch.setattr(fetch_records.requests, "get", lambda *a, **kw: _FakeResponse(payload))
    assert fetch_invoice_rows("http://invoices.test/api/invoices") == [
        {"Client Name": "A"},
        {"Client Name": "B"},
    ]


@pytest.mark.parametrize(
    "response",
    [
        _FakeResponse([], status=500),
        _FakeResponse(ValueError("bad json")),
        _FakeResponse({"error": "Failed to load invoice data"}),
    ],
)
def test_fetch_invoice_rows_falls_back_to_empty_list(monkeypatch, response: _FakeResponse) -> None:
    monkeypatch.setattr(fetch_records.requests, "get", lambda *a, **kw: response)
    assert fetch_invoice_rows("http://invoices.test/api/invoices") == []


def test_fetch_invoice_rows_handles_connection_errors(monkeypatch) -> None:
    def boom(*args, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(fetch_records.requests, "get", boom)
    assert fetch_invoice_rows("http://invoices.test/api/invoices") == []


def test_load_invoice_records_uses_csv_by_default(csv_path: Path) -> None:
    s = dataclasses.replace(get_settings(), invoices_csv=csv_path, invoices_api_url=None)
    assert len(load_invoice_records(s)) == 3


def test_load_invoice_records_prefers_api_url(monkeypatch, csv_path: Path) -> None:
    payload = [{"Client Name": "Remote", "Date Invoiced": "2024-05-01", "Invoice Amount": 10}]
    monkeypatch.setattr(fetch_records.requests, "get", lambda *a, **kw: _FakeResponse(payload))
    s = dataclasses.replace(
        get_settings(), invoices_csv=csv_path, invoices_api_url="http://invoices.test/api/invoices"
    )
    (rec,) = load_invoice_records(s)
    assert rec.client_name == "Remote"
    assert rec.invoice_amount == 10.0


def test_load_invoice_records_substitutes_empty_list_on_failure(tmp_path: Path) -> None:
    s = dataclasses.replace(get_settings(), invoices_csv=tmp_path / "missing.csv", invoices_api_url=None)
    assert load_invoice_records(s) == []
