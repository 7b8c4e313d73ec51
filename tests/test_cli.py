from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator

import pytest

from invoice_dashboard.cli import build_parser, main

CSV = (
    "Client Name,Invoice Reference,Date Invoiced,Date Paid,Invoice Amount,Paid Amount\n"
    "Acme Ltd,INV-1,2024-01-01,2024-01-20,100,100\n"
    "Globex,INV-2,2024-01-15,2024-03-01,50,50\n"
    "Acme Ltd,INV-3,2024-01-10,2024-02-15,200,200\n"
)


@pytest.fixture
def csv_path(tmp_path: Path, monkeypatch) -> Iterator[Path]:
    monkeypatch.setenv("LOG_PATH", str(tmp_path / "logs" / "cli.log"))
    monkeypatch.delenv("INVOICES_API_URL", raising=False)
    p = tmp_path / "invoices.csv"
    p.write_text(CSV, encoding="utf-8")
    yield p
    root = logging.getLogger()
    for h in [h for h in root.handlers if getattr(h, "_invoice_dashboard", False)]:
        root.removeHandler(h)
        h.close()


def test_parser_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_parser_rejects_negative_threshold() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["report", "--company", "A", "--threshold-days", "-5"])


def test_companies_command(csv_path: Path, capsys) -> None:
    assert main(["--csv", str(csv_path), "companies"]) == 0
    assert capsys.readouterr().out.splitlines() == ["Acme Ltd", "Globex"]


def test_report_command_json(csv_path: Path, capsys) -> None:
    assert main(["--csv", str(csv_path), "report", "--company", "Acme Ltd", "--format", "json"]) == 0
    body = json.loads(capsys.readouterr().out)
    assert body["average_days_to_pay"] == 27.5
    assert [inv["invoice_reference"] for inv in body["late_invoices"]] == ["INV-3"]


def test_report_command_text(csv_path: Path, capsys) -> None:
    assert main(["--csv", str(csv_path), "report", "--company", "Globex", "--threshold-days", "60"]) == 0
    out = capsys.readouterr().out
    assert "Invoices for Company: Globex" in out
    assert "Average Days to Pay: 46.0" in out
    assert "Late Invoices (Paid after 60 days)" in out


def test_report_for_unknown_company_exits_nonzero(csv_path: Path, capsys) -> None:
    assert main(["--csv", str(csv_path), "report", "--company", "acme ltd"]) == 1
    assert "Average Days to Pay: N/A" in capsys.readouterr().out


def test_invalid_configuration_exits_with_message(csv_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("LATE_THRESHOLD_DAYS", "thirty")
    with pytest.raises(SystemExit) as exc:
        main(["--csv", str(csv_path), "companies"])
    assert "invalid configuration" in str(exc.value.code)
    assert "LATE_THRESHOLD_DAYS" in str(exc.value.code)
