# backend/tests/test_cli.py
from __future__ import annotations

import json

import pytest

from inspection_payroll.cli import __main__ as cli


@pytest.fixture
def cli_db(monkeypatch, session_factory):
    monkeypatch.setattr(cli, "SessionLocal", session_factory)
    monkeypatch.setattr(cli, "init_db", lambda: None)


def test_report_prints_json(cli_db, capsys):
    cli.main(["report", "--start", "2024-01-01", "--end", "2024-01-14"])

    out = json.loads(capsys.readouterr().out)
    assert out["period"]["days"] == 14
    assert out["summary"]["total_inspections"] == 0


def test_report_with_end_before_start_exits_nonzero(cli_db, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["report", "--start", "2024-01-14", "--end", "2024-01-01"])

    assert exc.value.code == 1
    out = json.loads(capsys.readouterr().out)
    assert out["ok"] is False
    assert "endDate" in out["message"]
