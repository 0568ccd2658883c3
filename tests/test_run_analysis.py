"""Command-line runner: CSV in, summary and equity curve report out."""

import sys
from pathlib import Path

import pandas as pd
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import run_analysis as runner
from portfolio_health.errors import InvalidHolding


def _write_csv(path: Path, body: str) -> str:
    path.write_text(body)
    return str(path)


def test_runner_writes_equity_curve(tmp_path, capsys):
    csv_path = _write_csv(tmp_path / "holdings.csv", "Symbol,Quantity,Avg_Price\nAAPL,10,100\nGOOG,5,200\n")
    reports = tmp_path / "reports"

    report = runner.run_analysis(csv_path, days=20, reports_dir=str(reports))

    assert report.score.score == 19
    curve = pd.read_csv(reports / "equity_curve.csv")
    assert list(curve.columns) == ["day", "active", "passive"]
    assert len(curve) == 21
    assert curve["active"].iloc[0] == pytest.approx(2000.0)
    assert "Health score: 19 / 100" in capsys.readouterr().out


def test_runner_rejects_missing_columns(tmp_path):
    csv_path = _write_csv(tmp_path / "holdings.csv", "symbol,quantity\nAAPL,10\n")

    with pytest.raises(ValueError, match="avg_price"):
        runner.load_holdings(csv_path)


def test_runner_surfaces_invalid_rows(tmp_path):
    csv_path = _write_csv(tmp_path / "holdings.csv", "symbol,quantity,avg_price\nAAPL,-10,100\n")

    with pytest.raises(InvalidHolding):
        runner.run_analysis(csv_path, reports_dir=str(tmp_path / "reports"))
