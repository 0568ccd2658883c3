"""Convenience runner: analyze a holdings CSV and write the backtest equity curves to reports/."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from portfolio_health.analysis import PortfolioAnalyzer
from portfolio_health.config import AnalysisConfig
from portfolio_health.models import AnalysisReport, BacktestResult
from portfolio_health.snapshot import build_snapshot

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("symbol", "quantity", "avg_price")


def load_holdings(csv_path: str) -> pd.DataFrame:
    """Read an uploaded holdings file, keeping raw values for the engine to validate."""
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False, skipinitialspace=True)
    df.columns = [c.strip().lower() for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{csv_path} is missing column(s): {', '.join(missing)}")
    return df[list(REQUIRED_COLUMNS)]


def equity_frame(result: BacktestResult) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "day": range(len(result.active_equity_curve)),
            "active": result.active_equity_curve,
            "passive": result.passive_equity_curve,
        }
    )


def run_analysis(
    csv_path: str,
    threshold: Optional[float] = None,
    days: Optional[int] = None,
    seed: Optional[int] = None,
    reports_dir: str = "reports",
) -> Optional[AnalysisReport]:
    """Analyze a holdings CSV, print a summary and write reports/equity_curve.csv."""
    snapshot = build_snapshot(load_holdings(csv_path).to_dict("records"))
    analyzer = PortfolioAnalyzer(AnalysisConfig())
    report = analyzer.analyze(snapshot, threshold=threshold, days=days, seed=seed)
    if report is None:
        print("No holdings with positive value; nothing to analyze")
        return None

    score = report.score
    print("Analysis complete")
    print(f"Health score: {score.score} / 100 ({report.risk_level.level})")
    print(
        f"Diversification {score.diversification} | Concentration {score.concentration} | "
        f"Volatility {score.volatility} | Drawdown {score.drawdown}"
    )
    print(f"Portfolio signal: {report.portfolio_signal.kind} ({report.portfolio_signal.confidence:.0%})")
    for symbol, signal in report.position_signals.items():
        print(f"  {symbol}: {signal.kind} ({signal.confidence:.0%}) {signal.explanation}")
    for note in report.recommendations:
        print(f"- {note}")

    result = report.backtest
    if result is not None:
        Path(reports_dir).mkdir(exist_ok=True)
        out_path = Path(reports_dir) / "equity_curve.csv"
        equity_frame(result).to_csv(out_path, index=False)
        logger.info("Wrote %s", out_path)
        print(f"Active return: {result.return_pct:.2f}% | Passive return: {result.passive.return_pct:.2f}%")
        print(f"Alpha: {result.alpha:.2f}% | Trades: {result.trade_count} | Win rate: {result.win_rate:.0%}")
        print(f"Max Drawdown: {result.max_drawdown:.2%} (passive {result.passive.max_drawdown:.2%})")

    return report


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Portfolio health score, signals and backtest")
    parser.add_argument("csv", help="holdings CSV with symbol, quantity, avg_price columns")
    parser.add_argument("--threshold", type=float, default=None, help="minimum signal confidence (0.4-0.9)")
    parser.add_argument("--days", type=int, default=None, help="simulated trading days")
    parser.add_argument("--seed", type=int, default=None, help="price simulator seed")
    parser.add_argument("--reports-dir", default="reports")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    run_analysis(args.csv, threshold=args.threshold, days=args.days, seed=args.seed, reports_dir=args.reports_dir)


__all__ = ["run_analysis", "load_holdings", "equity_frame"]


if __name__ == "__main__":
    main()
