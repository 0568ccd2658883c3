"""Facade wiring all modules together for one snapshot refresh."""
from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from .alerts import detect_changes
from .backtester import Backtester, usable_price
from .config import AnalysisConfig
from .gating import ConfidenceGate
from .models import AnalysisReport, BacktestResult, Holding, Signal
from .price_simulator import PriceSimulator
from .scoring import HealthScorer, risk_level
from .signals import SignalClassifier

logger = logging.getLogger(__name__)


class PortfolioAnalyzer:
    def __init__(self, config: AnalysisConfig = AnalysisConfig()):
        self.config = config
        self.scorer = HealthScorer(config.scoring)
        self.classifier = SignalClassifier(config.signals)
        self.gate = ConfidenceGate(config.gate)
        self.simulator = PriceSimulator(config.simulation)
        self.backtester = Backtester(config.backtest)

    def backtest(
        self, snapshot: Sequence[Holding], days: Optional[int] = None, seed: Optional[int] = None
    ) -> Optional[BacktestResult]:
        if not snapshot:
            return None
        # closed positions carry no cost to simulate from; the backtest skips unpriced symbols
        prices = {h.symbol: h.avg_price for h in snapshot if usable_price(h.avg_price)}
        price_path = self.simulator.simulate(prices, days=days, seed=seed)
        return self.backtester.run(snapshot, price_path)

    def analyze(
        self,
        snapshot: Sequence[Holding],
        previous_signals: Optional[Mapping[str, Signal]] = None,
        threshold: Optional[float] = None,
        days: Optional[int] = None,
        seed: Optional[int] = None,
        run_backtest: bool = True,
    ) -> Optional[AnalysisReport]:
        """Score, classify, gate and backtest a snapshot.

        ``previous_signals`` is the ``raw_signals`` map of the previous report;
        pass the new report's ``raw_signals`` on the next refresh.
        """
        threshold = self.gate.check_threshold(threshold)
        score = self.scorer.score(snapshot)
        if score is None:
            return None

        raw_signals = self.classifier.classify_holdings(snapshot, score)
        alerts = detect_changes(previous_signals, raw_signals)
        portfolio_signal = self.classifier.classify_portfolio(score)

        report = AnalysisReport(
            score=score,
            risk_level=risk_level(score.score),
            recommendations=self.scorer.recommendations(score),
            portfolio_signal=self.gate.gate(portfolio_signal, threshold),
            position_signals=self.gate.gate_all(raw_signals, threshold),
            raw_signals=raw_signals,
            alerts=alerts,
            threshold=threshold,
        )
        if run_backtest:
            report.backtest = self.backtest(snapshot, days=days, seed=seed)
        logger.info(
            "Analyzed %d holdings: score %d (%s), %d alert(s)",
            len(snapshot),
            score.score,
            report.risk_level.level,
            len(alerts),
        )
        return report


__all__ = ["PortfolioAnalyzer"]
