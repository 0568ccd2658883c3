"""Allocation signals for individual positions and the portfolio as a whole."""
from __future__ import annotations

import math
from typing import Dict, Sequence

from .config import SignalConfig
from .models import Holding, ScoreResult, Signal, SignalKind
from .scoring import round_half_up


def _round_confidence(confidence: float) -> float:
    return math.floor(confidence * 100 + 0.5) / 100


class SignalClassifier:
    def __init__(self, config: SignalConfig = SignalConfig()):
        self.cfg = config

    def classify_position(self, holding: Holding, total_value: float, num_holdings: int) -> Signal:
        """Compare a position's weight with thresholds scaled to an equal-weight target."""
        if total_value <= 0 or num_holdings <= 0:
            raise ValueError("classify_position needs a positive total value and holding count")
        cfg = self.cfg
        weight = holding.value / total_value
        weight_pct = round_half_up(weight * 100)
        target_weight = 1 / num_holdings
        overweight_threshold = max(cfg.overweight_floor, target_weight * cfg.overweight_multiple)
        underweight_threshold = min(cfg.underweight_cap, target_weight * cfg.underweight_multiple)

        if weight > overweight_threshold:
            confidence = min(cfg.max_confidence, 0.5 + (weight / overweight_threshold) * 0.15)
            return Signal(
                SignalKind.OVERWEIGHT,
                _round_confidence(confidence),
                weight_pct,
                f"Position is {weight_pct}% of portfolio "
                f"(threshold: {round_half_up(overweight_threshold * 100)}%).",
            )

        if weight < underweight_threshold:
            deficit_ratio = underweight_threshold / max(weight, cfg.min_weight)
            confidence = min(cfg.max_underweight_confidence, 0.45 + deficit_ratio * 0.10)
            return Signal(
                SignalKind.UNDERWEIGHT,
                _round_confidence(confidence),
                weight_pct,
                f"Position is only {weight_pct}% of portfolio "
                f"(threshold: {round_half_up(underweight_threshold * 100)}%).",
            )

        midpoint = (overweight_threshold + underweight_threshold) / 2
        spread = (overweight_threshold - underweight_threshold) / 2
        centeredness = 1 - abs(weight - midpoint) / spread
        return Signal(
            SignalKind.BALANCED,
            _round_confidence(0.45 + centeredness * 0.35),
            weight_pct,
            f"Position is {weight_pct}% - well-balanced allocation "
            f"(range: {round_half_up(underweight_threshold * 100)}%-"
            f"{round_half_up(overweight_threshold * 100)}%).",
        )

    def classify_portfolio(self, result: ScoreResult) -> Signal:
        cfg = self.cfg
        score = result.score
        largest = result.largest_position_pct

        if score >= cfg.strong_score:
            holdings_bonus = min(result.num_holdings / 20, 0.15)
            concentration_bonus = max(0, (30 - largest) / 100)
            confidence = min(cfg.max_confidence, 0.55 + holdings_bonus + concentration_bonus)
            return Signal(
                SignalKind.BALANCED,
                _round_confidence(confidence),
                largest,
                f"Portfolio is well-diversified with {result.num_holdings} holdings. "
                f"Largest position is {largest}%.",
            )

        if score >= cfg.weak_score:
            distance_from_good = (70 - score) / 30
            distance_from_bad = (score - 40) / 30
            clarity = abs(distance_from_good - distance_from_bad)
            return Signal(
                SignalKind.BALANCED,
                _round_confidence(0.45 + clarity * 0.25),
                largest,
                "Portfolio has moderate diversification. "
                f"Top 3 holdings represent {result.top3_concentration_pct}%.",
            )

        severity_bonus = min((40 - score) / 40, 0.3)
        concentration_bonus = min(largest / 100, 0.2)
        confidence = min(cfg.max_confidence, 0.5 + severity_bonus + concentration_bonus)
        return Signal(
            SignalKind.OVERWEIGHT,
            _round_confidence(confidence),
            largest,
            f"Portfolio shows high concentration risk. Largest position is {largest}% - consider rebalancing.",
        )

    def classify_holdings(self, snapshot: Sequence[Holding], result: ScoreResult) -> Dict[str, Signal]:
        return {
            holding.symbol: self.classify_position(holding, result.total_value, result.num_holdings)
            for holding in snapshot
        }


__all__ = ["SignalClassifier"]
