"""Portfolio health scoring.

The composite score (0-100) is the sum of four structural sub-scores computed
from position weights alone, without market data:

* diversification (0-30) from the number of holdings,
* concentration (0-20) from the largest position,
* volatility (0-25) from the Herfindahl index of the weights,
* drawdown (0-25) from the combined weight of the three largest positions.
"""
from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .config import ScoringConfig
from .models import Holding, RiskLevel, ScoreResult
from .snapshot import validate_holdings

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, value))


def _banded(value: float, bands: Sequence[Tuple[float, float]]) -> float:
    for upper, points in bands:
        if value <= upper:
            return points
    return 0


def diversification_score(num_holdings: int) -> float:
    if num_holdings <= 3:
        return num_holdings * 5
    if num_holdings <= 10:
        return 15 + (num_holdings - 3) * 1.5
    return 25.5 + min((num_holdings - 10) * 0.5, 4.5)


def volatility_score(num_holdings: int, hhi: float) -> float:
    if num_holdings <= 1:
        return 0
    if num_holdings == 2:
        return 5
    if num_holdings <= 5:
        return 15 * (1 - _clamp((hhi - 0.2) / 0.8))
    if num_holdings <= 10:
        return 10 + 10 * (1 - _clamp((hhi - 0.1) / 0.4))
    return 20 + 5 * (1 - _clamp(hhi / 0.2))


class HealthScorer:
    def __init__(self, config: ScoringConfig = ScoringConfig()):
        self.cfg = config

    def score(self, snapshot: Sequence[Holding]) -> Optional[ScoreResult]:
        """Score a snapshot, or return ``None`` when nothing carries value.

        Raises ``InvalidHolding`` before any math if a holding is malformed.
        """
        validate_holdings(snapshot)
        positive = [h for h in snapshot if h.value > 0]
        if not positive:
            logger.info("Snapshot has no value-positive holdings; nothing to score")
            return None

        values = np.array([h.value for h in positive], dtype=float)
        total_value = float(values.sum())
        weights = values / total_value
        num_holdings = len(positive)

        largest_weight = float(weights.max())
        hhi = float(np.sum(weights * weights))
        top3 = float(np.sort(weights)[::-1][:3].sum())

        diversification = round_half_up(diversification_score(num_holdings))
        concentration = round_half_up(_banded(largest_weight, self.cfg.concentration_bands))
        volatility = round_half_up(volatility_score(num_holdings, hhi))
        drawdown = round_half_up(_banded(top3, self.cfg.drawdown_bands))

        return ScoreResult(
            score=diversification + concentration + volatility + drawdown,
            diversification=diversification,
            concentration=concentration,
            volatility=volatility,
            drawdown=drawdown,
            total_value=total_value,
            num_holdings=num_holdings,
            largest_position_pct=round_half_up(largest_weight * 100),
            top3_concentration_pct=round_half_up(top3 * 100),
            hhi=math.floor(hhi * 10000 + 0.5) / 10000,
            weights={h.symbol: float(w) for h, w in zip(positive, weights)},
        )

    def recommendations(self, result: ScoreResult) -> List[str]:
        cfg = self.cfg
        notes: List[str] = []
        if result.num_holdings < cfg.min_holdings:
            notes.append("Consider adding more holdings to improve diversification")
        if result.largest_position_pct > cfg.max_position_pct:
            notes.append(
                f"Largest position is {result.largest_position_pct}% - "
                "consider rebalancing to reduce concentration"
            )
        if result.top3_concentration_pct > cfg.max_top3_pct:
            notes.append(
                f"Top 3 holdings represent over {cfg.max_top3_pct}% of portfolio - high concentration risk"
            )
        if result.num_holdings > cfg.max_holdings:
            notes.append("Large number of holdings may be difficult to monitor effectively")
        return notes


def risk_level(score: int) -> RiskLevel:
    if score >= 80:
        return RiskLevel("Low", "Well-diversified portfolio with manageable risk")
    if score >= 60:
        return RiskLevel("Moderate", "Acceptable diversification with some concentration")
    if score >= 40:
        return RiskLevel("Elevated", "Significant concentration risk present")
    return RiskLevel("High", "Poor diversification - high concentration risk")


__all__ = ["HealthScorer", "diversification_score", "risk_level", "round_half_up", "volatility_score"]
