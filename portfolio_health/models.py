"""Core data structures shared across modules."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Holding:
    symbol: str
    quantity: float
    avg_price: float

    @property
    def value(self) -> float:
        return self.quantity * self.avg_price


PortfolioSnapshot = Tuple[Holding, ...]


@dataclass
class ScoreResult:
    score: int
    diversification: int
    concentration: int
    volatility: int
    drawdown: int
    total_value: float
    num_holdings: int
    largest_position_pct: int
    top3_concentration_pct: int
    hhi: float
    weights: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class RiskLevel:
    level: str  # Low, Moderate, Elevated or High
    description: str


class SignalKind(str, Enum):
    UNDERWEIGHT = "UNDERWEIGHT"
    BALANCED = "BALANCED"
    OVERWEIGHT = "OVERWEIGHT"
    HOLD = "HOLD"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Signal:
    kind: SignalKind
    confidence: float
    weight_pct: Optional[int] = None
    explanation: str = ""
    muted: bool = False


@dataclass(frozen=True)
class DayPrices:
    day: int
    prices: Dict[str, float]

    @property
    def total_value(self) -> float:
        return sum(self.prices.values())


PricePath = List[DayPrices]


class TradeAction(str, Enum):
    BUY = "BUY"
    SELL = "SELL"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Trade:
    day: int
    symbol: str
    action: TradeAction
    shares: int
    price: float
    value: float


@dataclass
class PassiveMetrics:
    total_return: float
    return_pct: float
    final_value: float
    initial_value: float
    max_drawdown: float


@dataclass
class BacktestResult:
    total_return: float
    return_pct: float
    final_value: float
    initial_value: float
    trade_count: int
    win_rate: float
    max_drawdown: float
    passive: PassiveMetrics
    alpha: float
    trades: List[Trade] = field(default_factory=list)
    active_equity_curve: List[float] = field(default_factory=list)
    passive_equity_curve: List[float] = field(default_factory=list)


@dataclass
class AnalysisReport:
    score: ScoreResult
    risk_level: RiskLevel
    recommendations: List[str]
    portfolio_signal: Signal
    position_signals: Dict[str, Signal]
    raw_signals: Dict[str, Signal]  # ungated, handed back on the next refresh
    alerts: List[str]
    threshold: float
    backtest: Optional[BacktestResult] = None
