"""Engine configuration dataclasses and defaults."""
from dataclasses import dataclass, field
from typing import Tuple


@dataclass
class ScoringConfig:
    # (upper bound of largest weight, points), checked in order
    concentration_bands: Tuple[Tuple[float, float], ...] = (
        (0.10, 20),
        (0.15, 18),
        (0.20, 15),
        (0.25, 12),
        (0.35, 8),
        (0.50, 4),
    )
    # (upper bound of top-3 weight, points), checked in order
    drawdown_bands: Tuple[Tuple[float, float], ...] = (
        (0.30, 25),
        (0.40, 22),
        (0.50, 18),
        (0.60, 14),
        (0.75, 10),
        (0.90, 5),
    )
    min_holdings: int = 5
    max_holdings: int = 20
    max_position_pct: int = 25
    max_top3_pct: int = 60


@dataclass
class SignalConfig:
    overweight_floor: float = 0.15
    overweight_multiple: float = 2.5
    underweight_cap: float = 0.05
    underweight_multiple: float = 0.4
    min_weight: float = 0.001
    strong_score: float = 70.0
    weak_score: float = 40.0
    max_confidence: float = 0.95
    max_underweight_confidence: float = 0.90


@dataclass
class GateConfig:
    default_threshold: float = 0.6
    min_threshold: float = 0.4
    max_threshold: float = 0.9


@dataclass
class SimulationConfig:
    days: int = 60
    seed: int = 12345
    drift: float = 0.0002
    daily_volatility: float = 0.015
    correlation: float = 0.4


@dataclass
class BacktestConfig:
    warmup_days: int = 5
    rebalance_interval: int = 5
    overweight_weight: float = 0.20
    underweight_weight: float = 0.03
    sell_trigger_weight: float = 0.25
    overweight_base_confidence: float = 0.65
    overweight_confidence_slope: float = 0.5
    underweight_confidence: float = 0.55
    balanced_confidence: float = 0.6
    min_cash: float = 100.0
    cash_deploy_fraction: float = 0.5


@dataclass
class AnalysisConfig:
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    signals: SignalConfig = field(default_factory=SignalConfig)
    gate: GateConfig = field(default_factory=GateConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    backtest: BacktestConfig = field(default_factory=BacktestConfig)
