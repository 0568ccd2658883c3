"""Backtesting engine: equal-weight rebalancing versus buy-and-hold."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

from .config import BacktestConfig
from .models import (
    BacktestResult,
    DayPrices,
    Holding,
    PassiveMetrics,
    SignalKind,
    Trade,
    TradeAction,
)

logger = logging.getLogger(__name__)


@dataclass
class Position:
    quantity: float
    avg_price: float


@dataclass
class CurrentSignal:
    kind: SignalKind
    confidence: float
    weight: float


def usable_price(price: Optional[float]) -> bool:
    return price is not None and math.isfinite(price) and price > 0


def max_drawdown(curve: Sequence[float]) -> float:
    peak = curve[0] if curve else 0.0
    max_dd = 0.0
    for value in curve:
        peak = max(peak, value)
        dd = (peak - value) / peak if peak else 0.0
        max_dd = max(max_dd, dd)
    return max_dd


def win_rate(trades: Sequence[Trade], initial: Mapping[str, Holding]) -> float:
    """Share of SELL trades whose proceeds beat the original cost basis; 0 without sells."""
    sells = [t for t in trades if t.action == TradeAction.SELL]
    if not sells:
        return 0.0
    wins = sum(1 for t in sells if t.value > t.shares * initial[t.symbol].avg_price)
    return wins / len(sells)


class Backtester:
    def __init__(self, config: BacktestConfig = BacktestConfig()):
        self.cfg = config

    def current_signal(self, quantity: float, price: float, portfolio_value: float) -> CurrentSignal:
        """Simplified signal from today's prices, separate from the classifier thresholds."""
        cfg = self.cfg
        weight = quantity * price / portfolio_value
        if weight > cfg.overweight_weight:
            confidence = cfg.overweight_base_confidence + (weight - cfg.overweight_weight) * cfg.overweight_confidence_slope
            return CurrentSignal(SignalKind.OVERWEIGHT, confidence, weight)
        if weight < cfg.underweight_weight:
            return CurrentSignal(SignalKind.UNDERWEIGHT, cfg.underweight_confidence, weight)
        return CurrentSignal(SignalKind.BALANCED, cfg.balanced_confidence, weight)

    def run(self, snapshot: Sequence[Holding], price_path: Sequence[DayPrices]) -> Optional[BacktestResult]:
        if not snapshot:
            logger.info("Empty snapshot; skipping backtest")
            return None

        initial_holdings: Dict[str, Holding] = {h.symbol: h for h in snapshot}
        initial_value = 0.0
        for holding in snapshot:
            initial_value += holding.quantity * holding.avg_price
        if initial_value <= 0:
            logger.info("Snapshot has no initial value; skipping backtest")
            return None

        holdings: Dict[str, Position] = {h.symbol: Position(h.quantity, h.avg_price) for h in snapshot}
        cash = 0.0
        passive_curve: List[float] = [initial_value]
        active_curve: List[float] = [initial_value]
        trades: List[Trade] = []
        target_weight = 1 / len(snapshot)

        for day in price_path:
            passive_value = 0.0
            for holding in snapshot:
                price = day.prices.get(holding.symbol)
                if usable_price(price):
                    passive_value += initial_holdings[holding.symbol].quantity * price
            passive_curve.append(passive_value)

            active_value = self._value(holdings, cash, day)

            if self._rebalance_due(day.day):
                cash = self._sell_overweight(day, holdings, cash, active_value, target_weight, trades)
                if cash > self.cfg.min_cash:
                    cash = self._buy_underweight(day, holdings, cash, active_value, target_weight, trades)

            active_curve.append(self._value(holdings, cash, day))

        passive_final = passive_curve[-1]
        active_final = active_curve[-1]
        passive_return = passive_final - initial_value
        passive_return_pct = passive_return / initial_value * 100
        active_return = active_final - initial_value
        active_return_pct = active_return / initial_value * 100

        result = BacktestResult(
            total_return=active_return,
            return_pct=active_return_pct,
            final_value=active_final,
            initial_value=initial_value,
            trade_count=len(trades),
            win_rate=win_rate(trades, initial_holdings),
            max_drawdown=max_drawdown(active_curve),
            passive=PassiveMetrics(
                total_return=passive_return,
                return_pct=passive_return_pct,
                final_value=passive_final,
                initial_value=initial_value,
                max_drawdown=max_drawdown(passive_curve),
            ),
            alpha=active_return_pct - passive_return_pct,
            trades=trades,
            active_equity_curve=active_curve,
            passive_equity_curve=passive_curve,
        )
        logger.info(
            "Backtest over %d days: active %.2f%%, passive %.2f%%, %d trades",
            len(price_path),
            active_return_pct,
            passive_return_pct,
            len(trades),
        )
        return result

    def _rebalance_due(self, day: int) -> bool:
        return day > self.cfg.warmup_days and day % self.cfg.rebalance_interval == 0

    def _value(self, holdings: Dict[str, Position], cash: float, day: DayPrices) -> float:
        value = cash
        for symbol, position in holdings.items():
            price = day.prices.get(symbol)
            if not usable_price(price):
                logger.debug("Day %d: no price for %s, skipped in valuation", day.day, symbol)
                continue
            if position.quantity > 0:
                value += position.quantity * price
        return value

    def _sell_overweight(
        self,
        day: DayPrices,
        holdings: Dict[str, Position],
        cash: float,
        portfolio_value: float,
        target_weight: float,
        trades: List[Trade],
    ) -> float:
        for symbol, position in holdings.items():
            price = day.prices.get(symbol)
            if not usable_price(price) or position.quantity <= 0:
                continue
            signal = self.current_signal(position.quantity, price, portfolio_value)
            if signal.kind != SignalKind.OVERWEIGHT or signal.weight <= self.cfg.sell_trigger_weight:
                continue
            excess_value = position.quantity * price - portfolio_value * target_weight
            if excess_value <= 0:
                continue
            shares = math.floor(excess_value / price)
            if shares <= 0:
                continue
            proceeds = shares * price
            position.quantity -= shares
            cash += proceeds
            trades.append(Trade(day.day, symbol, TradeAction.SELL, shares, price, proceeds))
            logger.debug("Day %d: SELL %d %s @ %.4f", day.day, shares, symbol, price)
        return cash

    def _buy_underweight(
        self,
        day: DayPrices,
        holdings: Dict[str, Position],
        cash: float,
        portfolio_value: float,
        target_weight: float,
        trades: List[Trade],
    ) -> float:
        candidates = []
        for symbol, position in holdings.items():
            price = day.prices.get(symbol)
            if not usable_price(price):
                continue
            signal = self.current_signal(position.quantity, price, portfolio_value)
            if signal.kind == SignalKind.UNDERWEIGHT:
                candidates.append((symbol, position, price, signal))
        candidates.sort(key=lambda c: c[3].weight)

        for symbol, position, price, _ in candidates:
            if cash < self.cfg.min_cash:
                break
            deficit = portfolio_value * target_weight - position.quantity * price
            buy_amount = min(deficit, cash * self.cfg.cash_deploy_fraction)
            shares = math.floor(buy_amount / price)
            if shares <= 0:
                continue
            cost = shares * price
            position.quantity += shares
            cash -= cost
            trades.append(Trade(day.day, symbol, TradeAction.BUY, shares, price, cost))
            logger.debug("Day %d: BUY %d %s @ %.4f", day.day, shares, symbol, price)
        return cash


__all__ = ["Backtester", "CurrentSignal", "max_drawdown", "usable_price", "win_rate"]
