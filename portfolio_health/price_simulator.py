"""Deterministic synthetic price paths for backtesting."""
from __future__ import annotations

import logging
import math
from typing import Dict, List, Mapping, Optional, Sequence

from .config import SimulationConfig
from .errors import DegeneratePrice
from .models import DayPrices, Holding, PricePath

logger = logging.getLogger(__name__)

MODULUS = 2 ** 31
MULTIPLIER = 1103515245
INCREMENT = 12345


class SeededRandom:
    """Linear-congruential generator.

    Every draw advances ``state <- (state * 1103515245 + 12345) mod 2**31`` and
    returns ``state / (2**31 - 1)``. Integer arithmetic is exact, so a given
    seed always yields the same sequence.
    """

    def __init__(self, seed: int):
        self.state = int(seed)

    def random(self) -> float:
        self.state = (self.state * MULTIPLIER + INCREMENT) % MODULUS
        return self.state / (MODULUS - 1)


def starting_prices(snapshot: Sequence[Holding]) -> Dict[str, float]:
    return {holding.symbol: holding.avg_price for holding in snapshot}


class PriceSimulator:
    def __init__(self, config: SimulationConfig = SimulationConfig()):
        self.cfg = config

    def simulate(
        self,
        prices: Mapping[str, float],
        days: Optional[int] = None,
        seed: Optional[int] = None,
        rng: Optional[SeededRandom] = None,
    ) -> PricePath:
        """Generate ``days`` of correlated prices starting from ``prices``.

        A new generator is seeded for each call. Pass ``rng`` to continue an
        existing sequence instead; ``seed`` is then ignored.
        """
        days = self.cfg.days if days is None else days
        if days < 0:
            raise ValueError(f"days must be non-negative, got {days}")
        for symbol, price in prices.items():
            if not math.isfinite(price) or price <= 0:
                raise DegeneratePrice(symbol, price)
        if rng is None:
            rng = SeededRandom(self.cfg.seed if seed is None else seed)

        drift = self.cfg.drift
        volatility = self.cfg.daily_volatility
        correlation = self.cfg.correlation

        current = dict(prices)
        path: List[DayPrices] = []
        for day in range(1, days + 1):
            market_move = (rng.random() - 0.5) * 2 * volatility
            day_prices: Dict[str, float] = {}
            for symbol, price in current.items():
                stock_move = (rng.random() - 0.5) * 2 * volatility
                total_move = drift + correlation * market_move + (1 - correlation) * stock_move
                day_prices[symbol] = price * (1 + total_move)
            current = dict(day_prices)
            path.append(DayPrices(day, day_prices))

        logger.debug("Simulated %d days for %d symbols", days, len(current))
        return path

    def simulate_snapshot(
        self, snapshot: Sequence[Holding], days: Optional[int] = None, seed: Optional[int] = None
    ) -> PricePath:
        return self.simulate(starting_prices(snapshot), days=days, seed=seed)


__all__ = ["PriceSimulator", "SeededRandom", "starting_prices"]
