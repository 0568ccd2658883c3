"""Error taxonomy for the portfolio health engine."""
from __future__ import annotations


class PortfolioHealthError(Exception):
    """Base class for all engine errors."""


class EmptyPortfolio(PortfolioHealthError):
    pass


class InvalidHolding(PortfolioHealthError, ValueError):
    def __init__(self, symbol: str, reason: str):
        self.symbol = symbol
        self.reason = reason
        super().__init__(f"Invalid holding {symbol!r}: {reason}")


class DegeneratePrice(PortfolioHealthError, ValueError):
    def __init__(self, symbol: str, price: float):
        self.symbol = symbol
        self.price = price
        super().__init__(f"Cannot simulate {symbol!r} from starting price {price!r}")


class InvalidThreshold(PortfolioHealthError, ValueError):
    def __init__(self, threshold: float, low: float, high: float):
        self.threshold = threshold
        super().__init__(f"Confidence threshold {threshold!r} outside [{low}, {high}]")


__all__ = [
    "PortfolioHealthError",
    "EmptyPortfolio",
    "InvalidHolding",
    "DegeneratePrice",
    "InvalidThreshold",
]
