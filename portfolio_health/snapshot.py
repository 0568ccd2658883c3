"""Holding validation and snapshot construction from parsed upload rows."""
from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Sequence

from .errors import EmptyPortfolio, InvalidHolding
from .models import Holding, PortfolioSnapshot


def _parse_number(symbol: str, field_name: str, raw: Any) -> float:
    if isinstance(raw, bool):
        raise InvalidHolding(symbol, f"{field_name} is not numeric: {raw!r}")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidHolding(symbol, f"{field_name} is not numeric: {raw!r}") from None
    if not math.isfinite(value):
        raise InvalidHolding(symbol, f"{field_name} is not finite: {raw!r}")
    if value < 0:
        raise InvalidHolding(symbol, f"{field_name} is negative: {value}")
    return value


def validate_holdings(holdings: Sequence[Holding]) -> None:
    """Raise ``InvalidHolding`` for the first holding that cannot be scored."""
    seen = set()
    for holding in holdings:
        symbol = holding.symbol
        if not isinstance(symbol, str) or not symbol.strip():
            raise InvalidHolding(str(symbol), "symbol is empty")
        if symbol in seen:
            raise InvalidHolding(symbol, "duplicate symbol")
        seen.add(symbol)
        _parse_number(symbol, "quantity", holding.quantity)
        _parse_number(symbol, "avg_price", holding.avg_price)


def build_snapshot(rows: Iterable[Mapping[str, Any]], allow_empty: bool = True) -> PortfolioSnapshot:
    """Turn decoded upload rows (``symbol``, ``quantity``, ``avg_price``) into a snapshot.

    Values may be strings as produced by a CSV reader. Row order is preserved.
    """
    holdings = []
    seen = set()
    for row in rows:
        raw_symbol = row.get("symbol")
        symbol = str(raw_symbol).strip() if raw_symbol is not None else ""
        if not symbol:
            raise InvalidHolding(symbol, "symbol is empty")
        if symbol in seen:
            raise InvalidHolding(symbol, "duplicate symbol")
        seen.add(symbol)
        quantity = _parse_number(symbol, "quantity", row.get("quantity"))
        avg_price = _parse_number(symbol, "avg_price", row.get("avg_price"))
        holdings.append(Holding(symbol, quantity, avg_price))

    if not holdings and not allow_empty:
        raise EmptyPortfolio("snapshot has no holdings")
    return tuple(holdings)


__all__ = ["build_snapshot", "validate_holdings"]
