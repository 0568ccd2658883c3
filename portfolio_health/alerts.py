"""Signal transition alerts between two refreshes of the same portfolio."""
from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from .models import Signal

logger = logging.getLogger(__name__)


def detect_change(previous: Optional[Signal], current: Signal) -> Optional[str]:
    if previous is None or previous.kind == current.kind:
        return None
    return f"Signal changed from {previous.kind.value} to {current.kind.value}"


def detect_changes(previous: Optional[Mapping[str, Signal]], current: Mapping[str, Signal]) -> List[str]:
    """Alert on every symbol whose signal kind moved since the last refresh.

    Symbols that are new in ``current`` have nothing to compare against and
    produce no alert. The caller replaces its stored map with ``current``.
    """
    previous = previous or {}
    alerts: List[str] = []
    for symbol, signal in current.items():
        message = detect_change(previous.get(symbol), signal)
        if message:
            alerts.append(f"{symbol}: {message}")
    if alerts:
        logger.info("%d signal change(s) detected", len(alerts))
    return alerts


__all__ = ["detect_change", "detect_changes"]
