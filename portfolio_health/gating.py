"""Confidence gate: low-confidence signals are shown as HOLD."""
from __future__ import annotations

from dataclasses import replace
from typing import Dict, Mapping, Optional

from .config import GateConfig
from .errors import InvalidThreshold
from .models import Signal, SignalKind


class ConfidenceGate:
    def __init__(self, config: GateConfig = GateConfig()):
        self.cfg = config

    def check_threshold(self, threshold: Optional[float]) -> float:
        """Return the effective threshold; out-of-range values are rejected, not clamped."""
        if threshold is None:
            return self.cfg.default_threshold
        if not self.cfg.min_threshold <= threshold <= self.cfg.max_threshold:
            raise InvalidThreshold(threshold, self.cfg.min_threshold, self.cfg.max_threshold)
        return threshold

    def gate(self, signal: Signal, threshold: Optional[float] = None) -> Signal:
        threshold = self.check_threshold(threshold)
        if signal.confidence < threshold:
            return replace(signal, kind=SignalKind.HOLD, muted=True)
        return signal

    def gate_all(self, signals: Mapping[str, Signal], threshold: Optional[float] = None) -> Dict[str, Signal]:
        threshold = self.check_threshold(threshold)
        return {symbol: self.gate(signal, threshold) for symbol, signal in signals.items()}


__all__ = ["ConfidenceGate"]
