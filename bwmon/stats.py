"""Running session statistics, updated once per accepted sample."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from bwmon.sampler import Sample


@dataclass
class Direction:
    """Peak/min/mean/variance for one direction (Welford's online method)."""
    peak: float = 0.0
    low: float = math.inf
    total: float = 0.0
    mean: float = 0.0
    m2: float = 0.0

    def add(self, value: float, count: int) -> None:
        self.peak = max(self.peak, value)
        self.low = min(self.low, value)
        self.total += value
        delta = value - self.mean
        self.mean += delta / count
        self.m2 += delta * (value - self.mean)

    def minimum(self) -> float:
        return 0.0 if math.isinf(self.low) else self.low

    def stddev(self, count: int) -> float:
        if count < 2:
            return 0.0
        return math.sqrt(self.m2 / (count - 1))


@dataclass
class Stats:
    started_at: float
    count: int = 0
    total_rx_bytes: int = 0
    total_tx_bytes: int = 0
    rx: Direction = field(default_factory=Direction)
    tx: Direction = field(default_factory=Direction)

    def update(self, sample: Sample) -> None:
        self.count += 1
        self.rx.add(sample.rx_rate, self.count)
        self.tx.add(sample.tx_rate, self.count)
        self.total_rx_bytes += sample.rx_bytes
        self.total_tx_bytes += sample.tx_bytes

    @property
    def peak_rx(self) -> float:
        return self.rx.peak

    @property
    def peak_tx(self) -> float:
        return self.tx.peak

    @property
    def sum_rx(self) -> float:
        return self.rx.total

    @property
    def sum_tx(self) -> float:
        return self.tx.total

    @property
    def avg_rx(self) -> float:
        return self.rx.total / self.count if self.count else 0.0

    @property
    def avg_tx(self) -> float:
        return self.tx.total / self.count if self.count else 0.0

    def runtime(self, now: float) -> float:
        return max(0.0, now - self.started_at)
