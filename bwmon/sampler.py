"""Cumulative counters → instantaneous rates."""

from __future__ import annotations

from dataclasses import dataclass

from bwmon.counters import InterfaceSnapshot


@dataclass(frozen=True)
class Sample:
    """One rate measurement, bytes/sec. rx_bytes/tx_bytes are the deltas behind it."""
    rx_rate: float
    tx_rate: float
    timestamp: float
    rx_bytes: int = 0
    tx_bytes: int = 0


def counter_delta(previous: int, current: int) -> int:
    """Bytes moved between two counter reads.

    A counter that went backwards was reset (driver restart, wraparound);
    counting is assumed to have resumed from zero, so the delta is `current`.
    """
    if current < previous:
        return max(0, current)
    return current - previous


def compute_sample(previous: InterfaceSnapshot, current: InterfaceSnapshot,
                   elapsed: float, timestamp: float = 0.0) -> Sample:
    if elapsed <= 0:
        raise ValueError(f"elapsed must be positive, got {elapsed}")
    d_rx = counter_delta(previous.rx_bytes, current.rx_bytes)
    d_tx = counter_delta(previous.tx_bytes, current.tx_bytes)
    return Sample(
        rx_rate=max(0.0, d_rx / elapsed),
        tx_rate=max(0.0, d_tx / elapsed),
        timestamp=timestamp,
        rx_bytes=d_rx,
        tx_bytes=d_tx,
    )


class RateSampler:
    """Keeps the previous snapshot for one interface.

    The first observation only sets the baseline and yields no sample.
    """

    def __init__(self) -> None:
        self._prev: InterfaceSnapshot | None = None
        self._prev_time = 0.0

    @property
    def has_baseline(self) -> bool:
        return self._prev is not None

    def observe(self, snapshot: InterfaceSnapshot, now: float) -> Sample | None:
        if self._prev is None:
            self._prev, self._prev_time = snapshot, now
            return None
        dt = max(1e-6, now - self._prev_time)
        sample = compute_sample(self._prev, snapshot, dt, timestamp=now)
        self._prev, self._prev_time = snapshot, now
        return sample

    def reset(self) -> None:
        self._prev = None
