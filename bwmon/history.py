"""Bounded, chronological history of rate samples."""

from __future__ import annotations

from collections import deque
from typing import Iterator

from bwmon.sampler import Sample

DEFAULT_CAPACITY = 120


class HistoryBuffer:
    """FIFO of Samples; pushing past capacity drops the oldest."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._samples: deque[Sample] = deque(maxlen=capacity)

    def push(self, sample: Sample) -> None:
        self._samples.append(sample)

    def window(self, n: int) -> list[Sample]:
        """The most recent min(n, len) samples, oldest first."""
        if n <= 0:
            return []
        items = list(self._samples)
        return items[-n:]

    def rx_rates(self, n: int) -> list[float]:
        return [s.rx_rate for s in self.window(n)]

    def tx_rates(self, n: int) -> list[float]:
        return [s.tx_rate for s in self.window(n)]

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)
