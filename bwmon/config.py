"""Validated run configuration, built once from the command line."""

from __future__ import annotations

from dataclasses import dataclass

from bwmon.chart import MIN_HEIGHT
from bwmon.history import DEFAULT_CAPACITY

MODE_BOTH = "both"
MODE_DOWNLOAD = "download"
MODE_UPLOAD = "upload"

DEFAULT_HEIGHT = 10
DEFAULT_INTERVAL = 1.0
MIN_INTERVAL = 0.1


@dataclass(frozen=True)
class MonitorConfig:
    interface: str = ""
    height: int = DEFAULT_HEIGHT
    width: int = 0                  # 0 = fit terminal
    interval: float = DEFAULT_INTERVAL
    history: int = DEFAULT_CAPACITY
    mode: str = MODE_BOTH
    summary: bool = False
    renderer: str = "ascii"
    source: str = "psutil"
    static: bool = False
    color: bool = True

    def __post_init__(self) -> None:
        if self.height < MIN_HEIGHT:
            raise ValueError(f"chart height must be >= {MIN_HEIGHT}, got {self.height}")
        if self.width < 0:
            raise ValueError(f"chart width must be >= 0, got {self.width}")
        if self.history < 1:
            raise ValueError(f"history must be >= 1, got {self.history}")
        if self.mode not in (MODE_BOTH, MODE_DOWNLOAD, MODE_UPLOAD):
            raise ValueError(f"unknown display mode: {self.mode}")
        # frozen: bypass __setattr__ for the clamp
        object.__setattr__(self, "interval", max(MIN_INTERVAL, self.interval))
