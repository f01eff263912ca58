"""Chart contract shared by every renderer backend.

A renderer turns a window of values into a ChartFrame: `height` rows of
exactly `width` characters, plus one axis label per row. Scaling, label
formatting and width derivation live here so backends only place glyphs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol, Sequence

import bwmon
from bwmon.units import format_axis

EPSILON = 1e-6
LABEL_WIDTH = 12
AXIS = " ┤"
GUTTER = LABEL_WIDTH + len(AXIS)
MIN_WIDTH = 10
MIN_HEIGHT = 2

_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


@dataclass
class ChartFrame:
    rows: list[str]
    labels: list[str]
    min_v: float = 0.0
    max_v: float = 0.0

    @classmethod
    def blank(cls, height: int, width: int) -> "ChartFrame":
        return cls(rows=[" " * width] * height, labels=[" " * LABEL_WIDTH] * height)

    @property
    def height(self) -> int:
        return len(self.rows)

    def lines(self) -> list[str]:
        return [label + AXIS + row for label, row in zip(self.labels, self.rows)]


class Renderer(Protocol):
    name: str

    def render(self, values: Sequence[float], height: int, width: int) -> ChartFrame: ...


# ---- scaling ----

def value_range(values: Sequence[float]) -> tuple[float, float]:
    """(min, max) of the window; a flat window gets an epsilon span above it."""
    min_v, max_v = min(values), max(values)
    if max_v - min_v < EPSILON:
        max_v = min_v + EPSILON
    return min_v, max_v


def row_for(value: float, min_v: float, max_v: float, height: int) -> int:
    """Row 0 is max_v (top), row height-1 is min_v (bottom)."""
    r = round((max_v - value) / (max_v - min_v) * (height - 1))
    return min(height - 1, max(0, r))


def axis_labels(min_v: float, max_v: float, height: int) -> list[str]:
    step = (max_v - min_v) / (height - 1)
    return [format_axis(max_v - r * step).rjust(LABEL_WIDTH) for r in range(height)]


def plot_window(values: Sequence[float], width: int) -> list[float]:
    """Only the most recent `width` values are plotted."""
    return list(values)[-width:] if width > 0 else []


def plot_width(term_cols: int, requested: int = 0) -> int:
    """Columns available for plotting. requested=0 derives from the terminal."""
    available = term_cols - GUTTER
    if requested <= 0:
        return max(MIN_WIDTH, available)
    if available <= MIN_WIDTH:
        # too narrow to clamp against; keep the explicit width
        return max(MIN_WIDTH, requested)
    return max(MIN_WIDTH, min(requested, available))


def fit_rows(lines: list[str], height: int, width: int) -> list[str]:
    """Strip colors and pad/truncate to an exact height x width block."""
    rows = [_ANSI_RE.sub("", line)[:width].ljust(width) for line in lines[:height]]
    rows.extend([" " * width] * (height - len(rows)))
    return rows


# ---- backend selection ----

def _load_backends() -> None:
    # Importing the backends registers them.
    import bwmon.ascii_chart  # noqa: F401
    import bwmon.plotext_chart  # noqa: F401


def renderer_names() -> list[str]:
    """Registered backend names plus their aliases."""
    _load_backends()
    return sorted(set(bwmon.RENDERERS) | set(bwmon.ALIASES))


def get_renderer(name: str) -> Renderer:
    _load_backends()
    canonical = bwmon.resolve(name)
    if canonical not in bwmon.RENDERERS:
        raise ValueError(f"Unknown renderer: {name}")
    return bwmon.RENDERERS[canonical]()
