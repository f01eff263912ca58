"""Hand-rolled line chart using box-drawing glyphs.

Each column holds one sample. A change between neighbouring samples is
drawn in the newer sample's column: a corner at the old row, a corner at
the new row and a vertical run in between.
"""

from __future__ import annotations

from typing import Sequence

from bwmon import register
from bwmon.chart import ChartFrame, axis_labels, plot_window, row_for, value_range

FLAT = "─"
VERTICAL = "│"
RISE_FROM, RISE_TO = "╯", "╭"
FALL_FROM, FALL_TO = "╮", "╰"


@register
class AsciiRenderer:
    name = "ascii"

    def render(self, values: Sequence[float], height: int, width: int) -> ChartFrame:
        data = plot_window(values, width)
        if not data:
            return ChartFrame.blank(height, width)

        min_v, max_v = value_range(data)
        grid = [[" "] * width for _ in range(height)]
        offset = width - len(data)   # newest sample sits in the last column
        rows = [row_for(v, min_v, max_v, height) for v in data]

        prev = rows[0]
        for i, r in enumerate(rows):
            x = offset + i
            if r == prev:
                grid[r][x] = FLAT
            elif r < prev:
                grid[prev][x] = RISE_FROM
                grid[r][x] = RISE_TO
                for y in range(r + 1, prev):
                    grid[y][x] = VERTICAL
            else:
                grid[prev][x] = FALL_FROM
                grid[r][x] = FALL_TO
                for y in range(prev + 1, r):
                    grid[y][x] = VERTICAL
            prev = r

        return ChartFrame(
            rows=["".join(line) for line in grid],
            labels=axis_labels(min_v, max_v, height),
            min_v=min_v,
            max_v=max_v,
        )
