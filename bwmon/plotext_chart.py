"""Library-backed line chart — plotext braille canvas sized to the plot area."""

from __future__ import annotations

from typing import Sequence

import plotext as plt

from bwmon import register
from bwmon.chart import ChartFrame, axis_labels, fit_rows, plot_window, value_range


@register
class PlotextRenderer:
    name = "plotext"
    marker = "braille"

    def render(self, values: Sequence[float], height: int, width: int) -> ChartFrame:
        data = plot_window(values, width)
        if not data:
            return ChartFrame.blank(height, width)

        min_v, max_v = value_range(data)
        # Right-aligned x positions: a short window grows from the right edge.
        xs = list(range(width - len(data), width))

        plt.clf()
        plt.theme("clear")
        plt.plotsize(width, height)
        plt.plot(xs, data, marker=self.marker)
        plt.frame(False)
        plt.xticks([])
        plt.yticks([])
        plt.ylim(min_v, max_v)
        plt.xlim(0, max(1, width - 1))
        plt.grid(False, False)

        return ChartFrame(
            rows=fit_rows(plt.build().splitlines(), height, width),
            labels=axis_labels(min_v, max_v, height),
            min_v=min_v,
            max_v=max_v,
        )
