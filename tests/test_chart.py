import pytest

from bwmon.ascii_chart import AsciiRenderer
from bwmon.chart import (
    GUTTER, LABEL_WIDTH, MIN_WIDTH, ChartFrame, fit_rows, get_renderer, plot_width, renderer_names,
    row_for, value_range,
)
from bwmon.plotext_chart import PlotextRenderer


def occupied(frame, col):
    return [r for r, row in enumerate(frame.rows) if row[col] != " "]


def test_extremes_map_to_top_and_bottom():
    min_v, max_v = value_range([0, 10])
    assert row_for(10, min_v, max_v, 5) == 0
    assert row_for(0, min_v, max_v, 5) == 4
    assert row_for(5, min_v, max_v, 5) == 2


def test_flat_series_has_nonzero_span():
    min_v, max_v = value_range([5, 5, 5])
    assert max_v > min_v


def test_flat_series_renders_on_one_row():
    frame = AsciiRenderer().render([5, 5, 5, 5], height=4, width=4)
    rows = {tuple(occupied(frame, c)) for c in range(4)}
    assert len(rows) == 1
    assert frame.rows[3] == "────"


def test_rising_segment_glyphs():
    frame = AsciiRenderer().render([0, 10], height=5, width=2)
    assert frame.rows[4][0] == "─"
    assert frame.rows[0][1] == "╭"
    assert frame.rows[4][1] == "╯"
    assert [frame.rows[r][1] for r in (1, 2, 3)] == ["│", "│", "│"]


def test_falling_segment_glyphs():
    frame = AsciiRenderer().render([10, 0], height=5, width=2)
    assert frame.rows[0][0] == "─"
    assert frame.rows[0][1] == "╮"
    assert frame.rows[4][1] == "╰"


def test_short_window_is_left_padded():
    frame = AsciiRenderer().render([1, 2], height=3, width=6)
    assert all(row[:4] == "    " for row in frame.rows)
    assert occupied(frame, 5)


def test_only_most_recent_width_values_plotted():
    frame = AsciiRenderer().render(list(range(20)), height=4, width=5)
    assert frame.min_v == 15
    assert frame.max_v == 19


def test_frame_dimensions_and_labels():
    frame = AsciiRenderer().render([0, 4, 2, 10], height=6, width=12)
    assert frame.height == 6
    assert all(len(row) == 12 for row in frame.rows)
    assert frame.labels[0].strip() == "10.0 B/s"
    assert frame.labels[-1].strip() == "0.00 B/s"
    assert all(len(label) == LABEL_WIDTH for label in frame.labels)
    assert all(" ┤" in line for line in frame.lines())


def test_empty_window_is_blank():
    frame = AsciiRenderer().render([], height=3, width=5)
    assert frame.rows == ["     "] * 3


def test_plot_width():
    assert plot_width(80) == 80 - GUTTER
    assert plot_width(80, 30) == 30
    assert plot_width(80, 500) == 80 - GUTTER
    assert plot_width(10) == MIN_WIDTH
    assert plot_width(80, 3) == MIN_WIDTH


def test_fit_rows_strips_color_and_pads():
    rows = fit_rows(["\x1b[31mab\x1b[0m", "abcdefgh"], height=3, width=4)
    assert rows == ["ab  ", "abcd", "    "]


def test_plotext_frame_has_requested_shape():
    frame = PlotextRenderer().render([1, 5, 3, 8], height=6, width=20)
    assert len(frame.rows) == 6
    assert all(len(row) == 20 for row in frame.rows)
    assert any(row.strip() for row in frame.rows)


def test_backends_share_scaling_and_labels():
    values = [3.0, 9.0, 1.0, 4.0]
    a = AsciiRenderer().render(values, height=5, width=10)
    b = PlotextRenderer().render(values, height=5, width=10)
    assert (a.min_v, a.max_v) == (b.min_v, b.max_v)
    assert a.labels == b.labels


def test_renderer_registry_and_aliases():
    assert get_renderer("ascii").name == "ascii"
    assert get_renderer("hand").name == "ascii"
    assert get_renderer("lib").name == "plotext"
    with pytest.raises(ValueError):
        get_renderer("svg")


def test_blank_frame():
    frame = ChartFrame.blank(2, 3)
    assert frame.rows == ["   ", "   "]
    assert frame.lines()[0].endswith(" ┤   ")


def test_explicit_width_kept_on_narrow_terminal():
    assert plot_width(20, 30) == 30
    assert plot_width(20, 4) == MIN_WIDTH
    assert plot_width(20) == MIN_WIDTH


def test_plotext_exposes_module_level_api():
    import plotext as plt

    for fn in ("clf", "theme", "plotsize", "plot", "frame", "xticks", "yticks",
               "ylim", "xlim", "grid", "build"):
        assert callable(getattr(plt, fn, None)), fn


def test_renderer_names_include_aliases():
    assert renderer_names() == ["ascii", "hand", "lib", "plotext"]
