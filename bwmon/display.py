"""Screen composition: header, summary block, stacked charts, final report."""

from __future__ import annotations

from bwmon.chart import Renderer, plot_width
from bwmon.config import MODE_DOWNLOAD, MODE_UPLOAD, MonitorConfig
from bwmon.sampler import Sample
from bwmon.stats import Stats
from bwmon.units import format_rate, format_size

CYAN = 51
YELLOW = 226
GREEN = 46
GREY = 240

QUIT_HINT = "Press 'q' or Ctrl+C to quit"


def paint(text: str, color: int, enabled: bool = True, bold: bool = False) -> str:
    if not enabled:
        return text
    weight = "\033[1m" if bold else ""
    return f"{weight}\033[38;5;{color}m{text}\033[0m"


def shows_download(config: MonitorConfig) -> bool:
    return config.mode != MODE_UPLOAD


def shows_upload(config: MonitorConfig) -> bool:
    return config.mode != MODE_DOWNLOAD


def rate_line(config: MonitorConfig, sample: Sample | None) -> str:
    rx = sample.rx_rate if sample else 0.0
    tx = sample.tx_rate if sample else 0.0
    c = config.color
    parts = []
    if shows_download(config):
        parts.append(f"{paint('Download:', CYAN, c, bold=True)} {format_rate(rx):>12}")
    if shows_upload(config):
        parts.append(f"{paint('Upload:', YELLOW, c, bold=True)} {format_rate(tx):>12}")
    return "  │  ".join(parts) + "  " + paint(QUIT_HINT, GREY, c)


def summary_lines(config: MonitorConfig, stats: Stats, now: float) -> list[str]:
    c = config.color

    def pair(label_rx: str, rx: str, label_tx: str, tx: str) -> str:
        cols = []
        if shows_download(config):
            cols.append(f"{paint(label_rx, CYAN, c)} {rx:>12}")
        if shows_upload(config):
            cols.append(f"{paint(label_tx, YELLOW, c)} {tx:>12}")
        return "  │  ".join(cols)

    n = stats.count
    return [
        pair("Peak DL: ", format_rate(stats.peak_rx), "Peak UL: ", format_rate(stats.peak_tx)),
        pair("Avg DL:  ", format_rate(stats.avg_rx), "Avg UL:  ", format_rate(stats.avg_tx)),
        pair("Min DL:  ", format_rate(stats.rx.minimum()), "Min UL:  ", format_rate(stats.tx.minimum())),
        pair("StdDev DL:", format_rate(stats.rx.stddev(n)), "StdDev UL:", format_rate(stats.tx.stddev(n))),
        pair("Total RX:", format_size(stats.total_rx_bytes), "Total TX:", format_size(stats.total_tx_bytes)),
        f"{paint('Runtime:', GREEN, c)} {stats.runtime(now):.1f}s   "
        f"{paint('Samples:', GREEN, c)} {n}",
    ]


def chart_lines(title: str, color: int, values: list[float], renderer: Renderer,
                config: MonitorConfig, width: int) -> list[str]:
    frame = renderer.render(values, config.height, width)
    lines = [paint(title, color, config.color, bold=True)]
    lines.extend(paint(line, color, config.color) for line in frame.lines())
    return lines


def build_screen(session, config: MonitorConfig, renderer: Renderer,
                 term_cols: int, now: float) -> list[str]:
    """One full dashboard frame as a list of lines (no trailing newlines)."""
    width = plot_width(term_cols, config.width)
    history = session.history
    lines = [
        paint(f"═══ Bandwidth Monitor ({session.interface}) ═══", CYAN, config.color, bold=True),
        rate_line(config, session.last),
    ]
    if config.summary:
        lines.extend(summary_lines(config, session.stats, now))
    lines.append("")

    last = session.last
    if shows_download(config):
        title = f"Download History  {format_rate(last.rx_rate if last else 0.0)}"
        lines.extend(chart_lines(title, CYAN, history.rx_rates(width),
                                 renderer, config, width))
    if shows_download(config) and shows_upload(config):
        lines.append("")
    if shows_upload(config):
        title = f"Upload History  {format_rate(last.tx_rate if last else 0.0)}"
        lines.extend(chart_lines(title, YELLOW, history.tx_rates(width),
                                 renderer, config, width))
    return lines


def static_line(config: MonitorConfig, stats: Stats, sample: Sample) -> str:
    """Single-line report for --static mode."""
    parts = [f"sample={stats.count}"]
    if shows_download(config):
        parts.append(f"↓ {format_rate(sample.rx_rate)}")
    if shows_upload(config):
        parts.append(f"↑ {format_rate(sample.tx_rate)}")
    if config.summary and stats.count:
        avgs = []
        if shows_download(config):
            avgs.append(f"↓{format_rate(stats.avg_rx)}")
        if shows_upload(config):
            avgs.append(f"↑{format_rate(stats.avg_tx)}")
        parts.append(f"(avg: {' '.join(avgs)})")
    return " ".join(parts)


def final_report(config: MonitorConfig, stats: Stats, now: float) -> list[str]:
    n = stats.count
    lines = [
        "Final Statistics:",
        f"  Total Samples: {n}",
        f"  Runtime: {stats.runtime(now):.1f}s",
        f"  Total Data: Downloaded = {format_size(stats.total_rx_bytes)}, "
        f"Uploaded = {format_size(stats.total_tx_bytes)}",
    ]
    if n and shows_download(config):
        lines.append(
            f"  Download Rate: Min = {format_rate(stats.rx.minimum())}, "
            f"Avg = {format_rate(stats.avg_rx)}, Max = {format_rate(stats.peak_rx)}, "
            f"StdDev = {format_rate(stats.rx.stddev(n))}"
        )
    if n and shows_upload(config):
        lines.append(
            f"  Upload Rate:   Min = {format_rate(stats.tx.minimum())}, "
            f"Avg = {format_rate(stats.avg_tx)}, Max = {format_rate(stats.peak_tx)}, "
            f"StdDev = {format_rate(stats.tx.stddev(n))}"
        )
    return lines
