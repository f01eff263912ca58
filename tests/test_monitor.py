import io

import pytest

import bwmon.monitor as monitor_mod
from bwmon import display
from bwmon.ascii_chart import AsciiRenderer
from bwmon.config import MODE_DOWNLOAD, MonitorConfig
from bwmon.errors import SamplingTickError
from bwmon.monitor import Monitor, safe_tick, start_session, tick

from conftest import FakeProvider, snaps


class FakeTerminal:
    """Records frames; poll_key advances the clock and sends 'q' at quit_at."""

    def __init__(self, clock, quit_at):
        self.clock = clock
        self.quit_at = quit_at
        self.frames = []
        self.entered = self.exited = False

    def __enter__(self):
        self.entered = True
        return self

    def __exit__(self, *exc):
        self.exited = True

    def size(self):
        return 80, 40

    def poll_key(self, timeout):
        self.clock.advance(timeout)
        return "q" if self.clock.now >= self.quit_at else None

    def draw(self, lines):
        self.frames.append(lines)


def test_start_session_sets_baseline(clock):
    session = start_session("eth0", snaps(("eth0", 100, 10)), capacity=5, now=clock())
    assert session.sampler.has_baseline
    assert len(session.history) == 0
    assert session.stats.started_at == clock()


def test_tick_updates_history_and_stats(clock):
    session = start_session("eth0", snaps(("eth0", 0, 0)), capacity=5, now=clock())
    provider = FakeProvider(snaps(("eth0", 2000, 500), ("lo", 9, 9)))
    clock.advance(2.0)
    sample = tick(session, provider, clock())
    assert sample.rx_rate == 1000.0
    assert sample.tx_rate == 250.0
    assert session.last is sample
    assert session.stats.count == 1
    assert session.stats.total_rx_bytes == 2000
    assert len(session.history) == 1


def test_first_tick_without_baseline_is_dropped(clock):
    session = start_session("eth0", [], capacity=5, now=clock())
    provider = FakeProvider(snaps(("eth0", 50, 50)))
    assert tick(session, provider, clock()) is None
    assert session.stats.count == 0


def test_vanished_interface_is_a_tick_error(clock):
    session = start_session("eth0", snaps(("eth0", 0, 0)), capacity=5, now=clock())
    with pytest.raises(SamplingTickError):
        tick(session, FakeProvider(snaps(("wlan0", 1, 1))), clock())


def test_safe_tick_skips_failures(clock):
    session = start_session("eth0", snaps(("eth0", 0, 0)), capacity=5, now=clock())
    provider = FakeProvider(SamplingTickError("boom"), snaps(("eth0", 100, 0)))
    clock.advance(1.0)
    assert safe_tick(session, provider, clock()) is None
    assert session.failed_ticks == 1
    assert session.stats.count == 0
    clock.advance(1.0)
    sample = safe_tick(session, provider, clock())
    # the failed tick did not move the baseline
    assert sample.rx_rate == 50.0


def test_history_eviction_keeps_totals(clock):
    session = start_session("eth0", snaps(("eth0", 0, 0)), capacity=2, now=clock())
    provider = FakeProvider(*[snaps(("eth0", 100 * i, 0)) for i in range(1, 5)])
    for _ in range(4):
        clock.advance(1.0)
        tick(session, provider, clock())
    assert len(session.history) == 2
    assert session.stats.count == 4
    assert session.stats.total_rx_bytes == 400


def test_build_screen_layout(clock):
    session = start_session("eth0", snaps(("eth0", 0, 0)), capacity=10, now=clock())
    provider = FakeProvider(snaps(("eth0", 1024, 0)), snaps(("eth0", 4096, 512)))
    for _ in range(2):
        clock.advance(1.0)
        tick(session, provider, clock())

    config = MonitorConfig(height=4, color=False, summary=True)
    lines = display.build_screen(session, config, AsciiRenderer(), 60, clock())
    text = "\n".join(lines)
    assert "Bandwidth Monitor (eth0)" in lines[0]
    assert "Download History" in text and "Upload History" in text
    assert "Peak DL:" in text and "Total RX:" in text
    assert "Download History  3.00 KB/s" in lines
    assert "Upload History  512 B/s" in lines

    only_dl = MonitorConfig(height=4, color=False, mode=MODE_DOWNLOAD)
    lines = display.build_screen(session, only_dl, AsciiRenderer(), 60, clock())
    assert "Upload History" not in "\n".join(lines)


def test_dashboard_loop_quits_on_key(clock):
    session = start_session("eth0", snaps(("eth0", 0, 0)), capacity=10, now=clock())
    provider = FakeProvider(snaps(("eth0", 1000, 0)), snaps(("eth0", 3000, 0)))
    term = FakeTerminal(clock, quit_at=clock() + 2.5)
    out = io.StringIO()
    config = MonitorConfig(interval=1.0, height=3, color=False)

    Monitor(config, session, provider, AsciiRenderer(), terminal=term, clock=clock, out=out).run()

    assert term.entered and term.exited
    assert provider.calls == 2
    assert session.stats.count == 2
    assert len(term.frames) == 3
    assert "Final Statistics:" in out.getvalue()
    assert "Total Samples: 2" in out.getvalue()


def test_static_loop_prints_one_line_per_sample(clock, monkeypatch):
    monkeypatch.setattr(monitor_mod.time, "sleep", clock.advance)
    session = start_session("eth0", snaps(("eth0", 0, 0)), capacity=10, now=clock())
    provider = FakeProvider(snaps(("eth0", 500, 0)), KeyboardInterrupt())
    out = io.StringIO()
    config = MonitorConfig(interval=1.0, static=True)

    Monitor(config, session, provider, AsciiRenderer(), clock=clock, out=out).run()

    lines = out.getvalue().splitlines()
    assert lines[0] == "Monitoring eth0 ..."
    assert lines[1] == "sample=1 ↓ 500 B/s ↑ 0 B/s"
