"""Monitoring session and the deadline-based tick loop.

All mutable state for a run lives in one Session; tick() is the only
thing that mutates it.
"""

from __future__ import annotations

import logging
import signal
import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable

from bwmon import display
from bwmon.chart import Renderer
from bwmon.config import MonitorConfig
from bwmon.counters import InterfaceSnapshot, Provider, find
from bwmon.errors import SamplingTickError
from bwmon.history import HistoryBuffer
from bwmon.sampler import RateSampler, Sample
from bwmon.stats import Stats
from bwmon.terminal import Terminal

log = logging.getLogger(__name__)

QUIT_KEYS = {"q", "Q", "\x1b"}
KEY_POLL_S = 0.05


@dataclass
class Session:
    interface: str
    history: HistoryBuffer
    stats: Stats
    sampler: RateSampler = field(default_factory=RateSampler)
    last: Sample | None = None
    failed_ticks: int = 0


def start_session(interface: str, snapshots: list[InterfaceSnapshot],
                  capacity: int, now: float) -> Session:
    """New session; the interface's current counters become the rate baseline."""
    session = Session(interface=interface, history=HistoryBuffer(capacity), stats=Stats(started_at=now))
    snap = find(snapshots, interface)
    if snap is not None:
        session.sampler.observe(snap, now)
    return session


def tick(session: Session, provider: Provider, now: float) -> Sample | None:
    """Read counters once and fold the result into the session.

    Returns the new sample, or None when this read only set the baseline.
    """
    snap = find(provider(), session.interface)
    if snap is None:
        raise SamplingTickError(f"Interface '{session.interface}' disappeared")
    sample = session.sampler.observe(snap, now)
    if sample is None:
        return None
    session.history.push(sample)
    session.stats.update(sample)
    session.last = sample
    return sample


def safe_tick(session: Session, provider: Provider, now: float) -> Sample | None:
    try:
        return tick(session, provider, now)
    except SamplingTickError as e:
        session.failed_ticks += 1
        log.warning("sampling tick skipped: %s", e)
        return None


@contextmanager
def _screen_safe_logging():
    """Keep console log handlers off the screen while the dashboard owns it."""
    root = logging.getLogger()
    detached = [
        h for h in root.handlers
        if type(h) is logging.StreamHandler and h.stream in (sys.stderr, sys.stdout)
    ]
    for h in detached:
        root.removeHandler(h)
    null = logging.NullHandler()
    root.addHandler(null)
    try:
        yield
    finally:
        root.removeHandler(null)
        for h in detached:
            root.addHandler(h)


class Monitor:
    """Drives sample → aggregate → render once per interval.

    Lifecycle:
        1. run() picks the static or dashboard loop
        2. each loop ticks on a fixed deadline schedule
        3. a quit key or Ctrl+C ends the loop after the current tick
        4. the final report is printed to stdout
    """

    def __init__(self, config: MonitorConfig, session: Session, provider: Provider,
                 renderer: Renderer, terminal: Terminal | None = None,
                 clock: Callable[[], float] = time.monotonic, out=None):
        self.config = config
        self.session = session
        self.provider = provider
        self.renderer = renderer
        self.terminal = terminal or Terminal()
        self.clock = clock
        self.out = out or sys.stdout
        self._frame: list[str] = []

    # ---- rendering ----

    def _compose(self) -> list[str]:
        cols, _ = self.terminal.size()
        self._frame = display.build_screen(self.session, self.config, self.renderer,
                                           cols, self.clock())
        return self._frame

    def _draw(self) -> None:
        self.terminal.draw(self._compose())

    # ---- loops ----

    def _wait_for_quit(self, deadline: float) -> bool:
        """Poll keys until the deadline; True if the user asked to quit."""
        while True:
            remaining = deadline - self.clock()
            if remaining <= 0:
                return False
            key = self.terminal.poll_key(min(remaining, KEY_POLL_S))
            if key in QUIT_KEYS:
                return True

    def run_dashboard(self) -> None:
        interval = self.config.interval
        with self.terminal, _screen_safe_logging():
            def on_resize(signum, frame):
                self._draw()

            previous = None
            if hasattr(signal, "SIGWINCH"):
                previous = signal.signal(signal.SIGWINCH, on_resize)
            next_tick = self.clock()
            try:
                self._draw()
                while True:
                    next_tick += interval
                    if self._wait_for_quit(next_tick):
                        break
                    safe_tick(self.session, self.provider, self.clock())
                    self._draw()
            except KeyboardInterrupt:
                pass
            finally:
                if previous is not None:
                    signal.signal(signal.SIGWINCH, previous)

    def run_static(self) -> None:
        interval = self.config.interval
        print(f"Monitoring {self.session.interface} ...", file=self.out)
        next_tick = self.clock()
        try:
            while True:
                next_tick += interval
                time.sleep(max(0, next_tick - self.clock()))
                sample = safe_tick(self.session, self.provider, self.clock())
                if sample is not None:
                    print(display.static_line(self.config, self.session.stats, sample),
                          file=self.out, flush=True)
        except KeyboardInterrupt:
            pass

    def run(self) -> None:
        """Blocking main loop. 'q' or Ctrl+C to exit."""
        if self.config.static:
            self.run_static()
        else:
            self.run_dashboard()
        print("\nStopped.", file=self.out)
        for line in display.final_report(self.config, self.session.stats, self.clock()):
            print(line, file=self.out)
