import pytest

from bwmon.counters import InterfaceSnapshot


def snaps(*entries):
    """(name, rx, tx) tuples → snapshots, preserving order."""
    return [InterfaceSnapshot(name, rx, tx) for name, rx, tx in entries]


class FakeProvider:
    """Replays a scripted sequence of snapshot lists; exceptions are raised."""

    def __init__(self, *frames):
        self.frames = list(frames)
        self.calls = 0

    def __call__(self):
        frame = self.frames[min(self.calls, len(self.frames) - 1)]
        self.calls += 1
        if isinstance(frame, BaseException):
            raise frame
        return frame


class FakeClock:
    def __init__(self, start=100.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
