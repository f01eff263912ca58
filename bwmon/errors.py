"""Error taxonomy for the monitor.

Everything except SamplingTickError is fatal: the CLI reports it on stderr
and exits non-zero.
"""

from __future__ import annotations


class BwmonError(Exception):
    """Base class for all monitor errors."""


class NoInterfacesAvailable(BwmonError):
    def __init__(self) -> None:
        super().__init__("No network interfaces found")


class InterfaceNotFound(BwmonError):
    """A pattern matched nothing; carries the names the user can pick from."""

    def __init__(self, pattern: str, available: list[str]):
        self.pattern = pattern
        self.available = list(available)
        names = ", ".join(self.available) if self.available else "(none)"
        super().__init__(f"No interface matches '{pattern}'. Available: {names}")


class TerminalInitError(BwmonError):
    pass


class SamplingTickError(BwmonError):
    """A single counter read failed. The tick is skipped, not the session."""
