"""Unit auto-scaling for rates, byte totals and chart axis labels."""

from __future__ import annotations

RATE_UNITS = [("B/s", 1), ("KB/s", 1024), ("MB/s", 1024**2), ("GB/s", 1024**3)]
SIZE_UNITS = [("B", 1), ("KB", 1024), ("MB", 1024**2), ("GB", 1024**3), ("TB", 1024**4)]

AXIS_DIGITS = 3


def pick_unit(max_val: float, units: list[tuple[str, int]] | None = None) -> tuple[str, int]:
    """Choose the largest unit in which max_val is still >= 1."""
    if units is None:
        units = RATE_UNITS
    for name, divisor in reversed(units):
        if abs(max_val) >= divisor:
            return name, divisor
    return units[0]


def format_rate(bps: float, units: list[tuple[str, int]] | None = None) -> str:
    """Format a bytes/sec value into a human-readable string."""
    name, divisor = pick_unit(bps, units)
    if divisor == 1:
        return f"{bps:.0f} {name}"
    return f"{bps / divisor:.2f} {name}"


def format_size(nbytes: float) -> str:
    """Format a byte count (no /s) with two decimals, e.g. '1.50 MB'."""
    name, divisor = pick_unit(nbytes, SIZE_UNITS)
    return f"{nbytes / divisor:.2f} {name}"


def significant(value: float, digits: int = AXIS_DIGITS) -> str:
    """Render value with `digits` significant digits, never in exponent form.

    Integer parts wider than `digits` are kept whole (1000 stays "1000").
    """
    decimals = max(0, digits - len(str(int(abs(value)))))
    # rounding can carry into a new digit (9.999 -> 10.0)
    value = round(value, decimals)
    decimals = max(0, digits - len(str(int(abs(value)))))
    return f"{value:.{decimals}f}"


def format_axis(value: float, units: list[tuple[str, int]] | None = None,
                digits: int = AXIS_DIGITS) -> str:
    """Axis label: auto-scaled unit at a fixed number of significant digits.

    The unit is picked for the rounded value, so 1023.9996 shows as 1.00 KB/s.
    """
    _, divisor = pick_unit(value, units)
    shown = float(significant(value / divisor, digits)) * divisor
    name, divisor = pick_unit(shown, units)
    return f"{significant(value / divisor, digits)} {name}"
