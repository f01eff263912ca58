"""Interface resolution: turn a user pattern into exactly one interface name.

Priority:
  1. no pattern       → busiest interface (largest rx+tx)
  2. exact name       → that interface, even if a longer one also matches
  3. wildcard (*, ?)  → case-insensitive whole-name match
     otherwise        → case-insensitive substring match
  4. several matches  → shortest name, then enumeration order
"""

from __future__ import annotations

import fnmatch
import logging

from bwmon.counters import InterfaceSnapshot
from bwmon.errors import InterfaceNotFound, NoInterfacesAvailable

log = logging.getLogger(__name__)

WILDCARDS = ("*", "?")


def select_busiest(snapshots: list[InterfaceSnapshot]) -> str:
    """Interface with the greatest cumulative traffic; first one wins ties."""
    if not snapshots:
        raise NoInterfacesAvailable()
    return max(snapshots, key=lambda s: s.total_bytes).name


def has_wildcards(pattern: str) -> bool:
    return any(c in pattern for c in WILDCARDS)


def candidates(pattern: str, names: list[str]) -> list[str]:
    """All names matching pattern (wildcard or substring), in input order."""
    needle = pattern.lower()
    if has_wildcards(pattern):
        return [n for n in names if fnmatch.fnmatchcase(n.lower(), needle)]
    return [n for n in names if needle in n.lower()]


def resolve_interface(pattern: str | None, snapshots: list[InterfaceSnapshot]) -> str:
    if not pattern:
        name = select_busiest(snapshots)
        log.info("auto-selected busiest interface %s", name)
        return name

    names = [s.name for s in snapshots]
    if pattern in names:
        return pattern

    matches = candidates(pattern, names)
    if not matches:
        raise InterfaceNotFound(pattern, names)
    if len(matches) > 1:
        log.info("pattern %r is ambiguous (%s), picking shortest", pattern, ", ".join(matches))
    # min() keeps the first of equally short names
    return min(matches, key=len)
