"""bwmon — live terminal bandwidth monitor.

Chart backends register themselves in RENDERERS when their module is
imported; import bwmon.ascii_chart / bwmon.plotext_chart to make them
available to resolve_renderer().
"""

from __future__ import annotations

__version__ = "0.3.0"

RENDERERS: dict[str, type] = {}

# Short aliases → canonical backend name
ALIASES: dict[str, str] = {
    "hand": "ascii",
    "lib": "plotext",
}


def register(cls: type) -> type:
    """Decorator that adds a chart renderer class to the global registry."""
    RENDERERS[cls.name] = cls
    return cls


def resolve(name: str) -> str:
    """Resolve a renderer name, supporting aliases."""
    return ALIASES.get(name, name)
