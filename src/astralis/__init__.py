"""
Astralis debug tooling package root.

Holds the categorized logging facility used by gameplay code and the live
log console that aggregates and filters what the facility emits. Rendering of
the console is left to whatever host embeds it; this package only produces the
filtered feed.
"""

__version__ = "0.1.0"

__all__ = [
    "console",
    "debug",
    "settings",
]
