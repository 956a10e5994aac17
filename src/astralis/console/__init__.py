"""Live log console: buffers facility output and filters it for display."""

from .entry import LogEntry
from .filters import Counts, FilterState, apply_filters, count_entries
from .hub import CONSOLE_CATEGORIES, ConsoleEvent, LogConsole, category_drift
from .view import ConsoleRow, ConsoleView, truncate

__all__ = [
    "CONSOLE_CATEGORIES",
    "ConsoleEvent",
    "ConsoleRow",
    "ConsoleView",
    "Counts",
    "FilterState",
    "LogConsole",
    "LogEntry",
    "apply_filters",
    "category_drift",
    "count_entries",
    "truncate",
]
