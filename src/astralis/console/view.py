from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..debug.facility import Severity
from .hub import LogConsole

DEFAULT_MAX_MESSAGE_LENGTH = 500

_LEVEL_NAMES = {
    Severity.INFO: "INFO",
    Severity.WARNING: "WARN",
    Severity.ERROR: "ERROR",
}


@dataclass(frozen=True)
class ConsoleRow:
    """One display-ready row of the console list."""

    severity: Severity
    category: str
    color_hex: str
    text: str
    time: str
    stack: str


def truncate(message: str, limit: int = DEFAULT_MAX_MESSAGE_LENGTH) -> str:
    if len(message) <= limit:
        return message
    return message[: max(0, limit - 3)] + "..."


class ConsoleView:
    """Turns the console's visible entries into rows and toolbar labels.

    Drawing is up to the host UI; this class only prepares what it shows.
    """

    def __init__(self, console: LogConsole, max_message_length: int = DEFAULT_MAX_MESSAGE_LENGTH) -> None:
        self.console = console
        self.max_message_length = max_message_length

    def rows(self) -> List[ConsoleRow]:
        registry = self.console.facility.registry
        return [
            ConsoleRow(
                severity=entry.severity,
                category=entry.category,
                color_hex=registry.color_of(entry.category).to_hex(),
                text=truncate(entry.message, self.max_message_length),
                time=entry.timestamp.strftime("%H:%M:%S"),
                stack=entry.stack,
            )
            for entry in self.console.visible_entries()
        ]

    def toolbar_labels(self) -> List[str]:
        counts = self.console.counts
        return [
            f"Log ({counts.info})",
            f"Warn ({counts.warning})",
            f"Error ({counts.error})",
        ]

    def render_lines(self) -> List[str]:
        """Plain-text rendering for a headless terminal."""
        return [f"{row.time} {_LEVEL_NAMES[row.severity]:<5} [{row.category}] {row.text}" for row in self.rows()]
