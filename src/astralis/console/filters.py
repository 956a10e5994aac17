from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from ..debug.facility import Severity
from .entry import LogEntry


@dataclass
class FilterState:
    """Current console filters.

    Attributes:
        severities: Severities whose rows are shown. All three by default.
        categories: Explicit per-category switches. A category with no entry
            here counts as enabled, so categories the console has never heard of
            stay visible.
        search_text: Case-insensitive substring a message must contain. Empty
            matches everything.
    """

    severities: Set[Severity] = field(default_factory=lambda: set(Severity))
    categories: Dict[str, bool] = field(default_factory=dict)
    search_text: str = ""

    def severity_enabled(self, severity: Severity) -> bool:
        return severity in self.severities

    def category_enabled(self, category: str) -> bool:
        return self.categories.get(category, True)

    def matches_search(self, message: str) -> bool:
        if not self.search_text:
            return True
        return self.search_text.lower() in message.lower()

    def matches(self, entry: LogEntry) -> bool:
        return (
            self.severity_enabled(entry.severity)
            and self.category_enabled(entry.category)
            and self.matches_search(entry.message)
        )


@dataclass(frozen=True)
class Counts:
    """Per-severity totals shown on the console toolbar."""

    info: int = 0
    warning: int = 0
    error: int = 0

    def __getitem__(self, severity: Severity) -> int:
        return getattr(self, severity.value)

    @property
    def total(self) -> int:
        return self.info + self.warning + self.error


def apply_filters(buffer: Iterable[LogEntry], state: FilterState) -> List[LogEntry]:
    """Return the entries of ``buffer`` that pass ``state``, in buffer order."""
    return [entry for entry in buffer if state.matches(entry)]


def count_entries(buffer: Iterable[LogEntry], state: FilterState) -> Counts:
    """Count entries per severity, honouring only the category switches.

    Search text and severity toggles do not change the totals.
    """
    totals = {severity: 0 for severity in Severity}
    for entry in buffer:
        if not state.category_enabled(entry.category):
            continue
        totals[entry.severity] += 1
    return Counts(
        info=totals[Severity.INFO],
        warning=totals[Severity.WARNING],
        error=totals[Severity.ERROR],
    )
