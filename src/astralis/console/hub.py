from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, Union

from ..debug.facility import LogFacility, Severity
from ..debug.observers import ObserverList, Subscription
from ..exceptions import ConsoleStateError
from .entry import LogEntry
from .filters import Counts, FilterState, apply_filters, count_entries

logger = logging.getLogger(__name__)

# Categories offered by the console's filter menu. Must be kept in step with
# the facility's registered categories; see category_drift().
CONSOLE_CATEGORIES: Tuple[str, ...] = (
    "AI",
    "Animation",
    "Audio",
    "Enemy",
    "GameManager",
    "General",
    "Input",
    "Physics",
    "Player",
    "Save",
    "UI",
)


class ConsoleEvent(Enum):
    """Change notifications sent to the presentation layer."""

    NEW_ENTRY = auto()
    FILTER_CHANGED = auto()
    CLEARED = auto()


ConsoleListener = Callable[[ConsoleEvent, "LogConsole"], Any]


def category_drift(
    registered: Iterable[str], console_categories: Iterable[str]
) -> Tuple[List[str], List[str]]:
    """Compare the facility's categories with the console's filter list.

    Returns:
        ``(unfilterable, never_logged)``: categories that can be logged but not
        filtered, and categories offered as filters that nothing registers.
    """
    registered_set = set(registered)
    console_set = set(console_categories)
    return sorted(registered_set - console_set), sorted(console_set - registered_set)


def _coerce_severity(value: Union[Severity, str]) -> Severity:
    if isinstance(value, Severity):
        return value
    try:
        return Severity(str(value).lower())
    except ValueError as exc:
        raise ConsoleStateError(f"Unknown severity: {value!r}") from exc


class LogConsole:
    """Buffers everything a :class:`LogFacility` emits and filters it for display.

    - The buffer only grows; :meth:`clear` is the only way to drop entries.
    - Counts are recomputed on every append and every severity/category change.
    - Listeners receive a :class:`ConsoleEvent` whenever the visible data may
      have changed so the UI can re-render (and scroll to the newest row on
      ``NEW_ENTRY``).

    The console subscribes on :meth:`attach` and unsubscribes on :meth:`detach`;
    using it as a context manager pairs the two.
    """

    def __init__(
        self,
        facility: LogFacility,
        categories: Sequence[str] = CONSOLE_CATEGORIES,
        error_pause: bool = False,
        on_error_pause: Optional[Callable[[LogEntry], Any]] = None,
    ) -> None:
        self.facility = facility
        self._categories: Tuple[str, ...] = tuple(categories)
        self.error_pause = error_pause
        self.on_error_pause = on_error_pause
        self._entries: List[LogEntry] = []
        self._filters = FilterState()
        self._counts = Counts()
        self._subscription: Optional[Subscription] = None
        self._listeners = ObserverList("log-console")

    # ------------------------ Lifecycle ------------------------
    @property
    def attached(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def attach(self) -> "LogConsole":
        """Subscribe to the facility. Calling it again while attached is a no-op."""
        if self.attached:
            logger.debug("LogConsole.attach() called while already attached")
            return self
        self._subscription = self.facility.subscribe(self.on_entry)
        for category in self._categories:
            self._filters.categories.setdefault(category, True)
        unfilterable, never_logged = category_drift(self.facility.registry.all_categories(), self._categories)
        if unfilterable:
            logger.warning("Categories registered but missing from the console filter list: %s", unfilterable)
        if never_logged:
            logger.warning("Console filter categories with no registered color: %s", never_logged)
        logger.info("LogConsole attached (categories=%d)", len(self._categories))
        return self

    def detach(self) -> None:
        if self._subscription is None:
            return
        self._subscription.cancel()
        self._subscription = None
        logger.info("LogConsole detached (entries=%d)", len(self._entries))

    def __enter__(self) -> "LogConsole":
        return self.attach()

    def __exit__(self, *exc_info: Any) -> None:
        self.detach()

    # ------------------------ Listeners ------------------------
    def add_listener(self, callback: ConsoleListener) -> Subscription:
        return self._listeners.subscribe(callback)

    def _signal(self, event: ConsoleEvent) -> None:
        self._listeners.notify(event, self)

    # ------------------------ Data ------------------------
    def on_entry(self, category: str, message: str, stack: str, severity: Severity) -> None:
        entry = LogEntry(category=category, message=message, severity=severity, stack=stack)
        self._entries.append(entry)
        self._recount()
        self._signal(ConsoleEvent.NEW_ENTRY)
        if self.error_pause and severity is Severity.ERROR and self.on_error_pause is not None:
            logger.info("Error pause triggered by [%s] %s", category, message)
            self.on_error_pause(entry)

    def clear(self) -> None:
        """Drop every buffered entry. Filters are left as they are."""
        logger.debug("Clearing console entries (count=%d)", len(self._entries))
        self._entries.clear()
        self._counts = Counts()
        self._signal(ConsoleEvent.CLEARED)

    @property
    def entries(self) -> Tuple[LogEntry, ...]:
        return tuple(self._entries)

    @property
    def counts(self) -> Counts:
        return self._counts

    @property
    def filter_state(self) -> FilterState:
        return self._filters

    @property
    def categories(self) -> Tuple[str, ...]:
        return self._categories

    def visible_entries(self) -> List[LogEntry]:
        return apply_filters(self._entries, self._filters)

    def _recount(self) -> None:
        self._counts = count_entries(self._entries, self._filters)

    # ------------------------ Filters ------------------------
    def set_severity_enabled(self, severity: Union[Severity, str], enabled: bool) -> None:
        sev = _coerce_severity(severity)
        if enabled:
            self._filters.severities.add(sev)
        else:
            self._filters.severities.discard(sev)
        logger.debug("Severity %s enabled=%s", sev.value, enabled)
        self._recount()
        self._signal(ConsoleEvent.FILTER_CHANGED)

    def toggle_severity(self, severity: Union[Severity, str]) -> None:
        sev = _coerce_severity(severity)
        self.set_severity_enabled(sev, not self._filters.severity_enabled(sev))

    def set_category_enabled(self, category: str, enabled: bool) -> None:
        self._filters.categories[category] = bool(enabled)
        logger.debug("Category '%s' enabled=%s", category, enabled)
        self._recount()
        self._signal(ConsoleEvent.FILTER_CHANGED)

    def toggle_category(self, category: str) -> None:
        self.set_category_enabled(category, not self._filters.category_enabled(category))

    def set_all_categories_enabled(self, enabled: bool) -> None:
        """Switch every known category on or off.

        Known means the console's category list, anything already switched, and
        any category present in the buffer. Categories first seen afterwards
        still default to enabled.
        """
        known = set(self._categories) | set(self._filters.categories) | {e.category for e in self._entries}
        for category in known:
            self._filters.categories[category] = bool(enabled)
        logger.debug("All categories enabled=%s (%d categories)", enabled, len(known))
        self._recount()
        self._signal(ConsoleEvent.FILTER_CHANGED)

    def set_search_text(self, text: Optional[str]) -> None:
        self._filters.search_text = text or ""
        self._signal(ConsoleEvent.FILTER_CHANGED)
