from __future__ import annotations

import logging
import os
import sys
import traceback
from enum import Enum
from typing import Any, Callable, List, Optional

from .categories import DEFAULT_CATEGORY, CategoryRegistry, Color
from .observers import ObserverList, Subscription

logger = logging.getLogger(__name__)

HOST_LOGGER_NAME = "astralis.host"

_THIS_FILE = os.path.normcase(os.path.abspath(__file__))
_MISSING = object()


class Severity(Enum):
    """Severity attached to every emitted message."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def level(self) -> int:
        """Matching stdlib ``logging`` level."""
        return _LEVELS[self]

    @classmethod
    def from_level(cls, levelno: int) -> "Severity":
        """Fold any stdlib logging level into one of the three severities."""
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARNING
        return cls.INFO


_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}

Sink = Callable[[Severity, str], None]
LogObserver = Callable[[str, str, str, Severity], Any]


class LoggingSink:
    """Baseline sink that forwards decorated lines to a stdlib logger."""

    def __init__(self, logger_name: str = HOST_LOGGER_NAME) -> None:
        self.logger = logging.getLogger(logger_name)

    def __call__(self, severity: Severity, text: str) -> None:
        self.logger.log(severity.level, text)


def _render(message: Any) -> str:
    try:
        return str(message)
    except Exception:
        return f"<unprintable {type(message).__name__} object>"


def _format_frames(frames: List[traceback.FrameSummary]) -> str:
    return "\n".join(f'File "{f.filename}", line {f.lineno}, in {f.name}' for f in frames)


def _current_frames() -> List[traceback.FrameSummary]:
    """Frames of the calling thread, innermost first, without reading source lines."""
    return list(traceback.StackSummary.extract(traceback.walk_stack(sys._getframe()), lookup_lines=False))


def capture_stack() -> str:
    """Return the current call stack, innermost frame first, one line per frame.

    Leading frames that belong to this module are dropped so the first line is
    the code that called into the facility. When there are fewer than two
    frames, or nothing would be left after trimming, the untrimmed stack is
    returned instead.
    """
    frames = _current_frames()
    if len(frames) < 2:
        return _format_frames(frames)
    index = 0
    while index < len(frames) and os.path.normcase(os.path.abspath(frames[index].filename)) == _THIS_FILE:
        index += 1
    if index >= len(frames):
        return _format_frames(frames)
    return _format_frames(frames[index:])


class LogFacility:
    """Categorized logging service.

    Build one at startup and hand it to every system that logs. Each call to
    :meth:`log`, :meth:`warn` or :meth:`error` writes a color-decorated line to
    the baseline sink and then notifies subscribed observers with
    ``(category, message, stack, severity)``. Emission never raises: a failing
    sink or observer is reported on this module's logger and otherwise ignored.

    Usage::

        facility = LogFacility()
        facility.warn("Physics", "collision")
        facility.log("no category given")  # goes to "General"
    """

    def __init__(
        self,
        registry: Optional[CategoryRegistry] = None,
        sink: Optional[Sink] = None,
        capture_stack: bool = True,
    ) -> None:
        self.registry = registry if registry is not None else CategoryRegistry()
        self.sink: Sink = sink if sink is not None else LoggingSink()
        self.capture_stack = capture_stack
        self._observers = ObserverList("log-facility")

    # ------------------------ Categories ------------------------
    def register_category(self, name: str, color: Color) -> None:
        self.registry.register(name, color)

    def color_of(self, name: str) -> Color:
        return self.registry.color_of(name)

    # ------------------------ Observers ------------------------
    def subscribe(self, callback: LogObserver) -> Subscription:
        return self._observers.subscribe(callback)

    def unsubscribe(self, callback: LogObserver) -> None:
        self._observers.unsubscribe(callback)

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    # ------------------------ Emission ------------------------
    def emit(self, category: str, message: Any, severity: Severity) -> None:
        """Single entry point behind every public logging call."""
        text = _render(message)
        try:
            self.sink(severity, f"{self.registry.markup(category)} {text}")
        except Exception:
            logger.debug("Baseline sink failed for category '%s'", category, exc_info=True)
        stack = capture_stack() if self.capture_stack else ""
        self._observers.notify(category, text, stack, severity)

    def log(self, category: Any, message: Any = _MISSING) -> None:
        if message is _MISSING:
            category, message = DEFAULT_CATEGORY, category
        self.emit(category, message, Severity.INFO)

    def warn(self, category: Any, message: Any = _MISSING) -> None:
        if message is _MISSING:
            category, message = DEFAULT_CATEGORY, category
        self.emit(category, message, Severity.WARNING)

    def error(self, category: Any, message: Any = _MISSING) -> None:
        if message is _MISSING:
            category, message = DEFAULT_CATEGORY, category
        self.emit(category, message, Severity.ERROR)

    # Aliases for callers using the LogWarning / LogError naming
    log_warning = warn
    log_error = error
