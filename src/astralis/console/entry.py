from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from ..debug.facility import Severity


@dataclass(frozen=True)
class LogEntry:
    """A single message received by the console.

    Attributes:
        category: Category name the message was emitted under.
        message: Message text, rendered when it was emitted.
        severity: Info, warning or error.
        stack: Captured call stack, innermost frame first, one frame per line.
        timestamp: Local time at which the console received the entry.
    """

    category: str
    message: str
    severity: Severity
    stack: str = ""
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def stack_frames(self) -> List[str]:
        return self.stack.splitlines()
