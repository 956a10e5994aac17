from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

logger = logging.getLogger(__name__)


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


@dataclass(frozen=True)
class Color:
    """RGB color with channels normalized to the 0.0 - 1.0 range."""

    r: float
    g: float
    b: float

    def to_hex(self) -> str:
        """Render as an uppercase ``RRGGBB`` string (no leading ``#``)."""
        return "".join(f"{int(round(_clamp01(c) * 255)):02X}" for c in (self.r, self.g, self.b))

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse ``RRGGBB`` or ``#RRGGBB`` into a Color."""
        text = value.strip().lstrip("#")
        if len(text) != 6:
            raise ValueError(f"Expected a 6 digit hex color, got {value!r}")
        r, g, b = (int(text[i : i + 2], 16) / 255.0 for i in (0, 2, 4))
        return cls(r, g, b)


WHITE = Color(1.0, 1.0, 1.0)

# Seeded into every registry before any other access.
DEFAULT_CATEGORIES: Tuple[Tuple[str, Color], ...] = (
    ("Player", Color(0.3, 0.7, 1.0)),  # light blue
    ("Enemy", Color(1.0, 0.3, 0.3)),  # red
    ("UI", Color(0.9, 0.9, 0.3)),  # yellow
    ("Audio", Color(0.7, 0.3, 1.0)),  # purple
    ("Input", Color(0.3, 1.0, 0.5)),  # green
    ("GameManager", Color(1.0, 0.6, 0.2)),  # orange
    ("AI", Color(1.0, 0.4, 0.7)),  # pink
    ("Physics", Color(0.5, 0.8, 0.9)),  # cyan
    ("Animation", Color(0.8, 0.5, 0.3)),  # brown
    ("Save", Color(0.4, 0.9, 0.4)),  # light green
    ("General", Color(0.8, 0.8, 0.8)),  # light gray
)

DEFAULT_CATEGORY = "General"


class CategoryRegistry:
    """Maps category names to display colors.

    The first registration of a name wins; later calls with the same name are
    ignored so a category keeps one color for the lifetime of the registry.
    Unknown names resolve to :data:`WHITE`.
    """

    def __init__(self, seed_defaults: bool = True) -> None:
        self._colors: Dict[str, Color] = {}
        if seed_defaults:
            self.register_many(DEFAULT_CATEGORIES)

    def register(self, name: str, color: Color) -> None:
        if name in self._colors:
            logger.debug("Category '%s' already registered; keeping existing color", name)
            return
        self._colors[name] = color
        logger.debug("Registered category '%s' with color #%s", name, color.to_hex())

    def register_many(self, items: Iterable[Tuple[str, Color]]) -> None:
        for name, color in items:
            self.register(name, color)

    def color_of(self, name: str) -> Color:
        return self._colors.get(name, WHITE)

    def all_categories(self) -> List[str]:
        return sorted(self._colors)

    def markup(self, name: str) -> str:
        """Wrap ``[name]`` in the rich-text color tag used by the host console."""
        return f"<color=#{self.color_of(name).to_hex()}>[{name}]</color>"

    def __contains__(self, name: object) -> bool:
        return name in self._colors

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self._colors)
