"""Categorized logging facility used by gameplay code."""

from .categories import DEFAULT_CATEGORIES, DEFAULT_CATEGORY, WHITE, CategoryRegistry, Color
from .facility import HOST_LOGGER_NAME, LogFacility, LoggingSink, Severity, capture_stack
from .observers import ObserverList, Subscription

__all__ = [
    "CategoryRegistry",
    "Color",
    "DEFAULT_CATEGORIES",
    "DEFAULT_CATEGORY",
    "HOST_LOGGER_NAME",
    "LogFacility",
    "LoggingSink",
    "ObserverList",
    "Severity",
    "Subscription",
    "WHITE",
    "capture_stack",
]
