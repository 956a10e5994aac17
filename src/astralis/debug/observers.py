from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)

Observer = Callable[..., Any]


class Subscription:
    """Cancellation handle returned by :meth:`ObserverList.subscribe`.

    Can be used as a context manager so the observer is removed when the
    block exits:

        with facility.subscribe(handler):
            ...
    """

    def __init__(self, owner: "ObserverList", callback: Observer) -> None:
        self._owner: Optional[ObserverList] = owner
        self.callback = callback

    @property
    def active(self) -> bool:
        return self._owner is not None

    def cancel(self) -> None:
        """Remove the observer. Safe to call more than once."""
        if self._owner is None:
            return
        self._owner.unsubscribe(self.callback)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.cancel()


class ObserverList:
    """Ordered list of callbacks notified synchronously.

    Observers are called in registration order over a snapshot of the list, so
    subscribing or unsubscribing from inside a callback only affects later
    notifications. A callback that raises is reported through the module
    logger and the remaining observers are still notified.

    There is no locking; callers on a multi-threaded host must serialise
    access themselves.
    """

    def __init__(self, name: str = "observers") -> None:
        self.name = name
        self._subscriptions: List[Subscription] = []

    def _find(self, callback: object) -> Optional[Subscription]:
        for sub in self._subscriptions:
            if sub.callback == callback:
                return sub
        return None

    def subscribe(self, callback: Observer) -> Subscription:
        """Register ``callback`` and return its handle.

        Subscribing a callback that is already registered returns the existing
        handle, so every holder of it refers to the same registration.
        """
        existing = self._find(callback)
        if existing is not None:
            return existing
        sub = Subscription(self, callback)
        self._subscriptions.append(sub)
        logger.debug("Subscribed %s to '%s'", callback, self.name)
        return sub

    def unsubscribe(self, callback: Observer) -> None:
        sub = self._find(callback)
        if sub is None:
            return
        self._subscriptions.remove(sub)
        sub._owner = None
        logger.debug("Unsubscribed %s from '%s'", callback, self.name)

    def clear(self) -> None:
        for sub in self._subscriptions:
            sub._owner = None
        self._subscriptions.clear()

    def notify(self, *args: Any) -> int:
        """Call every observer with ``args``.

        Returns:
            Number of observers that completed without raising.
        """
        delivered = 0
        for callback in [sub.callback for sub in self._subscriptions]:
            try:
                callback(*args)
                delivered += 1
            except Exception as exc:
                logger.exception("Observer %s on '%s' failed: %s", callback, self.name, exc)
        return delivered

    def __contains__(self, callback: object) -> bool:
        return self._find(callback) is not None

    def __len__(self) -> int:
        return len(self._subscriptions)
