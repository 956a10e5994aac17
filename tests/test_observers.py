import logging

from astralis.debug.observers import ObserverList


def test_notify_in_registration_order():
    calls = []
    observers = ObserverList()
    observers.subscribe(lambda *a: calls.append(("first", a)))
    observers.subscribe(lambda *a: calls.append(("second", a)))

    delivered = observers.notify(1, "two")

    assert delivered == 2
    assert calls == [("first", (1, "two")), ("second", (1, "two"))]


def test_duplicate_subscription_shares_one_handle():
    calls = []

    def handler(*args):
        calls.append(args)

    observers = ObserverList()
    first = observers.subscribe(handler)
    second = observers.subscribe(handler)
    assert first is second
    assert len(observers) == 1
    observers.notify("x")
    assert calls == [("x",)]


def test_failing_observer_does_not_stop_the_rest(caplog):
    calls = []

    def broken(*_):
        raise RuntimeError("boom")

    observers = ObserverList("test")
    observers.subscribe(broken)
    observers.subscribe(lambda *a: calls.append(a))

    with caplog.at_level(logging.ERROR, logger="astralis.debug.observers"):
        delivered = observers.notify("payload")

    assert delivered == 1
    assert calls == [("payload",)]
    assert any("boom" in r.getMessage() for r in caplog.records)


def test_subscription_cancel_is_idempotent():
    observers = ObserverList()
    sub = observers.subscribe(lambda *a: None)
    assert sub.active
    sub.cancel()
    sub.cancel()
    assert not sub.active
    assert len(observers) == 0


def test_subscription_context_manager_releases():
    observers = ObserverList()
    with observers.subscribe(lambda *a: None) as sub:
        assert len(observers) == 1
        assert sub.active
    assert len(observers) == 0


def test_unsubscribe_during_notify_applies_next_time():
    calls = []
    observers = ObserverList()

    def late(*_):
        calls.append("late")

    def remover(*_):
        calls.append("remover")
        observers.unsubscribe(late)

    observers.subscribe(remover)
    observers.subscribe(late)

    observers.notify()
    observers.notify()

    assert calls == ["remover", "late", "remover"]


def test_unsubscribe_unknown_is_noop():
    observers = ObserverList()
    observers.unsubscribe(print)
    assert len(observers) == 0


def test_resubscribing_after_cancel_gives_fresh_handle():
    observers = ObserverList()

    def handler(*_):
        pass

    first = observers.subscribe(handler)
    first.cancel()
    second = observers.subscribe(handler)
    assert second is not first
    assert second.active and not first.active
    first.cancel()
    assert second.active


def test_clear_deactivates_all_handles():
    observers = ObserverList()
    subs = [observers.subscribe(lambda *a: None), observers.subscribe(lambda *a: None)]
    observers.clear()
    assert len(observers) == 0
    assert not any(sub.active for sub in subs)
    assert observers.notify("x") == 0
