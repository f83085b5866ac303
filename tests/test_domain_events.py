from core.events.domain_events import DomainEvents, domain_events
from core.events.signal import Signal


def test_domain_event_signal_connect_emit_disconnect():
    seen: list[str] = []

    def _handler(project_id: str) -> None:
        seen.append(project_id)

    domain_events.project_changed.connect(_handler)
    domain_events.project_changed.emit("p-1")
    domain_events.project_changed.disconnect(_handler)
    domain_events.project_changed.emit("p-2")

    assert seen == ["p-1"]


def test_connecting_twice_delivers_once():
    signal: Signal[str] = Signal("tasks_changed")
    seen: list[str] = []

    signal.connect(seen.append)
    signal.connect(seen.append)
    signal.emit("p-1")

    assert seen == ["p-1"]
    assert signal.subscriber_count() == 1


def test_signal_emit_prunes_dead_weak_callbacks():
    signal: Signal[str] = Signal()
    seen: list[str] = []

    class _DeadReferentCallback:
        def __init__(self) -> None:
            self.calls = 0

        def __call__(self, _payload: str) -> None:
            self.calls += 1
            raise ReferenceError("weakly-referenced object no longer exists")

    dead = _DeadReferentCallback()

    def _ok(payload: str) -> None:
        seen.append(payload)

    signal.connect(dead)
    signal.connect(_ok)

    signal.emit("p-1")
    signal.emit("p-2")

    assert dead.calls == 1
    assert seen == ["p-1", "p-2"]
    assert signal.subscriber_count() == 1


def test_signal_emit_keeps_runtime_errors_visible():
    signal: Signal[str] = Signal()

    def _boom(_payload: str) -> None:
        raise RuntimeError("boom")

    signal.connect(_boom)

    try:
        signal.emit("x")
        assert False, "Expected RuntimeError to propagate"
    except RuntimeError as exc:
        assert str(exc) == "boom"


def test_event_buses_are_independent():
    first = DomainEvents()
    second = DomainEvents()
    seen: list[str] = []

    first.sprints_changed.connect(seen.append)
    second.sprints_changed.emit("p-9")

    assert seen == []
