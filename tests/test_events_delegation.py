from __future__ import annotations

from emitter_core.events import EventEmitter, TargetKind, current_emitter


class _Recorder:
    """Obiekt z metodą emit, niebędący EventEmitterem."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def emit(self, event_name, *args, **kwargs) -> bool:
        self.calls.append((event_name, args, kwargs))
        return True


def test_delegate_with_alias_renames_event() -> None:
    source, target = EventEmitter(), EventEmitter()
    received: list[tuple] = []

    target.on("dst", lambda *args: received.append(("dst", args)))
    target.on("src", lambda *args: received.append(("src", args)))
    source.delegate(target, "src", "dst")

    assert source.emit("src", 1) is True
    assert received == [("dst", (1,))]


def test_delegate_without_alias_forwards_same_name() -> None:
    source, target = EventEmitter(), EventEmitter()
    received: list[object] = []

    target.on("src", received.append)
    source.delegate(target, "src")
    source.delegate(target, "other", "other")

    source.emit("src", "payload")

    assert received == ["payload"]
    assert source.listeners("src")[0].target is target
    assert source.listeners("other")[0].event_name == "other"


def test_delegated_listeners_run_in_target_dispatch() -> None:
    source, target = EventEmitter(), EventEmitter()
    active: list[object] = []

    target.on("dst", lambda: active.append(current_emitter()))
    source.on("src", lambda: active.append(current_emitter()))
    source.delegate(target, "src", "dst")

    source.emit("src")

    assert active == [source, target]


def test_delegation_chain_forwards_through_aliases() -> None:
    first, second, third = EventEmitter(), EventEmitter(), EventEmitter()
    received: list[tuple] = []

    third.on("c", lambda *args, **kwargs: received.append((args, kwargs)))
    first.delegate(second, "a", "b")
    second.delegate(third, "b", "c")

    first.emit("a", 1, flag=True)

    assert received == [((1,), {"flag": True})]


def test_stop_in_delegate_does_not_stop_source() -> None:
    source, target = EventEmitter(), EventEmitter()
    calls: list[str] = []

    target.on("dst", lambda: target.stop_emit())
    target.on("dst", lambda: calls.append("target-second"))
    source.delegate(target, "src", "dst")
    source.on("src", lambda: calls.append("source-second"))

    source.emit("src")

    assert calls == ["source-second"]


def test_delegate_accepts_callable() -> None:
    source = EventEmitter()
    received: list[int] = []

    source.delegate(received.append, "src", "ignored-for-callables")
    source.emit("src", 3)

    assert received == [3]


def test_duck_typed_emitter_is_accepted() -> None:
    source = EventEmitter()
    recorder = _Recorder()

    source.on("x", recorder)
    source.emit("x", 1, key="v")

    assert source.listeners("x")[0].kind is TargetKind.EMITTER
    assert recorder.calls == [("x", (1,), {"key": "v"})]


def test_once_delegate_forwards_single_emission() -> None:
    source = EventEmitter()
    recorder = _Recorder()

    source.once("x", recorder)
    source.emit("x")
    source.emit("x")

    assert recorder.calls == [("x", (), {})]


def test_off_removes_delegate_binding() -> None:
    source, target = EventEmitter(), EventEmitter()

    source.delegate(target, "src", "dst")
    source.off("src", target)

    assert source.emit("src") is False
