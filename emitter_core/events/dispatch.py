"""Stan sesji dyspozycji współdzielony między zagnieżdżonymi wywołaniami ``emit``."""
from __future__ import annotations

import contextlib
import contextvars
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator

if TYPE_CHECKING:  # pragma: no cover - tylko dla typowania
    from emitter_core.events.binding import Binding
    from emitter_core.events.emitter import EventEmitter


@dataclass(slots=True)
class DispatchFrame:
    """Rekord emitera, którego obsługujący są właśnie wykonywani.

    ``stopped_for`` wskazuje emiter, dla którego zażądano przerwania bieżącej
    dyspozycji. Nowa ramka dziedziczy tę wartość po ramce zewnętrznej.
    """

    emitter: "EventEmitter"
    stopped_for: "EventEmitter | None" = None
    binding: "Binding | None" = None
    receiver: Any = None

    def request_stop(self, emitter: "EventEmitter") -> bool:
        if self.emitter is not emitter:
            return False
        self.stopped_for = emitter
        return True

    def is_stopped(self) -> bool:
        return self.stopped_for is self.emitter


_CURRENT_FRAME: contextvars.ContextVar[DispatchFrame | None] = contextvars.ContextVar(
    "emitter_core_dispatch_frame", default=None
)


@contextlib.contextmanager
def dispatch_scope(emitter: "EventEmitter") -> Iterator[DispatchFrame]:
    """Ustawia ramkę dyspozycji dla ``emitter`` i przywraca poprzednią po wyjściu.

    Przywrócenie następuje również wtedy, gdy obsługujący zgłosi wyjątek.
    """

    outer = _CURRENT_FRAME.get()
    frame = DispatchFrame(
        emitter=emitter,
        stopped_for=outer.stopped_for if outer is not None else None,
    )
    token = _CURRENT_FRAME.set(frame)
    try:
        yield frame
    finally:
        _CURRENT_FRAME.reset(token)


def current_frame() -> DispatchFrame | None:
    return _CURRENT_FRAME.get()


def current_emitter() -> "EventEmitter | None":
    """Zwraca emiter, którego obsługujący są aktualnie wykonywani."""

    frame = _CURRENT_FRAME.get()
    return frame.emitter if frame is not None else None


def current_binding() -> "Binding | None":
    """Zwraca powiązanie, które jest aktualnie wywoływane."""

    frame = _CURRENT_FRAME.get()
    return frame.binding if frame is not None else None


def current_receiver() -> Any:
    """Zwraca kontekst wywołania bieżącego obsługującego.

    Jest to ``context`` powiązania albo emiter generujący zdarzenie.
    """

    frame = _CURRENT_FRAME.get()
    return frame.receiver if frame is not None else None


__all__ = [
    "DispatchFrame",
    "current_binding",
    "current_emitter",
    "current_frame",
    "current_receiver",
    "dispatch_scope",
]
