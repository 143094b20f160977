"""Synchroniczny emiter zdarzeń z delegacją i przerywaniem dyspozycji."""
from __future__ import annotations

import logging
import math
from typing import Any, Hashable, List, Optional

from emitter_core.events.binding import Binding, is_emission_capable
from emitter_core.events.dispatch import current_emitter, current_frame, dispatch_scope
from emitter_core.events.errors import InvalidArgumentError, UnhandledErrorEvent

_LOGGER = logging.getLogger(__name__)

_INVALID_LISTENER = "Obsługujący musi być obiektem wywoływalnym, emiterem lub obiektem Binding"


class EventEmitter:
    """Rejestr obsługujących zdarzeń i ich synchroniczna dyspozycja.

    Przykład::

        emitter = EventEmitter()
        emitter.on("event", lambda: emitter.stop_emit())
        emitter.on("event", handler)  # nigdy nie zostanie wywołany
        emitter.emit("event")
    """

    MAX_LISTENERS: int = 10
    WARN_ON_LISTENER_LEAK: bool = True

    EVENT_NEW_LISTENER = "newListener"
    EVENT_REMOVE_LISTENER = "removeListener"
    EVENT_ERROR = "error"

    def __init__(self, *, max_listeners: Optional[int] = None) -> None:
        self._events: Optional[dict[Hashable, List[Binding]]] = None
        self._max_listeners: float = type(self).MAX_LISTENERS
        self._leak_warned: set[Hashable] = set()
        if max_listeners is not None:
            self.set_max_listeners(max_listeners)

    # ------------------------------------------------------------------ limity

    def set_max_listeners(self, count: Any) -> "EventEmitter":
        """Ustawia miękki limit obsługujących jednego zdarzenia (0 = bez limitu)."""

        if (
            isinstance(count, bool)
            or not isinstance(count, (int, float))
            or not math.isfinite(count)
            or count < 0
        ):
            raise InvalidArgumentError("Limit obsługujących musi być nieujemną, skończoną liczbą")
        self._max_listeners = count
        return self

    def get_max_listeners(self) -> float:
        return self._max_listeners

    @staticmethod
    def listener_count(emitter: Any, event_name: Hashable) -> int:
        """Zwraca liczbę obsługujących zdarzenia ``event_name`` dla ``emitter``."""

        if not isinstance(emitter, EventEmitter) or not emitter._events:
            return 0
        return len(emitter._events.get(event_name) or ())

    @classmethod
    def current(cls) -> Optional["EventEmitter"]:
        """Emiter, którego obsługujący są właśnie wykonywani."""

        return current_emitter()

    # -------------------------------------------------------------- rejestracja

    def on(self, event_name: Hashable, listener: Any, context: Any = None) -> "EventEmitter":
        """Dodaje obsługującego zdarzenia.

        ``listener`` może być obiektem wywoływalnym, innym emiterem lub gotowym
        :class:`Binding`. Obsługujący ``newListener`` dostają powiadomienie
        zanim nowe powiązanie trafi do rejestru.
        """

        binding = listener if isinstance(listener, Binding) else Binding(event_name, listener, context)
        if self._registry().get(self.EVENT_NEW_LISTENER):
            self.emit(self.EVENT_NEW_LISTENER, event_name, binding.target, binding.context)

        if binding.context is self:
            binding.context = None

        # Obsługujący newListener mógł wymienić rejestr.
        bindings = self._registry().setdefault(event_name, [])
        bindings.append(binding)
        self._check_listener_leak(event_name, len(bindings))
        return self

    def once(self, event_name: Hashable, listener: Any, context: Any = None) -> "EventEmitter":
        """Dodaje obsługującego, który zostanie wywołany co najwyżej raz."""

        binding = listener if isinstance(listener, Binding) else Binding(event_name, listener, context)
        binding.once = True
        return self.on(event_name, binding)

    def off(self, event_name: Hashable, listener: Any) -> "EventEmitter":
        """Usuwa najnowsze powiązanie wskazujące ``listener``.

        Brak dopasowania nie jest błędem.
        """

        if not (isinstance(listener, Binding) or callable(listener) or is_emission_capable(listener)):
            raise InvalidArgumentError(_INVALID_LISTENER)

        events = self._events
        bindings = events.get(event_name) if events else None
        if not bindings:
            return self

        position = -1
        for index in range(len(bindings) - 1, -1, -1):
            if bindings[index].matches(listener):
                position = index
                break
        if position < 0:
            return self

        del bindings[position]
        if not bindings:
            del events[event_name]
            self._leak_warned.discard(event_name)

        if events.get(self.EVENT_REMOVE_LISTENER):
            self.emit(self.EVENT_REMOVE_LISTENER, event_name, listener)
        return self

    def remove_all_listeners(self, event_name: Optional[Hashable] = None) -> "EventEmitter":
        """Usuwa obsługujących zdarzenia albo, bez argumentu, wszystkich zdarzeń."""

        events = self._events
        if not events:
            return self

        if not events.get(self.EVENT_REMOVE_LISTENER):
            if event_name is None:
                self._events = {}
                self._leak_warned.clear()
            elif event_name in events:
                del events[event_name]
                self._leak_warned.discard(event_name)
            return self

        if event_name is None:
            for name in list(events):
                if name != self.EVENT_REMOVE_LISTENER:
                    self.remove_all_listeners(name)
            self.remove_all_listeners(self.EVENT_REMOVE_LISTENER)
            self._events = {}
            self._leak_warned.clear()
            return self

        bindings = events.get(event_name)
        if not bindings:
            return self
        # Usuwamy od końca, tak aby każde usunięcie wygenerowało removeListener.
        for binding in list(reversed(bindings)):
            self.off(event_name, binding)
        return self

    def listeners(self, event_name: Optional[Hashable] = None) -> List[Binding]:
        """Zwraca powiązania zdarzenia.

        Dla podanej nazwy zwracana jest lista używana przez rejestr (zmiany
        rejestru są w niej widoczne). Bez nazwy zwracana jest nowa lista
        wszystkich powiązań w kolejności rejestru.
        """

        events = self._registry()
        if event_name is None:
            return [binding for bindings in events.values() for binding in bindings]
        return events.setdefault(event_name, [])

    def event_names(self) -> List[Hashable]:
        """Nazwy zdarzeń, dla których zarejestrowano co najmniej jedno powiązanie."""

        if not self._events:
            return []
        return [name for name, bindings in self._events.items() if bindings]

    # ---------------------------------------------------------------- dyspozycja

    def emit(self, event_name: Hashable, *args: Any, **kwargs: Any) -> bool:
        """Wywołuje obsługujących zdarzenia w kolejności rejestracji.

        Zwraca True, jeśli w chwili wywołania zdarzenie miało co najmniej jedno
        powiązanie (także wtedy, gdy dyspozycję przerwano przez
        :meth:`stop_emit`).

        Długość listy jest odczytywana przy każdym kroku, więc powiązania
        dodane w trakcie dyspozycji również zostaną wywołane. Po wywołaniu
        kursor przechodzi do powiązania, które następowało po wywołanym w chwili
        rozpoczęcia jego kroku; jeśli tego już nie ma, przesuwa się o jedną
        pozycję. Dzięki temu powiązanie ``once`` (lub obsługujący usuwający
        samego siebie) nie powoduje pominięcia następnika, a obsługujący, który
        ponownie rejestruje samego siebie, trafia na koniec listy i dyspozycja
        się kończy. Inne usunięcia w trakcie dyspozycji leżą po stronie
        wywołującego.

        :raises UnhandledErrorEvent: dla ``error`` bez obsługujących, jeśli
            pierwszy argument nie jest wyjątkiem (w przeciwnym razie zgłaszany
            jest ten wyjątek).
        """

        bindings = self._events.get(event_name) if self._events else None
        if not bindings:
            if event_name == self.EVENT_ERROR:
                payload = args[0] if args else None
                _LOGGER.error("Unhandled 'error' event on %r: %r", self, payload)
                if isinstance(payload, BaseException):
                    raise payload
                raise UnhandledErrorEvent("Nieobsłużone zdarzenie 'error' bez wskazanego wyjątku", payload)
            return False

        call_args = tuple(args)
        call_kwargs = dict(kwargs)
        _LOGGER.debug("Emitting %r to %d listener(s)", event_name, len(bindings))

        with dispatch_scope(self) as frame:
            index = 0
            while index < len(bindings):
                binding = bindings[index]
                successor = bindings[index + 1] if index + 1 < len(bindings) else None
                frame.binding = binding
                frame.receiver = self if binding.context is None else binding.context

                if binding.once:
                    self.off(event_name, binding)

                if binding.is_delegate:
                    forwarded = binding.event_name if binding.event_name is not None else event_name
                    binding.target.emit(forwarded, *call_args, **call_kwargs)
                else:
                    binding.target(*call_args, **call_kwargs)

                if frame.is_stopped():
                    _LOGGER.debug("Emission of %r stopped after listener %d", event_name, index)
                    break

                index = self._next_cursor(bindings, index, successor)

        return True

    @staticmethod
    def _next_cursor(bindings: List[Binding], index: int, successor: Optional[Binding]) -> int:
        # Następnik mógł przesunąć się tylko w lewo (usunięcia); dopisania trafiają na koniec.
        if successor is not None:
            for position in range(min(index + 1, len(bindings) - 1), -1, -1):
                if bindings[position] is successor:
                    return position
        return index + 1

    def stop_emit(self) -> bool:
        """Przerywa wykonywanie pozostałych obsługujących bieżącego zdarzenia.

        Działa tylko wtedy, gdy ten emiter jest aktualnie w trakcie dyspozycji;
        w przeciwnym razie zwraca False i nie ma efektu.
        """

        frame = current_frame()
        if frame is None:
            return False
        return frame.request_stop(self)

    # ----------------------------------------------------------------- delegacja

    def delegate(self, target: Any, event_name: Hashable, alias: Optional[Hashable] = None) -> "EventEmitter":
        """Przekazuje zdarzenie ``event_name`` do ``target``, opcjonalnie pod nazwą ``alias``."""

        if alias is None or alias == event_name:
            return self.on(event_name, target)
        return self.on(event_name, Binding(alias, target))

    # Aliasy zgodności
    add_listener = on
    register = on
    register_once = once
    remove_listener = off
    unregister = off
    unregister_all = remove_all_listeners
    list_bindings = listeners
    count_bindings = listener_count

    # ----------------------------------------------------------------- pomocnicze

    def _registry(self) -> dict[Hashable, List[Binding]]:
        if self._events is None:
            self._events = {}
        return self._events

    def _check_listener_leak(self, event_name: Hashable, count: int) -> None:
        limit = self._max_listeners
        if not type(self).WARN_ON_LISTENER_LEAK or not limit or count <= limit:
            return
        if event_name in self._leak_warned:
            return
        self._leak_warned.add(event_name)
        _LOGGER.warning(
            "Possible listener leak: %d listeners registered for %r (limit %s). "
            "Use set_max_listeners() to raise the limit.",
            count,
            event_name,
            limit,
        )


__all__ = ["EventEmitter"]
