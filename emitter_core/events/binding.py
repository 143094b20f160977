"""Model powiązania obsługującego z nazwą zdarzenia."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Hashable

from emitter_core.events.errors import InvalidArgumentError

_INVALID_TARGET = "Obsługujący musi być obiektem wywoływalnym lub obiektem z metodą emit()"


class TargetKind(enum.Enum):
    """Sposób wywołania celu powiązania."""

    CALLABLE = "callable"
    EMITTER = "emitter"


def is_emission_capable(target: Any) -> bool:
    """Zwraca True, jeśli obiekt udostępnia wywoływalną metodę ``emit``."""

    return callable(getattr(target, "emit", None))


def resolve_target_kind(target: Any) -> TargetKind:
    """Rozpoznaje rodzaj celu albo zgłasza :class:`InvalidArgumentError`.

    Obiekt wywoływalny ma pierwszeństwo przed emiterem, tak jak przy
    wywołaniu obsługującego.
    """

    if callable(target):
        return TargetKind.CALLABLE
    if is_emission_capable(target):
        return TargetKind.EMITTER
    raise InvalidArgumentError(_INVALID_TARGET)


@dataclass(eq=False, slots=True)
class Binding:
    """Pojedynczy zarejestrowany obsługujący.

    ``event_name`` jest nazwą przekazywaną do delegata; przy delegacji z aliasem
    różni się od nazwy, pod którą powiązanie zostało zapisane. ``context`` równy
    ``None`` oznacza wywołanie w kontekście emitera generującego zdarzenie.
    Porównanie odbywa się wyłącznie po tożsamości obiektu.
    """

    event_name: Hashable | None
    target: Any
    context: Any = None
    once: bool = False
    kind: TargetKind = field(init=False)

    def __post_init__(self) -> None:
        self.kind = resolve_target_kind(self.target)

    @property
    def is_delegate(self) -> bool:
        return self.kind is TargetKind.EMITTER

    def matches(self, listener: Any) -> bool:
        """Sprawdza, czy ``listener`` wskazuje to powiązanie lub jego cel."""

        if isinstance(listener, Binding):
            return listener is self
        return self.target is listener


# Nazwa używana w dokumentacji domenowej.
Event = Binding


__all__ = [
    "Binding",
    "Event",
    "TargetKind",
    "is_emission_capable",
    "resolve_target_kind",
]
