"""Synchroniczny mechanizm publikacji i subskrypcji zdarzeń."""

from .binding import Binding, Event, TargetKind, is_emission_capable
from .dispatch import DispatchFrame, current_binding, current_emitter, current_receiver
from .emitter import EventEmitter
from .errors import EmitterError, InvalidArgumentError, UnhandledErrorEvent

__all__ = [
    "Binding",
    "DispatchFrame",
    "EmitterError",
    "Event",
    "EventEmitter",
    "InvalidArgumentError",
    "TargetKind",
    "UnhandledErrorEvent",
    "current_binding",
    "current_emitter",
    "current_receiver",
    "is_emission_capable",
]
