"""Synchroniczny emiter zdarzeń do komunikacji wewnątrz procesu."""

from emitter_core.events import (
    Binding,
    DispatchFrame,
    EmitterError,
    Event,
    EventEmitter,
    InvalidArgumentError,
    TargetKind,
    UnhandledErrorEvent,
    current_binding,
    current_emitter,
    current_receiver,
    is_emission_capable,
)

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
