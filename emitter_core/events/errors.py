"""Dedykowane wyjątki modułu zdarzeń."""
from __future__ import annotations

from typing import Any


class EmitterError(RuntimeError):
    """Bazowy wyjątek specyficzny dla emiterów zdarzeń."""


class InvalidArgumentError(EmitterError, ValueError):
    """Niepoprawny obsługujący, cel powiązania lub limit obsługujących."""


class UnhandledErrorEvent(EmitterError):
    """Zdarzenie ``error`` zostało wygenerowane bez żadnego obsługującego."""

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


__all__ = ["EmitterError", "InvalidArgumentError", "UnhandledErrorEvent"]
