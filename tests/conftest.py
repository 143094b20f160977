"""Globalna konfiguracja testów."""
from __future__ import annotations

from typing import Iterator

import pytest

from emitter_core.events import EventEmitter
from emitter_core.logging import reset_app_logging


@pytest.fixture(autouse=True)
def _restore_emitter_defaults() -> Iterator[None]:
    max_listeners = EventEmitter.MAX_LISTENERS
    warn_on_leak = EventEmitter.WARN_ON_LISTENER_LEAK
    yield
    EventEmitter.MAX_LISTENERS = max_listeners
    EventEmitter.WARN_ON_LISTENER_LEAK = warn_on_leak


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    yield
    reset_app_logging()


@pytest.fixture()
def emitter() -> EventEmitter:
    return EventEmitter()
