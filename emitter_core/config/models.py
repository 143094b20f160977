"""Modele konfiguracji emiterów zdarzeń."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(slots=True)
class LoggingSettings:
    """Ustawienia logowania aplikacji."""

    level: str = "INFO"
    format: str = "text"
    logger_name: str = "emitter_core"
    log_file: Path | None = None


@dataclass(slots=True)
class EmitterSettings:
    """Zbiorcza konfiguracja pakietu ``emitter_core``."""

    max_listeners: int = 10
    warn_on_listener_leak: bool = True
    logging: LoggingSettings = field(default_factory=LoggingSettings)


__all__ = ["EmitterSettings", "LoggingSettings"]
