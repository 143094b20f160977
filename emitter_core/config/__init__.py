"""Konfiguracja pakietu emitter_core."""

from .loader import ConfigError, apply_settings, load_settings
from .models import EmitterSettings, LoggingSettings

__all__ = [
    "ConfigError",
    "EmitterSettings",
    "LoggingSettings",
    "apply_settings",
    "load_settings",
]
