"""Ładowanie konfiguracji z plików YAML i zmiennych środowiskowych."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from emitter_core.config.models import EmitterSettings, LoggingSettings
from emitter_core.events.emitter import EventEmitter

_LOGGER = logging.getLogger(__name__)

_SUPPORTED_LOG_FORMATS = {"text", "json"}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

ENV_MAX_LISTENERS = "EMITTER_CORE_MAX_LISTENERS"
ENV_WARN_ON_LEAK = "EMITTER_CORE_WARN_ON_LEAK"
ENV_LOG_LEVEL = "EMITTER_CORE_LOG_LEVEL"
ENV_LOG_FORMAT = "EMITTER_CORE_LOG_FORMAT"
ENV_LOG_FILE = "EMITTER_CORE_LOG_FILE"


class ConfigError(RuntimeError):
    """Błąd walidacji konfiguracji emiterów."""


def _parse_max_listeners(value: Any, source: str) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ConfigError(f"{source}: max_listeners musi być liczbą całkowitą")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{source}: max_listeners musi być liczbą całkowitą") from exc
    if number < 0:
        raise ConfigError(f"{source}: max_listeners nie może być ujemne")
    return number


def _parse_bool(value: Any, source: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"{source}: niepoprawna wartość logiczna '{value}'")


def _parse_log_format(value: Any, source: str) -> str:
    text = str(value or "text").strip().lower()
    if text not in _SUPPORTED_LOG_FORMATS:
        raise ConfigError(f"{source}: nieobsługiwany format logów '{value}'")
    return text


def _parse_log_level(value: Any, source: str) -> str:
    text = str(value or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(text), int):
        raise ConfigError(f"{source}: nieznany poziom logowania '{value}'")
    return text


def _resolve_path(base: Path, value: str | Path) -> Path:
    path = Path(value).expanduser()
    if path.is_absolute():
        return path
    return (base / path).resolve()


def _read_document(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise ConfigError(f"Plik konfiguracji nie istnieje: {path!s}")
    payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ConfigError("Plik konfiguracji musi zawierać obiekt mapujący")
    return payload


def _settings_from_mapping(payload: Mapping[str, Any], base: Path) -> EmitterSettings:
    logging_section = payload.get("logging", {}) or {}
    if not isinstance(logging_section, Mapping):
        raise ConfigError("Sekcja 'logging' musi być obiektem mapującym")

    log_file_value = logging_section.get("log_file")
    logging_cfg = LoggingSettings(
        level=_parse_log_level(logging_section.get("level"), "logging.level"),
        format=_parse_log_format(logging_section.get("format"), "logging.format"),
        logger_name=str(logging_section.get("logger_name") or "emitter_core"),
        log_file=_resolve_path(base, log_file_value) if log_file_value else None,
    )

    return EmitterSettings(
        max_listeners=_parse_max_listeners(payload.get("max_listeners", 10), "max_listeners"),
        warn_on_listener_leak=_parse_bool(
            payload.get("warn_on_listener_leak", True), "warn_on_listener_leak"
        ),
        logging=logging_cfg,
    )


def _apply_environment(settings: EmitterSettings, environ: Mapping[str, str]) -> EmitterSettings:
    # Zmienne środowiskowe mają pierwszeństwo przed plikiem.
    if environ.get(ENV_MAX_LISTENERS):
        settings.max_listeners = _parse_max_listeners(environ[ENV_MAX_LISTENERS], ENV_MAX_LISTENERS)
    if environ.get(ENV_WARN_ON_LEAK):
        settings.warn_on_listener_leak = _parse_bool(environ[ENV_WARN_ON_LEAK], ENV_WARN_ON_LEAK)
    if environ.get(ENV_LOG_LEVEL):
        settings.logging.level = _parse_log_level(environ[ENV_LOG_LEVEL], ENV_LOG_LEVEL)
    if environ.get(ENV_LOG_FORMAT):
        settings.logging.format = _parse_log_format(environ[ENV_LOG_FORMAT], ENV_LOG_FORMAT)
    if environ.get(ENV_LOG_FILE):
        settings.logging.log_file = Path(environ[ENV_LOG_FILE]).expanduser()
    return settings


def load_settings(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> EmitterSettings:
    """Wczytuje ustawienia z pliku YAML (opcjonalnie) i zmiennych środowiskowych."""

    if path is None:
        settings = EmitterSettings()
    else:
        config_path = Path(path).expanduser().resolve()
        settings = _settings_from_mapping(_read_document(config_path), config_path.parent)
        _LOGGER.debug("Wczytano konfigurację emiterów z %s", config_path)
    return _apply_environment(settings, os.environ if environ is None else environ)


def apply_settings(settings: EmitterSettings) -> None:
    """Ustawia wartości domyślne klasy :class:`EventEmitter`.

    Limit obsługujących dotyczy emiterów tworzonych po wywołaniu, przełącznik
    ostrzeżeń działa od razu dla wszystkich emiterów.
    """

    EventEmitter.MAX_LISTENERS = settings.max_listeners
    EventEmitter.WARN_ON_LISTENER_LEAK = settings.warn_on_listener_leak
    _LOGGER.debug(
        "Zastosowano ustawienia emiterów: max_listeners=%s, warn_on_listener_leak=%s",
        settings.max_listeners,
        settings.warn_on_listener_leak,
    )


__all__ = [
    "ConfigError",
    "ENV_LOG_FILE",
    "ENV_LOG_FORMAT",
    "ENV_LOG_LEVEL",
    "ENV_MAX_LISTENERS",
    "ENV_WARN_ON_LEAK",
    "apply_settings",
    "load_settings",
]
