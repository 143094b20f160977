"""Application-level logging setup for emitter_core and its consumers."""
from __future__ import annotations

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

from emitter_core.config.loader import load_settings
from emitter_core.config.models import LoggingSettings

_SETUP_LOCK = threading.Lock()
_CONFIGURED_FLAG = "_emitter_core_logging_configured"
_TEXT_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def _build_formatter(format_type: str, service_name: str) -> logging.Formatter:
    format_type = (format_type or "text").lower()
    if format_type == "json":

        class _JsonFormatter(JsonFormatter):
            def add_fields(self, log_record, record, message_dict):  # type: ignore[override]
                super().add_fields(log_record, record, message_dict)
                log_record.setdefault("service", service_name)
                log_record.setdefault("level", record.levelname)
                log_record.setdefault("logger", record.name)
                if record.exc_info:
                    log_record.setdefault("exc_info", self.formatException(record.exc_info))

        return _JsonFormatter("%(message)s")

    return logging.Formatter(_TEXT_FORMAT)


def setup_app_logging(
    settings: LoggingSettings | None = None,
    *,
    level: int | str | None = None,
    format_type: str | None = None,
    log_file: Path | str | None = None,
    max_bytes: int = 5_000_000,
    backup_count: int = 5,
) -> logging.Logger:
    """Configure the ``emitter_core`` logger once and return it.

    Explicit keyword arguments win over ``settings``; without ``settings`` the
    values are read from the environment through :func:`load_settings`.
    """

    if settings is None:
        settings = load_settings().logging

    root = logging.getLogger(settings.logger_name)
    with _SETUP_LOCK:
        if getattr(root, _CONFIGURED_FLAG, False):
            return root

        resolved_level = level or settings.level or "INFO"
        if isinstance(resolved_level, str):
            resolved_level = getattr(logging, resolved_level.upper(), logging.INFO)

        formatter = _build_formatter(format_type or settings.format, settings.logger_name)

        stream_handler = logging.StreamHandler(stream=sys.stderr)
        stream_handler.setFormatter(formatter)
        handlers: list[logging.Handler] = [stream_handler]

        target_file = log_file or settings.log_file
        if target_file:
            file_handler = RotatingFileHandler(
                filename=str(target_file),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
                delay=True,
            )
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)

        root.handlers.clear()
        for handler in handlers:
            root.addHandler(handler)
        root.setLevel(resolved_level)
        root.propagate = False
        setattr(root, _CONFIGURED_FLAG, True)
    return root


def reset_app_logging(logger_name: str = "emitter_core") -> None:
    """Remove handlers installed by :func:`setup_app_logging` (used in tests)."""

    root = logging.getLogger(logger_name)
    with _SETUP_LOCK:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        root.propagate = True
        root.setLevel(logging.NOTSET)
        if hasattr(root, _CONFIGURED_FLAG):
            delattr(root, _CONFIGURED_FLAG)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger, installing the app logging configuration if needed."""

    root = setup_app_logging()
    return root if name is None else logging.getLogger(name)


__all__ = ["get_logger", "reset_app_logging", "setup_app_logging"]
