"""Integracja logowania specyficzna dla projektu emitter_core."""

from .app import get_logger, reset_app_logging, setup_app_logging

__all__ = ["get_logger", "reset_app_logging", "setup_app_logging"]
