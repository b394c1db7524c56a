"""Logging module with structured logging and request tracking."""

from gatekeeper.core.logging.config import configure_logging
from gatekeeper.core.logging.middleware import RequestLoggingMiddleware


__all__ = [
    "RequestLoggingMiddleware",
    "configure_logging",
]
