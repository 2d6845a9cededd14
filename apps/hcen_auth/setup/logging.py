"""Logging Configuration.

ECS-compatible JSON logging on stdout. Service metadata is stamped by a
filter on the broker's own handler, so calling :func:`setup_logging` again
(one call per ``create_app()``) replaces the handler instead of stacking
another layer on the global record factory.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import ecs_logging

from apps.hcen_auth.setup.config import get_settings

if TYPE_CHECKING:
    from apps.hcen_auth.setup.config.settings import Settings

QUIET_LOGGERS = ("httpx", "httpcore")


class ServiceContextFilter(logging.Filter):
    """Adds ``service.name/version/environment`` to each record it sees."""

    def __init__(self, settings: "Settings") -> None:
        super().__init__()
        self._service = {
            "name": settings.service_name,
            "version": settings.service_version,
            "environment": settings.environment,
        }

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "service"):
            record.service = dict(self._service)
        return True


def build_handler(settings: "Settings") -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ecs_logging.StdlibFormatter())
    handler.addFilter(ServiceContextFilter(settings))
    return handler


def setup_logging(level: str | None = None) -> None:
    """Install the ECS handler on the root logger. Safe to call repeatedly."""
    settings = get_settings()

    root_logger = logging.getLogger()
    root_logger.setLevel(level or settings.log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(build_handler(settings))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
