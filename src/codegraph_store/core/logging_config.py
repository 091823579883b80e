"""Logging setup for codegraph-store.

Stdlib loggers stay the API inside the package; this module routes them
through structlog so every line carries the storage backend it ran
against. ``log_format="auto"`` picks the console renderer on a terminal
and JSON lines anywhere else.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from codegraph_store.core.config import AppSettings

_PACKAGE = "codegraph_store"


def _short_logger_name(_logger: Any, _method: str, event_dict: dict) -> dict:
    name = event_dict.get("logger")
    if isinstance(name, str) and name.startswith(f"{_PACKAGE}."):
        event_dict["logger"] = name.rsplit(".", 1)[-1]
    return event_dict


def _renderer(log_format: str) -> Any:
    if log_format == "json" or (log_format == "auto" and not sys.stderr.isatty()):
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def bind_storage_context(settings: AppSettings) -> None:
    """Attach the active backend (and directory, for files) to every log line."""
    structlog.contextvars.clear_contextvars()
    storage = settings.storage
    if storage.backend == "file":
        structlog.contextvars.bind_contextvars(
            storage_backend=storage.backend, store_path=str(storage.store_path)
        )
    else:
        structlog.contextvars.bind_contextvars(storage_backend=storage.backend)


def setup_logging(settings: AppSettings) -> None:
    config = settings.observability
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _short_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(config.log_format),
            ],
        )
    )

    # Only our loggers follow the configured level; libraries stay at WARNING.
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)
    logging.getLogger(_PACKAGE).setLevel(level)

    bind_storage_context(settings)
