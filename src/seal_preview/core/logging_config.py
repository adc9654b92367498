"""Structured logging configuration using structlog.

Provides JSON logs in production and colored console output in development.
Stdlib records from ``seal_preview`` and httpx pass through the same
processors, so ids bound with ``bind_contract`` show up on every line
emitted while a contract is being fetched.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from seal_preview.config import SealSettings

SERVICE_NAME = "seal-preview"


def _add_service(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


@contextmanager
def bind_contract(contract_id: str, **extra: Any) -> Iterator[None]:
    """Attach ``contract_id`` (and *extra*) to every log line in this context.

    Tasks started inside the block (e.g. the join's children) inherit the
    binding; it is removed again on exit.
    """
    with structlog.contextvars.bound_contextvars(contract_id=contract_id, **extra):
        yield


def setup_logging(settings: SealSettings) -> None:
    """Configure structlog and route stdlib ``logging`` records through it."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        _add_service,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if sys.stderr.isatty():
        renderer: Any = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.StackInfoRenderer(),
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
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger("seal_preview").setLevel(level)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
