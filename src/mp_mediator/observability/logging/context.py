"""Observability – contextual logger lookup.

The mediator reports dispatch failures to ``logger(ctx)``: the logger attached
with :func:`with_logger`, or the process-wide default when none is attached.
"""
from __future__ import annotations

from typing import Any

import structlog

from mp_mediator.kernel.context import Context
from mp_mediator.observability.logging.protocol import Logger

DEFAULT_LOGGER_NAME = "mp_mediator"


class _LoggerKey:
    """Private context key; instances are never created."""


_default_logger: Logger | None = None


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a structlog logger, bound to *initial_values* when given."""
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


def set_default_logger(logger: Logger | None) -> None:
    """Replace the process-wide default logger; ``None`` restores the built-in one."""
    global _default_logger
    _default_logger = logger


def get_default_logger() -> Logger:
    """The process-wide default logger, built on first use and then reused."""
    global _default_logger
    if _default_logger is None:
        _default_logger = get_logger(DEFAULT_LOGGER_NAME)
    return _default_logger


def with_logger(ctx: Context, logger: Logger) -> Context:
    return ctx.with_value(_LoggerKey, logger)


def logger(ctx: Context) -> Logger:
    attached = ctx.value(_LoggerKey)
    if attached is not None:
        return attached
    return get_default_logger()


__all__ = [
    "DEFAULT_LOGGER_NAME",
    "get_default_logger",
    "get_logger",
    "logger",
    "set_default_logger",
    "with_logger",
]
