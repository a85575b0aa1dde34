"""Observability – structured logging helpers and the contextual logger."""
from mp_mediator.observability.logging.protocol import Logger
from mp_mediator.observability.logging.context import (
    DEFAULT_LOGGER_NAME,
    get_default_logger,
    get_logger,
    logger,
    set_default_logger,
    with_logger,
)
from mp_mediator.observability.logging.factory import JsonLoggerFactory

__all__ = [
    "DEFAULT_LOGGER_NAME",
    "JsonLoggerFactory",
    "Logger",
    "get_default_logger",
    "get_logger",
    "logger",
    "set_default_logger",
    "with_logger",
]
