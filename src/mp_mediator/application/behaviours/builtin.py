"""Application behaviours – built-in behaviour implementations.

All of them apply to every request. Register them before domain-specific
behaviours so they sit outermost in the pipeline::

    register_behaviour(mediator, LoggingBehaviour())
    register_behaviour(mediator, DeadlineBehaviour())
    register_behaviour(mediator, ValidationBehaviour())
"""
from __future__ import annotations

import asyncio
import time
from typing import Any

from mp_mediator.application.mediator.handlers import Behaviour, Next
from mp_mediator.kernel.context import Context
from mp_mediator.kernel.errors import DeadlineExceededError
from mp_mediator.observability.logging import logger


class LoggingBehaviour(Behaviour[object]):
    """Log request completion or failure with timing through the context logger."""

    async def __call__(self, ctx: Context, request: Any, next_: Next) -> Any:
        log = logger(ctx)
        name = type(request).__name__
        start = time.perf_counter()
        try:
            result = await next_()
        except Exception as exc:
            duration = (time.perf_counter() - start) * 1000
            log.error("request.failed", request=name, duration_ms=round(duration, 2), error=repr(exc))
            raise
        duration = (time.perf_counter() - start) * 1000
        log.info("request.completed", request=name, duration_ms=round(duration, 2))
        return result


class ValidationBehaviour(Behaviour[object]):
    """Call ``request.validate()`` if it exists; whatever it raises reaches the caller."""

    async def __call__(self, ctx: Context, request: Any, next_: Next) -> Any:
        validate = getattr(request, "validate", None)
        if callable(validate):
            validate()
        return await next_()


class DeadlineBehaviour(Behaviour[object]):
    """Refuse to continue when the context is already cancelled or past its deadline."""

    async def __call__(self, ctx: Context, request: Any, next_: Next) -> Any:
        ctx.raise_if_done()
        return await next_()


class TimeoutBehaviour(Behaviour[object]):
    """Raise :class:`DeadlineExceededError` if the rest of the pipeline exceeds *timeout_seconds*.

    A tighter context deadline takes precedence over *timeout_seconds*. A
    ``TimeoutError`` raised by the handler itself reaches the caller unchanged.
    """

    def __init__(self, timeout_seconds: float) -> None:
        self._timeout = timeout_seconds

    async def __call__(self, ctx: Context, request: Any, next_: Next) -> Any:
        timeout = self._timeout
        if ctx.deadline is not None:
            timeout = min(timeout, ctx.deadline.remaining_seconds)
        scope = asyncio.timeout(timeout)
        try:
            async with scope:
                return await next_()
        except TimeoutError as exc:
            if not scope.expired():
                raise
            raise DeadlineExceededError(
                f"{type(request).__name__} timed out after {timeout:.3f}s"
            ) from exc


__all__ = [
    "DeadlineBehaviour",
    "LoggingBehaviour",
    "TimeoutBehaviour",
    "ValidationBehaviour",
]
