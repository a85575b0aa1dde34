"""Errors reported by :class:`~mp_mediator.kernel.context.Context`."""

from __future__ import annotations

from mp_mediator.kernel.errors.base import BaseError


class ContextError(BaseError):
    """The context is done and work should stop."""

    default_code = "context_error"


class DeadlineExceededError(ContextError):
    default_code = "deadline_exceeded"

    def __init__(self, message: str = "context deadline exceeded") -> None:
        super().__init__(message)


class ContextCancelledError(ContextError):
    default_code = "context_cancelled"

    def __init__(self, message: str = "context cancelled") -> None:
        super().__init__(message)


__all__ = ["ContextCancelledError", "ContextError", "DeadlineExceededError"]
