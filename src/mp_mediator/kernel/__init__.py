"""Kernel – framework-agnostic building blocks: errors, type keys, context."""

from mp_mediator.kernel.errors import (
    BaseError,
    ContextCancelledError,
    ContextError,
    DeadlineExceededError,
    HandlerNotFoundError,
    MediatorError,
    RegistrationError,
    ResponseTypeMismatchError,
)

__all__ = [
    "BaseError",
    "ContextCancelledError",
    "ContextError",
    "DeadlineExceededError",
    "HandlerNotFoundError",
    "MediatorError",
    "RegistrationError",
    "ResponseTypeMismatchError",
]
