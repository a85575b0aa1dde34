"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── MediatorError               (dispatch.py)
    │   ├── HandlerNotFoundError
    │   ├── ResponseTypeMismatchError
    │   └── RegistrationError
    └── ContextError                (context.py)
        ├── DeadlineExceededError
        └── ContextCancelledError
"""

from mp_mediator.kernel.errors.base import BaseError
from mp_mediator.kernel.errors.context import (
    ContextCancelledError,
    ContextError,
    DeadlineExceededError,
)
from mp_mediator.kernel.errors.dispatch import (
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
