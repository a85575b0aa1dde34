"""Kernel context – cancellation/deadline-bearing Context and Deadline."""
from mp_mediator.kernel.context.context import Context
from mp_mediator.kernel.context.deadline import Deadline

__all__ = ["Context", "Deadline"]
