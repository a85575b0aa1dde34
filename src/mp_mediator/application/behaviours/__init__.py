"""Application behaviours – reusable pipeline behaviours."""
from mp_mediator.application.behaviours.builtin import (
    DeadlineBehaviour,
    LoggingBehaviour,
    TimeoutBehaviour,
    ValidationBehaviour,
)

__all__ = [
    "DeadlineBehaviour",
    "LoggingBehaviour",
    "TimeoutBehaviour",
    "ValidationBehaviour",
]
