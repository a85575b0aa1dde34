"""Kernel context – Deadline."""
from __future__ import annotations

import dataclasses
from datetime import UTC, datetime, timedelta

from mp_mediator.kernel.errors import DeadlineExceededError


@dataclasses.dataclass(frozen=True, order=True)
class Deadline:
    """An absolute point in time after which work should stop."""
    expires_at: datetime

    @classmethod
    def after(cls, seconds: float) -> "Deadline":
        return cls(expires_at=datetime.now(UTC) + timedelta(seconds=seconds))

    @property
    def remaining_seconds(self) -> float:
        return max(0.0, (self.expires_at - datetime.now(UTC)).total_seconds())

    @property
    def is_expired(self) -> bool:
        return datetime.now(UTC) >= self.expires_at

    def raise_if_expired(self) -> None:
        if self.is_expired:
            raise DeadlineExceededError()


__all__ = ["Deadline"]
