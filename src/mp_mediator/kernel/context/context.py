"""Kernel context – Context: the value threaded through every dispatch.

A :class:`Context` carries request-scoped values, an optional deadline and a
cancellation signal. It is immutable: every ``with_*`` call returns a child
that inherits its parent's values, deadline and cancellation.

The mediator never inspects the context; handlers, behaviours and listeners
decide whether to honour it::

    ctx = Context.background().with_timeout(2.0)

    async def handler(ctx: Context, request: GetOrder) -> Order:
        ctx.raise_if_done()
        ...
"""
from __future__ import annotations

import dataclasses
import threading
from types import MappingProxyType
from typing import Any, Mapping

from mp_mediator.kernel.context.deadline import Deadline
from mp_mediator.kernel.errors import ContextCancelledError, ContextError, DeadlineExceededError

_EMPTY: Mapping[Any, Any] = MappingProxyType({})


@dataclasses.dataclass(frozen=True, eq=False)
class Context:
    _values: Mapping[Any, Any] = dataclasses.field(default_factory=lambda: _EMPTY)
    _deadline: Deadline | None = None
    _signals: tuple[threading.Event, ...] = ()
    _own_signal: threading.Event | None = None

    @classmethod
    def background(cls) -> "Context":
        """The empty root context: no values, no deadline, never cancelled."""
        return _BACKGROUND

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def with_value(self, key: Any, value: Any) -> "Context":
        values = dict(self._values)
        values[key] = value
        return dataclasses.replace(self, _values=MappingProxyType(values), _own_signal=None)

    def value(self, key: Any, default: Any = None) -> Any:
        return self._values.get(key, default)

    # ------------------------------------------------------------------
    # Deadlines
    # ------------------------------------------------------------------

    def with_deadline(self, deadline: Deadline) -> "Context":
        """Child context whose deadline is the earlier of *deadline* and the parent's."""
        if self._deadline is not None and self._deadline <= deadline:
            deadline = self._deadline
        return dataclasses.replace(self, _deadline=deadline, _own_signal=None)

    def with_timeout(self, seconds: float) -> "Context":
        return self.with_deadline(Deadline.after(seconds))

    @property
    def deadline(self) -> Deadline | None:
        return self._deadline

    # ------------------------------------------------------------------
    # Cancellation
    # ------------------------------------------------------------------

    def with_cancel(self) -> "Context":
        """Child context that can be cancelled with :meth:`cancel`.

        Cancelling the child never affects the parent; cancelling any
        ancestor is observed by the child.
        """
        signal = threading.Event()
        return dataclasses.replace(self, _signals=(*self._signals, signal), _own_signal=signal)

    def cancel(self) -> None:
        if self._own_signal is None:
            raise ContextError("context was not created with with_cancel() and cannot be cancelled")
        self._own_signal.set()

    @property
    def cancelled(self) -> bool:
        return any(signal.is_set() for signal in self._signals)

    @property
    def done(self) -> bool:
        return self.cancelled or (self._deadline is not None and self._deadline.is_expired)

    def raise_if_done(self) -> None:
        """Raise :class:`ContextCancelledError` or :class:`DeadlineExceededError` when done."""
        if self.cancelled:
            raise ContextCancelledError()
        if self._deadline is not None and self._deadline.is_expired:
            raise DeadlineExceededError()


_BACKGROUND = Context()


__all__ = ["Context"]
