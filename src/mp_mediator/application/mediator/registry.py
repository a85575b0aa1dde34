"""Mediator – handler, behaviour and listener registries.

The registries are populated during a setup phase and only read while
dispatching. Registering concurrently with dispatch from another thread is
not supported; once setup is complete, concurrent dispatch is safe because
nothing here is mutated by ``send`` or ``send_event``.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Awaitable, Callable

from mp_mediator.application.mediator.handlers import Next
from mp_mediator.kernel.context import Context
from mp_mediator.kernel.errors import RegistrationError
from mp_mediator.kernel.types import TypeKey, is_assignable, runtime_class, type_key

HandlerInvoke = Callable[[Context, Any], Awaitable[Any]]
BehaviourInvoke = Callable[[Context, Any, Next], Awaitable[Any]]
ListenerInvoke = Callable[[Context, Any], Awaitable[None]]


def routing_key(tp: Any) -> TypeKey:
    """Key requests and events are stored and looked up under.

    Parameterised generics collapse to their runtime class, so ``list[int]``
    and ``list`` share a key. Types with no runtime class (unions, ``Any``)
    keep their own key and therefore never match a registration.
    """
    try:
        return type_key(runtime_class(tp))
    except RegistrationError:
        return type_key(tp)


@dataclasses.dataclass(frozen=True)
class HandlerRegistration:
    """The single handler for ``request_type``."""
    request_type: type
    response_type: Any
    invoke: HandlerInvoke

    @property
    def request_key(self) -> TypeKey:
        return routing_key(self.request_type)

    @property
    def response_key(self) -> TypeKey:
        return type_key(self.response_type)


@dataclasses.dataclass(frozen=True)
class BehaviourRegistration:
    """A behaviour applied to every request assignable to ``applies_to``."""
    applies_to: Any
    invoke: BehaviourInvoke

    def matches(self, request_type: type) -> bool:
        return is_assignable(request_type, self.applies_to)


@dataclasses.dataclass(frozen=True)
class ListenerRegistration:
    """A listener for events of exactly ``event_type``."""
    event_type: type
    invoke: ListenerInvoke


class Registry:
    """Type-keyed storage for one mediator instance."""

    def __init__(self) -> None:
        self._handlers: dict[TypeKey, HandlerRegistration] = {}
        self._behaviours: list[BehaviourRegistration] = []
        self._listeners: dict[TypeKey, list[ListenerRegistration]] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_handler(self, registration: HandlerRegistration) -> None:
        """Insert the handler, silently replacing any earlier one for the same request type."""
        self._handlers[registration.request_key] = registration

    def register_behaviour(self, registration: BehaviourRegistration) -> None:
        self._behaviours.append(registration)

    def register_event_handler(self, registration: ListenerRegistration) -> None:
        self._listeners.setdefault(routing_key(registration.event_type), []).append(registration)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup_handler(self, request_type: type) -> HandlerRegistration | None:
        return self._handlers.get(routing_key(request_type))

    def matching_behaviours(self, request_type: type) -> list[BehaviourRegistration]:
        """Behaviours whose target *request_type* is assignable to, in registration order."""
        return [b for b in self._behaviours if b.matches(request_type)]

    def listeners_for(self, event_type: type) -> list[ListenerRegistration]:
        """Listeners registered for exactly *event_type*, in registration order."""
        return list(self._listeners.get(routing_key(event_type), ()))

    @property
    def handler_count(self) -> int:
        return len(self._handlers)

    @property
    def behaviour_count(self) -> int:
        return len(self._behaviours)

    def listener_count(self, event_type: type) -> int:
        return len(self._listeners.get(routing_key(event_type), ()))


__all__ = [
    "BehaviourInvoke",
    "BehaviourRegistration",
    "HandlerInvoke",
    "HandlerRegistration",
    "ListenerInvoke",
    "ListenerRegistration",
    "Registry",
    "routing_key",
]
