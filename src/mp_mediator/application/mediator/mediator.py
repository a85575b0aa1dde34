"""Mediator – the Mediator port, InProcessMediator and the dispatch API.

Usage::

    mediator = new_mediator()
    register_handler(mediator, get_order)          # async def get_order(ctx, request: GetOrder) -> Order
    register_behaviour(mediator, audit)            # async def audit(ctx, request: Command, next_) -> Any
    register_event_handler(mediator, on_created)   # async def on_created(ctx, event: OrderCreated) -> None

    order = await send(ctx, mediator, GetOrder("o-1"), Order)
    await send_event(ctx, mediator, OrderCreated("o-1"))
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from mp_mediator.application.mediator.introspection import (
    MISSING,
    resolve_behaviour,
    resolve_handler,
    resolve_listener,
)
from mp_mediator.application.mediator.pipeline import compose
from mp_mediator.application.mediator.registry import (
    BehaviourRegistration,
    HandlerRegistration,
    ListenerRegistration,
    Registry,
)
from mp_mediator.kernel.context import Context
from mp_mediator.kernel.errors import HandlerNotFoundError, ResponseTypeMismatchError
from mp_mediator.kernel.types import type_key, type_name, zero_value
from mp_mediator.observability.logging import logger


@runtime_checkable
class Mediator(Protocol):
    """Port: route requests to their handler and events to their listeners."""

    async def send(self, ctx: Context, request: Any, request_type: type, response_type: Any) -> Any: ...

    async def send_event(self, ctx: Context, event: Any, event_type: type) -> None: ...


class InProcessMediator:
    """Mediator backed by in-memory registries; one instance shares nothing with another."""

    def __init__(self) -> None:
        self._registry = Registry()

    @property
    def registry(self) -> Registry:
        return self._registry

    async def send(self, ctx: Context, request: Any, request_type: type, response_type: Any) -> Any:
        """Run *request* through the matching behaviours and its handler.

        Raises :class:`HandlerNotFoundError` or :class:`ResponseTypeMismatchError`
        before anything runs; errors raised by behaviours or the handler propagate
        unchanged.
        """
        log = logger(ctx)

        handler = self._registry.lookup_handler(request_type)
        if handler is None:
            log.error("no handler registered", request_type=type_name(request_type))
            raise HandlerNotFoundError(type_name(request_type))

        if handler.response_key != type_key(response_type):
            log.error(
                "wrong response type",
                request_type=type_name(request_type),
                response_type=type_name(response_type),
                expected=handler.response_key.name,
            )
            raise ResponseTypeMismatchError(
                type_name(request_type), type_name(response_type), handler.response_key.name
            )

        behaviours = self._registry.matching_behaviours(handler.request_type)
        return await compose(ctx, request, handler, behaviours)()

    async def send_event(self, ctx: Context, event: Any, event_type: type) -> None:
        """Invoke every listener for *event_type* in turn, stopping at the first error."""
        for listener in self._registry.listeners_for(event_type):
            await listener.invoke(ctx, event)


def new_mediator() -> InProcessMediator:
    return InProcessMediator()


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


def register_handler(
    mediator: InProcessMediator,
    handler: Any,
    *,
    request_type: Any = MISSING,
    response_type: Any = MISSING,
) -> HandlerRegistration:
    """Register *handler* as the handler for its request type, replacing any previous one.

    *handler* is an ``async def (ctx, request) -> response`` or a
    :class:`RequestHandler`. Types not passed explicitly are read from its
    generic arguments or annotations.
    """
    invoke, request_cls, response = resolve_handler(handler, request_type, response_type)
    registration = HandlerRegistration(request_type=request_cls, response_type=response, invoke=invoke)
    mediator.registry.register_handler(registration)
    return registration


def register_behaviour(
    mediator: InProcessMediator,
    behaviour: Any,
    *,
    applies_to: Any = MISSING,
) -> BehaviourRegistration:
    """Append *behaviour* to the pipeline of every request assignable to its target type."""
    invoke, target = resolve_behaviour(behaviour, applies_to)
    registration = BehaviourRegistration(applies_to=target, invoke=invoke)
    mediator.registry.register_behaviour(registration)
    return registration


def register_event_handler(
    mediator: InProcessMediator,
    listener: Any,
    *,
    event_type: Any = MISSING,
) -> ListenerRegistration:
    """Append *listener* to the listeners of its event type."""
    invoke, event_cls = resolve_listener(listener, event_type)
    registration = ListenerRegistration(event_type=event_cls, invoke=invoke)
    mediator.registry.register_event_handler(registration)
    return registration


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


async def send(ctx: Context, mediator: Mediator, request: Any, response_type: Any) -> Any:
    """Dispatch *request* and return its response.

    *response_type* must equal the type the handler was registered with.
    When the pipeline produces ``None`` the zero value of *response_type* is
    returned instead.
    """
    response = await mediator.send(ctx, request, type(request), response_type)
    if response is None:
        return zero_value(response_type)
    return response


async def send_event(ctx: Context, mediator: Mediator, event: Any, event_type: type | None = None) -> None:
    """Publish *event* to the listeners of *event_type* (defaults to ``type(event)``)."""
    await mediator.send_event(ctx, event, event_type if event_type is not None else type(event))


publish = send_event


__all__ = [
    "InProcessMediator",
    "Mediator",
    "new_mediator",
    "publish",
    "register_behaviour",
    "register_event_handler",
    "register_handler",
    "send",
    "send_event",
]
