"""Mediator – @request_handler, @behaviour and @event_handler auto-registration.

The decorators record handlers in module-level catalogs at import time;
:func:`make_mediator` builds an :class:`InProcessMediator` from them::

    @request_handler
    async def get_order(ctx: Context, request: GetOrder) -> Order:
        ...

    @event_handler
    class AuditOrderCreated(EventHandler[OrderCreated]):
        async def handle(self, ctx: Context, event: OrderCreated) -> None:
            ...

    mediator = make_mediator()

Decorated classes are instantiated with no arguments when the mediator is
built. Catalog order is registration order, so behaviours run in the order
their modules were imported.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, Iterable

from mp_mediator.application.mediator.introspection import MISSING
from mp_mediator.application.mediator.mediator import (
    InProcessMediator,
    new_mediator,
    register_behaviour,
    register_event_handler,
    register_handler,
)


@dataclasses.dataclass(frozen=True)
class _Entry:
    target: Any
    options: dict[str, Any]

    def instance(self) -> Any:
        return self.target() if isinstance(self.target, type) else self.target


_HANDLER_CATALOG: list[_Entry] = []
_BEHAVIOUR_CATALOG: list[_Entry] = []
_EVENT_HANDLER_CATALOG: list[_Entry] = []


def _cataloguing(catalog: list[_Entry], target: Any, options: dict[str, Any]) -> Any:
    options = {k: v for k, v in options.items() if v is not MISSING}

    def decorator(obj: Any) -> Any:
        catalog.append(_Entry(obj, options))
        return obj

    if target is not None:
        return decorator(target)
    return decorator


def request_handler(
    handler: Any = None,
    *,
    request_type: Any = MISSING,
    response_type: Any = MISSING,
) -> Any:
    """Record a request handler function or :class:`RequestHandler` subclass.

    Usable bare (``@request_handler``) or with explicit types
    (``@request_handler(request_type=GetOrder, response_type=Order)``).
    """
    return _cataloguing(
        _HANDLER_CATALOG, handler, {"request_type": request_type, "response_type": response_type}
    )


def behaviour(target: Any = None, *, applies_to: Any = MISSING) -> Any:
    """Record a behaviour function or :class:`Behaviour` subclass."""
    return _cataloguing(_BEHAVIOUR_CATALOG, target, {"applies_to": applies_to})


def event_handler(listener: Any = None, *, event_type: Any = MISSING) -> Any:
    """Record an event listener function or :class:`EventHandler` subclass."""
    return _cataloguing(_EVENT_HANDLER_CATALOG, listener, {"event_type": event_type})


def make_mediator(extra: Iterable[Any] = ()) -> InProcessMediator:
    """Build an :class:`InProcessMediator` from the catalogs.

    *extra* handlers are registered after the catalogued handlers, so they
    replace catalogued handlers for the same request type. Useful in tests.
    """
    mediator = new_mediator()
    steps: list[tuple[Callable[..., Any], list[_Entry]]] = [
        (register_handler, _HANDLER_CATALOG),
        (register_behaviour, _BEHAVIOUR_CATALOG),
        (register_event_handler, _EVENT_HANDLER_CATALOG),
    ]
    for register, catalog in steps:
        for entry in catalog:
            register(mediator, entry.instance(), **entry.options)
    for handler in extra:
        register_handler(mediator, handler)
    return mediator


def clear_registries() -> None:
    """Empty all catalogs. Use in tests to avoid inter-test leakage.

    .. warning::
        This mutates module-level state.  Only call in tests.
    """
    _HANDLER_CATALOG.clear()
    _BEHAVIOUR_CATALOG.clear()
    _EVENT_HANDLER_CATALOG.clear()


__all__ = [
    "behaviour",
    "clear_registries",
    "event_handler",
    "make_mediator",
    "request_handler",
]
