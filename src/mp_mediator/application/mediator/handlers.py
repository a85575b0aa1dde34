"""Mediator – class-based RequestHandler, EventHandler and Behaviour.

Plain ``async def`` functions work everywhere these classes do; the classes
exist for handlers that carry dependencies. Their generic arguments declare
the routed types::

    class GetOrderHandler(RequestHandler[GetOrder, Order]):
        def __init__(self, repo: OrderRepository) -> None:
            self._repo = repo

        async def handle(self, ctx: Context, request: GetOrder) -> Order:
            return await self._repo.get(request.order_id)
"""
from __future__ import annotations

import abc
from typing import Any, Awaitable, Callable, Generic, TypeVar

from mp_mediator.kernel.context import Context

Req = TypeVar("Req")
Resp = TypeVar("Resp")
Evt = TypeVar("Evt")

Next = Callable[[], Awaitable[Any]]


class RequestHandler(abc.ABC, Generic[Req, Resp]):
    """Handle a single request type and return its response."""

    @abc.abstractmethod
    async def handle(self, ctx: Context, request: Req) -> Resp: ...


class EventHandler(abc.ABC, Generic[Evt]):
    """Listen for a single event type."""

    @abc.abstractmethod
    async def handle(self, ctx: Context, event: Evt) -> None: ...


class Behaviour(abc.ABC, Generic[Req]):
    """Middleware around the handler of every request assignable to ``Req``.

    Call ``await next_()`` to continue down the pipeline, or return without
    calling it to short-circuit.
    """

    @abc.abstractmethod
    async def __call__(self, ctx: Context, request: Req, next_: Next) -> Any: ...


__all__ = ["Behaviour", "EventHandler", "Next", "RequestHandler"]
