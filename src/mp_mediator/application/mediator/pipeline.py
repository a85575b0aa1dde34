"""Mediator – pipeline composition.

The handler is the innermost step. Behaviours are folded around it from the
last registered to the first, so the first registered behaviour is outermost:
pre-``next_()`` code runs in registration order, post-``next_()`` code in
reverse registration order.
"""
from __future__ import annotations

from typing import Any, Sequence

from mp_mediator.application.mediator.handlers import Next
from mp_mediator.application.mediator.registry import BehaviourRegistration, HandlerRegistration
from mp_mediator.kernel.context import Context


def compose(
    ctx: Context,
    request: Any,
    handler: HandlerRegistration,
    behaviours: Sequence[BehaviourRegistration],
) -> Next:
    """Build the continuation that runs *behaviours* around *handler* for *request*."""

    async def invoke_handler() -> Any:
        return await handler.invoke(ctx, request)

    chain: Next = invoke_handler
    for behaviour in reversed(behaviours):
        chain = _wrap(ctx, request, behaviour, chain)
    return chain


def _wrap(ctx: Context, request: Any, behaviour: BehaviourRegistration, next_: Next) -> Next:
    # a separate function so each step closes over its own behaviour and next_
    async def step() -> Any:
        return await behaviour.invoke(ctx, request, next_)

    return step


__all__ = ["compose"]
