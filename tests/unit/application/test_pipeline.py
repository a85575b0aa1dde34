"""Unit tests for pipeline composition."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from mp_mediator.application.mediator import (
    BehaviourRegistration,
    HandlerRegistration,
    Next,
    compose,
)
from mp_mediator.kernel.context import Context


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_handler(record: list[str], result: Any = "handled") -> HandlerRegistration:
    async def invoke(ctx: Context, request: Any) -> Any:
        record.append("handler")
        return result

    return HandlerRegistration(request_type=str, response_type=str, invoke=invoke)


def make_recording_behaviour(name: str, record: list[str]) -> BehaviourRegistration:
    async def invoke(ctx: Context, request: Any, next_: Next) -> Any:
        record.append(f"{name}:before")
        result = await next_()
        record.append(f"{name}:after")
        return result

    return BehaviourRegistration(applies_to=object, invoke=invoke)


CTX = Context.background()


# ---------------------------------------------------------------------------
# compose
# ---------------------------------------------------------------------------


class TestCompose:
    def test_no_behaviours_calls_handler(self) -> None:
        record: list[str] = []
        chain = compose(CTX, "x", make_handler(record), [])
        assert asyncio.run(chain()) == "handled"
        assert record == ["handler"]

    def test_composition_runs_nothing_until_invoked(self) -> None:
        record: list[str] = []
        compose(CTX, "x", make_handler(record), [make_recording_behaviour("A", record)])
        assert record == []

    def test_first_registered_is_outermost(self) -> None:
        record: list[str] = []
        behaviours = [make_recording_behaviour(n, record) for n in ("A", "B", "C")]

        asyncio.run(compose(CTX, "x", make_handler(record), behaviours)())
        assert record == [
            "A:before", "B:before", "C:before",
            "handler",
            "C:after", "B:after", "A:after",
        ]

    def test_context_and_request_reach_every_step(self) -> None:
        seen: list[tuple[Any, Any]] = []
        ctx = CTX.with_value("k", "v")

        async def handler(c: Context, request: Any) -> Any:
            seen.append((c.value("k"), request))
            return None

        async def behaviour(c: Context, request: Any, next_: Next) -> Any:
            seen.append((c.value("k"), request))
            return await next_()

        chain = compose(
            ctx,
            "req",
            HandlerRegistration(str, str, handler),
            [BehaviourRegistration(object, behaviour)],
        )
        asyncio.run(chain())
        assert seen == [("v", "req"), ("v", "req")]

    def test_each_step_keeps_its_own_behaviour(self) -> None:
        record: list[str] = []
        behaviours = [make_recording_behaviour(str(i), record) for i in range(5)]
        asyncio.run(compose(CTX, "x", make_handler(record), behaviours)())
        befores = [r for r in record if r.endswith(":before")]
        assert befores == [f"{i}:before" for i in range(5)]

    def test_exception_propagates_through_outer_behaviours(self) -> None:
        record: list[str] = []

        async def failing(ctx: Context, request: Any) -> Any:
            raise ValueError("boom")

        chain = compose(
            CTX,
            "x",
            HandlerRegistration(str, str, failing),
            [make_recording_behaviour("A", record)],
        )
        with pytest.raises(ValueError, match="boom"):
            asyncio.run(chain())
        assert record == ["A:before"]

    def test_chain_can_be_invoked_again(self) -> None:
        record: list[str] = []
        chain = compose(CTX, "x", make_handler(record), [make_recording_behaviour("A", record)])

        async def twice() -> None:
            await chain()
            await chain()

        asyncio.run(twice())
        assert record.count("handler") == 2
