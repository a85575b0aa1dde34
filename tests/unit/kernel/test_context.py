"""Unit tests for Context and Deadline."""

from __future__ import annotations

import asyncio
import threading
from datetime import UTC, datetime, timedelta

import pytest

from mp_mediator.kernel.context import Context, Deadline
from mp_mediator.kernel.errors import ContextCancelledError, ContextError, DeadlineExceededError


class TestDeadline:
    def test_after_is_in_the_future(self) -> None:
        dl = Deadline.after(60)
        assert not dl.is_expired
        assert 0 < dl.remaining_seconds <= 60

    def test_past_deadline_is_expired(self) -> None:
        dl = Deadline(expires_at=datetime.now(UTC) - timedelta(seconds=1))
        assert dl.is_expired
        assert dl.remaining_seconds == 0.0
        with pytest.raises(DeadlineExceededError):
            dl.raise_if_expired()

    def test_ordering(self) -> None:
        early, late = Deadline.after(1), Deadline.after(100)
        assert early < late


class TestValues:
    def test_background_is_empty(self) -> None:
        ctx = Context.background()
        assert ctx.value("missing") is None
        assert ctx.value("missing", "fallback") == "fallback"
        assert ctx.deadline is None
        assert not ctx.done

    def test_default_construction_is_empty(self) -> None:
        ctx = Context()
        assert ctx.value("missing") is None
        assert ctx.deadline is None
        assert not ctx.done
        assert Context().with_value("k", 1).value("k") == 1
        assert ctx.value("k") is None

    def test_background_is_shared(self) -> None:
        assert Context.background() is Context.background()

    def test_with_value_returns_child(self) -> None:
        parent = Context.background()
        child = parent.with_value("tenant", "t-1")
        assert child.value("tenant") == "t-1"
        assert parent.value("tenant") is None

    def test_child_shadows_parent_value(self) -> None:
        ctx = Context.background().with_value("k", 1).with_value("k", 2)
        assert ctx.value("k") == 2

    def test_values_are_read_only(self) -> None:
        ctx = Context.background().with_value("k", 1)
        with pytest.raises(TypeError):
            ctx._values["k"] = 2  # type: ignore[index]  # noqa: SLF001


class TestDeadlines:
    def test_with_timeout_sets_deadline(self) -> None:
        ctx = Context.background().with_timeout(30)
        assert ctx.deadline is not None
        assert not ctx.done

    def test_child_keeps_earliest_deadline(self) -> None:
        early = Deadline.after(1)
        ctx = Context.background().with_deadline(early).with_timeout(100)
        assert ctx.deadline is early

    def test_child_can_tighten_deadline(self) -> None:
        tight = Deadline.after(1)
        ctx = Context.background().with_timeout(100).with_deadline(tight)
        assert ctx.deadline is tight

    def test_expired_deadline_is_done(self) -> None:
        ctx = Context.background().with_deadline(Deadline.after(-1))
        assert ctx.done
        with pytest.raises(DeadlineExceededError):
            ctx.raise_if_done()

    def test_values_survive_deadline(self) -> None:
        ctx = Context.background().with_value("k", "v").with_timeout(10)
        assert ctx.value("k") == "v"


class TestCancellation:
    def test_cancel_marks_done(self) -> None:
        ctx = Context.background().with_cancel()
        assert not ctx.cancelled
        ctx.cancel()
        assert ctx.cancelled
        assert ctx.done
        with pytest.raises(ContextCancelledError):
            ctx.raise_if_done()

    def test_cancellation_reaches_descendants(self) -> None:
        parent = Context.background().with_cancel()
        child = parent.with_value("k", 1).with_timeout(60)
        parent.cancel()
        assert child.cancelled

    def test_child_cancel_does_not_affect_parent(self) -> None:
        parent = Context.background().with_cancel()
        child = parent.with_cancel()
        child.cancel()
        assert child.cancelled
        assert not parent.cancelled

    def test_background_cannot_be_cancelled(self) -> None:
        with pytest.raises(ContextError):
            Context.background().cancel()

    def test_derived_value_context_cannot_cancel_parent_scope(self) -> None:
        ctx = Context.background().with_cancel().with_value("k", 1)
        with pytest.raises(ContextError):
            ctx.cancel()

    def test_cancel_from_another_thread(self) -> None:
        ctx = Context.background().with_cancel()
        worker = threading.Thread(target=ctx.cancel)
        worker.start()
        worker.join()
        assert ctx.cancelled

    def test_cancel_observed_inside_coroutine(self) -> None:
        ctx = Context.background().with_cancel()

        async def body() -> bool:
            ctx.cancel()
            await asyncio.sleep(0)
            return ctx.done

        assert asyncio.run(body()) is True
