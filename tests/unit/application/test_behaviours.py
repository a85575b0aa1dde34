"""Unit tests for the built-in behaviours."""

from __future__ import annotations

import asyncio
import dataclasses
from typing import Any

import pytest

from mp_mediator.application.behaviours import (
    DeadlineBehaviour,
    LoggingBehaviour,
    TimeoutBehaviour,
    ValidationBehaviour,
)
from mp_mediator.application.mediator import new_mediator, register_behaviour, register_handler, send
from mp_mediator.kernel.context import Context, Deadline
from mp_mediator.kernel.errors import ContextCancelledError, DeadlineExceededError
from mp_mediator.observability.logging import with_logger


@dataclasses.dataclass
class PlaceBid:
    amount: int

    def validate(self) -> None:
        if self.amount <= 0:
            raise ValueError("amount must be positive")


@dataclasses.dataclass
class Sleep:
    seconds: float


class Upstream:
    pass


class RecordingLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def _log(self, level: str, event: str, **kw: Any) -> None:
        self.records.append((level, event, kw))

    def debug(self, event: str, **kw: Any) -> None:
        self._log("debug", event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._log("info", event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._log("warning", event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self._log("error", event, **kw)


async def place_bid(ctx: Context, request: PlaceBid) -> str:
    return f"bid:{request.amount}"


async def sleep(ctx: Context, request: Sleep) -> str:
    await asyncio.sleep(request.seconds)
    return "woke"


def _mediator(*behaviours: Any) -> Any:
    m = new_mediator()
    register_handler(m, place_bid)
    register_handler(m, sleep)
    for b in behaviours:
        register_behaviour(m, b)
    return m


class TestBuiltinsApplyToEveryRequest:
    @pytest.mark.parametrize(
        "behaviour",
        [LoggingBehaviour(), ValidationBehaviour(), DeadlineBehaviour(), TimeoutBehaviour(1.0)],
    )
    def test_applies_to_object(self, behaviour: Any) -> None:
        assert register_behaviour(new_mediator(), behaviour).applies_to is object


class TestLoggingBehaviour:
    def test_logs_completion(self) -> None:
        log = RecordingLogger()
        ctx = with_logger(Context.background(), log)

        assert asyncio.run(send(ctx, _mediator(LoggingBehaviour()), PlaceBid(5), str)) == "bid:5"
        [(level, event, fields)] = log.records
        assert (level, event) == ("info", "request.completed")
        assert fields["request"] == "PlaceBid"
        assert fields["duration_ms"] >= 0

    def test_logs_failure_and_reraises(self) -> None:
        log = RecordingLogger()
        ctx = with_logger(Context.background(), log)
        m = _mediator(LoggingBehaviour(), ValidationBehaviour())

        with pytest.raises(ValueError):
            asyncio.run(send(ctx, m, PlaceBid(0), str))
        [(level, event, fields)] = log.records
        assert (level, event) == ("error", "request.failed")
        assert "amount must be positive" in fields["error"]


class TestValidationBehaviour:
    def test_valid_request_passes(self) -> None:
        m = _mediator(ValidationBehaviour())
        assert asyncio.run(send(Context.background(), m, PlaceBid(10), str)) == "bid:10"

    def test_invalid_request_short_circuits(self) -> None:
        m = _mediator(ValidationBehaviour())
        with pytest.raises(ValueError, match="positive"):
            asyncio.run(send(Context.background(), m, PlaceBid(-1), str))

    def test_request_without_validate_passes(self) -> None:
        m = _mediator(ValidationBehaviour())
        assert asyncio.run(send(Context.background(), m, Sleep(0), str)) == "woke"


class TestDeadlineBehaviour:
    def test_live_context_passes(self) -> None:
        m = _mediator(DeadlineBehaviour())
        ctx = Context.background().with_timeout(5.0)
        assert asyncio.run(send(ctx, m, PlaceBid(1), str)) == "bid:1"

    def test_cancelled_context_stops_pipeline(self) -> None:
        m = _mediator(DeadlineBehaviour())
        ctx = Context.background().with_cancel()
        ctx.cancel()
        with pytest.raises(ContextCancelledError):
            asyncio.run(send(ctx, m, PlaceBid(1), str))

    def test_expired_deadline_stops_pipeline(self) -> None:
        m = _mediator(DeadlineBehaviour())
        ctx = Context.background().with_deadline(Deadline.after(-1.0))
        with pytest.raises(DeadlineExceededError):
            asyncio.run(send(ctx, m, PlaceBid(1), str))


class TestTimeoutBehaviour:
    def test_fast_request_completes(self) -> None:
        m = _mediator(TimeoutBehaviour(1.0))
        assert asyncio.run(send(Context.background(), m, Sleep(0), str)) == "woke"

    def test_slow_request_times_out(self) -> None:
        m = _mediator(TimeoutBehaviour(0.01))
        with pytest.raises(DeadlineExceededError, match="Sleep"):
            asyncio.run(send(Context.background(), m, Sleep(1.0), str))

    def test_handler_timeout_error_is_not_converted(self) -> None:
        m = new_mediator()

        async def call_upstream(ctx: Context, request: Upstream) -> str:
            raise TimeoutError("upstream")

        register_handler(m, call_upstream)
        register_behaviour(m, TimeoutBehaviour(5.0))
        with pytest.raises(TimeoutError, match="upstream") as exc_info:
            asyncio.run(send(Context.background(), m, Upstream(), str))
        assert not isinstance(exc_info.value, DeadlineExceededError)

    def test_context_deadline_tightens_timeout(self) -> None:
        m = _mediator(TimeoutBehaviour(10.0))
        ctx = Context.background().with_timeout(0.01)
        with pytest.raises(DeadlineExceededError):
            asyncio.run(send(ctx, m, Sleep(1.0), str))
