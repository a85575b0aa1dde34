"""Testing fixtures – pytest fixtures for mediator-based tests.

Enable with ``pytest_plugins = ["mp_mediator.testing.fixtures"]`` in a conftest.
"""
from __future__ import annotations

import pytest

from mp_mediator.application.mediator import InProcessMediator, new_mediator
from mp_mediator.kernel.context import Context
from mp_mediator.testing.fakes import FakeMediator


@pytest.fixture
def mediator() -> InProcessMediator:
    return new_mediator()


@pytest.fixture
def fake_mediator() -> FakeMediator:
    return FakeMediator()


@pytest.fixture
def background_context() -> Context:
    return Context.background()


__all__ = ["background_context", "fake_mediator", "mediator"]
