"""Shared fixtures: ``mediator``, ``fake_mediator`` and ``background_context``."""
from mp_mediator.testing.fixtures import background_context, fake_mediator, mediator  # noqa: F401
