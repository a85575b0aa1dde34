"""Testing fakes – in-memory doubles for the Mediator port."""
from mp_mediator.testing.fakes.mediator import FakeMediator, PublishedEvent, SentRequest

__all__ = ["FakeMediator", "PublishedEvent", "SentRequest"]
