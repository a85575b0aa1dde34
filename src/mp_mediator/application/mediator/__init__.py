"""Application mediator – typed request routing, behaviour pipelines, event fan-out."""
from mp_mediator.application.mediator.handlers import Behaviour, EventHandler, Next, RequestHandler
from mp_mediator.application.mediator.registry import (
    BehaviourRegistration,
    HandlerRegistration,
    ListenerRegistration,
    Registry,
    routing_key,
)
from mp_mediator.application.mediator.pipeline import compose
from mp_mediator.application.mediator.mediator import (
    InProcessMediator,
    Mediator,
    new_mediator,
    publish,
    register_behaviour,
    register_event_handler,
    register_handler,
    send,
    send_event,
)
from mp_mediator.application.mediator.decorators import (
    behaviour,
    clear_registries,
    event_handler,
    make_mediator,
    request_handler,
)

__all__ = [
    "Behaviour",
    "BehaviourRegistration",
    "EventHandler",
    "HandlerRegistration",
    "InProcessMediator",
    "ListenerRegistration",
    "Mediator",
    "Next",
    "Registry",
    "RequestHandler",
    "behaviour",
    "clear_registries",
    "compose",
    "event_handler",
    "make_mediator",
    "new_mediator",
    "publish",
    "register_behaviour",
    "register_event_handler",
    "register_handler",
    "request_handler",
    "routing_key",
    "send",
    "send_event",
]
