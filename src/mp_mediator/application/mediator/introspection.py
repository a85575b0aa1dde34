"""Mediator – resolve routed types from handler callables.

Types are taken, in order of precedence, from explicit keyword arguments,
from the generic arguments of a class-based handler
(``RequestHandler[GetOrder, Order]``), and finally from the annotations of the
callable: the second positional parameter is the routed type and the return
annotation is the response type.
"""
from __future__ import annotations

import inspect
import typing
from typing import Any, Callable, TypeVar, get_args, get_origin

from mp_mediator.application.mediator.handlers import Behaviour, EventHandler, RequestHandler
from mp_mediator.kernel.errors import RegistrationError
from mp_mediator.kernel.types import ensure_matchable, runtime_class


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def generic_arguments(obj: Any, base: type) -> tuple[Any, ...]:
    """Arguments *obj*'s class passed to the generic *base*; unbound TypeVars become ``MISSING``."""
    for cls in type(obj).__mro__:
        for orig in cls.__dict__.get("__orig_bases__", ()):
            if get_origin(orig) is base:
                return tuple(MISSING if isinstance(arg, TypeVar) else arg for arg in get_args(orig))
    return ()


def _nth(args: tuple[Any, ...], index: int) -> Any:
    return args[index] if len(args) > index else MISSING


def _call_target(fn: Any) -> Any:
    if inspect.isroutine(fn):
        return fn
    return getattr(fn, "__call__", fn)


def ensure_coroutine(fn: Any, role: str) -> None:
    if not callable(fn):
        raise RegistrationError(f"{role} {fn!r} is not callable")
    if not (inspect.iscoroutinefunction(fn) or inspect.iscoroutinefunction(_call_target(fn))):
        raise RegistrationError(f"{role} {fn!r} must be an async callable")


def signature_hints(fn: Callable[..., Any]) -> tuple[Any, Any]:
    """``(routed parameter annotation, return annotation)``, ``MISSING`` where absent."""
    target = _call_target(fn)
    try:
        hints = typing.get_type_hints(target)
        parameters = inspect.signature(target).parameters.values()
    except NameError as exc:
        raise RegistrationError(f"cannot resolve annotations of {fn!r}: {exc}", cause=exc) from exc
    except (TypeError, ValueError):
        # not introspectable (builtins, partials): types must be passed explicitly
        return MISSING, MISSING

    positional = [
        p for p in parameters
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    subject = hints.get(positional[1].name, MISSING) if len(positional) > 1 else MISSING
    response = hints.get("return", MISSING)
    # inherited annotations such as ``request: Req`` carry no routing information
    if isinstance(subject, TypeVar):
        subject = MISSING
    if isinstance(response, TypeVar):
        response = MISSING
    return subject, response


def resolve_handler(handler: Any, request_type: Any, response_type: Any) -> tuple[Callable[..., Any], type, Any]:
    """Return ``(invoke, request_class, response_type)`` for a request handler."""
    if isinstance(handler, RequestHandler):
        invoke: Callable[..., Any] = handler.handle
        generic = generic_arguments(handler, RequestHandler)
    else:
        invoke, generic = handler, ()
    ensure_coroutine(invoke, "request handler")

    if request_type is MISSING:
        request_type = _nth(generic, 0)
    if response_type is MISSING:
        response_type = _nth(generic, 1)
    if request_type is MISSING or response_type is MISSING:
        hinted_request, hinted_response = signature_hints(invoke)
        if request_type is MISSING:
            request_type = hinted_request
        if response_type is MISSING:
            response_type = hinted_response

    if request_type is MISSING:
        raise RegistrationError(
            f"cannot determine the request type of {handler!r}; annotate the request parameter "
            "or pass request_type="
        )
    if response_type is MISSING:
        raise RegistrationError(
            f"cannot determine the response type of {handler!r}; annotate the return type "
            "or pass response_type="
        )
    return invoke, runtime_class(request_type), response_type


def resolve_behaviour(behaviour: Any, applies_to: Any) -> tuple[Callable[..., Any], Any]:
    """Return ``(invoke, applies_to)``; behaviours with no resolvable target apply to ``object``."""
    ensure_coroutine(behaviour, "behaviour")

    if applies_to is MISSING and isinstance(behaviour, Behaviour):
        applies_to = _nth(generic_arguments(behaviour, Behaviour), 0)
    if applies_to is MISSING:
        applies_to, _ = signature_hints(behaviour)
    if applies_to is MISSING:
        applies_to = object

    ensure_matchable(applies_to)
    return behaviour, applies_to


def resolve_listener(listener: Any, event_type: Any) -> tuple[Callable[..., Any], type]:
    """Return ``(invoke, event_class)`` for an event listener."""
    if isinstance(listener, EventHandler):
        invoke: Callable[..., Any] = listener.handle
        generic = generic_arguments(listener, EventHandler)
    else:
        invoke, generic = listener, ()
    ensure_coroutine(invoke, "event handler")

    if event_type is MISSING:
        event_type = _nth(generic, 0)
    if event_type is MISSING:
        event_type, _ = signature_hints(invoke)
    if event_type is MISSING:
        raise RegistrationError(
            f"cannot determine the event type of {listener!r}; annotate the event parameter "
            "or pass event_type="
        )
    return invoke, runtime_class(event_type)


__all__ = [
    "MISSING",
    "ensure_coroutine",
    "generic_arguments",
    "resolve_behaviour",
    "resolve_handler",
    "resolve_listener",
    "signature_hints",
]
