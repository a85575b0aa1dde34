"""Dispatch-time and registration-time errors raised by the mediator itself.

Errors raised by handler, behaviour or listener bodies are never wrapped in
these types; they reach the caller of ``send`` / ``send_event`` unchanged.
"""

from __future__ import annotations

from typing import Any

from mp_mediator.kernel.errors.base import BaseError


class MediatorError(BaseError):
    """A request or event could not be routed."""

    default_code = "mediator_error"


class HandlerNotFoundError(MediatorError):
    """No handler is registered for the request's runtime type."""

    default_code = "handler_not_found"

    def __init__(self, request_type: str, **kwargs: Any) -> None:
        super().__init__(
            f"no handler registered for request type {request_type}",
            detail={"request_type": request_type},
            **kwargs,
        )
        self.request_type = request_type


class ResponseTypeMismatchError(MediatorError):
    """The caller expected a different response type than the handler declares."""

    default_code = "response_type_mismatch"

    def __init__(
        self,
        request_type: str,
        response_type: str,
        expected_response_type: str,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"wrong response type {response_type} was used for request {request_type}, "
            f"expected response type {expected_response_type}",
            detail={
                "request_type": request_type,
                "response_type": response_type,
                "expected_response_type": expected_response_type,
            },
            **kwargs,
        )
        self.request_type = request_type
        self.response_type = response_type
        self.expected_response_type = expected_response_type


class RegistrationError(MediatorError):
    """A handler, behaviour or listener cannot be registered as given."""

    default_code = "registration_error"


__all__ = [
    "HandlerNotFoundError",
    "MediatorError",
    "RegistrationError",
    "ResponseTypeMismatchError",
]
