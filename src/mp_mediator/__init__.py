"""
mp_mediator – in-process mediator library.

Import path convention::

    from mp_mediator.application.mediator import new_mediator, register_handler, send
    from mp_mediator.kernel.context import Context
    from mp_mediator.kernel.errors import HandlerNotFoundError
    from mp_mediator.observability.logging import with_logger
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
