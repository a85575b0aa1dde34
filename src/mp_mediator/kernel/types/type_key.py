"""Kernel types – TypeKey and the type-matching rules used by the registries.

A :class:`TypeKey` is a hashable, normalised identity for a type expression.
Different spellings of the same type resolve to equal keys::

    type_key(list[int]) == type_key(typing.List[int])
    type_key(int | None) == type_key(typing.Optional[int])
    type_key(None) == type_key(type(None))
"""
from __future__ import annotations

import dataclasses
import types
from typing import Annotated, Any, Union, get_args, get_origin

from mp_mediator.kernel.errors import RegistrationError

NoneType = type(None)

_UNION_ORIGINS: frozenset[Any] = frozenset({Union, types.UnionType})

_ZERO_FACTORIES: dict[Any, Any] = {
    bool: bool,
    int: int,
    float: float,
    complex: complex,
    str: str,
    bytes: bytes,
    list: list,
    dict: dict,
    set: set,
    frozenset: frozenset,
    tuple: tuple,
}


@dataclasses.dataclass(frozen=True)
class TypeKey:
    """Normalised ``(origin, args)`` identity of a type expression."""

    origin: Any
    args: tuple["TypeKey", ...] = ()

    @property
    def name(self) -> str:
        if self.origin is Union:
            return " | ".join(arg.name for arg in self.args)
        if self.origin is NoneType:
            return "None"
        base = getattr(self.origin, "__qualname__", None) or getattr(self.origin, "__name__", None)
        if base is None:
            base = repr(self.origin)
        if self.args:
            return f"{base}[{', '.join(arg.name for arg in self.args)}]"
        return base

    def __str__(self) -> str:
        return self.name


def _sort_token(key: TypeKey) -> tuple[str, str]:
    return (getattr(key.origin, "__module__", "") or "", key.name)


def type_key(tp: Any) -> TypeKey:
    """Resolve *tp* to its :class:`TypeKey`. Pure and total."""
    if isinstance(tp, TypeKey):
        return tp
    if tp is None or tp is NoneType:
        return TypeKey(NoneType)
    if isinstance(tp, list):
        # Callable[[A, B], R] carries its parameters as a plain list
        return TypeKey(list, tuple(type_key(arg) for arg in tp))

    origin = get_origin(tp)
    if origin is None:
        return TypeKey(tp)
    if origin is Annotated:
        return type_key(get_args(tp)[0])
    if origin in _UNION_ORIGINS:
        members = {type_key(arg) for arg in get_args(tp)}
        return TypeKey(Union, tuple(sorted(members, key=_sort_token)))
    return TypeKey(origin, tuple(type_key(arg) for arg in get_args(tp)))


def type_name(tp: Any) -> str:
    """Human-readable name of *tp* for diagnostics."""
    return type_key(tp).name


def runtime_class(tp: Any) -> type:
    """Return the class that ``type(value)`` yields for values of *tp*.

    Requests and events are routed on the class of the dispatched value, so
    parameterised generics collapse to their origin (``list[int]`` -> ``list``).
    """
    if tp is None:
        return NoneType
    if tp is Any:
        raise RegistrationError("Any cannot be used as a routing key")
    origin = get_origin(tp)
    if origin is Annotated:
        return runtime_class(get_args(tp)[0])
    if origin in _UNION_ORIGINS:
        raise RegistrationError(f"a union ({type_name(tp)}) cannot be used as a routing key")
    if origin is not None:
        tp = origin
    if not isinstance(tp, type):
        raise RegistrationError(f"{tp!r} is not a concrete class and cannot be used as a routing key")
    return tp


def ensure_matchable(target: Any) -> None:
    """Reject behaviour targets that cannot be checked against a class at runtime."""
    if target is Any or target is object or target is None:
        return
    origin = get_origin(target)
    if origin is Annotated:
        ensure_matchable(get_args(target)[0])
        return
    if origin in _UNION_ORIGINS:
        for arg in get_args(target):
            ensure_matchable(arg)
        return
    if origin is not None:
        target = origin
    if not isinstance(target, type):
        raise RegistrationError(f"cannot match requests against {target!r}")
    try:
        issubclass(object, target)
    except TypeError as exc:
        raise RegistrationError(
            f"cannot match requests against {type_name(target)}: {exc}", cause=exc
        ) from exc


def is_assignable(cls: type, target: Any) -> bool:
    """Return ``True`` if instances of *cls* may be used where *target* is expected.

    *target* may be a class, ABC, ``@runtime_checkable`` Protocol, parameterised
    generic (checked on its origin), union, ``object`` or ``typing.Any``.
    """
    if target is Any or target is object:
        return True
    if target is None:
        return cls is NoneType
    origin = get_origin(target)
    if origin is Annotated:
        return is_assignable(cls, get_args(target)[0])
    if origin in _UNION_ORIGINS:
        return any(is_assignable(cls, arg) for arg in get_args(target))
    if origin is not None:
        target = origin
    return isinstance(target, type) and issubclass(cls, target)


def zero_value(tp: Any) -> Any:
    """Default value returned in place of an absent response of type *tp*.

    Builtin scalars and containers yield their empty value (``0``, ``""``,
    ``[]`` ...); every other type, ``Optional[...]`` included, yields ``None``.
    """
    origin = get_origin(tp)
    if origin is Annotated:
        return zero_value(get_args(tp)[0])
    factory = _ZERO_FACTORIES.get(origin if origin is not None else tp)
    return factory() if factory is not None else None


__all__ = [
    "NoneType",
    "TypeKey",
    "ensure_matchable",
    "is_assignable",
    "runtime_class",
    "type_key",
    "type_name",
    "zero_value",
]
