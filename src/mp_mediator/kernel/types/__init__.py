"""Kernel types – type identity keys and matching rules."""
from mp_mediator.kernel.types.type_key import (
    NoneType,
    TypeKey,
    ensure_matchable,
    is_assignable,
    runtime_class,
    type_key,
    type_name,
    zero_value,
)

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
