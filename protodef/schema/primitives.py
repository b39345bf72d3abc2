"""Primitive type keywords."""

from .errors import UnknownPrimitive
from .types import Primitive

PRIMITIVE_TYPES = frozenset(p.value for p in Primitive)


def is_primitive(value: object) -> bool:
    """Check if a value is one of the primitive keywords."""
    return isinstance(value, str) and value in PRIMITIVE_TYPES


def decode_primitive(value: object) -> Primitive:
    """Return the primitive for ``bool``, ``cstring`` or ``void``."""
    if not is_primitive(value):
        raise UnknownPrimitive(value)
    return Primitive(value)
