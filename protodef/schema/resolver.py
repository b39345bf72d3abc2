"""Resolution of type positions into data types.

A type position holds either a plain string or a ``[tag, payload]`` pair. The
same JSON shape can belong to several decoders, so resolution tries them in a
fixed order and takes the first that matches:

1. conditional - ``switch`` and ``option`` pairs
2. numeric - numeric codes such as ``varint``
3. primitive - ``bool``, ``cstring`` and ``void``
4. structure - ``container``, ``array`` and ``count`` pairs
5. utility - ``buffer``, ``mapper``, ``bitfield`` and ``pstring`` pairs
6. named - any other string, kept as an opaque reference
7. legacy - any other pair, tried as a switch without its tag, then as a loop

A step only falls through when the value is not its shape. Once a canonical tag
matches, errors from its decoder propagate.
"""

from collections.abc import Callable
from typing import Any

from .conditional import CONDITIONAL_TAGS, decode_conditional, decode_legacy_switch, is_legacy_switch
from .errors import MalformedShape, UnknownNumericCode, UnknownPrimitive, UnknownTypeTag
from .numeric import decode_numeric
from .primitives import decode_primitive
from .structure import STRUCTURE_TAGS, decode_structure
from .types import DataType, Named
from .utility import UTILITY_TAGS, decode_legacy_loop, decode_utility, is_legacy_loop

KNOWN_TAGS = CONDITIONAL_TAGS + STRUCTURE_TAGS + UTILITY_TAGS


def _tagged(value: Any) -> tuple[str, Any] | None:
    if isinstance(value, list):
        tag, payload = value
        return tag, payload
    return None


def _conditional(value: Any) -> DataType | None:
    tagged = _tagged(value)
    if tagged is None or tagged[0] not in CONDITIONAL_TAGS:
        return None
    return decode_conditional(*tagged, resolve)


def _numeric(value: Any) -> DataType | None:
    try:
        return decode_numeric(value)
    except UnknownNumericCode:
        return None


def _primitive(value: Any) -> DataType | None:
    try:
        return decode_primitive(value)
    except UnknownPrimitive:
        return None


def _structure(value: Any) -> DataType | None:
    tagged = _tagged(value)
    if tagged is None or tagged[0] not in STRUCTURE_TAGS:
        return None
    return decode_structure(*tagged, resolve)


def _utility(value: Any) -> DataType | None:
    tagged = _tagged(value)
    if tagged is None or tagged[0] not in UTILITY_TAGS:
        return None
    return decode_utility(*tagged, resolve)


def _named(value: Any) -> DataType | None:
    return Named(value) if isinstance(value, str) else None


def _legacy(value: Any) -> DataType | None:
    tagged = _tagged(value)
    if tagged is None:
        return None

    tag, payload = tagged
    if is_legacy_switch(payload):
        return decode_legacy_switch(tag, payload)
    if is_legacy_loop(payload):
        return decode_legacy_loop(tag, payload, resolve)
    raise UnknownTypeTag(tag, KNOWN_TAGS)


_STEPS: tuple[tuple[str, Callable[[Any], DataType | None]], ...] = (
    ("conditional", _conditional),
    ("numeric", _numeric),
    ("primitive", _primitive),
    ("structure", _structure),
    ("utility", _utility),
    ("named", _named),
    ("legacy", _legacy),
)

RESOLUTION_ORDER = tuple(name for name, _ in _STEPS)


def _check_shape(value: Any) -> None:
    if isinstance(value, str):
        return
    if not isinstance(value, list):
        raise MalformedShape(
            f"A type must be a string or a [tag, payload] pair, got {type(value).__name__}"
        )
    if len(value) != 2:
        raise MalformedShape(f"A tagged type must have 2 elements, got {len(value)}")
    if not isinstance(value[0], str):
        raise MalformedShape(f"A type tag must be a string, got {type(value[0]).__name__}")


def resolve(value: Any) -> DataType:
    """Resolve a JSON value in a type position into a data type."""
    _check_shape(value)
    for _name, step in _STEPS:
        result = step(value)
        if result is not None:
            return result
    # The named and legacy steps accept every value that passes the shape check
    raise MalformedShape(f"Cannot resolve {value!r}")
