"""Decoding of utility types: buffers, mappers, bitfields, prefixed strings and loops."""

import logging
from typing import Any

from .errors import MalformedShape, SchemaError, UnknownVariant
from .payload import (
    U32_MAX,
    Resolver,
    expect_list,
    expect_mapping,
    expect_str,
    is_unsigned,
    optional_bool,
    optional_count,
    optional_type,
    required,
    required_type,
)
from .types import Bitfield, BitField, Buffer, Loop, Mapper, PrefixedString

logger = logging.getLogger(__name__)

UTILITY_TAGS = ("buffer", "mapper", "bitfield", "pstring")


def decode_buffer(resolve: Resolver, payload: Any) -> Buffer:
    payload = expect_mapping("buffer", payload)
    return Buffer(
        count_type=optional_type(resolve, payload, "countType"),
        count=optional_count(payload),
        rest=optional_bool(payload, "rest"),
    )


def decode_mapper(payload: Any) -> Mapper:
    payload = expect_mapping("mapper", payload)
    mappings_type = expect_str("type", required(payload, "type"))
    raw = expect_mapping("mappings", required(payload, "mappings"))

    mappings: dict[str, str] = {}
    for value, name in raw.items():
        mappings[value] = expect_str(f"mapping {value}", name)

    return Mapper(mappings_type=mappings_type, mappings=mappings)


def decode_bit_field(index: int, value: Any) -> BitField:
    try:
        record = expect_mapping("bitfield member", value)
        name = expect_str("name", required(record, "name"))
        size = required(record, "size")
        if not is_unsigned(size):
            raise MalformedShape(f"size must be an unsigned integer, got {size!r}")
        signed = required(record, "signed")
        if not isinstance(signed, bool):
            raise MalformedShape(f"signed must be a boolean, got {signed!r}")
    except SchemaError as err:
        err.with_context(f"[{index}]")
        raise
    return BitField(name=name, size=size, signed=signed)


def decode_bitfield(payload: Any) -> Bitfield:
    members = expect_list("bitfield", payload)
    return Bitfield(tuple(decode_bit_field(i, m) for i, m in enumerate(members)))


def decode_pstring(resolve: Resolver, payload: Any) -> PrefixedString:
    payload = expect_mapping("pstring", payload)
    return PrefixedString(count_type=required_type(resolve, payload, "countType"))


def decode_utility(
    tag: str, payload: Any, resolve: Resolver
) -> Buffer | Mapper | Bitfield | PrefixedString:
    """Decode a ``[tag, payload]`` pair whose tag is a utility tag."""
    if tag == "buffer":
        return decode_buffer(resolve, payload)
    if tag == "mapper":
        return decode_mapper(payload)
    if tag == "bitfield":
        return decode_bitfield(payload)
    if tag == "pstring":
        return decode_pstring(resolve, payload)
    raise UnknownVariant(tag, UTILITY_TAGS)


def is_legacy_loop(payload: Any) -> bool:
    """Check if payload has the {"endVal": n, "type": ...} shape of a loop."""
    return (
        isinstance(payload, dict)
        and "type" in payload
        and is_unsigned(payload.get("endVal"), U32_MAX)
    )


def decode_legacy_loop(tag: str, payload: Any, resolve: Resolver) -> Loop:
    """Recover a loop, which documents declare under an arbitrary tag.

    The payload must be ``{"endVal": n, "type": ...}``.
    """
    if not is_legacy_loop(payload):
        raise UnknownVariant(tag, UTILITY_TAGS)

    logger.debug("Decoding %r as a loop", tag)
    return Loop(
        name=tag,
        end_val=payload["endVal"],
        element_type=required_type(resolve, payload, "type"),
    )
