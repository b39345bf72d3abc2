"""Decoding of structural types: containers, arrays and counts."""

from typing import Any

from .errors import SchemaError, UnknownVariant
from .payload import (
    Resolver,
    expect_list,
    expect_mapping,
    expect_str,
    optional_bool,
    optional_count,
    optional_str,
    optional_type,
    required,
    required_type,
)
from .types import Array, Container, Count, Field

STRUCTURE_TAGS = ("container", "array", "count")


def decode_field(resolve: Resolver, index: int, value: Any) -> Field:
    """Decode one container field. index names the field in errors if it has no name."""
    segment = value.get("name") if isinstance(value, dict) else None
    if not isinstance(segment, str):
        segment = f"[{index}]"

    try:
        payload = expect_mapping("container field", value)
        return Field(
            name=optional_str(payload, "name"),
            type=resolve(required(payload, "type")),
            anonymous=optional_bool(payload, "anon"),
        )
    except SchemaError as err:
        err.with_context(segment)
        raise


def decode_container(resolve: Resolver, payload: Any) -> Container:
    fields = expect_list("container", payload)
    return Container(tuple(decode_field(resolve, i, f) for i, f in enumerate(fields)))


def decode_array(resolve: Resolver, payload: Any) -> Array:
    payload = expect_mapping("array", payload)
    return Array(
        count_type=optional_type(resolve, payload, "countType"),
        count=optional_count(payload),
        elements_type=required_type(resolve, payload, "type"),
    )


def decode_count_field(resolve: Resolver, payload: Any) -> Count:
    payload = expect_mapping("count", payload)
    count_type = required_type(resolve, payload, "type")
    count_for = expect_str("countFor", required(payload, "countFor"))
    return Count(count_type=count_type, count_for=count_for)


def decode_structure(tag: str, payload: Any, resolve: Resolver) -> Container | Array | Count:
    """Decode a ``[tag, payload]`` pair whose tag is a structure tag."""
    if tag == "container":
        return decode_container(resolve, payload)
    if tag == "array":
        return decode_array(resolve, payload)
    if tag == "count":
        return decode_count_field(resolve, payload)
    raise UnknownVariant(tag, STRUCTURE_TAGS)

