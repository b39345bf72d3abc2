"""Helpers shared by the payload decoders."""

from collections.abc import Callable
from typing import Any

from .errors import MalformedShape, MissingField, SchemaError
from .types import ArrayCount, DataType, FieldReference, FixedLength

Resolver = Callable[[Any], DataType]

_MISSING: Any = object()

U32_MAX = 2**32 - 1


def expect_mapping(tag: str, payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise MalformedShape(f"{tag} expects an object, got {type(payload).__name__}")
    return payload


def expect_list(tag: str, payload: Any) -> list[Any]:
    if not isinstance(payload, list):
        raise MalformedShape(f"{tag} expects an array, got {type(payload).__name__}")
    return payload


def required(payload: dict[str, Any], key: str) -> Any:
    value = payload.get(key, _MISSING)
    if value is _MISSING:
        raise MissingField(key)
    return value


def expect_str(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise MalformedShape(f"{key} must be a string, got {type(value).__name__}")
    return value


def optional_str(payload: dict[str, Any], key: str) -> str | None:
    value = payload.get(key)
    return None if value is None else expect_str(key, value)


def optional_bool(payload: dict[str, Any], key: str) -> bool | None:
    value = payload.get(key)
    if value is not None and not isinstance(value, bool):
        raise MalformedShape(f"{key} must be a boolean, got {type(value).__name__}")
    return value


def is_unsigned(value: Any, limit: int | None = None) -> bool:
    # bool is an int subclass but never a count
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return False
    return limit is None or value <= limit


def decode_count(value: Any) -> ArrayCount:
    """Decode a count: a sibling field name or a fixed length."""
    if isinstance(value, str):
        return FieldReference(value)
    if is_unsigned(value, U32_MAX):
        return FixedLength(value)
    raise MalformedShape(f"count must be a field name or an unsigned integer, got {value!r}")


def optional_count(payload: dict[str, Any]) -> ArrayCount | None:
    value = payload.get("count")
    return None if value is None else decode_count(value)


def resolve_at(resolve: Resolver, value: Any, segment: str) -> DataType:
    """Resolve a nested type position, recording segment on failure."""
    try:
        return resolve(value)
    except SchemaError as err:
        err.with_context(segment)
        raise


def optional_type(resolve: Resolver, payload: dict[str, Any], key: str) -> DataType | None:
    value = payload.get(key)
    return None if value is None else resolve_at(resolve, value, key)


def required_type(resolve: Resolver, payload: dict[str, Any], key: str) -> DataType:
    return resolve_at(resolve, required(payload, key), key)
