"""Protocol document model and loading."""

import json
import logging
from typing import IO, Any

from .errors import DocumentError, MalformedShape, MissingField, SchemaError
from .payload import resolve_at
from .resolver import resolve
from .types import DataType, Namespace, Protocol

logger = logging.getLogger(__name__)


def _ordered_pairs(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    # Duplicate keys: the last value wins and moves to the end.
    result: dict[str, Any] = {}
    for key, value in pairs:
        result.pop(key, None)
        result[key] = value
    return result


def decode_namespace(value: Any) -> Namespace | DataType:
    """Decode a namespace value: a nested namespace or a type declaration.

    An object is always a nested namespace since no type is written as an
    object. Everything else is a type declaration.
    """
    if not isinstance(value, dict):
        return resolve(value)

    entries: dict[str, Namespace | DataType] = {}
    for name, entry in value.items():
        try:
            entries[name] = decode_namespace(entry)
        except SchemaError as err:
            err.with_context(name)
            raise
    return Namespace(entries)


def parse_protocol(document: Any) -> Protocol:
    """Decode an already parsed JSON document into a protocol."""
    if not isinstance(document, dict):
        raise MalformedShape(
            f"A protocol document must be an object, got {type(document).__name__}"
        )
    if "types" not in document:
        raise MissingField("types")

    raw_types = document["types"]
    if not isinstance(raw_types, dict):
        raise MalformedShape(f"types must be an object, got {type(raw_types).__name__}")

    types: dict[str, DataType] = {}
    for name, value in raw_types.items():
        try:
            types[name] = resolve_at(resolve, value, name)
        except SchemaError as err:
            err.with_context("types")
            raise

    namespaces: dict[str, Namespace | DataType] = {}
    for name, value in document.items():
        if name == "types":
            continue
        try:
            namespaces[name] = decode_namespace(value)
        except SchemaError as err:
            err.with_context(name)
            raise

    logger.debug("Parsed protocol with %d types and %d namespaces", len(types), len(namespaces))
    return Protocol(types=types, namespaces=namespaces)


def loads(text: str | bytes) -> Protocol:
    """Parse a protocol from JSON text."""
    try:
        document = json.loads(text, object_pairs_hook=_ordered_pairs)
    except ValueError as err:
        raise DocumentError(f"Invalid JSON document: {err}") from err
    return parse_protocol(document)


def load(stream: IO[str] | IO[bytes]) -> Protocol:
    """Parse a protocol from a text or binary stream."""
    return loads(stream.read())


read_protocol = load
