"""Decoding of conditional types: switches and options."""

import logging
from typing import Any

from .errors import MalformedShape, UnknownVariant
from .payload import (
    Resolver,
    expect_mapping,
    expect_str,
    optional_str,
    optional_type,
    required,
    resolve_at,
)
from .types import DataType, Option, Switch

logger = logging.getLogger(__name__)

CONDITIONAL_TAGS = ("switch", "option")


def decode_switch(resolve: Resolver, payload: Any) -> Switch:
    payload = expect_mapping("switch", payload)
    name = optional_str(payload, "name")
    compare_to = expect_str("compareTo", required(payload, "compareTo"))

    cases = required(payload, "fields")
    if not isinstance(cases, dict):
        raise MalformedShape(f"switch fields must be an object, got {type(cases).__name__}")

    fields: dict[str, DataType] = {}
    for case, value in cases.items():
        fields[case] = resolve_at(resolve, value, case)

    return Switch(
        name=name,
        compare_to=compare_to,
        fields=fields,
        default=optional_type(resolve, payload, "default"),
    )


def decode_conditional(tag: str, payload: Any, resolve: Resolver) -> Switch | Option:
    """Decode a ``[tag, payload]`` pair whose tag is ``switch`` or ``option``."""
    if tag == "switch":
        return decode_switch(resolve, payload)
    if tag == "option":
        return Option(resolve_at(resolve, payload, "option"))
    raise UnknownVariant(tag, CONDITIONAL_TAGS)


def is_legacy_switch(payload: Any) -> bool:
    """Check if payload is the lone {"compareTo": field} of a switch missing its tag."""
    return (
        isinstance(payload, dict)
        and len(payload) == 1
        and isinstance(payload.get("compareTo"), str)
    )


def decode_legacy_switch(tag: str, payload: Any) -> Switch:
    """Recover a switch declared without its ``switch`` tag.

    Some documents write ``[name, {"compareTo": field}]``. The tag becomes the
    switch name and the switch has no cases.
    """
    if is_legacy_switch(payload):
        logger.debug("Decoding %r as a switch without its tag", tag)
        return Switch(
            name=tag,
            compare_to=payload["compareTo"],
            fields={},
            default=None,
            legacy=True,
        )
    raise UnknownVariant(tag, CONDITIONAL_TAGS)
