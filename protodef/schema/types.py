"""Type definitions for decoded protocol documents.

Every node is immutable. Ordered sequences are tuples and ordered mappings are
read-only views of insertion-ordered dicts. Mapping equality ignores order;
compare ``list(mapping.items())`` where order matters. Nodes holding a mapping
(switches, mappers, namespaces and protocols) are not hashable.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum, StrEnum, auto
from types import MappingProxyType
from typing import Any

from dataclasses_json import DataClassJsonMixin


def _freeze(node: Any, *names: str) -> None:
    for name in names:
        object.__setattr__(node, name, MappingProxyType(dict(getattr(node, name))))


class NumericFamily(StrEnum):
    """Width class of a numeric type."""

    BYTE = auto()
    SHORT = auto()
    INT = auto()
    LONG = auto()
    FLOAT = auto()
    DOUBLE = auto()
    VARINT = auto()


class ByteOrder(StrEnum):
    """Byte order of a multi-byte numeric type."""

    BIG_ENDIAN = auto()
    LITTLE_ENDIAN = auto()


_FAMILY_BITS = {
    NumericFamily.BYTE: "8",
    NumericFamily.SHORT: "16",
    NumericFamily.INT: "32",
    NumericFamily.LONG: "64",
    NumericFamily.FLOAT: "32",
    NumericFamily.DOUBLE: "64",
}


@dataclass(frozen=True)
class Numeric(DataClassJsonMixin):
    """Represents a numeric type.

    - signed is None for float, double and varint
    - byte_order is None for byte and varint
    """

    family: NumericFamily
    signed: bool | None = None
    byte_order: ByteOrder | None = None

    @property
    def code(self) -> str:
        """The textual code this type is declared with, e.g. ``lu16``."""
        if self.family == NumericFamily.VARINT:
            return "varint"

        if self.family in (NumericFamily.FLOAT, NumericFamily.DOUBLE):
            kind = "f"
        else:
            kind = "i" if self.signed else "u"

        prefix = "l" if self.byte_order == ByteOrder.LITTLE_ENDIAN else ""
        return f"{prefix}{kind}{_FAMILY_BITS[self.family]}"

    def children(self) -> Iterator[tuple[str, DataType]]:
        return iter(())

    def to_protodef(self) -> Any:
        return self.code


class Primitive(Enum):
    """Represents one of the fixed primitive keywords."""

    BOOLEAN = "bool"
    STRING = "cstring"
    VOID = "void"

    def children(self) -> Iterator[tuple[str, DataType]]:
        return iter(())

    def to_protodef(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Named(DataClassJsonMixin):
    """An opaque reference to a type declared elsewhere. Never resolved here."""

    name: str

    def children(self) -> Iterator[tuple[str, DataType]]:
        return iter(())

    def to_protodef(self) -> Any:
        return self.name


@dataclass(frozen=True)
class FieldReference(DataClassJsonMixin):
    """Count taken from the value of a sibling field."""

    name: str

    def to_protodef(self) -> Any:
        return self.name


@dataclass(frozen=True)
class FixedLength(DataClassJsonMixin):
    """Count fixed in the document."""

    length: int

    def to_protodef(self) -> Any:
        return self.length


ArrayCount = FieldReference | FixedLength


def _counted(count_type: DataType | None, count: ArrayCount | None) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    if count_type is not None:
        payload["countType"] = count_type.to_protodef()
    if count is not None:
        payload["count"] = count.to_protodef()
    return payload


@dataclass(frozen=True)
class Array(DataClassJsonMixin):
    """Represents a list of values with the same type.

    count_type and count decide how many elements there are. Neither being
    set is legal and leaves the element count to the consumer.
    """

    count_type: DataType | None
    count: ArrayCount | None
    elements_type: DataType

    def children(self) -> Iterator[tuple[str, DataType]]:
        if self.count_type is not None:
            yield "countType", self.count_type
        yield "type", self.elements_type

    def to_protodef(self) -> Any:
        payload = _counted(self.count_type, self.count)
        payload["type"] = self.elements_type.to_protodef()
        return ["array", payload]


@dataclass(frozen=True)
class Field(DataClassJsonMixin):
    """Represents a single field of a container."""

    name: str | None
    type: DataType
    anonymous: bool | None = None

    def to_protodef(self) -> Any:
        payload: dict[str, Any] = {}
        if self.name is not None:
            payload["name"] = self.name
        payload["type"] = self.type.to_protodef()
        if self.anonymous is not None:
            payload["anon"] = self.anonymous
        return payload


@dataclass(frozen=True)
class Container(DataClassJsonMixin):
    """Represents a list of named values. Field order is the byte layout."""

    fields: tuple[Field, ...]

    def children(self) -> Iterator[tuple[str, DataType]]:
        for index, f in enumerate(self.fields):
            yield f.name if f.name is not None else str(index), f.type

    def to_protodef(self) -> Any:
        return ["container", [f.to_protodef() for f in self.fields]]


@dataclass(frozen=True)
class Count(DataClassJsonMixin):
    """Represents a count field for an array or a buffer."""

    count_type: DataType
    count_for: str

    def children(self) -> Iterator[tuple[str, DataType]]:
        yield "type", self.count_type

    def to_protodef(self) -> Any:
        return ["count", {"type": self.count_type.to_protodef(), "countFor": self.count_for}]


@dataclass(frozen=True)
class Switch(DataClassJsonMixin):
    """Represents a value chosen by the runtime value of another field.

    legacy is set when the switch was recovered from a malformed declaration
    that left out the ``switch`` tag.
    """

    name: str | None
    compare_to: str
    fields: Mapping[str, DataType]
    default: DataType | None = None
    legacy: bool = False

    __hash__ = None

    def __post_init__(self) -> None:
        _freeze(self, "fields")

    def children(self) -> Iterator[tuple[str, DataType]]:
        yield from self.fields.items()
        if self.default is not None:
            yield "default", self.default

    def to_protodef(self) -> Any:
        if self.legacy:
            return [self.name, {"compareTo": self.compare_to}]

        payload: dict[str, Any] = {}
        if self.name is not None:
            payload["name"] = self.name
        payload["compareTo"] = self.compare_to
        payload["fields"] = {k: v.to_protodef() for k, v in self.fields.items()}
        if self.default is not None:
            payload["default"] = self.default.to_protodef()
        return ["switch", payload]


@dataclass(frozen=True)
class Option(DataClassJsonMixin):
    """Represents a value that may be absent."""

    inner: DataType

    def children(self) -> Iterator[tuple[str, DataType]]:
        yield "option", self.inner

    def to_protodef(self) -> Any:
        return ["option", self.inner.to_protodef()]


@dataclass(frozen=True)
class Buffer(DataClassJsonMixin):
    """Represents raw bytes."""

    count_type: DataType | None = None
    count: ArrayCount | None = None
    rest: bool | None = None

    def children(self) -> Iterator[tuple[str, DataType]]:
        if self.count_type is not None:
            yield "countType", self.count_type

    def to_protodef(self) -> Any:
        payload = _counted(self.count_type, self.count)
        if self.rest is not None:
            payload["rest"] = self.rest
        return ["buffer", payload]


@dataclass(frozen=True)
class Mapper(DataClassJsonMixin):
    """Maps raw wire values to symbolic names.

    mappings_type names the encoding of the raw value and is not resolved.
    """

    mappings_type: str
    mappings: Mapping[str, str]

    __hash__ = None

    def __post_init__(self) -> None:
        _freeze(self, "mappings")

    def children(self) -> Iterator[tuple[str, DataType]]:
        return iter(())

    def to_protodef(self) -> Any:
        return ["mapper", {"type": self.mappings_type, "mappings": dict(self.mappings)}]


@dataclass(frozen=True)
class BitField(DataClassJsonMixin):
    """A single member of a bitfield. size is in bits."""

    name: str
    size: int
    signed: bool

    def to_protodef(self) -> Any:
        return {"name": self.name, "size": self.size, "signed": self.signed}


@dataclass(frozen=True)
class Bitfield(DataClassJsonMixin):
    """Represents bit-packed values, in packing order."""

    fields: tuple[BitField, ...]

    def children(self) -> Iterator[tuple[str, DataType]]:
        return iter(())

    def to_protodef(self) -> Any:
        return ["bitfield", [f.to_protodef() for f in self.fields]]


@dataclass(frozen=True)
class PrefixedString(DataClassJsonMixin):
    """Represents a string prefixed by its length."""

    count_type: DataType

    def children(self) -> Iterator[tuple[str, DataType]]:
        yield "countType", self.count_type

    def to_protodef(self) -> Any:
        return ["pstring", {"countType": self.count_type.to_protodef()}]


@dataclass(frozen=True)
class Loop(DataClassJsonMixin):
    """Represents elements repeated until end_val is read.

    Loops have no tag of their own; name keeps the tag they were declared with.
    """

    name: str
    end_val: int
    element_type: DataType

    def children(self) -> Iterator[tuple[str, DataType]]:
        yield "type", self.element_type

    def to_protodef(self) -> Any:
        return [self.name, {"endVal": self.end_val, "type": self.element_type.to_protodef()}]


Conditional = Switch | Option
Structure = Array | Container | Count
Utility = Buffer | Mapper | Bitfield | PrefixedString | Loop
DataType = Conditional | Numeric | Primitive | Structure | Utility | Named


@dataclass(frozen=True)
class Namespace(DataClassJsonMixin):
    """A named group of namespaces and type declarations."""

    entries: Mapping[str, Namespace | DataType] = field(default_factory=dict)

    __hash__ = None

    def __post_init__(self) -> None:
        _freeze(self, "entries")

    def to_protodef(self) -> Any:
        return {k: v.to_protodef() for k, v in self.entries.items()}


@dataclass(frozen=True)
class Protocol(DataClassJsonMixin):
    """Represents a complete protocol document."""

    types: Mapping[str, DataType]
    namespaces: Mapping[str, Namespace | DataType] = field(default_factory=dict)

    __hash__ = None

    def __post_init__(self) -> None:
        _freeze(self, "types", "namespaces")

    def declarations(self) -> Iterator[tuple[tuple[str, ...], DataType]]:
        """Yield every top-level declaration with its path, in document order."""
        for name, data_type in self.types.items():
            yield ("types", name), data_type
        yield from _namespace_leaves(self.namespaces, ())

    def to_protodef(self) -> Any:
        document: dict[str, Any] = {"types": {k: v.to_protodef() for k, v in self.types.items()}}
        for name, entry in self.namespaces.items():
            document[name] = entry.to_protodef()
        return document


def _namespace_leaves(
    entries: Mapping[str, Namespace | DataType], prefix: tuple[str, ...]
) -> Iterator[tuple[tuple[str, ...], DataType]]:
    for name, entry in entries.items():
        if isinstance(entry, Namespace):
            yield from _namespace_leaves(entry.entries, (*prefix, name))
        else:
            yield (*prefix, name), entry


def to_protodef(node: DataType | Namespace | Protocol) -> Any:
    """Encode a decoded node back into its canonical JSON value."""
    return node.to_protodef()


def walk(
    node: DataType, path: tuple[str, ...] = ()
) -> Iterator[tuple[tuple[str, ...], DataType]]:
    """Yield node and every nested type below it, depth first."""
    yield path, node
    for segment, child in node.children():
        yield from walk(child, (*path, segment))
