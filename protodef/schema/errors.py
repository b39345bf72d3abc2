"""Errors raised while decoding a protocol document."""

from collections.abc import Iterable


class SchemaError(RuntimeError):
    """Raised when a value in a protocol document cannot be decoded.

    ``path`` lists the location of the failing value, outermost first. Decoders
    prepend segments with :meth:`with_context` as the error propagates.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.path: list[str] = []

    def with_context(self, segment: str) -> "SchemaError":
        self.path.insert(0, segment)
        return self

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"at {'.'.join(self.path)}: {self.message}"


class UnknownNumericCode(SchemaError):
    """Raised when a string is not one of the numeric type codes."""

    def __init__(self, code: object):
        super().__init__(f"Unknown numeric type code {code!r}")
        self.code = code


class UnknownPrimitive(SchemaError):
    """Raised when a string is not one of the primitive keywords."""

    def __init__(self, value: object):
        super().__init__(f"Unknown primitive type {value!r}")
        self.value = value


class MissingField(SchemaError):
    """Raised when a required payload key is absent."""

    def __init__(self, name: str):
        super().__init__(f"Missing field {name!r}")
        self.name = name


class UnknownVariant(SchemaError):
    """Raised when a tag matches none of the variants a decoder accepts."""

    def __init__(self, tag: str, expected: Iterable[str]):
        self.tag = tag
        self.expected = tuple(expected)
        super().__init__(
            f"Unknown variant {tag!r}, expected one of {', '.join(self.expected)}"
        )


class UnknownTypeTag(UnknownVariant):
    """Raised when a tagged type matches no canonical tag and no legacy shape."""


class MalformedShape(SchemaError):
    """Raised when a value has the wrong JSON kind for its position."""


class DocumentError(SchemaError):
    """Raised when the input is not a readable JSON document."""
