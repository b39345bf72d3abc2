"""Numeric type codes.

A leading ``l`` marks little endian; without it a type is big endian.
"""

from .errors import UnknownNumericCode
from .types import ByteOrder, Numeric, NumericFamily

_BE = ByteOrder.BIG_ENDIAN
_LE = ByteOrder.LITTLE_ENDIAN

NUMERIC_CODES: dict[str, Numeric] = {
    "i8": Numeric(NumericFamily.BYTE, signed=True),
    "u8": Numeric(NumericFamily.BYTE, signed=False),
    "i16": Numeric(NumericFamily.SHORT, signed=True, byte_order=_BE),
    "u16": Numeric(NumericFamily.SHORT, signed=False, byte_order=_BE),
    "li16": Numeric(NumericFamily.SHORT, signed=True, byte_order=_LE),
    "lu16": Numeric(NumericFamily.SHORT, signed=False, byte_order=_LE),
    "i32": Numeric(NumericFamily.INT, signed=True, byte_order=_BE),
    "u32": Numeric(NumericFamily.INT, signed=False, byte_order=_BE),
    "li32": Numeric(NumericFamily.INT, signed=True, byte_order=_LE),
    "lu32": Numeric(NumericFamily.INT, signed=False, byte_order=_LE),
    "i64": Numeric(NumericFamily.LONG, signed=True, byte_order=_BE),
    "u64": Numeric(NumericFamily.LONG, signed=False, byte_order=_BE),
    "li64": Numeric(NumericFamily.LONG, signed=True, byte_order=_LE),
    "lu64": Numeric(NumericFamily.LONG, signed=False, byte_order=_LE),
    "f32": Numeric(NumericFamily.FLOAT, byte_order=_BE),
    "lf32": Numeric(NumericFamily.FLOAT, byte_order=_LE),
    "f64": Numeric(NumericFamily.DOUBLE, byte_order=_BE),
    "lf64": Numeric(NumericFamily.DOUBLE, byte_order=_LE),
    "varint": Numeric(NumericFamily.VARINT),
}


def is_numeric_code(value: object) -> bool:
    """Check if a value is one of the numeric type codes."""
    return isinstance(value, str) and value in NUMERIC_CODES


def decode_numeric(code: object) -> Numeric:
    """Return the numeric type for a code such as ``u16`` or ``lf32``."""
    if not is_numeric_code(code):
        raise UnknownNumericCode(code)
    return NUMERIC_CODES[code]
