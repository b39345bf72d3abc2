"""Tests for numeric and primitive type tables."""

import pytest

from protodef.schema import NUMERIC_CODES, decode_numeric, decode_primitive, resolve
from protodef.schema.errors import UnknownNumericCode, UnknownPrimitive
from protodef.schema.types import ByteOrder, Named, Numeric, NumericFamily, Primitive

BE = ByteOrder.BIG_ENDIAN
LE = ByteOrder.LITTLE_ENDIAN

EXPECTED = {
    "i8": (NumericFamily.BYTE, True, None),
    "u8": (NumericFamily.BYTE, False, None),
    "i16": (NumericFamily.SHORT, True, BE),
    "u16": (NumericFamily.SHORT, False, BE),
    "li16": (NumericFamily.SHORT, True, LE),
    "lu16": (NumericFamily.SHORT, False, LE),
    "i32": (NumericFamily.INT, True, BE),
    "u32": (NumericFamily.INT, False, BE),
    "li32": (NumericFamily.INT, True, LE),
    "lu32": (NumericFamily.INT, False, LE),
    "i64": (NumericFamily.LONG, True, BE),
    "u64": (NumericFamily.LONG, False, BE),
    "li64": (NumericFamily.LONG, True, LE),
    "lu64": (NumericFamily.LONG, False, LE),
    "f32": (NumericFamily.FLOAT, None, BE),
    "lf32": (NumericFamily.FLOAT, None, LE),
    "f64": (NumericFamily.DOUBLE, None, BE),
    "lf64": (NumericFamily.DOUBLE, None, LE),
    "varint": (NumericFamily.VARINT, None, None),
}


def describe_numeric_codes():
    def has_exactly_nineteen_codes(expect):
        expect(len(NUMERIC_CODES)) == 19
        expect(set(NUMERIC_CODES)) == set(EXPECTED)

    @pytest.mark.parametrize("code", sorted(EXPECTED))
    def decodes_code(expect, code):
        family, signed, byte_order = EXPECTED[code]
        expect(decode_numeric(code)) == Numeric(family, signed, byte_order)
        expect(resolve(code)) == Numeric(family, signed, byte_order)

    @pytest.mark.parametrize("code", sorted(EXPECTED))
    def reports_its_own_code(expect, code):
        expect(decode_numeric(code).code) == code

    @pytest.mark.parametrize("code", ["u128", "U16", "l8", "lvarint", "f16", "i", "", " u8"])
    def rejects_unknown_codes(expect, code):
        with pytest.raises(UnknownNumericCode):
            decode_numeric(code)
        expect(isinstance(resolve(code), Numeric)) == False

    def rejects_non_strings(expect):
        with pytest.raises(UnknownNumericCode) as exc:
            decode_numeric(16)
        expect(exc.value.code) == 16


def describe_primitives():
    @pytest.mark.parametrize(
        "keyword,primitive",
        [("bool", Primitive.BOOLEAN), ("cstring", Primitive.STRING), ("void", Primitive.VOID)],
    )
    def decodes_keyword(expect, keyword, primitive):
        expect(decode_primitive(keyword)) == primitive
        expect(resolve(keyword)) == primitive

    def rejects_other_strings(expect):
        with pytest.raises(UnknownPrimitive):
            decode_primitive("string")

    def falls_back_to_named_in_resolver(expect):
        expect(resolve("string")) == Named("string")
        expect(resolve("boolean")) == Named("boolean")
