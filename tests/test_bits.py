"""
Unit tests for flagset.bits.

Tests cover:
- BitsType ranges and wrapping
- Bitwise NOT for signed and unsigned types
- Hex / octal / binary rendering
- Hex parsing
- bits_type lookup
"""

import pytest

from flagset import (
    I8,
    I128,
    U8,
    U16,
    U128,
    BitsRangeError,
    BitsType,
    InvalidFlagDefinitionError,
    bits_type,
)


class TestBitsTypeRange:
    """Tests for BitsType range helpers."""

    def test_unsigned_range(self) -> None:
        assert U8.min_value == 0
        assert U8.max_value == 255
        assert U8.mask == 0xFF
        assert U8.byte_size == 1

    def test_signed_range(self) -> None:
        assert I8.min_value == -128
        assert I8.max_value == 127
        assert I8.mask == 0xFF

    def test_wide_types(self) -> None:
        assert U128.max_value == 2**128 - 1
        assert I128.min_value == -(2**127)
        assert U128.byte_size == 16

    def test_name(self) -> None:
        assert U16.name == "u16"
        assert I8.name == "i8"

    def test_unsupported_width(self) -> None:
        with pytest.raises(InvalidFlagDefinitionError, match="Unsupported bits width"):
            BitsType(12)

    def test_check_in_range(self) -> None:
        assert U8.check(255) == 255
        assert I8.check(-128) == -128

    @pytest.mark.parametrize(("bits_t", "value"), [(U8, 256), (U8, -1), (I8, 128), (I8, -129)])
    def test_check_out_of_range(self, bits_t: BitsType, value: int) -> None:
        with pytest.raises(BitsRangeError):
            bits_t.check(value)

    def test_check_rejects_non_int(self) -> None:
        with pytest.raises(TypeError):
            U8.check(True)
        with pytest.raises(TypeError):
            U8.check("1")  # type: ignore[arg-type]

    def test_bits_range_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            U8.check(1000)

    def test_normalize(self) -> None:
        assert U8.normalize(256) == 0
        assert U8.normalize(-1) == 255
        assert I8.normalize(128) == -128
        assert I8.normalize(255) == -1
        assert I8.normalize(-1) == -1

    def test_unsigned_reinterpretation(self) -> None:
        assert I8.to_unsigned(-1) == 0xFF
        assert I8.from_unsigned(0x80) == -128
        assert U8.from_unsigned(0x80) == 0x80


class TestBitwiseOperations:
    """Tests for AND / OR / XOR / NOT."""

    def test_all_ones(self) -> None:
        assert U8.all_ones() == 0xFF
        assert I8.all_ones() == -1

    def test_not_unsigned(self) -> None:
        assert U8.not_(0) == 0xFF
        assert U8.not_(0b1010_1010) == 0b0101_0101

    def test_not_signed(self) -> None:
        assert I8.not_(0) == -1
        assert I8.not_(-128) == 127

    def test_binary_operations(self) -> None:
        assert U8.and_(0b1100, 0b1010) == 0b1000
        assert U8.or_(0b1100, 0b1010) == 0b1110
        assert U8.xor(0b1100, 0b1010) == 0b0110
        assert I8.and_(-1, -128) == -128


class TestRendering:
    """Tests for text rendering of raw bits."""

    def test_hex(self) -> None:
        assert U8.format_hex(0xAB) == "AB"
        assert U8.format_hex(0xAB, upper=False) == "ab"
        assert U8.format_hex(0x8) == "8"
        assert U8.format_hex(0x8, pad=True) == "08"

    def test_hex_signed_is_twos_complement(self) -> None:
        assert I8.format_hex(-1) == "FF"
        assert I8.format_hex(-128) == "80"

    def test_octal(self) -> None:
        assert U8.format_octal(0xFF) == "377"
        assert U8.format_octal(1, pad=True) == "001"

    def test_binary(self) -> None:
        assert U8.format_binary(0b1011) == "1011"
        assert U8.format_binary(0b1011, pad=True) == "00001011"
        assert I8.format_binary(-1) == "11111111"


class TestParseHex:
    """Tests for BitsType.parse_hex."""

    def test_valid(self) -> None:
        assert U8.parse_hex("8") == 8
        assert U8.parse_hex("fF") == 0xFF
        assert U16.parse_hex("0100") == 0x100

    def test_signed_reinterprets_pattern(self) -> None:
        assert I8.parse_hex("FF") == -1
        assert I8.parse_hex("7f") == 127

    @pytest.mark.parametrize("digits", ["", "g", "+1", "-1", "1_0", " 1", "0x1"])
    def test_invalid_digits(self, digits: str) -> None:
        with pytest.raises(ValueError):
            U8.parse_hex(digits)

    def test_overflow(self) -> None:
        with pytest.raises(ValueError, match="overflows"):
            U8.parse_hex("100")
        with pytest.raises(ValueError, match="overflows"):
            U8.parse_hex("ffffffffffff")


class TestBitsTypeLookup:
    """Tests for bits_type."""

    def test_known(self) -> None:
        assert bits_type("u8") is U8
        assert bits_type("i128") is I128

    def test_unknown(self) -> None:
        with pytest.raises(InvalidFlagDefinitionError, match="Unknown bits type"):
            bits_type("u12")
