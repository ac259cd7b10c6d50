"""
Fixed-width integer primitives backing flags values.

Python ints are unbounded, so a `BitsType` carries the width and signedness a value
is interpreted with. Values are always kept in the type's native range:
`0 .. 2**width - 1` for unsigned types and the two's complement range
`-2**(width - 1) .. 2**(width - 1) - 1` for signed ones.

AND, OR and XOR of two in-range values are always in range; NOT needs wrapping
for unsigned types, which `not_` does.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from . import constants as const
from .errors import BitsRangeError, InvalidFlagDefinitionError


@dataclass(frozen=True, slots=True)
class BitsType:
    """An 8 to 128 bit, signed or unsigned, integer type."""

    width: int
    signed: bool = False

    def __post_init__(self) -> None:
        if self.width not in const.SUPPORTED_WIDTHS:
            raise InvalidFlagDefinitionError(
                f"Unsupported bits width {self.width}, expected one of {const.SUPPORTED_WIDTHS}"
            )

    @property
    def name(self) -> str:
        return f"{'i' if self.signed else 'u'}{self.width}"

    @property
    def mask(self) -> int:
        """All `width` bits set, as an unsigned int."""
        return (1 << self.width) - 1

    @property
    def min_value(self) -> int:
        return -(1 << (self.width - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << (self.width - 1)) - 1 if self.signed else self.mask

    @property
    def byte_size(self) -> int:
        return self.width // const.BITS_PER_BYTE

    def in_range(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value

    def check(self, value: int) -> int:
        """Return `value` unchanged if it fits this type, raise BitsRangeError otherwise."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(
                f"{self.name} bits must be an int, got {type(value).__name__}"
            )
        if not self.in_range(value):
            raise BitsRangeError(
                f"{self.name} bits must be in [{self.min_value}, {self.max_value}], got {value}"
            )
        return value

    def normalize(self, value: int) -> int:
        """Wrap any int into this type's range (two's complement for signed types)."""
        return self.from_unsigned(value & self.mask)

    def to_unsigned(self, value: int) -> int:
        """The bit pattern of `value` as an unsigned int."""
        return value & self.mask

    def from_unsigned(self, value: int) -> int:
        """Reinterpret an unsigned bit pattern as a value of this type."""
        if self.signed and value > self.max_value:
            return value - (1 << self.width)
        return value

    # -----------------------------------------------------------------------
    # Bitwise operations
    # -----------------------------------------------------------------------
    def all_ones(self) -> int:
        return self.from_unsigned(self.mask)

    def and_(self, a: int, b: int) -> int:
        return a & b

    def or_(self, a: int, b: int) -> int:
        return a | b

    def xor(self, a: int, b: int) -> int:
        return a ^ b

    def not_(self, value: int) -> int:
        return self.normalize(~value)

    # -----------------------------------------------------------------------
    # Text rendering
    # -----------------------------------------------------------------------
    def format_hex(self, value: int, *, upper: bool = True, pad: bool = False) -> str:
        spec = f"0{self.width // 4}" if pad else ""
        return format(self.to_unsigned(value), spec + ("X" if upper else "x"))

    def format_octal(self, value: int, *, pad: bool = False) -> str:
        spec = f"0{const.OCTAL_WIDTHS[self.width]}" if pad else ""
        return format(self.to_unsigned(value), spec + "o")

    def format_binary(self, value: int, *, pad: bool = False) -> str:
        spec = f"0{self.width}" if pad else ""
        return format(self.to_unsigned(value), spec + "b")

    def parse_hex(self, digits: str) -> int:
        """
        Parse bare hex digits (no prefix, no sign) into a value of this type.

        The digits are the unsigned bit pattern; for signed types the result is its
        two's complement interpretation. Raises ValueError on invalid digits or
        when the pattern does not fit `width` bits.
        """
        if not digits or any(c not in const.HEX_DIGITS for c in digits):
            raise ValueError(f"Invalid hex digits {digits!r}")
        value = int(digits, 16)
        if value > self.mask:
            raise ValueError(f"Hex value {digits!r} overflows {self.name}")
        return self.from_unsigned(value)


U8: Final[BitsType] = BitsType(8)
U16: Final[BitsType] = BitsType(16)
U32: Final[BitsType] = BitsType(32)
U64: Final[BitsType] = BitsType(64)
U128: Final[BitsType] = BitsType(128)

I8: Final[BitsType] = BitsType(8, signed=True)
I16: Final[BitsType] = BitsType(16, signed=True)
I32: Final[BitsType] = BitsType(32, signed=True)
I64: Final[BitsType] = BitsType(64, signed=True)
I128: Final[BitsType] = BitsType(128, signed=True)

BITS_TYPES: Final[dict[str, BitsType]] = {
    t.name: t for t in (U8, U16, U32, U64, U128, I8, I16, I32, I64, I128)
}


def bits_type(name: str) -> BitsType:
    """Look up a bits type by its short name (`"u8"`, `"i32"`, ...)."""
    try:
        return BITS_TYPES[name]
    except KeyError as e:
        raise InvalidFlagDefinitionError(f"Unknown bits type {name!r}") from e
