"""Constants of the flag set text and binary forms."""

from typing import Final

# ---------------------------------------------------------------------------
# Bits primitive
# ---------------------------------------------------------------------------
BITS_PER_BYTE: Final[int] = 8

SUPPORTED_WIDTHS: Final[tuple[int, ...]] = (8, 16, 32, 64, 128)

# Octal digits needed to render a full-width value
OCTAL_WIDTHS: Final[dict[int, int]] = {8: 3, 16: 6, 32: 11, 64: 22, 128: 43}


# ---------------------------------------------------------------------------
# Text form
# ---------------------------------------------------------------------------
# Text Structure:
#   <name> | <name> | ... | 0x<HEX>
#
# Segments are separated by '|' and trimmed of surrounding whitespace.
# The empty string is the empty flags value.
FLAG_SEPARATOR: Final[str] = "|"
FLAG_JOINER: Final[str] = " | "
HEX_PREFIX: Final[str] = "0x"
HEX_DIGITS: Final[str] = "0123456789abcdefABCDEF"
