# ruff: noqa: RUF022
"""
Named bit-flag sets for Python.

Public entrypoints:
- :class:`flagset.flags.Flags`: base class of every flag set type
- :class:`flagset.descriptor.FlagSetDescriptor`: the table of named flags of a type
- :mod:`flagset.codec`: the `A | B | 0x80` text form

A flag set treats a fixed-width integer as a named collection of boolean switches.
Flags may overlap, alias each other, span several bits or be zero; any value can be
decomposed into the named flags that explain it plus a remainder of unnamed bits.
"""

from __future__ import annotations

from . import bits, codec, constants
from .bits import (
    BITS_TYPES,
    I8,
    I16,
    I32,
    I64,
    I128,
    U8,
    U16,
    U32,
    U64,
    U128,
    BitsType,
    bits_type,
)
from .codec import (
    TextMode,
    format_text,
    from_text,
    from_text_strict,
    from_text_truncate,
    parse_text,
    to_text,
    to_text_strict,
    to_text_truncate,
    to_writer,
    to_writer_strict,
    to_writer_truncate,
)
from .descriptor import FlagDefinition, FlagSetDescriptor
from .errors import (
    BitsRangeError,
    EmptyFlagError,
    FlagSetError,
    InvalidFlagDefinitionError,
    InvalidHexFlagError,
    InvalidNamedFlagError,
    ParseError,
)
from .flags import Flags, define_flags
from .iterator import Iter, IterNames
from .protocol import SupportsFlags

__version__ = "0.1.0"

__all__ = [
    # Flags
    "Flags",
    "define_flags",
    "SupportsFlags",
    # Descriptor
    "FlagDefinition",
    "FlagSetDescriptor",
    # Bits primitive
    "BitsType",
    "BITS_TYPES",
    "bits_type",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    # Iteration
    "Iter",
    "IterNames",
    # Codec
    "TextMode",
    "format_text",
    "parse_text",
    "to_writer",
    "to_writer_truncate",
    "to_writer_strict",
    "to_text",
    "to_text_truncate",
    "to_text_strict",
    "from_text",
    "from_text_truncate",
    "from_text_strict",
    # Errors
    "FlagSetError",
    "BitsRangeError",
    "InvalidFlagDefinitionError",
    "ParseError",
    "EmptyFlagError",
    "InvalidNamedFlagError",
    "InvalidHexFlagError",
    # Submodules
    "bits",
    "codec",
    "constants",
]
