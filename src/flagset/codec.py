"""
Text form of flags values.

Format:

    A | B | 0x80

Named flags come from the decomposition iterator in declaration order; bits not
explained by a named flag follow as one uppercase hex literal. The empty value is
the empty string.

Three modes are supported:
- RETAIN: named flags plus the hex remainder; parsing accepts hex and keeps
  unknown bits.
- TRUNCATE: unknown bits are dropped before formatting and after parsing.
- STRICT: named flags only; parsing rejects every hex segment.
"""

from __future__ import annotations

import enum
import io
import logging
from typing import Protocol

from . import constants as const
from .errors import EmptyFlagError, InvalidHexFlagError, InvalidNamedFlagError
from .iterator import IterNames
from .protocol import F, known_bits

logger = logging.getLogger(__name__)


class TextMode(enum.Enum):
    RETAIN = "retain"
    TRUNCATE = "truncate"
    STRICT = "strict"


class Writer(Protocol):
    def write(self, s: str, /) -> object: ...


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------
def _write(value: F, writer: Writer, *, with_remainder: bool) -> None:
    first = True
    names = IterNames(value)
    for name, _ in names:
        if not first:
            writer.write(const.FLAG_JOINER)
        first = False
        writer.write(name)

    if not with_remainder:
        return

    remaining = names.remaining.bits
    if remaining != 0:
        if not first:
            writer.write(const.FLAG_JOINER)
        writer.write(const.HEX_PREFIX)
        writer.write(type(value).BITS.format_hex(remaining))


def _truncated(value: F) -> F:
    cls = type(value)
    return cls.from_bits_retain(value.bits & known_bits(cls))


def to_writer(value: F, writer: Writer) -> None:
    """Write `value` as named flags followed by any unexplained bits in hex."""
    _write(value, writer, with_remainder=True)


def to_writer_truncate(value: F, writer: Writer) -> None:
    """Like `to_writer`, but unknown bits are dropped first."""
    _write(_truncated(value), writer, with_remainder=True)


def to_writer_strict(value: F, writer: Writer) -> None:
    """Write only the named flags of `value`; unexplained bits are not rendered."""
    _write(value, writer, with_remainder=False)


def format_text(value: F, mode: TextMode = TextMode.RETAIN) -> str:
    buf = io.StringIO()
    if mode is TextMode.RETAIN:
        to_writer(value, buf)
    elif mode is TextMode.TRUNCATE:
        to_writer_truncate(value, buf)
    elif mode is TextMode.STRICT:
        to_writer_strict(value, buf)
    else:
        raise ValueError(f"Unknown text mode: {mode!r}")
    return buf.getvalue()


def to_text(value: F) -> str:
    return format_text(value, TextMode.RETAIN)


def to_text_truncate(value: F) -> str:
    return format_text(value, TextMode.TRUNCATE)


def to_text_strict(value: F) -> str:
    return format_text(value, TextMode.STRICT)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
def _parse(cls: type[F], text: str, *, strict: bool) -> F:
    bits = 0
    if not text.strip():
        return cls.from_bits_retain(bits)

    for raw in text.split(const.FLAG_SEPARATOR):
        segment = raw.strip()
        if not segment:
            logger.debug("Rejected empty flag segment in %r", text)
            raise EmptyFlagError()

        if segment.startswith(const.HEX_PREFIX):
            if strict:
                logger.debug("Rejected hex segment %r in strict mode", segment)
                raise InvalidHexFlagError(segment)
            try:
                parsed = cls.BITS.parse_hex(segment[len(const.HEX_PREFIX) :])
            except ValueError as e:
                logger.debug("Rejected hex segment %r: %s", segment, e)
                raise InvalidHexFlagError(segment) from e
            bits |= parsed
            continue

        for name, flag in cls.KNOWN_FLAGS:
            if name == segment:
                bits |= flag.bits
                break
        else:
            logger.debug("Rejected unknown flag name %r for %s", segment, cls.__name__)
            raise InvalidNamedFlagError(segment)

    return cls.from_bits_retain(bits)


def from_text(cls: type[F], text: str) -> F:
    """
    Parse the text form into a value of `cls`, keeping any unknown hex bits.

    Raises EmptyFlagError, InvalidNamedFlagError or InvalidHexFlagError.
    """
    return _parse(cls, text, strict=False)


def from_text_truncate(cls: type[F], text: str) -> F:
    """Parse like `from_text`, then drop unknown bits."""
    return _truncated(_parse(cls, text, strict=False))


def from_text_strict(cls: type[F], text: str) -> F:
    """
    Parse named flags only.

    Every hex segment is rejected with InvalidHexFlagError, so the result never
    carries unknown bits.
    """
    return _parse(cls, text, strict=True)


def parse_text(cls: type[F], text: str, mode: TextMode = TextMode.RETAIN) -> F:
    if mode is TextMode.RETAIN:
        return from_text(cls, text)
    if mode is TextMode.TRUNCATE:
        return from_text_truncate(cls, text)
    if mode is TextMode.STRICT:
        return from_text_strict(cls, text)
    raise ValueError(f"Unknown text mode: {mode!r}")
