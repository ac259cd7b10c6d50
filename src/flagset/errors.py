from __future__ import annotations


class FlagSetError(Exception):
    """Base class for all flagset errors."""


class BitsRangeError(FlagSetError, ValueError):
    """Raised when an integer does not fit the width and signedness of a bits type."""


class InvalidFlagDefinitionError(FlagSetError, ValueError):
    """Raised when a flag set descriptor is built from invalid definitions."""


class ParseError(FlagSetError, ValueError):
    """
    Raised when the text form of a flags value cannot be parsed.

    `segment` is the offending `|`-separated segment after trimming, or None when
    the segment was empty.
    """

    def __init__(self, message: str, segment: str | None = None) -> None:
        super().__init__(message)
        self.segment = segment


class EmptyFlagError(ParseError):
    """Raised when a `|`-separated segment is empty after trimming."""

    def __init__(self) -> None:
        super().__init__("encountered empty flag", None)


class InvalidNamedFlagError(ParseError):
    """Raised when a segment is neither a known flag name nor a hex literal."""

    def __init__(self, segment: str) -> None:
        super().__init__(f"unrecognized named flag `{segment}`", segment)


class InvalidHexFlagError(ParseError):
    """
    Raised when a `0x` segment has invalid digits or overflows the bits type.

    Strict parsing raises this for every hex segment, valid or not.
    """

    def __init__(self, segment: str) -> None:
        super().__init__(f"invalid hex flag `{segment}`", segment)
