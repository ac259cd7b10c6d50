"""
Accessor contract shared by every flag set type.

The decomposition iterators and the text codec are written once against this
interface; `flagset.flags.Flags` is the implementation every flag set type gets
by subclassing.
"""

from __future__ import annotations

from typing import ClassVar, Protocol, TypeVar, runtime_checkable

from .bits import BitsType

F = TypeVar("F", bound="SupportsFlags")


@runtime_checkable
class SupportsFlags(Protocol):
    KNOWN_FLAGS: ClassVar[tuple[tuple[str, SupportsFlags], ...]]
    EXTRA_VALID_BITS: ClassVar[int]
    BITS: ClassVar[BitsType]

    @property
    def bits(self) -> int: ...

    @classmethod
    def from_bits_retain(cls: type[F], bits: int) -> F: ...


def known_bits(cls: type[SupportsFlags]) -> int:
    """OR of every named flag plus the extra valid bits."""
    value = cls.EXTRA_VALID_BITS
    for _, flag in cls.KNOWN_FLAGS:
        value |= flag.bits
    return value
