"""
Generic flags value algebra.

Every flag set type is a subclass of `Flags` that supplies a `FlagSetDescriptor`:

    class Permissions(Flags, descriptor=FlagSetDescriptor.build(U8, {
        "READ": 0b001,
        "WRITE": 0b010,
        "EXEC": 0b100,
        "RW": 0b011,
    })):
        __slots__ = ()

    rw = Permissions.READ | Permissions.WRITE
    assert str(rw) == "READ | WRITE"

The algebra, iteration and text form are implemented once here and in
`flagset.iterator` / `flagset.codec`; subclasses only provide the descriptor.

Values are immutable. Operations that conceptually update a value in place
(`set`, `unset`, `toggle`, `truncate`, `clear`) return the replacement value.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Literal

from .bits import BitsType
from .codec import TextMode, format_text, parse_text
from .descriptor import FlagSetDescriptor
from .iterator import Iter, IterNames

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True, repr=False, init=False)
class Flags:
    """
    A value of a flag set type: raw bits interpreted through the type's descriptor.

    The constructor keeps `bits` exactly (same as `from_bits_retain`); it only checks
    that `bits` fits the width and signedness of the bits type. Without `bits` it
    returns the descriptor's default value.
    """

    __slots__ = ("bits",)

    bits: int

    DESCRIPTOR: ClassVar[FlagSetDescriptor]
    KNOWN_FLAGS: ClassVar[tuple[tuple[str, Any], ...]]
    EXTRA_VALID_BITS: ClassVar[int]
    BITS: ClassVar[BitsType]

    def __init_subclass__(
        cls, *, descriptor: FlagSetDescriptor | None = None, **kwargs: Any
    ) -> None:
        super().__init_subclass__(**kwargs)
        if descriptor is None:
            descriptor = getattr(cls, "DESCRIPTOR", None)
        if descriptor is None:
            # Intermediate base class; a descriptor may be supplied further down.
            return

        cls.DESCRIPTOR = descriptor
        cls.BITS = descriptor.bits_type
        cls.EXTRA_VALID_BITS = descriptor.extra_valid_bits
        cls.KNOWN_FLAGS = tuple((d.name, cls(d.bits)) for d in descriptor.flags)

        for name, flag in cls.KNOWN_FLAGS:
            if name.isidentifier() and not _is_reserved(cls, name):
                setattr(cls, name, flag)

        logger.debug(
            "Registered flag set %s (%s, %d flags, extra valid bits %#x)",
            cls.__qualname__,
            descriptor.bits_type.name,
            len(descriptor.flags),
            descriptor.bits_type.to_unsigned(descriptor.extra_valid_bits),
        )

    def __init__(self, bits: int | None = None) -> None:
        cls = type(self)
        if getattr(cls, "DESCRIPTOR", None) is None:
            raise TypeError(
                f"{cls.__name__} has no flag set descriptor; "
                "subclass it with `descriptor=FlagSetDescriptor(...)`"
            )
        if bits is None:
            bits = cls.DESCRIPTOR.default_bits
        object.__setattr__(self, "bits", cls.BITS.check(bits))

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self.bits,))

    def _other_bits(self, other: object) -> int:
        if not isinstance(other, type(self)):
            raise TypeError(
                f"Expected {type(self).__name__}, got {type(other).__name__}"
            )
        return other.bits

    # -----------------------------------------------------------------------
    # Constructors
    # -----------------------------------------------------------------------
    @classmethod
    def empty(cls) -> Flags:
        """A value with no bits set."""
        return cls(0)

    @classmethod
    def default(cls) -> Flags:
        """The declared default value, or empty when the descriptor declares none."""
        return cls(cls.DESCRIPTOR.default_bits)

    @classmethod
    def all_bits(cls) -> Flags:
        """
        A value with every bit of the bits type set.

        This includes bits with no flag or meaning; use `all` for the known bits only.
        """
        return cls(cls.BITS.all_ones())

    @classmethod
    def all(cls) -> Flags:
        """A value with every known bit set: all named flags plus the extra valid bits."""
        return cls(cls.DESCRIPTOR.all_bits)

    @classmethod
    def all_named(cls) -> Flags:
        """A value with every named flag set, without the extra valid bits."""
        return cls(cls.DESCRIPTOR.all_named_bits)

    @classmethod
    def from_bits(cls, bits: int) -> Flags | None:
        """Convert from raw bits, or return None if any unknown bit is set."""
        cls.BITS.check(bits)
        if bits & cls.DESCRIPTOR.all_bits != bits:
            return None
        return cls(bits)

    @classmethod
    def from_bits_truncate(cls, bits: int) -> Flags:
        """Convert from raw bits, unsetting any unknown bits."""
        return cls(cls.BITS.check(bits) & cls.DESCRIPTOR.all_bits)

    @classmethod
    def from_bits_retain(cls, bits: int) -> Flags:
        """Convert from raw bits exactly, keeping unknown bits."""
        return cls(cls.BITS.check(bits))

    @classmethod
    def from_flag_name(cls, name: str) -> Flags | None:
        """Look up a named flag: exact, case-sensitive, first match in declaration order."""
        definition = cls.DESCRIPTOR.find(name)
        if definition is None:
            return None
        return cls(definition.bits)

    @classmethod
    def from_iterable(cls, values: Iterable[Flags]) -> Flags:
        """The union of all `values`."""
        return cls.empty().extend(values)

    @classmethod
    def from_bytes(
        cls, data: bytes, byteorder: Literal["little", "big"] = "big"
    ) -> Flags:
        """Decode the binary form (raw bits, `width / 8` bytes), keeping unknown bits."""
        if len(data) != cls.BITS.byte_size:
            raise ValueError(
                f"{cls.__name__} expects {cls.BITS.byte_size} bytes, got {len(data)}"
            )
        return cls(int.from_bytes(data, byteorder, signed=cls.BITS.signed))

    @classmethod
    def parse(cls, text: str, mode: TextMode = TextMode.RETAIN) -> Flags:
        return parse_text(cls, text, mode)

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------
    @property
    def is_empty(self) -> bool:
        return self.bits == 0

    @property
    def is_all_bits(self) -> bool:
        return self.bits == self.BITS.all_ones()

    @property
    def is_all(self) -> bool:
        """
        True if every known bit is set.

        The value may carry unknown bits in addition and still be "all".
        """
        return self.DESCRIPTOR.all_bits | self.bits == self.bits

    @property
    def is_all_named(self) -> bool:
        return self.DESCRIPTOR.all_named_bits | self.bits == self.bits

    @property
    def contains_unknown_bits(self) -> bool:
        return self.DESCRIPTOR.all_bits & self.bits != self.bits

    def intersects(self, other: Flags) -> bool:
        """
        True if any bit of `other` is set in this value.

        A zero-bit flag never intersects anything.
        """
        return self.bits & self._other_bits(other) != 0

    def contains(self, other: Flags) -> bool:
        """
        True if every bit of `other` is set in this value.

        A zero-bit flag is contained in every value.
        """
        other_bits = self._other_bits(other)
        return self.bits & other_bits == other_bits

    # -----------------------------------------------------------------------
    # Algebra
    # -----------------------------------------------------------------------
    def truncated(self) -> Flags:
        """This value with unknown bits unset."""
        return type(self)(self.bits & self.DESCRIPTOR.all_bits)

    def not_(self) -> Flags:
        """
        Bitwise NOT.

        Unknown bits are not truncated; use `complement` (or `~`) for that.
        """
        return type(self)(self.BITS.not_(self.bits))

    def and_(self, other: Flags) -> Flags:
        return type(self)(self.BITS.and_(self.bits, self._other_bits(other)))

    def or_(self, other: Flags) -> Flags:
        return type(self)(self.BITS.or_(self.bits, self._other_bits(other)))

    def xor(self, other: Flags) -> Flags:
        return type(self)(self.BITS.xor(self.bits, self._other_bits(other)))

    def intersection(self, other: Flags) -> Flags:
        return self.and_(other)

    def union(self, other: Flags) -> Flags:
        return self.or_(other)

    def difference(self, other: Flags) -> Flags:
        """
        This value with the bits of `other` unset.

        Not the same as `self & ~other` when `other` has unknown bits: `difference`
        does not truncate `other`, but `~` does.
        """
        other_bits = self._other_bits(other)
        return type(self)(self.BITS.and_(self.bits, self.BITS.not_(other_bits)))

    def symmetric_difference(self, other: Flags) -> Flags:
        return self.xor(other)

    def complement(self) -> Flags:
        """Bitwise NOT with unknown bits truncated."""
        return self.not_().truncated()

    # Replacement forms of the in-place updates.
    def truncate(self) -> Flags:
        return self.truncated()

    def set(self, other: Flags) -> Flags:
        return self.union(other)

    def unset(self, other: Flags) -> Flags:
        return self.difference(other)

    def toggle(self, other: Flags) -> Flags:
        return self.symmetric_difference(other)

    def clear(self) -> Flags:
        return type(self).empty()

    def extend(self, values: Iterable[Flags]) -> Flags:
        """This value with every flag in `values` set."""
        result = self
        for value in values:
            result = result.set(value)
        return result

    # -----------------------------------------------------------------------
    # Iteration and text
    # -----------------------------------------------------------------------
    def iter(self) -> Iter[Flags]:
        """
        Yield the contained named flags, then any remaining bits as one final value.

        The union of the yielded values is this value.
        """
        return Iter(self)

    def iter_names(self) -> IterNames[Flags]:
        """Yield `(name, flag)` for contained named flags only."""
        return IterNames(self)

    def to_text(self, mode: TextMode = TextMode.RETAIN) -> str:
        return format_text(self, mode)

    def to_bytes(self, byteorder: Literal["little", "big"] = "big") -> bytes:
        return self.bits.to_bytes(
            self.BITS.byte_size, byteorder, signed=self.BITS.signed
        )

    # -----------------------------------------------------------------------
    # Python protocols
    # -----------------------------------------------------------------------
    def __iter__(self) -> Iter[Flags]:
        return self.iter()

    def __bool__(self) -> bool:
        return not self.is_empty

    def __contains__(self, other: Flags) -> bool:
        return self.contains(other)

    def __int__(self) -> int:
        return self.bits

    def __invert__(self) -> Flags:
        return self.complement()

    def __and__(self, other: object) -> Flags:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.and_(other)

    def __or__(self, other: object) -> Flags:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.or_(other)

    def __xor__(self, other: object) -> Flags:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.xor(other)

    def __sub__(self, other: object) -> Flags:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.difference(other)

    def __format__(self, format_spec: str) -> str:
        if format_spec and format_spec[-1] in "xXob":
            return format(self.BITS.to_unsigned(self.bits), format_spec)
        if format_spec and format_spec[-1] in "dn":
            return format(self.bits, format_spec)
        return format(str(self), format_spec)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        text = self.to_text() if self.bits != 0 else "0x0"
        bits_type = self.BITS
        return (
            f"{type(self).__name__}(flags={text!r}, "
            f"bits=0b{bits_type.format_binary(self.bits, pad=True)}, "
            f"octal=0o{bits_type.format_octal(self.bits, pad=True)}, "
            f"hex=0x{bits_type.format_hex(self.bits, pad=True)})"
        )


def _is_reserved(cls: type[Flags], name: str) -> bool:
    # Members of `Flags` itself, or names already bound on `cls` (first definition wins).
    return hasattr(Flags, name) or name in Flags.__annotations__ or name in cls.__dict__


def define_flags(
    name: str,
    bits_type: BitsType,
    flags: Mapping[str, int] | Iterable[tuple[str, int]] = (),
    *,
    extra_valid_bits: int = 0,
    external: bool = False,
    default: str | int | None = None,
    module: str | None = None,
) -> type[Flags]:
    """
    Create a `Flags` subclass at runtime.

    `external=True` marks every bit as known, for flags owned by a foreign source
    that may define new bits.
    """
    if external:
        descriptor = FlagSetDescriptor.external(bits_type, flags, default=default)
    else:
        descriptor = FlagSetDescriptor.build(bits_type, flags, extra_valid_bits, default)

    namespace: dict[str, Any] = {"__slots__": ()}
    if module is not None:
        namespace["__module__"] = module
    return type(name, (Flags,), namespace, descriptor=descriptor)
