from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from .bits import BitsType
from .errors import InvalidFlagDefinitionError


@dataclass(frozen=True, slots=True)
class FlagDefinition:
    """A named bit pattern. Bits may be zero, multi-bit, or alias another definition."""

    name: str
    bits: int


@dataclass(frozen=True, slots=True)
class FlagSetDescriptor:
    """
    Immutable table describing one flag set type.

    - `flags`: definitions in declaration order; the order is a tie-break for
      lookup and decomposition, not cosmetic.
    - `extra_valid_bits`: bits treated as known without being named, for flag sets
      describing an externally controlled source that may grow new bits.
    - `default`: the value of `Flags()` and `Flags.default()`, given as the name of
      a definition or as raw bits; empty when unset.

    Descriptors are built once per flag set type and shared by every value of it.
    """

    bits_type: BitsType
    flags: tuple[FlagDefinition, ...] = ()
    extra_valid_bits: int = 0
    default: str | int | None = None

    # Derived masks, computed once in __post_init__
    all_named_bits: int = field(init=False, repr=False, compare=False)
    all_bits: int = field(init=False, repr=False, compare=False)
    default_bits: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        flags = tuple(self.flags)
        object.__setattr__(self, "flags", flags)

        named = 0
        for definition in flags:
            if not isinstance(definition, FlagDefinition):
                raise InvalidFlagDefinitionError(
                    f"Expected FlagDefinition, got {type(definition).__name__}"
                )
            if not self.bits_type.in_range(definition.bits):
                raise InvalidFlagDefinitionError(
                    f"Flag {definition.name!r} bits {definition.bits} do not fit "
                    f"{self.bits_type.name}"
                )
            named |= definition.bits

        if not self.bits_type.in_range(self.extra_valid_bits):
            raise InvalidFlagDefinitionError(
                f"Extra valid bits {self.extra_valid_bits} do not fit {self.bits_type.name}"
            )

        object.__setattr__(self, "all_named_bits", named)
        object.__setattr__(self, "all_bits", named | self.extra_valid_bits)
        object.__setattr__(self, "default_bits", self._resolve_default())

    def _resolve_default(self) -> int:
        if self.default is None:
            return 0
        if isinstance(self.default, str):
            definition = self.find(self.default)
            if definition is None:
                raise InvalidFlagDefinitionError(
                    f"Default flag {self.default!r} is not a defined flag"
                )
            return definition.bits
        if isinstance(self.default, bool) or not isinstance(self.default, int):
            raise InvalidFlagDefinitionError(
                f"Default must be a flag name or bits, got {type(self.default).__name__}"
            )
        if not self.bits_type.in_range(self.default):
            raise InvalidFlagDefinitionError(
                f"Default bits {self.default} do not fit {self.bits_type.name}"
            )
        return self.default

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(d.name for d in self.flags)

    def find(self, name: str) -> FlagDefinition | None:
        """Exact, case-sensitive lookup; the first definition in declaration order wins."""
        if not name:
            return None
        for definition in self.flags:
            if definition.name == name:
                return definition
        return None

    @classmethod
    def build(
        cls,
        bits_type: BitsType,
        flags: Mapping[str, int] | Iterable[tuple[str, int]] = (),
        extra_valid_bits: int = 0,
        default: str | int | None = None,
    ) -> FlagSetDescriptor:
        """
        Build a descriptor from a mapping or from `(name, bits)` pairs.

        Negative bits for unsigned types are wrapped into range, so `~0` can be used
        for "every bit".
        """
        items = flags.items() if isinstance(flags, Mapping) else flags
        definitions = tuple(
            FlagDefinition(name, _coerce_bits(bits_type, bits)) for name, bits in items
        )
        return cls(
            bits_type=bits_type,
            flags=definitions,
            extra_valid_bits=_coerce_bits(bits_type, extra_valid_bits),
            default=_coerce_bits(bits_type, default) if isinstance(default, int) else default,
        )

    @classmethod
    def external(
        cls,
        bits_type: BitsType,
        flags: Mapping[str, int] | Iterable[tuple[str, int]] = (),
        default: str | int | None = None,
    ) -> FlagSetDescriptor:
        """A descriptor whose every bit is known, for flags owned by a foreign source."""
        return cls.build(
            bits_type, flags, extra_valid_bits=bits_type.all_ones(), default=default
        )


def _coerce_bits(bits_type: BitsType, bits: int) -> int:
    if not bits_type.signed and bits < 0:
        return bits_type.normalize(bits)
    return bits
