"""
Unit tests for flagset.iterator.

Tests cover:
- IterNames decomposition order, overlap handling and remainder
- Iter final remainder value and the union round-trip
- Iteration over a type implementing only the accessor contract
"""

import pytest

from flagset import Flags, Iter, IterNames, SupportsFlags

from tests.helpers.factories import (
    EmptyFlags,
    ExternalFlags,
    OverlappingFlags,
    OverlappingFullFlags,
    RawFlags,
    SampleFlags,
    SampleFlagsInvert,
    SignedFlags,
    ZeroFlags,
    ZeroOneFlags,
)


def _names(value: Flags) -> list[str]:
    return [name for name, _ in value.iter_names()]


class TestIterNames:
    """Tests for IterNames."""

    def test_single_bits(self) -> None:
        assert _names(SampleFlags.A | SampleFlags.C) == ["A", "C"]

    def test_all_stops_before_convenience_flag(self) -> None:
        assert _names(SampleFlags.all()) == ["A", "B", "C"]

    def test_convenience_flag_first(self) -> None:
        assert _names(SampleFlagsInvert.all()) == ["ABC"]

    def test_yields_full_bit_patterns(self) -> None:
        it = IterNames(OverlappingFlags(0b111))
        assert [(name, flag.bits) for name, flag in it] == [("AB", 0b011), ("BC", 0b110)]
        assert it.remaining.is_empty

    def test_overlap_partially_contained(self) -> None:
        it = IterNames(OverlappingFlags(0b011))
        assert [name for name, _ in it] == ["AB"]
        assert it.remaining.is_empty

    def test_overlap_not_contained(self) -> None:
        it = IterNames(OverlappingFlags(0b010))
        assert list(it) == []
        assert it.remaining.bits == 0b010

    def test_full_alias_yields_first(self) -> None:
        assert _names(OverlappingFullFlags.C) == ["A"]
        assert _names(OverlappingFullFlags.C | OverlappingFullFlags.D) == ["A", "D"]

    def test_zero_flag_never_yielded(self) -> None:
        assert _names(ZeroFlags.all_bits()) == []
        assert _names(ZeroOneFlags.ONE) == ["ONE"]

    def test_remaining_unknown_bits(self) -> None:
        it = SampleFlags(0b1000_0101).iter_names()
        assert [name for name, _ in it] == ["A", "C"]
        assert it.remaining == SampleFlags(0b1000_0000)

    def test_remaining_before_iteration(self) -> None:
        it = SampleFlags.A.iter_names()
        assert it.remaining == SampleFlags.A

    def test_external_extra_bits_not_named(self) -> None:
        it = ExternalFlags(0b1011).iter_names()
        assert [name for name, _ in it] == ["A", "B"]
        assert it.remaining.bits == 0b1000

    def test_empty_value(self) -> None:
        assert _names(SampleFlags.empty()) == []

    def test_empty_descriptor(self) -> None:
        it = EmptyFlags(0x42).iter_names()
        assert list(it) == []
        assert it.remaining.bits == 0x42

    def test_signed(self) -> None:
        it = SignedFlags.all_bits().iter_names()
        assert [name for name, _ in it] == ["ONE", "HIGH"]
        assert it.remaining.bits == 0x7E

    def test_fused(self) -> None:
        it = SampleFlags.A.iter_names()
        assert list(it) == [("A", SampleFlags.A)]
        assert list(it) == []
        with pytest.raises(StopIteration):
            next(it)


class TestIter:
    """Tests for Iter."""

    def test_named_only(self) -> None:
        assert list(SampleFlags.A | SampleFlags.B) == [SampleFlags.A, SampleFlags.B]

    def test_remainder_is_last(self) -> None:
        values = list(SampleFlags(0b1000_0011).iter())
        assert values == [SampleFlags.A, SampleFlags.B, SampleFlags(0b1000_0000)]

    def test_only_remainder(self) -> None:
        assert list(OverlappingFlags(0b010)) == [OverlappingFlags(0b010)]

    def test_empty_value_yields_nothing(self) -> None:
        assert list(SampleFlags.empty()) == []
        assert list(EmptyFlags.empty()) == []

    def test_fused(self) -> None:
        it = Iter(SampleFlags(0b1000_0000))
        assert list(it) == [SampleFlags(0b1000_0000)]
        assert list(it) == []

    @pytest.mark.parametrize(
        "flags_type",
        [SampleFlags, SampleFlagsInvert, OverlappingFlags, OverlappingFullFlags, ZeroFlags],
    )
    def test_union_round_trip(self, flags_type: type[Flags]) -> None:
        for bits in range(256):
            value = flags_type(bits)
            assert flags_type.from_iterable(value) == value

    def test_union_round_trip_signed(self) -> None:
        for bits in range(-128, 128):
            value = SignedFlags(bits)
            assert SignedFlags.from_iterable(value.iter()) == value


class TestAccessorContract:
    """Iteration over a type that only implements the accessor contract."""

    def test_supports_flags(self) -> None:
        assert isinstance(RawFlags(1), SupportsFlags)
        assert isinstance(SampleFlags.A, SupportsFlags)

    def test_iter_names(self) -> None:
        it = IterNames(RawFlags(0b111))
        assert [(name, flag.bits) for name, flag in it] == [("X", 1), ("Y", 2)]
        assert it.remaining.bits == 0b100

    def test_iter(self) -> None:
        assert [flag.bits for flag in Iter(RawFlags(0b101))] == [1, 0b100]
