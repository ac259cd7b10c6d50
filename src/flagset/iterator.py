"""
Decomposition of a flags value into the named flags that explain it.

`IterNames` walks the known flags in declaration order and yields every flag that
is fully contained in the source value and still covers at least one bit not
claimed by an earlier yielded flag. The yielded value is the flag's full bit
pattern, so partially overlapping flags are both yielded while a convenience flag
fully covered by earlier ones is skipped. Bits never attributed to a yielded flag
are left in `remaining`.

`Iter` yields the same values followed, once, by the non-empty remainder, so the
union of everything it yields is the source value.
"""

from __future__ import annotations

from typing import Generic

from .protocol import F


class IterNames(Generic[F]):
    """Iterator over `(name, flag)` pairs of contained, named flags."""

    __slots__ = ("_cls", "_flags", "_index", "_source", "_remaining")

    def __init__(self, value: F) -> None:
        self._cls = type(value)
        self._flags = self._cls.KNOWN_FLAGS
        self._index = 0
        self._source = value.bits
        self._remaining = value.bits

    @property
    def remaining(self) -> F:
        """
        Bits not yet attributed to a yielded named flag.

        Once iteration has finished these are the unknown bits plus any bits of named
        flags that were not fully contained in the source.
        """
        return self._cls.from_bits_retain(self._remaining)

    def __iter__(self) -> IterNames[F]:
        return self

    def __next__(self) -> tuple[str, F]:
        while self._index < len(self._flags):
            if self._remaining == 0:
                raise StopIteration

            name, flag = self._flags[self._index]
            self._index += 1

            bits = flag.bits
            if (self._source & bits) == bits and (self._remaining & bits) != 0:
                self._remaining &= ~bits
                return name, self._cls.from_bits_retain(bits)

        raise StopIteration


class Iter(Generic[F]):
    """Iterator over contained named flags, then any remaining bits as one value."""

    __slots__ = ("_inner", "_done")

    def __init__(self, value: F) -> None:
        self._inner: IterNames[F] = IterNames(value)
        self._done = False

    def __iter__(self) -> Iter[F]:
        return self

    def __next__(self) -> F:
        if self._done:
            raise StopIteration
        for _, flag in self._inner:
            return flag

        self._done = True
        remaining = self._inner.remaining
        if remaining.bits != 0:
            return remaining
        raise StopIteration
