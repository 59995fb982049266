"""Multidimensional index-space extents with static and dynamic sizes."""

from __future__ import annotations

import operator
from typing import Iterable, Iterator, SupportsIndex

DYNAMIC_EXTENT: int = 2**64 - 1
"""Marker for an extent whose value is only known at run time."""


class Extents:
    """The shape of a multidimensional index space.

    ``static_extents`` lists one entry per dimension: either a fixed size or
    :data:`DYNAMIC_EXTENT`. The remaining arguments give either the sizes of
    the dynamic dimensions only, or the sizes of every dimension (in which
    case the fixed ones must agree with ``static_extents``).
    """

    __slots__ = ("_static", "_values")

    def __init__(self, static_extents: Iterable[SupportsIndex], *args: SupportsIndex) -> None:
        static = tuple(operator.index(e) for e in static_extents)
        for e in static:
            if e < 0:
                raise ValueError(f"static extent must be non-negative, got {e}")
        sizes = [operator.index(a) for a in args]
        for size in sizes:
            if size < 0:
                raise ValueError(f"extent must be non-negative, got {size}")

        dynamic_count = sum(1 for e in static if e == DYNAMIC_EXTENT)
        if len(sizes) == dynamic_count:
            supplied = iter(sizes)
            values = tuple(next(supplied) if e == DYNAMIC_EXTENT else e for e in static)
        elif len(sizes) == len(static):
            for r, (fixed, given) in enumerate(zip(static, sizes)):
                if fixed != DYNAMIC_EXTENT and fixed != given:
                    raise ValueError(
                        f"extent {given} for dimension {r} conflicts with static extent {fixed}"
                    )
            values = tuple(sizes)
        else:
            raise ValueError(
                f"expected {dynamic_count} dynamic or {len(static)} total extents, got {len(sizes)}"
            )
        self._static = static
        self._values = values

    def rank(self) -> int:
        """Number of dimensions."""
        return len(self._static)

    def rank_dynamic(self) -> int:
        """Number of dimensions whose size is dynamic."""
        return sum(1 for e in self._static if e == DYNAMIC_EXTENT)

    def _check_rank_index(self, r: int) -> int:
        r = operator.index(r)
        if not 0 <= r < len(self._static):
            raise IndexError(f"dimension {r} out of range for rank {len(self._static)}")
        return r

    def static_extent(self, r: int) -> int:
        """The static size of dimension ``r``, or :data:`DYNAMIC_EXTENT`."""
        return self._static[self._check_rank_index(r)]

    def extent(self, r: int) -> int:
        """The actual size of dimension ``r``."""
        return self._values[self._check_rank_index(r)]

    @property
    def static_extents(self) -> tuple[int, ...]:
        return self._static

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Extents):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(self._values)

    def __repr__(self) -> str:
        parts = ", ".join("dyn" if e == DYNAMIC_EXTENT else str(e) for e in self._static)
        return f"Extents(({parts}), values={self._values})"


def dextents(*args: SupportsIndex) -> Extents:
    """Extents whose every dimension is dynamic, with the given sizes."""
    return Extents((DYNAMIC_EXTENT,) * len(args), *args)