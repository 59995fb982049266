"""Layout mappings from multidimensional indices to linear offsets."""

from __future__ import annotations

import math
import operator
from typing import Iterable, SupportsIndex

from .extents import Extents


class _Mapping:
    """Shared storage and index handling for layout mappings."""

    __slots__ = ("_extents",)

    def __init__(self, extents: Extents) -> None:
        if not isinstance(extents, Extents):
            raise TypeError(f"expected Extents, got {type(extents).__name__}")
        self._extents = extents

    @property
    def extents(self) -> Extents:
        return self._extents

    def stride(self, r: int) -> int:  # pragma: no cover - overridden
        raise NotImplementedError

    def _offset(self, indices: tuple[SupportsIndex, ...]) -> int:
        rank = self._extents.rank()
        if len(indices) != rank:
            raise TypeError(f"expected {rank} indices, got {len(indices)}")
        return sum(operator.index(i) * self.stride(r) for r, i in enumerate(indices))

    def _product(self, dims: Iterable[int]) -> int:
        return math.prod(self._extents.extent(r) for r in dims)

    def _check_rank_index(self, r: int) -> int:
        r = operator.index(r)
        if not 0 <= r < self._extents.rank():
            raise IndexError(f"dimension {r} out of range for rank {self._extents.rank()}")
        return r

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._extents!r})"


class LayoutLeftMapping(_Mapping):
    """Column-major mapping: the leftmost index varies fastest."""

    __slots__ = ()

    def __init__(self, extents: Extents) -> None:
        super().__init__(extents)

    @classmethod
    def from_mapping(cls, other: _Mapping) -> "LayoutLeftMapping":
        """Build from another mapping that describes the same layout."""
        if isinstance(other, LayoutLeftMapping):
            return cls(other.extents)
        if isinstance(other, LayoutRightMapping):
            if other.extents.rank() > 1:
                raise ValueError("only mappings of rank 0 or 1 convert from layout_right to layout_left")
            return cls(other.extents)
        if isinstance(other, LayoutStrideMapping):
            result = cls(other.extents)
            expected = 1
            for r in range(other.extents.rank()):
                if other.stride(r) != expected:
                    raise ValueError("Assigning layout_stride to layout_left with invalid strides.")
                expected *= other.extents.extent(r)
            return result
        raise TypeError(f"cannot build a layout_left mapping from {type(other).__name__}")

    def required_span_size(self) -> int:
        return self._product(range(self._extents.rank()))

    def __call__(self, *args: SupportsIndex) -> int:
        return self._offset(args)

    def stride(self, r: int) -> int:
        return self._product(range(self._check_rank_index(r)))

    def is_unique(self) -> bool:
        return True

    def is_exhaustive(self) -> bool:
        return True

    def is_strided(self) -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LayoutLeftMapping):
            return NotImplemented
        return self._extents == other._extents

    def __hash__(self) -> int:
        return hash(("left", self._extents))


class LayoutRightMapping(_Mapping):
    """Row-major mapping: the rightmost index varies fastest."""

    __slots__ = ()

    def __init__(self, extents: Extents) -> None:
        super().__init__(extents)

    def required_span_size(self) -> int:
        return self._product(range(self._extents.rank()))

    def __call__(self, *args: SupportsIndex) -> int:
        return self._offset(args)

    def stride(self, r: int) -> int:
        r = self._check_rank_index(r)
        return self._product(range(r + 1, self._extents.rank()))

    def is_unique(self) -> bool:
        return True

    def is_exhaustive(self) -> bool:
        return True

    def is_strided(self) -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LayoutRightMapping):
            return NotImplemented
        return self._extents == other._extents

    def __hash__(self) -> int:
        return hash(("right", self._extents))


class LayoutStrideMapping(_Mapping):
    """Mapping with an arbitrary stride for every dimension."""

    __slots__ = ("_strides",)

    def __init__(self, extents: Extents, strides: Iterable[SupportsIndex]) -> None:
        super().__init__(extents)
        values = tuple(operator.index(s) for s in strides)
        if len(values) != extents.rank():
            raise ValueError(f"expected {extents.rank()} strides, got {len(values)}")
        for s in values:
            if s < 0:
                raise ValueError(f"stride must be non-negative, got {s}")
        self._strides = values

    def strides(self) -> tuple[int, ...]:
        return self._strides

    def required_span_size(self) -> int:
        sizes = list(self._extents)
        if any(e == 0 for e in sizes):
            return 0
        return 1 + sum((e - 1) * s for e, s in zip(sizes, self._strides))

    def __call__(self, *args: SupportsIndex) -> int:
        return self._offset(args)

    def stride(self, r: int) -> int:
        return self._strides[self._check_rank_index(r)]

    def is_unique(self) -> bool:
        return True

    def is_exhaustive(self) -> bool:
        return self.required_span_size() == math.prod(self._extents)

    def is_strided(self) -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (LayoutStrideMapping, LayoutLeftMapping, LayoutRightMapping)):
            return NotImplemented
        if self._extents != other.extents:
            return False
        return all(self._strides[r] == other.stride(r) for r in range(self._extents.rank()))

    def __hash__(self) -> int:
        return hash(("stride", self._extents, self._strides))

    def __repr__(self) -> str:
        return f"LayoutStrideMapping({self._extents!r}, strides={self._strides})"