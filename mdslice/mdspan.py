"""A multidimensional view over a flat sequence."""

from __future__ import annotations

import math
import operator
from typing import Any, MutableSequence, SupportsIndex, Union

from .extents import Extents
from .layouts import LayoutLeftMapping, LayoutRightMapping, LayoutStrideMapping
from .slicing import submdspan_mapping

Mapping = Union[LayoutLeftMapping, LayoutRightMapping, LayoutStrideMapping]


class MDSpan:
    """A view of ``data`` shaped by a layout mapping, starting at ``offset``.

    ``mapping`` may also be an :class:`Extents`, which selects a row-major
    layout.
    """

    __slots__ = ("_data", "_mapping", "_offset")

    def __init__(
        self,
        data: MutableSequence[Any],
        mapping: Union[Mapping, Extents],
        offset: SupportsIndex = 0,
    ) -> None:
        if isinstance(mapping, Extents):
            mapping = LayoutRightMapping(mapping)
        if not isinstance(mapping, (LayoutLeftMapping, LayoutRightMapping, LayoutStrideMapping)):
            raise TypeError(f"unsupported mapping type: {type(mapping).__name__}")
        offset = operator.index(offset)
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")
        span = mapping.required_span_size()
        if span and len(data) < offset + span:
            raise ValueError(
                f"data of length {len(data)} is too short for span of {span} at offset {offset}"
            )
        self._data = data
        self._mapping = mapping
        self._offset = offset

    @property
    def data(self) -> MutableSequence[Any]:
        return self._data

    @property
    def mapping(self) -> Mapping:
        return self._mapping

    @property
    def extents(self) -> Extents:
        return self._mapping.extents

    @property
    def offset(self) -> int:
        return self._offset

    def _position(self, indices: object) -> int:
        if not isinstance(indices, tuple):
            indices = (indices,)
        rank = self.rank()
        if len(indices) != rank:
            raise TypeError(f"expected {rank} indices, got {len(indices)}")
        normalized = []
        for r, i in enumerate(indices):
            i = operator.index(i)
            if not 0 <= i < self.extent(r):
                raise IndexError(f"index {i} out of range for dimension {r} of extent {self.extent(r)}")
            normalized.append(i)
        return self._offset + self._mapping(*normalized)

    def __getitem__(self, indices: object) -> Any:
        return self._data[self._position(indices)]

    def __setitem__(self, indices: object, value: Any) -> None:
        self._data[self._position(indices)] = value

    def extent(self, r: int) -> int:
        """Size of dimension ``r``."""
        return self._mapping.extents.extent(r)

    def rank(self) -> int:
        """Number of dimensions."""
        return self._mapping.extents.rank()

    def size(self) -> int:
        """Number of elements in the index space."""
        return math.prod(self._mapping.extents)

    def swap(self, other: "MDSpan") -> None:
        """Exchange the data, mapping and offset of two spans."""
        if not isinstance(other, MDSpan):
            raise TypeError(f"cannot swap with {type(other).__name__}")
        self._data, other._data = other._data, self._data
        self._mapping, other._mapping = other._mapping, self._mapping
        self._offset, other._offset = other._offset, self._offset

    def __repr__(self) -> str:
        return f"MDSpan({self._mapping!r}, offset={self._offset})"


def submdspan(src: MDSpan, *args: object) -> MDSpan:
    """A view of part of ``src`` described by one slice specifier per dimension."""
    if not isinstance(src, MDSpan):
        raise TypeError(f"expected MDSpan, got {type(src).__name__}")
    sub = submdspan_mapping(src.mapping, *args)
    return MDSpan(src.data, sub.mapping, src.offset + sub.offset)