"""Computing the extents and layout mapping of a slice of a multidimensional span."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .extents import DYNAMIC_EXTENT, Extents
from .layouts import LayoutLeftMapping, LayoutRightMapping, LayoutStrideMapping
from .strided_slice import FullExtent, IntegralConstant, StridedSlice, is_integral_constant

Mapping = Union[LayoutLeftMapping, LayoutRightMapping, LayoutStrideMapping]
SliceBound = Union[int, IntegralConstant]


@dataclass(frozen=True)
class MappingOffset:
    """A sub-mapping together with the offset of its first element in the source."""

    mapping: Mapping
    offset: int


def _is_index(slice_: object) -> bool:
    return isinstance(slice_, (int, IntegralConstant))


def _is_pair(slice_: object) -> bool:
    return (
        isinstance(slice_, tuple)
        and len(slice_) == 2
        and all(_is_index(bound) for bound in slice_)
    )


def _check_slice(slice_: object) -> None:
    if not (
        _is_index(slice_)
        or _is_pair(slice_)
        or isinstance(slice_, (FullExtent, StridedSlice))
    ):
        raise TypeError(f"unsupported slice specifier: {slice_!r}")


def first_of(slice_: object) -> SliceBound:
    """The first index a slice specifier selects."""
    if _is_index(slice_):
        return slice_  # type: ignore[return-value]
    if isinstance(slice_, FullExtent):
        return IntegralConstant(0)
    if _is_pair(slice_):
        return slice_[0]  # type: ignore[index]
    if isinstance(slice_, StridedSlice):
        return slice_.offset
    raise TypeError(f"unsupported slice specifier: {slice_!r}")


def last_of(k: int, extents: Extents, slice_: object) -> SliceBound:
    """The end of the range a slice specifier selects in dimension ``k``."""
    if _is_index(slice_):
        return slice_  # type: ignore[return-value]
    if isinstance(slice_, FullExtent):
        static = extents.static_extent(k)
        if static == DYNAMIC_EXTENT:
            return extents.extent(k)
        return IntegralConstant(static)
    if _is_pair(slice_):
        return slice_[1]  # type: ignore[index]
    if isinstance(slice_, StridedSlice):
        return slice_.extent
    raise TypeError(f"unsupported slice specifier: {slice_!r}")


def stride_of(slice_: object) -> SliceBound:
    """The step a slice specifier takes between selected indices."""
    if isinstance(slice_, StridedSlice):
        return slice_.stride
    return IntegralConstant(1)


def _strided_count(extent: int, stride: int) -> int:
    if extent <= 0:
        return 0
    if stride <= 0:
        raise ValueError(f"stride must be positive for a non-empty strided slice, got {stride}")
    return 1 + (extent - 1) // stride


def submdspan_extents(src_extents: Extents, *args: object) -> Extents:
    """Extents of the slice of ``src_extents`` described by one specifier per dimension."""
    if len(args) != src_extents.rank():
        raise ValueError(f"expected {src_extents.rank()} slice specifiers, got {len(args)}")
    static: list[int] = []
    values: list[int] = []
    for k, slice_ in enumerate(args):
        _check_slice(slice_)
        if _is_index(slice_):
            continue
        if isinstance(slice_, StridedSlice):
            count = _strided_count(int(slice_.extent), int(slice_.stride))
            known = is_integral_constant(slice_.extent) and is_integral_constant(slice_.stride)
            static.append(count if known else DYNAMIC_EXTENT)
            values.append(count)
            continue
        first = first_of(slice_)
        last = last_of(k, src_extents, slice_)
        size = int(last) - int(first)
        known = is_integral_constant(first) and is_integral_constant(last)
        static.append(size if known else DYNAMIC_EXTENT)
        values.append(size)
    return Extents(static, *values)


def _preserves_left(slices: tuple[object, ...], sub_rank: int) -> bool:
    if sub_rank == 0:
        return True
    return all(
        idx > sub_rank - 1
        or isinstance(slice_, FullExtent)
        or (idx == sub_rank - 1 and _is_pair(slice_))
        for idx, slice_ in enumerate(slices)
    )


def _preserves_right(slices: tuple[object, ...], sub_rank: int) -> bool:
    if sub_rank == 0:
        return True
    boundary = len(slices) - sub_rank
    return all(
        idx < boundary
        or isinstance(slice_, FullExtent)
        or (idx == boundary and _is_pair(slice_))
        for idx, slice_ in enumerate(slices)
    )


def _sub_strides(src_mapping: Mapping, slices: tuple[object, ...]) -> list[int]:
    return [
        src_mapping.stride(k) * int(stride_of(slice_))
        for k, slice_ in enumerate(slices)
        if not _is_index(slice_)
    ]


def submdspan_mapping(src_mapping: Mapping, *args: object) -> MappingOffset:
    """The mapping and starting offset of a slice of ``src_mapping``."""
    if not isinstance(src_mapping, (LayoutLeftMapping, LayoutRightMapping, LayoutStrideMapping)):
        raise TypeError(f"unsupported mapping type: {type(src_mapping).__name__}")
    dst_extents = submdspan_extents(src_mapping.extents, *args)
    offset = src_mapping(*(int(first_of(slice_)) for slice_ in args))
    sub_rank = dst_extents.rank()

    if isinstance(src_mapping, LayoutLeftMapping) and _preserves_left(args, sub_rank):
        return MappingOffset(LayoutLeftMapping(dst_extents), offset)
    if isinstance(src_mapping, LayoutRightMapping) and _preserves_right(args, sub_rank):
        return MappingOffset(LayoutRightMapping(dst_extents), offset)
    strides = _sub_strides(src_mapping, args)
    return MappingOffset(LayoutStrideMapping(dst_extents, strides), offset)