"""Reduction and element-wise kernels over flat buffers and multidimensional spans."""

from __future__ import annotations

import operator
from typing import Any, MutableSequence, Sequence, SupportsIndex

from .mdspan import MDSpan, submdspan
from .strided_slice import FULL_EXTENT


def _dims(x: SupportsIndex, y: SupportsIndex, z: SupportsIndex) -> tuple[int, int, int]:
    dims = (operator.index(x), operator.index(y), operator.index(z))
    for d in dims:
        if d < 0:
            raise ValueError(f"dimension size must be non-negative, got {d}")
    return dims


def _check_buffer(data: Sequence[Any], x: int, y: int, z: int, name: str = "data") -> None:
    needed = x * y * z
    if len(data) < needed:
        raise ValueError(f"{name} of length {len(data)} is too short for {x}x{y}x{z} elements")


def _check_rank(span: MDSpan, rank: int) -> None:
    if not isinstance(span, MDSpan):
        raise TypeError(f"expected MDSpan, got {type(span).__name__}")
    if span.rank() != rank:
        raise ValueError(f"expected a span of rank {rank}, got rank {span.rank()}")


def raw_sum_1d(data: Sequence[Any]) -> Any:
    """Sum every element of a flat buffer in order."""
    return sum(data, 0)


def raw_sum_3d_right(data: Sequence[Any], x: SupportsIndex, y: SupportsIndex, z: SupportsIndex) -> Any:
    """Sum a row-major ``x`` by ``y`` by ``z`` buffer, last index fastest."""
    x, y, z = _dims(x, y, z)
    _check_buffer(data, x, y, z)
    return sum(
        (data[k + j * z + i * z * y] for i in range(x) for j in range(y) for k in range(z)),
        0,
    )


def raw_sum_3d_left(data: Sequence[Any], x: SupportsIndex, y: SupportsIndex, z: SupportsIndex) -> Any:
    """Sum a column-major ``x`` by ``y`` by ``z`` buffer, first index fastest."""
    x, y, z = _dims(x, y, z)
    _check_buffer(data, x, y, z)
    return sum(
        (data[i + j * x + k * x * y] for k in range(z) for j in range(y) for i in range(x)),
        0,
    )


def raw_sum_3d_right_iter_left(
    data: Sequence[Any], x: SupportsIndex, y: SupportsIndex, z: SupportsIndex
) -> Any:
    """Sum a row-major buffer while iterating with the first index fastest."""
    x, y, z = _dims(x, y, z)
    _check_buffer(data, x, y, z)
    return sum(
        (data[k + j * z + i * z * y] for k in range(z) for j in range(y) for i in range(x)),
        0,
    )


def mdspan_sum_3d_left(span: MDSpan) -> Any:
    """Sum a rank-3 span iterating with the first index fastest."""
    _check_rank(span, 3)
    e0, e1, e2 = span.extent(0), span.extent(1), span.extent(2)
    return sum((span[i, j, k] for k in range(e2) for j in range(e1) for i in range(e0)), 0)


def mdspan_sum_3d_right(span: MDSpan) -> Any:
    """Sum a rank-3 span iterating with the last index fastest."""
    _check_rank(span, 3)
    e0, e1, e2 = span.extent(0), span.extent(1), span.extent(2)
    return sum((span[i, j, k] for i in range(e0) for j in range(e1) for k in range(e2)), 0)


def mdspan_sum_subspan_3d_right(span: MDSpan) -> Any:
    """Sum a rank-3 span by taking a sub-span per leading index."""
    _check_rank(span, 3)
    total: Any = 0
    for i in range(span.extent(0)):
        sub_i = submdspan(span, i, FULL_EXTENT, FULL_EXTENT)
        for j in range(span.extent(1)):
            sub_ij = submdspan(sub_i, j, FULL_EXTENT)
            for k in range(span.extent(2)):
                total += sub_ij[k]
    return total


def mdspan_sum_subspan_md(span: MDSpan) -> Any:
    """Sum a span of any rank by recursively slicing off the leading dimension."""
    if not isinstance(span, MDSpan):
        raise TypeError(f"expected MDSpan, got {type(span).__name__}")
    rank = span.rank()
    if rank == 0:
        return span[()]
    rest = (FULL_EXTENT,) * (rank - 1)
    return sum(
        (mdspan_sum_subspan_md(submdspan(span, i, *rest)) for i in range(span.extent(0))),
        0,
    )


def mdspan_tiny_matrix_add(out: MDSpan, src: MDSpan) -> None:
    """Add ``src`` into ``out`` element by element; both are rank 3 of equal shape."""
    _check_rank(out, 3)
    _check_rank(src, 3)
    if tuple(out.extents) != tuple(src.extents):
        raise ValueError(
            f"extents differ: {tuple(out.extents)} and {tuple(src.extents)}"
        )
    for i in range(src.extent(0)):
        for j in range(src.extent(1)):
            for k in range(src.extent(2)):
                out[i, j, k] += src[i, j, k]


def raw_tiny_matrix_add_right(
    out: MutableSequence[Any],
    src: Sequence[Any],
    x: SupportsIndex,
    y: SupportsIndex,
    z: SupportsIndex,
) -> None:
    """Add a row-major ``src`` buffer into ``out`` element by element."""
    x, y, z = _dims(x, y, z)
    _check_buffer(out, x, y, z, "out")
    _check_buffer(src, x, y, z, "src")
    for i in range(x):
        for j in range(y):
            for k in range(z):
                pos = k + j * z + i * z * y
                out[pos] += src[pos]