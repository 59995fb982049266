"""Thread-parallel reductions and element-wise additions over 3-D data."""

from __future__ import annotations

import operator
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, MutableSequence, Sequence, SupportsIndex, TypeVar

from .mdspan import MDSpan

_T = TypeVar("_T")


def _workers(workers: SupportsIndex) -> int:
    count = operator.index(workers)
    if count <= 0:
        raise ValueError(f"workers must be positive, got {count}")
    return count


def _dims(x: SupportsIndex, y: SupportsIndex, z: SupportsIndex) -> tuple[int, int, int]:
    dims = (operator.index(x), operator.index(y), operator.index(z))
    for d in dims:
        if d < 0:
            raise ValueError(f"dimension size must be non-negative, got {d}")
    return dims


def _check_buffer(data: Sequence[Any], x: int, y: int, z: int, name: str) -> None:
    if len(data) < x * y * z:
        raise ValueError(f"{name} of length {len(data)} is too short for {x}x{y}x{z} elements")


def _check_rank3(span: MDSpan, name: str) -> None:
    if not isinstance(span, MDSpan):
        raise TypeError(f"{name} must be an MDSpan, got {type(span).__name__}")
    if span.rank() != 3:
        raise ValueError(f"{name} must have rank 3, got rank {span.rank()}")


def _run(workers: int, task: Callable[[int], _T]) -> list[_T]:
    """Run ``task(worker)`` for every worker id on a thread pool."""
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(task, range(workers)))


def first_touch_3d(span: MDSpan) -> None:
    """Set every element of a rank-3 span to zero."""
    _check_rank3(span, "span")
    for i in range(span.extent(0)):
        for j in range(span.extent(1)):
            for k in range(span.extent(2)):
                span[i, j, k] = 0


def chunk_bounds(extent: SupportsIndex, workers: SupportsIndex, worker: SupportsIndex) -> tuple[int, int]:
    """The half-open range of leading indices that ``worker`` handles.

    The first ``extent % workers`` workers take one index more than the rest,
    so that the ranges of all workers cover ``range(extent)`` contiguously.
    """
    extent = operator.index(extent)
    count = _workers(workers)
    worker = operator.index(worker)
    if extent < 0:
        raise ValueError(f"extent must be non-negative, got {extent}")
    if not 0 <= worker < count:
        raise IndexError(f"worker {worker} out of range for {count} workers")
    size, extra = divmod(extent, count)
    start = size * worker
    if worker < extra:
        size += 1
        start += worker
    else:
        start += extra
    return start, start + size


def parallel_sum_3d(span: MDSpan, workers: SupportsIndex) -> Any:
    """Sum a rank-3 span, dealing leading indices to workers round-robin."""
    _check_rank3(span, "span")
    count = _workers(workers)
    e0, e1, e2 = span.extent(0), span.extent(1), span.extent(2)

    def partial(worker: int) -> Any:
        return sum(
            (span[i, j, k] for i in range(worker, e0, count) for j in range(e1) for k in range(e2)),
            0,
        )

    return sum(_run(count, partial), 0)


def parallel_raw_sum_3d(
    data: Sequence[Any],
    x: SupportsIndex,
    y: SupportsIndex,
    z: SupportsIndex,
    workers: SupportsIndex,
) -> Any:
    """Sum a row-major buffer, dealing leading indices to workers round-robin."""
    x, y, z = _dims(x, y, z)
    count = _workers(workers)
    _check_buffer(data, x, y, z, "data")

    def partial(worker: int) -> Any:
        return sum(
            (data[k + j * z + i * z * y] for i in range(worker, x, count) for j in range(y) for k in range(z)),
            0,
        )

    return sum(_run(count, partial), 0)


def parallel_tiny_matrix_add(out: MDSpan, src: MDSpan, workers: SupportsIndex) -> None:
    """Add ``src`` into ``out``; each worker handles a contiguous block of leading indices."""
    _check_rank3(out, "out")
    _check_rank3(src, "src")
    if tuple(out.extents) != tuple(src.extents):
        raise ValueError(f"extents differ: {tuple(out.extents)} and {tuple(src.extents)}")
    count = _workers(workers)
    e0, e1, e2 = src.extent(0), src.extent(1), src.extent(2)

    def add(worker: int) -> None:
        start, end = chunk_bounds(e0, count, worker)
        for i in range(start, end):
            for j in range(e1):
                for k in range(e2):
                    out[i, j, k] += src[i, j, k]

    _run(count, add)


def _raw_add(
    out: MutableSequence[Any],
    src: Sequence[Any],
    x: SupportsIndex,
    y: SupportsIndex,
    z: SupportsIndex,
    workers: SupportsIndex,
    position: Callable[[int, int, int, int, int, int], int],
) -> None:
    x, y, z = _dims(x, y, z)
    count = _workers(workers)
    _check_buffer(out, x, y, z, "out")
    _check_buffer(src, x, y, z, "src")

    def add(worker: int) -> None:
        start, end = chunk_bounds(x, count, worker)
        for i in range(start, end):
            for j in range(y):
                for k in range(z):
                    pos = position(i, j, k, x, y, z)
                    out[pos] += src[pos]

    _run(count, add)


def parallel_raw_tiny_matrix_add_right(
    out: MutableSequence[Any],
    src: Sequence[Any],
    x: SupportsIndex,
    y: SupportsIndex,
    z: SupportsIndex,
    workers: SupportsIndex,
) -> None:
    """Add a row-major ``src`` buffer into ``out`` using several workers."""
    _raw_add(out, src, x, y, z, workers, lambda i, j, k, x_, y_, z_: k + j * z_ + i * y_ * z_)


def parallel_raw_tiny_matrix_add_left(
    out: MutableSequence[Any],
    src: Sequence[Any],
    x: SupportsIndex,
    y: SupportsIndex,
    z: SupportsIndex,
    workers: SupportsIndex,
) -> None:
    """Add a column-major ``src`` buffer into ``out`` using several workers."""
    _raw_add(out, src, x, y, z, workers, lambda i, j, k, x_, y_, z_: k * x_ * y_ + j * x_ + i)