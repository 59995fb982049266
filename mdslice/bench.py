"""Timed summation benchmarks over flat buffers and rank-3 spans."""

from __future__ import annotations

import argparse
import random
import re
import sys
import time
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from .extents import Extents, dextents
from .kernels import (
    mdspan_sum_3d_left,
    mdspan_sum_3d_right,
    raw_sum_1d,
    raw_sum_3d_left,
    raw_sum_3d_right,
)
from .layouts import LayoutLeftMapping, LayoutRightMapping
from .mdspan import MDSpan

ELEMENT_SIZE = 4
"""Bytes counted per element, the size of a 32-bit integer."""

_SEED = 0
_FILL_LOW = 0
_FILL_HIGH = 127


@dataclass(frozen=True)
class BenchmarkResult:
    """Outcome of running one benchmark for a number of iterations."""

    name: str
    iterations: int
    elements: int
    elapsed: float
    bytes_processed: int
    checksum: Any

    @property
    def bytes_per_second(self) -> float:
        if self.elapsed <= 0:
            return float("inf")
        return self.bytes_processed / self.elapsed


@dataclass(frozen=True)
class _Benchmark:
    name: str
    elements: int
    prepare: Callable[[list[int]], Callable[[], Any]]


_REGISTRY: dict[str, _Benchmark] = {}


def _register(name: str, elements: int, prepare: Callable[[list[int]], Callable[[], Any]]) -> None:
    _REGISTRY.setdefault(name, _Benchmark(name, elements, prepare))


def _register_raw_1d(size: int) -> None:
    _register(f"BM_Raw_Sum_1D/size_{size}", size, lambda data: lambda: raw_sum_1d(data))


def _register_raw_3d(kernel_name: str, kernel: Callable[..., Any], x: int, y: int, z: int) -> None:
    _register(
        f"{kernel_name}/size_{x}_{y}_{z}",
        x * y * z,
        lambda data: lambda: kernel(data, x, y, z),
    )


def _register_mdspan_3d(
    kernel_name: str,
    kernel: Callable[[MDSpan], Any],
    prefix: str,
    layout: type,
    x: int,
    y: int,
    z: int,
) -> None:
    """Register a static-extent and a dynamic-extent variant of a span benchmark."""
    variants = {
        "static": lambda: Extents((x, y, z)),
        "dynamic": lambda: dextents(x, y, z),
    }
    for kind, make_extents in variants.items():

        def prepare(data: list[int], make_extents: Callable[[], Extents] = make_extents) -> Callable[[], Any]:
            span = MDSpan(data, layout(make_extents()), 0)
            return lambda: kernel(span)

        _register(f"{kernel_name}/{prefix}{x}_{y}_{z}_{kind}", x * y * z, prepare)


def _build_registry() -> None:
    for size in (20, 200):
        _register_mdspan_3d("BM_MDSpan_Sum_3D_left", mdspan_sum_3d_left, "left_", LayoutLeftMapping, size, size, size)
        _register_mdspan_3d("BM_MDSpan_Sum_3D_left", mdspan_sum_3d_left, "right_", LayoutRightMapping, size, size, size)
    _register_raw_1d(8000)
    _register_raw_1d(8000000)
    for size in (20, 200):
        _register_raw_3d("BM_Raw_Sum_3D_left", raw_sum_3d_left, size, size, size)
    for size in (20, 200):
        _register_raw_3d("BM_Raw_Static_Sum_3D_left", raw_sum_3d_left, size, size, size)

    for size in (20, 200):
        _register_mdspan_3d("BM_MDSpan_Sum_3D_right", mdspan_sum_3d_right, "right_", LayoutRightMapping, size, size, size)
        _register_mdspan_3d("BM_MDSpan_Sum_3D_right", mdspan_sum_3d_right, "left_", LayoutLeftMapping, size, size, size)
    for size in (20, 200):
        _register_raw_3d("BM_Raw_Sum_3D_right", raw_sum_3d_right, size, size, size)
    for size in (20, 200):
        _register_raw_3d("BM_Raw_Static_Sum_3D_right", raw_sum_3d_right, size, size, size)


_build_registry()


def _fill_random(count: int) -> list[int]:
    rng = random.Random(_SEED)
    return [rng.randint(_FILL_LOW, _FILL_HIGH) for _ in range(count)]


def available_benchmarks() -> tuple[str, ...]:
    """Names of every registered benchmark, in registration order."""
    return tuple(_REGISTRY)


def run_benchmark(name: str, iterations: int = 1) -> BenchmarkResult:
    """Run the named benchmark ``iterations`` times and report its timing."""
    try:
        bench = _REGISTRY[name]
    except KeyError:
        raise KeyError(f"unknown benchmark: {name}") from None
    if not isinstance(iterations, int) or iterations <= 0:
        raise ValueError(f"iterations must be a positive integer, got {iterations!r}")

    data = _fill_random(bench.elements)
    run = bench.prepare(data)
    checksum: Any = 0
    start = time.perf_counter()
    for _ in range(iterations):
        checksum = run()
    elapsed = time.perf_counter() - start
    return BenchmarkResult(
        name=name,
        iterations=iterations,
        elements=bench.elements,
        elapsed=elapsed,
        bytes_processed=bench.elements * ELEMENT_SIZE * iterations,
        checksum=checksum,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point: list or run benchmarks."""
    parser = argparse.ArgumentParser(prog="mdslice-bench", description="Run summation benchmarks.")
    parser.add_argument("--list", action="store_true", help="list benchmark names and exit")
    parser.add_argument("--filter", default="", help="regular expression selecting benchmarks")
    parser.add_argument("--iterations", type=int, default=1, help="iterations per benchmark")
    args = parser.parse_args(argv)

    if args.iterations <= 0:
        parser.error("--iterations must be positive")
    try:
        pattern = re.compile(args.filter)
    except re.error as exc:
        parser.error(f"invalid --filter: {exc}")

    selected = [name for name in available_benchmarks() if pattern.search(name)]
    if not selected:
        print(f"Failed to match any benchmarks against regex: {args.filter}", file=sys.stderr)
        return 1

    if args.list:
        for name in selected:
            print(name)
        return 0

    width = max(len(name) for name in selected)
    for name in selected:
        result = run_benchmark(name, args.iterations)
        print(
            f"{name:<{width}}  {result.iterations:>6} it  {result.elapsed * 1e3:>10.3f} ms  "
            f"{result.bytes_per_second / 2**20:>10.2f} MiB/s  checksum={result.checksum}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())