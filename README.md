# mdslice

Non-owning multidimensional views over flat Python sequences. The package
maps multidimensional indices to offsets in the flat buffer and can slice
views into sub-views. It needs nothing beyond the standard library.

## What it provides

- `mdslice.extents`
  - `Extents(static_extents, *sizes)` is the shape of a view. Each entry of
    `static_extents` is either a fixed size or `DYNAMIC_EXTENT`.
  - The sizes that follow give either the dynamic dimensions only or every
    dimension.
  - `dextents(*sizes)` builds extents in which every dimension is dynamic.
  - Extents have `rank()`, `rank_dynamic()`, `static_extent(r)` and
    `extent(r)`.
- `mdslice.layouts`: mappings from a multidimensional index to an offset.
  - `LayoutRightMapping` is row-major: the last index varies fastest.
  - `LayoutLeftMapping` is column-major: the first index varies fastest.
    `LayoutLeftMapping.from_mapping` converts another mapping when the
    layouts agree, and raises `ValueError` when they do not.
  - `LayoutStrideMapping(extents, strides)` takes one stride per dimension.
  - Every mapping is called with the indices and offers `stride(r)`,
    `required_span_size()`, `is_unique()`, `is_exhaustive()` and
    `is_strided()`.
- `mdslice.strided_slice`: slice specifiers.
  - `IntegralConstant(value)` is a value fixed ahead of time.
  - `StridedSlice(offset, extent, stride)` selects `extent` indices from
    `offset`, taking every `stride`-th one.
  - `FullExtent()` (also available as `FULL_EXTENT`) keeps a whole dimension.
  - Beyond these, a slice may be a plain integer, which removes the
    dimension, or a `(begin, end)` pair.
- `mdslice.slicing`: computing sub-views.
  - `submdspan_extents` gives the shape of a sub-view. A dimension stays
    static when its bounds are `IntegralConstant`s.
  - `submdspan_mapping` gives a `MappingOffset`: the sub-mapping together
    with the offset at which the sub-view starts.
  - A sub-view keeps the row-major or column-major layout where it can and
    otherwise uses a strided layout.
  - `first_of`, `last_of` and `stride_of` inspect individual slice
    specifiers.
- `mdslice.mdspan`: views and sub-views.
  - `MDSpan(data, mapping, offset=0)` is a view of a mutable sequence. It
    reads and writes elements with `span[i, j, k]`.
  - The `mapping` argument may also be an `Extents`, which gives a row-major
    view.
  - A view offers `extent(r)`, `rank()`, `size()` and `swap(other)`.
  - `submdspan(src, *slices)` returns a view of part of `src`.
- `mdslice.kernels`: serial kernels.
  - Sums over flat buffers: `raw_sum_1d` and the `raw_sum_3d_*` variants.
  - Sums over rank-3 views: `mdspan_sum_3d_left`, `mdspan_sum_3d_right` and
    `mdspan_sum_subspan_3d_right`.
  - `mdspan_sum_subspan_md` sums a view of any rank.
  - Element-wise addition: `mdspan_tiny_matrix_add` and
    `raw_tiny_matrix_add_right`.
- `mdslice.parallel`: thread-pool versions of the same kernels, each taking
  a `workers` count.
  - Sums: `parallel_sum_3d` and `parallel_raw_sum_3d`.
  - Element-wise addition: `parallel_tiny_matrix_add`,
    `parallel_raw_tiny_matrix_add_right` and
    `parallel_raw_tiny_matrix_add_left`.
  - Helpers: `chunk_bounds` and `first_touch_3d`.
- `mdslice.bench`: a timed benchmark runner.

## Installing

```
pip install .
```

## Example

```python
from mdslice.extents import dextents
from mdslice.layouts import LayoutRightMapping
from mdslice.mdspan import MDSpan, submdspan
from mdslice.strided_slice import FULL_EXTENT

data = list(range(12))
span = MDSpan(data, LayoutRightMapping(dextents(3, 4)), 0)

span[1, 2]                            # 6
row = submdspan(span, 1, FULL_EXTENT)
row.extent(0)                         # 4
row[3]                                # 7

span[0, 0] = 100                      # writes through to data[0]
```

## Benchmarks

The `mdslice-bench` command times summations. It compares sums over raw flat
buffers with sums through views in both layouts, and it runs each view
benchmark with static and with dynamic extents. The buffers are filled with
seeded random integers.

List the benchmark names:

```
mdslice-bench --list
```

Run the benchmarks whose names match a regular expression, repeating each a
number of times:

```
mdslice-bench --filter BM_Raw_Sum_3D_right --iterations 10
```

Without `--filter`, every benchmark runs. If no name matches, the command
exits with status 1.

From code, `available_benchmarks()` returns the names. `run_benchmark(name,
iterations)` returns a `BenchmarkResult`, which holds the elapsed time, the
bytes processed, the throughput and a checksum.

### What the runner does not cover

The runner registers summation benchmarks only. The element-wise addition
kernels and the thread-parallel kernels can be called from code, but there
are no benchmarks for them. Timing is a plain wall-clock loop: there is no
warm-up and no statistics across repetitions.

## Running the tests

```
pip install .[test]
pytest
```