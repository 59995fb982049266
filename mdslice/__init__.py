"""Multidimensional views over flat sequences, with layout mappings, sub-view slicing, kernels and benchmarks."""

__version__ = "0.1.0"
__all__ = ["extents", "strided_slice", "layouts", "slicing", "mdspan", "kernels", "parallel", "bench"]