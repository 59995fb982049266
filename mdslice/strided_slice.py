"""Slice specifiers: integral constants, strided slices and the full-extent tag."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class IntegralConstant:
    """An integer whose value is fixed when the slice is described."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int):
            raise TypeError(f"IntegralConstant value must be an int, got {type(self.value).__name__}")

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value


def is_integral_constant(value: object) -> bool:
    """Whether ``value`` is an :class:`IntegralConstant`."""
    return isinstance(value, IntegralConstant)


SliceInt = Union[int, IntegralConstant]


def _check_slice_int(name: str, value: object) -> None:
    if not isinstance(value, (int, IntegralConstant)):
        raise TypeError(f"{name} must be an int or IntegralConstant, got {type(value).__name__}")


@dataclass(frozen=True)
class StridedSlice:
    """Select ``extent`` indices from ``offset`` with the given ``stride``."""

    offset: SliceInt
    extent: SliceInt
    stride: SliceInt

    def __post_init__(self) -> None:
        _check_slice_int("offset", self.offset)
        _check_slice_int("extent", self.extent)
        _check_slice_int("stride", self.stride)


class FullExtent:
    """Tag selecting the whole range of a dimension."""

    _instance: "FullExtent | None" = None

    def __new__(cls) -> "FullExtent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "FULL_EXTENT"


FULL_EXTENT = FullExtent()