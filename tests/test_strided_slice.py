import pytest

from mdslice.strided_slice import (
    FULL_EXTENT,
    FullExtent,
    IntegralConstant,
    StridedSlice,
    is_integral_constant,
)


def test_integral_constant_converts_to_int():
    c = IntegralConstant(3)
    assert int(c) == 3
    assert [10, 20, 30, 40][c] == 40


def test_integral_constant_rejects_non_int():
    with pytest.raises(TypeError):
        IntegralConstant(1.5)


def test_is_integral_constant():
    assert is_integral_constant(IntegralConstant(1)) is True
    assert is_integral_constant(1) is False
    assert is_integral_constant(FULL_EXTENT) is False


def test_strided_slice_keeps_fields():
    s = StridedSlice(1, IntegralConstant(3), 2)
    assert s.offset == 1
    assert s.extent == IntegralConstant(3)
    assert s.stride == 2


@pytest.mark.parametrize(
    "args",
    [(1.0, 2, 1), (1, "2", 1), (1, 2, None)],
)
def test_strided_slice_rejects_non_integral(args):
    with pytest.raises(TypeError):
        StridedSlice(*args)


def test_strided_slice_is_immutable():
    s = StridedSlice(0, 4, 1)
    with pytest.raises(AttributeError):
        s.offset = 2  # type: ignore[misc]
    assert s.offset == 0
    assert s.extent == 4


def test_full_extent_is_singleton():
    assert FullExtent() is FULL_EXTENT
    assert FullExtent() == FullExtent()