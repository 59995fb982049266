import pytest

from mdslice.extents import DYNAMIC_EXTENT, Extents, dextents
from mdslice.layouts import LayoutLeftMapping, LayoutRightMapping, LayoutStrideMapping
from mdslice.slicing import (
    MappingOffset,
    first_of,
    last_of,
    stride_of,
    submdspan_extents,
    submdspan_mapping,
)
from mdslice.strided_slice import FULL_EXTENT, IntegralConstant, StridedSlice

DYN = DYNAMIC_EXTENT
IC = IntegralConstant
F = FULL_EXTENT
L = LayoutLeftMapping
R = LayoutRightMapping
S = LayoutStrideMapping

ddd = dextents(3, 4, 5)
s345 = Extents((3, 4, 5))
dd = dextents(3, 4)
d5 = dextents(5)
s5 = Extents((5,))

RT = (1, 3)
CT = (IC(1), IC(3))
RT4 = (1, 4)
CT4 = (IC(1), IC(4))

CASES = []
for _idx in (1, IC(1)):
    CASES += [
        (L(ddd), (F, F, _idx), L, (DYN, DYN), (3, 4)),
        (L(s345), (F, F, _idx), L, (3, 4), (3, 4)),
        (R(ddd), (F, F, _idx), S, (DYN, DYN), (3, 4)),
        (R(s345), (F, F, _idx), S, (3, 4), (3, 4)),
        (L(ddd), (F, _idx, F), S, (DYN, DYN), (3, 5)),
        (L(s345), (F, _idx, F), S, (3, 5), (3, 5)),
    ]
CASES += [
    (L(ddd), (F, RT, F), S, (DYN, DYN, DYN), (3, 2, 5)),
    (L(ddd), (F, CT, F), S, (DYN, 2, DYN), (3, 2, 5)),
    (L(s345), (F, RT, F), S, (3, DYN, 5), (3, 2, 5)),
    (L(s345), (F, CT, F), S, (3, 2, 5), (3, 2, 5)),
    (R(ddd), (F, RT, F), S, (DYN, DYN, DYN), (3, 2, 5)),
    (R(ddd), (F, CT, F), S, (DYN, 2, DYN), (3, 2, 5)),
    (R(s345), (F, RT, F), S, (3, DYN, 5), (3, 2, 5)),
    (R(s345), (F, CT, F), S, (3, 2, 5), (3, 2, 5)),
    (L(ddd), (RT, F, RT4), S, (DYN, DYN, DYN), (2, 4, 3)),
    (L(ddd), (CT, F, CT4), S, (2, DYN, 3), (2, 4, 3)),
    (L(s345), (RT, F, RT4), S, (DYN, 4, DYN), (2, 4, 3)),
    (L(s345), (CT, F, CT4), S, (2, 4, 3), (2, 4, 3)),
    (R(ddd), (RT, F, RT4), S, (DYN, DYN, DYN), (2, 4, 3)),
    (R(ddd), (CT, F, CT4), S, (2, DYN, 3), (2, 4, 3)),
    (R(s345), (RT, F, RT4), S, (DYN, 4, DYN), (2, 4, 3)),
    (R(s345), (CT, F, CT4), S, (2, 4, 3), (2, 4, 3)),
    (L(dd), (F, RT), L, (DYN, DYN), (3, 2)),
    (L(dd), (F, CT), L, (DYN, 2), (3, 2)),
    (R(dd), (F, RT), S, (DYN, DYN), (3, 2)),
    (R(dd), (F, CT), S, (DYN, 2), (3, 2)),
    (L(dd), (RT, F), S, (DYN, DYN), (2, 4)),
    (L(dd), (CT, F), S, (2, DYN), (2, 4)),
    (R(dd), (RT, F), R, (DYN, DYN), (2, 4)),
    (R(dd), (CT, F), R, (2, DYN), (2, 4)),
    (S(dd, (1, 4)), (RT, F), S, (DYN, DYN), (2, 4)),
    (S(dd, (1, 4)), (CT, F), S, (2, DYN), (2, 4)),
    (L(d5), (RT,), L, (DYN,), (2,)),
    (L(d5), (CT,), L, (2,), (2,)),
    (L(s5), (RT,), L, (DYN,), (2,)),
    (L(s5), (CT,), L, (2,), (2,)),
    (R(d5), (RT,), R, (DYN,), (2,)),
    (R(d5), (CT,), R, (2,), (2,)),
    (R(s5), (RT,), R, (DYN,), (2,)),
    (R(s5), (CT,), R, (2,), (2,)),
]


@pytest.mark.parametrize("mapping, slices, layout, static, values", CASES)
def test_static_slice_types(mapping, slices, layout, static, values):
    result = submdspan_mapping(mapping, *slices)
    assert type(result.mapping) is layout
    assert result.mapping.extents.static_extents == static
    assert tuple(result.mapping.extents) == values


def test_left_full_full_index_offset():
    result = submdspan_mapping(L(ddd), F, F, 1)
    assert result == MappingOffset(L(dextents(3, 4)), 12)


def test_right_full_full_index_strides_and_offset():
    result = submdspan_mapping(R(ddd), F, F, 1)
    assert result.offset == 1
    assert result.mapping.strides() == (20, 5)


def test_left_full_tuple_full_strides_and_offset():
    result = submdspan_mapping(L(ddd), F, (1, 3), F)
    assert result.offset == 3
    assert result.mapping.strides() == (1, 3, 12)


def test_stride_mapping_slice_offset_and_strides():
    result = submdspan_mapping(S(dd, (1, 4)), (1, 3), F)
    assert result.offset == 1
    assert result.mapping.strides() == (1, 4)


def test_all_indices_gives_rank_zero_preserved_layout():
    result = submdspan_mapping(L(dd), 1, 2)
    assert type(result.mapping) is L
    assert result.mapping.extents.rank() == 0
    assert result.offset == 7


def test_strided_slice_dynamic():
    result = submdspan_mapping(R(dextents(10)), StridedSlice(2, 7, 3))
    assert type(result.mapping) is S
    assert result.mapping.extents.static_extents == (DYN,)
    assert tuple(result.mapping.extents) == (3,)
    assert result.mapping.strides() == (3,)
    assert result.offset == 2


def test_strided_slice_static():
    ext = submdspan_extents(dextents(10), StridedSlice(IC(2), IC(7), IC(3)))
    assert ext.static_extents == (3,)
    assert tuple(ext) == (3,)


def test_strided_slice_zero_extent():
    ext = submdspan_extents(dextents(10), StridedSlice(IC(4), IC(0), IC(2)))
    assert ext.static_extents == (0,)
    assert ext.extent(0) == 0


def test_strided_slice_zero_stride_nonempty_raises():
    with pytest.raises(ValueError):
        submdspan_extents(dextents(10), StridedSlice(0, 3, 0))


def test_first_of_variants():
    assert first_of(4) == 4
    assert first_of(F) == IC(0)
    assert first_of((2, 5)) == 2
    assert first_of(StridedSlice(3, 4, 1)) == 3


def test_last_of_variants():
    assert last_of(0, dd, 4) == 4
    assert last_of(1, dd, F) == 4
    assert last_of(1, s345, F) == IC(4)
    assert last_of(0, dd, (2, 5)) == 5
    assert last_of(0, dd, StridedSlice(1, 6, 2)) == 6


def test_stride_of_variants():
    assert stride_of(StridedSlice(0, 6, 2)) == 2
    assert stride_of(F) == IC(1)
    assert stride_of(3) == IC(1)


def test_wrong_number_of_slices():
    with pytest.raises(ValueError):
        submdspan_extents(ddd, F, F)


def test_unsupported_slice_type():
    with pytest.raises(TypeError):
        submdspan_extents(dd, F, "x")


def test_reversed_range_raises():
    with pytest.raises(ValueError):
        submdspan_extents(dd, F, (3, 1))


def test_unsupported_mapping_type():
    with pytest.raises(TypeError):
        submdspan_mapping(dd, F, F)