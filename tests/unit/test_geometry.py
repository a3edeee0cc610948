from __future__ import annotations

import pytest

from qrgen.domain.errors import GeometryOverflow
from qrgen.render.geometry import (
    MAX_DIMENSION,
    checked_add,
    checked_byte_length,
    checked_mul,
    checked_pixel_size,
    compute_geometry,
    pixel_offset,
)

EXPECTED_PIXEL_SIZE = 290
EXPECTED_BYTE_LENGTH = 252_300


def test_version_1_symbol_geometry() -> None:
    assert checked_pixel_size(21, 4, 10) == EXPECTED_PIXEL_SIZE
    assert checked_byte_length(EXPECTED_PIXEL_SIZE, 3) == EXPECTED_BYTE_LENGTH

    geometry = compute_geometry(21, 4, 10)
    assert geometry.pixel_size == EXPECTED_PIXEL_SIZE
    assert geometry.byte_length == EXPECTED_BYTE_LENGTH


@pytest.mark.parametrize("n", [1, 21, 177])
@pytest.mark.parametrize("border", [0, 1, 4, 255])
@pytest.mark.parametrize("scale", [1, 8, 255])
def test_results_are_exact_or_overflow(n: int, border: int, scale: int) -> None:
    expected_size = (n + 2 * border) * scale
    expected_length = expected_size * expected_size * 3
    pixel_size = checked_pixel_size(n, border, scale)

    assert pixel_size == expected_size
    if expected_length <= MAX_DIMENSION:
        assert checked_byte_length(pixel_size, 3) == expected_length
    else:
        with pytest.raises(GeometryOverflow):
            checked_byte_length(pixel_size, 3)
        with pytest.raises(GeometryOverflow):
            compute_geometry(n, border, scale)


def test_module_count_near_the_limit_overflows_on_addition() -> None:
    n = MAX_DIMENSION - 5

    with pytest.raises(GeometryOverflow) as info:
        checked_pixel_size(n, 4, 1)

    assert info.value.operands == (n, 4, 1)


def test_module_count_at_the_limit_without_border_is_exact() -> None:
    assert checked_pixel_size(MAX_DIMENSION, 0, 1) == MAX_DIMENSION


def test_border_doubling_is_checked() -> None:
    with pytest.raises(GeometryOverflow):
        checked_pixel_size(1, 2**30, 1)


def test_scale_multiplication_is_checked() -> None:
    largest_scale = MAX_DIMENSION // 29

    assert checked_pixel_size(21, 4, largest_scale) == 29 * largest_scale
    with pytest.raises(GeometryOverflow):
        checked_pixel_size(21, 4, largest_scale + 1)


def test_squaring_is_checked_even_for_a_valid_pixel_size() -> None:
    assert checked_byte_length(46_340, 1) == 46_340 * 46_340
    with pytest.raises(GeometryOverflow):
        checked_byte_length(46_341, 1)
    with pytest.raises(GeometryOverflow):
        checked_byte_length(46_340, 3)


def test_compute_geometry_fails_on_byte_length_overflow() -> None:
    # 177 + 8 modules at scale 255 is a valid side length but too many bytes
    with pytest.raises(GeometryOverflow):
        compute_geometry(177, 4, 255)


@pytest.mark.parametrize("n, border, scale", [(0, 4, 1), (21, -1, 1), (21, 4, 0), (-21, 4, 1)])
def test_out_of_domain_operands_raise(n: int, border: int, scale: int) -> None:
    with pytest.raises(GeometryOverflow):
        checked_pixel_size(n, border, scale)


def test_checked_primitives() -> None:
    assert checked_add(MAX_DIMENSION - 1, 1) == MAX_DIMENSION
    assert checked_mul(2, 3, limit=6) == 6
    with pytest.raises(GeometryOverflow):
        checked_add(MAX_DIMENSION, 1)
    with pytest.raises(GeometryOverflow):
        checked_mul(2, 4, limit=7)
    with pytest.raises(GeometryOverflow):
        checked_add(-1, 1)


def test_custom_limit() -> None:
    assert checked_pixel_size(21, 4, 10, limit=EXPECTED_PIXEL_SIZE) == EXPECTED_PIXEL_SIZE
    with pytest.raises(GeometryOverflow):
        checked_pixel_size(21, 4, 10, limit=EXPECTED_PIXEL_SIZE - 1)


def test_pixel_offset_is_row_major() -> None:
    assert pixel_offset(0, 0, 10, 3) == 0
    assert pixel_offset(2, 3, 10, 3) == 2 * 3 + 3 * 10 * 3
    assert pixel_offset(9, 9, 10, 3) == 10 * 10 * 3 - 3


def test_to_module_maps_border_outside_the_grid() -> None:
    geometry = compute_geometry(21, 4, 10)

    assert geometry.to_module(0) == -4
    assert geometry.to_module(39) == -1
    assert geometry.to_module(40) == 0
    assert geometry.to_module(249) == 20
    assert geometry.to_module(250) == 21
