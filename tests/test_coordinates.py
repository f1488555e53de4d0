"""Test logical ↔ device coordinate conversion.

Tests for src.painter.coordinates:
    - Centre origin and Y flip
    - Length scaling without offset
    - Half-away-from-zero rounding (symmetry about the centre)
    - Pixel → logical → pixel round trip (≤ 1 px)
    - rescale() and logical extents
    - Invalid sizes rejected at construction

Coordinate frames:
    - logical: centre origin, +Y up
    - device: top-left origin, +Y down

Run:
    pytest tests/test_coordinates.py -v
"""

import pytest

from src.painter.coordinates import CoordinateSpace, round_half_away
from src.painter.errors import ConfigError


@pytest.fixture
def space():
    """512×512 px, 10 logical units wide (51.2 px/unit)."""
    return CoordinateSpace(512, 512, 10.0)


# ============================================================================
# FORWARD TRANSFORM
# ============================================================================

def test_origin_maps_to_centre(space):
    assert space.to_device((0.0, 0.0)) == (256, 256)


def test_y_axis_is_flipped(space):
    assert space.to_device_y(1.0) == 256 - 51
    assert space.to_device_y(-1.0) == 256 + 51
    # Upwards in logical space is towards row 0
    assert space.to_device_y(4.0) < space.to_device_y(0.0)


def test_x_axis_keeps_direction(space):
    assert space.to_device_x(1.0) == 256 + 51
    assert space.to_device_x(-1.0) == 256 - 51


def test_lengths_have_no_offset(space):
    assert space.to_device_length(0.0) == 0
    assert space.to_device_length(2.5) == 128
    assert space.to_device_length(-2.5) == -128


def test_odd_pixel_sizes_use_integer_centre():
    space = CoordinateSpace(101, 51, 101.0)
    assert space.to_device((0.0, 0.0)) == (50, 25)


def test_rounding_is_symmetric():
    space = CoordinateSpace(100, 100, 100.0)
    assert space.to_device_x(0.5) == 51
    assert space.to_device_x(-0.5) == 49
    assert space.to_device_y(0.5) == 49
    assert space.to_device_y(-0.5) == 51


@pytest.mark.parametrize("value,expected", [
    (0.4, 0), (0.5, 1), (1.5, 2), (2.5, 3), (-0.5, -1), (-2.5, -3), (-0.4, 0),
])
def test_round_half_away(value, expected):
    assert round_half_away(value) == expected


# ============================================================================
# ROUND TRIP
# ============================================================================

@pytest.mark.parametrize("size,logical_width", [
    ((512, 512), 10.0),
    ((800, 600), 37.0),
    ((101, 77), 3.3),
])
def test_pixel_roundtrip_within_one_pixel(size, logical_width):
    w, h = size
    space = CoordinateSpace(w, h, logical_width)
    for px in range(w):
        assert abs(space.to_device_x(space.from_device_x(px)) - px) <= 1
    for py in range(h):
        assert abs(space.to_device_y(space.from_device_y(py)) - py) <= 1


def test_from_device_inverts_centre(space):
    assert space.from_device((256, 256)) == (0.0, 0.0)
    x, y = space.from_device((256 + 512 // 4, 0))
    assert x == pytest.approx(2.5)
    assert y == pytest.approx(5.0)


# ============================================================================
# SCALE STATE
# ============================================================================

def test_extents(space):
    assert space.scale == pytest.approx(51.2)
    assert space.width == pytest.approx(10.0)
    assert space.height == pytest.approx(10.0)


def test_height_follows_aspect_ratio():
    space = CoordinateSpace(800, 400, 20.0)
    assert space.height == pytest.approx(10.0)


def test_rescale(space):
    space.rescale(20.0)
    assert space.scale == pytest.approx(25.6)
    assert space.width == pytest.approx(20.0)
    assert space.to_device_x(1.0) == 256 + 26


@pytest.mark.parametrize("bad", [0.0, -1.0])
def test_rescale_rejects_non_positive(space, bad):
    with pytest.raises(ConfigError):
        space.rescale(bad)
    # Failed rescale leaves the scale untouched
    assert space.scale == pytest.approx(51.2)


@pytest.mark.parametrize("w,h", [(0, 10), (10, 0), (-5, 10)])
def test_rejects_non_positive_pixel_sizes(w, h):
    with pytest.raises(ConfigError):
        CoordinateSpace(w, h, 10.0)


@pytest.mark.parametrize("w,h", [(0.5, 10), (10, 0.9)])
def test_rejects_sub_pixel_sizes(w, h):
    with pytest.raises(ConfigError):
        CoordinateSpace(w, h, 1.0)


def test_fractional_pixel_sizes_truncate():
    space = CoordinateSpace(10.7, 5.2, 1.0)
    assert (space.pixel_width, space.pixel_height) == (10, 5)
    assert space.scale == pytest.approx(10.0)


def test_rejects_non_positive_logical_width():
    with pytest.raises(ConfigError):
        CoordinateSpace(100, 100, 0.0)
