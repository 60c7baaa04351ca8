"""Profile generators and shapely-backed polygon helpers."""

import math

import pytest

from rackcad.geometry import (
    circle_poly, diamond, ensure_ccw, hexagon, offset_polygon, point_in_polygon,
    polygon_area, polygon_bounds, polygons_overlap, rect, regular_polygon,
    rounded_rect, stadium,
)


def test_rect_area_and_winding():
    r = rect(10, 4, cx=5, cy=2)
    assert polygon_area(r) == pytest.approx(40)
    assert polygon_bounds(r) == (0, 0, 10, 4)
    assert polygon_area(ensure_ccw(list(reversed(r)))) > 0


def test_hexagon_across_flats():
    h = hexagon(6)
    x0, y0, x1, y1 = polygon_bounds(h)
    assert x1 - x0 == pytest.approx(6)
    assert y1 - y0 == pytest.approx(12 / math.sqrt(3))
    assert max(h, key=lambda v: v[1])[0] == pytest.approx(0, abs=1e-9)  # pointy top


def test_diamond_and_circle():
    d = diamond(8, cx=1, cy=1)
    assert polygon_bounds(d) == (-3, -3, 5, 5)
    assert polygon_area(d) == pytest.approx(32)
    c = circle_poly(5, 64)
    assert abs(polygon_area(c)) == pytest.approx(math.pi * 25, rel=0.01)


def test_regular_polygon_needs_three_sides():
    with pytest.raises(ValueError):
        regular_polygon(2, 1.0)


def test_rounded_rect():
    r = rounded_rect(20, 10, 2, cx=10, cy=5)
    x0, y0, x1, y1 = polygon_bounds(r)
    assert (x0, y0, x1, y1) == pytest.approx((0, 0, 20, 10))
    assert polygon_area(r) < 200
    # radius clamped, zero radius gives a plain rectangle
    assert len(rounded_rect(20, 10, 0)) == 4
    assert polygon_bounds(rounded_rect(4, 4, 50)) == pytest.approx((-2, -2, 2, 2))


def test_stadium_orientation():
    s = stadium(20, 6)
    x0, y0, x1, y1 = polygon_bounds(s)
    assert (x1 - x0, y1 - y0) == pytest.approx((20, 6))
    v = stadium(20, 6, vertical=True)
    x0, y0, x1, y1 = polygon_bounds(v)
    assert (x1 - x0, y1 - y0) == pytest.approx((6, 20))
    # degenerate slot is a circle
    c = stadium(4, 6, cx=3, cy=3)
    assert polygon_bounds(c) == pytest.approx((0, 0, 6, 6))


def test_offset_polygon_keeps_corners():
    grown = offset_polygon(rect(10, 10), 1)
    assert polygon_bounds(grown) == pytest.approx((-6, -6, 6, 6))
    assert len(grown) == 4
    assert offset_polygon(rect(2, 2), -2) == []


def test_overlap_and_containment():
    a = rect(10, 10)
    assert polygons_overlap(a, rect(10, 10, cx=5))
    assert not polygons_overlap(a, rect(10, 10, cx=10))  # touching edge only
    assert point_in_polygon(0, 0, a)
    assert not point_in_polygon(6, 0, a)
