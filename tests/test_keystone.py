"""Keystone jack cutouts."""

import pytest

from rackcad.geometry import polygon_bounds
from rackcad.parts.keystone import KeystoneDims, keystone_cutout, keystone_footprint, keystone_row
from rackcad.scad import Union


def test_window_includes_fit_clearance():
    dims = KeystoneDims.from_config()
    x0, y0, x1, y1 = polygon_bounds(dims.window(10, 10))
    assert x1 - x0 == pytest.approx(14.5 + 0.6)
    assert y1 - y0 == pytest.approx(16.0 + 0.6)


def test_thick_panel_gets_rear_pocket():
    node = keystone_cutout(4.0, 50, 20, label="lan")
    assert isinstance(node, Union)
    assert len(node.children) == 2
    text = node.render()
    assert text.startswith("// lan\nunion()")
    assert "rear pocket" in text
    # pocket starts at the clip thickness
    assert "translate([0.000, 0.000, 2.000])" in text


def test_thin_panel_is_plain_window():
    node = keystone_cutout(2.0)
    assert not isinstance(node, Union)
    assert node.label == "keystone"
    assert "rear pocket" not in node.render()


def test_footprint_is_pocket():
    x0, y0, x1, y1 = polygon_bounds(keystone_footprint(0, 0))
    assert (x1 - x0, y1 - y0) == pytest.approx((19, 23))


def test_row_spacing():
    assert keystone_row(3, 22) == pytest.approx([-22, 0, 22])
    assert keystone_row(2) == pytest.approx([-11, 11])
    assert keystone_row(0) == []
    assert keystone_row(2, 0) == [0, 0]
    with pytest.raises(ValueError):
        keystone_row(-1)
