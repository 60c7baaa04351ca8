"""Rack ears."""

import pytest

from rackcad.design import EarSpec
from rackcad.parts.ears import build_ear, check_ears
from rackcad.rack import get_standard
from rackcad.scad import Difference, Mirror

STD = get_standard("19in")


def test_flange_width_from_device():
    ears = EarSpec.from_config(device_width=440)
    assert ears.effective_flange_width(STD) == pytest.approx(21.0)
    assert EarSpec.from_config().effective_flange_width(STD) == 20.0


def test_valid_ears():
    ears = EarSpec.from_config(device_width=440, device_holes=[(15, 10), (30, 30)])
    assert check_ears(ears, STD, 1) == []


def test_device_too_wide():
    ears = EarSpec.from_config(device_width=460)
    errors = check_ears(ears, STD, 1)
    assert any("rail" in e for e in errors)


def test_depth_and_holes_checked():
    assert any("depth" in e for e in check_ears(EarSpec.from_config(depth=3), STD, 1))
    off_plate = EarSpec.from_config(device_holes=[(100, 10)])
    assert any("side plate" in e for e in check_ears(off_plate, STD, 1))
    too_high = EarSpec.from_config(device_holes=[(20, 60)])
    assert check_ears(too_high, STD, 1)
    assert check_ears(too_high, STD, 2) == []


def test_left_ear_tree():
    ears = EarSpec.from_config(device_holes=[(20, 20)])
    node = build_ear(ears, STD, 1, "left")
    assert isinstance(node, Difference)
    text = node.render()
    assert "// rack ear (left)" in text
    assert "flange" in text and "side plate" in text
    assert "device screw at depth 20.0" in text
    assert "mounting slots" in text


def test_right_ear_is_mirrored():
    node = build_ear(EarSpec.from_config(), STD, 2, "right")
    assert isinstance(node, Mirror)
    assert node.render().startswith("mirror([1.000, 0.000, 0.000])")
    with pytest.raises(ValueError):
        build_ear(EarSpec.from_config(), STD, 1, "top")
