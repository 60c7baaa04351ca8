"""Panel splitting and splice plates."""

import pytest

from rackcad.parts.joiner import (
    build_joiner, plan_segments, seam_holes, segment, segment_bounds,
)
from rackcad.scad import Cube, Intersection, Translate


def test_fitting_panel_needs_no_seams():
    assert plan_segments(200, 220) == []
    assert plan_segments(220, 220) == []


def test_even_split():
    seams = plan_segments(482.6, 220)
    assert len(seams) == 2
    assert seams == pytest.approx([482.6 / 3, 2 * 482.6 / 3])
    for x0, x1 in segment_bounds(seams, 482.6):
        assert x1 - x0 <= 220


def test_seams_avoid_features():
    seams = plan_segments(482.6, 220, avoid=[(150, 170)])
    assert len(seams) == 2
    # avoid range grows by the 12mm overlap
    assert all(not (138 < s < 182) for s in seams)
    for x0, x1 in segment_bounds(seams, 482.6):
        assert x1 - x0 <= 220


def test_unavoidable_features_fall_back_to_even_seams():
    seams = plan_segments(482.6, 220, avoid=[(20, 460)])
    assert seams == pytest.approx([482.6 / 3, 2 * 482.6 / 3])


def test_bed_narrower_than_splice():
    with pytest.raises(ValueError):
        plan_segments(482.6, 20)


def test_segment_bounds():
    assert segment_bounds([100, 200], 300) == [(0, 100), (100, 200), (200, 300)]


def test_seam_holes():
    holes = seam_holes([100], 43.65625)
    assert len(holes) == 4
    assert sorted({x for x, _ in holes}) == pytest.approx([94, 106])
    assert sorted({y for _, y in holes}) == pytest.approx([6, 37.65625])


def test_segment_moves_slice_to_origin():
    node = segment(Cube([300, 40, 4]), 100, 200, 300, 40, 4, label="middle")
    assert isinstance(node, Translate)
    assert node.v == [-100, 0, 0]
    assert isinstance(node.children[0], Intersection)
    assert "// middle" in node.render()


def test_joiner_plate():
    text = build_joiner(43.65625).render()
    assert "// splice plate" in text
    assert "cube([24.000, 43.656, 4.000])" in text
    assert "bolt holes" in text
    # shorter plate for ribbed panels
    assert "cube([24.000, 36.000, 4.000])" in build_joiner(43.65625, 36.0).render()
