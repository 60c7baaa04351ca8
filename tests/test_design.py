"""Design parsing, serialization and validation."""

import pytest

from rackcad.design import (
    EnclosureSpec, enclosure_to_dict, parse_enclosure, parse_vent, validate_enclosure,
)


def test_minimal_design_uses_defaults():
    spec = parse_enclosure({"name": "blank"})
    assert spec.rack == "19in"
    assert spec.units == 1
    assert spec.panel.thickness == 4.0
    assert spec.panel.hole_pattern == "outer"
    assert spec.width == 482.6
    assert spec.height == pytest.approx(43.65625)
    assert spec.max_segment_width == 220.0
    assert validate_enclosure(spec) == []


def test_parse_full_design(small_design):
    small_design["cages"] = [{"device": {"name": "pi", "width": 60, "height": 25, "depth": 90},
                              "x": -190, "back": "closed"}]
    small_design["ears"] = {"device_width": 440, "device_holes": [[15, 10]]}
    spec = parse_enclosure(small_design)
    assert [c.shape for c in spec.cutouts] == ["rect", "circle"]
    assert spec.keystones[1].x == 62.0
    assert spec.vents[0].vent.style == "honeycomb"
    assert spec.vents[0].vent.cell_size == 6.0
    cage = spec.cages[0]
    assert cage.back == "closed"
    assert cage.wall == 3.0
    assert cage.cable_opening == (30.0, 15.0)
    assert spec.ears.device_holes == [(15.0, 10.0)]


def test_parse_vent_none():
    assert parse_vent(None) is None
    assert parse_vent({"style": "grid", "max_elements": 10}).max_elements == 10


def test_round_trip(small_design):
    small_design["cages"] = [{"device": {"name": "pi", "width": 60, "height": 25, "depth": 90},
                              "x": -190, "top_vent": {"style": "slot"}}]
    small_design["ears"] = {"device_holes": [[15, 10]]}
    small_design["bed_width"] = 250
    spec = parse_enclosure(small_design)
    data = enclosure_to_dict(spec)
    assert "device_width" not in data["ears"]
    assert "side_vent" not in data["cages"][0]
    assert parse_enclosure(data) == spec


def test_small_design_is_valid(small_design):
    assert validate_enclosure(parse_enclosure(small_design)) == []


def test_unknown_rack_stops_early():
    errors = validate_enclosure(EnclosureSpec(name="x", rack="23in"))
    assert len(errors) == 1
    assert "Unknown rack" in errors[0]
    assert "units" in validate_enclosure(EnclosureSpec(name="x", units=0))[0]


def test_panel_fields():
    errors = validate_enclosure(parse_enclosure({"panel": {"thickness": 0, "hole_pattern": "x"}}))
    assert len(errors) == 2


def test_bad_cutouts_and_vents():
    spec = parse_enclosure({
        "cutouts": [{"shape": "star", "x": 0, "y": 0}, {"shape": "circle", "x": 50, "y": 0}],
        "vents": [{"x": 0, "y": 0, "width": 50, "height": 20, "vent": {"style": "spiral"}}],
    })
    errors = validate_enclosure(spec)
    assert any("unknown shape 'star'" in e for e in errors)
    assert any("diameter must be > 0" in e for e in errors)
    assert any("Unknown vent style" in e for e in errors)


def test_overlap_and_rails():
    spec = parse_enclosure({
        "cutouts": [
            {"shape": "rect", "x": 0, "y": 0, "width": 40, "height": 20, "label": "a"},
            {"shape": "rect", "x": 30, "y": 0, "width": 40, "height": 20, "label": "b"},
            {"shape": "rect", "x": 230, "y": 0, "width": 20, "height": 20, "label": "edge"},
        ],
    })
    errors = validate_enclosure(spec)
    assert "a overlaps b." in errors
    assert any(e.startswith("edge extends outside") for e in errors)


def test_vent_regions_checked():
    spec = parse_enclosure({
        "vents": [
            {"x": 0, "y": 0, "width": 60, "height": 30, "label": "v1"},
            {"x": 40, "y": 0, "width": 60, "height": 30, "label": "v2"},
        ],
    })
    assert "v1 overlaps v2." in validate_enclosure(spec)


def test_vents_may_surround_features(small_design):
    small_design["vents"] = [{"x": 0, "y": 0, "width": 400, "height": 40}]
    assert validate_enclosure(parse_enclosure(small_design)) == []


def test_cage_problems():
    spec = parse_enclosure({
        "cages": [
            {"device": {"name": "wide", "width": 460, "height": 20, "depth": 50}},
            {"device": {"name": "odd", "width": 50, "height": 20, "depth": 50}, "x": 100,
             "back": "mesh"},
        ],
    })
    errors = validate_enclosure(spec)
    assert any("Cage 'wide'" in e and "rail opening" in e for e in errors)
    assert any("unknown back style 'mesh'" in e for e in errors)


def test_ribs_block_edge_features():
    spec = parse_enclosure({
        "panel": {"rib_depth": 10},
        "cutouts": [{"shape": "rect", "x": 0, "y": 0, "width": 40, "height": 40, "label": "tall"}],
    })
    assert validate_enclosure(spec) == ["tall runs into the 3.0mm rear ribs."]


def test_ribs_block_cage_bay():
    spec = parse_enclosure({
        "units": 2,
        "panel": {"rib_depth": 10},
        "cages": [{"device": {"name": "nas", "width": 100, "height": 82, "depth": 100}, "wall": 1}],
    })
    assert validate_enclosure(spec) == ["Cage 'nas' bay runs into the 3.0mm rear ribs."]


def test_tiny_bed():
    errors = validate_enclosure(parse_enclosure({"bed_width": 20}))
    assert any("splice plate" in e for e in errors)


def test_round_trip_keeps_every_cutout_field():
    spec = parse_enclosure({
        "cutouts": [
            {"shape": "circle", "x": 10, "y": 0, "diameter": 10, "width": 5},
            {"shape": "rect", "x": -40, "y": 0, "width": 30, "height": 12,
             "corner_radius": 2, "diameter": 7},
        ],
    })
    data = enclosure_to_dict(spec)
    assert data["cutouts"][0]["width"] == 5.0
    assert data["cutouts"][1]["diameter"] == 7.0
    assert parse_enclosure(data) == spec


def test_wrongly_shaped_sections_raise_value_error():
    for design in (
        {"cutouts": [1]},
        {"panel": [4]},
        {"vents": "all"},
        {"cages": [{"device": {"width": 50, "height": 20, "depth": 50}, "cable_opening": [5]}]},
        {"ears": {"device_holes": [15, 10]}},
    ):
        with pytest.raises(ValueError):
            parse_enclosure(design)


def test_null_vent_means_default_pattern():
    spec = parse_enclosure({"vents": [{"width": 40, "height": 20, "vent": None}]})
    assert spec.vents[0].vent.style == "honeycomb"
    assert validate_enclosure(spec) == []
