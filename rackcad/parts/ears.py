"""
Rack ears — L-brackets that bolt a device with its own side screw holes
into the rack.

Ear-local frame (left ear): the flange lies on the build plate,
x = 0 is the outer panel edge, y = 0 the bottom edge.  The side plate
stands on the flange's inner edge and runs towards +Z.  The right ear is
the mirror image.
"""

from __future__ import annotations

from rackcad.config.hardware import hw
from rackcad.design.models import EarSpec
from rackcad.geometry.polygon import stadium
from rackcad.rack.eia310 import RackStandard, hole_positions, panel_height
from rackcad.scad.nodes import (
    Cube, Cylinder, Difference, LinearExtrude, Mirror, Node, Rotate, Translate, Union,
    multi_polygon,
)
from .common import EPS

EAR_SIDES = ("left", "right")


def check_ears(ears: EarSpec, standard: RackStandard, units: int) -> list[str]:
    """Problems with an ear pair for *standard* (empty = buildable)."""
    errors: list[str] = []
    flange = ears.effective_flange_width(standard)
    if flange - ears.thickness < standard.rail_width - 1e-6:
        errors.append(
            f"Ear side plate at {flange:.1f}mm from the panel edge would sit on the rail "
            f"(rail overlap is {standard.rail_width:.2f}mm) — the device is too wide."
        )
    if ears.depth <= ears.thickness:
        errors.append(f"Ear depth {ears.depth}mm must exceed its thickness {ears.thickness}mm.")
    h = panel_height(units)
    r = ears.screw_diameter / 2
    for i, (d, y) in enumerate(ears.device_holes):
        if not (ears.thickness + r <= d <= ears.depth - r) or not (r <= y <= h - r):
            errors.append(
                f"Ear device hole {i} at depth={d:.1f}, height={y:.1f} is off the "
                f"{ears.depth:.1f}x{h:.1f}mm side plate."
            )
    return errors


def build_ear(
    ears: EarSpec,
    standard: RackStandard,
    units: int,
    side: str = "left",
    hole_pattern: str = "outer",
) -> Node:
    """CSG tree for one rack ear."""
    if side not in EAR_SIDES:
        raise ValueError(f"Unknown ear side '{side}', expected one of {EAR_SIDES}")
    t = ears.thickness
    h = panel_height(units)
    flange = ears.effective_flange_width(standard)

    d = hw.panel["mount_hole_diameter_mm"]
    slot_len = hw.panel["mount_slot_length_mm"]
    slots = [
        stadium(d + slot_len, d, standard.hole_inset, y)
        for y in hole_positions(units, hole_pattern)
    ]

    solid = Union([
        Cube([flange, h, t], label="flange"),
        Translate([flange - t, 0, 0], [Cube([t, h, ears.depth])], label="side plate"),
    ])

    cutters: list[Node] = [
        Translate([0, 0, -EPS], [LinearExtrude(t + 2 * EPS, [multi_polygon(slots)])],
                  label="mounting slots"),
    ]
    for depth, y in ears.device_holes:
        cutters.append(Translate(
            [flange - t - EPS, y, depth],
            [Rotate([0, 90, 0], [Cylinder(t + 2 * EPS, ears.screw_diameter / 2)])],
            label=f"device screw at depth {depth:.1f}",
        ))

    ear: Node = Difference([solid] + cutters, label=f"rack ear ({side})")
    if side == "right":
        ear = Mirror([1, 0, 0], [ear])
    return ear
