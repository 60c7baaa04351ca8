"""
Device cage — an open-fronted tube that holds a device behind a
faceplate window.

Cage-local frame: X/Y centred on the cage axis, z = 0 is where the cage
meets the back of the faceplate, +Z runs towards the rear of the rack.

Back styles:
  open     tube only
  lip      back wall with a large window; the lip stops the device
  closed   back wall with a cable opening
"""

from __future__ import annotations

import logging

from rackcad.design.models import CageSpec
from rackcad.geometry.polygon import rect
from rackcad.rack.eia310 import RackStandard, panel_height
from rackcad.scad.nodes import Cube, Difference, Node, Rotate, Translate
from .common import EPS
from .vent import layout_vent, vent_cutout

log = logging.getLogger(__name__)

BACK_STYLES = ("open", "lip", "closed")


def _box(w: float, h: float, d: float, z: float = 0.0, label: str = "") -> Node:
    """Cube centred on the Z axis, starting at *z*."""
    return Translate([-w / 2, -h / 2, z], [Cube([w, h, d])], label=label)


def cage_outer_size(cage: CageSpec) -> tuple[float, float, float]:
    """(width, height, length) of the cage body."""
    return cage.outer_width, cage.outer_height, cage.length


def cage_window(cage: CageSpec):
    """Front opening outline in cage-local XY (device face minus the lip)."""
    w = cage.inner_width - 2 * cage.front_lip
    h = cage.inner_height - 2 * cage.front_lip
    return rect(max(w, 0.0), max(h, 0.0))


def check_cage_fit(cage: CageSpec, standard: RackStandard, units: int) -> list[str]:
    """Problems that stop *cage* fitting a *units* U panel of *standard*."""
    errors: list[str] = []
    name = cage.device.name
    ow, oh, _ = cage_outer_size(cage)
    half_open = standard.opening_width / 2
    if abs(cage.x) + ow / 2 > half_open + 1e-6:
        errors.append(
            f"Cage '{name}' is {ow:.1f}mm wide at x={cage.x:.1f} — it must stay inside "
            f"the {standard.opening_width:.2f}mm rail opening."
        )
    ph = panel_height(units)
    if abs(cage.y) + oh / 2 > ph / 2 + 1e-6:
        errors.append(
            f"Cage '{name}' is {oh:.1f}mm tall at y={cage.y:.1f} — it must fit the "
            f"{ph:.2f}mm tall {units}U panel."
        )
    if cage.front_lip * 2 >= min(cage.inner_width, cage.inner_height):
        errors.append(f"Cage '{name}': front_lip {cage.front_lip}mm closes the front window.")
    if cage.back == "lip" and cage.back_lip * 2 >= min(cage.inner_width, cage.inner_height):
        errors.append(f"Cage '{name}': back_lip {cage.back_lip}mm closes the back window.")
    return errors


def _back_cutter(cage: CageSpec) -> Node | None:
    z0 = cage.inner_depth - EPS
    d = cage.wall + 2 * EPS
    if cage.back == "lip":
        return _box(
            cage.inner_width - 2 * cage.back_lip,
            cage.inner_height - 2 * cage.back_lip,
            d, z0, label="back window",
        )
    if cage.back == "closed":
        cw, ch = cage.cable_opening
        cw = min(cw, cage.inner_width)
        ch = min(ch, cage.inner_height)
        # Cable opening sits on the floor so cables run out the bottom
        y = -cage.inner_height / 2
        return Translate([-cw / 2, y, z0], [Cube([cw, ch, d])], label="cable opening")
    return None


def _vent_cutters(cage: CageSpec) -> list[Node]:
    cutters: list[Node] = []
    if cage.top_vent is not None:
        layout = layout_vent(cage.inner_width, cage.inner_depth, cage.top_vent)
        cut = vent_cutout(layout, cage.wall + 2 * EPS)
        if cut is not None:
            # area (u, v) → cage (x, z); extrusion runs down through the top wall
            cutters.append(Translate(
                [-cage.inner_width / 2, cage.outer_height / 2 + EPS, 0],
                [Rotate([90, 0, 0], [cut])],
                label="top vent",
            ))
    if cage.side_vent is not None:
        layout = layout_vent(cage.inner_depth, cage.inner_height, cage.side_vent)
        cut = vent_cutout(layout, cage.wall + 2 * EPS)
        if cut is not None:
            # area (u, v) → cage (z, y); extrusion runs towards -X
            for x, side in ((cage.outer_width / 2 + EPS, "right"),
                            (-cage.inner_width / 2 + EPS, "left")):
                cutters.append(Translate(
                    [x, -cage.inner_height / 2, 0],
                    [Rotate([0, -90, 0], [cut])],
                    label=f"{side} vent",
                ))
    return cutters


def build_cage(cage: CageSpec) -> Node:
    """CSG tree for one cage in cage-local coordinates."""
    if cage.back not in BACK_STYLES:
        raise ValueError(f"Unknown cage back style '{cage.back}', expected one of {BACK_STYLES}")
    ow, oh, length = cage_outer_size(cage)

    bore_depth = cage.length + 2 * EPS if cage.back == "open" else cage.inner_depth + EPS
    children: list[Node] = [
        _box(ow, oh, length, label="shell"),
        _box(cage.inner_width, cage.inner_height, bore_depth, z=-EPS, label="device bay"),
    ]
    back = _back_cutter(cage)
    if back is not None:
        children.append(back)
    children += _vent_cutters(cage)

    log.debug("Cage %s: %.1f x %.1f x %.1f mm, back=%s",
              cage.device.name, ow, oh, length, cage.back)
    return Difference(children, label=f"cage: {cage.device.name}")
