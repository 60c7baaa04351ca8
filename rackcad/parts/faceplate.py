"""
Faceplate — the front panel of a rack enclosure.

Panel-local frame: origin at the bottom-left corner of the front face,
X = width, Y = height, Z = thickness (front face on the build plate).

The tree is a single ``difference()``:

  first child   panel body (+ rear ribs + attached cages)
  then          one cutter per feature group: mounting slots (merged
                into one multi-path polygon), device cutouts, keystones,
                vent regions, cage windows, joiner seam holes
"""

from __future__ import annotations

import logging
from typing import Sequence

from rackcad.design.models import EnclosureSpec, VentRegion
from rackcad.geometry.polygon import (
    Outline, circle_poly, polygon_bounds, rect, rounded_rect, stadium, translate,
)
from rackcad.rack.eia310 import hole_positions, hole_x_positions
from rackcad.config.hardware import hw
from rackcad.scad.nodes import (
    Cube, Difference, LinearExtrude, Node, Polygon, Translate, Union, multi_polygon,
)
from .cage import build_cage, cage_window
from .common import EPS, panel_point, through_cut
from .keystone import keystone_cutout, keystone_footprint
from .vent import layout_vent, vent_cutout

log = logging.getLogger(__name__)


# ── feature outlines (panel-local) ──────────────────────────────────


def mount_slots(spec: EnclosureSpec) -> list[Outline]:
    """Elongated mounting slots at every EIA-310 hole position."""
    p = spec.panel
    d = p.mount_hole_diameter
    xs = hole_x_positions(spec.standard)
    return [
        stadium(d + p.mount_slot_length, d, x, y)
        for y in hole_positions(spec.units, p.hole_pattern)
        for x in xs
    ]


def _cage_footprint(spec: EnclosureSpec, i: int) -> Outline:
    cage = spec.cages[i]
    cx, cy = panel_point(cage.x, cage.y, spec.width, spec.height)
    return rect(cage.outer_width, cage.outer_height, cx, cy)


def _vent_rect(spec: EnclosureSpec, region: VentRegion) -> Outline:
    cx, cy = panel_point(region.x, region.y, spec.width, spec.height)
    return rect(region.width, region.height, cx, cy)


def feature_footprints(spec: EnclosureSpec) -> list[tuple[str, Outline]]:
    """(name, outline) of every panel feature that claims panel area,
    in panel-local coordinates.  Used for overlap checks, vent keepouts
    and seam placement."""
    out: list[tuple[str, Outline]] = []
    for i, c in enumerate(spec.cutouts):
        cx, cy = panel_point(c.x, c.y, spec.width, spec.height)
        out.append((c.label or f"cutout {i}", c.outline(cx, cy)))
    for i, k in enumerate(spec.keystones):
        cx, cy = panel_point(k.x, k.y, spec.width, spec.height)
        out.append((k.label or f"keystone {i}", keystone_footprint(cx, cy)))
    for i, cage in enumerate(spec.cages):
        out.append((f"cage '{cage.device.name}'", _cage_footprint(spec, i)))
    return out


# ── body ────────────────────────────────────────────────────────────


def _body(spec: EnclosureSpec) -> Node:
    p = spec.panel
    outline = rounded_rect(spec.width, spec.height, p.corner_radius,
                           spec.width / 2, spec.height / 2)
    return LinearExtrude(p.thickness, [Polygon(outline)], label="panel")


def _ribs(spec: EnclosureSpec) -> list[Node]:
    """Stiffening ribs along the rear top and bottom edges, kept between
    the rails so the panel still sits flat against them."""
    p = spec.panel
    if p.rib_depth <= 0:
        return []
    x0 = spec.standard.rail_width
    length = spec.standard.opening_width
    return [
        Translate([x0, y, p.thickness - EPS], [Cube([length, p.rib_thickness, p.rib_depth + EPS])],
                  label=f"{where} rib")
        for y, where in ((0.0, "bottom"), (spec.height - p.rib_thickness, "top"))
    ]


def _cages(spec: EnclosureSpec) -> list[Node]:
    nodes: list[Node] = []
    for cage in spec.cages:
        cx, cy = panel_point(cage.x, cage.y, spec.width, spec.height)
        nodes.append(Translate([cx, cy, spec.panel.thickness - EPS], [build_cage(cage)]))
    return nodes


# ── cutters ─────────────────────────────────────────────────────────


def _vent_cutters(spec: EnclosureSpec) -> list[Node]:
    t = spec.panel.thickness
    blocked = [o for _, o in feature_footprints(spec)] + mount_slots(spec)
    cutters: list[Node] = []
    for i, region in enumerate(spec.vents):
        x0, y0, _, _ = polygon_bounds(_vent_rect(spec, region))
        keepouts = [translate(o, -x0, -y0) for o in blocked]
        layout = layout_vent(region.width, region.height, region.vent, keepouts)
        cut = vent_cutout(layout, t + 2 * EPS, origin=(x0, y0), z=-EPS)
        if cut is None:
            log.warning("Vent region %s (%.1fx%.1f) has room for no elements",
                        region.label or i, region.width, region.height)
            continue
        cutters.append(cut)
    return cutters


def seam_hole_outlines(seam_holes: Sequence[tuple[float, float]]) -> list[Outline]:
    d = hw.joiner["bolt_diameter_mm"]
    return [circle_poly(d / 2, hw.circle_segments, x, y) for x, y in seam_holes]


def build_faceplate(
    spec: EnclosureSpec,
    seam_holes: Sequence[tuple[float, float]] = (),
) -> Node:
    """CSG tree for the complete faceplate, cages attached.

    *seam_holes* are panel-local bolt-hole centres for joiner plates
    (see ``parts.joiner.seam_holes``).
    """
    t = spec.panel.thickness
    solids: list[Node] = [_body(spec)] + _ribs(spec) + _cages(spec)
    body = solids[0] if len(solids) == 1 else Union(solids, label="panel body")

    cutters: list[Node] = [
        Translate([0, 0, -EPS], [LinearExtrude(t + 2 * EPS, [multi_polygon(mount_slots(spec))])],
                  label="mounting slots"),
    ]
    for i, c in enumerate(spec.cutouts):
        cx, cy = panel_point(c.x, c.y, spec.width, spec.height)
        cutters.append(through_cut(c.outline(cx, cy), t, label=c.label or f"cutout {i}"))
    for i, k in enumerate(spec.keystones):
        cx, cy = panel_point(k.x, k.y, spec.width, spec.height)
        cutters.append(keystone_cutout(t, cx, cy, label=k.label or f"keystone {i}"))
    cutters += _vent_cutters(spec)
    for cage in spec.cages:
        cx, cy = panel_point(cage.x, cage.y, spec.width, spec.height)
        cutters.append(through_cut(translate(cage_window(cage), cx, cy), t,
                                   label=f"window: {cage.device.name}"))
    if seam_holes:
        cutters.append(Translate(
            [0, 0, -EPS],
            [LinearExtrude(t + 2 * EPS, [multi_polygon(seam_hole_outlines(seam_holes))])],
            label="joiner bolt holes",
        ))

    log.info("Faceplate %s: %dU %s, %d cutter group(s)",
             spec.name, spec.units, spec.rack, len(cutters))
    return Difference([body] + cutters, label=f"faceplate: {spec.name}")
