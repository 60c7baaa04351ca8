"""
Panel splitting — cut a faceplate that is wider than the printer bed
into segments and bolt them back together with splice plates.

Each seam gets ``bolt_count`` holes on both sides, ``overlap / 2`` from
the seam.  A splice plate ``2 * overlap`` wide carries the matching holes
and sits behind the seam.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from rackcad.config.hardware import hw
from rackcad.geometry.polygon import circle_poly
from rackcad.scad.nodes import (
    Cube, Difference, Intersection, LinearExtrude, Node, Translate, multi_polygon,
)
from .common import EPS

log = logging.getLogger(__name__)

_MAX_EXTRA_SEGMENTS = 4


def _inside(x: float, ranges: Sequence[tuple[float, float]]) -> tuple[float, float] | None:
    for lo, hi in ranges:
        if lo < x < hi:
            return lo, hi
    return None


def _nudge(
    ideal: float,
    prev: float,
    panel_width: float,
    bed_width: float,
    blocked: Sequence[tuple[float, float]],
) -> float | None:
    """Closest seam to *ideal* outside *blocked* that keeps the segment
    starting at *prev* printable, or ``None``."""
    hit = _inside(ideal, blocked)
    if hit is None:
        return ideal
    candidates = sorted(hit, key=lambda c: abs(c - ideal))
    for c in candidates:
        if prev < c < panel_width and c - prev <= bed_width and _inside(c, blocked) is None:
            return c
    return None


def plan_segments(
    panel_width: float,
    bed_width: float,
    avoid: Sequence[tuple[float, float]] = (),
    overlap: float | None = None,
) -> list[float]:
    """X positions of the seams needed to print a *panel_width* panel on
    a *bed_width* bed.  Empty when the panel already fits.

    Seams are spread evenly, then nudged out of the *avoid* ranges
    (grown by the splice overlap) when the segment widths allow it.
    """
    overlap = hw.joiner["overlap_mm"] if overlap is None else overlap
    if panel_width <= bed_width:
        return []
    if bed_width < 2 * overlap:
        raise ValueError(
            f"Bed width {bed_width}mm is narrower than a {2 * overlap}mm splice plate"
        )

    blocked = [(lo - overlap, hi + overlap) for lo, hi in avoid]
    n = math.ceil(panel_width / bed_width)
    for segments in range(n, n + _MAX_EXTRA_SEGMENTS + 1):
        seams: list[float] = []
        prev = 0.0
        ok = True
        for k in range(1, segments):
            ideal = k * panel_width / segments
            seam = _nudge(ideal, prev, panel_width, bed_width, blocked)
            if seam is None:
                ok = False
                break
            seams.append(seam)
            prev = seam
        if ok and panel_width - prev <= bed_width:
            log.info("Split %.1fmm panel into %d segments at %s", panel_width, segments,
                     ", ".join(f"{s:.1f}" for s in seams))
            return seams

    # No clean placement; fall back to even seams through the features
    seams = [k * panel_width / n for k in range(1, n)]
    log.warning("No seam placement avoids every feature; using even seams at %s",
                ", ".join(f"{s:.1f}" for s in seams))
    return seams


def segment_bounds(seams: Sequence[float], panel_width: float) -> list[tuple[float, float]]:
    edges = [0.0, *seams, panel_width]
    return list(zip(edges[:-1], edges[1:]))


def _bolt_ys(panel_height: float) -> list[float]:
    j = hw.joiner
    count = j["bolt_count"]
    inset = j["bolt_inset_mm"]
    if count == 1:
        return [panel_height / 2]
    step = (panel_height - 2 * inset) / (count - 1)
    return [inset + i * step for i in range(count)]


def seam_holes(seams: Sequence[float], panel_height: float) -> list[tuple[float, float]]:
    """Panel-local bolt-hole centres for every seam."""
    half = hw.joiner["overlap_mm"] / 2
    return [
        (s + dx, y)
        for s in seams
        for dx in (-half, half)
        for y in _bolt_ys(panel_height)
    ]


def segment(
    node: Node,
    x0: float,
    x1: float,
    panel_width: float,
    height: float,
    depth: float,
    label: str = "",
) -> Node:
    """Slice *node* to ``x0 <= x <= x1`` and move the slice to x = 0.

    Outer segments keep a margin so the panel edges are not trimmed.
    """
    lo = x0 if x0 > 0 else -1.0
    hi = x1 if x1 < panel_width else panel_width + 1.0
    slab = Translate([lo, -1.0, -1.0], [Cube([hi - lo, height + 2.0, depth + 2.0])])
    return Translate([-x0, 0, 0], [Intersection([node, slab])], label=label)


def build_joiner(panel_height: float, plate_height: float | None = None) -> Node:
    """Splice plate for one seam; its holes line up with ``seam_holes``.

    *plate_height* defaults to the panel height; the plate is centred on
    the panel vertically.
    """
    j = hw.joiner
    overlap = j["overlap_mm"]
    t = j["thickness_mm"]
    plate_h = plate_height or panel_height
    y_off = (panel_height - plate_h) / 2
    r = j["bolt_diameter_mm"] / 2
    holes = [
        circle_poly(r, hw.circle_segments, overlap + dx, y - y_off)
        for dx in (-overlap / 2, overlap / 2)
        for y in _bolt_ys(panel_height)
    ]
    return Difference([
        Cube([2 * overlap, plate_h, t], label="splice plate"),
        Translate([0, 0, -EPS], [LinearExtrude(t + 2 * EPS, [multi_polygon(holes)])],
                  label="bolt holes"),
    ], label="joiner")
