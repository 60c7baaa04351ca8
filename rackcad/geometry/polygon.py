"""
Polygon geometry utilities for 2-D profiles.

All coordinates in mm.  Generators return CCW vertex lists centred on
the origin unless a centre is given.
"""

from __future__ import annotations
import math
from typing import Sequence

from shapely.geometry import Polygon as ShapelyPolygon

Vertex = list[float]  # [x, y]
Outline = list[Vertex]


# ── core primitives ─────────────────────────────────────────────────


def polygon_area(outline: Outline) -> float:
    """Signed area via shoelace formula (positive = CCW)."""
    n = len(outline)
    if n < 3:
        return 0.0
    area = 0.0
    for i in range(n):
        x0, y0 = outline[i]
        x1, y1 = outline[(i + 1) % n]
        area += x0 * y1 - x1 * y0
    return area / 2.0


def ensure_ccw(outline: Outline) -> Outline:
    """Return a copy with counter-clockwise winding."""
    if polygon_area(outline) < 0:
        return list(reversed(outline))
    return list(outline)


def point_in_polygon(x: float, y: float, outline: Outline) -> bool:
    """Ray-casting point-in-polygon test."""
    n = len(outline)
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = outline[i]
        xj, yj = outline[j]
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside
        j = i
    return inside


def polygon_bounds(outline: Outline) -> tuple[float, float, float, float]:
    """Return (min_x, min_y, max_x, max_y)."""
    xs = [v[0] for v in outline]
    ys = [v[1] for v in outline]
    return min(xs), min(ys), max(xs), max(ys)


def translate(outline: Outline, dx: float, dy: float) -> Outline:
    return [[x + dx, y + dy] for x, y in outline]


# ── profile generators ──────────────────────────────────────────────


def rect(w: float, h: float, cx: float = 0.0, cy: float = 0.0) -> Outline:
    """CCW rectangle centred on *(cx, cy)*."""
    hw2, hh = w / 2, h / 2
    return [
        [cx - hw2, cy - hh],
        [cx + hw2, cy - hh],
        [cx + hw2, cy + hh],
        [cx - hw2, cy + hh],
    ]


def circle_poly(r: float, n: int = 24, cx: float = 0.0, cy: float = 0.0) -> Outline:
    """Approximate a circle as an *n*-gon (CCW)."""
    return [
        [cx + r * math.cos(2 * math.pi * i / n),
         cy + r * math.sin(2 * math.pi * i / n)]
        for i in range(n)
    ]


def regular_polygon(
    n: int,
    circumradius: float,
    rotation_deg: float = 0.0,
    cx: float = 0.0,
    cy: float = 0.0,
) -> Outline:
    """Regular *n*-gon; the first vertex sits at *rotation_deg*."""
    if n < 3:
        raise ValueError(f"A polygon needs at least 3 sides, got {n}")
    rot = math.radians(rotation_deg)
    return [
        [cx + circumradius * math.cos(rot + 2 * math.pi * i / n),
         cy + circumradius * math.sin(rot + 2 * math.pi * i / n)]
        for i in range(n)
    ]


def hexagon(across_flats: float, cx: float = 0.0, cy: float = 0.0) -> Outline:
    """Pointy-top hexagon (vertex up) with the given flat-to-flat width."""
    return regular_polygon(6, across_flats / math.sqrt(3), 90.0, cx, cy)


def diamond(diagonal: float, cx: float = 0.0, cy: float = 0.0) -> Outline:
    """Square rotated 45° with the given corner-to-corner size."""
    d = diagonal / 2
    return [[cx, cy - d], [cx + d, cy], [cx, cy + d], [cx - d, cy]]


def rounded_rect(
    w: float,
    h: float,
    r: float,
    cx: float = 0.0,
    cy: float = 0.0,
    segments: int = 6,
) -> Outline:
    """Rectangle with quarter-circle corners of radius *r*.

    *r* is clamped to half the shorter side; ``r <= 0`` gives a plain
    rectangle.
    """
    r = min(r, w / 2, h / 2)
    if r <= 0:
        return rect(w, h, cx, cy)
    pts: Outline = []
    corners = [
        (cx + w / 2 - r, cy - h / 2 + r, -90.0),
        (cx + w / 2 - r, cy + h / 2 - r, 0.0),
        (cx - w / 2 + r, cy + h / 2 - r, 90.0),
        (cx - w / 2 + r, cy - h / 2 + r, 180.0),
    ]
    for ccx, ccy, start in corners:
        for i in range(segments + 1):
            a = math.radians(start + 90.0 * i / segments)
            pts.append([ccx + r * math.cos(a), ccy + r * math.sin(a)])
    return pts


def stadium(
    length: float,
    width: float,
    cx: float = 0.0,
    cy: float = 0.0,
    vertical: bool = False,
    segments: int = 8,
) -> Outline:
    """Slot with semicircular ends; *length* is the overall tip-to-tip size.

    Horizontal by default.  When *length* <= *width* the slot degenerates
    to a circle of diameter *width*.
    """
    r = width / 2
    straight = max(length - width, 0.0)
    if straight == 0:
        return circle_poly(r, segments * 2, cx, cy)
    half = straight / 2
    pts: Outline = []
    # right cap (-90° → 90°), then left cap (90° → 270°)
    for i in range(segments + 1):
        a = math.radians(-90.0 + 180.0 * i / segments)
        pts.append([half + r * math.cos(a), r * math.sin(a)])
    for i in range(segments + 1):
        a = math.radians(90.0 + 180.0 * i / segments)
        pts.append([-half + r * math.cos(a), r * math.sin(a)])
    if vertical:
        pts = [[-y, x] for x, y in pts]
    return translate(pts, cx, cy)


# ── shapely-backed operations ───────────────────────────────────────


def offset_polygon(shape: Outline, offset: float) -> Outline:
    """Grow (positive) or shrink (negative) *shape* by *offset* mm.

    Uses a mitre join so rectangles stay rectangles.  Returns an empty
    list when a negative offset collapses the polygon.
    """
    poly = ShapelyPolygon(shape)
    if not poly.is_valid:
        poly = poly.buffer(0)
    buffered = poly.buffer(offset, join_style="mitre", mitre_limit=5.0)
    if buffered.is_empty:
        return []
    # buffer() can return a MultiPolygon; take the largest piece
    if buffered.geom_type == "MultiPolygon":
        buffered = max(buffered.geoms, key=lambda g: g.area)
    coords = list(buffered.exterior.coords)[:-1]  # drop closing duplicate
    return ensure_ccw([[x, y] for x, y in coords])


def polygons_overlap(a: Sequence[Sequence[float]], b: Sequence[Sequence[float]]) -> bool:
    """True when the interiors of *a* and *b* share area."""
    pa, pb = ShapelyPolygon(a), ShapelyPolygon(b)
    return pa.intersection(pb).area > 1e-9
