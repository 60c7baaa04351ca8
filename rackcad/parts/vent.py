"""
Ventilation patterns — tile a rectangular area with holes and emit them
as a single cutter.

Five element styles are supported:

  honeycomb   pointy-top hexagons, staggered rows
  grid        squares on a square lattice
  circle      round holes, hex-packed (staggered rows)
  diamond     45°-rotated squares, staggered rows
  slot        vertical rounded slots in columns

``cell_size`` is the element's characteristic width (hexagon
across-flats, square side, circle diameter, diamond diagonal, slot
width) and ``wall`` is the solid web left between neighbouring
elements.  Pitches are derived so the web is uniform in every direction.

Large areas with small cells explode the CSG tree, so the layout is
capped: when the element count exceeds ``max_elements`` the cell size
and wall are scaled up together until it fits.  All elements of a
layout are emitted as ONE multi-path ``polygon()`` inside ONE
``linear_extrude``; the renderer sees a single difference() child no
matter how many holes there are.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from shapely.affinity import translate as shift
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.ops import unary_union
from shapely.prepared import prep

from rackcad.config.hardware import hw
from rackcad.geometry.polygon import (
    Outline, circle_poly, diamond, hexagon, polygon_area, rect, stadium, translate,
)
from rackcad.scad.nodes import LinearExtrude, Node, Translate, multi_polygon

log = logging.getLogger(__name__)

VENT_STYLES = ("honeycomb", "grid", "slot", "circle", "diamond")

# Extra growth on repeat rescales, on top of the exact count ratio
_RESCALE_STEP = 1.02
_MAX_RESCALES = 25


@dataclass
class VentSpec:
    style: str = "honeycomb"
    cell_size: float = 6.0
    wall: float = 2.0
    slot_length: float = 20.0
    margin: float = 3.0
    max_elements: int = 400

    @classmethod
    def from_config(cls, **overrides) -> VentSpec:
        """Spec seeded from the configured vent defaults."""
        v = hw.vent
        values = dict(
            style=v["style"],
            cell_size=v["cell_size_mm"],
            wall=v["wall_mm"],
            slot_length=v["slot_length_mm"],
            margin=v["margin_mm"],
            max_elements=v["max_elements"],
        )
        values.update({k: val for k, val in overrides.items() if val is not None})
        return cls(**values)

    def check(self) -> list[str]:
        """Parameter problems (empty = usable)."""
        errors: list[str] = []
        if self.style not in VENT_STYLES:
            errors.append(f"Unknown vent style '{self.style}', expected one of {VENT_STYLES}")
        if self.cell_size <= 0:
            errors.append(f"Vent cell_size must be > 0, got {self.cell_size}")
        if self.wall < 0:
            errors.append(f"Vent wall must be >= 0, got {self.wall}")
        if self.margin < 0:
            errors.append(f"Vent margin must be >= 0, got {self.margin}")
        if self.max_elements < 1:
            errors.append(f"Vent max_elements must be >= 1, got {self.max_elements}")
        if self.style == "slot" and self.slot_length <= 0:
            errors.append(f"Vent slot_length must be > 0, got {self.slot_length}")
        return errors


@dataclass
class VentLayout:
    """Result of tiling an area.

    ``centers`` are in area-local coordinates (0..width, 0..height);
    ``profile`` is one element centred on the origin.
    """

    style: str
    width: float
    height: float
    cell_size: float
    wall: float
    profile: Outline
    centers: list[tuple[float, float]] = field(default_factory=list)
    scale: float = 1.0
    capped: bool = False

    @property
    def count(self) -> int:
        return len(self.centers)

    def outlines(self) -> list[Outline]:
        return [translate(self.profile, cx, cy) for cx, cy in self.centers]

    def open_area(self) -> float:
        """Total hole area in mm²."""
        return self.count * abs(polygon_area(self.profile))

    def open_fraction(self) -> float:
        total = self.width * self.height
        return self.open_area() / total if total > 0 else 0.0


# ── lattice geometry ────────────────────────────────────────────────


@dataclass
class _Lattice:
    profile: Outline
    half_w: float
    half_h: float
    pitch_x: float
    pitch_y: float
    stagger: bool


def _lattice(style: str, cell: float, wall: float, slot_length: float) -> _Lattice:
    if style == "honeycomb":
        pitch = cell + wall
        return _Lattice(hexagon(cell), cell / 2, cell / math.sqrt(3),
                        pitch, pitch * math.sqrt(3) / 2, True)
    if style == "grid":
        return _Lattice(rect(cell, cell), cell / 2, cell / 2,
                        cell + wall, cell + wall, False)
    if style == "circle":
        pitch = cell + wall
        profile = circle_poly(cell / 2, hw.circle_segments)
        return _Lattice(profile, cell / 2, cell / 2,
                        pitch, pitch * math.sqrt(3) / 2, True)
    if style == "diamond":
        pitch = cell + wall * math.sqrt(2)
        return _Lattice(diamond(cell), cell / 2, cell / 2,
                        pitch, pitch / 2, True)
    if style == "slot":
        length = max(slot_length, cell)
        return _Lattice(stadium(length, cell, vertical=True), cell / 2, length / 2,
                        cell + wall, length + wall, False)
    raise ValueError(f"Unknown vent style '{style}', expected one of {VENT_STYLES}")


def _tile(lat: _Lattice, uw: float, uh: float) -> list[tuple[float, float]]:
    """Centres of every element that fits a *uw* × *uh* box, with the
    occupied block centred in the box.  Coordinates relative to the box."""
    if uw < 2 * lat.half_w or uh < 2 * lat.half_h:
        return []
    n_rows = int(math.floor((uh - 2 * lat.half_h) / lat.pitch_y + 1e-9)) + 1

    raw: list[tuple[float, float]] = []
    for j in range(n_rows):
        offset = lat.pitch_x / 2 if lat.stagger and j % 2 == 1 else 0.0
        span = uw - 2 * lat.half_w - offset
        if span < -1e-9:
            continue
        n_cols = int(math.floor(span / lat.pitch_x + 1e-9)) + 1
        y = lat.half_h + j * lat.pitch_y
        for i in range(n_cols):
            raw.append((lat.half_w + offset + i * lat.pitch_x, y))

    if not raw:
        return []
    block_w = max(x for x, _ in raw) + lat.half_w
    block_h = max(y for _, y in raw) + lat.half_h
    dx = (uw - block_w) / 2
    dy = (uh - block_h) / 2
    return [(x + dx, y + dy) for x, y in raw]


def _drop_keepouts(
    centers: list[tuple[float, float]],
    profile: Outline,
    wall: float,
    keepouts: list[Outline],
) -> list[tuple[float, float]]:
    """Remove elements whose profile, grown by *wall*, touches a keepout."""
    polys = [ShapelyPolygon(k) for k in keepouts if len(k) >= 3]
    if not polys:
        return centers
    blocked = prep(unary_union(polys))
    grown = ShapelyPolygon(profile)
    if wall > 0:
        grown = grown.buffer(wall, join_style="mitre")
    return [
        (cx, cy) for cx, cy in centers
        if not blocked.intersects(shift(grown, cx, cy))
    ]


# ── public API ──────────────────────────────────────────────────────


def layout_vent(
    width: float,
    height: float,
    spec: VentSpec,
    keepouts: list[Outline] | None = None,
) -> VentLayout:
    """Tile a *width* × *height* area with vent elements.

    Parameters
    ----------
    width, height : float
        Size of the vent area in mm.  ``spec.margin`` of it is kept solid
        on every side.
    spec : VentSpec
        Element style and sizing.
    keepouts : list of outlines, optional
        Polygons in area-local coordinates that no element (plus its
        wall) may touch — holes, cutouts, screw bosses.

    Returns
    -------
    VentLayout
        Possibly empty.  ``capped`` is set when the pattern had to be
        scaled up to respect ``spec.max_elements``.
    """
    errors = spec.check()
    if errors:
        raise ValueError("; ".join(errors))

    uw = width - 2 * spec.margin
    uh = height - 2 * spec.margin
    keepouts = keepouts or []

    scale = 1.0
    capped = False
    attempt = 0
    while True:
        cell = spec.cell_size * scale
        wall = spec.wall * scale
        lat = _lattice(spec.style, cell, wall, spec.slot_length * scale)
        centers = [(x + spec.margin, y + spec.margin) for x, y in _tile(lat, uw, uh)]
        centers = _drop_keepouts(centers, lat.profile, wall, keepouts)
        if len(centers) <= spec.max_elements:
            break
        capped = True
        if attempt == _MAX_RESCALES:
            log.warning(
                "Vent %s %.1fx%.1f did not converge after %d rescales — truncating to %d",
                spec.style, width, height, _MAX_RESCALES, spec.max_elements,
            )
            centers = centers[:spec.max_elements]
            break
        step = _RESCALE_STEP if attempt > 0 else 1.0
        scale *= math.sqrt(len(centers) / spec.max_elements) * step
        attempt += 1

    if capped:
        log.info(
            "Vent %s %.1fx%.1f capped at %d elements: cell %.2f → %.2f mm (scale %.2f)",
            spec.style, width, height, spec.max_elements,
            spec.cell_size, spec.cell_size * scale, scale,
        )

    return VentLayout(
        style=spec.style,
        width=width,
        height=height,
        cell_size=cell,
        wall=wall,
        profile=lat.profile,
        centers=centers,
        scale=scale,
        capped=capped,
    )


def vent_cutout(
    layout: VentLayout,
    depth: float,
    origin: tuple[float, float] = (0.0, 0.0),
    z: float = 0.0,
    label: str = "",
) -> Node | None:
    """Extrude every element of *layout* as one cutter.

    *origin* places the area's (0, 0) corner; *z* is where the cut
    starts.  Returns ``None`` for an empty layout.
    """
    if not layout.centers:
        return None
    tag = label or f"vent: {layout.count} x {layout.style} {layout.cell_size:.1f}mm"
    poly = multi_polygon(layout.outlines())
    return Translate(
        [origin[0], origin[1], z],
        [LinearExtrude(depth, [poly])],
        label=tag,
    )
