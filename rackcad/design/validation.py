"""Enclosure validation — check an EnclosureSpec before generating parts."""

from __future__ import annotations

from rackcad.geometry.polygon import Outline, polygon_bounds, polygons_overlap, rect
from rackcad.rack.eia310 import HOLE_PATTERNS, standards
from .models import EnclosureSpec

CUTOUT_SHAPES = ("rect", "circle")


def _within(
    outline: Outline,
    x_lo: float,
    x_hi: float,
    y_lo: float,
    y_hi: float,
) -> bool:
    x0, y0, x1, y1 = polygon_bounds(outline)
    eps = 1e-6
    return x0 >= x_lo - eps and x1 <= x_hi + eps and y0 >= y_lo - eps and y1 <= y_hi + eps


def validate_enclosure(spec: EnclosureSpec) -> list[str]:
    """Validate an EnclosureSpec.  Returns error messages (empty = valid)."""
    # Part modules import the design models, so pull them in lazily
    from rackcad.parts.cage import BACK_STYLES, check_cage_fit
    from rackcad.parts.ears import check_ears
    from rackcad.parts.faceplate import feature_footprints
    from rackcad.parts.joiner import plan_segments

    errors: list[str] = []

    # ── Rack & size — nothing else can be checked without these ──
    if spec.rack not in standards():
        errors.append(f"Unknown rack '{spec.rack}', expected one of {sorted(standards())}")
        return errors
    if spec.units < 1:
        errors.append(f"units must be >= 1, got {spec.units}")
        return errors

    std = spec.standard
    W, H = spec.width, spec.height
    rail = std.rail_width

    # ── Panel ──
    p = spec.panel
    if p.thickness <= 0:
        errors.append(f"Panel thickness must be > 0, got {p.thickness}")
    if p.hole_pattern not in HOLE_PATTERNS:
        errors.append(f"Unknown hole_pattern '{p.hole_pattern}', expected one of {HOLE_PATTERNS}")
    if p.mount_hole_diameter <= 0:
        errors.append(f"mount_hole_diameter must be > 0, got {p.mount_hole_diameter}")
    if p.mount_slot_length < 0:
        errors.append(f"mount_slot_length must be >= 0, got {p.mount_slot_length}")
    if p.corner_radius < 0:
        errors.append(f"corner_radius must be >= 0, got {p.corner_radius}")
    if p.rib_depth < 0:
        errors.append(f"rib_depth must be >= 0, got {p.rib_depth}")
    if p.rib_depth > 0 and not 0 < p.rib_thickness < H / 2:
        errors.append(f"rib_thickness must be between 0 and {H / 2:.1f}, got {p.rib_thickness}")
    if errors:
        return errors

    # ── Cutouts ──
    for i, c in enumerate(spec.cutouts):
        name = c.label or f"cutout {i}"
        if c.shape not in CUTOUT_SHAPES:
            errors.append(f"{name}: unknown shape '{c.shape}', expected one of {CUTOUT_SHAPES}")
        elif c.shape == "circle" and c.diameter <= 0:
            errors.append(f"{name}: diameter must be > 0")
        elif c.shape == "rect" and (c.width <= 0 or c.height <= 0):
            errors.append(f"{name}: width and height must be > 0")

    # ── Vents ──
    for i, v in enumerate(spec.vents):
        name = v.label or f"vent {i}"
        if v.width <= 0 or v.height <= 0:
            errors.append(f"{name}: width and height must be > 0")
        errors += [f"{name}: {e}" for e in v.vent.check()]

    # ── Cages ──
    for cage in spec.cages:
        d = cage.device
        if min(d.width, d.height, d.depth) <= 0:
            errors.append(f"Cage '{d.name}': device dimensions must be > 0")
            continue
        if cage.back not in BACK_STYLES:
            errors.append(f"Cage '{d.name}': unknown back style '{cage.back}', expected one of {BACK_STYLES}")
        if cage.wall <= 0:
            errors.append(f"Cage '{d.name}': wall must be > 0")
        for vent in (cage.top_vent, cage.side_vent):
            if vent is not None:
                errors += [f"Cage '{d.name}': {e}" for e in vent.check()]
        errors += check_cage_fit(cage, std, spec.units)

    # ── Ears ──
    if spec.ears is not None:
        errors += check_ears(spec.ears, std, spec.units)

    if errors:
        return errors

    # ── Placement: everything between the rails, nothing overlapping ──
    footprints = feature_footprints(spec)
    for name, outline in footprints:
        if not _within(outline, rail, W - rail, 0.0, H):
            errors.append(
                f"{name} extends outside the usable {std.opening_width:.2f}x{H:.2f}mm "
                f"area between the rails."
            )
    for i in range(len(footprints)):
        for j in range(i + 1, len(footprints)):
            if polygons_overlap(footprints[i][1], footprints[j][1]):
                errors.append(f"{footprints[i][0]} overlaps {footprints[j][0]}.")

    vent_rects = []
    for i, v in enumerate(spec.vents):
        outline = rect(v.width, v.height, W / 2 + v.x, H / 2 + v.y)
        name = v.label or f"vent {i}"
        if not _within(outline, rail, W - rail, 0.0, H):
            errors.append(f"{name} extends outside the area between the rails.")
        vent_rects.append((name, outline))
    for i in range(len(vent_rects)):
        for j in range(i + 1, len(vent_rects)):
            if polygons_overlap(vent_rects[i][1], vent_rects[j][1]):
                errors.append(f"{vent_rects[i][0]} overlaps {vent_rects[j][0]}.")

    # ── Ribs must not run through a device bay or behind an opening ──
    if p.rib_depth > 0:
        cage_names = {f"cage '{c.device.name}'" for c in spec.cages}
        for name, outline in footprints + vent_rects:
            if name in cage_names:
                continue
            _, y0, _, y1 = polygon_bounds(outline)
            if y0 < p.rib_thickness or y1 > H - p.rib_thickness:
                errors.append(f"{name} runs into the {p.rib_thickness}mm rear ribs.")
        for cage in spec.cages:
            bay_lo = H / 2 + cage.y - cage.inner_height / 2
            bay_hi = H / 2 + cage.y + cage.inner_height / 2
            if bay_lo < p.rib_thickness or bay_hi > H - p.rib_thickness:
                errors.append(
                    f"Cage '{cage.device.name}' bay runs into the {p.rib_thickness}mm rear ribs."
                )

    # ── Printer bed ──
    bed = spec.max_segment_width
    if bed <= 0:
        errors.append(f"bed_width must be > 0, got {bed}")
    elif W > bed:
        try:
            plan_segments(W, bed)
        except ValueError as e:
            errors.append(str(e))
    return errors
