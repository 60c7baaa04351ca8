"""
EIA-310 rack geometry — panel sizes and mounting-hole positions.

All coordinates in mm.  Panel-local frame: origin at the bottom-left
corner of the front face, X = width, Y = height.
"""

from __future__ import annotations

from dataclasses import dataclass

from rackcad.config.hardware import hw

RACK_UNIT_MM = 44.45

HOLE_PATTERNS = ("all", "outer", "center")


@dataclass(frozen=True)
class RackStandard:
    name: str
    panel_width: float
    hole_spacing: float     # centre-to-centre, left column to right column
    opening_width: float    # clear width between the rails

    @property
    def hole_inset(self) -> float:
        """Distance from the panel edge to a hole column centre."""
        return (self.panel_width - self.hole_spacing) / 2

    @property
    def rail_width(self) -> float:
        """Width of panel that overlaps each rail."""
        return (self.panel_width - self.opening_width) / 2


def standards() -> dict[str, RackStandard]:
    """All configured rack standards keyed by name (``"19in"``, ``"10in"``)."""
    return {
        name: RackStandard(
            name=name,
            panel_width=r["panel_width_mm"],
            hole_spacing=r["hole_spacing_mm"],
            opening_width=r["opening_width_mm"],
        )
        for name, r in hw.racks.items()
    }


def get_standard(name: str) -> RackStandard:
    known = standards()
    if name not in known:
        raise KeyError(f"Unknown rack standard '{name}', expected one of {sorted(known)}")
    return known[name]


def panel_height(units: int) -> float:
    """Front-panel height for *units* U, less the 1/32" stacking clearance."""
    if units < 1:
        raise ValueError(f"Rack units must be >= 1, got {units}")
    return units * hw.unit_height - hw.panel_clearance


def hole_positions(units: int, pattern: str = "all") -> list[float]:
    """Y coordinates of the mounting holes, measured from the panel bottom.

    The panel is centred in its rack space, so every hole shifts down by
    half the stacking clearance.

    *pattern* selects which of the three holes per U are used:
    ``all``, ``outer`` (first and last of each U) or ``center``.
    """
    if pattern not in HOLE_PATTERNS:
        raise ValueError(f"Unknown hole pattern '{pattern}', expected one of {HOLE_PATTERNS}")
    if units < 1:
        raise ValueError(f"Rack units must be >= 1, got {units}")

    offsets = hw.hole_offsets
    if pattern == "outer":
        offsets = [offsets[0], offsets[-1]]
    elif pattern == "center":
        offsets = [offsets[len(offsets) // 2]]

    shift = hw.panel_clearance / 2
    return [
        round(u * hw.unit_height + off - shift, 4)
        for u in range(units)
        for off in offsets
    ]


def hole_x_positions(standard: RackStandard) -> tuple[float, float]:
    """X coordinates of the left and right hole columns."""
    return standard.hole_inset, standard.panel_width - standard.hole_inset
