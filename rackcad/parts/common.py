"""Shared helpers for part generators."""

from __future__ import annotations

from rackcad.scad.nodes import Node, LinearExtrude, Polygon, Translate

# Cutters overshoot the solid they cut by this much on each face so the
# renderer never sees coplanar faces.
EPS = 0.01


def panel_point(x: float, y: float, panel_width: float, panel_height: float) -> tuple[float, float]:
    """Convert a centre-relative panel offset to panel-local coordinates."""
    return panel_width / 2 + x, panel_height / 2 + y


def through_cut(pts, thickness: float, label: str = "") -> Node:
    """Extrude *pts* so it cuts fully through a plate of *thickness* at z=0."""
    return Translate(
        [0, 0, -EPS],
        [LinearExtrude(thickness + 2 * EPS, [Polygon(pts)])],
        label=label,
    )
