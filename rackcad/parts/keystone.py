"""
Keystone jack cutouts.

A keystone jack snaps into a rectangular window whose rim must be thin
enough for the jack's latch.  Printed panels are thicker than that, so
the cut is two-stage:

  z = 0 .. clip           front window (opening + clearance), through
  z = clip .. thickness   rear pocket, wide enough for the jack body

leaving ``clip_thickness`` of material around the window.
"""

from __future__ import annotations

from dataclasses import dataclass

from rackcad.config.hardware import hw
from rackcad.geometry.polygon import Outline, rect
from rackcad.scad.nodes import Node, Union, extrude_profile
from .common import EPS


@dataclass
class KeystoneDims:
    opening_width: float
    opening_height: float
    clip_thickness: float
    pocket_width: float
    pocket_height: float
    pitch: float

    @classmethod
    def from_config(cls) -> KeystoneDims:
        k = hw.keystone
        return cls(
            opening_width=k["opening_width_mm"],
            opening_height=k["opening_height_mm"],
            clip_thickness=k["clip_thickness_mm"],
            pocket_width=k["pocket_width_mm"],
            pocket_height=k["pocket_height_mm"],
            pitch=k["pitch_mm"],
        )

    def window(self, cx: float = 0.0, cy: float = 0.0) -> Outline:
        clr = hw.fit_clearance
        return rect(self.opening_width + 2 * clr, self.opening_height + 2 * clr, cx, cy)

    def pocket(self, cx: float = 0.0, cy: float = 0.0) -> Outline:
        return rect(self.pocket_width, self.pocket_height, cx, cy)


def keystone_footprint(cx: float, cy: float, dims: KeystoneDims | None = None) -> Outline:
    """Largest outline the keystone cut occupies (for overlap checks)."""
    dims = dims or KeystoneDims.from_config()
    return dims.pocket(cx, cy)


def keystone_cutout(
    thickness: float,
    cx: float = 0.0,
    cy: float = 0.0,
    dims: KeystoneDims | None = None,
    label: str = "",
) -> Node:
    """Cutter for one keystone jack centred on *(cx, cy)* in a plate of
    *thickness* lying on z = 0."""
    dims = dims or KeystoneDims.from_config()
    window = extrude_profile(dims.window(cx, cy), thickness + 2 * EPS, z=-EPS,
                             label="window")
    if thickness <= dims.clip_thickness:
        window.label = label or "keystone"
        return window
    pocket = extrude_profile(
        dims.pocket(cx, cy),
        thickness - dims.clip_thickness + EPS,
        z=dims.clip_thickness,
        label="rear pocket",
    )
    return Union([window, pocket], label=label or "keystone")


def keystone_row(count: int, pitch: float | None = None) -> list[float]:
    """X offsets of *count* jacks spaced *pitch* apart, centred on 0."""
    if count < 0:
        raise ValueError(f"Keystone count must be >= 0, got {count}")
    if pitch is None:
        pitch = KeystoneDims.from_config().pitch
    start = -(count - 1) * pitch / 2
    return [start + i * pitch for i in range(count)]
