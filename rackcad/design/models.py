"""Enclosure description dataclasses — the input every part generator reads."""

from __future__ import annotations

from dataclasses import dataclass, field

from rackcad.config.hardware import hw
from rackcad.geometry.polygon import Outline, circle_poly, rounded_rect
from rackcad.parts.vent import VentSpec
from rackcad.rack.eia310 import RackStandard, get_standard, panel_height


@dataclass
class DeviceSpec:
    name: str
    width: float
    height: float
    depth: float


@dataclass
class PanelCutout:
    """Opening in the faceplate.  *x*, *y* offset its centre from the
    panel centre."""

    shape: str                          # "rect" | "circle"
    x: float
    y: float
    width: float = 0.0                  # rect only
    height: float = 0.0                 # rect only
    diameter: float = 0.0               # circle only
    corner_radius: float = 0.0          # rect only
    label: str = ""

    def outline(self, cx: float, cy: float) -> Outline:
        """Outline centred on panel-local *(cx, cy)*."""
        if self.shape == "circle":
            return circle_poly(self.diameter / 2, hw.circle_segments, cx, cy)
        return rounded_rect(self.width, self.height, self.corner_radius, cx, cy)


@dataclass
class KeystoneSlot:
    x: float
    y: float
    label: str = ""


@dataclass
class VentRegion:
    """Rectangular vent area on the faceplate, centred at *(x, y)*."""

    x: float
    y: float
    width: float
    height: float
    vent: VentSpec = field(default_factory=VentSpec.from_config)
    label: str = ""


@dataclass
class CageSpec:
    """Tube that holds a device behind a faceplate window."""

    device: DeviceSpec
    x: float = 0.0
    y: float = 0.0
    wall: float = 3.0
    clearance: float = 0.5
    front_lip: float = 2.0
    back: str = "lip"                   # "open" | "lip" | "closed"
    back_lip: float = 5.0
    cable_opening: tuple[float, float] = (30.0, 15.0)
    top_vent: VentSpec | None = None
    side_vent: VentSpec | None = None

    @classmethod
    def from_config(cls, device: DeviceSpec, **overrides) -> CageSpec:
        c = hw.cage
        values = dict(
            wall=c["wall_thickness_mm"],
            clearance=hw.device_clearance,
            front_lip=c["front_lip_mm"],
            back=c["back_style"],
            back_lip=c["back_lip_mm"],
            cable_opening=tuple(c["cable_opening_mm"]),
        )
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(device=device, **values)

    @property
    def inner_width(self) -> float:
        return self.device.width + 2 * self.clearance

    @property
    def inner_height(self) -> float:
        return self.device.height + 2 * self.clearance

    @property
    def inner_depth(self) -> float:
        return self.device.depth + self.clearance

    @property
    def outer_width(self) -> float:
        return self.inner_width + 2 * self.wall

    @property
    def outer_height(self) -> float:
        return self.inner_height + 2 * self.wall

    @property
    def length(self) -> float:
        """Overall depth behind the panel, back wall included."""
        return self.inner_depth + (0.0 if self.back == "open" else self.wall)


@dataclass
class EarSpec:
    """L-shaped rack ears for a device with its own side screw holes.

    ``device_holes`` are ``(depth, height)`` pairs: distance behind the
    panel and height above the panel bottom.  When ``device_width`` is
    set the flange width is derived so the ears clamp the device.
    """

    thickness: float = 4.0
    flange_width: float = 20.0
    depth: float = 40.0
    screw_diameter: float = 3.4
    device_width: float | None = None
    device_holes: list[tuple[float, float]] = field(default_factory=list)

    @classmethod
    def from_config(cls, **overrides) -> EarSpec:
        e = hw.ears
        values = dict(
            thickness=e["thickness_mm"],
            flange_width=e["flange_width_mm"],
            depth=e["depth_mm"],
            screw_diameter=e["screw_diameter_mm"],
        )
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def effective_flange_width(self, standard: RackStandard) -> float:
        if self.device_width is None:
            return self.flange_width
        return (standard.panel_width - self.device_width) / 2 - hw.fit_clearance


@dataclass
class PanelSpec:
    thickness: float = 4.0
    corner_radius: float = 1.0
    hole_pattern: str = "outer"
    mount_hole_diameter: float = 6.5
    mount_slot_length: float = 3.0
    rib_depth: float = 0.0
    rib_thickness: float = 3.0

    @classmethod
    def from_config(cls, **overrides) -> PanelSpec:
        p = hw.panel
        values = dict(
            thickness=p["thickness_mm"],
            corner_radius=p["corner_radius_mm"],
            hole_pattern=p["hole_pattern"],
            mount_hole_diameter=p["mount_hole_diameter_mm"],
            mount_slot_length=p["mount_slot_length_mm"],
            rib_depth=p["rib_depth_mm"],
            rib_thickness=p["rib_thickness_mm"],
        )
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass
class EnclosureSpec:
    name: str
    rack: str = "19in"
    units: int = 1
    panel: PanelSpec = field(default_factory=PanelSpec.from_config)
    cutouts: list[PanelCutout] = field(default_factory=list)
    keystones: list[KeystoneSlot] = field(default_factory=list)
    vents: list[VentRegion] = field(default_factory=list)
    cages: list[CageSpec] = field(default_factory=list)
    ears: EarSpec | None = None
    bed_width: float | None = None      # None = configured printer

    @property
    def standard(self) -> RackStandard:
        return get_standard(self.rack)

    @property
    def width(self) -> float:
        return self.standard.panel_width

    @property
    def height(self) -> float:
        return panel_height(self.units)

    @property
    def max_segment_width(self) -> float:
        return self.bed_width or hw.bed_width
