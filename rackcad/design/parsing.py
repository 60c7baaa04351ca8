"""Enclosure parsing — convert raw dicts/JSON into EnclosureSpec.

Missing fields fall back to config/rack_defaults.json.  Structurally
wrong input (a list where an object belongs, a short pair) raises
``ValueError``.
"""

from __future__ import annotations

from rackcad.parts.vent import VentSpec
from .models import (
    CageSpec, DeviceSpec, EarSpec, EnclosureSpec, KeystoneSlot, PanelCutout,
    PanelSpec, VentRegion,
)


def _opt_float(data: dict, key: str) -> float | None:
    v = data.get(key)
    return None if v is None else float(v)


def _object(value, where: str) -> dict:
    """*value* as a dict; ``None`` counts as an empty object."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{where} must be an object, got {type(value).__name__}")
    return value


def _objects(data: dict, key: str) -> list[dict]:
    items = data.get(key)
    if items is None:
        return []
    if not isinstance(items, list):
        raise ValueError(f"'{key}' must be a list, got {type(items).__name__}")
    return [_object(item, f"{key}[{i}]") for i, item in enumerate(items)]


def _pair(value, where: str) -> tuple[float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"{where} must be a pair of numbers, got {value!r}")
    return float(value[0]), float(value[1])


def parse_vent(data: dict | None) -> VentSpec | None:
    """Parse a vent block; ``None`` / missing means no vent."""
    if data is None:
        return None
    data = _object(data, "vent")
    return VentSpec.from_config(
        style=data.get("style"),
        cell_size=_opt_float(data, "cell_size"),
        wall=_opt_float(data, "wall"),
        slot_length=_opt_float(data, "slot_length"),
        margin=_opt_float(data, "margin"),
        max_elements=None if data.get("max_elements") is None else int(data["max_elements"]),
    )


def _parse_device(data: dict) -> DeviceSpec:
    data = _object(data, "device")
    return DeviceSpec(
        name=data.get("name", "device"),
        width=float(data["width"]),
        height=float(data["height"]),
        depth=float(data["depth"]),
    )


def _parse_cage(data: dict) -> CageSpec:
    opening = data.get("cable_opening")
    return CageSpec.from_config(
        _parse_device(data.get("device")),
        x=_opt_float(data, "x"),
        y=_opt_float(data, "y"),
        wall=_opt_float(data, "wall"),
        clearance=_opt_float(data, "clearance"),
        front_lip=_opt_float(data, "front_lip"),
        back=data.get("back"),
        back_lip=_opt_float(data, "back_lip"),
        cable_opening=None if opening is None else _pair(opening, "cable_opening"),
        top_vent=parse_vent(data.get("top_vent")),
        side_vent=parse_vent(data.get("side_vent")),
    )


def _parse_ears(data: dict | None) -> EarSpec | None:
    if data is None:
        return None
    data = _object(data, "ears")
    holes = data.get("device_holes") or []
    if not isinstance(holes, list):
        raise ValueError(f"'device_holes' must be a list, got {type(holes).__name__}")
    return EarSpec.from_config(
        thickness=_opt_float(data, "thickness"),
        flange_width=_opt_float(data, "flange_width"),
        depth=_opt_float(data, "depth"),
        screw_diameter=_opt_float(data, "screw_diameter"),
        device_width=_opt_float(data, "device_width"),
        device_holes=[_pair(h, f"device_holes[{i}]") for i, h in enumerate(holes)],
    )


def _parse_panel(data: dict) -> PanelSpec:
    return PanelSpec.from_config(
        thickness=_opt_float(data, "thickness"),
        corner_radius=_opt_float(data, "corner_radius"),
        hole_pattern=data.get("hole_pattern"),
        mount_hole_diameter=_opt_float(data, "mount_hole_diameter"),
        mount_slot_length=_opt_float(data, "mount_slot_length"),
        rib_depth=_opt_float(data, "rib_depth"),
        rib_thickness=_opt_float(data, "rib_thickness"),
    )


def parse_enclosure(data: dict) -> EnclosureSpec:
    """Parse a raw dict (from JSON / HTTP body) into an EnclosureSpec.

    Format (all lengths in mm, positions relative to the panel centre)::

        {
          "name": "switch-1u",
          "rack": "19in", "units": 1,
          "panel": {"thickness": 4, "hole_pattern": "outer"},
          "cutouts": [{"shape": "rect", "x": 0, "y": 0, "width": 60, "height": 20}],
          "keystones": [{"x": -150, "y": 0}],
          "vents": [{"x": 150, "y": 0, "width": 80, "height": 30,
                     "vent": {"style": "honeycomb"}}],
          "cages": [{"device": {"name": "nuc", "width": 117, "height": 37, "depth": 112}}],
          "ears": {"device_width": 440, "device_holes": [[15, 10], [15, 30]]},
          "bed_width": 220
        }

    A region's ``"vent": null`` means the default pattern; a cage's
    ``"top_vent": null`` means no vent.
    """
    data = _object(data, "design")
    cutouts = [
        PanelCutout(
            shape=c.get("shape", "rect"),
            x=float(c.get("x", 0.0)),
            y=float(c.get("y", 0.0)),
            width=float(c.get("width", 0.0)),
            height=float(c.get("height", 0.0)),
            diameter=float(c.get("diameter", 0.0)),
            corner_radius=float(c.get("corner_radius", 0.0)),
            label=c.get("label", ""),
        )
        for c in _objects(data, "cutouts")
    ]

    keystones = [
        KeystoneSlot(x=float(k.get("x", 0.0)), y=float(k.get("y", 0.0)), label=k.get("label", ""))
        for k in _objects(data, "keystones")
    ]

    vents = [
        VentRegion(
            x=float(v.get("x", 0.0)),
            y=float(v.get("y", 0.0)),
            width=float(v["width"]),
            height=float(v["height"]),
            vent=parse_vent(v.get("vent") or {}),
            label=v.get("label", ""),
        )
        for v in _objects(data, "vents")
    ]

    return EnclosureSpec(
        name=data.get("name", "enclosure"),
        rack=data.get("rack", "19in"),
        units=int(data.get("units", 1)),
        panel=_parse_panel(_object(data.get("panel"), "panel")),
        cutouts=cutouts,
        keystones=keystones,
        vents=vents,
        cages=[_parse_cage(c) for c in _objects(data, "cages")],
        ears=_parse_ears(data.get("ears")),
        bed_width=_opt_float(data, "bed_width"),
    )
