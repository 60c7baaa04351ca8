"""Enclosure serialization — convert EnclosureSpec to JSON-safe dicts."""

from __future__ import annotations

from dataclasses import asdict

from rackcad.parts.vent import VentSpec
from .models import CageSpec, EnclosureSpec


def vent_to_dict(vent: VentSpec) -> dict:
    return asdict(vent)


def _cage_to_dict(cage: CageSpec) -> dict:
    return {
        "device": asdict(cage.device),
        "x": cage.x,
        "y": cage.y,
        "wall": cage.wall,
        "clearance": cage.clearance,
        "front_lip": cage.front_lip,
        "back": cage.back,
        "back_lip": cage.back_lip,
        "cable_opening": list(cage.cable_opening),
        **({"top_vent": vent_to_dict(cage.top_vent)} if cage.top_vent is not None else {}),
        **({"side_vent": vent_to_dict(cage.side_vent)} if cage.side_vent is not None else {}),
    }


def enclosure_to_dict(spec: EnclosureSpec) -> dict:
    """Convert an EnclosureSpec to a dict that ``parse_enclosure`` reads back."""
    out = {
        "name": spec.name,
        "rack": spec.rack,
        "units": spec.units,
        "panel": asdict(spec.panel),
        "cutouts": [asdict(c) for c in spec.cutouts],
        "keystones": [
            {"x": k.x, "y": k.y, **({"label": k.label} if k.label else {})}
            for k in spec.keystones
        ],
        "vents": [
            {
                "x": v.x,
                "y": v.y,
                "width": v.width,
                "height": v.height,
                "vent": vent_to_dict(v.vent),
                **({"label": v.label} if v.label else {}),
            }
            for v in spec.vents
        ],
        "cages": [_cage_to_dict(c) for c in spec.cages],
    }
    if spec.ears is not None:
        ears = asdict(spec.ears)
        ears["device_holes"] = [list(h) for h in spec.ears.device_holes]
        if spec.ears.device_width is None:
            del ears["device_width"]
        out["ears"] = ears
    if spec.bed_width is not None:
        out["bed_width"] = spec.bed_width
    return out
