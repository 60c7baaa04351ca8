"""
Hardware configuration — single source of truth for rack constants,
printer limits and fit tolerances.

Loads config/rack_defaults.json once and exposes typed accessors.
Set ``RACKCAD_CONFIG`` to load a different file.
"""

from __future__ import annotations
import json
import os
from pathlib import Path
from functools import lru_cache


_DEFAULT_PATH = Path(__file__).resolve().parent / "rack_defaults.json"


def config_path() -> Path:
    override = os.environ.get("RACKCAD_CONFIG")
    return Path(override) if override else _DEFAULT_PATH


@lru_cache(maxsize=1)
def _load() -> dict:
    return json.loads(config_path().read_text(encoding="utf-8"))


def reload() -> None:
    """Drop the cached config so the next access re-reads the file."""
    _load.cache_clear()


class _HW:
    """Typed accessor for hardware config."""

    # ── raw section accessors ───────────────────────────────────────
    @property
    def eia310(self) -> dict:
        return _load()["eia310"]

    @property
    def racks(self) -> dict:
        return _load()["racks"]

    @property
    def panel(self) -> dict:
        return _load()["panel"]

    @property
    def cage(self) -> dict:
        return _load()["cage"]

    @property
    def ears(self) -> dict:
        return _load()["ears"]

    @property
    def joiner(self) -> dict:
        return _load()["joiner"]

    @property
    def keystone(self) -> dict:
        return _load()["keystone"]

    @property
    def vent(self) -> dict:
        return _load()["vent"]

    @property
    def hardware(self) -> dict:
        return _load()["hardware"]

    # ── EIA-310 ─────────────────────────────────────────────────────
    @property
    def unit_height(self) -> float:
        return _load()["eia310"]["unit_height_mm"]

    @property
    def hole_offsets(self) -> list[float]:
        return list(_load()["eia310"]["hole_offsets_mm"])

    @property
    def panel_clearance(self) -> float:
        return _load()["eia310"]["panel_clearance_mm"]

    # ── tolerances ──────────────────────────────────────────────────
    @property
    def fit_clearance(self) -> float:
        return _load()["tolerances"]["fit_clearance_mm"]

    @property
    def device_clearance(self) -> float:
        return _load()["tolerances"]["device_clearance_mm"]

    # ── printer ─────────────────────────────────────────────────────
    @property
    def bed_width(self) -> float:
        return _load()["printer"]["bed_width_mm"]

    @property
    def bed_depth(self) -> float:
        return _load()["printer"]["bed_depth_mm"]

    # ── scad output ─────────────────────────────────────────────────
    @property
    def fn(self) -> int:
        return _load()["scad"]["fn"]

    @property
    def circle_segments(self) -> int:
        return _load()["scad"]["circle_segments"]

    def clearance_hole(self, size: str) -> float:
        """Clearance diameter for a named screw size (``"m3"``, ``"m6"``, ...)."""
        key = f"{size.lower().replace('-', '_')}_clearance_mm"
        hardware = _load()["hardware"]
        if key not in hardware:
            raise KeyError(f"Unknown screw size '{size}'")
        return hardware[key]


hw = _HW()
