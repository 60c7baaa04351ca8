"""Shared fixtures: small enclosure designs used across the test modules."""

import pytest

from rackcad.config import hardware


@pytest.fixture(autouse=True)
def _default_config(monkeypatch):
    """Every test starts from the bundled rack_defaults.json."""
    monkeypatch.delenv("RACKCAD_CONFIG", raising=False)
    hardware.reload()
    yield
    hardware.reload()


@pytest.fixture
def small_design():
    """A 1U 19in panel with one of each feature, all inside the rails."""
    return {
        "name": "lab-switch",
        "rack": "19in",
        "units": 1,
        "cutouts": [
            {"shape": "rect", "x": -120, "y": 0, "width": 60, "height": 20, "label": "display"},
            {"shape": "circle", "x": -60, "y": 0, "diameter": 12, "label": "power"},
        ],
        "keystones": [{"x": 40, "y": 0}, {"x": 62, "y": 0}],
        "vents": [{"x": 160, "y": 0, "width": 80, "height": 36, "vent": {"style": "honeycomb"}}],
    }
