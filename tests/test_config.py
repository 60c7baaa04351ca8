"""Hardware config loading and overrides."""

import json

import pytest

from rackcad.config import hw, reload
from rackcad.config.hardware import config_path


def test_defaults_loaded():
    assert hw.unit_height == 44.45
    assert hw.hole_offsets == [6.35, 22.225, 38.1]
    assert set(hw.racks) == {"19in", "10in"}
    assert hw.fn == 48


def test_clearance_hole_lookup():
    assert hw.clearance_hole("M3") == 3.4
    assert hw.clearance_hole("unf-10-32") == 5.3
    with pytest.raises(KeyError):
        hw.clearance_hole("m42")


def test_env_override(tmp_path, monkeypatch):
    data = json.loads(config_path().read_text(encoding="utf-8"))
    data["printer"]["bed_width_mm"] = 300.0
    custom = tmp_path / "custom.json"
    custom.write_text(json.dumps(data), encoding="utf-8")

    monkeypatch.setenv("RACKCAD_CONFIG", str(custom))
    reload()
    assert config_path() == custom
    assert hw.bed_width == 300.0
