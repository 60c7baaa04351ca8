"""Enclosure description — dataclasses, parsing, validation, and serialization."""

from .models import (
    DeviceSpec, PanelCutout, KeystoneSlot, VentRegion, CageSpec, EarSpec,
    PanelSpec, EnclosureSpec,
)
from .parsing import parse_enclosure, parse_vent
from .serialization import enclosure_to_dict
from .validation import validate_enclosure

__all__ = [
    # Models
    "DeviceSpec", "PanelCutout", "KeystoneSlot", "VentRegion", "CageSpec",
    "EarSpec", "PanelSpec", "EnclosureSpec",
    # Parsing / Validation / Serialization
    "parse_enclosure", "parse_vent", "validate_enclosure", "enclosure_to_dict",
]
