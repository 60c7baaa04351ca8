from .eia310 import (
    RACK_UNIT_MM,
    HOLE_PATTERNS,
    RackStandard,
    standards,
    get_standard,
    panel_height,
    hole_positions,
    hole_x_positions,
)
