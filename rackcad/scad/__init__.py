from .nodes import (
    Node, Cube, Cylinder, Square, Circle, Polygon,
    Translate, Rotate, Mirror, LinearExtrude,
    Union, Difference, Intersection, Hull,
    node_count, extrude_profile, multi_polygon, fmt, fmt_vec,
)
from .document import ScadDocument
from .compiler import compile_scad, check_scad, stl_bounds, fits_bed, find_openscad
