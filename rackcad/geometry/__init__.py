from .polygon import (
    polygon_area,
    ensure_ccw,
    point_in_polygon,
    polygon_bounds,
    translate,
    rect,
    circle_poly,
    regular_polygon,
    hexagon,
    diamond,
    rounded_rect,
    stadium,
    offset_polygon,
    polygons_overlap,
)
