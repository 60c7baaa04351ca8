"""
CSG node tree — a thin typed model of the OpenSCAD subset the part
generators use.

Generators build trees out of these nodes; ``Node.lines()`` renders
OpenSCAD source.  Only ``polygon`` + ``linear_extrude`` plus a handful
of solid primitives are needed; no modules, no variables.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

INDENT = "    "


def fmt(v: float) -> str:
    """Format a scalar the way every generator emits it (3 decimals)."""
    s = f"{v:.3f}"
    return "0.000" if s == "-0.000" else s


def fmt_vec(v: Sequence[float]) -> str:
    return "[" + ", ".join(fmt(x) for x in v) + "]"


def fmt_points(pts: Sequence[Sequence[float]]) -> str:
    """Format polygon vertices for an OpenSCAD ``polygon()`` call."""
    return "[" + ", ".join(f"[{fmt(x)}, {fmt(y)}]" for x, y in pts) + "]"


class Node:
    """Base class.  Subclasses provide ``head()`` and, for containers,
    a ``children`` list."""

    label: str = ""
    block = False           # always render children inside { }

    def head(self) -> str:
        raise NotImplementedError

    def kids(self) -> list[Node]:
        return list(getattr(self, "children", []))

    def lines(self, indent: str = "") -> list[str]:
        out: list[str] = []
        if self.label:
            out.append(f"{indent}// {self.label}")
        kids = self.kids()
        if not hasattr(self, "children"):
            out.append(f"{indent}{self.head()};")
            return out
        if len(kids) == 1 and not self.block:
            out.append(f"{indent}{self.head()}")
            out += kids[0].lines(indent + INDENT)
            return out
        if not kids:
            out.append(f"{indent}{self.head()} {{}}")
            return out
        out.append(f"{indent}{self.head()} {{")
        for k in kids:
            out += k.lines(indent + INDENT)
        out.append(f"{indent}}}")
        return out

    def render(self) -> str:
        return "\n".join(self.lines()) + "\n"


def node_count(node: Node) -> int:
    """Total number of nodes in the tree rooted at *node*."""
    return 1 + sum(node_count(k) for k in node.kids())


# ── 3-D primitives ──────────────────────────────────────────────────


@dataclass
class Cube(Node):
    size: Sequence[float]
    center: bool = False
    label: str = ""

    def head(self) -> str:
        c = ", center = true" if self.center else ""
        return f"cube({fmt_vec(self.size)}{c})"


@dataclass
class Cylinder(Node):
    """Cylinder along Z.  Set *r2* for a cone / chamfer."""

    h: float
    r: float
    r2: float | None = None
    center: bool = False
    fn: int | None = None
    label: str = ""

    def head(self) -> str:
        if self.r2 is None:
            radii = f"r = {fmt(self.r)}"
        else:
            radii = f"r1 = {fmt(self.r)}, r2 = {fmt(self.r2)}"
        parts = [f"h = {fmt(self.h)}", radii]
        if self.center:
            parts.append("center = true")
        if self.fn:
            parts.append(f"$fn = {self.fn}")
        return f"cylinder({', '.join(parts)})"


# ── 2-D primitives ──────────────────────────────────────────────────


@dataclass
class Square(Node):
    size: Sequence[float]
    center: bool = False
    label: str = ""

    def head(self) -> str:
        c = ", center = true" if self.center else ""
        return f"square({fmt_vec(self.size)}{c})"


@dataclass
class Circle(Node):
    r: float
    fn: int | None = None
    label: str = ""

    def head(self) -> str:
        fn = f", $fn = {self.fn}" if self.fn else ""
        return f"circle(r = {fmt(self.r)}{fn})"


@dataclass
class Polygon(Node):
    """Polygon from vertices.  With *paths* one node can hold many
    disjoint outlines (OpenSCAD's multi-path syntax)."""

    points: Sequence[Sequence[float]]
    paths: Sequence[Sequence[int]] | None = None
    label: str = ""

    def head(self) -> str:
        if self.paths is None:
            return f"polygon(points = {fmt_points(self.points)})"
        paths_str = ", ".join(
            "[" + ", ".join(str(i) for i in p) + "]" for p in self.paths
        )
        return f"polygon(points = {fmt_points(self.points)}, paths = [{paths_str}])"


# ── transforms ──────────────────────────────────────────────────────


@dataclass
class Translate(Node):
    v: Sequence[float]
    children: list[Node] = field(default_factory=list)
    label: str = ""

    def head(self) -> str:
        return f"translate({fmt_vec(self.v)})"


@dataclass
class Rotate(Node):
    a: Sequence[float]
    children: list[Node] = field(default_factory=list)
    label: str = ""

    def head(self) -> str:
        return f"rotate({fmt_vec(self.a)})"


@dataclass
class Mirror(Node):
    v: Sequence[float]
    children: list[Node] = field(default_factory=list)
    label: str = ""

    def head(self) -> str:
        return f"mirror({fmt_vec(self.v)})"


@dataclass
class LinearExtrude(Node):
    height: float
    children: list[Node] = field(default_factory=list)
    center: bool = False
    label: str = ""

    def head(self) -> str:
        c = ", center = true" if self.center else ""
        return f"linear_extrude(height = {fmt(self.height)}{c})"


# ── booleans ────────────────────────────────────────────────────────


@dataclass
class Union(Node):
    children: list[Node] = field(default_factory=list)
    label: str = ""
    block = True

    def head(self) -> str:
        return "union()"


@dataclass
class Difference(Node):
    """First child minus every following child."""

    children: list[Node] = field(default_factory=list)
    label: str = ""
    block = True

    def head(self) -> str:
        return "difference()"


@dataclass
class Intersection(Node):
    children: list[Node] = field(default_factory=list)
    label: str = ""
    block = True

    def head(self) -> str:
        return "intersection()"


@dataclass
class Hull(Node):
    children: list[Node] = field(default_factory=list)
    label: str = ""
    block = True

    def head(self) -> str:
        return "hull()"


# ── builders ────────────────────────────────────────────────────────


def extrude_profile(
    pts: Sequence[Sequence[float]],
    height: float,
    z: float = 0.0,
    label: str = "",
) -> Node:
    """``linear_extrude`` of a single polygon, lifted to *z*."""
    body: Node = LinearExtrude(height, [Polygon(pts)], label="" if z else label)
    if z:
        return Translate([0, 0, z], [body], label=label)
    return body


def multi_polygon(outlines: Sequence[Sequence[Sequence[float]]], label: str = "") -> Polygon:
    """Pack disjoint outlines into one multi-path ``polygon()``."""
    all_pts: list[Sequence[float]] = []
    paths: list[list[int]] = []
    for outline in outlines:
        start = len(all_pts)
        all_pts.extend(outline)
        paths.append(list(range(start, start + len(outline))))
    return Polygon(all_pts, paths, label=label)
