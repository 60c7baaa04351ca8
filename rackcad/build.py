"""
Build pipeline — turn an EnclosureSpec into ``.scad`` files (and
optionally STL).

Parts produced, in order:

  faceplate          panel with cages attached (when it fits the bed)
  faceplate_<n>      bed-sized segments of the panel, plus
  joiner             one splice plate design (print one per seam)
  ear_left/right     rack ears, when configured
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from rackcad.config.hardware import hw
from rackcad.design import EnclosureSpec, enclosure_to_dict, validate_enclosure
from rackcad.geometry.polygon import polygon_bounds
from rackcad.parts.ears import build_ear
from rackcad.parts.faceplate import build_faceplate, feature_footprints
from rackcad.parts.joiner import build_joiner, plan_segments, seam_holes, segment, segment_bounds
from rackcad.scad.compiler import compile_scad, find_openscad, fits_bed
from rackcad.scad.document import ScadDocument
from rackcad.scad.nodes import node_count

log = logging.getLogger(__name__)


class DesignError(ValueError):
    """The enclosure failed validation; ``errors`` lists every problem."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


@dataclass
class PartResult:
    name: str
    scad_path: Path
    nodes: int
    stl_path: Path | None = None
    message: str = ""
    fits_bed: bool | None = None


@dataclass
class BuildResult:
    out_dir: Path
    parts: list[PartResult] = field(default_factory=list)
    seams: list[float] = field(default_factory=list)

    def manifest(self) -> dict:
        return {
            "seams": self.seams,
            "parts": [
                {
                    "name": p.name,
                    "scad": p.scad_path.name,
                    "nodes": p.nodes,
                    **({"stl": p.stl_path.name} if p.stl_path else {}),
                    **({"message": p.message} if p.message else {}),
                    **({"fits_bed": p.fits_bed} if p.fits_bed is not None else {}),
                }
                for p in self.parts
            ],
        }


def _params(spec: EnclosureSpec) -> dict[str, object]:
    return {
        "rack": spec.rack,
        "units": spec.units,
        "panel_width": spec.width,
        "panel_height": spec.height,
        "thickness": spec.panel.thickness,
    }


def _panel_depth(spec: EnclosureSpec) -> float:
    depth = spec.panel.thickness + spec.panel.rib_depth
    for cage in spec.cages:
        depth = max(depth, spec.panel.thickness + cage.length)
    return depth


def plan_seams(spec: EnclosureSpec) -> list[float]:
    """Seam positions for *spec* on its printer bed (empty = one piece)."""
    avoid = []
    for _, outline in feature_footprints(spec):
        x0, _, x1, _ = polygon_bounds(outline)
        avoid.append((x0, x1))
    for v in spec.vents:
        cx = spec.width / 2 + v.x
        avoid.append((cx - v.width / 2, cx + v.width / 2))
    return plan_segments(spec.width, spec.max_segment_width, avoid)


def build_parts(spec: EnclosureSpec) -> dict[str, ScadDocument]:
    """Generate every part document for *spec* (no validation, no I/O)."""
    docs: dict[str, ScadDocument] = {}
    params = _params(spec)
    seams = plan_seams(spec)

    if not seams:
        docs["faceplate"] = ScadDocument(
            f"Faceplate — {spec.name}", build_faceplate(spec), parameters=params,
        )
    else:
        panel = build_faceplate(spec, seam_holes(seams, spec.height))
        depth = _panel_depth(spec)
        for i, (x0, x1) in enumerate(segment_bounds(seams, spec.width), start=1):
            node = segment(panel, x0, x1, spec.width, spec.height, depth,
                           label=f"segment {i}: x {x0:.1f} .. {x1:.1f}")
            docs[f"faceplate_{i}"] = ScadDocument(
                f"Faceplate segment {i}/{len(seams) + 1} — {spec.name}", node,
                parameters={**params, "segment_x0": x0, "segment_x1": x1},
            )
        plate_h = spec.height
        if spec.panel.rib_depth > 0:
            plate_h -= 2 * (spec.panel.rib_thickness + hw.fit_clearance)
        docs["joiner"] = ScadDocument(
            f"Joiner plate — {spec.name} (print {len(seams)})",
            build_joiner(spec.height, plate_h),
            parameters={"seams": len(seams), "plate_height": plate_h},
        )

    if spec.ears is not None:
        for side in ("left", "right"):
            docs[f"ear_{side}"] = ScadDocument(
                f"Rack ear ({side}) — {spec.name}",
                build_ear(spec.ears, spec.standard, spec.units, side, spec.panel.hole_pattern),
                parameters={"rack": spec.rack, "units": spec.units},
            )
    return docs


def build_enclosure(
    spec: EnclosureSpec,
    out_dir: Path,
    compile_stl: bool = False,
) -> BuildResult:
    """Validate *spec*, write every part to *out_dir* and a manifest.

    Raises ``DesignError`` when validation fails.  With *compile_stl*
    each part is rendered through OpenSCAD; renderer failures are
    recorded on the part rather than raised.
    """
    errors = validate_enclosure(spec)
    if errors:
        raise DesignError(errors)

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    result = BuildResult(out_dir=out_dir, seams=plan_seams(spec))

    if compile_stl and find_openscad() is None:
        log.warning("OpenSCAD not found — writing .scad files only")
        compile_stl = False

    for name, doc in build_parts(spec).items():
        path = doc.write(out_dir / f"{name}.scad")
        part = PartResult(name=name, scad_path=path, nodes=node_count(doc.root))
        log.info("Wrote %s (%d nodes)", path, part.nodes)
        if compile_stl:
            ok, msg, stl = compile_scad(path)
            part.stl_path = stl
            part.message = "" if ok else msg
            if ok and stl is not None:
                part.fits_bed = fits_bed(stl, spec.max_segment_width, hw.bed_depth)
                if not part.fits_bed:
                    log.warning("%s does not fit the %.0fx%.0fmm bed",
                                stl.name, spec.max_segment_width, hw.bed_depth)
            else:
                log.warning("Rendering %s failed: %s", name, msg)
        result.parts.append(part)

    manifest = {"name": spec.name, "design": enclosure_to_dict(spec), **result.manifest()}
    (out_dir / "manifest.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    return result
