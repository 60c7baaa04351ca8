"""
FastAPI web server — validate designs, preview part SCAD, run builds.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, PlainTextResponse
from pydantic import BaseModel

from rackcad.build import DesignError, build_enclosure, build_parts
from rackcad.config.hardware import hw
from rackcad.design import EnclosureSpec, enclosure_to_dict, parse_enclosure, validate_enclosure
from rackcad.rack.eia310 import HOLE_PATTERNS, standards
from rackcad.parts.vent import VENT_STYLES

log = logging.getLogger(__name__)

# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="rackcad")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

OUTPUTS_DIR = Path(os.environ.get("RACKCAD_OUTPUTS", "outputs")).resolve() / "web"


# ── Models ─────────────────────────────────────────────────────────

class DesignRequest(BaseModel):
    design: dict[str, Any]


class BuildRequest(BaseModel):
    design: dict[str, Any]
    stl: bool = False


def _parse(data: dict[str, Any]) -> EnclosureSpec:
    try:
        return parse_enclosure(data)
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(400, f"Malformed design: {e!r}")


# ── Routes ─────────────────────────────────────────────────────────

@app.get("/api/standards")
def get_standards():
    """Rack standards and the option values the design format accepts."""
    return {
        "unit_height_mm": hw.unit_height,
        "racks": {
            name: {
                "panel_width_mm": s.panel_width,
                "hole_spacing_mm": s.hole_spacing,
                "opening_width_mm": s.opening_width,
            }
            for name, s in standards().items()
        },
        "hole_patterns": list(HOLE_PATTERNS),
        "vent_styles": list(VENT_STYLES),
    }


@app.post("/api/validate")
def validate(req: DesignRequest):
    """Validate a design; returns the normalised design alongside any errors."""
    spec = _parse(req.design)
    errors = validate_enclosure(spec)
    return {
        "valid": not errors,
        "errors": errors,
        "design": enclosure_to_dict(spec),
    }


@app.post("/api/scad/{part}", response_class=PlainTextResponse)
def get_scad(part: str, req: DesignRequest):
    """Render one part of a design to OpenSCAD source."""
    spec = _parse(req.design)
    errors = validate_enclosure(spec)
    if errors:
        raise HTTPException(400, "; ".join(errors))
    docs = build_parts(spec)
    if part not in docs:
        raise HTTPException(404, f"Unknown part '{part}', expected one of {list(docs)}")
    return PlainTextResponse(docs[part].render())


@app.post("/api/build")
def build(req: BuildRequest):
    """Write every part (and optionally STL) into a fresh run directory."""
    spec = _parse(req.design)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    run_dir = OUTPUTS_DIR / f"run_{stamp}"
    try:
        result = build_enclosure(spec, run_dir, compile_stl=req.stl)
    except DesignError as e:
        raise HTTPException(400, "; ".join(e.errors))
    log.info("Built %s into %s", spec.name, run_dir)
    return {"run_id": run_dir.name, **result.manifest()}


# ── File serving ───────────────────────────────────────────────────

@app.get("/api/outputs/{run_id}/{path:path}")
def get_output_file(run_id: str, path: str):
    """Serve any file from a specific run."""
    root = OUTPUTS_DIR.resolve()
    base = (root / run_id).resolve()
    full = (base / path).resolve()
    if (
        not run_id.startswith("run_")
        or base.parent != root
        or base not in full.parents
        or not full.is_file()
    ):
        raise HTTPException(404)
    return FileResponse(full)


# ── Entry point ────────────────────────────────────────────────────

def main(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    uvicorn.run("rackcad.web.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
