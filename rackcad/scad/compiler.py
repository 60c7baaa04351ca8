"""
OpenSCAD compiler wrapper — runs the openscad CLI for syntax checking
and STL rendering, and reads back rendered STL extents.
"""

from __future__ import annotations
import logging
import re
import shutil
import struct
import subprocess
import sys
from pathlib import Path

log = logging.getLogger(__name__)

CHECK_TIMEOUT_S = 30
RENDER_TIMEOUT_S = 600

Vec3 = tuple[float, float, float]


def find_openscad() -> str | None:
    """Locate the openscad binary."""
    path = shutil.which("openscad")
    if path:
        return path
    for candidate in [
        r"C:\Program Files\OpenSCAD\openscad.exe",
        r"C:\Program Files (x86)\OpenSCAD\openscad.exe",
        "/Applications/OpenSCAD.app/Contents/MacOS/OpenSCAD",
    ]:
        if Path(candidate).exists():
            return candidate
    return None


def _run(args: list[str], timeout: int) -> tuple[bool, str]:
    exe = find_openscad()
    if not exe:
        return False, "OpenSCAD not found on PATH."
    try:
        result = subprocess.run(
            [exe, *args],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return False, f"OpenSCAD timed out ({timeout}s)."
    except OSError as e:
        return False, str(e)
    stderr = result.stderr.strip()
    if result.returncode == 0:
        return True, stderr or "OK"
    return False, stderr or f"OpenSCAD exited with code {result.returncode}"


def check_scad(scad_path: Path) -> tuple[bool, str]:
    """Syntax-check an OpenSCAD file without a full CGAL render.

    Returns (ok, message).
    """
    null = "NUL" if sys.platform == "win32" else "/dev/null"
    # echo export parses and evaluates the file without building geometry
    return _run(["--export-format", "echo", "-o", null, str(scad_path)], CHECK_TIMEOUT_S)


def compile_scad(scad_path: Path, stl_path: Path | None = None) -> tuple[bool, str, Path | None]:
    """Render an OpenSCAD file to STL.

    Returns (ok, message, stl_path_or_none).
    """
    scad_path = Path(scad_path)
    if stl_path is None:
        stl_path = scad_path.with_suffix(".stl")
    log.info("Rendering %s → %s", scad_path.name, stl_path.name)
    ok, msg = _run(["-o", str(stl_path), str(scad_path)], RENDER_TIMEOUT_S)
    if ok and stl_path.exists():
        return True, msg, stl_path
    if ok:
        msg = "OpenSCAD reported success but produced no STL."
    return False, msg, None


# ── STL inspection ──────────────────────────────────────────────────

_VERTEX_RE = re.compile(
    r"vertex\s+([\d.eE+\-]+)\s+([\d.eE+\-]+)\s+([\d.eE+\-]+)",
    re.IGNORECASE,
)


def _stl_vertices(data: bytes) -> list[Vec3]:
    """Every vertex of an STL file (binary or ASCII), duplicates included."""
    # ASCII starts with 'solid' — but so do some binary headers, so also
    # require the text to actually contain a facet
    if data[:5] == b"solid" and b"facet" in data[:1024]:
        text = data.decode("ascii", errors="replace")
        return [
            (float(m.group(1)), float(m.group(2)), float(m.group(3)))
            for m in _VERTEX_RE.finditer(text)
        ]

    # Binary STL: 80-byte header, 4-byte count, 50 bytes per triangle
    if len(data) < 84:
        return []
    n = struct.unpack_from("<I", data, 80)[0]
    verts: list[Vec3] = []
    off = 84
    for _ in range(n):
        if off + 50 > len(data):
            break
        vals = struct.unpack_from("<12f", data, off)
        verts += [tuple(vals[3:6]), tuple(vals[6:9]), tuple(vals[9:12])]
        off += 50
    return verts


def stl_bounds(stl_path: Path) -> tuple[Vec3, Vec3] | None:
    """Axis-aligned bounding box ``(min_xyz, max_xyz)`` of an STL, or
    ``None`` for an empty / unreadable file."""
    verts = _stl_vertices(Path(stl_path).read_bytes())
    if not verts:
        return None
    xs, ys, zs = zip(*verts)
    return (min(xs), min(ys), min(zs)), (max(xs), max(ys), max(zs))


def fits_bed(stl_path: Path, bed_width: float, bed_depth: float) -> bool:
    """True when the STL's XY footprint fits the bed in either orientation."""
    bounds = stl_bounds(stl_path)
    if bounds is None:
        return False
    (x0, y0, _), (x1, y1, _) = bounds
    w, d = x1 - x0, y1 - y0
    return (w <= bed_width and d <= bed_depth) or (d <= bed_width and w <= bed_depth)
