"""OpenSCAD wrapper and STL inspection (no OpenSCAD install required)."""

import struct

import pytest

from rackcad.scad import compiler
from rackcad.scad.compiler import compile_scad, fits_bed, stl_bounds


def _ascii_stl(path):
    path.write_text(
        "solid test\n"
        "  facet normal 0 0 1\n"
        "    outer loop\n"
        "      vertex 0 0 0\n"
        "      vertex 200 0 0\n"
        "      vertex 0 40 4\n"
        "    endloop\n"
        "  endfacet\n"
        "endsolid test\n",
        encoding="ascii",
    )
    return path


def _binary_stl(path, triangles):
    data = bytearray(b"\0" * 80)
    data += struct.pack("<I", len(triangles))
    for tri in triangles:
        data += struct.pack("<3f", 0, 0, 1)
        for v in tri:
            data += struct.pack("<3f", *v)
        data += b"\0\0"
    path.write_bytes(bytes(data))
    return path


def test_ascii_bounds(tmp_path):
    stl = _ascii_stl(tmp_path / "a.stl")
    lo, hi = stl_bounds(stl)
    assert lo == (0, 0, 0)
    assert hi == (200, 40, 4)


def test_binary_bounds(tmp_path):
    stl = _binary_stl(tmp_path / "b.stl", [[(-1, -2, 0), (10, 0, 0), (0, 300, 5)]])
    lo, hi = stl_bounds(stl)
    assert lo == pytest.approx((-1, -2, 0))
    assert hi == pytest.approx((10, 300, 5))


def test_fits_bed_either_orientation(tmp_path):
    stl = _ascii_stl(tmp_path / "a.stl")
    assert fits_bed(stl, 220, 220)
    assert fits_bed(stl, 50, 250)       # rotated 90°
    assert not fits_bed(stl, 150, 150)
    empty = tmp_path / "empty.stl"
    empty.write_bytes(b"")
    assert stl_bounds(empty) is None
    assert not fits_bed(empty, 220, 220)


def test_compile_without_openscad(tmp_path, monkeypatch):
    monkeypatch.setattr(compiler, "find_openscad", lambda: None)
    scad = tmp_path / "part.scad"
    scad.write_text("cube(1);\n", encoding="utf-8")
    ok, msg, stl = compile_scad(scad)
    assert not ok
    assert "not found" in msg
    assert stl is None
    ok, msg = compiler.check_scad(scad)
    assert not ok
