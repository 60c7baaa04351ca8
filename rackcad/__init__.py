"""rackcad — parametric OpenSCAD generators for 3D-printable rack-mount enclosures."""

__version__ = "0.1.0"
