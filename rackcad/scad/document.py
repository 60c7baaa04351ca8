"""
SCAD document — wraps a CSG tree with a header and parameter block and
writes it to disk.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from rackcad.config.hardware import hw
from .nodes import Node, fmt


@dataclass
class ScadDocument:
    """A complete ``.scad`` file.

    Attributes
    ----------
    title      : first header line.
    root       : the CSG tree.
    fn         : global ``$fn``; defaults to the configured value.
    parameters : name → value pairs echoed as comments so the file
                 documents what it was generated from.
    """

    title: str
    root: Node
    fn: int | None = None
    parameters: dict[str, object] = field(default_factory=dict)

    def render(self) -> str:
        lines: list[str] = [
            f"// {self.title}",
            "// Auto-generated by rackcad",
        ]
        if self.parameters:
            lines.append("//")
            width = max(len(k) for k in self.parameters)
            for k, v in self.parameters.items():
                val = fmt(v) if isinstance(v, float) else v
                lines.append(f"//   {k:<{width}} = {val}")
        lines += [
            "",
            f"$fn = {self.fn or hw.fn};",
            "",
        ]
        lines += self.root.lines()
        return "\n".join(lines) + "\n"

    def write(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(), encoding="utf-8")
        return path
