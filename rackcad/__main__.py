"""
rackcad — entry point.

Usage:
    python -m rackcad build DESIGN.json [--out DIR] [--stl]
    python -m rackcad validate DESIGN.json
    python -m rackcad serve [--port PORT] [--host HOST]
"""

import json
import logging
import sys
from pathlib import Path

USAGE = """\
Usage:
    python -m rackcad build DESIGN.json [--out DIR] [--stl]
    python -m rackcad validate DESIGN.json
    python -m rackcad serve [--port PORT] [--host HOST]"""


def _load(path: str):
    from rackcad.design import parse_enclosure
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return parse_enclosure(data)


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    cmd = args[0] if args else "serve"
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if cmd == "serve":
        port = 8000
        host = "127.0.0.1"
        for i, a in enumerate(args):
            if a == "--port" and i + 1 < len(args):
                port = int(args[i + 1])
            elif a == "--host" and i + 1 < len(args):
                host = args[i + 1]

        from rackcad.web.server import main as serve
        serve(host=host, port=port)

    elif cmd == "validate" and len(args) > 1:
        from rackcad.design import validate_enclosure
        errors = validate_enclosure(_load(args[1]))
        for e in errors:
            print(f"  - {e}")
        if errors:
            sys.exit(1)
        print("Design is valid.")

    elif cmd == "build" and len(args) > 1:
        from rackcad.build import DesignError, build_enclosure
        spec = _load(args[1])
        out = Path("outputs") / spec.name
        stl = False
        for i, a in enumerate(args):
            if a == "--out" and i + 1 < len(args):
                out = Path(args[i + 1])
            elif a == "--stl":
                stl = True
        try:
            result = build_enclosure(spec, out, compile_stl=stl)
        except DesignError as e:
            print("Design is invalid:")
            for err in e.errors:
                print(f"  - {err}")
            sys.exit(1)
        for part in result.parts:
            print(f"{part.name}: {part.scad_path}" + (f" -> {part.stl_path}" if part.stl_path else ""))

    else:
        print(f"Unknown command: {' '.join(args)}")
        print(USAGE)
        sys.exit(1)


if __name__ == "__main__":
    main()
