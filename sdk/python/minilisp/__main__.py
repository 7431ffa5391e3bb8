"""CLI: python -m minilisp [--format tree|source] [--max-depth N] <source.lisp>"""

import argparse
import logging
import sys
from pathlib import Path

from .parser import ReadError, line_col, parse
from .printer import pformat, to_source


def main(argv=None):
    ap = argparse.ArgumentParser(prog="minilisp", description="Read minilisp source and print its expression trees.")
    ap.add_argument("path", type=Path)
    ap.add_argument("--format", choices=("tree", "source"), default="tree")
    ap.add_argument("--max-depth", type=int, default=None)
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        src = args.path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"{args.path}: {e.strerror or e}", file=sys.stderr)
        sys.exit(1)

    try:
        exprs = parse(src, max_depth=args.max_depth)
    except ReadError as e:
        _report(args.path, src, e)
        sys.exit(1)

    render = pformat if args.format == "tree" else to_source
    for expr in exprs:
        print(render(expr))


def _report(path: Path, src: str, err: ReadError) -> None:
    line, col = line_col(src, err.position)
    print(f"{path}:{line}:{col}: syntax error: {err.message}", file=sys.stderr)
    text = src.split("\n")[line - 1].rstrip("\r")
    print(f"  {text}", file=sys.stderr)
    print("  " + " " * (col - 1) + "^", file=sys.stderr)


if __name__ == "__main__":
    main()
