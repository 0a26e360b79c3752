"""CLI entry point and argument parsing."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from foldc.internals.version import print_banner


def main(argv: list[str] | None = None) -> int:
    """Main compiler entry point."""
    ap = argparse.ArgumentParser(prog="foldc",
                                 description="Fold a rinha JSON AST into a static C program")

    ap.add_argument("source", nargs='?', help="Path to the JSON AST file")
    ap.add_argument("--version", action="store_true", help="Show version and exit")
    ap.add_argument("-o", "--out", metavar="OUT", default="output.c",
                    help="Output C file path (default: output.c)")
    ap.add_argument("--prelude", metavar="FILE",
                    help="C prelude to copy at the top of the output (default: bundled runtime/prelude.c)")
    ap.add_argument("--exe", metavar="BIN",
                    help="Also compile the emitted program into BIN")
    ap.add_argument("--cc", default="cc",
                    help="C compiler used by --exe (default: cc)")
    ap.add_argument("--dump-ast", action="store_true", help="Print the loaded AST")
    ap.add_argument("--dump-slots", action="store_true",
                    help="Print the slot table after folding")
    ap.add_argument(
        "--traceback",
        action="store_true",
        help="Print full traceback on toolchain errors (for debugging)",
    )
    args = ap.parse_args(argv)

    print_banner(cc=args.cc)

    if args.version:
        return 0

    if not args.source:
        print("error: source file required", file=sys.stderr)
        return 2

    from foldc.compiler.pipeline import compile_file
    from foldc.internals.report import Reporter

    src_path = Path(args.source).resolve()
    reporter = Reporter(filename=str(src_path))

    result = compile_file(src_path, reporter, args)
    reporter.print()
    return result


if __name__ == "__main__":
    raise SystemExit(main())
