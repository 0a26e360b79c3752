"""Compilation orchestration: load, fold, emit, and optionally build."""
from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import Optional

from foldc.backend.codegen_c import CCodegen
from foldc.backend.slot_table import SlotTable
from foldc.internals import errors as er
from foldc.internals.errors import BuildError
from foldc.internals.parse_errors import handle_parse_exception
from foldc.internals.report import Reporter
from foldc.semantics.ast import File
from foldc.semantics.ast_builder import load_file
from foldc.semantics.passes.const_eval import ConstantEvaluator


def translate(source: File, destination: Path | str, prelude: Optional[str] = None) -> str:
    """Fold `source` and write the C program to `destination`.

    BuildError propagates before anything is written; OSError propagates
    from the write.
    """
    evaluator = ConstantEvaluator()
    evaluator.generate(source)
    return CCodegen(prelude).write(evaluator.table, destination)


def build_executable(c_path: Path, out: Path, cc: str = "cc", debug: bool = False) -> Path:
    """Compile an emitted C program into a native executable.

    Raises:
        FileNotFoundError: `cc` is not installed.
        subprocess.CalledProcessError: the compiler rejected the program.
    """
    cmd = [cc, str(c_path), "-o", str(out)]
    if debug:
        cmd.insert(1, "-g")
    subprocess.run(cmd, check=True)
    return out


def dump_slots(table: SlotTable, stream=None) -> None:
    stream = stream or sys.stdout
    print(f"{len(table)} slots, {len(table.print_queue)} prints:", file=stream)
    for slot, ctype, literal in table.declarations():
        print(f"  v_{slot:<4d} {table.types[slot].name:<8s} {ctype:<6s} {literal}", file=stream)
    if table.print_queue:
        print("  print: " + " ".join(f"v_{s}" for s in table.print_queue), file=stream)
    print(file=stream)


def compile_file(src_path: Path, reporter: Reporter, args) -> int:
    """Run the whole pipeline for one JSON AST file.

    Returns:
        Exit code (0=success, 2=errors).
    """
    try:
        source = load_file(src_path)
    except OSError as e:
        er.emit(reporter, er.ERR.CE0501, None, path=src_path, reason=e.strerror or e)
        return 2
    except Exception as exc:
        if handle_parse_exception(exc, reporter):
            return 2
        raise

    if args.dump_ast:
        print(source)
        print()

    prelude = None
    if args.prelude:
        try:
            prelude = Path(args.prelude).read_text(encoding="utf-8")
        except OSError as e:
            er.emit(reporter, er.ERR.CE0501, None, path=args.prelude, reason=e.strerror or e)
            return 2

    evaluator = ConstantEvaluator()
    try:
        evaluator.generate(source)
    except BuildError as e:
        e.report(reporter)
        return 2

    if args.dump_slots:
        dump_slots(evaluator.table)

    out_path = Path(args.out)
    try:
        CCodegen(prelude).write(evaluator.table, out_path)
    except OSError as e:
        er.emit(reporter, er.ERR.CE0502, None, path=out_path, reason=e.strerror or e)
        return 2

    print(f"Success! Wrote C program: {out_path}")

    if args.exe:
        exe_path = Path(args.exe)
        try:
            build_executable(out_path, exe_path, cc=args.cc)
        except FileNotFoundError:
            er.emit(reporter, er.ERR.CE0504, None, cc=args.cc)
            return 2
        except subprocess.CalledProcessError as e:
            er.emit(reporter, er.ERR.CE0503, None, cc=args.cc, status=e.returncode)
            if args.traceback:
                import traceback
                traceback.print_exc()
            return 2
        print(f"Success! Wrote native binary: {exe_path}")

    return 0
