from __future__ import annotations
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Tuple

class C:
    """ANSI color/style escape codes."""
    RESET = "\x1b[0m"
    BOLD  = "\x1b[1m"
    DIM   = "\x1b[2m"
    RED   = "\x1b[31m"
    CYAN  = "\x1b[36m"
    GRAY  = "\x1b[90m"

@dataclass
class Span:
    """Character offsets into the original source, as recorded by the parser."""
    start: int
    end: int
    filename: Optional[str] = None

@dataclass
class Diagnostic:
    kind: str
    code: str
    message: str
    span: Optional[Span] = None
    filename: Optional[str] = None

def span_of(node: Any) -> Optional[Span]:
    """Read a span from a JSON AST ``location`` object, if it has one."""
    if not isinstance(node, dict):
        return None
    loc = node.get("location")
    if not isinstance(loc, dict):
        return None
    start = loc.get("start")
    end = loc.get("end")
    if not isinstance(start, int) or not isinstance(end, int):
        return None
    filename = loc.get("filename")
    return Span(start, end, filename if isinstance(filename, str) else None)

def line_col(source: str, offset: int) -> Tuple[int, int]:
    """Convert a character offset to a 1-based (line, column) pair."""
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    col = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return line, col


class Reporter:
    """Collects diagnostics for one input file and renders them for a terminal."""

    def __init__(self, source: Optional[str] = None, filename: str = "<input>") -> None:
        self.source = source
        self.filename = filename
        self.items: List[Diagnostic] = []

    def error(self, code: str, msg: str, span: Optional[Span]) -> None:
        self.items.append(Diagnostic("error", code, msg, span, filename=self.filename))

    @property
    def has_errors(self) -> bool:
        return any(d.kind == "error" for d in self.items)

    def _source_for(self, d: Diagnostic) -> Tuple[Optional[str], str]:
        """Return (program text, display name) for a diagnostic.

        Spans point into the original program text, which lives next to
        the JSON AST under the name the parser recorded.
        """
        name = Path(d.filename or self.filename).name
        if self.source is not None:
            return self.source, name
        if d.span is not None and d.span.filename:
            path = Path(d.filename or self.filename).parent / d.span.filename
            try:
                return path.read_text(encoding="utf-8"), d.span.filename
            except OSError:
                return None, name
        return None, name

    def _headline(self, d: Diagnostic, loc: str, use_color: bool) -> str:
        message = d.message if d.message.endswith('.') else d.message + "."
        if not use_color:
            return f"{loc}: {d.kind} [{d.code}]: {message}"
        return (f"{C.CYAN}{loc}{C.RESET}: {C.BOLD}{C.RED}{d.kind}{C.RESET} "
                f"[{C.DIM}{d.code}{C.RESET}]: {message}")

    def _render(self, d: Diagnostic, use_color: bool, use_unicode: bool) -> List[str]:
        src, name = self._source_for(d)

        if d.span is None:
            return [self._headline(d, name, use_color)]
        if src is None:
            return [self._headline(d, f"{name}@{d.span.start}..{d.span.end}", use_color)]

        line, col = line_col(src, d.span.start)
        head = self._headline(d, f"{name}:{line}:{col}", use_color)
        lines = src.splitlines()
        excerpt = lines[line - 1] if 0 < line <= len(lines) else ""
        pad = " " * (col - 1)

        if not use_unicode:
            return [head, f"  | {excerpt}", f"  ` {pad}^"]

        def paint(code: str, s: str) -> str:
            return f"{code}{s}{C.RESET}" if use_color else s

        return [
            paint(C.GRAY, "  ╭──┤ ") + head,
            paint(C.GRAY, "  │") + "  " + excerpt,
            paint(C.GRAY, "  │") + "  " + paint(C.RED, pad + "┯"),
            paint(C.GRAY, "  ╰" + "─" * (col + 1)) + paint(C.RED, "╯"),
        ]

    def format(self, use_color: bool = True, use_unicode: bool = True) -> str:
        """Render every collected diagnostic, one block each.

        With a readable program text the block quotes the offending line and
        marks the start column; otherwise it falls back to raw offsets.
        """
        out: List[str] = []
        for d in self.items:
            out.extend(self._render(d, use_color, use_unicode))
        return "\n".join(out)

    def print(self, stream=None, use_color: Optional[bool] = None, use_unicode: Optional[bool] = None) -> None:
        """Write diagnostics to `stream`, stderr unless given.

        Styling defaults follow the stream: colour and box drawing are used
        on a TTY, and turned off by NO_COLOR / NO_UNICODE or TERM=dumb.
        """
        stream = stream or sys.stderr
        interactive = getattr(stream, "isatty", lambda: False)() and os.getenv("TERM") != "dumb"

        if use_color is None:
            use_color = interactive and os.getenv("NO_COLOR") is None
        if use_unicode is None:
            use_unicode = interactive and os.getenv("NO_UNICODE") is None

        text = self.format(use_color=use_color, use_unicode=use_unicode)
        if text:
            print(text, file=stream)
