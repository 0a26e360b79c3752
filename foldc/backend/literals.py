"""Rendering of folded Python values as C literal text."""
from __future__ import annotations

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def render_int(value: int) -> str:
    return str(value)


def render_bool(value: bool) -> str:
    return "true" if value else "false"


def render_str(value: str) -> str:
    """Quote `value` as a C string literal.

    Control characters become three-digit octal escapes, so a following
    digit can never extend the escape. Other characters are written as-is
    and end up UTF-8 encoded in the output file.
    """
    out = ['"']
    for ch in value:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\{ord(ch):03o}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)
