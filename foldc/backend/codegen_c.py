"""C emission for a finished slot table.

The emitted program has three parts: the prelude (copied verbatim), one
global and one tag constant per slot in ascending slot order, and a
``main`` that runs the deferred assignments and then one print call per
print-queue entry.
"""
from __future__ import annotations
from pathlib import Path
from typing import List, Optional

from foldc.backend.slot_table import SlotTable

DEFAULT_OUTPUT = Path("output.c")
PRELUDE_PATH = Path(__file__).parent / "runtime" / "prelude.c"


def default_prelude() -> str:
    """The prelude shipped with the package (``runtime/prelude.c``)."""
    return PRELUDE_PATH.read_text(encoding="utf-8")


class CCodegen:
    def __init__(self, prelude: Optional[str] = None):
        self.prelude = default_prelude() if prelude is None else prelude

    def render(self, table: SlotTable) -> str:
        """Render the program text for `table` without touching the filesystem."""
        table.validate()
        lines: List[str] = [self.prelude.rstrip("\n"), ""]

        for slot, ctype, literal in table.declarations():
            lines.append(f"{ctype} v_{slot} = {literal};")

        for slot, kind in table.tags():
            lines.append(f"const Kind t_{slot} = 0x{kind.value:02X};")

        lines.append("")
        lines.append("int main(void) {")
        for slot in sorted(table.runtime_queue):
            lines.append(f"    v_{slot} = {table.runtime_queue[slot]};")
        for slot in table.print_queue:
            lines.append(f"    p((void*)&v_{slot}, t_{slot});")
        lines.append("    return 0;")
        lines.append("}")
        return "\n".join(lines) + "\n"

    def write(self, table: SlotTable, destination: Path | str = DEFAULT_OUTPUT) -> str:
        """Consume `table`, write the program to `destination` and return its text.

        The text is rendered before the destination is opened. OSError from
        creating or writing the file propagates; the table counts as consumed
        either way.
        """
        table.consume()
        text = self.render(table)
        Path(destination).write_text(text, encoding="utf-8")
        return text


def write(table: SlotTable, destination: Path | str = DEFAULT_OUTPUT,
          prelude: Optional[str] = None) -> str:
    return CCodegen(prelude).write(table, destination)
