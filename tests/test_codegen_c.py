import pytest

from foldc.backend.codegen_c import CCodegen, default_prelude, write
from foldc.backend.constants import Kind
from foldc.backend.slot_table import SlotTable
from foldc.semantics.ast import File, Int, Print, Str
from foldc.semantics.passes.const_eval import fold_program


@pytest.fixture
def table():
    return fold_program(File("main.rinha", Print(Int(1))), File("main.rinha", Print(Str("x"))))


def test_render_layout(table):
    text = CCodegen(prelude="/* prelude */").render(table)
    assert text == "\n".join([
        "/* prelude */",
        "",
        "int v_0 = 1;",
        'char* v_1 = "x";',
        "const Kind t_0 = 0xFE;",
        "const Kind t_1 = 0xCA;",
        "",
        "int main(void) {",
        "    p((void*)&v_0, t_0);",
        "    p((void*)&v_1, t_1);",
        "    return 0;",
        "}",
        "",
    ])


def test_prelude_copied_verbatim(table):
    prelude = "#include <stdio.h>\n\n/* keep   spacing */\n"
    text = CCodegen(prelude=prelude).render(table)
    assert text.startswith(prelude)


def test_default_prelude_defines_contract():
    prelude = default_prelude()
    assert "typedef enum" in prelude
    assert "STR = 0xCA" in prelude
    assert "INT = 0xFE" in prelude
    assert "MAYBE = 0xBA" in prelude
    assert "void p(void *value, Kind kind)" in prelude
    assert "<stdbool.h>" in prelude


def test_runtime_queue_runs_before_prints():
    table = SlotTable()
    table.declare(0, Kind.MAYBE, "false", False)
    table.defer(0, '!strcmp("a", "a")')
    table.enqueue_print(0)
    lines = CCodegen(prelude="").render(table).splitlines()
    assign = lines.index('    v_0 = !strcmp("a", "a");')
    call = lines.index("    p((void*)&v_0, t_0);")
    assert lines.index("int main(void) {") < assign < call


def test_declarations_sorted_by_slot():
    table = SlotTable()
    table.declare(2, Kind.INTEGER, "2", 2)
    table.declare(0, Kind.INTEGER, "0", 0)
    table.declare(1, Kind.INTEGER, "1", 1)
    lines = CCodegen(prelude="").render(table).splitlines()
    decls = [line for line in lines if line.startswith("int v_")]
    assert decls == ["int v_0 = 0;", "int v_1 = 1;", "int v_2 = 2;"]


def test_write_creates_file(tmp_path, table):
    out = tmp_path / "output.c"
    text = write(table, out, prelude="")
    assert out.read_text(encoding="utf-8") == text
    assert table.consumed


def test_write_overwrites(tmp_path, table):
    out = tmp_path / "output.c"
    out.write_text("stale", encoding="utf-8")
    write(table, out, prelude="")
    assert "stale" not in out.read_text(encoding="utf-8")


def test_write_consumes_table(tmp_path, table):
    write(table, tmp_path / "a.c", prelude="")
    with pytest.raises(RuntimeError, match="IE0003"):
        write(table, tmp_path / "b.c", prelude="")
    assert not (tmp_path / "b.c").exists()


def test_write_propagates_io_error(tmp_path, table):
    with pytest.raises(OSError):
        write(table, tmp_path / "missing" / "output.c", prelude="")
    assert table.consumed
