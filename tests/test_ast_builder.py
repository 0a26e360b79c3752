import json

import pytest

from foldc.internals.report import Span
from foldc.semantics.ast import (
    Binary, BinaryOp, Bool, Call, Error, File, First, Function, If, Int, Let,
    Print, Second, Str, Tuple, Var,
)
from foldc.semantics.ast_builder import (
    ASTBuilder, ASTDecodeError, MalformedTreeError, UnknownKindError,
    UnknownOperatorError, load_file, loads,
)


def loc(start, end):
    return {"start": start, "end": end, "filename": "main.rinha"}


def node(kind, start=0, end=1, **fields):
    return {"kind": kind, **fields, "location": loc(start, end)}


def root(expression):
    return {"name": "main.rinha", "expression": expression, "location": loc(0, 20)}


def test_print_binary_program():
    data = root(node("Print", value=node(
        "Binary", 6, 11,
        lhs=node("Int", 6, 7, value=1),
        op="Add",
        rhs=node("Str", 10, 13, value="a"),
    )))
    f = loads(json.dumps(data))
    assert isinstance(f, File)
    assert f.name == "main.rinha"
    assert isinstance(f.expression, Print)
    b = f.expression.value
    assert isinstance(b, Binary)
    assert b.op is BinaryOp.ADD
    assert b.lhs == Int(1, loc=Span(6, 7, "main.rinha"))
    assert b.rhs.value == "a"
    assert b.loc == Span(6, 11, "main.rinha")


@pytest.mark.parametrize("op", [op.value for op in BinaryOp])
def test_every_operator_name(op):
    term = ASTBuilder().build_term(node("Binary", lhs=node("Int", value=1), op=op,
                                        rhs=node("Int", value=2)))
    assert term.op.value == op


def test_unsupported_kinds_are_still_built():
    b = ASTBuilder()
    x = node("Var", text="x")
    assert isinstance(b.build_term(x), Var)
    assert isinstance(b.build_term(node("Tuple", first=x, second=x)), Tuple)
    assert isinstance(b.build_term(node("First", value=x)), First)
    assert isinstance(b.build_term(node("Second", value=x)), Second)
    assert isinstance(b.build_term(node("Call", callee=x, arguments=[x, x])), Call)
    fn = b.build_term(node("Function", parameters=[{"text": "x", "location": loc(0, 1)}], value=x))
    assert isinstance(fn, Function)
    assert fn.parameters[0].text == "x"
    let = b.build_term(node("Let", name={"text": "y", "location": loc(0, 1)},
                            value=node("Int", value=1), next=x))
    assert isinstance(let, Let)
    assert let.name.text == "y"
    err = b.build_term(node("Error", message="boom", full_text="let"))
    assert err == Error("boom", "let", loc=Span(0, 1, "main.rinha"))


def test_if_and_bool():
    term = ASTBuilder().build_term(node(
        "If",
        condition=node("Bool", value=True),
        then=node("Int", value=1),
        otherwise=node("Int", value=2),
    ))
    assert isinstance(term, If)
    assert term.condition == Bool(True, loc=Span(0, 1, "main.rinha"))


def test_location_is_optional():
    term = ASTBuilder().build_term({"kind": "Int", "value": 3})
    assert term == Int(3)
    assert term.loc is None


def test_unknown_kind():
    with pytest.raises(UnknownKindError) as exc:
        ASTBuilder().build_term(node("While", 4, 9))
    assert exc.value.kind == "While"
    assert exc.value.span == Span(4, 9, "main.rinha")


def test_unknown_operator():
    with pytest.raises(UnknownOperatorError) as exc:
        ASTBuilder().build_term(node("Binary", lhs=node("Int", value=1), op="Pow",
                                     rhs=node("Int", value=2)))
    assert exc.value.op == "Pow"


@pytest.mark.parametrize("term", [
    {"value": 1},
    node("Int"),
    node("Int", value="1"),
    node("Int", value=True),
    node("Str", value=3),
    node("Bool", value=1),
    node("Print", value=[]),
    node("Call", callee=node("Var", text="f"), arguments={}),
    "Int",
])
def test_malformed_terms(term):
    with pytest.raises(MalformedTreeError):
        ASTBuilder().build_term(term)


def test_malformed_root():
    with pytest.raises(MalformedTreeError):
        ASTBuilder().build_file([])
    with pytest.raises(MalformedTreeError):
        ASTBuilder().build_file({"name": "x"})


def test_invalid_json():
    with pytest.raises(ASTDecodeError):
        loads("{not json")


def test_load_file(tmp_path):
    path = tmp_path / "main.json"
    path.write_text(json.dumps(root(node("Print", value=node("Str", value="hi")))), encoding="utf-8")
    f = load_file(path)
    assert f.expression.value == Str("hi", loc=Span(0, 1, "main.rinha"))


def test_load_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_file(tmp_path / "nope.json")
