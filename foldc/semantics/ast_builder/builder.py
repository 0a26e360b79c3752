"""ASTBuilder for the rinha JSON AST.

The external parser serializes a program as nested JSON objects, one per
node, each discriminated by a ``kind`` key and carrying a ``location``.
This module turns that structure into the dataclass terms of
``foldc.semantics.ast``. It does not read program source text.
"""
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Callable, Dict, List

from foldc.internals.report import span_of
from foldc.semantics.ast import (
    File, Term, Int, Str, Bool, Binary, If, Print, Call, Function, Let,
    Tuple, First, Second, Var, Error, Parameter, normalize_bin_op,
)
from foldc.semantics.ast_builder.exceptions import (
    MalformedTreeError, UnknownKindError, UnknownOperatorError, ASTDecodeError,
)


class ASTBuilder:
    def __init__(self):
        self._builders: Dict[str, Callable[[dict], Term]] = {
            "Int": self._int,
            "Str": self._str,
            "Bool": self._bool,
            "Binary": self._binary,
            "If": self._if,
            "Print": self._print,
            "Call": self._call,
            "Function": self._function,
            "Let": self._let,
            "Tuple": self._tuple,
            "First": lambda n: First(self._child(n, "value"), loc=span_of(n)),
            "Second": lambda n: Second(self._child(n, "value"), loc=span_of(n)),
            "Var": lambda n: Var(self._field(n, "text", str), loc=span_of(n)),
            "Error": lambda n: Error(self._field(n, "message", str),
                                     n.get("full_text", ""), loc=span_of(n)),
        }

    # ------------------------
    # Entry points
    # ------------------------

    def build_file(self, data: Any) -> File:
        if not isinstance(data, dict):
            raise MalformedTreeError(f"root must be an object, got {type(data).__name__}")
        name = data.get("name", "<input>")
        if not isinstance(name, str):
            raise MalformedTreeError("root field 'name' must be a string", span_of(data))
        return File(name, self._child(data, "expression"), loc=span_of(data))

    def build_term(self, node: Any) -> Term:
        if not isinstance(node, dict):
            raise MalformedTreeError(f"term must be an object, got {type(node).__name__}")
        kind = node.get("kind")
        if not isinstance(kind, str):
            raise MalformedTreeError("term has no 'kind'", span_of(node))
        builder = self._builders.get(kind)
        if builder is None:
            raise UnknownKindError(kind, span_of(node))
        return builder(node)

    # ------------------------
    # Field helpers
    # ------------------------

    def _field(self, node: dict, name: str, ty: type) -> Any:
        if name not in node:
            raise MalformedTreeError(f"{node.get('kind')} is missing '{name}'", span_of(node))
        value = node[name]
        # bool is an int subclass; Int.value must not accept true/false
        if not isinstance(value, ty) or (ty is int and isinstance(value, bool)):
            raise MalformedTreeError(
                f"{node.get('kind')}.{name} must be {ty.__name__}, got {type(value).__name__}",
                span_of(node))
        return value

    def _child(self, node: dict, name: str) -> Term:
        return self.build_term(self._field(node, name, dict))

    def _children(self, node: dict, name: str) -> List[Term]:
        return [self.build_term(item) for item in self._field(node, name, list)]

    def _parameter(self, node: Any) -> Parameter:
        if not isinstance(node, dict):
            raise MalformedTreeError(f"parameter must be an object, got {type(node).__name__}")
        return Parameter(self._field(node, "text", str), loc=span_of(node))

    # ------------------------
    # Per-kind builders
    # ------------------------

    def _int(self, n: dict) -> Int:
        return Int(self._field(n, "value", int), loc=span_of(n))

    def _str(self, n: dict) -> Str:
        return Str(self._field(n, "value", str), loc=span_of(n))

    def _bool(self, n: dict) -> Bool:
        return Bool(self._field(n, "value", bool), loc=span_of(n))

    def _binary(self, n: dict) -> Binary:
        op_name = self._field(n, "op", str)
        try:
            op = normalize_bin_op(op_name)
        except ValueError:
            raise UnknownOperatorError(op_name, span_of(n)) from None
        return Binary(op, self._child(n, "lhs"), self._child(n, "rhs"), loc=span_of(n))

    def _if(self, n: dict) -> If:
        return If(self._child(n, "condition"), self._child(n, "then"),
                  self._child(n, "otherwise"), loc=span_of(n))

    def _print(self, n: dict) -> Print:
        return Print(self._child(n, "value"), loc=span_of(n))

    def _call(self, n: dict) -> Call:
        return Call(self._child(n, "callee"), self._children(n, "arguments"), loc=span_of(n))

    def _function(self, n: dict) -> Function:
        params = [self._parameter(p) for p in self._field(n, "parameters", list)]
        return Function(params, self._child(n, "value"), loc=span_of(n))

    def _let(self, n: dict) -> Let:
        return Let(self._parameter(self._field(n, "name", dict)),
                   self._child(n, "value"), self._child(n, "next"), loc=span_of(n))

    def _tuple(self, n: dict) -> Tuple:
        return Tuple(self._child(n, "first"), self._child(n, "second"), loc=span_of(n))


def loads(text: str) -> File:
    """Build a File from JSON AST text."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ASTDecodeError(str(e)) from e
    return ASTBuilder().build_file(data)


def load_file(path: Path | str) -> File:
    """Read and build a JSON AST file. OSError propagates to the caller."""
    return loads(Path(path).read_text(encoding="utf-8"))
