# semantics/passes/const_eval.py
"""Whole-program constant folding.

Every expression in a program is folded to a literal at build time. Each
folded value gets a slot in the SlotTable: a numbered C global with a type
tag. Print statements record which slots the emitted program prints, in
source order.

Design:
- One recursive pass; each operand is folded exactly once and its value is
  read back from the slot table by the enclosing operator
- Slots come from a counter owned by the evaluator instance, allocated
  after a node's operands (post-order), starting at 0
- Any type mismatch or unsupported construct aborts the whole translation
  with a coded BuildError

Operator rules reproduce the current target behaviour exactly, including
four suspected defects that are kept until their intended semantics are
confirmed:
- Sub folds to the product of its operands
- Div folds to the remainder, like Rem
- Lte compares with >=, Gte compares with <=

Conditionals fold the selected branch and discard it. They do not yield a
value, so they cannot be printed or used as operands yet.
"""
from __future__ import annotations
import operator
from typing import Callable, Dict, Optional, Tuple

from foldc.backend.constants import Kind, INT_MIN, INT_MAX
from foldc.backend.literals import render_bool, render_int, render_str
from foldc.backend.slot_table import SlotTable, Value
from foldc.internals import errors as er
from foldc.semantics.ast import (
    BinaryOp, Binary, Bool, File, If, Int, Print, Str, Term,
)


def _c_rem(a: int, b: int) -> int:
    """Remainder with C semantics (truncates toward zero)."""
    r = abs(a) % abs(b)
    return -r if a < 0 else r


# Integer -> integer rules
_ARITHMETIC: Dict[BinaryOp, Callable[[int, int], int]] = {
    BinaryOp.SUB: operator.mul,
    BinaryOp.MUL: operator.mul,
    BinaryOp.DIV: _c_rem,
    BinaryOp.REM: _c_rem,
}

# Integer -> maybe rules
_COMPARISON: Dict[BinaryOp, Callable[[int, int], bool]] = {
    BinaryOp.LT: operator.lt,
    BinaryOp.GT: operator.gt,
    BinaryOp.LTE: operator.ge,
    BinaryOp.GTE: operator.le,
}

_EQUALITY: Dict[BinaryOp, Callable[[Value, Value], bool]] = {
    BinaryOp.EQ: operator.eq,
    BinaryOp.NEQ: operator.ne,
}

_LOGICAL: Dict[BinaryOp, Callable[[bool, bool], bool]] = {
    BinaryOp.AND: lambda a, b: a and b,
    BinaryOp.OR: lambda a, b: a or b,
}


class ConstantEvaluator:
    """Folds terms into a SlotTable.

    A single evaluator may receive several `generate` calls; each call is
    one top-level statement and they are appended in call order. The
    table is then handed to the emitter.
    """

    def __init__(self, table: Optional[SlotTable] = None):
        self.table = table if table is not None else SlotTable()
        self.next_slot = 0

    # ------------------------
    # Driver
    # ------------------------

    def generate(self, source: File) -> None:
        """Translate one program root. Only `print` roots are implemented."""
        root = source.expression
        if not isinstance(root, Print):
            er.raise_build_error(er.ERR.CE0201, root.loc, construct=root.kind)
        self.fold(root)

    # ------------------------
    # Folding
    # ------------------------

    def fold(self, term: Term) -> Optional[int]:
        """Fold `term` and return the slot holding its value.

        Returns None for conditionals, which are folded for effect only.
        """
        if isinstance(term, Int):
            return self._declare(Kind.INTEGER, term.value, term, term.kind)
        if isinstance(term, Str):
            return self._declare(Kind.STRING, term.value, term, term.kind)
        if isinstance(term, Bool):
            return self._declare(Kind.MAYBE, term.value, term, term.kind)
        if isinstance(term, Print):
            slot = self._fold_value(term.value, "Print")
            self.table.enqueue_print(slot)
            return slot
        if isinstance(term, Binary):
            return self._fold_binary(term)
        if isinstance(term, If):
            self._fold_if(term)
            return None
        er.raise_build_error(er.ERR.CE0202, term.loc, construct=term.kind)

    def _allocate(self) -> int:
        slot = self.next_slot
        self.next_slot += 1
        return slot

    def _declare(self, kind: Kind, value: Value, term: Term, op: str) -> int:
        if kind == Kind.INTEGER:
            if not INT_MIN <= value <= INT_MAX:
                er.raise_build_error(er.ERR.CE0105, term.loc, op=op, value=value)
            literal = render_int(value)
        elif kind == Kind.STRING:
            literal = render_str(value)
        else:
            literal = render_bool(value)
        slot = self._allocate()
        self.table.declare(slot, kind, literal, value)
        return slot

    def _fold_value(self, term: Term, context: str) -> int:
        slot = self.fold(term)
        if slot is None:
            er.raise_build_error(er.ERR.CE0103, term.loc, construct=term.kind, context=context)
        return slot

    # ------------------------
    # Binary operators
    # ------------------------

    def _fold_binary(self, term: Binary) -> int:
        op = term.op
        lhs = self._fold_operand(term.lhs, term)
        rhs = self._fold_operand(term.rhs, term)

        if op == BinaryOp.ADD:
            result = self._add(term, lhs, rhs)
        elif op in _ARITHMETIC:
            a, b = self._ints(term, lhs, rhs, "Just ints")
            if b == 0 and op in (BinaryOp.DIV, BinaryOp.REM):
                er.raise_build_error(er.ERR.CE0104, term.loc, op=op)
            result = (Kind.INTEGER, _ARITHMETIC[op](a, b))
        elif op in _COMPARISON:
            a, b = self._ints(term, lhs, rhs, "Just ints")
            result = (Kind.MAYBE, _COMPARISON[op](a, b))
        elif op in _EQUALITY:
            if lhs[0] != rhs[0]:
                self._mismatch(term, lhs, rhs, "Just pairs of ints, strings or bools")
            result = (Kind.MAYBE, _EQUALITY[op](lhs[1], rhs[1]))
        else:
            if lhs[0] != Kind.MAYBE or rhs[0] != Kind.MAYBE:
                self._mismatch(term, lhs, rhs, "Just bools are allowed")
            result = (Kind.MAYBE, _LOGICAL[op](lhs[1], rhs[1]))

        kind, value = result
        return self._declare(kind, value, term, str(op))

    def _fold_operand(self, operand: Term, parent: Binary) -> Tuple[Kind, Value, Term]:
        slot = self.fold(operand)
        if slot is None:
            er.raise_build_error(er.ERR.CE0101, operand.loc, op=parent.op,
                                 expected="operands must produce a value",
                                 found=operand.kind)
        return self.table.kind_of(slot), self.table.value_of(slot), operand

    def _add(self, term: Binary, lhs, rhs) -> Tuple[Kind, Value]:
        if lhs[0] == rhs[0] == Kind.INTEGER:
            return Kind.INTEGER, lhs[1] + rhs[1]
        if lhs[0] == rhs[0] == Kind.STRING:
            return Kind.STRING, lhs[1] + rhs[1]
        self._mismatch(term, lhs, rhs, "Just ints and strings")

    def _ints(self, term: Binary, lhs, rhs, expected: str) -> Tuple[int, int]:
        if lhs[0] != Kind.INTEGER or rhs[0] != Kind.INTEGER:
            self._mismatch(term, lhs, rhs, expected)
        return lhs[1], rhs[1]

    def _mismatch(self, term: Binary, lhs, rhs, expected: str):
        er.raise_build_error(er.ERR.CE0101, term.loc, op=term.op, expected=expected,
                             found=f"{_describe(lhs)}, {_describe(rhs)}")

    # ------------------------
    # Conditionals
    # ------------------------

    def _fold_if(self, term: If) -> None:
        cond = term.condition
        slot = None

        # A printed condition is printed, then tested on its inner term.
        if isinstance(cond, Print):
            slot = self.fold(cond)
            cond = cond.value

        if isinstance(cond, Bool):
            selected = term.then if cond.value else term.otherwise
            slot = self.fold(selected)
            if slot is None:
                # nested conditional: report the last slot it allocated
                slot = self.next_slot - 1
            er.raise_build_error(er.ERR.CE0301, term.loc, slot=slot)

        if not isinstance(cond, Binary):
            er.raise_build_error(er.ERR.CE0102, cond.loc, found=cond.kind)

        # TODO: propagate the selected branch's slot once conditionals are
        # meant to produce a value.
        if slot is None:
            slot = self.fold(cond)
        if self.table.literal_of(slot) == "true":
            self.fold(term.then)
        else:
            self.fold(term.otherwise)


def _describe(operand: Tuple[Kind, Value, Term]) -> str:
    kind, _, term = operand
    if isinstance(term, (Int, Str, Bool)):
        return term.kind
    return f"{term.kind}: {kind.name}"


def fold_program(*sources: File) -> SlotTable:
    """Fold each root in order into one fresh table."""
    evaluator = ConstantEvaluator()
    for source in sources:
        evaluator.generate(source)
    return evaluator.table
