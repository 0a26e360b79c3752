# semantics/ast.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from foldc.internals.report import Span

# === Core node base ===

@dataclass
class Node:
    loc: Optional[Span] = field(default=None, kw_only=True)

    @property
    def kind(self) -> str:
        """Variant name, as spelled in the JSON AST."""
        return type(self).__name__

# === Operators ===

class BinaryOp(Enum):
    ADD = "Add"
    SUB = "Sub"
    MUL = "Mul"
    DIV = "Div"
    REM = "Rem"
    EQ = "Eq"
    NEQ = "Neq"
    LT = "Lt"
    GT = "Gt"
    LTE = "Lte"
    GTE = "Gte"
    AND = "And"
    OR = "Or"

    def __str__(self) -> str:
        return self.value

# === Literals ===

@dataclass
class Int(Node):
    value: int

@dataclass
class Str(Node):
    value: str

@dataclass
class Bool(Node):
    value: bool

# === Folded expressions ===

@dataclass
class Binary(Node):
    op: BinaryOp
    lhs: "Term"
    rhs: "Term"

@dataclass
class If(Node):
    condition: "Term"
    then: "Term"
    otherwise: "Term"

@dataclass
class Print(Node):
    value: "Term"

# === Representable, not folded ===

@dataclass
class Parameter(Node):
    text: str

@dataclass
class Var(Node):
    text: str

@dataclass
class Call(Node):
    callee: "Term"
    arguments: List["Term"]

@dataclass
class Function(Node):
    parameters: List[Parameter]
    value: "Term"

@dataclass
class Let(Node):
    name: Parameter
    value: "Term"
    next: "Term"

@dataclass
class Tuple(Node):
    first: "Term"
    second: "Term"

@dataclass
class First(Node):
    value: "Term"

@dataclass
class Second(Node):
    value: "Term"

@dataclass
class Error(Node):
    """Placeholder the parser leaves where it could not recover."""
    message: str
    full_text: str = ""

# === Program structure ===

@dataclass
class File(Node):
    name: str
    expression: "Term"


Term = Union[Int, Str, Bool, Binary, If, Print, Call, Function, Let, Tuple, First, Second, Var, Error]

def normalize_bin_op(op: BinaryOp | str) -> BinaryOp:
    """Accept an operator or its JSON spelling ("Add", "Lte", ...)."""
    if isinstance(op, BinaryOp):
        return op
    return BinaryOp(op)

__all__ = [
    "Node", "BinaryOp", "Int", "Str", "Bool", "Binary", "If", "Print",
    "Parameter", "Var", "Call", "Function", "Let", "Tuple", "First", "Second", "Error",
    "File", "Term", "normalize_bin_op",
]
