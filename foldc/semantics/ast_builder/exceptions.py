"""Custom exceptions for AST building errors."""
from __future__ import annotations
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from foldc.internals.report import Span


class MalformedTreeError(Exception):
    """Exception raised when a JSON node is missing a field or has the wrong shape."""
    def __init__(self, message: str, span: Optional['Span'] = None):
        super().__init__(message)
        self.span = span


class UnknownKindError(Exception):
    """Exception raised when a JSON node has a `kind` the builder does not know."""
    def __init__(self, kind: str, span: Optional['Span'] = None):
        super().__init__(f"unknown term kind '{kind}'")
        self.kind = kind
        self.span = span


class UnknownOperatorError(Exception):
    """Exception raised when a Binary node names an unknown operator."""
    def __init__(self, op: str, span: Optional['Span'] = None):
        super().__init__(f"unknown binary operator '{op}'")
        self.op = op
        self.span = span


class ASTDecodeError(Exception):
    """Exception raised when the input is not valid JSON."""
    def __init__(self, message: str):
        super().__init__(message)
        self.span = None
