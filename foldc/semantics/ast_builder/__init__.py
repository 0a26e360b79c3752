"""
AST Builder module for the foldc compiler.

Exports:
    ASTBuilder: Builds typed terms from the rinha JSON AST
    load_file / loads: Convenience entry points
    Exceptions: Custom exceptions for AST building errors
"""
from foldc.semantics.ast_builder.builder import ASTBuilder, load_file, loads

from foldc.semantics.ast_builder.exceptions import (
    MalformedTreeError,
    UnknownKindError,
    UnknownOperatorError,
    ASTDecodeError,
)

__all__ = [
    'ASTBuilder',
    'load_file',
    'loads',
    'MalformedTreeError',
    'UnknownKindError',
    'UnknownOperatorError',
    'ASTDecodeError',
]
