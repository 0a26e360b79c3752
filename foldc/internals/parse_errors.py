"""Shared AST loading exception handling for the pipeline and CLI."""
from __future__ import annotations

from foldc.semantics.ast_builder import (
    MalformedTreeError,
    UnknownKindError,
    UnknownOperatorError,
    ASTDecodeError,
)


def handle_parse_exception(exc: Exception, reporter) -> bool:
    """Handle an AST loading exception by emitting diagnostics through the reporter.

    Args:
        exc: The exception to handle.
        reporter: Reporter collecting the diagnostics.

    Returns:
        True if the exception was handled, False otherwise.
    """
    from foldc.internals import errors as er

    if isinstance(exc, UnknownKindError):
        er.emit(reporter, er.ERR.CE0402, exc.span, kind=exc.kind)
        return True

    if isinstance(exc, UnknownOperatorError):
        er.emit(reporter, er.ERR.CE0403, exc.span, op=exc.op)
        return True

    if isinstance(exc, MalformedTreeError):
        er.emit(reporter, er.ERR.CE0401, exc.span, message=str(exc))
        return True

    if isinstance(exc, ASTDecodeError):
        er.emit(reporter, er.ERR.CE0404, None, message=str(exc))
        return True

    return False
