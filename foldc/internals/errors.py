# internals/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, NoReturn, Optional

from foldc.internals.report import Span, Reporter


class Severity(str, Enum):
    ERROR = "error"


class Category(str, Enum):
    GENERAL     = "general"
    TYPE        = "type"
    UNSUPPORTED = "unsupported"
    CONDITIONAL = "conditional"
    INPUT       = "input"
    IO          = "io"
    INTERNAL    = "internal"


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    severity: Severity
    text: str
    category: Category = Category.GENERAL
    doc: str = ""


class BuildError(Exception):
    """Unrecoverable build-time failure; aborts the whole translation."""
    def __init__(self, code: str, message: str, span: Optional[Span] = None):
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
        self.span = span

    def report(self, r: Reporter) -> None:
        r.error(self.code, self.message, self.span)


REGISTRY: Dict[str, ErrorMessage] = {}

class _ErrorCatalog:
    def __init__(self, backing: Dict[str, ErrorMessage]) -> None:
        self._registry = backing

    def __getattr__(self, name: str) -> ErrorMessage:
        try:
            return self._registry[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __getitem__(self, code: str) -> ErrorMessage:
        return self._registry[code]


ERR = _ErrorCatalog(REGISTRY)

def emit(r: Reporter, em: ErrorMessage, span: Optional[Span], **kwargs) -> None:
    r.error(em.code, _fmt(em.code, **kwargs), span)

def raise_build_error(em: ErrorMessage, span: Optional[Span], **kwargs) -> NoReturn:
    """Abort the translation with a coded build-time error."""
    raise BuildError(em.code, _fmt(em.code, **kwargs), span)

def raise_internal_error(code: str, **kwargs) -> NoReturn:
    """Raise a RuntimeError for internal compiler errors.

    Internal errors (IE codes) indicate compiler bugs, not user code issues.
    These are raised as Python exceptions during folding and emission.

    Args:
        code: Error code (e.g., "IE0001")
        **kwargs: Format parameters for the error message

    Raises:
        RuntimeError: Always raises with formatted error message
    """
    text = _fmt(code, **kwargs)
    raise RuntimeError(f"{code}: {text}")


#
# --- Helpers
#

def _add(msg: ErrorMessage) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}")

def _fmt(code: str, **kwargs) -> str:
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None

#
# --- Registry population
#

# Build-time type errors - CE01xx range
_add(ErrorMessage("CE0101", Severity.ERROR,
    "{op} => {expected}, found ({found})",
    Category.TYPE, "Binary operator applied to operands outside its accepted type pairs."))

_add(ErrorMessage("CE0102", Severity.ERROR,
    "If => Just boolean or binary, found {found}",
    Category.TYPE, "Conditions must be a literal boolean or a binary expression."))

_add(ErrorMessage("CE0103", Severity.ERROR,
    "{construct} does not produce a value for {context}",
    Category.TYPE, "Conditionals are folded for effect only and cannot be printed or used as operands."))

_add(ErrorMessage("CE0104", Severity.ERROR,
    "{op} => division by zero",
    Category.TYPE, "Div and Rem are folded at build time; a zero divisor cannot be represented."))

_add(ErrorMessage("CE0105", Severity.ERROR,
    "{op} => {value} does not fit in a 32-bit int",
    Category.TYPE, "Folded integers are declared as C int globals."))

# Unimplemented / unsupported constructs - CE02xx range
_add(ErrorMessage("CE0201", Severity.ERROR,
    "top-level {construct} is not implemented; only print is supported",
    Category.UNSUPPORTED, "The driver only translates programs whose root term is a print."))

_add(ErrorMessage("CE0202", Severity.ERROR,
    "{construct} is not supported by the constant folder",
    Category.UNSUPPORTED, "Bindings, functions, calls and tuples need an environment the folder does not have."))

# Conditional abort - CE03xx range
_add(ErrorMessage("CE0301", Severity.ERROR,
    "If on a literal boolean selected slot {slot}; translation stopped",
    Category.CONDITIONAL, "Conditionals with a literal boolean condition are not translated yet."))

# Malformed AST input - CE04xx range
_add(ErrorMessage("CE0401", Severity.ERROR,
    "malformed AST: {message}",
    Category.INPUT, "The JSON AST does not have the expected shape."))

_add(ErrorMessage("CE0402", Severity.ERROR,
    "unknown term kind '{kind}'",
    Category.INPUT, "The JSON AST contains a node kind this compiler does not know."))

_add(ErrorMessage("CE0403", Severity.ERROR,
    "unknown binary operator '{op}'",
    Category.INPUT, "The JSON AST contains an operator this compiler does not know."))

_add(ErrorMessage("CE0404", Severity.ERROR,
    "cannot decode AST: {message}",
    Category.INPUT, "The input file is not valid JSON."))

# I/O and toolchain - CE05xx range
_add(ErrorMessage("CE0501", Severity.ERROR,
    "cannot read '{path}': {reason}",
    Category.IO, "The input or prelude file could not be read."))

_add(ErrorMessage("CE0502", Severity.ERROR,
    "cannot write '{path}': {reason}",
    Category.IO, "The output artifact could not be created or written."))

_add(ErrorMessage("CE0503", Severity.ERROR,
    "C compiler '{cc}' failed with exit code {status}",
    Category.IO, "The emitted program did not build."))

_add(ErrorMessage("CE0504", Severity.ERROR,
    "C compiler '{cc}' not found",
    Category.IO, "Install a C compiler or pass --cc."))

# Internal errors (compiler bugs) - IE0xxx range
_add(ErrorMessage("IE0001", Severity.ERROR,
    "slot {slot} declared twice",
    Category.INTERNAL, "Slots are write-once."))

_add(ErrorMessage("IE0002", Severity.ERROR,
    "slot {slot}: kind {kind} does not match C type '{ctype}'",
    Category.INTERNAL, "Every kind has exactly one C type."))

_add(ErrorMessage("IE0003", Severity.ERROR,
    "slot table already consumed",
    Category.INTERNAL, "A slot table is written exactly once."))

_add(ErrorMessage("IE0004", Severity.ERROR,
    "slot {slot} is referenced but never declared",
    Category.INTERNAL, "Print and runtime queues may only name declared slots."))
