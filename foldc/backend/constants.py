"""Type tags shared by the slot table, the emitter and the C prelude.

The numeric values must match the ``Kind`` enumeration in
``runtime/prelude.c``.
"""
from __future__ import annotations
from enum import IntEnum


class Kind(IntEnum):
    STRING = 0xCA
    INTEGER = 0xFE
    MAYBE = 0xBA

    @property
    def ctype(self) -> str:
        """C type of the global that holds a value of this kind."""
        return C_TYPES[self]

    def __str__(self) -> str:
        return self.name


C_TYPES: dict[Kind, str] = {
    Kind.STRING: "char*",
    Kind.INTEGER: "int",
    Kind.MAYBE: "char",
}

# Target `int` is 32-bit signed
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1
