"""Append-only bookkeeping for one translation.

Every folded value lives in a numbered slot. The table records, per slot,
the C declaration (type name and literal text), the type tag, and the
folded Python value that enclosing operators read back. It also keeps the
print queue and the runtime queue. Nothing is ever updated or removed;
the emitter consumes the whole table exactly once.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple, Union

from foldc.backend.constants import Kind
from foldc.internals import errors as er

Value = Union[int, str, bool]


@dataclass
class SlotTable:
    constants: Dict[int, Tuple[str, str]] = field(default_factory=dict)
    types: Dict[int, Kind] = field(default_factory=dict)
    values: Dict[int, Value] = field(default_factory=dict)
    print_queue: List[int] = field(default_factory=list)
    runtime_queue: Dict[int, str] = field(default_factory=dict)
    consumed: bool = False

    def declare(self, slot: int, kind: Kind, literal: str, value: Value) -> None:
        if slot in self.constants or slot in self.types:
            er.raise_internal_error("IE0001", slot=slot)
        self.constants[slot] = (kind.ctype, literal)
        self.types[slot] = kind
        self.values[slot] = value

    def enqueue_print(self, slot: int) -> None:
        self._require(slot)
        self.print_queue.append(slot)

    def defer(self, slot: int, expr: str) -> None:
        """Compute `slot` at program start instead of at build time."""
        self._require(slot)
        if slot in self.runtime_queue:
            er.raise_internal_error("IE0001", slot=slot)
        self.runtime_queue[slot] = expr

    def kind_of(self, slot: int) -> Kind:
        self._require(slot)
        return self.types[slot]

    def value_of(self, slot: int) -> Value:
        self._require(slot)
        return self.values[slot]

    def literal_of(self, slot: int) -> str:
        self._require(slot)
        return self.constants[slot][1]

    def __len__(self) -> int:
        return len(self.constants)

    def slots(self) -> List[int]:
        return sorted(self.constants)

    def declarations(self) -> Iterator[Tuple[int, str, str]]:
        """Yield (slot, C type, literal) in ascending slot order."""
        for slot in self.slots():
            ctype, literal = self.constants[slot]
            yield slot, ctype, literal

    def tags(self) -> Iterator[Tuple[int, Kind]]:
        for slot in sorted(self.types):
            yield slot, self.types[slot]

    def validate(self) -> None:
        """Check the cross-map invariants; raise an internal error on the first violation."""
        if self.constants.keys() != self.types.keys():
            missing = sorted(self.constants.keys() ^ self.types.keys())
            er.raise_internal_error("IE0004", slot=missing[0])
        for slot, kind in self.types.items():
            ctype = self.constants[slot][0]
            if kind.ctype != ctype:
                er.raise_internal_error("IE0002", slot=slot, kind=kind.name, ctype=ctype)
        for slot in self.print_queue:
            self._require(slot)
        for slot in self.runtime_queue:
            self._require(slot)

    def consume(self) -> None:
        if self.consumed:
            er.raise_internal_error("IE0003")
        self.consumed = True

    def _require(self, slot: int) -> None:
        if slot not in self.constants:
            er.raise_internal_error("IE0004", slot=slot)
