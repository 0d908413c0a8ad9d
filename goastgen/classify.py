"""Value classifier - map a typed Value to its literal category."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .reflect import Array, Basic, Interface, Map, Opaque, Pointer, Slice, Struct, Value

Category = Literal[
    "nil",
    "bool",
    "numeric",
    "text",
    "sequence",
    "map",
    "record",
    "reference",
    "dynamic",
    "unsupported",
]

# Categories whose literal can be addressed directly with &.
COMPOSITE: frozenset[str] = frozenset({"sequence", "map", "record"})


@dataclass(frozen=True)
class NumericKind:
    """Numeric family and width in bits.

    | family  | kinds                                   |
    |---------|-----------------------------------------|
    | int     | int, int8, int16, int32, int64          |
    | uint    | uint, uint8, uint16, uint32, uint64     |
    | float   | float32, float64                        |
    | complex | complex64, complex128                   |

    default marks the kinds an untyped constant takes on its own
    (int, float64); only those render as bare literals.
    """

    family: Literal["int", "uint", "float", "complex"]
    width: int
    default: bool = False


NUMERIC_KINDS: dict[str, NumericKind] = {
    "int": NumericKind("int", 64, True),
    "int8": NumericKind("int", 8),
    "int16": NumericKind("int", 16),
    "int32": NumericKind("int", 32),
    "int64": NumericKind("int", 64),
    "uint": NumericKind("uint", 64),
    "uint8": NumericKind("uint", 8),
    "uint16": NumericKind("uint", 16),
    "uint32": NumericKind("uint", 32),
    "uint64": NumericKind("uint", 64),
    "float32": NumericKind("float", 32),
    "float64": NumericKind("float", 64, True),
    "complex64": NumericKind("complex", 64),
    "complex128": NumericKind("complex", 128),
}


def numeric_kind(kind: str) -> NumericKind:
    return NUMERIC_KINDS[kind]


def classify(v: Value) -> Category:
    """Category of v. Pure: depends only on v's type and nil-ness."""
    typ = v.typ
    if typ is None:
        return "nil"
    if isinstance(typ, Basic):
        if typ.kind == "bool":
            return "bool"
        if typ.kind == "string":
            return "text"
        return "numeric"
    if isinstance(typ, Interface):
        return "dynamic"
    if isinstance(typ, Opaque):
        return "unsupported"
    if isinstance(typ, Struct):
        return "record"
    if isinstance(typ, Array):
        return "sequence"
    if v.data is None:
        return "nil"
    if isinstance(typ, Slice):
        return "sequence"
    if isinstance(typ, Map):
        return "map"
    if isinstance(typ, Pointer):
        return "reference"
    return "unsupported"
