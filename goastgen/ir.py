"""goastgen IR - Go expression trees.

This module defines every node the literal builder can produce and serves as
the reference for the renderer and the parser. Each node's docstring documents
its Go form and invariants.

Architecture:
    value -> reflect (typed Value) -> build (Expr tree) -> emit (Go text)
                                                  parse (Go text -> Expr tree)

All nodes hash and compare structurally; children are stored in tuples.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


# ============================================================
# TYPE EXPRESSIONS
#
# Type syntax used in composite literals, conversions, parameter
# lists and function results.
# ============================================================


@dataclass(unsafe_hash=True)
class TypeExpr:
    """Base for all type expressions. Abstract."""


@dataclass(unsafe_hash=True)
class TypeName(TypeExpr):
    """Predeclared or declared type name: int8, string, Point."""

    name: str


@dataclass(unsafe_hash=True)
class ArrayType(TypeExpr):
    """[N]T.

    Invariants:
    - length >= 0
    """

    length: int
    element: TypeExpr


@dataclass(unsafe_hash=True)
class SliceType(TypeExpr):
    """[]T."""

    element: TypeExpr


@dataclass(unsafe_hash=True)
class MapType(TypeExpr):
    """map[K]V."""

    key: TypeExpr
    value: TypeExpr


@dataclass(unsafe_hash=True)
class PointerType(TypeExpr):
    """*T."""

    target: TypeExpr


@dataclass(unsafe_hash=True)
class FieldGroup:
    """One line of a struct type: `a, b T` with an optional tag.

    Invariants:
    - len(names) >= 1
    - tag is the decoded tag text, not a literal
    """

    names: tuple[str, ...]
    typ: TypeExpr
    tag: str = ""


@dataclass(unsafe_hash=True)
class StructType(TypeExpr):
    """Anonymous struct{...}.

    Consecutive fields with equal type and tag share one FieldGroup,
    matching gofmt's grouping.
    """

    fields: tuple[FieldGroup, ...]


@dataclass(unsafe_hash=True)
class InterfaceType(TypeExpr):
    """Empty interface: interface{}."""


# ============================================================
# EXPRESSIONS
# ============================================================


@dataclass(unsafe_hash=True)
class Expr:
    """Base for all expressions. Abstract.

    Invariants:
    - every Expr renders to text that parses as a Go expression on its own
    """


@dataclass(unsafe_hash=True)
class Ident(Expr):
    """Identifier: nil, true, false, binding names, conversion callees."""

    name: str


LitKind = Literal["int", "float", "imag", "string"]


@dataclass(unsafe_hash=True)
class BasicLit(Expr):
    """Numeric or string literal, stored as its Go source text.

    | kind   | value examples              |
    |--------|-----------------------------|
    | int    | 42, -128                    |
    | float  | 3.0, -1.5e-07               |
    | imag   | 2i, 2.71828i                |
    | string | "a\\n", `say "hi"`          |

    Invariants:
    - numeric text may carry a leading '-' (folded unary minus)
    - imag text is never negative; ComplexPair carries the sign
    """

    kind: LitKind
    value: str


@dataclass(unsafe_hash=True)
class ComplexPair(Expr):
    """Parenthesized complex constant: (re+imi) or (re-imi).

    Invariants:
    - real.kind in ("int", "float")
    - imag.kind == "imag"
    - op in ("+", "-")
    """

    real: BasicLit
    op: Literal["+", "-"]
    imag: BasicLit


@dataclass(unsafe_hash=True)
class KeyValue(Expr):
    """key: value inside a composite literal."""

    key: Expr
    value: Expr


@dataclass(unsafe_hash=True)
class CompositeLit(Expr):
    """T{e1, e2, ...}.

    | typ         | elements              |
    |-------------|-----------------------|
    | ArrayType   | positional, in order  |
    | SliceType   | positional, in order  |
    | MapType     | KeyValue, sorted      |
    | StructType  | KeyValue by field     |
    | TypeName    | either, by underlying |
    """

    typ: TypeExpr
    elements: tuple[Expr, ...]


@dataclass(unsafe_hash=True)
class UnaryRef(Expr):
    """Address-of: &operand.

    Invariants:
    - operand is a CompositeLit or an Ident naming a binding
    """

    operand: Expr


@dataclass(unsafe_hash=True)
class Selector(Expr):
    """Qualified name: math.Inf."""

    x: Expr
    sel: str


@dataclass(unsafe_hash=True)
class Call(Expr):
    """Call or conversion: f(args), int8(-5), interface{}(1).

    func is an Ident for named callees and a TypeExpr for type literals.
    """

    func: Expr | TypeExpr
    args: tuple[Expr, ...]


@dataclass(unsafe_hash=True)
class Param:
    """Function literal parameter."""

    name: str
    typ: TypeExpr


@dataclass(unsafe_hash=True)
class FuncLit(Expr):
    """func(p1 T1, ...) R { return body }.

    Used only as the callee of the scope-closing call.

    Invariants:
    - parameter names are unique
    """

    params: tuple[Param, ...]
    result: TypeExpr
    body: Expr


Node = Expr | TypeExpr
