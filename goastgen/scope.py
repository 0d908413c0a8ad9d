"""Scope manager - named bindings for values that cannot be addressed directly.

Go rejects &5 and &"s", so a pointer to a scalar is written as the address
of a parameter of an immediately-invoked function literal:

    (func(x0 int) *int {
        return &x0
    })(5)

A BuildScope collects those parameters for one literalize call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .ir import Call, Expr, FuncLit, Param, TypeExpr

logger = logging.getLogger(__name__)


@dataclass
class Binding:
    """A synthesized parameter: name, declared type, argument expression."""

    name: str
    typ: TypeExpr
    value: Expr


def binding_name(position: int) -> str:
    """Name of the binding at position; injective and content-independent."""
    return "x" + str(position)


class BuildScope:
    """Bindings created during one build, in creation order.

    Invariants:
    - binding names are unique
    - no two bindings share a structurally equal (typ, value) pair
    """

    def __init__(self) -> None:
        self.bindings: list[Binding] = []
        self._by_content: dict[tuple[TypeExpr, Expr], str] = {}

    def __len__(self) -> int:
        return len(self.bindings)

    def lookup(self, typ: TypeExpr, value: Expr) -> str | None:
        return self._by_content.get((typ, value))

    def add(self, typ: TypeExpr, value: Expr) -> str:
        name = binding_name(len(self.bindings))
        self.bindings.append(Binding(name, typ, value))
        self._by_content[(typ, value)] = name
        return name


def bind(typ: TypeExpr, value: Expr, scope: BuildScope) -> str:
    """Name bound to (typ, value) in scope, creating the binding if needed."""
    name = scope.lookup(typ, value)
    if name is not None:
        logger.debug("reusing binding %s", name)
        return name
    name = scope.add(typ, value)
    logger.debug("bound %s", name)
    return name


def close(scope: BuildScope, root: Expr, result: TypeExpr) -> Expr:
    """Wrap root in a call of a function literal over scope's bindings.

    An empty scope leaves root unchanged.
    """
    if len(scope) == 0:
        return root
    logger.debug("closing scope over %d binding(s)", len(scope))
    params = tuple(Param(b.name, b.typ) for b in scope.bindings)
    args = tuple(b.value for b in scope.bindings)
    return Call(FuncLit(params, result, root), args)
