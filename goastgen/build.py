"""Literal builder - typed Value -> Go expression tree.

One build walks the value depth first. Each node is classified once and
dispatched on its category; pointers to anything that is not a composite
literal go through the scope manager, and the root is closed over the
resulting bindings at the end.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass

from .classify import COMPOSITE, Category, classify, numeric_kind
from .describe import build_type, conversion_callee
from .errors import CyclicValueError, DepthExceededError, UnsupportedTypeError
from .ir import Call, CompositeLit, Expr, Ident, KeyValue, UnaryRef
from .order import order
from .reflect import Array, Basic, Pointer, Ref, Value, value_of
from .scope import BuildScope, bind, close
from .util import complex_expr, float_expr, int_literal, string_literal

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 200


@dataclass
class Options:
    """Build settings.

    max_depth bounds value nesting; deeper values raise DepthExceededError
    instead of exhausting the interpreter stack.
    """

    max_depth: int = DEFAULT_MAX_DEPTH


def is_zero(v: Value) -> bool:
    """Whether v is the zero value of its type."""
    return _is_zero(v, frozenset())


def _is_zero(v: Value, path: frozenset[int]) -> bool:
    category = classify(v)
    if category == "nil":
        return True
    if category == "bool":
        return v.data is False
    if category == "numeric":
        if isinstance(v.data, complex):
            return _is_positive_zero(v.data.real) and _is_positive_zero(v.data.imag)
        return _is_positive_zero(v.data)
    if category == "text":
        return v.data == ""
    if category == "map":
        return v.len() == 0
    if category == "sequence" and not isinstance(v.typ, Array):
        return v.len() == 0
    if category in ("sequence", "record"):
        # a value that contains itself is never zero
        ident = _identity(v)
        if ident is not None:
            if ident in path:
                return False
            path = path | {ident}
        if category == "sequence":
            return all(_is_zero(e, path) for e in v.elements())
        return all(_is_zero(fv, path) for _, fv in v.fields())
    if category == "reference":
        return False
    return v.data is None


def _is_positive_zero(x: float | int) -> bool:
    # -0.0 is not the zero value: its bits differ
    return x == 0 and math.copysign(1.0, x) > 0


def _identity(v: Value) -> int | None:
    """Identity of the host object behind v, for values that can contain themselves."""
    data = v.data
    if isinstance(data, Ref):
        return id(data)
    if isinstance(data, (list, Mapping, set, bytearray)):
        return id(data)
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return id(data)
    return None


class LiteralBuilder:
    """Build Go literal expressions for host values.

    Holds only settings; every build() call gets its own BuildScope, so one
    builder may serve concurrent callers.
    """

    def __init__(self, options: Options | None = None) -> None:
        self.options = options if options is not None else Options()

    def build(self, x: object) -> Expr:
        """Literal expression for x, closed over any bindings it needed."""
        v = value_of(x)
        scope = BuildScope()
        expr = self._build(v, scope, 0, frozenset())
        if len(scope) == 0:
            return expr
        assert v.typ is not None
        return close(scope, expr, build_type(v.typ))

    # ============================================================
    # DISPATCH
    # ============================================================

    def _build(self, v: Value, scope: BuildScope, depth: int, path: frozenset[int]) -> Expr:
        if depth > self.options.max_depth:
            raise DepthExceededError(self.options.max_depth)
        category = classify(v)
        ident = _identity(v)
        if ident is not None:
            if ident in path:
                raise CyclicValueError(category)
            path = path | {ident}
        if category == "nil":
            return Ident("nil")
        if category == "bool":
            return self._build_scalar(v, Ident("true" if v.data else "false"))
        if category == "numeric":
            return self._build_numeric(v)
        if category == "text":
            return self._build_scalar(v, string_literal(v.data))
        if category == "sequence":
            return self._build_sequence(v, scope, depth, path)
        if category == "map":
            return self._build_map(v, scope, depth, path)
        if category == "record":
            return self._build_record(v, scope, depth, path)
        if category == "reference":
            return self._build_reference(v, scope, depth, path)
        if category == "dynamic":
            return self._build_dynamic(v, scope, depth, path)
        return self._unsupported(v, category)

    def _build_child(
        self, v: Value, scope: BuildScope, depth: int, path: frozenset[int]
    ) -> Expr:
        node = self._build(v, scope, depth + 1, path)
        if not isinstance(node, Expr):
            raise UnsupportedTypeError(type(node).__name__)
        return node

    def _unsupported(self, v: Value, category: Category) -> Expr:
        kind = getattr(v.typ, "kind", category)
        logger.debug("rejecting value of kind %s", kind)
        raise UnsupportedTypeError(kind)

    # ============================================================
    # SCALARS
    # ============================================================

    def _build_scalar(self, v: Value, lit: Expr) -> Expr:
        """Bare literal; named types convert it so the name survives boxing."""
        assert isinstance(v.typ, Basic)
        if not v.typ.name:
            return lit
        return Call(Ident(v.typ.name), (lit,))

    def _build_numeric(self, v: Value) -> Expr:
        assert isinstance(v.typ, Basic)
        kind = numeric_kind(v.typ.kind)
        if kind.family in ("int", "uint"):
            lit = int_literal(v.data)
        elif kind.family == "float":
            lit = float_expr(v.data, kind.width)
        else:
            lit = complex_expr(v.data, kind.width)
        if kind.default and not v.typ.name:
            return lit
        return Call(conversion_callee(build_type(v.typ)), (lit,))

    # ============================================================
    # COMPOSITES
    # ============================================================

    def _build_sequence(
        self, v: Value, scope: BuildScope, depth: int, path: frozenset[int]
    ) -> Expr:
        elements = tuple(self._build_child(e, scope, depth, path) for e in v.elements())
        return CompositeLit(build_type(v.typ), elements)

    def _build_map(self, v: Value, scope: BuildScope, depth: int, path: frozenset[int]) -> Expr:
        # Keys are built in a scratch scope first so their text, and with it
        # the order bindings are created in below, ignores host order. A key
        # that needed bindings sorts by its closed form; open forms all read &x0.
        pairs: list[tuple[Expr, tuple[Expr, Value, Value, bool]]] = []
        for key, value in v.entries():
            scratch = BuildScope()
            key_expr = self._build_child(key, scratch, depth, path)
            sort_expr = key_expr
            if len(scratch) > 0:
                assert key.typ is not None
                sort_expr = close(scratch, key_expr, build_type(key.typ))
            pairs.append((sort_expr, (key_expr, key, value, len(scratch) == 0)))
        elements: list[Expr] = []
        for _, (key_expr, key, value, closed) in order(pairs):
            if not closed:
                key_expr = self._build_child(key, scope, depth, path)
            elements.append(KeyValue(key_expr, self._build_child(value, scope, depth, path)))
        return CompositeLit(build_type(v.typ), tuple(elements))

    def _build_record(
        self, v: Value, scope: BuildScope, depth: int, path: frozenset[int]
    ) -> Expr:
        elements: list[Expr] = []
        for f, fv in v.fields():
            if is_zero(fv):
                continue
            elements.append(KeyValue(Ident(f.name), self._build_child(fv, scope, depth, path)))
        return CompositeLit(build_type(v.typ), tuple(elements))

    # ============================================================
    # INDIRECTION
    # ============================================================

    def _build_reference(
        self, v: Value, scope: BuildScope, depth: int, path: frozenset[int]
    ) -> Expr:
        assert isinstance(v.typ, Pointer)
        target = v.elem()
        if classify(target) in COMPOSITE:
            return UnaryRef(self._build_child(target, scope, depth, path))
        # &5 is not Go: bind the target and take the parameter's address.
        # The target gets its own scope so the bound argument is closed.
        typ = build_type(v.typ.target)
        inner = BuildScope()
        expr = close(inner, self._build_child(target, inner, depth, path), typ)
        return UnaryRef(Ident(bind(typ, expr, scope)))

    def _build_dynamic(
        self, v: Value, scope: BuildScope, depth: int, path: frozenset[int]
    ) -> Expr:
        assert v.typ is not None
        boxed = v.elem()
        inner = self._build_child(boxed, scope, depth, path)
        if boxed.typ is not None and classify(boxed) == "nil":
            # a typed nil is not a nil interface; keep its type
            inner = Call(conversion_callee(build_type(boxed.typ)), (inner,))
        return Call(conversion_callee(build_type(v.typ)), (inner,))


def literalize(x: object, options: Options | None = None) -> Expr:
    """Go literal expression tree for x."""
    return LiteralBuilder(options).build(x)


