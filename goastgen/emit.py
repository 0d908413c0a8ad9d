"""GoEmitter: Expr tree -> Go source text.

Pure syntax emission - no analysis. Everything renders on one line except
function literals, whose body is a single return statement on its own
tab-indented line, as gofmt lays it out.
"""

from __future__ import annotations

from .ir import (
    ArrayType,
    BasicLit,
    Call,
    ComplexPair,
    CompositeLit,
    Expr,
    FieldGroup,
    FuncLit,
    Ident,
    InterfaceType,
    KeyValue,
    MapType,
    Node,
    PointerType,
    Selector,
    SliceType,
    StructType,
    TypeExpr,
    TypeName,
    UnaryRef,
)
from .util import string_literal


class GoEmitter:
    """Emit Go text for expressions and type expressions."""

    def __init__(self) -> None:
        self.indent = 0

    def emit(self, node: Node) -> str:
        """Emit node and return Go code string."""
        self.indent = 0
        if isinstance(node, TypeExpr):
            return self._emit_type(node)
        return self._emit_expr(node)

    # ============================================================
    # EXPRESSION EMISSION
    # ============================================================

    def _emit_expr(self, expr: Expr) -> str:
        if isinstance(expr, Ident):
            return expr.name
        if isinstance(expr, BasicLit):
            return expr.value
        if isinstance(expr, ComplexPair):
            return self._emit_expr_ComplexPair(expr)
        if isinstance(expr, CompositeLit):
            return self._emit_expr_CompositeLit(expr)
        if isinstance(expr, KeyValue):
            return self._emit_expr(expr.key) + ": " + self._emit_expr(expr.value)
        if isinstance(expr, UnaryRef):
            return "&" + self._emit_expr(expr.operand)
        if isinstance(expr, Selector):
            return self._emit_expr(expr.x) + "." + expr.sel
        if isinstance(expr, Call):
            return self._emit_expr_Call(expr)
        if isinstance(expr, FuncLit):
            return self._emit_expr_FuncLit(expr)
        raise TypeError("cannot emit " + type(expr).__name__)

    def _emit_expr_ComplexPair(self, expr: ComplexPair) -> str:
        return "(" + expr.real.value + expr.op + expr.imag.value + ")"

    def _emit_expr_CompositeLit(self, expr: CompositeLit) -> str:
        elements = ", ".join(self._emit_expr(e) for e in expr.elements)
        return f"{self._emit_type(expr.typ)}{{{elements}}}"

    def _emit_expr_Call(self, expr: Call) -> str:
        args = ", ".join(self._emit_expr(a) for a in expr.args)
        return f"{self._emit_callee(expr.func)}({args})"

    def _emit_callee(self, callee: Expr | TypeExpr) -> str:
        """Callee text; pointer types and function literals need parens."""
        if isinstance(callee, TypeExpr):
            s = self._emit_type(callee)
            if isinstance(callee, PointerType):
                return f"({s})"
            return s
        s = self._emit_expr(callee)
        if isinstance(callee, FuncLit):
            return f"({s})"
        return s

    def _emit_expr_FuncLit(self, expr: FuncLit) -> str:
        params = ", ".join(f"{p.name} {self._emit_type(p.typ)}" for p in expr.params)
        result = self._emit_type(expr.result)
        self.indent += 1
        body = self._emit_expr(expr.body)
        pad = "\t" * self.indent
        self.indent -= 1
        close_pad = "\t" * self.indent
        return f"func({params}) {result} {{\n{pad}return {body}\n{close_pad}}}"

    # ============================================================
    # TYPE EMISSION
    # ============================================================

    def _emit_type(self, typ: TypeExpr) -> str:
        if isinstance(typ, TypeName):
            return typ.name
        if isinstance(typ, ArrayType):
            return f"[{typ.length}]{self._emit_type(typ.element)}"
        if isinstance(typ, SliceType):
            return f"[]{self._emit_type(typ.element)}"
        if isinstance(typ, MapType):
            return f"map[{self._emit_type(typ.key)}]{self._emit_type(typ.value)}"
        if isinstance(typ, PointerType):
            return f"*{self._emit_type(typ.target)}"
        if isinstance(typ, InterfaceType):
            return "interface{}"
        if isinstance(typ, StructType):
            fields = "; ".join(self._emit_field_group(g) for g in typ.fields)
            return f"struct{{{fields}}}"
        raise TypeError("cannot emit type " + type(typ).__name__)

    def _emit_field_group(self, group: FieldGroup) -> str:
        s = ", ".join(group.names) + " " + self._emit_type(group.typ)
        if group.tag:
            s += " " + string_literal(group.tag).value
        return s


def render(node: Node) -> str:
    """Render an expression or type expression as Go source text."""
    return GoEmitter().emit(node)
