"""Tests for binding scopes and map key ordering."""

import logging

from goastgen.emit import render
from goastgen.ir import BasicLit, Call, FuncLit, Ident, KeyValue, Param, PointerType, TypeName, UnaryRef
from goastgen.order import order, order_entries
from goastgen.scope import BuildScope, bind, binding_name, close

INT_T = TypeName("int")


def test_binding_name() -> None:
    assert [binding_name(i) for i in range(3)] == ["x0", "x1", "x2"]


def test_bind_dedups_equal_pairs() -> None:
    scope = BuildScope()
    a = bind(INT_T, BasicLit("int", "10"), scope)
    b = bind(INT_T, BasicLit("int", "10"), scope)
    assert a == b == "x0"
    assert len(scope) == 1


def test_bind_distinguishes_types() -> None:
    scope = BuildScope()
    a = bind(INT_T, BasicLit("int", "10"), scope)
    b = bind(TypeName("int64"), BasicLit("int", "10"), scope)
    c = bind(INT_T, BasicLit("int", "11"), scope)
    assert (a, b, c) == ("x0", "x1", "x2")
    assert [binding.name for binding in scope.bindings] == ["x0", "x1", "x2"]


def test_bind_logs(caplog) -> None:
    scope = BuildScope()
    with caplog.at_level(logging.DEBUG, logger="goastgen.scope"):
        bind(INT_T, BasicLit("int", "1"), scope)
        bind(INT_T, BasicLit("int", "1"), scope)
    messages = [r.getMessage() for r in caplog.records]
    assert "bound x0" in messages
    assert "reusing binding x0" in messages


def test_close_empty_scope_is_identity() -> None:
    root = Ident("nil")
    assert close(BuildScope(), root, INT_T) is root


def test_close_wraps_in_call() -> None:
    scope = BuildScope()
    name = bind(INT_T, BasicLit("int", "5"), scope)
    root = UnaryRef(Ident(name))
    closed = close(scope, root, PointerType(INT_T))
    assert closed == Call(
        FuncLit((Param("x0", INT_T),), PointerType(INT_T), root), (BasicLit("int", "5"),)
    )
    assert render(closed) == "(func(x0 int) *int {\n\treturn &x0\n})(5)"


def test_order_sorts_by_rendered_text() -> None:
    pairs = [(BasicLit("int", "9"), "nine"), (BasicLit("int", "10"), "ten")]
    assert [payload for _, payload in order(pairs)] == ["ten", "nine"]


def test_order_entries() -> None:
    entries = [
        KeyValue(BasicLit("string", '"b"'), Ident("true")),
        KeyValue(BasicLit("string", '"a"'), Ident("false")),
    ]
    assert [render(kv.key) for kv in order_entries(entries)] == ['"a"', '"b"']
