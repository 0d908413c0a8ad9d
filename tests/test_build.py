"""Literal builder tests.

Cases live in build/*.tests files. Format:

    === test name
    Python expression producing the value
    ---
    expected Go text
    ---

The input is evaluated with the public goastgen names and the fixture
types in scope. Each case checks the rendered text and that parsing the
text back yields the same tree.
"""

import math
import queue
from pathlib import Path

import pytest

import fixtures
import goastgen
from goastgen import (
    INT,
    STRING,
    CyclicValueError,
    DepthExceededError,
    LiteralBuilder,
    Map,
    Options,
    Pointer,
    Ref,
    Slice,
    Struct,
    StructField,
    UnsupportedTypeError,
    literalize,
    parse,
    render,
    to_go,
)
from goastgen.build import is_zero
from goastgen.reflect import FUNC, struct_of, value_of
from casefile import discover

BUILD_DIR = Path(__file__).parent / "build"


def pytest_generate_tests(metafunc):
    if "build_input" in metafunc.fixturenames:
        params = [
            pytest.param("\n".join(inp).strip(), "\n".join(exp).strip(), id=test_id)
            for test_id, inp, exp in discover(BUILD_DIR)
        ]
        metafunc.parametrize("build_input,build_expected", params)


def _namespace() -> dict[str, object]:
    ns: dict[str, object] = {"math": math, "struct_of": struct_of}
    for name in goastgen.__dict__:
        if not name.startswith("_"):
            ns[name] = getattr(goastgen, name)
    for name in fixtures.__dict__:
        if not name.startswith("_"):
            ns[name] = getattr(fixtures, name)
    return ns


def test_build(build_input: str, build_expected: str) -> None:
    value = eval(build_input, _namespace())
    tree = literalize(value)
    got = render(tree)
    assert got == build_expected
    assert parse(got) == tree


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


def test_map_order_ignores_insertion_order() -> None:
    m1 = {"x": 1, "a": 2, "m": 3}
    m2 = {"m": 3, "x": 1, "a": 2}
    assert to_go(m1) == to_go(m2)


def test_map_of_pointers_is_deterministic() -> None:
    m1 = {"b": Ref(2), "a": Ref(1)}
    m2 = {"a": Ref(1), "b": Ref(2)}
    assert to_go(m1) == to_go(m2)


def test_map_pointer_keys_ignore_insertion_order() -> None:
    t = Map(Pointer(INT), STRING)
    a, b, c = Ref(1), Ref(2), Ref(3)
    first = to_go(t({a: "one", b: "two", c: "three"}))
    second = to_go(t({c: "three", b: "two", a: "one"}))
    assert first == second
    assert 'map[*int]string{&x0: "one", &x1: "two", &x2: "three"}' in first
    assert first.endswith("})(1, 2, 3)")


def test_pointer_dedup_single_binding() -> None:
    out = to_go([Ref(10), Ref(10)])
    assert out.count("x0 int") == 1
    assert "x1" not in out
    assert out.count("&x0") == 2


def test_builder_is_reusable() -> None:
    builder = LiteralBuilder()
    first = render(builder.build(Ref(1)))
    second = render(builder.build(Ref(1)))
    assert first == second


def test_is_zero() -> None:
    assert is_zero(value_of(0))
    assert is_zero(value_of(""))
    assert is_zero(value_of(fixtures.Point()))
    assert is_zero(value_of((0, 0)))
    assert not is_zero(value_of(-0.0))
    assert not is_zero(value_of((0, 1)))
    assert not is_zero(value_of(Ref(0)))
    assert is_zero(Slice(INT)(None))
    assert is_zero(Slice(INT)([]))


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


def test_unsupported_func() -> None:
    with pytest.raises(UnsupportedTypeError) as exc:
        literalize(lambda: 0)
    assert exc.value.kind == "func"
    assert str(exc.value) == "unexpected type: func"


def test_unsupported_chan() -> None:
    with pytest.raises(UnsupportedTypeError) as exc:
        literalize(queue.Queue())
    assert exc.value.msg == "unexpected type: chan"


def test_unsupported_host_object() -> None:
    with pytest.raises(UnsupportedTypeError) as exc:
        literalize(object())
    assert exc.value.kind == "object"


def test_unsupported_nested_field() -> None:
    value = Struct((StructField("f", FUNC),))({"f": print})
    with pytest.raises(UnsupportedTypeError):
        literalize(value)


def test_unsupported_inside_interface() -> None:
    with pytest.raises(UnsupportedTypeError):
        literalize([1, len])


def test_depth_limit() -> None:
    value = [[[1]]]
    assert to_go(value, Options(max_depth=3)) == "[][][]int{[][]int{[]int{1}}}"
    with pytest.raises(DepthExceededError) as exc:
        literalize(value, Options(max_depth=2))
    assert exc.value.limit == 2
    assert "max depth 2" in str(exc.value)


def test_default_options() -> None:
    assert Options().max_depth == 200
    assert LiteralBuilder().options == Options()


def test_cyclic_list() -> None:
    a: list = []
    a.append(a)
    with pytest.raises(CyclicValueError):
        literalize(a)


def test_cyclic_ref() -> None:
    r = Ref(None)
    r.value = r
    with pytest.raises(CyclicValueError):
        literalize(r)


def test_cyclic_record() -> None:
    link = fixtures.Link("a")
    link.next = link
    with pytest.raises(CyclicValueError) as exc:
        literalize(link)
    assert exc.value.kind == "record"


def test_shared_subtree_is_not_a_cycle() -> None:
    shared = [1, 2]
    assert to_go([shared, shared]) == "[][]int{[]int{1, 2}, []int{1, 2}}"


def test_cyclic_dict() -> None:
    d: dict = {}
    d["self"] = d
    with pytest.raises(CyclicValueError):
        literalize(d)
