"""Tests for value classification."""

import pytest

from fixtures import Point
from goastgen.classify import COMPOSITE, NUMERIC_KINDS, classify, numeric_kind
from goastgen.reflect import (
    ANY,
    CHAN,
    COMPLEX64,
    FUNC,
    INT16,
    Map,
    Pointer,
    Ref,
    Slice,
    Value,
    value_of,
)


@pytest.mark.parametrize(
    "value,category",
    [
        (Value(None), "nil"),
        (value_of(True), "bool"),
        (value_of(1), "numeric"),
        (INT16(-1), "numeric"),
        (COMPLEX64(1j), "numeric"),
        (value_of("s"), "text"),
        (value_of([1]), "sequence"),
        (value_of((1,)), "sequence"),
        (value_of({"a": 1}), "map"),
        (value_of(Point()), "record"),
        (value_of(Ref(1)), "reference"),
        (ANY(1), "dynamic"),
        (ANY(None), "dynamic"),
        (Value(FUNC, print), "unsupported"),
        (Value(CHAN, None), "unsupported"),
        (Slice(ANY)(None), "nil"),
        (Map(ANY, ANY)(None), "nil"),
        (Pointer(ANY)(None), "nil"),
    ],
)
def test_classify(value: Value, category: str) -> None:
    assert classify(value) == category


def test_composite_categories() -> None:
    assert COMPOSITE == {"sequence", "map", "record"}


def test_numeric_kinds() -> None:
    assert numeric_kind("int8").family == "int"
    assert numeric_kind("int8").width == 8
    assert numeric_kind("uint64").family == "uint"
    assert numeric_kind("complex64").width == 64
    defaults = {kind for kind, nk in NUMERIC_KINDS.items() if nk.default}
    assert defaults == {"int", "float64"}
