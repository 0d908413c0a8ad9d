"""Tests for literal text helpers."""

import math

import pytest

from goastgen.emit import render
from goastgen.ir import BasicLit, ComplexPair
from goastgen.util import (
    complex_expr,
    escape_string,
    float_expr,
    float_text,
    int_literal,
    quote,
    string_literal,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("plain", "plain"),
        ('q"', 'q\\"'),
        ("back\\slash", "back\\\\slash"),
        ("\a\b\f\n\r\t\v", "\\a\\b\\f\\n\\r\\t\\v"),
        ("\x01", "\\x01"),
        ("\x7f", "\\x7f"),
        ("é☆", "é☆"),
        ("\u00ad", "\\u00ad"),
        ("\U0001f600", "\U0001f600"),
        ("\ud800", "\\xed\\xa0\\x80"),
    ],
)
def test_escape_string(value: str, expected: str) -> None:
    assert escape_string(value) == expected


def test_quote() -> None:
    assert quote("a\nb") == '"a\\nb"'


@pytest.mark.parametrize(
    "value,expected",
    [
        ("abc", '"abc"'),
        ('"quoted"', '`"quoted"`'),
        ('say "hi"\n', '"say \\"hi\\"\\n"'),
        ('"`"', '"\\"`\\""'),
        ('tab\t"', '"tab\\t\\""'),
        ("", '""'),
    ],
)
def test_string_literal(value: str, expected: str) -> None:
    lit = string_literal(value)
    assert lit.kind == "string"
    assert lit.value == expected


def test_int_literal() -> None:
    assert int_literal(-5) == BasicLit("int", "-5")


@pytest.mark.parametrize(
    "value,bits,expected",
    [
        (1.0, 64, "1.0"),
        (0.1, 64, "0.1"),
        (1e100, 64, "1e+100"),
        (-2.5, 64, "-2.5"),
        (3.125, 32, "3.125"),
        (16777216.0, 32, "16777216.0"),
    ],
)
def test_float_text(value: float, bits: int, expected: str) -> None:
    assert float_text(value, bits) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        (1.5, "1.5"),
        (math.nan, "math.NaN()"),
        (math.inf, "math.Inf(1)"),
        (-math.inf, "math.Inf(-1)"),
        (-0.0, "math.Copysign(0, -1)"),
        (0.0, "0.0"),
    ],
)
def test_float_expr(value: float, expected: str) -> None:
    assert render(float_expr(value)) == expected


def test_complex_expr_pair() -> None:
    expr = complex_expr(1 - 2j)
    assert expr == ComplexPair(BasicLit("int", "1"), "-", BasicLit("imag", "2i"))
    assert render(expr) == "(1-2i)"


def test_complex_expr_fraction() -> None:
    assert render(complex_expr(complex(-0.5, 0.25))) == "(-0.5+0.25i)"


@pytest.mark.parametrize(
    "value,expected",
    [
        (complex(1, -0.0), "complex(1.0, math.Copysign(0, -1))"),
        (complex(-0.0, -0.0), "complex(math.Copysign(0, -1), math.Copysign(0, -1))"),
        (complex(-0.0, 2), "complex(math.Copysign(0, -1), 2.0)"),
    ],
)
def test_complex_expr_negative_zero(value: complex, expected: str) -> None:
    assert render(complex_expr(value)) == expected


def test_complex_expr_negative_imag() -> None:
    assert render(complex_expr(complex(0, -1.5))) == "(0-1.5i)"


def test_complex_expr_non_finite() -> None:
    assert render(complex_expr(complex(math.nan, 1))) == "complex(math.NaN(), 1.0)"
