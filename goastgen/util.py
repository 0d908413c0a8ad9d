"""Literal text helpers: Go string quoting and numeric formatting."""

from __future__ import annotations

import math
import struct

from .ir import BasicLit, Call, ComplexPair, Expr, Ident, Selector

_SHORT_ESCAPES: dict[str, str] = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def escape_string(value: str) -> str:
    """Escape value the way strconv.Quote does (without the quotes)."""
    result: list[str] = []
    for c in value:
        if c == '"' or c == "\\":
            result.append("\\" + c)
        elif c in _SHORT_ESCAPES:
            result.append(_SHORT_ESCAPES[c])
        elif c.isprintable():
            result.append(c)
        else:
            result.append(_escape_rune(c))
    return "".join(result)


def _escape_rune(c: str) -> str:
    r = ord(c)
    if 0xD800 <= r <= 0xDFFF:
        # lone surrogates have no UTF-8 form; keep the bytes Python would store
        return "".join("\\x%02x" % b for b in c.encode("utf-8", "surrogatepass"))
    if r < 0x20 or r == 0x7F:
        return "\\x%02x" % r
    if r < 0x10000:
        return "\\u%04x" % r
    return "\\U%08x" % r


def quote(value: str) -> str:
    return '"' + escape_string(value) + '"'


def string_literal(value: str) -> BasicLit:
    """Double-quoted literal, or the back-quoted raw form when value holds a
    double quote and nothing else that would need escaping."""
    if '"' in value and "`" not in value:
        stripped = value.replace('"', "")
        if len(quote(stripped)) == len(stripped) + 2:
            return BasicLit("string", "`" + value + "`")
    return BasicLit("string", quote(value))


def int_literal(n: int) -> BasicLit:
    return BasicLit("int", str(n))


# ============================================================
# FLOATS
# ============================================================


def _to_float32(x: float) -> float:
    return struct.unpack("<f", struct.pack("<f", x))[0]


def _shortest(x: float, bits: int) -> str:
    """Shortest decimal text that reads back as x at the given precision."""
    if bits == 64:
        return repr(x)
    for precision in range(1, 10):
        s = format(x, "." + str(precision) + "g")
        if _to_float32(float(s)) == x:
            return s
    return repr(x)


def float_text(x: float, bits: int = 64) -> str:
    """Finite float as Go literal text; integral values keep a '.0'."""
    s = _shortest(x, bits)
    if "." not in s and "e" not in s:
        s += ".0"
    return s


def _math_call(name: str, *args: Expr) -> Call:
    return Call(Selector(Ident("math"), name), tuple(args))


def _is_negative_zero(x: float) -> bool:
    return x == 0 and math.copysign(1.0, x) < 0


def float_expr(x: float, bits: int = 64) -> Expr:
    """Expression denoting x exactly, including the values no literal spells."""
    if math.isnan(x):
        return _math_call("NaN")
    if math.isinf(x):
        return _math_call("Inf", BasicLit("int", "1" if x > 0 else "-1"))
    if _is_negative_zero(x):
        return _math_call("Copysign", BasicLit("int", "0"), BasicLit("int", "-1"))
    return BasicLit("float", float_text(x, bits))


def _part_text(x: float, bits: int) -> str:
    s = _shortest(x, bits)
    if s.endswith(".0"):
        s = s[:-2]
    return s


def complex_expr(c: complex, bits: int = 128) -> Expr:
    """(re+imi) pair, or complex(re, im) when a part has no constant form.

    Constants have neither infinities nor negative zero, so those parts go
    through float_expr.
    """
    part_bits = bits // 2
    if any(not math.isfinite(x) or _is_negative_zero(x) for x in (c.real, c.imag)):
        return Call(
            Ident("complex"), (float_expr(c.real, part_bits), float_expr(c.imag, part_bits))
        )
    real = _part_text(c.real, part_bits)
    real_kind = "float" if "." in real or "e" in real else "int"
    op = "-" if math.copysign(1.0, c.imag) < 0 else "+"
    imag = _part_text(abs(c.imag), part_bits) + "i"
    return ComplexPair(BasicLit(real_kind, real), op, BasicLit("imag", imag))
