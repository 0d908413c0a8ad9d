"""goastgen - build Go literal expression trees from Python values."""

from __future__ import annotations

from .build import LiteralBuilder as LiteralBuilder, Options as Options, literalize as literalize
from .emit import render as render
from .errors import (
    CyclicValueError as CyclicValueError,
    DepthExceededError as DepthExceededError,
    GoAstGenError as GoAstGenError,
    UnsupportedTypeError as UnsupportedTypeError,
)
from .parse import ParseError as ParseError, parse as parse
from .reflect import (
    ANY as ANY,
    BOOL as BOOL,
    BYTE as BYTE,
    CHAN as CHAN,
    COMPLEX64 as COMPLEX64,
    COMPLEX128 as COMPLEX128,
    EMPTY_STRUCT as EMPTY_STRUCT,
    FLOAT32 as FLOAT32,
    FLOAT64 as FLOAT64,
    FUNC as FUNC,
    INT as INT,
    INT8 as INT8,
    INT16 as INT16,
    INT32 as INT32,
    INT64 as INT64,
    RUNE as RUNE,
    STRING as STRING,
    UINT as UINT,
    UINT8 as UINT8,
    UINT16 as UINT16,
    UINT32 as UINT32,
    UINT64 as UINT64,
    UNSAFE_POINTER as UNSAFE_POINTER,
    Array as Array,
    Interface as Interface,
    Map as Map,
    Pointer as Pointer,
    Ref as Ref,
    Slice as Slice,
    Struct as Struct,
    StructField as StructField,
    Value as Value,
    named as named,
    value_of as value_of,
)
from .serialize import serialize as serialize
from .tokens import TokenizeError as TokenizeError


def to_go(x: object, options: Options | None = None) -> str:
    """Go source text of the literal for x."""
    return render(literalize(x, options))
