"""Runtime type model - Go types attached to host values.

Python values carry no Go static type, so every value handed to the builder
is first resolved to a Value: a (Type, data) pair. Plain Python data is
typed by inference (type_of); exact Go types are requested by calling a type
descriptor, the way a Go conversion reads:

    INT8(-5)                     int8(-5)
    Slice(UINT16)([1, 2])        []uint16{uint16(1), uint16(2)}
    Pointer(INT)(Ref(10))        &x0 with x0 = 10
    ANY(3)                       interface{}(3)

Children of a Value are typed lazily from the container's static type, so
an element slot typed interface{} boxes whatever it holds.
"""

from __future__ import annotations

import asyncio
import dataclasses
import queue
import struct
import types
import typing
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Literal


# ============================================================
# TYPES
#
# All types are hashable and compare structurally. A non-empty name
# marks a declared (named) type.
# ============================================================


@dataclass(unsafe_hash=True)
class Type:
    """Base for all types. Abstract."""

    def __call__(self, data: object) -> Value:
        return convert(data, self)


BasicKind = Literal[
    "bool",
    "int",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "float32",
    "float64",
    "complex64",
    "complex128",
    "string",
]


@dataclass(unsafe_hash=True)
class Basic(Type):
    """Predeclared scalar type, optionally renamed (`type Celsius float64`).

    | Kind       | Python data |
    |------------|-------------|
    | bool       | bool        |
    | int*/uint* | int         |
    | float*     | float       |
    | complex*   | complex     |
    | string     | str         |
    """

    kind: BasicKind
    name: str = ""


@dataclass(unsafe_hash=True)
class Array(Type):
    """[N]T. Python data: any sequence of exactly N items."""

    element: Type
    size: int
    name: str = ""


@dataclass(unsafe_hash=True)
class Slice(Type):
    """[]T. Python data: list, tuple, bytes; None is the nil slice."""

    element: Type
    name: str = ""


@dataclass(unsafe_hash=True)
class Map(Type):
    """map[K]V. Python data: Mapping, or a set when V is struct{}."""

    key: Type
    value: Type
    name: str = ""


@dataclass(unsafe_hash=True)
class StructField:
    """Struct field. typ is None when the type follows the field value."""

    name: str
    typ: Type | None
    tag: str = ""


@dataclass(unsafe_hash=True)
class Struct(Type):
    """struct{...}, anonymous or named.

    Structs derived from dataclasses keep the class in cls and resolve their
    fields on demand, so self-referential classes do not recurse while the
    type is being built.
    """

    fields: tuple[StructField, ...] = ()
    name: str = ""
    cls: type | None = field(default=None, compare=True)

    def field_list(self) -> tuple[StructField, ...]:
        if self.cls is None:
            return self.fields
        return _dataclass_fields(self.cls)


@dataclass(unsafe_hash=True)
class Pointer(Type):
    """*T. Python data: a Ref box, any value (boxed fresh), or None."""

    target: Type


@dataclass(unsafe_hash=True)
class Interface(Type):
    """interface{} or a named interface. Holds a boxed Value or nil."""

    name: str = ""


@dataclass(unsafe_hash=True)
class Opaque(Type):
    """Type with no literal form: func, chan, unsafe.Pointer, host classes."""

    kind: str


BOOL = Basic("bool")
INT = Basic("int")
INT8 = Basic("int8")
INT16 = Basic("int16")
INT32 = Basic("int32")
INT64 = Basic("int64")
UINT = Basic("uint")
UINT8 = Basic("uint8")
UINT16 = Basic("uint16")
UINT32 = Basic("uint32")
UINT64 = Basic("uint64")
FLOAT32 = Basic("float32")
FLOAT64 = Basic("float64")
COMPLEX64 = Basic("complex64")
COMPLEX128 = Basic("complex128")
STRING = Basic("string")
BYTE = UINT8
RUNE = INT32
ANY = Interface()
EMPTY_STRUCT = Struct()
FUNC = Opaque("func")
CHAN = Opaque("chan")
UNSAFE_POINTER = Opaque("unsafe.Pointer")

INT_RANGES: dict[str, tuple[int, int]] = {
    "int": (-(1 << 63), (1 << 63) - 1),
    "int8": (-(1 << 7), (1 << 7) - 1),
    "int16": (-(1 << 15), (1 << 15) - 1),
    "int32": (-(1 << 31), (1 << 31) - 1),
    "int64": (-(1 << 63), (1 << 63) - 1),
    "uint": (0, (1 << 64) - 1),
    "uint8": (0, (1 << 8) - 1),
    "uint16": (0, (1 << 16) - 1),
    "uint32": (0, (1 << 32) - 1),
    "uint64": (0, (1 << 64) - 1),
}


def named(name: str, underlying: Type) -> Type:
    """Declare a named type: named("Celsius", FLOAT64)."""
    if isinstance(underlying, (Pointer, Opaque)):
        raise TypeError("cannot name " + type(underlying).__name__ + " types")
    return dataclasses.replace(underlying, name=name)


def is_nilable(typ: Type) -> bool:
    return isinstance(typ, (Slice, Map, Pointer, Interface))


# ============================================================
# POINTER BOX
# ============================================================


class Ref:
    """Host-side stand-in for a Go pointer.

    Two pointers are the same pointer iff they are the same Ref object.
    """

    __slots__ = ("value",)

    def __init__(self, value: object):
        self.value = value

    def __repr__(self) -> str:
        return "Ref(" + repr(self.value) + ")"


# ============================================================
# VALUES
# ============================================================


@dataclass
class Value:
    """A host value paired with its Go type.

    Invariants:
    - typ is None only for the untyped nil
    - data has already been checked against typ by convert()
    """

    typ: Type | None
    data: object = None

    def is_nil(self) -> bool:
        if self.typ is None:
            return True
        return is_nilable(self.typ) and self.data is None

    def len(self) -> int:
        if self.data is None:
            return 0
        return len(self.data)

    def elements(self) -> list[Value]:
        """Array and slice items, typed by the element type."""
        assert isinstance(self.typ, (Array, Slice))
        if self.data is None:
            return []
        elem = self.typ.element
        return [convert(item, elem) for item in self.data]

    def entries(self) -> list[tuple[Value, Value]]:
        """Map entries in host iteration order."""
        assert isinstance(self.typ, Map)
        if self.data is None:
            return []
        key_t = self.typ.key
        value_t = self.typ.value
        if isinstance(self.data, Mapping):
            return [(convert(k, key_t), convert(v, value_t)) for k, v in self.data.items()]
        return [(convert(k, key_t), zero_value(value_t)) for k in self.data]

    def fields(self) -> list[tuple[StructField, Value]]:
        """Struct fields in declaration order; missing data reads as zero."""
        assert isinstance(self.typ, Struct)
        result: list[tuple[StructField, Value]] = []
        for f in self.typ.field_list():
            raw = _field_data(self.data, f.name)
            if f.typ is None:
                result.append((f, value_of(raw)))
            elif raw is None and not is_nilable(f.typ):
                result.append((f, zero_value(f.typ)))
            else:
                result.append((f, convert(raw, f.typ)))
        return result

    def elem(self) -> Value:
        """Pointer target, or the dynamic value held by an interface."""
        if isinstance(self.typ, Pointer):
            assert isinstance(self.data, Ref)
            return convert(self.data.value, self.typ.target)
        assert isinstance(self.typ, Interface)
        if self.data is None:
            return Value(None)
        assert isinstance(self.data, Value)
        return self.data


def _field_data(data: object, name: str) -> object:
    if data is None:
        return None
    if isinstance(data, Mapping):
        return data.get(name)
    return getattr(data, name, None)


def zero_value(typ: Type) -> Value:
    """The Go zero value of typ."""
    if isinstance(typ, Basic):
        if typ.kind == "bool":
            return Value(typ, False)
        if typ.kind == "string":
            return Value(typ, "")
        if typ.kind in ("float32", "float64"):
            return Value(typ, 0.0)
        if typ.kind in ("complex64", "complex128"):
            return Value(typ, 0j)
        return Value(typ, 0)
    if isinstance(typ, Array):
        return Value(typ, [zero_value(typ.element).data] * typ.size)
    return Value(typ, None)


# ============================================================
# CONVERSION
# ============================================================


def _describe(data: object) -> str:
    return type(data).__name__


def _round_float32(x: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", x))[0]
    except OverflowError:
        raise ValueError("constant " + repr(x) + " overflows float32") from None


def _convert_basic(data: object, typ: Basic) -> Value:
    kind = typ.kind
    if kind == "bool":
        if not isinstance(data, bool):
            raise TypeError("cannot use " + _describe(data) + " as bool")
        return Value(typ, data)
    if kind == "string":
        if not isinstance(data, str):
            raise TypeError("cannot use " + _describe(data) + " as string")
        return Value(typ, data)
    if kind in INT_RANGES:
        if isinstance(data, bool) or not isinstance(data, int):
            raise TypeError("cannot use " + _describe(data) + " as " + kind)
        lo, hi = INT_RANGES[kind]
        if data < lo or data > hi:
            raise ValueError("constant " + str(data) + " overflows " + kind)
        return Value(typ, int(data))
    if isinstance(data, bool) or not isinstance(data, (int, float, complex)):
        raise TypeError("cannot use " + _describe(data) + " as " + kind)
    if kind in ("float32", "float64"):
        if isinstance(data, complex):
            raise TypeError("cannot use complex as " + kind)
        x = float(data)
        if kind == "float32":
            x = _round_float32(x)
        return Value(typ, x)
    c = complex(data)
    if kind == "complex64":
        c = complex(_round_float32(c.real), _round_float32(c.imag))
    return Value(typ, c)


def convert(data: object, typ: Type) -> Value:
    """Type data as typ, checking that it fits."""
    if isinstance(data, Value):
        if isinstance(typ, Interface):
            if data.typ is None:
                return Value(typ, None)
            if isinstance(data.typ, Interface):
                return data
            return Value(typ, data)
        if data.typ != typ:
            raise TypeError("cannot use " + repr(data.typ) + " value as " + repr(typ))
        return data
    if isinstance(typ, Interface):
        if data is None:
            return Value(typ, None)
        return Value(typ, value_of(data))
    if isinstance(typ, Basic):
        return _convert_basic(data, typ)
    if isinstance(typ, Opaque):
        return Value(typ, data)
    if data is None:
        if is_nilable(typ):
            return Value(typ, None)
        if isinstance(typ, Struct):
            return Value(typ, None)
        raise TypeError("cannot use nil as " + type(typ).__name__.lower())
    if isinstance(typ, Array):
        if isinstance(data, (str, Mapping)) or not hasattr(data, "__len__"):
            raise TypeError("cannot use " + _describe(data) + " as array")
        if len(data) != typ.size:
            raise ValueError(
                "array of length " + str(typ.size) + " given " + str(len(data)) + " items"
            )
        return Value(typ, data)
    if isinstance(typ, Slice):
        if isinstance(data, (str, Mapping)) or not isinstance(
            data, (list, tuple, bytes, bytearray)
        ):
            raise TypeError("cannot use " + _describe(data) + " as slice")
        return Value(typ, data)
    if isinstance(typ, Map):
        if isinstance(data, Mapping):
            return Value(typ, data)
        if isinstance(data, (set, frozenset)) and typ.value == EMPTY_STRUCT:
            return Value(typ, data)
        raise TypeError("cannot use " + _describe(data) + " as map")
    if isinstance(typ, Struct):
        return Value(typ, data)
    if isinstance(typ, Pointer):
        if isinstance(data, Ref):
            return Value(typ, data)
        return Value(typ, Ref(data))
    raise TypeError("unknown type descriptor " + repr(typ))


# ============================================================
# INFERENCE
# ============================================================


def value_of(x: object) -> Value:
    """Resolve a host value to a typed Value (identity for Values)."""
    if isinstance(x, Value):
        return x
    if x is None:
        return Value(None)
    return convert(x, type_of(x))


def type_of(x: object) -> Type:
    """Infer the Go type of a host value."""
    return _type_of(x, set())


def _type_of(x: object, active: set[int]) -> Type:
    if isinstance(x, Value):
        return x.typ if x.typ is not None else ANY
    if x is None:
        return ANY
    if isinstance(x, bool):
        return BOOL
    if isinstance(x, int):
        return INT
    if isinstance(x, float):
        return FLOAT64
    if isinstance(x, complex):
        return COMPLEX128
    if isinstance(x, str):
        return STRING
    if isinstance(x, (bytes, bytearray)):
        return Slice(UINT8)
    if isinstance(x, memoryview):
        return UNSAFE_POINTER
    if dataclasses.is_dataclass(x) and not isinstance(x, type):
        return struct_of(type(x))
    if isinstance(x, (queue.Queue, asyncio.Queue)):
        return CHAN
    if not isinstance(x, (Ref, list, tuple, Mapping, set, frozenset)):
        if callable(x):
            return FUNC
        return Opaque(type(x).__name__)
    # a container reached again through itself is typed interface{}
    if id(x) in active:
        return ANY
    active.add(id(x))
    try:
        return _container_type(x, active)
    finally:
        active.discard(id(x))


def _container_type(x: object, active: set[int]) -> Type:
    if isinstance(x, Ref):
        return Pointer(_type_of(x.value, active))
    if isinstance(x, list):
        return Slice(_common(x, active))
    if isinstance(x, tuple):
        return Array(_common(x, active), len(x))
    if isinstance(x, Mapping):
        return Map(_common(x.keys(), active), _common(x.values(), active))
    return Map(_common(x, active), EMPTY_STRUCT)


def _common(items: typing.Iterable[object], active: set[int]) -> Type:
    """Shared element type of items; interface{} when empty or mixed."""
    found: Type | None = None
    for item in items:
        t = _type_of(item, active)
        if found is None:
            found = t
        elif t != found:
            return ANY
    if found is None:
        return ANY
    return found


# ============================================================
# DATACLASS STRUCTS
# ============================================================

_FIELD_CACHE: dict[type, tuple[StructField, ...]] = {}


def struct_of(cls: type) -> Struct:
    """Named struct type for a dataclass."""
    if not dataclasses.is_dataclass(cls):
        raise TypeError(cls.__name__ + " is not a dataclass")
    return Struct(name=cls.__name__, cls=cls)


def _dataclass_fields(cls: type) -> tuple[StructField, ...]:
    cached = _FIELD_CACHE.get(cls)
    if cached is not None:
        return cached
    try:
        hints = typing.get_type_hints(cls)
    except NameError:
        hints = {}
    result: list[StructField] = []
    for f in dataclasses.fields(cls):
        hint = hints.get(f.name, f.type)
        result.append(StructField(f.name, type_from_hint(hint), f.metadata.get("go_tag", "")))
    fields = tuple(result)
    _FIELD_CACHE[cls] = fields
    return fields


def type_from_hint(hint: object) -> Type | None:
    """Map a type annotation to a Go type; None when it cannot be mapped."""
    if isinstance(hint, Type):
        return hint
    if hint is bool:
        return BOOL
    if hint is int:
        return INT
    if hint is float:
        return FLOAT64
    if hint is complex:
        return COMPLEX128
    if hint is str:
        return STRING
    if hint is bytes or hint is bytearray:
        return Slice(UINT8)
    if hint is typing.Any or hint is object:
        return ANY
    if isinstance(hint, type) and dataclasses.is_dataclass(hint):
        return struct_of(hint)
    origin = typing.get_origin(hint)
    args = typing.get_args(hint)
    if origin is typing.Union or origin is types.UnionType:
        rest = [a for a in args if a is not type(None)]
        if len(rest) != 1:
            return ANY
        inner = type_from_hint(rest[0])
        if inner is None or is_nilable(inner):
            return inner
        return Pointer(inner)
    if origin is list and len(args) == 1:
        return _wrap(args[0], Slice)
    if origin is dict and len(args) == 2:
        key = type_from_hint(args[0])
        value = type_from_hint(args[1])
        if key is None or value is None:
            return None
        return Map(key, value)
    if origin in (set, frozenset) and len(args) == 1:
        key = type_from_hint(args[0])
        if key is None:
            return None
        return Map(key, EMPTY_STRUCT)
    if origin is tuple and args:
        if len(args) == 2 and args[1] is Ellipsis:
            return _wrap(args[0], Slice)
        elems = [type_from_hint(a) for a in args]
        if any(e is None for e in elems) or any(e != elems[0] for e in elems):
            return None
        return Array(elems[0], len(elems))
    return None


def _wrap(hint: object, ctor: type[Slice]) -> Type | None:
    inner = type_from_hint(hint)
    if inner is None:
        return None
    return ctor(inner)
