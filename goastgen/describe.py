"""Type describer - runtime Type -> Go type expression."""

from __future__ import annotations

from .errors import UnsupportedTypeError
from .ir import (
    ArrayType,
    Expr,
    FieldGroup,
    Ident,
    InterfaceType,
    MapType,
    PointerType,
    SliceType,
    StructType,
    TypeExpr,
    TypeName,
)
from .reflect import Array, Basic, Interface, Map, Opaque, Pointer, Slice, Struct, Type


def build_type(t: Type) -> TypeExpr:
    """Type expression for t. Named types render as their name."""
    if isinstance(t, Basic):
        return TypeName(t.name or t.kind)
    if isinstance(t, Interface):
        if t.name:
            return TypeName(t.name)
        return InterfaceType()
    if isinstance(t, Array):
        if t.name:
            return TypeName(t.name)
        return ArrayType(t.size, build_type(t.element))
    if isinstance(t, Slice):
        if t.name:
            return TypeName(t.name)
        return SliceType(build_type(t.element))
    if isinstance(t, Map):
        if t.name:
            return TypeName(t.name)
        return MapType(build_type(t.key), build_type(t.value))
    if isinstance(t, Struct):
        if t.name:
            return TypeName(t.name)
        return _struct_type(t)
    if isinstance(t, Pointer):
        return PointerType(build_type(t.target))
    if isinstance(t, Opaque):
        raise UnsupportedTypeError(t.kind)
    raise UnsupportedTypeError(type(t).__name__)


def _struct_type(t: Struct) -> StructType:
    """Anonymous struct; consecutive fields sharing type and tag are grouped."""
    groups: list[FieldGroup] = []
    for f in t.field_list():
        ft = build_type(f.typ) if f.typ is not None else InterfaceType()
        if groups and groups[-1].typ == ft and groups[-1].tag == f.tag:
            last = groups[-1]
            groups[-1] = FieldGroup(last.names + (f.name,), ft, f.tag)
            continue
        groups.append(FieldGroup((f.name,), ft, f.tag))
    return StructType(tuple(groups))


def conversion_callee(te: TypeExpr) -> Expr | TypeExpr:
    """Callee for a conversion to te; plain names are ordinary identifiers."""
    if isinstance(te, TypeName):
        return Ident(te.name)
    return te
