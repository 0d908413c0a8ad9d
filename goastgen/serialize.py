"""Serialization of Go expression trees to JSON-compatible dicts."""

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
    Param,
    PointerType,
    Selector,
    SliceType,
    StructType,
    TypeExpr,
    TypeName,
    UnaryRef,
)


def serialize(obj: object) -> object:
    """Recursively serialize an object to a JSON-compatible structure."""
    if obj is None:
        return None
    if isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, (list, tuple)):
        return [serialize(x) for x in obj]
    if isinstance(obj, dict):
        return {str(k): serialize(v) for k, v in obj.items()}
    return _ir_serialize(obj)


def _ir_serialize(obj: object) -> object:
    """Serialize IR nodes via isinstance dispatch."""
    if isinstance(obj, TypeExpr):
        return _serialize_type(obj)
    if isinstance(obj, Expr):
        return _serialize_expr(obj)
    if isinstance(obj, FieldGroup):
        return {
            "_type": "FieldGroup",
            "names": serialize(obj.names),
            "typ": serialize(obj.typ),
            "tag": obj.tag,
        }
    if isinstance(obj, Param):
        return {"_type": "Param", "name": obj.name, "typ": serialize(obj.typ)}
    raise TypeError("cannot serialize " + type(obj).__name__)


def _serialize_type(typ: TypeExpr) -> dict[str, object]:
    if isinstance(typ, TypeName):
        return {"_type": "TypeName", "name": typ.name}
    if isinstance(typ, ArrayType):
        return {"_type": "ArrayType", "length": typ.length, "element": serialize(typ.element)}
    if isinstance(typ, SliceType):
        return {"_type": "SliceType", "element": serialize(typ.element)}
    if isinstance(typ, MapType):
        return {"_type": "MapType", "key": serialize(typ.key), "value": serialize(typ.value)}
    if isinstance(typ, PointerType):
        return {"_type": "PointerType", "target": serialize(typ.target)}
    if isinstance(typ, StructType):
        return {"_type": "StructType", "fields": serialize(typ.fields)}
    if isinstance(typ, InterfaceType):
        return {"_type": "InterfaceType"}
    raise TypeError("cannot serialize type " + type(typ).__name__)


def _serialize_expr(expr: Expr) -> dict[str, object]:
    if isinstance(expr, Ident):
        return {"_type": "Ident", "name": expr.name}
    if isinstance(expr, BasicLit):
        return {"_type": "BasicLit", "kind": expr.kind, "value": expr.value}
    if isinstance(expr, ComplexPair):
        return {
            "_type": "ComplexPair",
            "real": serialize(expr.real),
            "op": expr.op,
            "imag": serialize(expr.imag),
        }
    if isinstance(expr, KeyValue):
        return {"_type": "KeyValue", "key": serialize(expr.key), "value": serialize(expr.value)}
    if isinstance(expr, CompositeLit):
        return {
            "_type": "CompositeLit",
            "typ": serialize(expr.typ),
            "elements": serialize(expr.elements),
        }
    if isinstance(expr, UnaryRef):
        return {"_type": "UnaryRef", "operand": serialize(expr.operand)}
    if isinstance(expr, Selector):
        return {"_type": "Selector", "x": serialize(expr.x), "sel": expr.sel}
    if isinstance(expr, Call):
        return {"_type": "Call", "func": serialize(expr.func), "args": serialize(expr.args)}
    if isinstance(expr, FuncLit):
        return {
            "_type": "FuncLit",
            "params": serialize(expr.params),
            "result": serialize(expr.result),
            "body": serialize(expr.body),
        }
    raise TypeError("cannot serialize expression " + type(expr).__name__)
