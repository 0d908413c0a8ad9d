"""Tests for tree serialization."""

import json

import pytest

from goastgen import Ref, literalize, serialize
from goastgen.ir import BasicLit, ComplexPair, FieldGroup, StructType, TypeName


def test_serialize_scalar() -> None:
    assert serialize(literalize(1)) == {"_type": "BasicLit", "kind": "int", "value": "1"}


def test_serialize_conversion() -> None:
    tree = serialize(literalize(-1 + 2j))
    assert tree["_type"] == "Call"
    assert tree["func"] == {"_type": "Ident", "name": "complex128"}
    assert tree["args"][0]["_type"] == "ComplexPair"
    assert tree["args"][0]["op"] == "+"


def test_serialize_closure_is_json() -> None:
    tree = serialize(literalize([Ref(1)]))
    text = json.dumps(tree)
    assert json.loads(text) == tree
    assert tree["_type"] == "Call"
    assert tree["func"]["_type"] == "FuncLit"
    assert tree["func"]["params"] == [
        {"_type": "Param", "name": "x0", "typ": {"_type": "TypeName", "name": "int"}}
    ]
    assert tree["func"]["result"]["_type"] == "SliceType"


def test_serialize_struct_type() -> None:
    typ = StructType((FieldGroup(("a", "b"), TypeName("int"), "k"),))
    assert serialize(typ) == {
        "_type": "StructType",
        "fields": [
            {
                "_type": "FieldGroup",
                "names": ["a", "b"],
                "typ": {"_type": "TypeName", "name": "int"},
                "tag": "k",
            }
        ],
    }


def test_serialize_complex_pair() -> None:
    pair = ComplexPair(BasicLit("int", "1"), "-", BasicLit("imag", "2i"))
    assert serialize(pair)["imag"] == {"_type": "BasicLit", "kind": "imag", "value": "2i"}


def test_serialize_rejects_unknown() -> None:
    with pytest.raises(TypeError):
        serialize(object())
