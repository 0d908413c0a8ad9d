"""Map key orderer - deterministic entry order for map literals.

Host iteration order says nothing about Go map order, so entries are sorted
by the rendered text of their keys. Map keys are unique, so no two entries
render the same key text.
"""

from __future__ import annotations

from typing import TypeVar

from .emit import render
from .ir import Expr, KeyValue

T = TypeVar("T")


def order(pairs: list[tuple[Expr, T]]) -> list[tuple[Expr, T]]:
    """Sort (key expression, payload) pairs by rendered key text."""
    keyed = [(render(key), key, payload) for key, payload in pairs]
    keyed.sort(key=lambda entry: entry[0])
    return [(key, payload) for _, key, payload in keyed]


def order_entries(entries: list[KeyValue]) -> list[KeyValue]:
    """Sort KeyValue nodes by rendered key text."""
    return [kv for _, kv in order([(kv.key, kv) for kv in entries])]
