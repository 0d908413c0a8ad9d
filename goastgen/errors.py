"""Errors raised while turning a value into a Go literal."""

from __future__ import annotations


class GoAstGenError(Exception):
    """Base error for literal generation."""

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg


class UnsupportedTypeError(GoAstGenError):
    """Value has no literal form (func, chan, unsafe.Pointer, host objects)."""

    def __init__(self, kind: str):
        super().__init__("unexpected type: " + kind)
        self.kind = kind


class DepthExceededError(GoAstGenError):
    """Value nesting is deeper than the configured ceiling."""

    def __init__(self, limit: int):
        super().__init__("value nesting exceeds max depth " + str(limit))
        self.limit = limit


class CyclicValueError(GoAstGenError):
    """Value contains itself through a pointer or container."""

    def __init__(self, kind: str):
        super().__init__("cyclic value: " + kind + " refers back to itself")
        self.kind = kind
