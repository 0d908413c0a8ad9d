"""Host types shared by the literal test cases."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from goastgen import INT, STRING, named


@dataclass
class Point:
    X: int = 0
    Y: int = 0


@dataclass
class Node:
    name: str = ""
    ptr: Optional[int] = None


@dataclass
class Link:
    name: str = ""
    next: Optional[Link] = None


@dataclass
class Tagged:
    id: int = 0
    label: str = field(default="", metadata={"go_tag": 'json:"label"'})


@dataclass
class Config:
    name: str = ""
    ports: list[int] = field(default_factory=list)
    limits: dict[str, float] = field(default_factory=dict)
    origin: Point = field(default_factory=Point)


Y = named("y", INT)
Z = named("z", STRING)
