"""
DijiBill Documents - Template Nodes
=====================================
Immutable tree produced by the parser and folded by the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

PATH_INDEX = "@index"
PATH_KEY = "@key"
PATH_THIS = "this"


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Variable:
    """{{path}} substitution. path is the dotted name split into parts."""
    path: tuple[str, ...]
    raw: str


@dataclass(frozen=True)
class Section:
    """{{#name}}...{{/name}} or {{#if name}}...{{/if}} conditional block."""
    path: tuple[str, ...]
    children: tuple["Node", ...]
    raw_open: str
    raw_close: str


@dataclass(frozen=True)
class Loop:
    """{{#each name}}...{{/each}} iteration block."""
    path: tuple[str, ...]
    children: tuple["Node", ...]
    raw_open: str
    raw_close: str


Node = Union[Text, Variable, Section, Loop]
