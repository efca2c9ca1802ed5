"""
DijiBill Documents - Template Renderer
========================================
Folds a data context over a parsed template tree to produce markup.

Scoping:
- Top-level tags resolve against the root context.
- Inside {{#each}}, tags resolve against the current element only;
  {{this}} is the element, {{@index}} its 1-based position, {{@key}} the
  entry key when iterating a mapping.
- Conditionals test the root context, also inside {{#each}}; only
  {{#this.x}}, {{#@index}} and {{#@key}} test the current element.

Doctrine:
- Same template + same context -> same output (deterministic).
- Missing fields render empty; blocks on missing fields are dropped.
- No I/O. No exceptions for template content.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from dijibill.config.settings import DEFAULT_SETTINGS, DocumentSettings
from dijibill.documents.context import (
    MISSING,
    DataContext,
    Lookup,
    Nested,
    Scalar,
    Sequence,
    as_context,
    is_truthy,
    to_text,
    walk,
)
from dijibill.documents.nodes import (
    PATH_INDEX,
    PATH_KEY,
    PATH_THIS,
    Loop,
    Node,
    Section,
    Text,
    Variable,
)
from dijibill.documents.parser import parse_template

logger = logging.getLogger("dijibill.documents")


ContextLike = Union[DataContext, Mapping[str, Any], None]


@dataclass(frozen=True)
class _Scope:
    root: Lookup
    current: Lookup
    index: Optional[int] = None
    key: Optional[str] = None


def _resolve(path: tuple[str, ...], scope: _Scope) -> Lookup:
    head = path[0]
    if head == PATH_INDEX:
        return MISSING if scope.index is None or len(path) > 1 else Scalar(scope.index)
    if head == PATH_KEY:
        return MISSING if scope.key is None or len(path) > 1 else Scalar(scope.key)
    if head == PATH_THIS:
        return walk(scope.current, path[1:])
    return walk(scope.current, path)


def _resolve_condition(path: tuple[str, ...], scope: _Scope) -> Lookup:
    if path[0] in (PATH_INDEX, PATH_KEY, PATH_THIS):
        return _resolve(path, scope)
    return walk(scope.root, path)


def _iterate(value: Lookup, root: Lookup):
    if isinstance(value, Sequence):
        for position, item in enumerate(value.items, start=1):
            yield _Scope(root=root, current=item, index=position)
    elif isinstance(value, Nested):
        for position, (key, item) in enumerate(value.fields.items(), start=1):
            yield _Scope(root=root, current=item, index=position, key=key)


def _render_nodes(
    nodes: tuple[Node, ...],
    scope: _Scope,
    out: list[str],
    autoescape: bool,
) -> None:
    for node in nodes:
        if isinstance(node, Text):
            out.append(node.text)
        elif isinstance(node, Variable):
            text = to_text(_resolve(node.path, scope))
            out.append(html.escape(text, quote=True) if autoescape else text)
        elif isinstance(node, Section):
            if is_truthy(_resolve_condition(node.path, scope)):
                _render_nodes(node.children, scope, out, autoescape)
        elif isinstance(node, Loop):
            target = _resolve(node.path, scope)
            if not isinstance(target, (Sequence, Nested)):
                if target is not MISSING:
                    logger.debug(
                        "Loop target %r is not iterable; rendering nothing.",
                        ".".join(node.path),
                    )
                continue
            for item_scope in _iterate(target, scope.root):
                _render_nodes(node.children, item_scope, out, autoescape)


class CompiledTemplate:
    """
    A template parsed once and renderable many times.

    Immutable and safe to share between threads.
    """

    __slots__ = ("_source", "_nodes")

    def __init__(self, source: str):
        self._source = source
        self._nodes = parse_template(source)

    @property
    def source(self) -> str:
        return self._source

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self._nodes

    def render(
        self,
        context: ContextLike = None,
        *,
        autoescape: Optional[bool] = None,
        settings: Optional[DocumentSettings] = None,
    ) -> str:
        if autoescape is None:
            autoescape = (settings or DEFAULT_SETTINGS).templates.autoescape
        data = as_context(context)
        out: list[str] = []
        _render_nodes(self._nodes, _Scope(root=data.root, current=data.root), out, autoescape)
        return "".join(out)


def compile_template(template: str) -> CompiledTemplate:
    return CompiledTemplate(template)


def render(
    template: str,
    context: ContextLike = None,
    *,
    autoescape: Optional[bool] = None,
    settings: Optional[DocumentSettings] = None,
) -> str:
    """
    Render a template string against a data context.

    Args:
        template: stored template content
        context: DataContext or plain mapping
        autoescape: HTML-escape substituted values (default from settings: off)
        settings: optional DocumentSettings

    Returns:
        The rendered markup string.
    """
    return CompiledTemplate(template).render(
        context,
        autoescape=autoescape,
        settings=settings,
    )
