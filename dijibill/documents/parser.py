"""
DijiBill Documents - Template Parser
======================================
Parses a stored template string into an immutable node tree, once.

Recognised tags:
  {{field}} {{ field }} {{a.b}} {{this}} {{this.x}} {{@index}} {{@key}}
  {{#field}} ... {{/field}}
  {{#if field}} ... {{/if}}
  {{#each field}} ... {{/each}}

Malformed input never fails the parse:
- an opening tag without its closing tag stays as literal text and its
  body is parsed as ordinary content of the enclosing block;
- a closing tag with no matching opener stays as literal text;
- a {{...}} whose body is not a valid name stays as literal text;
- {{#each}} or {{#if}} without a target stays as literal text;
- an opener nested deeper than MAX_NESTING_DEPTH stays as literal text.
Each case is logged as a warning with the line number.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from dijibill.documents.nodes import (
    PATH_INDEX,
    PATH_KEY,
    Loop,
    Node,
    Section,
    Text,
    Variable,
)

logger = logging.getLogger("dijibill.documents")


_TAG_RE = re.compile(r"\{\{([^{}]*)\}\}")
_IDENT = r"[A-Za-z_][A-Za-z0-9_]*"
_PATH_RE = re.compile(
    rf"(?:{PATH_INDEX}|{PATH_KEY}|{_IDENT}(?:\.{_IDENT})*)"
)
_KEYWORD_RE = re.compile(r"(each|if)\s+(.+)", re.DOTALL)

_CLOSE_EACH = "each"
_CLOSE_IF = "if"

MAX_NESTING_DEPTH = 64


@dataclass
class _Frame:
    kind: str                       # root | section | loop
    path: tuple[str, ...]
    raw_open: str
    close_name: str
    line: int
    children: list = field(default_factory=list)


def _parse_path(text: str) -> Optional[tuple[str, ...]]:
    candidate = text.strip()
    if not _PATH_RE.fullmatch(candidate):
        return None
    return tuple(candidate.split("."))


def _coalesce(nodes: list) -> tuple[Node, ...]:
    merged: list[Node] = []
    for node in nodes:
        if isinstance(node, Text):
            if not node.text:
                continue
            if merged and isinstance(merged[-1], Text):
                merged[-1] = Text(merged[-1].text + node.text)
                continue
        merged.append(node)
    return tuple(merged)


def _close_frame(frame: _Frame, raw_close: str) -> Node:
    children = _coalesce(frame.children)
    if frame.kind == "loop":
        return Loop(
            path=frame.path,
            children=children,
            raw_open=frame.raw_open,
            raw_close=raw_close,
        )
    return Section(
        path=frame.path,
        children=children,
        raw_open=frame.raw_open,
        raw_close=raw_close,
    )


def _unwind_unterminated(frame: _Frame, parent: _Frame) -> None:
    logger.warning(
        "Unterminated template directive %r opened on line %d; "
        "keeping it as literal text.",
        frame.raw_open,
        frame.line,
    )
    parent.children.append(Text(frame.raw_open))
    parent.children.extend(frame.children)


def parse_template(source: str) -> tuple[Node, ...]:
    """
    Parse template source into a tuple of nodes.

    Never raises for template content; raises TypeError only when
    source is not a string.
    """
    if not isinstance(source, str):
        raise TypeError("template must be a string.")

    root = _Frame(kind="root", path=(), raw_open="", close_name="", line=1)
    stack: list[_Frame] = [root]
    position = 0
    line = 1
    counted = 0

    for match in _TAG_RE.finditer(source):
        start, end = match.span()
        if start > position:
            stack[-1].children.append(Text(source[position:start]))
        position = end

        raw = match.group(0)
        body = match.group(1).strip()
        line += source.count("\n", counted, start)
        counted = start

        if body.startswith("#"):
            opener = body[1:].strip()
            keyword = _KEYWORD_RE.fullmatch(opener)
            if keyword is not None:
                kind = "loop" if keyword.group(1) == _CLOSE_EACH else "section"
                close_name = keyword.group(1)
                path = _parse_path(keyword.group(2))
            elif opener in (_CLOSE_EACH, _CLOSE_IF):
                kind = "section"
                close_name = opener
                path = None
            else:
                kind = "section"
                close_name = opener
                path = _parse_path(opener)
            if path is None:
                logger.warning(
                    "Invalid template directive %r on line %d; keeping it as literal text.",
                    raw,
                    line,
                )
                stack[-1].children.append(Text(raw))
                continue
            if len(stack) > MAX_NESTING_DEPTH:
                logger.warning(
                    "Template directive %r on line %d nests deeper than %d levels; "
                    "keeping it as literal text.",
                    raw,
                    line,
                    MAX_NESTING_DEPTH,
                )
                stack[-1].children.append(Text(raw))
                continue
            stack.append(_Frame(
                kind=kind,
                path=path,
                raw_open=raw,
                close_name=close_name,
                line=line,
            ))
            continue

        if body.startswith("/"):
            name = body[1:].strip()
            depth = None
            for index in range(len(stack) - 1, 0, -1):
                if stack[index].close_name == name:
                    depth = index
                    break
            if depth is None:
                logger.warning(
                    "Closing template directive %r on line %d has no opener; "
                    "keeping it as literal text.",
                    raw,
                    line,
                )
                stack[-1].children.append(Text(raw))
                continue
            while len(stack) - 1 > depth:
                frame = stack.pop()
                _unwind_unterminated(frame, stack[-1])
            frame = stack.pop()
            stack[-1].children.append(_close_frame(frame, raw))
            continue

        path = _parse_path(body)
        if path is None:
            logger.warning(
                "Invalid template tag %r on line %d; keeping it as literal text.",
                raw,
                line,
            )
            stack[-1].children.append(Text(raw))
            continue
        stack[-1].children.append(Variable(path=path, raw=raw))

    if position < len(source):
        stack[-1].children.append(Text(source[position:]))

    while len(stack) > 1:
        frame = stack.pop()
        _unwind_unterminated(frame, stack[-1])

    return _coalesce(root.children)
