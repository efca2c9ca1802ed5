"""
DijiBill Documents - Data Context
===================================
Converts a caller-supplied mapping into an immutable, tagged value tree.

Every value is exactly one of:
  Scalar    - str, number, bool, None, or any other leaf (date, Decimal, ...)
  Sequence  - ordered items (from list/tuple), iterable by {{#each}}
  Nested    - named fields (from dict/Mapping), walkable by dotted paths

Lookups never raise. An unknown field yields MISSING, which renders
empty and is falsy.

Doctrine:
- Contexts are fully resolved before rendering: callables and iterators
  are rejected at conversion time.
- Conversion copies; the caller's mapping is never retained or mutated.
"""

from __future__ import annotations

import collections.abc
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Union

from dijibill.documents.exceptions import ContextError, ReasonCode


# ---------------------------------------------------------------------------
# Value variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Scalar:
    value: Any


@dataclass(frozen=True)
class Sequence:
    items: tuple

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class Nested:
    fields: Mapping[str, "Value"]

    def __len__(self) -> int:
        return len(self.fields)

    def get(self, name: str) -> "Lookup":
        return self.fields.get(name, MISSING)


class _Missing:
    _instance: Optional["_Missing"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()

Value = Union[Scalar, Sequence, Nested]
Lookup = Union[Scalar, Sequence, Nested, _Missing]


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------

def to_value(raw: Any, *, path: str = "") -> Value:
    """Convert a plain Python value into the tagged variant tree."""
    if isinstance(raw, (Scalar, Sequence, Nested)):
        return raw
    if isinstance(raw, DataContext):
        return raw.root
    if isinstance(raw, (str, bytes, int, float, Decimal)) or raw is None:
        return Scalar(raw)
    if isinstance(raw, collections.abc.Mapping):
        fields = {}
        for key, item in raw.items():
            name = str(key)
            fields[name] = to_value(item, path=f"{path}.{name}" if path else name)
        return Nested(MappingProxyType(fields))
    if isinstance(raw, (list, tuple)):
        return Sequence(tuple(
            to_value(item, path=f"{path}[{index}]")
            for index, item in enumerate(raw)
        ))
    if callable(raw) or isinstance(raw, collections.abc.Iterator):
        raise ContextError(
            code=ReasonCode.CONTEXT_UNRESOLVED,
            message=(
                f"Context field '{path or '<root>'}' is not resolved "
                f"({type(raw).__name__}); supply a plain value."
            ),
        )
    return Scalar(raw)


# ---------------------------------------------------------------------------
# Formatting and truthiness
# ---------------------------------------------------------------------------

def format_scalar(value: Any) -> str:
    """String form of a leaf value, following how stored templates expect it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def to_text(value: Lookup) -> str:
    if isinstance(value, Scalar):
        return format_scalar(value.value)
    if isinstance(value, Sequence):
        return ",".join(to_text(item) for item in value.items)
    return ""


def is_truthy(value: Lookup) -> bool:
    """
    Conditional test.

    Falsy: missing, None, "", False, empty sequence or mapping.
    Numeric zero and "0"/"0.00" strings are truthy, so a zero VAT amount
    formatted by the caller still renders its block.
    """
    if isinstance(value, Scalar):
        inner = value.value
        if inner is None or inner is False:
            return False
        if isinstance(inner, (str, bytes)) and len(inner) == 0:
            return False
        return True
    if isinstance(value, (Sequence, Nested)):
        return len(value) > 0
    return False


def walk(value: Lookup, parts: tuple[str, ...]) -> Lookup:
    current = value
    for part in parts:
        if not isinstance(current, Nested):
            return MISSING
        current = current.get(part)
    return current


# ---------------------------------------------------------------------------
# DataContext
# ---------------------------------------------------------------------------

class DataContext:
    """
    Immutable render context.

    Usage:
        context = DataContext({"companyName": "Acme", "items": [...]})
        context.get("companyName")        # Scalar("Acme")
        context.get("organization.name")  # dotted path into Nested
    """

    __slots__ = ("_root",)

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        if data is None:
            data = {}
        if isinstance(data, DataContext):
            root = data.root
        elif isinstance(data, Nested):
            root = data
        elif isinstance(data, collections.abc.Mapping):
            root = to_value(data)
        else:
            raise ContextError(
                code=ReasonCode.CONTEXT_UNRESOLVED,
                message="Data context must be a mapping.",
            )
        object.__setattr__(self, "_root", root)

    def __setattr__(self, name, value):
        raise AttributeError("DataContext is immutable.")

    @property
    def root(self) -> Nested:
        return self._root

    def get(self, path: str) -> Lookup:
        return walk(self._root, tuple(path.split(".")))

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not MISSING

    def __iter__(self) -> Iterator[str]:
        return iter(self._root.fields)

    def __len__(self) -> int:
        return len(self._root)

    def with_values(self, values: Mapping[str, Any]) -> "DataContext":
        """Return a new context with top-level fields added or replaced."""
        fields = dict(self._root.fields)
        for key, item in values.items():
            fields[str(key)] = to_value(item, path=str(key))
        return DataContext(Nested(MappingProxyType(fields)))

    def __repr__(self) -> str:
        return f"DataContext(fields={sorted(self._root.fields)})"


def as_context(data: Union[DataContext, Mapping[str, Any], None]) -> DataContext:
    if isinstance(data, DataContext):
        return data
    return DataContext(data)
