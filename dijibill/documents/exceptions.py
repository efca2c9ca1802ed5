"""
DijiBill Documents - Exceptions
=================================
The renderer itself never raises for missing fields or malformed
directives. These errors cover caller contract violations only.
"""

from __future__ import annotations

from dataclasses import dataclass


class ReasonCode:
    CONTEXT_UNRESOLVED = "CONTEXT_UNRESOLVED"
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"


@dataclass(frozen=True)
class DocumentError(Exception):
    code: str
    message: str

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


@dataclass(frozen=True)
class ContextError(DocumentError, ValueError):
    """A data context holds a value that is not fully resolved (e.g. a callable)."""


@dataclass(frozen=True)
class TemplateNotFoundError(DocumentError):
    """No stored or built-in template exists for a category/type."""
