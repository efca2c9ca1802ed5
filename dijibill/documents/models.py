"""
DijiBill Documents - Immutable Template Models
================================================
Stored template records and rendered document results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from dijibill.documents.layout import LayoutHints


CATEGORY_RECEIPT = "receipt"
CATEGORY_INVOICE = "invoice"
CATEGORY_QUOTE = "quote"
CATEGORY_REPORT = "report"

VALID_CATEGORIES = frozenset(
    {CATEGORY_RECEIPT, CATEGORY_INVOICE, CATEGORY_QUOTE, CATEGORY_REPORT}
)

TYPE_ENGLISH_THERMAL = "english_thermal"
TYPE_ARABIC_THERMAL = "arabic_thermal"
TYPE_ENGLISH_A4 = "english_a4"
TYPE_ARABIC_A4 = "arabic_a4"
TYPE_ENGLISH = "english"
TYPE_ARABIC = "arabic"
TYPE_THERMAL = "thermal"
TYPE_A4 = "a4"
TYPE_CUSTOM = "custom"

VALID_TEMPLATE_TYPES = frozenset({
    TYPE_ENGLISH_THERMAL,
    TYPE_ARABIC_THERMAL,
    TYPE_ENGLISH_A4,
    TYPE_ARABIC_A4,
    TYPE_ENGLISH,
    TYPE_ARABIC,
    TYPE_THERMAL,
    TYPE_A4,
    TYPE_CUSTOM,
})


def is_arabic_type(template_type: str) -> bool:
    return "arabic" in (template_type or "")


def is_thermal_type(template_type: str) -> bool:
    return "thermal" in (template_type or "")


@dataclass(frozen=True)
class DocumentTemplate:
    """
    A stored template.

    template_type is a format hint for the caller (paper, direction); the
    engine renders every type the same way. Empty content is allowed and
    means "use the built-in default for this type".
    """
    template_id: str
    name: str
    category: str
    template_type: str
    content: str
    is_default: bool = False
    organization_id: Optional[str] = None

    def __post_init__(self):
        if not self.template_id or not isinstance(self.template_id, str):
            raise ValueError("template_id must be a non-empty string.")

        if not isinstance(self.name, str):
            raise ValueError("name must be a string.")

        if self.category not in VALID_CATEGORIES:
            raise ValueError(
                f"category '{self.category}' not valid. "
                f"Must be one of: {sorted(VALID_CATEGORIES)}"
            )

        if self.template_type not in VALID_TEMPLATE_TYPES:
            raise ValueError(
                f"template_type '{self.template_type}' not valid. "
                f"Must be one of: {sorted(VALID_TEMPLATE_TYPES)}"
            )

        if not isinstance(self.content, str):
            raise ValueError("content must be a string.")

        if not isinstance(self.is_default, bool):
            raise ValueError("is_default must be bool.")

        if self.organization_id is not None and (
            not isinstance(self.organization_id, str)
            or not self.organization_id
        ):
            raise ValueError("organization_id must be non-empty string or None.")

    @property
    def is_arabic(self) -> bool:
        return is_arabic_type(self.template_type)

    @property
    def is_thermal(self) -> bool:
        return is_thermal_type(self.template_type)

    def sort_key(self) -> tuple[str, str, str, int, str]:
        return (
            self.organization_id or "",
            self.category,
            self.template_type,
            0 if self.is_default else 1,
            self.template_id,
        )


@dataclass(frozen=True)
class RenderedDocument:
    html: str
    template_id: str
    category: str
    template_type: str
    layout: "LayoutHints"
    qr_payload: Optional[str] = None

    @property
    def has_qr(self) -> bool:
        return self.qr_payload is not None
