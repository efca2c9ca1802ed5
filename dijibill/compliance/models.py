"""
DijiBill Compliance - ZATCA Field Models
==========================================
Immutable value types for the Phase 1 ZATCA QR payload.

The tag order is fixed by the authority:
  1 seller name, 2 seller VAT number, 3 timestamp,
  4 invoice total (VAT inclusive), 5 VAT total.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


TAG_SELLER_NAME = 1
TAG_VAT_NUMBER = 2
TAG_TIMESTAMP = 3
TAG_INVOICE_TOTAL = 4
TAG_VAT_TOTAL = 5

ZATCA_TAGS = (
    TAG_SELLER_NAME,
    TAG_VAT_NUMBER,
    TAG_TIMESTAMP,
    TAG_INVOICE_TOTAL,
    TAG_VAT_TOTAL,
)

TAG_NAMES = {
    TAG_SELLER_NAME: "seller_name",
    TAG_VAT_NUMBER: "vat_number",
    TAG_TIMESTAMP: "timestamp",
    TAG_INVOICE_TOTAL: "invoice_total",
    TAG_VAT_TOTAL: "vat_total",
}

MAX_VALUE_BYTES = 255


def _check_optional_str(name: str, value) -> None:
    if value is not None and not isinstance(value, str):
        raise TypeError(f"{name} must be str or None, got {type(value).__name__}.")


@dataclass(frozen=True)
class ZatcaFields:
    """
    The five fields encoded into a ZATCA QR code.

    Amounts are pre-formatted strings (e.g. "100.50"); the encoder does not
    round. Emptiness of mandatory fields is checked at encode time so that a
    partially filled record can still be carried around.
    """
    seller_name: str
    timestamp: str
    invoice_total: str
    vat_number: Optional[str] = None
    vat_total: Optional[str] = None

    def __post_init__(self):
        for name in ("seller_name", "timestamp", "invoice_total", "vat_number", "vat_total"):
            _check_optional_str(name, getattr(self, name))

    @property
    def timestamp_date(self) -> str:
        """Date portion of the timestamp (text before the first space or 'T')."""
        text = self.timestamp or ""
        for separator in (" ", "T"):
            if separator in text:
                text = text.split(separator, 1)[0]
        return text.strip()

    def as_dict(self) -> dict:
        return {
            "seller_name": self.seller_name,
            "vat_number": self.vat_number,
            "timestamp": self.timestamp,
            "invoice_total": self.invoice_total,
            "vat_total": self.vat_total,
        }


@dataclass(frozen=True)
class TLVRecord:
    tag: int
    value: str

    def __post_init__(self):
        if not isinstance(self.tag, int) or not 0 < self.tag < 256:
            raise ValueError(f"tag must be an int in 1..255, got {self.tag!r}.")
        if not isinstance(self.value, str):
            raise ValueError("value must be str.")

    @property
    def name(self) -> str:
        return TAG_NAMES.get(self.tag, f"tag_{self.tag}")

    def encode(self) -> bytes:
        """Encode as [tag][length][utf-8 value]."""
        raw = self.value.encode("utf-8")
        if len(raw) > MAX_VALUE_BYTES:
            raise ValueError(
                f"Tag {self.tag} value is {len(raw)} bytes (max {MAX_VALUE_BYTES})."
            )
        return bytes((self.tag, len(raw))) + raw
