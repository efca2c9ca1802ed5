"""
DijiBill Compliance - ZATCA Field Builders
============================================
Builds ZatcaFields from plain order/invoice and organization records
(mappings as stored by the application, camelCase keys).

Amounts are formatted to two decimals here, once, so the encoder can
trust its input verbatim.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from dijibill.compliance.models import ZatcaFields

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_CENTS = Decimal("0.01")


def format_amount(value: Any) -> str:
    """
    Fixed two-decimal string for an amount ("100.5" -> "100.50").

    None and "" give "" so that a missing total is caught by validation
    rather than silently encoded as zero.
    """
    if value is None or value == "":
        return ""
    if isinstance(value, bool):
        raise TypeError("amount must be numeric, not bool.")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"amount {value!r} is not a number.") from None
    if not amount.is_finite():
        raise ValueError(f"amount {value!r} is not finite.")
    try:
        return str(amount.quantize(_CENTS, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise ValueError(f"amount {value!r} is out of range.") from None


def format_timestamp(value: Any) -> str:
    """
    Render a record timestamp as 'YYYY-MM-DD HH:MM:SS'.

    Accepts datetime, date, or an ISO 8601 string. Strings that do not
    parse are returned stripped, unchanged.
    """
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime(TIMESTAMP_FORMAT)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day).strftime(TIMESTAMP_FORMAT)
    text = str(value).strip()
    if not text:
        return ""
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return text
    return parsed.strftime(TIMESTAMP_FORMAT)


def _first(record: Optional[Mapping[str, Any]], *keys: str) -> Any:
    if not record:
        return None
    for key in keys:
        value = record.get(key)
        if value is not None and value != "":
            return value
    return None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _build_fields(
    record: Mapping[str, Any],
    organization: Optional[Mapping[str, Any]],
    *,
    vat_default: Any,
) -> ZatcaFields:
    if not isinstance(record, Mapping):
        raise TypeError("record must be a mapping.")

    vat_amount = _first(record, "taxAmount", "tax_amount", "vatAmount")
    if vat_amount is None:
        vat_amount = vat_default

    return ZatcaFields(
        seller_name=_text(_first(organization, "name")),
        vat_number=_text(_first(organization, "vatNumber", "vat_number")) or None,
        timestamp=format_timestamp(_first(record, "createdAt", "created_at")),
        invoice_total=format_amount(_first(record, "total")),
        vat_total=format_amount(vat_amount) or None,
    )


def fields_for_receipt(
    order: Mapping[str, Any],
    organization: Optional[Mapping[str, Any]],
) -> ZatcaFields:
    """ZATCA fields for a POS order receipt. A missing tax amount counts as 0.00."""
    return _build_fields(order, organization, vat_default=0)


def fields_for_invoice(
    invoice: Mapping[str, Any],
    organization: Optional[Mapping[str, Any]],
) -> ZatcaFields:
    """ZATCA fields for a sales invoice. A missing tax amount uses the VAT fallback."""
    return _build_fields(invoice, organization, vat_default=None)
