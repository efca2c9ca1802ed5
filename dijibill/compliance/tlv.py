"""
DijiBill Compliance - ZATCA TLV Codec
=======================================
Encodes ZatcaFields into the Tag-Length-Value byte payload mandated for
e-invoice QR codes, and decodes such payloads back.

Wire format (per record, five records in fixed tag order):
  TAG(1 byte) LEN(1 byte) VALUE(LEN bytes, UTF-8)

Doctrine:
- Same fields -> same bytes (deterministic).
- LEN is the UTF-8 byte count, never the character count.
- Values over 255 bytes are rejected, never truncated.
- The document-facing artifact is base64 of the raw bytes, not hex.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Optional, Union

from dijibill.compliance.exceptions import (
    ReasonCode,
    TLVDecodeError,
    ValidationError,
)
from dijibill.compliance.models import (
    MAX_VALUE_BYTES,
    TAG_INVOICE_TOTAL,
    TAG_SELLER_NAME,
    TAG_TIMESTAMP,
    TAG_VAT_NUMBER,
    TAG_VAT_TOTAL,
    TLVRecord,
    ZatcaFields,
)
from dijibill.config.settings import DEFAULT_SETTINGS, DocumentSettings

logger = logging.getLogger("dijibill.compliance")


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_zatca_fields(fields: ZatcaFields) -> None:
    """
    Reject fields that cannot produce a compliant payload.

    Raises ValidationError for an empty seller name, an empty timestamp
    date portion or an empty invoice total. VAT number and VAT total are
    optional here; they fall back to placeholders at encode time.
    """
    if not isinstance(fields, ZatcaFields):
        raise TypeError("fields must be ZatcaFields.")

    if _is_blank(fields.seller_name):
        raise ValidationError(
            ReasonCode.SELLER_NAME_REQUIRED,
            "Seller name is required for the ZATCA QR code.",
            field_name="seller_name",
        )
    if not fields.timestamp_date:
        raise ValidationError(
            ReasonCode.TIMESTAMP_REQUIRED,
            "Invoice date is required for the ZATCA QR code.",
            field_name="timestamp",
        )
    if _is_blank(fields.invoice_total):
        raise ValidationError(
            ReasonCode.INVOICE_TOTAL_REQUIRED,
            "Invoice total is required for the ZATCA QR code.",
            field_name="invoice_total",
        )


def resolve_zatca_records(
    fields: ZatcaFields,
    *,
    settings: Optional[DocumentSettings] = None,
) -> tuple[TLVRecord, ...]:
    """Validate fields and return the five records in tag order, fallbacks applied."""
    settings = settings or DEFAULT_SETTINGS
    validate_zatca_fields(fields)

    vat_number = fields.vat_number
    if _is_blank(vat_number):
        logger.debug("ZATCA VAT number empty; using fallback placeholder.")
        vat_number = settings.zatca.vat_number_fallback

    vat_total = fields.vat_total
    if _is_blank(vat_total):
        logger.debug("ZATCA VAT total empty; using fallback placeholder.")
        vat_total = settings.zatca.vat_total_fallback

    records = (
        TLVRecord(TAG_SELLER_NAME, fields.seller_name),
        TLVRecord(TAG_VAT_NUMBER, vat_number),
        TLVRecord(TAG_TIMESTAMP, fields.timestamp),
        TLVRecord(TAG_INVOICE_TOTAL, fields.invoice_total),
        TLVRecord(TAG_VAT_TOTAL, vat_total),
    )

    for record in records:
        size = len(record.value.encode("utf-8"))
        if size > MAX_VALUE_BYTES:
            raise ValidationError(
                ReasonCode.VALUE_TOO_LONG,
                f"ZATCA field '{record.name}' is {size} bytes "
                f"(max {MAX_VALUE_BYTES}).",
                field_name=record.name,
            )
    return records


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def encode_tlv(
    fields: ZatcaFields,
    *,
    settings: Optional[DocumentSettings] = None,
) -> bytes:
    """Encode fields into the raw TLV byte payload."""
    records = resolve_zatca_records(fields, settings=settings)
    return b"".join(record.encode() for record in records)


def to_base64(payload: bytes) -> str:
    """Standard, padded base64 of the raw TLV bytes."""
    if not isinstance(payload, (bytes, bytearray)):
        raise TypeError("payload must be bytes.")
    return base64.b64encode(bytes(payload)).decode("ascii")


def encode_zatca_qr_payload(
    fields: ZatcaFields,
    *,
    settings: Optional[DocumentSettings] = None,
) -> str:
    """The literal string to place inside the QR symbol."""
    return to_base64(encode_tlv(fields, settings=settings))


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def _as_bytes(payload: Union[bytes, bytearray, str]) -> bytes:
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload)
    if isinstance(payload, str):
        try:
            return base64.b64decode(payload.strip(), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise TLVDecodeError(f"Payload is not valid base64: {exc}") from exc
    raise TypeError("payload must be bytes or a base64 string.")


def decode_tlv(payload: Union[bytes, bytearray, str]) -> tuple[TLVRecord, ...]:
    """
    Split a TLV payload into records, in wire order.

    Accepts raw bytes or the base64 string carried by the QR code.
    Raises TLVDecodeError when a record header or value is truncated, or
    a value is not valid UTF-8.
    """
    data = _as_bytes(payload)
    records: list[TLVRecord] = []
    position = 0
    while position < len(data):
        if position + 2 > len(data):
            raise TLVDecodeError(
                f"Truncated TLV header at byte {position}.",
                position=position,
            )
        tag = data[position]
        length = data[position + 1]
        start = position + 2
        end = start + length
        if end > len(data):
            raise TLVDecodeError(
                f"Tag {tag} declares {length} bytes but only "
                f"{len(data) - start} remain.",
                position=position,
            )
        if tag == 0:
            raise TLVDecodeError(f"Invalid tag 0 at byte {position}.", position=position)
        try:
            value = data[start:end].decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TLVDecodeError(
                f"Tag {tag} value is not valid UTF-8.",
                position=position,
            ) from exc
        records.append(TLVRecord(tag, value))
        position = end
    return tuple(records)


def decode_zatca_fields(payload: Union[bytes, bytearray, str]) -> ZatcaFields:
    """Decode a payload into ZatcaFields. Unknown tags are ignored."""
    values = {record.tag: record.value for record in decode_tlv(payload)}
    missing = [
        tag
        for tag in (TAG_SELLER_NAME, TAG_TIMESTAMP, TAG_INVOICE_TOTAL)
        if tag not in values
    ]
    if missing:
        raise TLVDecodeError(
            f"Payload is missing mandatory tag(s): {', '.join(str(t) for t in missing)}."
        )
    return ZatcaFields(
        seller_name=values[TAG_SELLER_NAME],
        vat_number=values.get(TAG_VAT_NUMBER),
        timestamp=values[TAG_TIMESTAMP],
        invoice_total=values[TAG_INVOICE_TOTAL],
        vat_total=values.get(TAG_VAT_TOTAL),
    )
