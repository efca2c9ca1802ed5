"""
DijiBill Compliance - Public API
================================
ZATCA TLV encoding and QR image generation.
"""

from dijibill.compliance.builder import (
    fields_for_invoice,
    fields_for_receipt,
    format_amount,
    format_timestamp,
)
from dijibill.compliance.exceptions import (
    ComplianceError,
    ReasonCode,
    TLVDecodeError,
    ValidationError,
)
from dijibill.compliance.models import (
    TAG_INVOICE_TOTAL,
    TAG_SELLER_NAME,
    TAG_TIMESTAMP,
    TAG_VAT_NUMBER,
    TAG_VAT_TOTAL,
    ZATCA_TAGS,
    TLVRecord,
    ZatcaFields,
)
from dijibill.compliance.qr import (
    PNG_DATA_URL_PREFIX,
    generate_zatca_qr_code,
    to_qr_data_url,
    to_qr_image,
)
from dijibill.compliance.tlv import (
    decode_tlv,
    decode_zatca_fields,
    encode_tlv,
    encode_zatca_qr_payload,
    resolve_zatca_records,
    to_base64,
    validate_zatca_fields,
)

__all__ = [
    "ZatcaFields",
    "TLVRecord",
    "ZATCA_TAGS",
    "TAG_SELLER_NAME",
    "TAG_VAT_NUMBER",
    "TAG_TIMESTAMP",
    "TAG_INVOICE_TOTAL",
    "TAG_VAT_TOTAL",
    "ComplianceError",
    "ValidationError",
    "TLVDecodeError",
    "ReasonCode",
    "validate_zatca_fields",
    "resolve_zatca_records",
    "encode_tlv",
    "to_base64",
    "encode_zatca_qr_payload",
    "decode_tlv",
    "decode_zatca_fields",
    "to_qr_image",
    "to_qr_data_url",
    "generate_zatca_qr_code",
    "PNG_DATA_URL_PREFIX",
    "format_amount",
    "format_timestamp",
    "fields_for_receipt",
    "fields_for_invoice",
]
