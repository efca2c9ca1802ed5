"""
Tests - ZATCA TLV Encoding and Decoding
=========================================
"""

from __future__ import annotations

import base64

import pytest

from dijibill.compliance import (
    ComplianceError,
    TLVDecodeError,
    TLVRecord,
    ValidationError,
    ZatcaFields,
    decode_tlv,
    decode_zatca_fields,
    encode_tlv,
    encode_zatca_qr_payload,
    to_base64,
)
from dijibill.config import DocumentSettings, ZatcaSettings


FIELDS = ZatcaFields(
    seller_name="Test Company",
    vat_number="1234567890",
    timestamp="2024-01-15 10:30:00",
    invoice_total="100.50",
    vat_total="15.08",
)

EXPECTED_TLV = (
    b"\x01\x0cTest Company"
    b"\x02\x0a1234567890"
    b"\x03\x132024-01-15 10:30:00"
    b"\x04\x06100.50"
    b"\x05\x0515.08"
)

EXPECTED_BASE64 = (
    "AQxUZXN0IENvbXBhbnkCCjEyMzQ1Njc4OTADEzIwMjQtMDEtMTUgMTA6MzA6MDAEBjEwMC41MAUFMTUuMDg="
)


class TestEncodeTLV:
    def test_fixed_scenario_bytes(self):
        assert encode_tlv(FIELDS) == EXPECTED_TLV

    def test_header_bytes(self):
        payload = encode_tlv(FIELDS)
        assert payload[:2] == bytes([0x01, 0x0C])
        assert payload[2:14] == b"Test Company"
        assert payload[14:16] == bytes([0x02, 0x0A])

    def test_encoding_is_deterministic(self):
        assert encode_tlv(FIELDS) == encode_tlv(FIELDS)
        assert encode_zatca_qr_payload(FIELDS) == encode_zatca_qr_payload(FIELDS)

    def test_base64_payload(self):
        payload = encode_zatca_qr_payload(FIELDS)
        assert payload == EXPECTED_BASE64
        assert base64.b64decode(payload) == EXPECTED_TLV

    def test_length_is_utf8_byte_count(self):
        fields = ZatcaFields(
            seller_name="شركة",
            timestamp="2024-01-15 10:30:00",
            invoice_total="1.00",
        )
        payload = encode_tlv(fields)
        assert payload[:2] == bytes([0x01, 0x08])
        assert payload[2:10].decode("utf-8") == "شركة"

    def test_optional_fields_fall_back_to_placeholders(self):
        fields = ZatcaFields(
            seller_name="Shop",
            timestamp="2024-01-15 10:30:00",
            invoice_total="10.00",
        )
        records = decode_tlv(encode_tlv(fields))
        assert [record.tag for record in records] == [1, 2, 3, 4, 5]
        assert records[1].value == "N/A"
        assert records[4].value == "0.00"

    def test_blank_optional_fields_use_configured_placeholders(self):
        settings = DocumentSettings(
            zatca=ZatcaSettings(vat_number_fallback="-", vat_total_fallback="0")
        )
        fields = ZatcaFields(
            seller_name="Shop",
            vat_number=" ",
            timestamp="2024-01-15 10:30:00",
            invoice_total="10.00",
            vat_total="",
        )
        records = decode_tlv(encode_tlv(fields, settings=settings))
        assert records[1].value == "-"
        assert records[4].value == "0"

    def test_value_at_limit_is_encoded(self):
        fields = ZatcaFields(
            seller_name="x" * 255,
            timestamp="2024-01-15 10:30:00",
            invoice_total="1.00",
        )
        assert encode_tlv(fields)[:2] == bytes([0x01, 0xFF])

    def test_value_over_limit_is_rejected(self):
        fields = ZatcaFields(
            seller_name="x" * 256,
            timestamp="2024-01-15 10:30:00",
            invoice_total="1.00",
        )
        with pytest.raises(ValidationError, match="VALUE_TOO_LONG") as exc_info:
            encode_tlv(fields)
        assert exc_info.value.field_name == "seller_name"

    def test_non_fields_are_rejected(self):
        with pytest.raises(TypeError):
            encode_tlv({"seller_name": "Shop"})

    def test_to_base64_requires_bytes(self):
        with pytest.raises(TypeError):
            to_base64("abc")
        assert to_base64(b"\x01\x02") == "AQI="


class TestValidation:
    @pytest.mark.parametrize(
        "overrides, code",
        [
            ({"seller_name": ""}, "SELLER_NAME_REQUIRED"),
            ({"seller_name": "   "}, "SELLER_NAME_REQUIRED"),
            ({"timestamp": ""}, "TIMESTAMP_REQUIRED"),
            ({"timestamp": " 10:30:00"}, "TIMESTAMP_REQUIRED"),
            ({"invoice_total": ""}, "INVOICE_TOTAL_REQUIRED"),
        ],
    )
    def test_mandatory_fields(self, overrides, code):
        values = FIELDS.as_dict()
        values.update(overrides)
        with pytest.raises(ValidationError) as exc_info:
            encode_tlv(ZatcaFields(**values))
        assert exc_info.value.code == code
        assert str(exc_info.value).startswith(f"[{code}]")

    def test_missing_vat_fields_do_not_raise(self):
        values = FIELDS.as_dict()
        values.update(vat_number=None, vat_total=None)
        assert encode_tlv(ZatcaFields(**values))

    def test_validation_error_is_compliance_error(self):
        with pytest.raises(ComplianceError):
            encode_tlv(ZatcaFields(seller_name="", timestamp="", invoice_total=""))

    def test_iso_timestamp_date_portion(self):
        fields = ZatcaFields(
            seller_name="Shop",
            timestamp="2024-01-15T10:30:00Z",
            invoice_total="1.00",
        )
        assert fields.timestamp_date == "2024-01-15"

    def test_non_string_values_are_rejected(self):
        with pytest.raises(TypeError, match="invoice_total"):
            ZatcaFields(seller_name="Shop", timestamp="2024-01-15", invoice_total=10.5)


class TestDecodeTLV:
    def test_round_trip(self):
        assert decode_zatca_fields(encode_zatca_qr_payload(FIELDS)) == FIELDS

    def test_decode_from_raw_bytes(self):
        records = decode_tlv(EXPECTED_TLV)
        assert records[0] == TLVRecord(1, "Test Company")
        assert records[0].name == "seller_name"
        assert b"".join(record.encode() for record in records) == EXPECTED_TLV

    def test_empty_payload_has_no_records(self):
        assert decode_tlv(b"") == ()

    @pytest.mark.parametrize(
        "payload",
        [
            b"\x01",
            b"\x01\x05abc",
            b"\x00\x01a",
            b"\x01\x01\xff",
        ],
    )
    def test_malformed_payloads(self, payload):
        with pytest.raises(TLVDecodeError, match="TLV_MALFORMED"):
            decode_tlv(payload)

    def test_truncation_reports_position(self):
        with pytest.raises(TLVDecodeError) as exc_info:
            decode_tlv(b"\x01\x01a\x02\x09short")
        assert exc_info.value.position == 3

    def test_invalid_base64(self):
        with pytest.raises(TLVDecodeError, match="base64"):
            decode_tlv("not base64!!")

    def test_missing_mandatory_tags(self):
        with pytest.raises(TLVDecodeError, match="mandatory"):
            decode_zatca_fields(b"\x01\x04Shop")


class TestTLVRecord:
    def test_encode(self):
        assert TLVRecord(4, "100.50").encode() == b"\x04\x06100.50"

    def test_rejects_invalid_tag(self):
        with pytest.raises(ValueError):
            TLVRecord(0, "x")
        with pytest.raises(ValueError):
            TLVRecord(256, "x")
