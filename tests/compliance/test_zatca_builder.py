"""
Tests - ZATCA Field Builders
==============================
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from dijibill.compliance import (
    ZatcaFields,
    decode_zatca_fields,
    encode_zatca_qr_payload,
    fields_for_invoice,
    fields_for_receipt,
    format_amount,
    format_timestamp,
)


ORGANIZATION = {"name": "Test Company", "vatNumber": "1234567890"}


class TestFormatAmount:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (100.5, "100.50"),
            ("15.075", "15.08"),
            (Decimal("2.345"), "2.35"),
            (7, "7.00"),
            (0, "0.00"),
            ("  42 ", "42.00"),
        ],
    )
    def test_two_decimals_half_up(self, value, expected):
        assert format_amount(value) == expected

    def test_missing_is_empty(self):
        assert format_amount(None) == ""
        assert format_amount("") == ""

    def test_bool_is_rejected(self):
        with pytest.raises(TypeError):
            format_amount(True)

    @pytest.mark.parametrize("value", ["abc", float("nan"), "Infinity"])
    def test_non_numbers_are_rejected(self, value):
        with pytest.raises(ValueError):
            format_amount(value)

    def test_amount_past_decimal_precision_is_rejected(self):
        with pytest.raises(ValueError, match="out of range"):
            format_amount("1" + "0" * 30)


class TestFormatTimestamp:
    def test_datetime(self):
        assert format_timestamp(datetime(2024, 1, 15, 10, 30)) == "2024-01-15 10:30:00"

    def test_date(self):
        assert format_timestamp(date(2024, 1, 15)) == "2024-01-15 00:00:00"

    def test_iso_string_with_zulu(self):
        assert format_timestamp("2024-01-15T10:30:00Z") == "2024-01-15 10:30:00"

    def test_unparseable_string_is_kept(self):
        assert format_timestamp(" 15/01/2024 ") == "15/01/2024"

    def test_missing(self):
        assert format_timestamp(None) == ""


class TestFieldsForRecords:
    def test_receipt(self):
        order = {
            "createdAt": datetime(2024, 1, 15, 10, 30),
            "total": 100.5,
            "taxAmount": 15.075,
        }
        fields = fields_for_receipt(order, ORGANIZATION)
        assert fields == ZatcaFields(
            seller_name="Test Company",
            vat_number="1234567890",
            timestamp="2024-01-15 10:30:00",
            invoice_total="100.50",
            vat_total="15.08",
        )

    def test_receipt_without_tax_counts_zero(self):
        fields = fields_for_receipt(
            {"createdAt": "2024-01-15T10:30:00", "total": "10"},
            ORGANIZATION,
        )
        assert fields.vat_total == "0.00"

    def test_invoice_without_tax_uses_fallback(self):
        fields = fields_for_invoice(
            {"created_at": "2024-01-15T10:30:00", "total": "10", "vatAmount": None},
            {"name": "Shop"},
        )
        assert fields.vat_total is None
        assert fields.vat_number is None
        decoded = decode_zatca_fields(encode_zatca_qr_payload(fields))
        assert decoded.vat_number == "N/A"
        assert decoded.vat_total == "0.00"

    def test_missing_organization_gives_empty_seller(self):
        fields = fields_for_invoice({"createdAt": "2024-01-15", "total": 1}, None)
        assert fields.seller_name == ""

    def test_record_must_be_mapping(self):
        with pytest.raises(TypeError):
            fields_for_receipt(["total"], ORGANIZATION)
