"""
Tests - ZATCA QR Image Generation
===================================
"""

from __future__ import annotations

import base64
import io

import pytest
from PIL import Image

from dijibill.compliance import (
    PNG_DATA_URL_PREFIX,
    ValidationError,
    ZatcaFields,
    encode_zatca_qr_payload,
    generate_zatca_qr_code,
    to_qr_data_url,
    to_qr_image,
)
from dijibill.config import DocumentSettings, QRSettings, SettingsError


FIELDS = ZatcaFields(
    seller_name="Test Company",
    vat_number="1234567890",
    timestamp="2024-01-15 10:30:00",
    invoice_total="100.50",
    vat_total="15.08",
)

PAYLOAD = encode_zatca_qr_payload(FIELDS)


def _open(png: bytes) -> Image.Image:
    return Image.open(io.BytesIO(png))


class TestQRImage:
    def test_png_of_default_size(self):
        png = to_qr_image(PAYLOAD)
        assert png.startswith(b"\x89PNG\r\n\x1a\n")
        image = _open(png)
        assert image.format == "PNG"
        assert image.size == (150, 150)

    def test_custom_size(self):
        assert _open(to_qr_image(PAYLOAD, size=300)).size == (300, 300)

    def test_size_from_settings(self):
        settings = DocumentSettings(qr=QRSettings(size=200))
        assert _open(to_qr_image(PAYLOAD, settings=settings)).size == (200, 200)

    def test_black_on_white_only(self):
        image = _open(to_qr_image(PAYLOAD)).convert("L")
        assert {color for _, color in image.getcolors()} == {0, 255}
        assert image.getpixel((0, 0)) == 255

    def test_output_is_deterministic(self):
        assert to_qr_image(PAYLOAD) == to_qr_image(PAYLOAD)

    @pytest.mark.parametrize("level", ["L", "M", "Q", "H", "h"])
    def test_error_correction_levels(self, level):
        assert _open(to_qr_image(PAYLOAD, error_correction=level)).size == (150, 150)

    def test_unknown_error_correction_is_rejected(self):
        with pytest.raises(SettingsError):
            to_qr_image(PAYLOAD, error_correction="X")

    def test_empty_payload_is_rejected(self):
        with pytest.raises(ValueError):
            to_qr_image("")

    def test_size_smaller_than_symbol_is_rejected(self):
        with pytest.raises(SettingsError, match="too small"):
            to_qr_image(PAYLOAD, size=25)


class TestQRDataURL:
    def test_data_url_wraps_png(self):
        url = to_qr_data_url(PAYLOAD)
        assert url.startswith(PNG_DATA_URL_PREFIX)
        png = base64.b64decode(url[len(PNG_DATA_URL_PREFIX):])
        assert png == to_qr_image(PAYLOAD)

    def test_generate_from_fields(self):
        assert generate_zatca_qr_code(FIELDS) == to_qr_data_url(PAYLOAD)

    def test_generate_propagates_validation(self):
        fields = ZatcaFields(seller_name="Shop", timestamp="", invoice_total="1.00")
        with pytest.raises(ValidationError, match="TIMESTAMP_REQUIRED"):
            generate_zatca_qr_code(fields)
