"""
Tests - Document Settings
===========================
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from dijibill.config import (
    DEFAULT_SETTINGS,
    DocumentSettings,
    QRSettings,
    SettingsError,
    TemplateSettings,
    ZatcaSettings,
    load_settings,
)


class TestDefaults:
    def test_default_values(self):
        assert DEFAULT_SETTINGS.qr.size == 150
        assert DEFAULT_SETTINGS.qr.error_correction == "M"
        assert DEFAULT_SETTINGS.qr.border == 1
        assert DEFAULT_SETTINGS.zatca.vat_number_fallback == "N/A"
        assert DEFAULT_SETTINGS.zatca.vat_total_fallback == "0.00"
        assert DEFAULT_SETTINGS.templates.autoescape is False

    def test_settings_are_frozen(self):
        with pytest.raises(FrozenInstanceError):
            DEFAULT_SETTINGS.qr.size = 10


class TestValidation:
    @pytest.mark.parametrize("size", [0, 20, "150", True])
    def test_bad_qr_size(self, size):
        with pytest.raises(SettingsError):
            QRSettings(size=size)

    def test_bad_error_correction(self):
        with pytest.raises(SettingsError, match="error_correction"):
            QRSettings(error_correction="m")

    def test_negative_border(self):
        with pytest.raises(SettingsError):
            QRSettings(border=-1)

    def test_empty_fallback(self):
        with pytest.raises(SettingsError):
            ZatcaSettings(vat_number_fallback="")

    def test_autoescape_must_be_bool(self):
        with pytest.raises(SettingsError):
            TemplateSettings(autoescape="yes")

    def test_settings_error_is_value_error(self):
        with pytest.raises(ValueError):
            QRSettings(size=1)


class TestLoadSettings:
    def test_empty_environment_gives_defaults(self):
        assert load_settings({}) == DocumentSettings()

    def test_reads_environment_mapping(self):
        settings = load_settings({
            "DIJIBILL_QR_SIZE": " 300 ",
            "DIJIBILL_QR_ERROR_CORRECTION": "q",
            "DIJIBILL_QR_BORDER": "4",
            "DIJIBILL_ZATCA_VAT_NUMBER_FALLBACK": "-",
            "DIJIBILL_ZATCA_VAT_TOTAL_FALLBACK": "0",
            "DIJIBILL_TEMPLATE_AUTOESCAPE": "Yes",
        })
        assert settings.qr == QRSettings(size=300, error_correction="Q", border=4)
        assert settings.zatca == ZatcaSettings(vat_number_fallback="-", vat_total_fallback="0")
        assert settings.templates.autoescape is True

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("DIJIBILL_QR_SIZE", "180")
        assert load_settings().qr.size == 180

    def test_bad_integer(self):
        with pytest.raises(SettingsError, match="DIJIBILL_QR_SIZE"):
            load_settings({"DIJIBILL_QR_SIZE": "big"})

    def test_bad_flag(self):
        with pytest.raises(SettingsError, match="DIJIBILL_TEMPLATE_AUTOESCAPE"):
            load_settings({"DIJIBILL_TEMPLATE_AUTOESCAPE": "maybe"})
