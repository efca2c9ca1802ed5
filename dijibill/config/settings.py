"""
DijiBill Config - Document Generation Settings
================================================
Operator-configurable knobs for template rendering and compliance QR codes.

Doctrine:
- Settings are immutable once built.
- Invalid values fail fast at construction, never at render time.
- Environment is read only by load_settings(); engines receive settings
  explicitly and never touch os.environ.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

logger = logging.getLogger("dijibill.config")


ERROR_CORRECTION_LEVELS = frozenset({"L", "M", "Q", "H"})

ENV_QR_SIZE = "DIJIBILL_QR_SIZE"
ENV_QR_ERROR_CORRECTION = "DIJIBILL_QR_ERROR_CORRECTION"
ENV_QR_BORDER = "DIJIBILL_QR_BORDER"
ENV_VAT_NUMBER_FALLBACK = "DIJIBILL_ZATCA_VAT_NUMBER_FALLBACK"
ENV_VAT_TOTAL_FALLBACK = "DIJIBILL_ZATCA_VAT_TOTAL_FALLBACK"
ENV_TEMPLATE_AUTOESCAPE = "DIJIBILL_TEMPLATE_AUTOESCAPE"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


class SettingsError(ValueError):
    """Raised when a configuration value is invalid."""


# ══════════════════════════════════════════════════════════════
# QR IMAGE SETTINGS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class QRSettings:
    """
    Raster parameters for compliance QR images.

    size is the final square edge in pixels. border is the quiet zone
    in modules, applied before resizing.
    """

    size: int = 150
    error_correction: str = "M"
    border: int = 1
    fill_color: str = "black"
    back_color: str = "white"

    def __post_init__(self) -> None:
        if not isinstance(self.size, int) or isinstance(self.size, bool) or self.size < 21:
            raise SettingsError(f"QR size must be an int >= 21, got {self.size!r}.")
        if self.error_correction not in ERROR_CORRECTION_LEVELS:
            raise SettingsError(
                f"QR error_correction '{self.error_correction}' not valid. "
                f"Must be one of: {sorted(ERROR_CORRECTION_LEVELS)}"
            )
        if not isinstance(self.border, int) or isinstance(self.border, bool) or self.border < 0:
            raise SettingsError(f"QR border must be an int >= 0, got {self.border!r}.")
        if not self.fill_color or not self.back_color:
            raise SettingsError("QR colors must be non-empty strings.")


# ══════════════════════════════════════════════════════════════
# ZATCA FALLBACK POLICY
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ZatcaSettings:
    """Placeholders used when optional ZATCA fields are empty."""

    vat_number_fallback: str = "N/A"
    vat_total_fallback: str = "0.00"

    def __post_init__(self) -> None:
        if not isinstance(self.vat_number_fallback, str) or not self.vat_number_fallback:
            raise SettingsError("vat_number_fallback must be a non-empty string.")
        if not isinstance(self.vat_total_fallback, str) or not self.vat_total_fallback:
            raise SettingsError("vat_total_fallback must be a non-empty string.")


@dataclass(frozen=True)
class TemplateSettings:
    autoescape: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.autoescape, bool):
            raise SettingsError("autoescape must be bool.")


@dataclass(frozen=True)
class DocumentSettings:
    qr: QRSettings = field(default_factory=QRSettings)
    zatca: ZatcaSettings = field(default_factory=ZatcaSettings)
    templates: TemplateSettings = field(default_factory=TemplateSettings)


DEFAULT_SETTINGS = DocumentSettings()


# ══════════════════════════════════════════════════════════════
# ENVIRONMENT LOADING
# ══════════════════════════════════════════════════════════════

def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise SettingsError(f"{name} must be an integer, got {raw!r}.") from None


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise SettingsError(f"{name} must be a boolean flag, got {raw!r}.")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> DocumentSettings:
    """
    Build DocumentSettings from environment variables.

    Unset variables keep their defaults. Pass an explicit mapping to
    avoid reading the process environment (tests, embedding).
    """
    env = os.environ if environ is None else environ

    qr_kwargs = {}
    if ENV_QR_SIZE in env:
        qr_kwargs["size"] = _parse_int(ENV_QR_SIZE, env[ENV_QR_SIZE])
    if ENV_QR_ERROR_CORRECTION in env:
        qr_kwargs["error_correction"] = env[ENV_QR_ERROR_CORRECTION].strip().upper()
    if ENV_QR_BORDER in env:
        qr_kwargs["border"] = _parse_int(ENV_QR_BORDER, env[ENV_QR_BORDER])

    zatca_kwargs = {}
    if ENV_VAT_NUMBER_FALLBACK in env:
        zatca_kwargs["vat_number_fallback"] = env[ENV_VAT_NUMBER_FALLBACK]
    if ENV_VAT_TOTAL_FALLBACK in env:
        zatca_kwargs["vat_total_fallback"] = env[ENV_VAT_TOTAL_FALLBACK]

    template_kwargs = {}
    if ENV_TEMPLATE_AUTOESCAPE in env:
        template_kwargs["autoescape"] = _parse_bool(
            ENV_TEMPLATE_AUTOESCAPE, env[ENV_TEMPLATE_AUTOESCAPE]
        )

    settings = DocumentSettings(
        qr=QRSettings(**qr_kwargs),
        zatca=ZatcaSettings(**zatca_kwargs),
        templates=TemplateSettings(**template_kwargs),
    )
    logger.debug(
        "Loaded document settings: qr_size=%s ec=%s autoescape=%s",
        settings.qr.size,
        settings.qr.error_correction,
        settings.templates.autoescape,
    )
    return settings
