"""
DijiBill Config - Public API
============================
"""

from dijibill.config.settings import (
    DEFAULT_SETTINGS,
    DocumentSettings,
    QRSettings,
    SettingsError,
    TemplateSettings,
    ZatcaSettings,
    load_settings,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "DocumentSettings",
    "QRSettings",
    "ZatcaSettings",
    "TemplateSettings",
    "SettingsError",
    "load_settings",
]
