"""
DijiBill Compliance - QR Image Renderer
=========================================
Renders a payload string (the base64 TLV) as a PNG QR symbol.

Implementation: qrcode builds the symbol, Pillow rasterises and scales it
to a fixed square size with nearest-neighbour sampling so module edges
stay sharp.

Doctrine:
- Same payload + same parameters -> same PNG bytes.
- Purely local computation. No I/O besides the in-memory buffer.
"""

from __future__ import annotations

import base64
import io
import logging
from typing import Optional

import qrcode
from PIL import Image
from qrcode.constants import (
    ERROR_CORRECT_H,
    ERROR_CORRECT_L,
    ERROR_CORRECT_M,
    ERROR_CORRECT_Q,
)
from qrcode.image.pil import PilImage

from dijibill.compliance.models import ZatcaFields
from dijibill.compliance.tlv import encode_zatca_qr_payload
from dijibill.config.settings import (
    DEFAULT_SETTINGS,
    DocumentSettings,
    QRSettings,
    SettingsError,
)

logger = logging.getLogger("dijibill.compliance")


PNG_DATA_URL_PREFIX = "data:image/png;base64,"

_ERROR_CORRECTION = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}


def _resolve_qr_settings(
    settings: Optional[DocumentSettings],
    size: Optional[int],
    error_correction: Optional[str],
) -> QRSettings:
    base = (settings or DEFAULT_SETTINGS).qr
    if size is None and error_correction is None:
        return base
    return QRSettings(
        size=base.size if size is None else size,
        error_correction=(
            base.error_correction if error_correction is None else error_correction.upper()
        ),
        border=base.border,
        fill_color=base.fill_color,
        back_color=base.back_color,
    )


def to_qr_image(
    payload: str,
    *,
    size: Optional[int] = None,
    error_correction: Optional[str] = None,
    settings: Optional[DocumentSettings] = None,
) -> bytes:
    """
    Render payload as a square PNG of `size` pixels.

    Args:
        payload: literal QR content (for ZATCA, the base64 TLV string)
        size: edge length in pixels (default from settings, 150)
        error_correction: one of L/M/Q/H (default from settings, M)
        settings: optional DocumentSettings

    Returns:
        PNG bytes.

    Raises:
        SettingsError: size cannot hold one pixel per module plus border.
    """
    if not isinstance(payload, str) or not payload:
        raise ValueError("payload must be a non-empty string.")

    options = _resolve_qr_settings(settings, size, error_correction)

    qr = qrcode.QRCode(
        version=None,
        error_correction=_ERROR_CORRECTION[options.error_correction],
        box_size=1,
        border=options.border,
    )
    qr.add_data(payload)
    qr.make(fit=True)

    edge = qr.modules_count + 2 * options.border
    if edge > options.size:
        raise SettingsError(
            f"QR size {options.size}px is too small for a {qr.modules_count}-module "
            f"symbol with border {options.border}; at least {edge}px is needed."
        )

    symbol = qr.make_image(
        image_factory=PilImage,
        fill_color=options.fill_color,
        back_color=options.back_color,
    ).get_image()
    raster = symbol.resize(
        (options.size, options.size),
        Image.Resampling.NEAREST,
    )

    buffer = io.BytesIO()
    raster.save(buffer, format="PNG")
    logger.debug(
        "Rendered QR symbol version=%s modules=%s size=%spx ec=%s",
        qr.version,
        qr.modules_count,
        options.size,
        options.error_correction,
    )
    return buffer.getvalue()


def to_qr_data_url(
    payload: str,
    *,
    size: Optional[int] = None,
    error_correction: Optional[str] = None,
    settings: Optional[DocumentSettings] = None,
) -> str:
    """Render payload as a PNG data URL suitable for an <img src>."""
    png = to_qr_image(
        payload,
        size=size,
        error_correction=error_correction,
        settings=settings,
    )
    return PNG_DATA_URL_PREFIX + base64.b64encode(png).decode("ascii")


def generate_zatca_qr_code(
    fields: ZatcaFields,
    *,
    size: Optional[int] = None,
    error_correction: Optional[str] = None,
    settings: Optional[DocumentSettings] = None,
) -> str:
    """
    Encode ZATCA fields and return the QR image as a data URL.

    ValidationError from the encoder propagates unchanged.
    """
    payload = encode_zatca_qr_payload(fields, settings=settings)
    return to_qr_data_url(
        payload,
        size=size,
        error_correction=error_correction,
        settings=settings,
    )
