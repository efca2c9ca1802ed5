"""
DijiBill Documents - Document Composer
========================================
Renders a resolved template into a RenderedDocument, optionally with the
ZATCA QR code embedded.

When compliance fields are supplied the composer encodes them, renders the
QR image, and exposes it to the template as:
  qrCodeUrl  - PNG data URL for an <img src>
  includeQR  - true, guarding the QR block

Doctrine:
- The caller's context is never mutated; injected values go into a copy.
- Encoder ValidationError propagates; a document that asked for a QR
  code is never produced without one.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from dijibill.compliance.models import ZatcaFields
from dijibill.compliance.qr import to_qr_data_url
from dijibill.compliance.tlv import encode_zatca_qr_payload
from dijibill.config.settings import DEFAULT_SETTINGS, DocumentSettings
from dijibill.documents.context import DataContext, as_context
from dijibill.documents.layout import layout_hints_for
from dijibill.documents.models import DocumentTemplate, RenderedDocument
from dijibill.documents.renderer import compile_template

logger = logging.getLogger("dijibill.documents")

QR_URL_FIELD = "qrCodeUrl"
INCLUDE_QR_FIELD = "includeQR"


def compose_document(
    template: DocumentTemplate,
    context: Union[DataContext, Mapping[str, Any], None] = None,
    *,
    zatca_fields: Optional[ZatcaFields] = None,
    include_qr: Optional[bool] = None,
    autoescape: Optional[bool] = None,
    settings: Optional[DocumentSettings] = None,
) -> RenderedDocument:
    """
    Render template against context and return a RenderedDocument.

    Args:
        template: the effective template (see resolve_template)
        context: DataContext or plain mapping
        zatca_fields: compliance fields; when given a QR code is embedded
        include_qr: force the QR block off (False) even when fields are
            given; True without fields is a caller error
        autoescape: passed through to the renderer
        settings: optional DocumentSettings

    Raises:
        ValueError: include_qr=True without zatca_fields.
        ValidationError: zatca_fields fail encoder validation.
    """
    if not isinstance(template, DocumentTemplate):
        raise TypeError("template must be a DocumentTemplate.")

    settings = settings or DEFAULT_SETTINGS
    data = as_context(context)

    if include_qr is None:
        include_qr = zatca_fields is not None
    if include_qr and zatca_fields is None:
        raise ValueError("include_qr requires zatca_fields.")

    qr_payload = None
    if include_qr:
        qr_payload = encode_zatca_qr_payload(zatca_fields, settings=settings)
        data = data.with_values({
            QR_URL_FIELD: to_qr_data_url(qr_payload, settings=settings),
            INCLUDE_QR_FIELD: True,
        })
        logger.debug("Embedded ZATCA QR code in %r.", template.template_id)
    elif INCLUDE_QR_FIELD in data:
        data = data.with_values({INCLUDE_QR_FIELD: False})

    html = compile_template(template.content).render(
        data,
        autoescape=autoescape,
        settings=settings,
    )

    return RenderedDocument(
        html=html,
        template_id=template.template_id,
        category=template.category,
        template_type=template.template_type,
        layout=layout_hints_for(template.template_type),
        qr_payload=qr_payload,
    )
