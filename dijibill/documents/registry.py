"""
DijiBill Documents - Effective Template Resolution
====================================================
Picks the template a document is rendered with.

Order:
1. An explicitly requested template id, when it exists in the category.
2. Stored templates of the category (narrowed to template_type when
   given): the one flagged is_default, else the first in provider order.
3. The built-in default for the category/type.

A stored template with blank content renders with the built-in content
for its type.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from dijibill.documents.defaults import build_default_template, get_default_content
from dijibill.documents.exceptions import ReasonCode, TemplateNotFoundError
from dijibill.documents.models import DocumentTemplate
from dijibill.documents.provider import TemplateProvider

logger = logging.getLogger("dijibill.documents")


def _with_default_content(template: DocumentTemplate) -> DocumentTemplate:
    if template.content.strip():
        return template
    content = get_default_content(template.category, template.template_type)
    if content is None:
        return template
    logger.debug(
        "Template %r has no content; using built-in %s/%s content.",
        template.template_id,
        template.category,
        template.template_type,
    )
    return replace(template, content=content)


def _pick_stored(
    stored: tuple[DocumentTemplate, ...],
    template_type: Optional[str],
    template_id: Optional[str],
) -> Optional[DocumentTemplate]:
    if template_id is not None:
        for template in stored:
            if template.template_id == template_id:
                return template
        logger.debug("Requested template %r not found; falling back.", template_id)

    candidates = [
        template for template in stored
        if template_type is None or template.template_type == template_type
    ]
    for template in candidates:
        if template.is_default:
            return template
    return candidates[0] if candidates else None


def resolve_template(
    *,
    category: str,
    template_type: Optional[str] = None,
    provider: Optional[TemplateProvider] = None,
    organization_id: Optional[str] = None,
    template_id: Optional[str] = None,
) -> DocumentTemplate:
    """
    Resolve the effective template for a category/type.

    Raises:
        TemplateNotFoundError: no stored template matches and the category
            has no built-in default.
    """
    stored: tuple[DocumentTemplate, ...] = ()
    if provider is not None:
        stored = tuple(
            template
            for template in provider.get_templates(organization_id)
            if template.category == category
        )

    chosen = _pick_stored(stored, template_type, template_id)
    if chosen is None:
        chosen = build_default_template(category, template_type)
    if chosen is None:
        raise TemplateNotFoundError(
            code=ReasonCode.TEMPLATE_NOT_FOUND,
            message=(
                f"No template for category '{category}'"
                + (f" and type '{template_type}'." if template_type else ".")
            ),
        )
    return _with_default_content(chosen)
