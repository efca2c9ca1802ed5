"""
DijiBill Documents - Provider Protocol and In-Memory Provider
===============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol

from dijibill.documents.models import DocumentTemplate


class TemplateProvider(Protocol):
    def get_templates(
        self,
        organization_id: Optional[str] = None,
    ) -> tuple[DocumentTemplate, ...]:
        ...


class InMemoryTemplateProvider:
    """
    Deterministic in-memory provider used by tests/bootstrap.
    Strictly rejects duplicate template ids.
    """

    def __init__(
        self,
        templates: Iterable[DocumentTemplate] | None = None,
    ):
        self._templates_by_organization: dict[
            Optional[str], tuple[DocumentTemplate, ...]
        ] = {}

        seen: set[str] = set()
        temp: dict[Optional[str], list[DocumentTemplate]] = {}

        for template in templates or ():
            if not isinstance(template, DocumentTemplate):
                raise TypeError("templates must contain DocumentTemplate instances.")
            if template.template_id in seen:
                raise ValueError(
                    f"Duplicate document template id '{template.template_id}'."
                )
            seen.add(template.template_id)
            temp.setdefault(template.organization_id, []).append(template)

        for organization_id, organization_templates in temp.items():
            ordered = tuple(
                sorted(
                    organization_templates,
                    key=lambda template: template.sort_key(),
                )
            )
            self._templates_by_organization[organization_id] = ordered

    def get_templates(
        self,
        organization_id: Optional[str] = None,
    ) -> tuple[DocumentTemplate, ...]:
        return self._templates_by_organization.get(organization_id, tuple())
