"""
DijiBill Documents - Public API
===============================
"""

from dijibill.documents.composer import compose_document
from dijibill.documents.context import (
    MISSING,
    DataContext,
    Nested,
    Scalar,
    Sequence,
    to_value,
)
from dijibill.documents.defaults import (
    DEFAULT_TEMPLATES,
    build_default_template,
    get_default_content,
)
from dijibill.documents.exceptions import (
    ContextError,
    DocumentError,
    ReasonCode,
    TemplateNotFoundError,
)
from dijibill.documents.layout import LayoutHints, layout_hints_for
from dijibill.documents.models import (
    CATEGORY_INVOICE,
    CATEGORY_QUOTE,
    CATEGORY_RECEIPT,
    CATEGORY_REPORT,
    DocumentTemplate,
    RenderedDocument,
)
from dijibill.documents.parser import parse_template
from dijibill.documents.provider import (
    InMemoryTemplateProvider,
    TemplateProvider,
)
from dijibill.documents.registry import resolve_template
from dijibill.documents.renderer import (
    CompiledTemplate,
    compile_template,
    render,
)

__all__ = [
    "CATEGORY_RECEIPT",
    "CATEGORY_INVOICE",
    "CATEGORY_QUOTE",
    "CATEGORY_REPORT",
    "DocumentTemplate",
    "RenderedDocument",
    "DataContext",
    "Scalar",
    "Sequence",
    "Nested",
    "MISSING",
    "to_value",
    "parse_template",
    "CompiledTemplate",
    "compile_template",
    "render",
    "DEFAULT_TEMPLATES",
    "get_default_content",
    "build_default_template",
    "TemplateProvider",
    "InMemoryTemplateProvider",
    "resolve_template",
    "LayoutHints",
    "layout_hints_for",
    "compose_document",
    "DocumentError",
    "ContextError",
    "TemplateNotFoundError",
    "ReasonCode",
]
