"""
DijiBill Documents - Renderer Public API
==========================================
"""

from dijibill.documents.renderer.template_renderer import (
    CompiledTemplate,
    compile_template,
    render,
)

__all__ = [
    "CompiledTemplate",
    "compile_template",
    "render",
]
