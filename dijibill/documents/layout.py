"""
DijiBill Documents - Layout Hints
===================================
Caller-side print defaults derived from a template type.

The engine never applies these itself. A print driver uses them to size
the page and set text direction around the rendered markup.
"""

from __future__ import annotations

from dataclasses import dataclass

from dijibill.documents.models import is_arabic_type, is_thermal_type

DIRECTION_LTR = "ltr"
DIRECTION_RTL = "rtl"

THERMAL_PAPER_WIDTH_MM = 80
A4_PAPER_WIDTH_MM = 210


@dataclass(frozen=True)
class Box:
    """Top/right/bottom/left spacing in millimetres."""
    top: float = 0
    right: float = 0
    bottom: float = 0
    left: float = 0

    def css(self) -> str:
        return " ".join(
            f"{_mm(side)}" for side in (self.top, self.right, self.bottom, self.left)
        )


def _mm(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value)}mm"
    return f"{value}mm"


@dataclass(frozen=True)
class LayoutHints:
    paper_width_mm: int
    margins: Box
    paddings: Box
    direction: str = DIRECTION_LTR

    @property
    def is_rtl(self) -> bool:
        return self.direction == DIRECTION_RTL

    def page_css(self) -> str:
        """@page and body rules a print driver can prepend to the document."""
        height = "auto" if self.paper_width_mm == THERMAL_PAPER_WIDTH_MM else "297mm"
        return (
            f"@page {{ size: {self.paper_width_mm}mm {height}; margin: {self.margins.css()}; }}\n"
            f"body {{ direction: {self.direction}; padding: {self.paddings.css()}; }}"
        )


_THERMAL_MARGINS = Box(0, 0, 0, 0)
_THERMAL_PADDINGS = Box(1, 1, 1, 1)
_A4_MARGINS = Box(10, 10, 10, 10)
_A4_PADDINGS = Box(3, 3, 3, 3)


def layout_hints_for(template_type: str) -> LayoutHints:
    direction = DIRECTION_RTL if is_arabic_type(template_type) else DIRECTION_LTR
    if is_thermal_type(template_type):
        return LayoutHints(
            paper_width_mm=THERMAL_PAPER_WIDTH_MM,
            margins=_THERMAL_MARGINS,
            paddings=_THERMAL_PADDINGS,
            direction=direction,
        )
    return LayoutHints(
        paper_width_mm=A4_PAPER_WIDTH_MM,
        margins=_A4_MARGINS,
        paddings=_A4_PADDINGS,
        direction=direction,
    )
