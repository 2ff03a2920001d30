"""Infrastructure layer - drawing surfaces, rendering and formatters."""

from .formatters import LayoutJsonFormatter, LayoutSummaryFormatter
from .svg_surface import SvgDrawingSurface
from .tray_diagram_renderer import (
    MISSING_DIMENSIONS_MESSAGE,
    TOO_MANY_CATEGORIES_MESSAGE,
    TrayDiagramRenderer,
    TrayDrawingService,
)

__all__ = [
    "LayoutJsonFormatter",
    "LayoutSummaryFormatter",
    "MISSING_DIMENSIONS_MESSAGE",
    "SvgDrawingSurface",
    "TOO_MANY_CATEGORIES_MESSAGE",
    "TrayDiagramRenderer",
    "TrayDrawingService",
]
