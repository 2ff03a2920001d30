"""Tray concept diagram rendering.

The renderer is the drawing pass over a computed ``TrayLayoutResult``:
tray outline, rung strip, labels, cable circles with their numbers, and
the separator line or the too-many-categories warning.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from traylayout.contracts.protocols import DrawingSurface, TraceCallback
from traylayout.domain.services.tray_layout import TrayLayoutResult, compute_tray_layout
from traylayout.domain.value_objects import (
    CANVAS_MARGIN_PX,
    TEXT_PADDING_PX,
    Cable,
    CableCategory,
    DiameterBucket,
    LayoutConfiguration,
    LayoutSummary,
    SeparatorKind,
    Tray,
)

logger = logging.getLogger(__name__)

MISSING_DIMENSIONS_MESSAGE = "Provide tray width and height to render the concept."
TOO_MANY_CATEGORIES_MESSAGE = "Too many cable types on the tray"

PLACEHOLDER_WIDTH = 600.0
PLACEHOLDER_HEIGHT = 300.0
TITLE_Y = 30.0


def _format_mm(value: float) -> str:
    return f"{value:g}"


class TrayDiagramRenderer:
    """Renders tray layouts onto a drawing surface.

    Attributes:
        stroke_color: Color of outlines and cable circles.
        text_color: Color of labels and cable numbers.
        rung_fill: Fill color of the rung strip.
        warning_color: Color of the too-many-categories overlay.
    """

    def __init__(
        self,
        stroke_color: str = "#000000",
        text_color: str = "#000000",
        rung_fill: str = "#d3d3d3",
        warning_color: str = "#d13438",
    ) -> None:
        self.stroke_color = stroke_color
        self.text_color = text_color
        self.rung_fill = rung_fill
        self.warning_color = warning_color

    def render(
        self,
        result: TrayLayoutResult,
        surface: DrawingSurface,
        cables_on_tray: Sequence[Cable] = (),
    ) -> None:
        """Draw a computed layout.

        Args:
            result: Layout computed by ``compute_tray_layout``.
            surface: Surface to draw on; it is resized and cleared.
            cables_on_tray: Cables in display order, used for cable numbers.
        """
        if not result.has_dimensions:
            self.render_missing_dimensions(surface)
            return

        surface.resize(result.canvas_width, result.canvas_height)
        surface.clear("#ffffff")
        self._draw_base_structure(result, surface)

        numbers: dict[Cable, int] = {}
        for index, cable in enumerate(cables_on_tray, start=1):
            numbers.setdefault(cable, index)

        for placement in result.placements:
            surface.stroke_circle(
                placement.center_x,
                placement.center_y,
                placement.radius,
                color=self.stroke_color,
                line_width=1.0,
            )
            number = numbers.get(placement.cable)
            surface.draw_text(
                str(number) if number is not None else "?",
                placement.center_x,
                placement.center_y,
                font_size=20.0,
                color=self.text_color,
            )

        self._draw_separator(result, surface)

    def render_missing_dimensions(self, surface: DrawingSurface) -> None:
        """Draw the placeholder shown for trays without dimensions."""
        width = surface.width or PLACEHOLDER_WIDTH
        height = surface.height or PLACEHOLDER_HEIGHT
        surface.resize(width, height)
        surface.clear("#ffffff")
        surface.draw_text(
            MISSING_DIMENSIONS_MESSAGE,
            width / 2,
            height / 2,
            font_size=16.0,
            color="#201f1e",
        )

    def _draw_base_structure(
        self, result: TrayLayoutResult, surface: DrawingSurface
    ) -> None:
        tray = result.tray
        scale = result.scale
        origin = CANVAS_MARGIN_PX
        width_px = tray.width_mm * scale
        height_px = tray.height_mm * scale
        rung_px = min(tray.rung_height_mm, tray.height_mm) * scale

        surface.draw_text(
            f"Cables bundles laying concept for tray {tray.name}",
            origin + width_px / 2,
            TITLE_Y,
            font_size=24.0,
            color=self.text_color,
        )
        surface.draw_text(
            f"Useful tray height: {_format_mm(tray.height_mm - tray.rung_height_mm)} mm",
            TEXT_PADDING_PX,
            origin + height_px / 2,
            font_size=24.0,
            color=self.text_color,
            rotation=90.0,
        )

        surface.stroke_rect(
            origin,
            origin,
            width_px,
            tray.usable_height_mm * scale,
            color=self.stroke_color,
        )
        surface.fill_rect(
            origin, origin + height_px - rung_px, width_px, rung_px, color=self.rung_fill
        )
        surface.stroke_rect(
            origin,
            origin + height_px - rung_px,
            width_px,
            rung_px,
            color=self.stroke_color,
        )

        surface.draw_text(
            f"Useful tray width: {_format_mm(tray.width_mm)} mm",
            origin + width_px / 2,
            origin + height_px + TEXT_PADDING_PX,
            font_size=24.0,
            color=self.text_color,
        )

    def _draw_separator(self, result: TrayLayoutResult, surface: DrawingSurface) -> None:
        separator = result.separator
        if separator is None:
            return

        match separator.kind:
            case SeparatorKind.LINE:
                surface.draw_line(
                    separator.x,
                    separator.bottom_y,
                    separator.x,
                    separator.top_y,
                    color=self.stroke_color,
                    line_width=2.0,
                )
            case SeparatorKind.WARNING:
                surface.draw_text(
                    TOO_MANY_CATEGORIES_MESSAGE,
                    result.canvas_width / 2,
                    result.canvas_height / 2,
                    font_size=28.0,
                    color=self.warning_color,
                )
            case SeparatorKind.SKIPPED:
                logger.debug(
                    f"Separator skipped for tray {result.tray.name}: "
                    f"left={result.left_extreme}, right={result.right_extreme}"
                )
            case SeparatorKind.NONE:
                pass


class TrayDrawingService:
    """Computes and draws tray layouts in one call.

    Example:
        ```python
        surface = SvgDrawingSurface()
        summary = TrayDrawingService().draw_tray_layout(
            surface, tray, cables, build_bundle_map(cables), canvas_scale=2.0
        )
        surface.save("tray.svg")
        ```
    """

    def __init__(self, renderer: TrayDiagramRenderer | None = None) -> None:
        self._renderer = renderer or TrayDiagramRenderer()

    def render_tray_layout(
        self,
        surface: DrawingSurface | None,
        tray: Tray,
        cables_on_tray: Sequence[Cable],
        bundle_map: Mapping[
            str | CableCategory, Mapping[str | DiameterBucket, Sequence[Cable]]
        ]
        | None,
        canvas_scale: float,
        spacing_mm: float | None = None,
        layout_config: LayoutConfiguration | None = None,
        trace: TraceCallback | None = None,
    ) -> TrayLayoutResult:
        """Compute the layout, draw it, and return the full result.

        Raises:
            ValueError: If the surface is None or the scale is invalid.
        """
        if surface is None:
            raise ValueError("Drawing surface cannot be None")

        result = compute_tray_layout(
            tray,
            cables_on_tray,
            bundle_map,
            canvas_scale,
            spacing_mm=spacing_mm,
            layout_config=layout_config,
            trace=trace,
        )
        self._renderer.render(result, surface, cables_on_tray)
        return result

    def draw_tray_layout(
        self,
        surface: DrawingSurface | None,
        tray: Tray,
        cables_on_tray: Sequence[Cable],
        bundle_map: Mapping[
            str | CableCategory, Mapping[str | DiameterBucket, Sequence[Cable]]
        ]
        | None,
        canvas_scale: float,
        spacing_mm: float | None = None,
        layout_config: LayoutConfiguration | None = None,
        trace: TraceCallback | None = None,
    ) -> LayoutSummary | None:
        """Compute and draw a tray layout.

        Args:
            surface: Surface to draw on.
            tray: Tray to lay out.
            cables_on_tray: Cables assigned to the tray, in display order.
            bundle_map: Category to diameter bucket to cables.
            canvas_scale: Pixels per millimetre.
            spacing_mm: Cable spacing override in mm.
            layout_config: Per-category configuration.
            trace: Trace callback; defaults to module logging.

        Returns:
            The layout summary, or None when the tray has no dimensions.

        Raises:
            ValueError: If the surface is None or the scale is invalid.
        """
        result = self.render_tray_layout(
            surface,
            tray,
            cables_on_tray,
            bundle_map,
            canvas_scale,
            spacing_mm=spacing_mm,
            layout_config=layout_config,
            trace=trace,
        )
        return result.summary
