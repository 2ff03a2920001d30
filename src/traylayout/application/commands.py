"""Application commands (use cases) for tray layout."""

from __future__ import annotations

import logging

from traylayout.application.config.adapter import (
    config_to_cables,
    config_to_layout_configuration,
    config_to_tray,
)
from traylayout.application.config.schema import TrayLayoutConfiguration
from traylayout.contracts.protocols import TraceCallback
from traylayout.domain.services.bundle_map import build_bundle_map
from traylayout.domain.services.cable_classification import filter_cables_by_tray
from traylayout.domain.services.free_space import (
    classify_free_space,
    free_space_percent,
)
from traylayout.infrastructure.svg_surface import SvgDrawingSurface
from traylayout.infrastructure.tray_diagram_renderer import TrayDrawingService

from .dtos import TrayLayoutOutput

logger = logging.getLogger(__name__)


class RenderTrayLayoutCommand:
    """Command to lay out and render one tray from a layout request."""

    def __init__(self, drawing_service: TrayDrawingService | None = None) -> None:
        self.drawing_service = drawing_service or TrayDrawingService()

    def execute(
        self,
        config: TrayLayoutConfiguration,
        *,
        scale: float | None = None,
        spacing_mm: float | None = None,
        trace: TraceCallback | None = None,
    ) -> TrayLayoutOutput:
        """Execute the render command.

        Args:
            config: Validated layout request.
            scale: Canvas scale override (px per mm).
            spacing_mm: Cable spacing override in mm.
            trace: Trace callback passed to the layout engine.

        Returns:
            TrayLayoutOutput with the layout, SVG and free-space metrics, or
            with errors when the overrides are invalid.
        """
        tray = config_to_tray(config)
        cables = config_to_cables(config)
        if config.filter_by_routing:
            cables = filter_cables_by_tray(cables, tray.name)
            logger.debug(f"{len(cables)} cable(s) routed through tray {tray.name}")

        canvas_scale = scale if scale is not None else config.canvas.scale
        spacing = spacing_mm if spacing_mm is not None else config.canvas.spacing

        surface = SvgDrawingSurface()
        try:
            result = self.drawing_service.render_tray_layout(
                surface,
                tray,
                cables,
                build_bundle_map(cables),
                canvas_scale,
                spacing_mm=spacing,
                layout_config=config_to_layout_configuration(config),
                trace=trace,
            )
        except ValueError as e:
            return TrayLayoutOutput(result=None, cables_on_tray=cables, errors=[str(e)])

        percent = free_space_percent(
            tray,
            result.summary,
            consider_bundle_spacing_as_free=(
                config.free_space.consider_bundle_spacing_as_free
            ),
        )
        level = classify_free_space(
            percent, config.free_space.min_percent, config.free_space.max_percent
        )
        return TrayLayoutOutput(
            result=result,
            cables_on_tray=cables,
            svg=surface.to_svg(),
            free_space_percent=percent,
            free_space_level=level,
        )
