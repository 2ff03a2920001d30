"""Tray layout orchestration.

``compute_tray_layout`` is the pure geometry pass: it decides which edge
each category packs from, composes the categories, and derives the
separator decision and occupancy summary. Rendering is a separate pass
over the returned ``TrayLayoutResult``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping, Sequence

from traylayout.contracts.protocols import TraceCallback

from ..value_objects import (
    CANVAS_MARGIN_PX,
    DEFAULT_SPACING_MM,
    BottomRowSegment,
    Cable,
    CableCategory,
    DiameterBucket,
    LayoutConfiguration,
    LayoutSide,
    LayoutSummary,
    PlacedCable,
    SeparatorDecision,
    Tray,
)
from .bundle_composer import LayoutContext, compose_category, compose_grounding
from .bundle_map import normalize_bundle_map
from .separator import decide_separator, summarize_layout
from .tracing import make_logging_trace

logger = logging.getLogger(__name__)

__all__ = [
    "LayoutStage",
    "TrayLayoutResult",
    "compute_tray_layout",
    "plan_category_sides",
    "resolve_spacing",
    "validate_scale",
]


class LayoutStage(str, Enum):
    """Stages of a layout call.

    Results only ever end in ``MISSING_DIMENSIONS`` or ``SEPARATORS_DRAWN``.
    The two intermediate stages are reported through the trace callback
    (``layout.start`` and ``layout.bundles``) and never appear on a result.

    Attributes:
        MISSING_DIMENSIONS: Tray width or height is not positive; nothing packed.
        BASE_STRUCTURE_DRAWN: Tray outline computed, no bundles yet. Trace only.
        BUNDLES_DRAWN: Every category composed. Trace only.
        SEPARATORS_DRAWN: Separator decided and summary computed.
    """

    MISSING_DIMENSIONS = "missing-dimensions"
    BASE_STRUCTURE_DRAWN = "base-structure-drawn"
    BUNDLES_DRAWN = "bundles-drawn"
    SEPARATORS_DRAWN = "separators-drawn"


@dataclass(frozen=True)
class TrayLayoutResult:
    """Complete geometry of one tray layout.

    Attributes:
        tray: The laid-out tray.
        scale: Canvas scale in px per mm.
        spacing_mm: Effective tray-wide cable spacing in mm.
        stage: Terminal stage of the computation.
        placements: Placed cables in placement order.
        segments: Bottom-row segments.
        separator: Separator decision, None for missing dimensions.
        summary: Occupancy summary, None for missing dimensions.
        canvas_width: Canvas width in px (0 for missing dimensions).
        canvas_height: Canvas height in px (0 for missing dimensions).
        left_extreme: Rightmost bottom-row edge of the left-packed categories.
        right_extreme: Leftmost bottom-row edge of the right-packed categories.
        floor_y: Canvas y of the tray floor.
    """

    tray: Tray
    scale: float
    spacing_mm: float
    stage: LayoutStage
    placements: tuple[PlacedCable, ...] = ()
    segments: tuple[BottomRowSegment, ...] = ()
    separator: SeparatorDecision | None = None
    summary: LayoutSummary | None = None
    canvas_width: float = 0.0
    canvas_height: float = 0.0
    left_extreme: float | None = None
    right_extreme: float | None = None
    floor_y: float = 0.0

    @property
    def has_dimensions(self) -> bool:
        return self.stage is not LayoutStage.MISSING_DIMENSIONS

    def placements_for(self, category: CableCategory) -> list[PlacedCable]:
        return [p for p in self.placements if p.category is category]


def validate_scale(canvas_scale: float) -> float:
    """Return the scale as float, rejecting non-finite or non-positive values."""
    try:
        scale = float(canvas_scale)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Canvas scale must be a number, got {canvas_scale!r}") from e
    if not math.isfinite(scale) or scale <= 0:
        raise ValueError(f"Canvas scale must be finite and positive, got {canvas_scale!r}")
    return scale


def resolve_spacing(spacing_mm: float | None) -> float:
    """Spacing override if finite and non-negative, else the default."""
    if spacing_mm is None:
        return DEFAULT_SPACING_MM
    try:
        value = float(spacing_mm)
    except (TypeError, ValueError):
        return DEFAULT_SPACING_MM
    if not math.isfinite(value) or value < 0:
        return DEFAULT_SPACING_MM
    return value


def plan_category_sides(
    present: set[CableCategory] | frozenset[CableCategory],
) -> list[tuple[CableCategory, LayoutSide]]:
    """Assign a packing edge to every present category, in composition order.

    MV always takes the left edge and pushes every other category to the
    right. Without MV, power takes the left edge. Without either, VFD takes
    the left edge when control is also present. A category alone on the
    tray packs from its natural side.
    """
    right_order = (CableCategory.POWER, CableCategory.VFD, CableCategory.CONTROL)

    if CableCategory.MV in present:
        plan = [(CableCategory.MV, LayoutSide.LEFT)]
        plan.extend((c, LayoutSide.RIGHT) for c in right_order if c in present)
        return plan

    if CableCategory.POWER in present:
        plan = [(CableCategory.POWER, LayoutSide.LEFT)]
        plan.extend(
            (c, LayoutSide.RIGHT)
            for c in (CableCategory.VFD, CableCategory.CONTROL)
            if c in present
        )
        return plan

    if CableCategory.VFD in present and CableCategory.CONTROL in present:
        return [
            (CableCategory.VFD, LayoutSide.LEFT),
            (CableCategory.CONTROL, LayoutSide.RIGHT),
        ]

    return [(category, category.natural_side) for category in present]


def _segments_from(placements: Sequence[PlacedCable]) -> tuple[BottomRowSegment, ...]:
    """One segment per floor cable, except that the touching floor cables of
    a solved trefoil cluster share a single segment."""
    segments: list[BottomRowSegment] = []
    clusters: dict[tuple[CableCategory, int], int] = {}
    for p in placements:
        if not p.on_floor:
            continue
        key = (p.category, p.cluster) if p.cluster is not None else None
        if key in clusters:
            index = clusters[key]
            merged = segments[index]
            segments[index] = replace(
                merged,
                left=min(merged.left, p.left),
                right=max(merged.right, p.right),
                cables=(*merged.cables, p.cable),
            )
            continue
        if key is not None:
            clusters[key] = len(segments)
        segments.append(
            BottomRowSegment(
                category=p.category,
                side=p.side,
                left=p.left,
                right=p.right,
                cables=(p.cable,),
            )
        )
    return tuple(segments)


def compute_tray_layout(
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
    """Compute the layout of a tray without drawing anything.

    Args:
        tray: Tray to lay out.
        cables_on_tray: Cables assigned to the tray, in display order.
        bundle_map: Category to diameter bucket to cables. String keys are
            accepted and normalised.
        canvas_scale: Pixels per millimetre; must be finite and positive.
        spacing_mm: Cable spacing override in mm.
        layout_config: Per-category configuration; defaults for every category.
        trace: Trace callback; defaults to module logging.

    Returns:
        The layout result. Trays without positive dimensions end in
        ``LayoutStage.MISSING_DIMENSIONS`` with no summary, whatever the
        scale; the raw scale is kept on that result.

    Raises:
        ValueError: If the tray has dimensions and the canvas scale is not
            finite and positive.
    """
    trace = trace or make_logging_trace(logger)
    spacing = resolve_spacing(spacing_mm)

    if not tray.has_dimensions:
        trace("layout.missing_dimensions", {"tray": tray.name})
        return TrayLayoutResult(
            tray=tray,
            scale=canvas_scale,
            spacing_mm=spacing,
            stage=LayoutStage.MISSING_DIMENSIONS,
        )

    scale = validate_scale(canvas_scale)

    margin = CANVAS_MARGIN_PX
    width_px = tray.width_mm * scale
    floor_y = margin + tray.usable_height_mm * scale
    ctx = LayoutContext(
        tray=tray,
        scale=scale,
        spacing_mm=spacing,
        layout=layout_config or LayoutConfiguration(),
        floor_y=floor_y,
        trace=trace,
    )
    trace(
        "layout.start",
        {
            "tray": tray.name,
            "cables": len(cables_on_tray),
            "scale": scale,
            "spacing_mm": spacing,
            "stage": LayoutStage.BASE_STRUCTURE_DRAWN.value,
        },
    )

    bundles = normalize_bundle_map(bundle_map)
    left_cursor = margin + ctx.spacing_px
    right_cursor = margin + width_px - ctx.spacing_px

    placements: list[PlacedCable] = []
    grounding: list[Cable] = []
    for category, side in plan_category_sides(frozenset(bundles)):
        cursor = left_cursor if side is LayoutSide.LEFT else right_cursor
        composition = compose_category(ctx, category, bundles[category], cursor, side)
        placements.extend(composition.placements)
        grounding.extend(composition.deferred_grounding)
        if side is LayoutSide.LEFT:
            left_cursor = composition.cursor
        else:
            right_cursor = composition.cursor

    if grounding:
        composition = compose_grounding(ctx, grounding, right_cursor)
        placements.extend(composition.placements)
    trace(
        "layout.bundles",
        {"stage": LayoutStage.BUNDLES_DRAWN.value, "placed": len(placements)},
    )

    segments = _segments_from(placements)
    left_edges = [s.right for s in segments if s.side is LayoutSide.LEFT]
    right_edges = [s.left for s in segments if s.side is LayoutSide.RIGHT]
    left_extreme = max(left_edges) if left_edges else None
    right_extreme = min(right_edges) if right_edges else None

    separator = decide_separator(
        segments,
        left_extreme,
        right_extreme,
        floor_y=floor_y,
        top_y=margin,
        trace=trace,
    )
    summary = summarize_layout(segments, spacing, scale, usable_width_mm=tray.width_mm)
    stage = LayoutStage.SEPARATORS_DRAWN
    trace(
        "layout.end",
        {
            "tray": tray.name,
            "stage": stage.value,
            "placed": len(placements),
            "segments": len(segments),
        },
    )

    return TrayLayoutResult(
        tray=tray,
        scale=scale,
        spacing_mm=spacing,
        stage=stage,
        placements=tuple(placements),
        segments=segments,
        separator=separator,
        summary=summary,
        canvas_width=width_px + margin * 2,
        canvas_height=tray.height_mm * scale + margin * 2,
        left_extreme=left_extreme,
        right_extreme=right_extreme,
        floor_y=floor_y,
    )
