"""Separator decision and occupancy summary.

Both are derived from the bottom-row segments recorded during layout.
"""

from __future__ import annotations

import logging
from itertools import groupby
from typing import Sequence

from traylayout.contracts.protocols import TraceCallback

from ..value_objects import (
    BottomRowSegment,
    CableCategory,
    LayoutSummary,
    SeparatorDecision,
    SeparatorKind,
)
from .tracing import make_logging_trace

logger = logging.getLogger(__name__)

__all__ = [
    "MAX_SEPARATED_CATEGORIES",
    "decide_separator",
    "summarize_layout",
]

MAX_SEPARATED_CATEGORIES = 2

_CATEGORY_ORDER = (
    CableCategory.POWER,
    CableCategory.CONTROL,
    CableCategory.VFD,
    CableCategory.MV,
)


def decide_separator(
    segments: Sequence[BottomRowSegment],
    left_extreme: float | None,
    right_extreme: float | None,
    *,
    floor_y: float,
    top_y: float,
    trace: TraceCallback | None = None,
) -> SeparatorDecision:
    """Decide whether and where to draw the category separator.

    Args:
        segments: Bottom-row segments of the layout.
        left_extreme: Rightmost edge of the left-packed category in px.
        right_extreme: Leftmost edge of the right-packed category in px.
        floor_y: Canvas y of the tray floor.
        top_y: Canvas y of the top of the usable area.
        trace: Trace callback; defaults to module logging.

    Returns:
        The separator decision.
    """
    trace = trace or make_logging_trace(logger)
    present = {segment.category for segment in segments}
    categories = tuple(category for category in _CATEGORY_ORDER if category in present)

    if len(categories) <= 1:
        decision = SeparatorDecision(SeparatorKind.NONE, categories)
    elif len(categories) > MAX_SEPARATED_CATEGORIES:
        logger.warning(
            f"Too many cable types on the tray: {', '.join(c.value for c in categories)}"
        )
        decision = SeparatorDecision(SeparatorKind.WARNING, categories)
    elif CableCategory.MV in categories:
        decision = SeparatorDecision(SeparatorKind.NONE, categories)
    elif (
        left_extreme is None
        or right_extreme is None
        or left_extreme <= 0
        or right_extreme <= 0
        or right_extreme <= left_extreme
    ):
        decision = SeparatorDecision(SeparatorKind.SKIPPED, categories)
    else:
        decision = SeparatorDecision(
            SeparatorKind.LINE,
            categories,
            x=(left_extreme + right_extreme) / 2,
            top_y=top_y,
            bottom_y=floor_y,
        )

    trace(
        "separator.decision",
        {
            "kind": decision.kind.value,
            "categories": [c.value for c in categories],
            "left_extreme": left_extreme,
            "right_extreme": right_extreme,
        },
    )
    return decision


def summarize_layout(
    segments: Sequence[BottomRowSegment],
    spacing_mm: float,
    scale: float,
    usable_width_mm: float | None = None,
) -> LayoutSummary:
    """Aggregate bottom-row segments into occupancy metrics.

    Segments are grouped by category and side, and sorted by left edge
    within each group. Gaps are measured only between neighbours of the same
    group, so the free space between the two packing fronts is never counted
    as occupied. The "without bundle spacing" width caps each gap at the
    nominal spacing.

    When the two packing fronts interleave, gaps of both groups can cover the
    same stretch of floor, so both occupied widths are capped at the usable
    width of the tray.

    Args:
        segments: Bottom-row segments in canvas px.
        spacing_mm: Tray-wide cable spacing in mm.
        scale: Canvas scale in px per mm.
        usable_width_mm: Tray width available to cables; None leaves the
            widths uncapped.

    Returns:
        The summary, with widths in mm.
    """
    spacing_px = spacing_mm * scale
    total_px = sum(segment.width for segment in segments)
    gaps_px = 0.0
    capped_gaps_px = 0.0

    def group_key(segment: BottomRowSegment) -> tuple[str, str]:
        return (segment.category.value, segment.side.value)

    for _, group in groupby(sorted(segments, key=group_key), key=group_key):
        ordered = sorted(group, key=lambda segment: segment.left)
        for previous, current in zip(ordered, ordered[1:]):
            gap = max(current.left - previous.right, 0.0)
            gaps_px += gap
            capped_gaps_px += min(gap, spacing_px)

    total_mm = total_px / scale
    occupied_mm = (total_px + gaps_px) / scale
    occupied_without_mm = (total_px + capped_gaps_px) / scale
    if usable_width_mm is not None:
        occupied_mm = min(occupied_mm, usable_width_mm)
        occupied_without_mm = min(occupied_without_mm, usable_width_mm)
    return LayoutSummary(
        spacing_mm=spacing_mm,
        total_cable_width_mm=total_mm,
        occupied_width_mm=occupied_mm,
        occupied_width_without_bundle_spacing_mm=occupied_without_mm,
        bundle_spacing_contribution_mm=occupied_mm - occupied_without_mm,
        segment_count=len(segments),
        has_bottom_row=bool(segments),
    )
