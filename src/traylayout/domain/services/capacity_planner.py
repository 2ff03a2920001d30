"""Row/column capacity planning for cable bundles."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from traylayout.contracts.protocols import TraceCallback

from ..value_objects import Cable, CableCategory, CategoryLayoutConfig
from .tracing import make_logging_trace

logger = logging.getLogger(__name__)

__all__ = ["CapacityPlan", "plan_capacity"]


@dataclass(frozen=True)
class CapacityPlan:
    """Grid chosen for a bundle.

    Attributes:
        rows: Cables stacked per column.
        columns: Number of columns.
    """

    rows: int
    columns: int

    @property
    def capacity(self) -> int:
        """Cables that fit in the grid."""
        return self.rows * self.columns


def plan_capacity(
    usable_height_mm: float,
    cables: Sequence[Cable],
    category: CableCategory,
    config: CategoryLayoutConfig,
    *,
    spacing_mm: float,
    trace: TraceCallback | None = None,
) -> CapacityPlan:
    """Compute how many rows and columns a bundle needs.

    Rows are bounded by both the configured maximum and what physically
    fits in the usable height. Columns follow from the rows; when they
    exceed the configured maximum, rows are reduced one at a time, and if
    that is not enough the columns are clamped and the rows recomputed.
    A two-cable bundle outside MV always lays out side by side.

    Args:
        usable_height_mm: Tray height above the rung profile in mm.
        cables: Cables of the bundle.
        category: Category of the bundle.
        config: Layout limits for the category.
        spacing_mm: Gap between stacked cables in mm.
        trace: Trace callback; defaults to module logging.

    Returns:
        The capacity plan.
    """
    trace = trace or make_logging_trace(logger)
    count = len(cables)
    max_diameter = max((cable.diameter_mm for cable in cables), default=0.0)

    if count == 0 or max_diameter <= 0:
        plan = CapacityPlan(rows=1, columns=count)
        trace(
            "capacity.fallback",
            {"category": category.value, "cables": count, "max_diameter": max_diameter},
        )
        return plan

    if count == 2 and category is not CableCategory.MV:
        plan = CapacityPlan(rows=1, columns=2)
        trace("capacity.two_cables", {"category": category.value})
        return plan

    spacing = max(spacing_mm, 0.0)
    per_cable_height = max_diameter + spacing
    physical_rows = max(
        math.floor((max(usable_height_mm, 0.0) + spacing) / per_cable_height), 1
    )
    allowed_rows = min(config.max_rows, physical_rows)

    rows = allowed_rows
    columns = math.ceil(count / rows)
    while columns > config.max_columns and rows > 1:
        rows -= 1
        columns = math.ceil(count / rows)

    if columns > config.max_columns:
        columns = config.max_columns
        rows = max(min(math.ceil(count / columns), allowed_rows), 1)

    plan = CapacityPlan(rows=rows, columns=columns)
    trace(
        "capacity.plan",
        {
            "category": category.value,
            "cables": count,
            "max_diameter": max_diameter,
            "physical_rows": physical_rows,
            "max_rows": config.max_rows,
            "max_columns": config.max_columns,
            "rows": rows,
            "columns": columns,
        },
    )
    return plan
