"""Text and JSON formatters for tray layout results."""

from __future__ import annotations

import json
from typing import Any

from traylayout.domain.services.free_space import FreeSpaceLevel
from traylayout.domain.services.tray_layout import TrayLayoutResult
from traylayout.domain.value_objects import CableCategory, LayoutSummary


class LayoutSummaryFormatter:
    """Formats a layout summary as a plain-text report."""

    def format(
        self,
        summary: LayoutSummary | None,
        *,
        tray_name: str | None = None,
        free_percent: float | None = None,
        level: FreeSpaceLevel | None = None,
    ) -> str:
        """Format the summary, optionally with the free-space percentage."""
        title = "TRAY LAYOUT SUMMARY"
        if tray_name:
            title = f"{title}: {tray_name}"
        lines = [title, "=" * 50]

        if summary is None:
            lines.append("No layout: tray width and height are required.")
            return "\n".join(lines)

        lines.extend(
            [
                f"{'Cable spacing:':<40}{summary.spacing_mm:>8.1f} mm",
                f"{'Total cable width:':<40}{summary.total_cable_width_mm:>8.1f} mm",
                f"{'Occupied width:':<40}{summary.occupied_width_mm:>8.1f} mm",
                f"{'Occupied width (no bundle spacing):':<40}"
                f"{summary.occupied_width_without_bundle_spacing_mm:>8.1f} mm",
                f"{'Bundle spacing contribution:':<40}"
                f"{summary.bundle_spacing_contribution_mm:>8.1f} mm",
                f"{'Bottom-row segments:':<40}{summary.segment_count:>8d}",
            ]
        )
        if free_percent is not None:
            line = f"{'Free space:':<40}{free_percent:>8.1f} %"
            if level is not None:
                line = f"{line} ({level.value})"
            lines.append(line)
        return "\n".join(lines)


class LayoutJsonFormatter:
    """Formats a layout result as JSON."""

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def to_dict(
        self,
        result: TrayLayoutResult,
        *,
        free_percent: float | None = None,
        level: FreeSpaceLevel | None = None,
    ) -> dict[str, Any]:
        counts: dict[str, int] = {}
        for category in CableCategory:
            placed = result.placements_for(category)
            if placed:
                counts[category.value] = len(placed)

        separator = None
        if result.separator is not None:
            separator = {
                "kind": result.separator.kind.value,
                "categories": [c.value for c in result.separator.categories],
                "x": result.separator.x,
            }

        return {
            "tray": result.tray.name,
            "stage": result.stage.value,
            "canvas": {"width": result.canvas_width, "height": result.canvas_height},
            "placed_cables": counts,
            "separator": separator,
            "summary": result.summary.to_dict() if result.summary else None,
            "free_space_percent": free_percent,
            "free_space_level": level.value if level is not None else None,
        }

    def format(
        self,
        result: TrayLayoutResult,
        *,
        free_percent: float | None = None,
        level: FreeSpaceLevel | None = None,
    ) -> str:
        return json.dumps(
            self.to_dict(result, free_percent=free_percent, level=level),
            indent=self.indent,
        )
