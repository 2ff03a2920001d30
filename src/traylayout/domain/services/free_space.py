"""Free-space percentage derived from a layout summary."""

from __future__ import annotations

from enum import Enum

from ..value_objects import LayoutSummary, Tray

__all__ = [
    "FreeSpaceLevel",
    "classify_free_space",
    "free_space_percent",
]


class FreeSpaceLevel(str, Enum):
    """Threshold band of a tray's free space.

    Attributes:
        LOW: Below the minimum percentage.
        NORMAL: Within the configured band.
        HIGH: Above the maximum percentage.
        UNKNOWN: No percentage could be computed.
    """

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    UNKNOWN = "unknown"


def free_space_percent(
    tray: Tray,
    summary: LayoutSummary | None,
    *,
    consider_bundle_spacing_as_free: bool = False,
) -> float | None:
    """Percentage of the tray width left free by the bottom row.

    Args:
        tray: The tray the summary was computed for.
        summary: Layout summary, or None when no layout was produced.
        consider_bundle_spacing_as_free: Count bundle spacing as free space.

    Returns:
        ``max(0, (W - occupied) / W * 100)``, or None without a summary or
        a positive tray width.
    """
    width = tray.width_mm
    if summary is None or width <= 0:
        return None
    if consider_bundle_spacing_as_free:
        occupied = summary.occupied_width_without_bundle_spacing_mm
    else:
        occupied = summary.occupied_width_mm
    return max(0.0, (width - occupied) / width * 100)


def classify_free_space(
    percent: float | None,
    min_percent: float | None = None,
    max_percent: float | None = None,
) -> FreeSpaceLevel:
    """Place a free-space percentage in its threshold band."""
    if percent is None:
        return FreeSpaceLevel.UNKNOWN
    if min_percent is not None and percent < min_percent:
        return FreeSpaceLevel.LOW
    if max_percent is not None and percent > max_percent:
        return FreeSpaceLevel.HIGH
    return FreeSpaceLevel.NORMAL
