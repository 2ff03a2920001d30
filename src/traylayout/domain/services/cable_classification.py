"""Cable categorisation and tray routing filters."""

from __future__ import annotations

from typing import Iterable

from ..value_objects import Cable, CableCategory

__all__ = [
    "filter_cables_by_tray",
    "match_cable_category",
    "resolve_category",
    "routing_contains_tray",
]


def match_cable_category(purpose: str | None) -> CableCategory | None:
    """Derive a cable category from free-text purpose.

    Rules are checked in order: an "mv" prefix or "medium voltage" is MV,
    "vfd" anywhere is VFD, a "power" prefix or word is power, and
    "control" anywhere is control.

    Returns:
        The category, or None when the purpose matches nothing.
    """
    if not purpose:
        return None
    normalized = purpose.strip().lower()
    if not normalized:
        return None

    if normalized.startswith("mv") or "medium voltage" in normalized:
        return CableCategory.MV
    if "vfd" in normalized:
        return CableCategory.VFD
    if normalized.startswith("power") or " power" in normalized:
        return CableCategory.POWER
    if "control" in normalized:
        return CableCategory.CONTROL
    return None


def resolve_category(cable: Cable) -> CableCategory | None:
    """Explicit category if set, otherwise the one matched from purpose."""
    if cable.category is not None:
        return cable.category
    return match_cable_category(cable.purpose)


def routing_contains_tray(routing: str | None, tray_name: str) -> bool:
    """Whether a slash-separated routing names the tray (case-insensitive)."""
    if not routing:
        return False
    target = tray_name.strip().lower()
    if not target:
        return False
    return any(segment.strip().lower() == target for segment in routing.split("/"))


def filter_cables_by_tray(cables: Iterable[Cable], tray_name: str) -> list[Cable]:
    """Cables whose routing passes through the named tray, in input order."""
    return [cable for cable in cables if routing_contains_tray(cable.routing, tray_name)]
