"""Trefoil grouping and geometry.

A trefoil is three co-routed cables laid in a triangle: two on the tray
floor and the third resting on top of them. Grouping decides which cables
form trefoils. The solver computes the triangle for a concrete triple, or
reports why it cannot.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from ..value_objects import Cable

__all__ = [
    "BOTTOM_ROW_TOLERANCE_PX",
    "TrefoilFailure",
    "TrefoilGeometry",
    "TrefoilGroup",
    "TrefoilGroupKind",
    "TrefoilPosition",
    "intersect_circles",
    "solve_trefoil",
    "split_trefoil_groups",
]

# A trefoil cable within this distance of the floor counts as bottom row.
BOTTOM_ROW_TOLERANCE_PX = 0.5

_MIN_CENTER_DISTANCE = 1e-6


class TrefoilGroupKind(str, Enum):
    TREFOIL = "trefoil"
    NORMAL = "normal"


@dataclass(frozen=True)
class TrefoilGroup:
    """A run of cables inside a bundle.

    Attributes:
        kind: TREFOIL for an exact co-routed triple, NORMAL otherwise.
        cables: Cables of the group in placement order.
    """

    kind: TrefoilGroupKind
    cables: tuple[Cable, ...]

    @property
    def is_trefoil(self) -> bool:
        return self.kind is TrefoilGroupKind.TREFOIL


def split_trefoil_groups(
    cables: Sequence[Cable], enabled: bool
) -> list[TrefoilGroup]:
    """Partition a bundle into trefoil triples and normal runs.

    Cables are keyed by their (origin, destination) pair. For each key the
    cables are sliced, in input order, into consecutive triples; a remainder
    that does not fill a triple stays normal, as do cables missing either
    location. Each triple is emitted where its first cable appears, and
    normal cables between triples are kept together in input order.

    Args:
        cables: Cables of one bundle, already in placement order.
        enabled: Whether trefoil grouping is enabled for the category.

    Returns:
        Ordered groups. Empty input yields an empty list.
    """
    cables = list(cables)
    if not cables:
        return []
    if not enabled or len(cables) < 3:
        return [TrefoilGroup(TrefoilGroupKind.NORMAL, tuple(cables))]

    indices_by_route: dict[tuple[str, str], list[int]] = {}
    for index, cable in enumerate(cables):
        key = cable.route_key
        if key is None:
            continue
        indices_by_route.setdefault(key, []).append(index)

    triples_by_start: dict[int, tuple[Cable, ...]] = {}
    consumed: set[int] = set()
    for indices in indices_by_route.values():
        for start in range(0, len(indices) - 2, 3):
            triple = indices[start : start + 3]
            triples_by_start[triple[0]] = tuple(cables[i] for i in triple)
            consumed.update(triple[1:])

    groups: list[TrefoilGroup] = []
    pending: list[Cable] = []
    for index, cable in enumerate(cables):
        if index in consumed:
            continue
        triple = triples_by_start.get(index)
        if triple is None:
            pending.append(cable)
            continue
        if pending:
            groups.append(TrefoilGroup(TrefoilGroupKind.NORMAL, tuple(pending)))
            pending = []
        groups.append(TrefoilGroup(TrefoilGroupKind.TREFOIL, triple))

    if pending:
        groups.append(TrefoilGroup(TrefoilGroupKind.NORMAL, tuple(pending)))
    return groups


def intersect_circles(
    center1: tuple[float, float],
    radius1: float,
    center2: tuple[float, float],
    radius2: float,
) -> tuple[tuple[float, float], tuple[float, float]] | None:
    """Intersection points of two circles.

    Args:
        center1: Centre of the first circle.
        radius1: Radius of the first circle.
        center2: Centre of the second circle.
        radius2: Radius of the second circle.

    Returns:
        The two intersection points (equal when the circles touch), or None
        when the circles are concentric, too far apart, or nested.
    """
    x1, y1 = center1
    x2, y2 = center2
    dx = x2 - x1
    dy = y2 - y1
    distance = math.hypot(dx, dy)
    if not math.isfinite(distance) or distance < _MIN_CENTER_DISTANCE:
        return None
    if distance > radius1 + radius2 or distance < abs(radius1 - radius2):
        return None

    a = (radius1 * radius1 - radius2 * radius2 + distance * distance) / (2 * distance)
    h_squared = radius1 * radius1 - a * a
    if not math.isfinite(h_squared) or h_squared < 0:
        return None
    h = math.sqrt(h_squared)

    base_x = x1 + dx * a / distance
    base_y = y1 + dy * a / distance
    offset_x = -dy * h / distance
    offset_y = dx * h / distance
    return (
        (base_x + offset_x, base_y + offset_y),
        (base_x - offset_x, base_y - offset_y),
    )


@dataclass(frozen=True)
class TrefoilPosition:
    """Placement of one trefoil cable relative to the cluster.

    Attributes:
        cable: The placed cable.
        left: Left edge offset from the cluster's left edge in px.
        bottom_offset: Vertical offset of the circle's bottom from the floor
            in px; zero for floor cables, negative (upward) for the top cable.
        diameter: Circle diameter in px.
    """

    cable: Cable
    left: float
    bottom_offset: float
    diameter: float

    @property
    def on_floor(self) -> bool:
        return abs(self.bottom_offset) < BOTTOM_ROW_TOLERANCE_PX


@dataclass(frozen=True)
class TrefoilGeometry:
    positions: tuple[TrefoilPosition, ...]
    width: float


@dataclass(frozen=True)
class TrefoilFailure:
    """Solver outcome when no tangent triangle exists."""

    reason: str


def solve_trefoil(
    cables: Sequence[Cable],
    scale: float,
    spacing_px: float = 0.0,
) -> TrefoilGeometry | TrefoilFailure:
    """Compute the triangular arrangement of three cables.

    The first two cables sit on the floor side by side; the third is placed
    tangent to both, above them. Failure is returned, never raised, so the
    caller can fall back to grid packing.

    Args:
        cables: Exactly three cables.
        scale: Canvas scale in px per mm.
        spacing_px: Gap added between every pair of touching circles.

    Returns:
        TrefoilGeometry on success, TrefoilFailure otherwise.
    """
    if len(cables) != 3:
        return TrefoilFailure(f"expected 3 cables, got {len(cables)}")

    first, second, third = cables
    r1 = first.diameter_mm * scale / 2
    r2 = second.diameter_mm * scale / 2
    r3 = third.diameter_mm * scale / 2
    if not all(math.isfinite(r) for r in (r1, r2, r3)):
        return TrefoilFailure("non-finite radius")

    # Canvas y grows downward, so centres on the floor have negative y.
    x1, y1 = r1, -r1
    x2, y2 = x1 + r1 + r2 + spacing_px, -r2

    candidates = intersect_circles(
        (x1, y1), r1 + r3 + spacing_px, (x2, y2), r2 + r3 + spacing_px
    )
    if candidates is None:
        return TrefoilFailure("no tangent position for the top cable")

    top_x, top_y = min(candidates, key=lambda point: point[1])

    lefts = [0.0, x2 - r2, top_x - r3]
    offsets = [0.0, 0.0, top_y + r3]
    min_left = min(lefts)
    lefts = [left - min_left for left in lefts]

    radii = (r1, r2, r3)
    positions = tuple(
        TrefoilPosition(cable, left, offset, radius * 2)
        for cable, left, offset, radius in zip(cables, lefts, offsets, radii)
    )
    width = max(left + 2 * radius for left, radius in zip(lefts, radii))
    return TrefoilGeometry(positions=positions, width=width)
