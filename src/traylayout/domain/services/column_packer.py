"""Column packers for cable bundles.

Packers work in a local left-to-right frame: ``left`` is measured from the
block's starting edge and ``elevation`` from the tray floor to the bottom of
the circle, both in canvas pixels. ``place_block`` maps a packed block onto
the canvas for either tray edge, which gives the mirrored right-to-left
variants without duplicating the packing logic.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from ..value_objects import (
    Cable,
    CableCategory,
    DiameterBucket,
    LayoutSide,
    PlacedCable,
)
from .trefoil import TrefoilGeometry

__all__ = [
    "HEXAGONAL_BUCKETS",
    "HEXAGONAL_MIN_USABLE_HEIGHT_MM",
    "LocalPlacement",
    "PackedBlock",
    "chunk_cables",
    "hexagonal_lift",
    "pack_hexagonal",
    "pack_phase_rotation",
    "place_block",
    "stack_columns",
    "trefoil_block",
    "uses_hexagonal_packing",
]

HEXAGONAL_BUCKETS = frozenset(
    {DiameterBucket.RANGE_40_1_45, DiameterBucket.RANGE_45_1_60}
)
HEXAGONAL_MIN_USABLE_HEIGHT_MM = 45.0


@dataclass(frozen=True)
class LocalPlacement:
    """A circle inside a packed block.

    Attributes:
        cable: The placed cable.
        left: Left edge offset from the block start in px.
        elevation: Height of the circle's bottom above the floor in px.
        diameter: Circle diameter in px.
        on_floor: Whether the cable counts as a bottom-row cable.
    """

    cable: Cable
    left: float
    elevation: float
    diameter: float
    on_floor: bool


@dataclass(frozen=True)
class PackedBlock:
    """Placements plus the distance the cursor moves past the block.

    ``trefoil`` marks a block holding one solved trefoil cluster.
    """

    placements: tuple[LocalPlacement, ...]
    advance: float
    trefoil: bool = False


def chunk_cables(cables: Sequence[Cable], size: int) -> list[list[Cable]]:
    """Split cables into consecutive chunks of at most ``size``."""
    size = max(int(size), 1)
    return [list(cables[i : i + size]) for i in range(0, len(cables), size)]


def uses_hexagonal_packing(bucket: DiameterBucket | None, usable_height_mm: float) -> bool:
    """Hexagonal packing applies to the two largest buckets in tall trays."""
    return bucket in HEXAGONAL_BUCKETS and usable_height_mm > HEXAGONAL_MIN_USABLE_HEIGHT_MM


def stack_columns(
    cables: Sequence[Cable],
    rows: int,
    columns: int | None = None,
    *,
    scale: float,
    spacing_px: float,
    column_gap_px: float | None = None,
) -> PackedBlock:
    """Stack cables bottom-up in columns.

    Cables are dealt into columns in order. Each column takes at most
    ``rows`` cables, fewer when the remaining cables would otherwise leave
    later columns empty. A column is as wide as its largest cable.

    Args:
        cables: Cables sorted by descending diameter.
        rows: Maximum cables per column.
        columns: Target column count; defaults to the minimum needed.
        scale: Canvas scale in px per mm.
        spacing_px: Gap between stacked cables, and after the last column.
        column_gap_px: Gap between columns; defaults to ``spacing_px``.

    Returns:
        The packed block. The first cable of every column is on the floor.
    """
    rows = max(int(rows), 1)
    total = len(cables)
    if total == 0:
        return PackedBlock(placements=(), advance=0.0)

    needed = math.ceil(total / rows)
    column_count = max(min(columns or needed, total), needed)
    gap = spacing_px if column_gap_px is None else column_gap_px

    placements: list[LocalPlacement] = []
    cursor = 0.0
    index = 0
    for column in range(column_count):
        remaining = total - index
        if remaining <= 0:
            break
        take = min(rows, math.ceil(remaining / (column_count - column)))
        column_cables = cables[index : index + take]
        index += take

        elevation = 0.0
        width = 0.0
        for row, cable in enumerate(column_cables):
            diameter = cable.diameter_mm * scale
            placements.append(
                LocalPlacement(cable, cursor, elevation, diameter, on_floor=row == 0)
            )
            elevation += diameter + spacing_px
            width = max(width, diameter)

        cursor += width + (gap if index < total else spacing_px)

    return PackedBlock(placements=tuple(placements), advance=cursor)


def hexagonal_lift(diameter_px: float, spacing_px: float) -> float:
    """Vertical offset of a nested cable: d/2 * sqrt(3)/2 + d/2 - 2 * spacing."""
    return (diameter_px / 2) * (math.sqrt(3) / 2) + diameter_px / 2 - spacing_px * 2


def _nest_elevation(
    nested: LocalPlacement, neighbours: Sequence[LocalPlacement], spacing_px: float
) -> float:
    """Elevation of a nested cable, raised where it would cut into a neighbour."""
    elevation = max(hexagonal_lift(nested.diameter, spacing_px), 0.0)
    radius = nested.diameter / 2
    center_x = nested.left + radius
    for other in neighbours:
        other_radius = other.diameter / 2
        reach = radius + other_radius
        dx = abs(center_x - (other.left + other_radius))
        if dx >= reach:
            continue
        min_center_y = other.elevation + other_radius + math.sqrt(reach * reach - dx * dx)
        elevation = max(elevation, min_center_y - radius)
    return elevation


def pack_hexagonal(
    cables: Sequence[Cable], *, scale: float, spacing_px: float
) -> PackedBlock:
    """Pack cables in an offset hexagonal pattern.

    Every even-indexed cable from index 2 onward is lifted off the floor and
    shifted back to nest between the two floor cables before it. Lifted
    cables do not move the cursor and are not bottom-row cables.

    Args:
        cables: Cables sorted by descending diameter.
        scale: Canvas scale in px per mm.
        spacing_px: Gap between neighbouring cables.

    Returns:
        The packed block.
    """
    placements: list[LocalPlacement] = []
    floor: list[LocalPlacement] = []
    cursor = 0.0
    for index, cable in enumerate(cables):
        diameter = cable.diameter_mm * scale
        if index >= 2 and index % 2 == 0:
            left = max(cursor - (diameter + spacing_px) * 1.5, 0.0)
            nested = LocalPlacement(cable, left, 0.0, diameter, on_floor=False)
            elevation = _nest_elevation(nested, floor[-2:], spacing_px)
            placements.append(
                LocalPlacement(cable, left, elevation, diameter, on_floor=False)
            )
            continue

        placement = LocalPlacement(cable, cursor, 0.0, diameter, on_floor=True)
        placements.append(placement)
        floor.append(placement)
        cursor += diameter + spacing_px

    return PackedBlock(placements=tuple(placements), advance=cursor)


def pack_phase_rotation(
    cables: Sequence[Cable],
    *,
    scale: float,
    spacing_px: float,
    triple_gap_px: float,
) -> PackedBlock:
    """Lay phase-rotated cables out as consecutive triangles.

    Cables are taken three at a time: the first two rest on the floor and the
    third sits centred above them. Consecutive triples are separated by
    ``triple_gap_px`` on top of the regular spacing.

    Args:
        cables: Cables in phase-rotated order.
        scale: Canvas scale in px per mm.
        spacing_px: Gap between neighbouring cables.
        triple_gap_px: Extra gap between consecutive triples.

    Returns:
        The packed block.
    """
    placements: list[LocalPlacement] = []
    cursor = 0.0
    for start in range(0, len(cables), 3):
        if start:
            cursor += triple_gap_px
        triple = cables[start : start + 3]
        floor: list[LocalPlacement] = []
        for cable in triple[:2]:
            diameter = cable.diameter_mm * scale
            placement = LocalPlacement(cable, cursor, 0.0, diameter, on_floor=True)
            placements.append(placement)
            floor.append(placement)
            cursor += diameter + spacing_px

        if len(triple) == 3:
            top = triple[2]
            diameter = top.diameter_mm * scale
            centers = [p.left + p.diameter / 2 for p in floor]
            left = max(sum(centers) / 2 - diameter / 2, 0.0)
            nested = LocalPlacement(top, left, 0.0, diameter, on_floor=False)
            elevation = _nest_elevation(nested, floor, spacing_px)
            placements.append(
                LocalPlacement(top, left, elevation, diameter, on_floor=False)
            )

    return PackedBlock(placements=tuple(placements), advance=cursor)


def trefoil_block(geometry: TrefoilGeometry, trailing_px: float) -> PackedBlock:
    """Convert a solved trefoil into a packed block."""
    placements = tuple(
        LocalPlacement(
            position.cable,
            position.left,
            max(-position.bottom_offset, 0.0),
            position.diameter,
            on_floor=position.on_floor,
        )
        for position in geometry.positions
    )
    return PackedBlock(
        placements=placements, advance=geometry.width + trailing_px, trefoil=True
    )


def place_block(
    block: PackedBlock,
    cursor: float,
    side: LayoutSide,
    floor_y: float,
    category: CableCategory,
    cluster: int | None = None,
) -> tuple[list[PlacedCable], float]:
    """Map a packed block onto the canvas.

    Left-side blocks grow rightward from ``cursor``; right-side blocks are
    mirrored and grow leftward from it.

    Args:
        block: Block in its local frame.
        cursor: Current horizontal cursor in canvas px.
        side: Edge the category packs from.
        floor_y: Canvas y of the tray floor (top of the rung strip).
        category: Category recorded on the placements.
        cluster: Trefoil cluster index recorded on the placements.

    Returns:
        Absolute placements and the advanced cursor.
    """
    placed: list[PlacedCable] = []
    for local in block.placements:
        radius = local.diameter / 2
        if side is LayoutSide.LEFT:
            left = cursor + local.left
        else:
            left = cursor - local.left - local.diameter
        placed.append(
            PlacedCable(
                cable=local.cable,
                category=category,
                side=side,
                center_x=left + radius,
                center_y=floor_y - local.elevation - radius,
                radius=radius,
                on_floor=local.on_floor,
                cluster=cluster,
            )
        )

    if side is LayoutSide.LEFT:
        return placed, cursor + block.advance
    return placed, cursor - block.advance
