"""Per-category bundle composition.

The composer turns the bundles of one category into canvas placements. It
threads a horizontal cursor through every step: bundles, trefoil clusters,
chunks and the spacing between them, and returns the advanced cursor to the
orchestrator. Nothing is drawn here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from traylayout.contracts.protocols import TraceCallback

from ..value_objects import (
    Cable,
    CableCategory,
    CategoryLayoutConfig,
    DiameterBucket,
    LayoutConfiguration,
    LayoutSide,
    PlacedCable,
    Tray,
)
from .capacity_planner import plan_capacity
from .column_packer import (
    PackedBlock,
    chunk_cables,
    pack_hexagonal,
    pack_phase_rotation,
    place_block,
    stack_columns,
    trefoil_block,
    uses_hexagonal_packing,
)
from .phase_rotation import apply_phase_rotation, is_phase_rotation_eligible
from .trefoil import TrefoilFailure, solve_trefoil, split_trefoil_groups

__all__ = [
    "Composition",
    "LayoutContext",
    "compose_category",
    "compose_grounding",
]


@dataclass(frozen=True)
class LayoutContext:
    """Inputs shared by every composition step of one layout call.

    Attributes:
        tray: Tray being laid out.
        scale: Canvas scale in px per mm.
        spacing_mm: Effective tray-wide cable spacing in mm.
        layout: Per-category configuration.
        floor_y: Canvas y of the tray floor (top of the rung strip).
        trace: Trace callback for diagnostics.
    """

    tray: Tray
    scale: float
    spacing_mm: float
    layout: LayoutConfiguration
    floor_y: float
    trace: TraceCallback

    @property
    def spacing_px(self) -> float:
        return self.spacing_mm * self.scale

    @property
    def usable_height_mm(self) -> float:
        return self.tray.usable_height_mm


@dataclass(frozen=True)
class Composition:
    """Result of composing one category.

    Attributes:
        placements: Placed cables in placement order.
        cursor: Cursor after the category, in canvas px.
        deferred_grounding: MV grounding cables left for a separate pass.
    """

    placements: tuple[PlacedCable, ...]
    cursor: float
    deferred_grounding: tuple[Cable, ...] = ()


def _move(cursor: float, amount: float, side: LayoutSide) -> float:
    return cursor + amount if side is LayoutSide.LEFT else cursor - amount


def _sorted_by_diameter(cables: Sequence[Cable]) -> list[Cable]:
    return sorted(cables, key=lambda cable: cable.diameter_mm, reverse=True)


def _max_diameter(cables: Sequence[Cable]) -> float:
    return max((cable.diameter_mm for cable in cables), default=0.0)


def _pack_normal(
    ctx: LayoutContext,
    category: CableCategory,
    config: CategoryLayoutConfig,
    cables: Sequence[Cable],
    bucket: DiameterBucket | None,
    bundle_spacing_px: float,
) -> list[PackedBlock]:
    """Chunk cables by grid capacity and pack each chunk."""
    spacing_mm = config.resolved_spacing(ctx.spacing_mm)
    spacing_px = spacing_mm * ctx.scale
    plan = plan_capacity(
        ctx.usable_height_mm,
        cables,
        category,
        config,
        spacing_mm=spacing_mm,
        trace=ctx.trace,
    )
    hexagonal = uses_hexagonal_packing(bucket, ctx.usable_height_mm)
    column_gap_px = bundle_spacing_px if config.max_columns == 1 else None

    blocks: list[PackedBlock] = []
    for chunk in chunk_cables(cables, plan.capacity):
        if hexagonal:
            blocks.append(pack_hexagonal(chunk, scale=ctx.scale, spacing_px=spacing_px))
            continue
        chunk_plan = plan_capacity(
            ctx.usable_height_mm,
            chunk,
            category,
            config,
            spacing_mm=spacing_mm,
            trace=ctx.trace,
        )
        blocks.append(
            stack_columns(
                chunk,
                chunk_plan.rows,
                chunk_plan.columns,
                scale=ctx.scale,
                spacing_px=spacing_px,
                column_gap_px=column_gap_px,
            )
        )
    return blocks


def _bundle_blocks(
    ctx: LayoutContext,
    category: CableCategory,
    config: CategoryLayoutConfig,
    cables: Sequence[Cable],
    bucket: DiameterBucket | None,
    bundle_spacing_px: float,
) -> list[tuple[PackedBlock, float]]:
    """Pack one bundle into blocks, each paired with the gap that precedes it."""
    spacing_px = config.resolved_spacing(ctx.spacing_mm) * ctx.scale

    if is_phase_rotation_eligible(category, config, cables):
        rotated = apply_phase_rotation(cables)
        triple_gap = bundle_spacing_px if config.trefoil_bundle_spacing else 0.0
        ctx.trace(
            "phase_rotation.applied",
            {"category": category.value, "cables": len(rotated)},
        )
        block = pack_phase_rotation(
            rotated, scale=ctx.scale, spacing_px=spacing_px, triple_gap_px=triple_gap
        )
        return [(block, 0.0)]

    groups = split_trefoil_groups(cables, config.trefoil and category.supports_trefoil)
    result: list[tuple[PackedBlock, float]] = []
    previous_trefoil = False
    for position, group in enumerate(groups):
        if position == 0:
            gap = 0.0
        elif previous_trefoil and group.is_trefoil and not config.trefoil_bundle_spacing:
            gap = 0.0
        else:
            gap = bundle_spacing_px

        if group.is_trefoil:
            solved = solve_trefoil(group.cables, ctx.scale)
            if isinstance(solved, TrefoilFailure):
                ctx.trace(
                    "trefoil.failed",
                    {
                        "category": category.value,
                        "cables": [cable.id for cable in group.cables],
                        "reason": solved.reason,
                    },
                )
                fallback = _pack_normal(
                    ctx, category, config, group.cables, bucket, bundle_spacing_px
                )
                for index, block in enumerate(fallback):
                    result.append((block, gap if index == 0 else bundle_spacing_px))
            else:
                result.append((trefoil_block(solved, spacing_px), gap))
        else:
            blocks = _pack_normal(
                ctx, category, config, group.cables, bucket, bundle_spacing_px
            )
            for index, block in enumerate(blocks):
                result.append((block, gap if index == 0 else bundle_spacing_px))
        previous_trefoil = group.is_trefoil
    return result


def compose_category(
    ctx: LayoutContext,
    category: CableCategory,
    bundles: Mapping[DiameterBucket, Sequence[Cable]],
    cursor: float,
    side: LayoutSide,
) -> Composition:
    """Compose every bundle of a category from ``cursor`` toward ``side``'s far edge.

    Bundles are taken in descending order of their largest cable. Within a
    bundle, phase rotation is used when eligible; otherwise trefoil triples
    are solved (falling back to grid packing when the solver fails) and the
    remaining cables are chunked and packed. Bundle spacing separates chunks,
    groups and bundles, but is not added after the last one.

    MV grounding cables are not placed here; they are returned in
    ``deferred_grounding`` for ``compose_grounding``.

    Args:
        ctx: Per-call layout context.
        category: Category being composed.
        bundles: Diameter bucket to cables.
        cursor: Starting cursor in canvas px.
        side: Edge the category packs from.

    Returns:
        The composition with the advanced cursor.
    """
    config = ctx.layout.for_category(category)
    ctx.trace(
        "category.start",
        {"category": category.value, "side": side.value, "cursor": cursor},
    )

    deferred: list[Cable] = []
    entries: list[tuple[DiameterBucket, list[Cable]]] = []
    for bucket, cables in bundles.items():
        cables = list(cables)
        if category is CableCategory.MV:
            deferred.extend(cable for cable in cables if cable.is_grounding)
            cables = [cable for cable in cables if not cable.is_grounding]
        if cables:
            entries.append((bucket, _sorted_by_diameter(cables)))
    entries.sort(key=lambda entry: _max_diameter(entry[1]), reverse=True)

    placements: list[PlacedCable] = []
    clusters = 0
    for position, (bucket, cables) in enumerate(entries):
        bundle_spacing_px = (
            config.bundle_spacing.spacing_mm(_max_diameter(cables)) * ctx.scale
        )
        for block, gap in _bundle_blocks(
            ctx, category, config, cables, bucket, bundle_spacing_px
        ):
            cursor = _move(cursor, gap, side)
            cluster = None
            if block.trefoil:
                cluster, clusters = clusters, clusters + 1
            placed, cursor = place_block(
                block, cursor, side, ctx.floor_y, category, cluster=cluster
            )
            placements.extend(placed)

        if position < len(entries) - 1:
            cursor = _move(cursor, bundle_spacing_px, side)

    ctx.trace(
        "category.end",
        {
            "category": category.value,
            "side": side.value,
            "cursor": cursor,
            "placed": len(placements),
            "deferred_grounding": len(deferred),
        },
    )
    return Composition(
        placements=tuple(placements),
        cursor=cursor,
        deferred_grounding=tuple(deferred),
    )


def compose_grounding(
    ctx: LayoutContext, cables: Sequence[Cable], cursor: float
) -> Composition:
    """Pack MV grounding cables right-to-left from ``cursor``.

    Grounding cables use the MV configuration and plain column stacking.
    """
    if not cables:
        return Composition(placements=(), cursor=cursor)

    config = ctx.layout.mv
    ordered = _sorted_by_diameter(cables)
    bundle_spacing_px = (
        config.bundle_spacing.spacing_mm(_max_diameter(ordered)) * ctx.scale
    )
    ctx.trace("grounding.start", {"cables": len(ordered), "cursor": cursor})

    placements: list[PlacedCable] = []
    blocks = _pack_normal(
        ctx, CableCategory.MV, config, ordered, None, bundle_spacing_px
    )
    for index, block in enumerate(blocks):
        if index:
            cursor = _move(cursor, bundle_spacing_px, LayoutSide.RIGHT)
        placed, cursor = place_block(
            block, cursor, LayoutSide.RIGHT, ctx.floor_y, CableCategory.MV
        )
        placements.extend(placed)

    return Composition(placements=tuple(placements), cursor=cursor)
