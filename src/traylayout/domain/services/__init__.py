"""Domain services for cable tray layout.

This package provides the layout engine, one module per step:
- Diameter classification and bundle map construction
- Trefoil grouping and geometry
- Phase rotation
- Row/column capacity planning and column packing
- Per-category composition and tray orchestration
- Separator decision, occupancy summary and free-space percentage
"""

from .bundle_composer import (
    Composition,
    LayoutContext,
    compose_category,
    compose_grounding,
)
from .bundle_map import BundleMap, build_bundle_map, normalize_bundle_map
from .cable_classification import (
    filter_cables_by_tray,
    match_cable_category,
    resolve_category,
    routing_contains_tray,
)
from .capacity_planner import CapacityPlan, plan_capacity
from .column_packer import (
    LocalPlacement,
    PackedBlock,
    chunk_cables,
    pack_hexagonal,
    pack_phase_rotation,
    place_block,
    stack_columns,
    trefoil_block,
    uses_hexagonal_packing,
)
from .diameter_classifier import bucket_index, classify_diameter
from .free_space import FreeSpaceLevel, classify_free_space, free_space_percent
from .phase_rotation import apply_phase_rotation, is_phase_rotation_eligible
from .separator import decide_separator, summarize_layout
from .tracing import make_logging_trace, null_trace
from .tray_layout import (
    LayoutStage,
    TrayLayoutResult,
    compute_tray_layout,
    plan_category_sides,
    resolve_spacing,
)
from .trefoil import (
    TrefoilFailure,
    TrefoilGeometry,
    TrefoilGroup,
    TrefoilGroupKind,
    TrefoilPosition,
    intersect_circles,
    solve_trefoil,
    split_trefoil_groups,
)

__all__ = [
    # Classification
    "bucket_index",
    "classify_diameter",
    "match_cable_category",
    "resolve_category",
    "routing_contains_tray",
    "filter_cables_by_tray",
    "BundleMap",
    "build_bundle_map",
    "normalize_bundle_map",
    # Trefoil
    "TrefoilFailure",
    "TrefoilGeometry",
    "TrefoilGroup",
    "TrefoilGroupKind",
    "TrefoilPosition",
    "intersect_circles",
    "solve_trefoil",
    "split_trefoil_groups",
    # Phase rotation
    "apply_phase_rotation",
    "is_phase_rotation_eligible",
    # Packing
    "CapacityPlan",
    "plan_capacity",
    "LocalPlacement",
    "PackedBlock",
    "chunk_cables",
    "pack_hexagonal",
    "pack_phase_rotation",
    "place_block",
    "stack_columns",
    "trefoil_block",
    "uses_hexagonal_packing",
    # Composition
    "Composition",
    "LayoutContext",
    "compose_category",
    "compose_grounding",
    # Orchestration
    "LayoutStage",
    "TrayLayoutResult",
    "compute_tray_layout",
    "plan_category_sides",
    "resolve_spacing",
    # Separator, summary, free space
    "decide_separator",
    "summarize_layout",
    "FreeSpaceLevel",
    "classify_free_space",
    "free_space_percent",
    # Tracing
    "make_logging_trace",
    "null_trace",
]
