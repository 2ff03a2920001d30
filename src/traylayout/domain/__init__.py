"""Domain layer - cable tray layout model and engine."""

from .services import (
    FreeSpaceLevel,
    LayoutStage,
    TrayLayoutResult,
    build_bundle_map,
    classify_diameter,
    compute_tray_layout,
)
from .value_objects import (
    BottomRowSegment,
    BundleSpacing,
    Cable,
    CableCategory,
    CategoryLayoutConfig,
    DiameterBucket,
    LayoutConfiguration,
    LayoutSide,
    LayoutSummary,
    PlacedCable,
    SeparatorDecision,
    SeparatorKind,
    Tray,
)

__all__ = [
    "BottomRowSegment",
    "BundleSpacing",
    "Cable",
    "CableCategory",
    "CategoryLayoutConfig",
    "DiameterBucket",
    "FreeSpaceLevel",
    "LayoutConfiguration",
    "LayoutSide",
    "LayoutStage",
    "LayoutSummary",
    "PlacedCable",
    "SeparatorDecision",
    "SeparatorKind",
    "Tray",
    "TrayLayoutResult",
    "build_bundle_map",
    "classify_diameter",
    "compute_tray_layout",
]
