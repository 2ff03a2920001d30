"""Value objects for the cable tray layout domain.

All dataclasses are frozen (immutable). Lengths ending in ``_mm`` are
millimetres on the physical tray; everything else that describes a placed
circle is in canvas pixels (millimetres multiplied by the canvas scale).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Canvas geometry shared by the layout engine and the renderer
CANVAS_MARGIN_PX = 50.0
TEXT_PADDING_PX = 40.0

DEFAULT_RUNG_HEIGHT_MM = 15.0
DEFAULT_SPACING_MM = 15.0
DEFAULT_CABLE_DIAMETER_MM = 1.0


class LayoutSide(str, Enum):
    """Tray edge a category packs from."""

    LEFT = "left"
    RIGHT = "right"


class CableCategory(str, Enum):
    """Purpose category of a cable.

    Attributes:
        POWER: Low-voltage power cables, packed from the left edge.
        CONTROL: Control/signal cables, packed from the right edge.
        MV: Medium-voltage cables, always packed from the left edge.
        VFD: Variable-frequency-drive cables, packed from the right edge.
    """

    POWER = "power"
    CONTROL = "control"
    MV = "mv"
    VFD = "vfd"

    @property
    def label(self) -> str:
        """Human-readable label used in reports."""
        match self:
            case CableCategory.POWER:
                return "Power cables"
            case CableCategory.CONTROL:
                return "Control cables"
            case CableCategory.MV:
                return "MV cables"
            case CableCategory.VFD:
                return "VFD cables"

    @property
    def natural_side(self) -> LayoutSide:
        """Edge the category packs from when it is alone on the tray."""
        match self:
            case CableCategory.POWER | CableCategory.MV:
                return LayoutSide.LEFT
            case CableCategory.CONTROL | CableCategory.VFD:
                return LayoutSide.RIGHT

    @property
    def supports_trefoil(self) -> bool:
        """Whether trefoil clustering is meaningful for the category."""
        return self is not CableCategory.CONTROL

    @classmethod
    def from_key(cls, key: str | CableCategory | None) -> CableCategory | None:
        """Parse a bundle-map key, tolerating case and surrounding whitespace.

        Returns:
            The matching category, or None for unknown keys.
        """
        if isinstance(key, CableCategory):
            return key
        if key is None:
            return None
        normalized = str(key).strip().lower()
        for category in cls:
            if category.value == normalized:
                return category
        return None


class DiameterBucket(str, Enum):
    """Diameter range used to group same-size cables into bundles."""

    RANGE_0_8 = "0-8"
    RANGE_8_1_15 = "8.1-15"
    RANGE_15_1_21 = "15.1-21"
    RANGE_21_1_30 = "21.1-30"
    RANGE_30_1_40 = "30.1-40"
    RANGE_40_1_45 = "40.1-45"
    RANGE_45_1_60 = "45.1-60"
    RANGE_60_PLUS = "60+"

    @property
    def index(self) -> int:
        """Zero-based position in ascending diameter order."""
        return list(DiameterBucket).index(self)

    @classmethod
    def from_key(cls, key: str | DiameterBucket | None) -> DiameterBucket | None:
        if isinstance(key, DiameterBucket):
            return key
        if key is None:
            return None
        normalized = str(key).strip()
        for bucket in cls:
            if bucket.value == normalized:
                return bucket
        return None


class BundleSpacing(str, Enum):
    """Horizontal gap policy between adjacent bundles.

    Attributes:
        NONE: Bundles touch (apart from the regular cable spacing).
        ONE_DIAMETER: One diameter of the bundle's largest cable.
        TWO_DIAMETERS: Two diameters of the bundle's largest cable.
    """

    NONE = "0"
    ONE_DIAMETER = "1D"
    TWO_DIAMETERS = "2D"

    def spacing_mm(self, max_diameter_mm: float) -> float:
        """Gap in millimetres for a bundle whose largest cable is given."""
        match self:
            case BundleSpacing.NONE:
                return 0.0
            case BundleSpacing.ONE_DIAMETER:
                return max_diameter_mm
            case BundleSpacing.TWO_DIAMETERS:
                return max_diameter_mm * 2


def _positive_or_none(value: float | None) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number) or number <= 0:
        return None
    return number


def _grid_limit(value: float | None) -> int:
    number = _positive_or_none(value)
    return 1 if number is None else max(int(number), 1)


@dataclass(frozen=True)
class Tray:
    """Cable tray cross-section.

    Dimensions are optional because trays are often created before they are
    measured; layout renders a placeholder in that case instead of failing.

    Attributes:
        name: Tray name, shown in the drawing title and used by routing filters.
        width: Inner width in mm.
        height: Inner height in mm.
        rung_height: Height of the non-usable floor profile in mm
            (defaults to DEFAULT_RUNG_HEIGHT_MM).
        purpose: Free-text tray purpose.
    """

    name: str
    width: float | None = None
    height: float | None = None
    rung_height: float | None = None
    purpose: str | None = None

    @property
    def width_mm(self) -> float:
        return _positive_or_none(self.width) or 0.0

    @property
    def height_mm(self) -> float:
        return _positive_or_none(self.height) or 0.0

    @property
    def rung_height_mm(self) -> float:
        if self.rung_height is None:
            return DEFAULT_RUNG_HEIGHT_MM
        value = float(self.rung_height)
        if math.isnan(value) or value < 0:
            return DEFAULT_RUNG_HEIGHT_MM
        return value

    @property
    def usable_height_mm(self) -> float:
        """Height above the rung profile, floored at zero."""
        return max(self.height_mm - self.rung_height_mm, 0.0)

    @property
    def has_dimensions(self) -> bool:
        """True when both width and height are positive."""
        return self.width_mm > 0 and self.height_mm > 0


@dataclass(frozen=True)
class Cable:
    """A cable assigned to a tray.

    Attributes:
        id: Cable identifier (tag number).
        diameter: Outer diameter in mm; missing or non-positive values fall
            back to DEFAULT_CABLE_DIAMETER_MM for layout.
        purpose: Free-text purpose, used for category and grounding detection.
        category: Explicit category, overriding purpose-text matching.
        from_location: Origin location, used for trefoil co-routing.
        to_location: Destination location, used for trefoil co-routing.
        routing: Slash-separated list of trays the cable runs through.
        grounding: Explicit grounding flag, overriding purpose-text detection.
    """

    id: str
    diameter: float | None = None
    purpose: str | None = None
    category: CableCategory | None = None
    from_location: str | None = None
    to_location: str | None = None
    routing: str | None = None
    grounding: bool | None = None

    @property
    def has_diameter(self) -> bool:
        return _positive_or_none(self.diameter) is not None

    @property
    def diameter_mm(self) -> float:
        """Diameter used for layout."""
        return _positive_or_none(self.diameter) or DEFAULT_CABLE_DIAMETER_MM

    @property
    def is_grounding(self) -> bool:
        """Grounding cable, by flag or by 'ground' in the purpose text."""
        if self.grounding is not None:
            return self.grounding
        return self.purpose is not None and "ground" in self.purpose.lower()

    @property
    def route_key(self) -> tuple[str, str] | None:
        """(origin, destination) pair, or None when either end is missing."""
        origin = (self.from_location or "").strip()
        destination = (self.to_location or "").strip()
        if not origin or not destination:
            return None
        return (origin, destination)


@dataclass(frozen=True)
class CategoryLayoutConfig:
    """Layout limits for one cable category.

    Attributes:
        max_rows: Maximum stacked cables per column (coerced to at least 1).
        max_columns: Maximum columns per bundle (coerced to at least 1).
        bundle_spacing: Gap policy between bundles.
        cable_spacing: Gap between cables inside a bundle in mm; None uses the
            tray-wide spacing.
        trefoil: Group co-routed cables into trefoil triples.
        trefoil_bundle_spacing: Separate consecutive trefoil clusters by the
            bundle spacing instead of the cable spacing.
        phase_rotation: Reorder uniform three-phase groups before placement.
    """

    max_rows: int = 2
    max_columns: int = 20
    bundle_spacing: BundleSpacing = BundleSpacing.TWO_DIAMETERS
    cable_spacing: float | None = None
    trefoil: bool = False
    trefoil_bundle_spacing: bool = False
    phase_rotation: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "max_rows", _grid_limit(self.max_rows))
        object.__setattr__(self, "max_columns", _grid_limit(self.max_columns))
        if self.cable_spacing is not None:
            spacing = float(self.cable_spacing)
            if math.isnan(spacing) or math.isinf(spacing) or spacing < 0:
                spacing = None
            object.__setattr__(self, "cable_spacing", spacing)

    def resolved_spacing(self, default_mm: float) -> float:
        """Intra-bundle spacing, falling back to the tray-wide spacing."""
        if self.cable_spacing is None:
            return default_mm
        return self.cable_spacing


@dataclass(frozen=True)
class LayoutConfiguration:
    """Per-category layout configuration."""

    power: CategoryLayoutConfig = field(default_factory=CategoryLayoutConfig)
    control: CategoryLayoutConfig = field(default_factory=CategoryLayoutConfig)
    mv: CategoryLayoutConfig = field(default_factory=CategoryLayoutConfig)
    vfd: CategoryLayoutConfig = field(default_factory=CategoryLayoutConfig)

    def for_category(self, category: CableCategory) -> CategoryLayoutConfig:
        match category:
            case CableCategory.POWER:
                return self.power
            case CableCategory.CONTROL:
                return self.control
            case CableCategory.MV:
                return self.mv
            case CableCategory.VFD:
                return self.vfd

    @classmethod
    def from_mapping(
        cls, configs: dict[CableCategory, CategoryLayoutConfig] | None
    ) -> LayoutConfiguration:
        """Build from a partial mapping; missing categories get defaults."""
        configs = configs or {}
        return cls(
            power=configs.get(CableCategory.POWER, CategoryLayoutConfig()),
            control=configs.get(CableCategory.CONTROL, CategoryLayoutConfig()),
            mv=configs.get(CableCategory.MV, CategoryLayoutConfig()),
            vfd=configs.get(CableCategory.VFD, CategoryLayoutConfig()),
        )


@dataclass(frozen=True)
class PlacedCable:
    """A cable circle placed on the canvas.

    Attributes:
        cable: The placed cable.
        category: Category the cable was composed under.
        side: Edge the cable's category was packed from.
        center_x: Circle centre, canvas pixels.
        center_y: Circle centre, canvas pixels (y grows downward).
        radius: Circle radius in pixels.
        on_floor: True when the circle rests on the tray floor.
        cluster: Index of the solved trefoil cluster the cable belongs to
            within its category, None outside a trefoil.
    """

    cable: Cable
    category: CableCategory
    side: LayoutSide
    center_x: float
    center_y: float
    radius: float
    on_floor: bool
    cluster: int | None = None

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise ValueError("Radius must be non-negative")

    @property
    def left(self) -> float:
        return self.center_x - self.radius

    @property
    def right(self) -> float:
        return self.center_x + self.radius

    @property
    def top(self) -> float:
        return self.center_y - self.radius

    @property
    def bottom(self) -> float:
        return self.center_y + self.radius


@dataclass(frozen=True)
class BottomRowSegment:
    """Horizontal extent of floor cables, used for separators and metrics.

    A segment covers one floor cable, or both floor cables of a solved
    trefoil cluster.
    """

    category: CableCategory
    side: LayoutSide
    left: float
    right: float
    cables: tuple[Cable, ...]

    @property
    def width(self) -> float:
        return self.right - self.left


class SeparatorKind(str, Enum):
    """Outcome of the separator decision.

    Attributes:
        NONE: No separator needed (zero or one category, or an MV mix).
        LINE: Vertical line between the two categories.
        WARNING: Three or more categories; render the warning overlay.
        SKIPPED: Two categories but degenerate edge positions.
    """

    NONE = "none"
    LINE = "line"
    WARNING = "warning"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class SeparatorDecision:
    kind: SeparatorKind
    categories: tuple[CableCategory, ...] = ()
    x: float | None = None
    top_y: float | None = None
    bottom_y: float | None = None


@dataclass(frozen=True)
class LayoutSummary:
    """Occupancy metrics derived from the bottom-row segments.

    Attributes:
        spacing_mm: Tray-wide cable spacing used for the layout.
        total_cable_width_mm: Sum of floor cable diameters.
        occupied_width_mm: Floor width including bundle spacing.
        occupied_width_without_bundle_spacing_mm: Floor width with every gap
            capped at the nominal spacing.
        bundle_spacing_contribution_mm: Difference between the two widths.
        segment_count: Number of bottom-row segments.
        has_bottom_row: Whether any cable rests on the floor.
    """

    spacing_mm: float
    total_cable_width_mm: float
    occupied_width_mm: float
    occupied_width_without_bundle_spacing_mm: float
    bundle_spacing_contribution_mm: float
    segment_count: int
    has_bottom_row: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "spacing_mm": self.spacing_mm,
            "total_cable_width_mm": self.total_cable_width_mm,
            "occupied_width_mm": self.occupied_width_mm,
            "occupied_width_without_bundle_spacing_mm": (
                self.occupied_width_without_bundle_spacing_mm
            ),
            "bundle_spacing_contribution_mm": self.bundle_spacing_contribution_mm,
            "segment_count": self.segment_count,
            "has_bottom_row": self.has_bottom_row,
        }
