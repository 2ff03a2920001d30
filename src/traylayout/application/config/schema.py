"""Pydantic configuration schema for tray layout requests.

This module defines the schema of the JSON layout request documents read by
the CLI. It uses Pydantic v2 for validation. Category and bundle spacing
enums are reused from the domain layer.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from traylayout.domain.value_objects import (
    DEFAULT_RUNG_HEIGHT_MM,
    BundleSpacing,
    CableCategory,
)

# Supported schema versions for layout request files
# Version 1.0: Tray, cables, per-category layout, canvas and free-space thresholds
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class TrayConfig(BaseModel):
    """Tray cross-section.

    Width and height may be omitted or zero: the layout then renders the
    missing-dimensions placeholder instead of failing.

    Attributes:
        name: Tray name, also matched against cable routings.
        width: Inner width in mm.
        height: Inner height in mm.
        rung_height: Non-usable floor profile height in mm.
        purpose: Free-text tray purpose.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    width: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    height: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    rung_height: float = Field(default=DEFAULT_RUNG_HEIGHT_MM, ge=0, allow_inf_nan=False)
    purpose: str | None = None


class CableConfig(BaseModel):
    """A cable record.

    Attributes:
        id: Cable identifier (tag number).
        diameter: Outer diameter in mm; missing values use a 1 mm placeholder.
        purpose: Free-text purpose, used to derive the category.
        category: Explicit category, overriding the purpose text.
        from_location: Origin location (trefoil co-routing).
        to_location: Destination location (trefoil co-routing).
        routing: Slash-separated tray names the cable runs through.
        grounding: Explicit grounding flag, overriding the purpose text.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    diameter: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    purpose: str | None = None
    category: CableCategory | None = None
    from_location: str | None = None
    to_location: str | None = None
    routing: str | None = None
    grounding: bool | None = None

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v: Any) -> Any:
        """Accept categories regardless of case and surrounding whitespace."""
        if isinstance(v, str):
            return v.strip().lower() or None
        return v


class CategoryLayoutSchema(BaseModel):
    """Layout limits for one cable category.

    Attributes:
        max_rows: Maximum stacked cables per column.
        max_columns: Maximum columns per bundle.
        bundle_spacing: Gap between bundles: "0", "1D" or "2D".
        cable_spacing: Gap between cables of a bundle in mm.
        trefoil: Group co-routed cables into trefoil triples.
        trefoil_bundle_spacing: Separate trefoil clusters by the bundle spacing.
        phase_rotation: Reorder uniform three-phase groups.
    """

    model_config = ConfigDict(extra="forbid")

    max_rows: int = Field(default=2, ge=1)
    max_columns: int = Field(default=20, ge=1)
    bundle_spacing: BundleSpacing = BundleSpacing.TWO_DIAMETERS
    cable_spacing: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    trefoil: bool = False
    trefoil_bundle_spacing: bool = False
    phase_rotation: bool = False

    @field_validator("bundle_spacing", mode="before")
    @classmethod
    def normalize_bundle_spacing(cls, v: Any) -> Any:
        """Accept "1d"/"2d" and numeric 0."""
        if isinstance(v, (int, float)) and not isinstance(v, bool) and v == 0:
            return "0"
        if isinstance(v, str):
            return v.strip().upper()
        return v


class LayoutSchema(BaseModel):
    """Per-category layout configuration; missing categories use defaults."""

    model_config = ConfigDict(extra="forbid")

    power: CategoryLayoutSchema | None = None
    control: CategoryLayoutSchema | None = None
    mv: CategoryLayoutSchema | None = None
    vfd: CategoryLayoutSchema | None = None


class CanvasConfig(BaseModel):
    """Canvas settings.

    Attributes:
        scale: Pixels per millimetre.
        spacing: Tray-wide cable spacing override in mm.
    """

    model_config = ConfigDict(extra="forbid")

    scale: float = Field(default=1.0, gt=0, allow_inf_nan=False)
    spacing: float | None = Field(default=None, ge=0, allow_inf_nan=False)


class FreeSpaceConfig(BaseModel):
    """Free-space thresholds used to classify a tray.

    Attributes:
        min_percent: Below this the tray is flagged as low on space.
        max_percent: Above this the tray is flagged as under-used.
        consider_bundle_spacing_as_free: Count bundle spacing as free space.
    """

    model_config = ConfigDict(extra="forbid")

    min_percent: float | None = Field(default=None, ge=0, le=100)
    max_percent: float | None = Field(default=None, ge=0, le=100)
    consider_bundle_spacing_as_free: bool = False

    @model_validator(mode="after")
    def validate_thresholds(self) -> "FreeSpaceConfig":
        """Validate that the minimum does not exceed the maximum."""
        if (
            self.min_percent is not None
            and self.max_percent is not None
            and self.min_percent > self.max_percent
        ):
            raise ValueError("min_percent must not exceed max_percent")
        return self


class TrayLayoutConfiguration(BaseModel):
    """Root model of a tray layout request.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        tray: Tray cross-section
        cables: Cable records
        layout: Per-category layout configuration
        canvas: Canvas scale and spacing
        free_space: Free-space thresholds
        filter_by_routing: Keep only cables whose routing names the tray

    Example:
        >>> config = TrayLayoutConfiguration(
        ...     schema_version="1.0",
        ...     tray=TrayConfig(name="T1", width=400, height=100),
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    tray: TrayConfig
    cables: list[CableConfig] = Field(default_factory=list)
    layout: LayoutSchema = Field(default_factory=LayoutSchema)
    canvas: CanvasConfig = Field(default_factory=CanvasConfig)
    free_space: FreeSpaceConfig = Field(default_factory=FreeSpaceConfig)
    filter_by_routing: bool = False

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that the schema version is supported.

        Newer minor versions of a supported major version are accepted.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )
