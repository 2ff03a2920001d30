"""Unit tests for tray layout value objects."""

from __future__ import annotations

import pytest

from traylayout.domain.value_objects import (
    DEFAULT_CABLE_DIAMETER_MM,
    DEFAULT_RUNG_HEIGHT_MM,
    BundleSpacing,
    Cable,
    CableCategory,
    CategoryLayoutConfig,
    DiameterBucket,
    LayoutConfiguration,
    LayoutSide,
    PlacedCable,
    Tray,
)


class TestTray:
    """Tests for Tray."""

    def test_usable_height(self) -> None:
        tray = Tray(name="T1", width=400, height=300, rung_height=20)
        assert tray.usable_height_mm == 280
        assert tray.has_dimensions

    def test_default_rung_height(self) -> None:
        tray = Tray(name="T1", width=400, height=100)
        assert tray.rung_height_mm == DEFAULT_RUNG_HEIGHT_MM
        assert tray.usable_height_mm == 85

    def test_usable_height_floored_at_zero(self) -> None:
        tray = Tray(name="T1", width=400, height=10)
        assert tray.usable_height_mm == 0

    @pytest.mark.parametrize(
        ("width", "height"), [(None, 100), (100, None), (0, 100), (100, -1)]
    )
    def test_missing_dimensions(self, width, height) -> None:
        assert not Tray(name="T1", width=width, height=height).has_dimensions


class TestCable:
    """Tests for Cable."""

    @pytest.mark.parametrize("diameter", [None, 0, -3])
    def test_placeholder_diameter(self, diameter) -> None:
        cable = Cable(id="C1", diameter=diameter)
        assert not cable.has_diameter
        assert cable.diameter_mm == DEFAULT_CABLE_DIAMETER_MM

    def test_grounding_from_purpose(self) -> None:
        assert Cable(id="G", purpose="MV Grounding conductor").is_grounding
        assert not Cable(id="L", purpose="MV feeder").is_grounding

    def test_grounding_flag_overrides_purpose(self) -> None:
        assert not Cable(id="G", purpose="ground", grounding=False).is_grounding
        assert Cable(id="G", purpose="feeder", grounding=True).is_grounding

    def test_route_key(self) -> None:
        assert Cable(id="C", from_location=" A ", to_location="B").route_key == ("A", "B")
        assert Cable(id="C", from_location="A").route_key is None
        assert Cable(id="C", from_location="A", to_location="  ").route_key is None


class TestEnums:
    """Tests for category, bucket and spacing enums."""

    @pytest.mark.parametrize(
        ("key", "expected"),
        [("MV", CableCategory.MV), (" Power ", CableCategory.POWER), ("other", None), (None, None)],
    )
    def test_category_from_key(self, key, expected) -> None:
        assert CableCategory.from_key(key) is expected

    def test_category_metadata(self) -> None:
        assert CableCategory.MV.natural_side is LayoutSide.LEFT
        assert CableCategory.VFD.natural_side is LayoutSide.RIGHT
        assert not CableCategory.CONTROL.supports_trefoil
        assert CableCategory.POWER.label == "Power cables"

    def test_bucket_from_key(self) -> None:
        assert DiameterBucket.from_key("60+") is DiameterBucket.RANGE_60_PLUS
        assert DiameterBucket.from_key("61-70") is None

    @pytest.mark.parametrize(
        ("spacing", "expected"),
        [(BundleSpacing.NONE, 0.0), (BundleSpacing.ONE_DIAMETER, 25.0), (BundleSpacing.TWO_DIAMETERS, 50.0)],
    )
    def test_bundle_spacing(self, spacing: BundleSpacing, expected: float) -> None:
        assert spacing.spacing_mm(25.0) == expected


class TestCategoryLayoutConfig:
    """Tests for per-category layout configuration."""

    def test_defaults(self) -> None:
        config = CategoryLayoutConfig()
        assert (config.max_rows, config.max_columns) == (2, 20)
        assert config.bundle_spacing is BundleSpacing.TWO_DIAMETERS
        assert not config.trefoil
        assert not config.phase_rotation

    def test_limits_coerced_to_at_least_one(self) -> None:
        config = CategoryLayoutConfig(max_rows=0, max_columns=-4)
        assert (config.max_rows, config.max_columns) == (1, 1)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), None, 0.5])
    def test_non_finite_limits_fall_back_to_one(self, value) -> None:
        config = CategoryLayoutConfig(max_rows=value, max_columns=value)
        assert (config.max_rows, config.max_columns) == (1, 1)

    def test_fractional_limits_truncate(self) -> None:
        assert CategoryLayoutConfig(max_rows=3.7).max_rows == 3

    def test_resolved_spacing(self) -> None:
        assert CategoryLayoutConfig().resolved_spacing(15.0) == 15.0
        assert CategoryLayoutConfig(cable_spacing=5).resolved_spacing(15.0) == 5.0
        assert CategoryLayoutConfig(cable_spacing=-1).resolved_spacing(15.0) == 15.0

    def test_layout_configuration_from_mapping(self) -> None:
        custom = CategoryLayoutConfig(max_rows=4)
        layout = LayoutConfiguration.from_mapping({CableCategory.VFD: custom})
        assert layout.for_category(CableCategory.VFD) is custom
        assert layout.for_category(CableCategory.POWER) == CategoryLayoutConfig()


class TestPlacedCable:
    def test_edges(self) -> None:
        placed = PlacedCable(
            cable=Cable(id="C"),
            category=CableCategory.POWER,
            side=LayoutSide.LEFT,
            center_x=100,
            center_y=200,
            radius=10,
            on_floor=True,
        )
        assert (placed.left, placed.right, placed.top, placed.bottom) == (90, 110, 190, 210)

    def test_negative_radius_rejected(self) -> None:
        with pytest.raises(ValueError, match="Radius"):
            PlacedCable(
                cable=Cable(id="C"),
                category=CableCategory.POWER,
                side=LayoutSide.LEFT,
                center_x=0,
                center_y=0,
                radius=-1,
                on_floor=True,
            )
