"""Unit tests for the layout request schema models."""

import pytest
from pydantic import ValidationError

from traylayout.application.config.schema import (
    CableConfig,
    CanvasConfig,
    CategoryLayoutSchema,
    FreeSpaceConfig,
    TrayConfig,
    TrayLayoutConfiguration,
)
from traylayout.domain.value_objects import BundleSpacing, CableCategory


class TestTrayConfig:
    def test_dimensions_are_optional(self) -> None:
        tray = TrayConfig(name="T-NEW")
        assert tray.width is None
        assert tray.height is None
        assert tray.rung_height == 15.0

    def test_zero_width_is_allowed(self) -> None:
        assert TrayConfig(name="T1", width=0).width == 0

    def test_negative_width_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TrayConfig(name="T1", width=-10)

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TrayConfig(name="")

    def test_extra_fields_forbidden(self) -> None:
        with pytest.raises(ValidationError, match="colour"):
            TrayConfig(name="T1", colour="grey")


class TestCableConfig:
    @pytest.mark.parametrize("value", ["MV", " Power ", "vfd"])
    def test_category_is_case_insensitive(self, value: str) -> None:
        cable = CableConfig(id="X", category=value)
        assert cable.category is CableCategory.from_key(value)

    def test_blank_category_is_none(self) -> None:
        assert CableConfig(id="X", category="  ").category is None

    def test_unknown_category_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CableConfig(id="X", category="lighting")

    def test_nan_diameter_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CableConfig(id="X", diameter=float("nan"))


class TestCategoryLayoutSchema:
    def test_defaults(self) -> None:
        schema = CategoryLayoutSchema()
        assert schema.max_rows == 2
        assert schema.max_columns == 20
        assert schema.bundle_spacing is BundleSpacing.TWO_DIAMETERS

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("1d", BundleSpacing.ONE_DIAMETER),
            (" 2D ", BundleSpacing.TWO_DIAMETERS),
            ("0", BundleSpacing.NONE),
            (0, BundleSpacing.NONE),
        ],
    )
    def test_bundle_spacing_normalised(self, value, expected) -> None:
        assert CategoryLayoutSchema(bundle_spacing=value).bundle_spacing is expected

    def test_unknown_bundle_spacing_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CategoryLayoutSchema(bundle_spacing="3D")

    def test_max_rows_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            CategoryLayoutSchema(max_rows=0)


class TestCanvasAndFreeSpace:
    @pytest.mark.parametrize("scale", [0, -1])
    def test_scale_must_be_positive(self, scale: float) -> None:
        with pytest.raises(ValidationError):
            CanvasConfig(scale=scale)

    def test_thresholds_in_order(self) -> None:
        config = FreeSpaceConfig(min_percent=20, max_percent=80)
        assert (config.min_percent, config.max_percent) == (20, 80)

    def test_min_above_max_rejected(self) -> None:
        with pytest.raises(ValidationError, match="min_percent must not exceed max_percent"):
            FreeSpaceConfig(min_percent=90, max_percent=10)

    def test_percent_bounds(self) -> None:
        with pytest.raises(ValidationError):
            FreeSpaceConfig(max_percent=120)


class TestTrayLayoutConfiguration:
    def test_minimal(self) -> None:
        config = TrayLayoutConfiguration(schema_version="1.0", tray=TrayConfig(name="T1"))
        assert config.cables == []
        assert config.layout.power is None
        assert config.canvas.scale == 1.0
        assert config.filter_by_routing is False

    def test_newer_minor_version_accepted(self) -> None:
        config = TrayLayoutConfiguration(schema_version="1.3", tray={"name": "T1"})
        assert config.schema_version == "1.3"

    def test_unsupported_major_version_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Unsupported schema version"):
            TrayLayoutConfiguration(schema_version="2.0", tray={"name": "T1"})

    def test_malformed_version_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TrayLayoutConfiguration(schema_version="v1", tray={"name": "T1"})

    def test_nested_documents(self) -> None:
        config = TrayLayoutConfiguration.model_validate(
            {
                "schema_version": "1.0",
                "tray": {"name": "T1", "width": 400, "height": 100},
                "cables": [{"id": "P-001", "diameter": 20, "purpose": "Power"}],
                "layout": {"power": {"trefoil": True, "bundle_spacing": "1d"}},
            }
        )
        assert config.cables[0].diameter == 20
        assert config.layout.power.trefoil is True
        assert config.layout.power.bundle_spacing is BundleSpacing.ONE_DIAMETER
