"""Unit tests for the schema-to-domain adapters."""

import pytest

from traylayout.application.config.adapter import (
    config_to_cables,
    config_to_layout_configuration,
    config_to_tray,
)
from traylayout.application.config.loader import load_config_from_dict
from traylayout.application.config.schema import TrayLayoutConfiguration
from traylayout.domain.value_objects import (
    BundleSpacing,
    Cable,
    CableCategory,
    CategoryLayoutConfig,
    Tray,
)


@pytest.fixture
def config() -> TrayLayoutConfiguration:
    return load_config_from_dict(
        {
            "schema_version": "1.0",
            "tray": {"name": "T1", "width": 400, "height": 100, "rung_height": 20},
            "cables": [
                {
                    "id": "M-001",
                    "diameter": 30,
                    "category": "MV",
                    "from_location": "SWG-1",
                    "to_location": "TX-2",
                    "routing": "T1/T2",
                },
                {"id": "G-001", "diameter": 10, "purpose": "MV ground", "grounding": True},
            ],
            "layout": {
                "mv": {
                    "max_rows": 1,
                    "bundle_spacing": "1D",
                    "cable_spacing": 5,
                    "trefoil": True,
                    "phase_rotation": True,
                }
            },
        }
    )


class TestConfigToTray:
    def test_converts_tray(self, config: TrayLayoutConfiguration) -> None:
        tray = config_to_tray(config)
        assert tray == Tray(name="T1", width=400, height=100, rung_height=20)
        assert tray.usable_height_mm == 80


class TestConfigToCables:
    def test_converts_cables_in_order(self, config: TrayLayoutConfiguration) -> None:
        mv, ground = config_to_cables(config)

        assert mv == Cable(
            id="M-001",
            diameter=30,
            category=CableCategory.MV,
            from_location="SWG-1",
            to_location="TX-2",
            routing="T1/T2",
        )
        assert ground.is_grounding
        assert ground.category is None


class TestConfigToLayoutConfiguration:
    def test_configured_category(self, config: TrayLayoutConfiguration) -> None:
        layout = config_to_layout_configuration(config)
        mv = layout.for_category(CableCategory.MV)

        assert mv.max_rows == 1
        assert mv.bundle_spacing is BundleSpacing.ONE_DIAMETER
        assert mv.cable_spacing == 5.0
        assert mv.trefoil and mv.phase_rotation
        assert not mv.trefoil_bundle_spacing

    def test_omitted_categories_use_defaults(self, config: TrayLayoutConfiguration) -> None:
        layout = config_to_layout_configuration(config)
        for category in (CableCategory.POWER, CableCategory.CONTROL, CableCategory.VFD):
            assert layout.for_category(category) == CategoryLayoutConfig()
