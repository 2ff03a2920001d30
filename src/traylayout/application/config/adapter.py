"""Adapters from the layout request schema to domain objects."""

from traylayout.application.config.schema import (
    CableConfig,
    CategoryLayoutSchema,
    TrayLayoutConfiguration,
)
from traylayout.domain.value_objects import (
    Cable,
    CableCategory,
    CategoryLayoutConfig,
    LayoutConfiguration,
    Tray,
)


def config_to_tray(config: TrayLayoutConfiguration) -> Tray:
    """Convert the tray section to a domain Tray."""
    tray = config.tray
    return Tray(
        name=tray.name,
        width=tray.width,
        height=tray.height,
        rung_height=tray.rung_height,
        purpose=tray.purpose,
    )


def _cable_from_config(cable: CableConfig) -> Cable:
    return Cable(
        id=cable.id,
        diameter=cable.diameter,
        purpose=cable.purpose,
        category=cable.category,
        from_location=cable.from_location,
        to_location=cable.to_location,
        routing=cable.routing,
        grounding=cable.grounding,
    )


def config_to_cables(config: TrayLayoutConfiguration) -> list[Cable]:
    """Convert every cable record, in document order."""
    return [_cable_from_config(cable) for cable in config.cables]


def _category_layout(schema: CategoryLayoutSchema | None) -> CategoryLayoutConfig:
    if schema is None:
        return CategoryLayoutConfig()
    return CategoryLayoutConfig(
        max_rows=schema.max_rows,
        max_columns=schema.max_columns,
        bundle_spacing=schema.bundle_spacing,
        cable_spacing=schema.cable_spacing,
        trefoil=schema.trefoil,
        trefoil_bundle_spacing=schema.trefoil_bundle_spacing,
        phase_rotation=schema.phase_rotation,
    )


def config_to_layout_configuration(
    config: TrayLayoutConfiguration,
) -> LayoutConfiguration:
    """Convert the per-category layout section; omitted categories get defaults."""
    layout = config.layout
    return LayoutConfiguration.from_mapping(
        {
            CableCategory.POWER: _category_layout(layout.power),
            CableCategory.CONTROL: _category_layout(layout.control),
            CableCategory.MV: _category_layout(layout.mv),
            CableCategory.VFD: _category_layout(layout.vfd),
        }
    )
