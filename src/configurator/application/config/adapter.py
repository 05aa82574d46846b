"""Conversion between scene configuration schemas and domain objects."""

from __future__ import annotations

from configurator.application.config.schemas import (
    ApplianceGapsConfig,
    BenchtopConfig,
    CabinetConfig,
    DimensionEntryConfig,
    DimensionsConfig,
    DrawersConfig,
    GDConfig,
    PositionConfig,
    ProductConfig,
    WallConfig,
)
from configurator.domain.catalog import DimensionEntry, GDDefinition, ProductData
from configurator.domain.entities import ApplianceGaps, BenchtopExtras, Cabinet
from configurator.domain.value_objects import (
    CabinetType,
    Dimensions,
    ScenePosition,
    WallDimensions,
)


def wall_from_config(config: WallConfig) -> WallDimensions:
    return WallDimensions(length=config.length, height=config.height)


def cabinet_from_config(config: CabinetConfig) -> Cabinet:
    """Build a Cabinet entity from its schema."""
    drawers = config.drawers or DrawersConfig(enabled=False)
    cabinet = Cabinet(
        cabinet_id=config.id,
        cabinet_type=CabinetType(config.type),
        dimensions=Dimensions(
            config.dimensions.width,
            config.dimensions.height,
            config.dimensions.depth,
        ),
        position=ScenePosition(config.position.x, config.position.y, config.position.z),
        view_id=config.view,
        left_lock=config.left_lock,
        right_lock=config.right_lock,
        product_id=config.product_id,
        drawer_enabled=drawers.enabled and drawers.quantity > 0,
        drawer_quantity=drawers.quantity,
        drawer_heights=list(drawers.heights),
        door_enabled=config.door_enabled,
        door_quantity=config.door_quantity,
        shelf_count=config.shelf_count,
        overhang_door=config.overhang_door,
        parent_cabinet_id=config.parent_id,
        parent_side=config.parent_side,
        parent_y_offset=config.parent_y_offset,
    )
    if config.appliance is not None:
        cabinet.appliance_gaps = ApplianceGaps(
            top=config.appliance.top,
            left=config.appliance.left,
            right=config.appliance.right,
            kicker_height=config.appliance.kicker_height,
        )
    if config.benchtop is not None:
        cabinet.benchtop = BenchtopExtras(
            height_from_floor=config.benchtop.height_from_floor,
            thickness=config.benchtop.thickness,
            front_overhang=config.benchtop.front_overhang,
            left_overhang=config.benchtop.left_overhang,
            right_overhang=config.benchtop.right_overhang,
        )
    return cabinet


def cabinet_to_config(cabinet: Cabinet) -> CabinetConfig:
    """Serialize a Cabinet back to its schema."""
    drawers = None
    if cabinet.drawer_quantity or cabinet.drawer_heights:
        heights = list(cabinet.drawer_heights[: cabinet.drawer_quantity])
        drawers = DrawersConfig(
            enabled=cabinet.drawer_enabled,
            quantity=cabinet.drawer_quantity,
            heights=heights if len(heights) == cabinet.drawer_quantity else [],
        )
    appliance = None
    if cabinet.appliance_gaps is not None:
        gaps = cabinet.appliance_gaps
        appliance = ApplianceGapsConfig(
            top=gaps.top, left=gaps.left, right=gaps.right, kicker_height=gaps.kicker_height
        )
    benchtop = None
    if cabinet.benchtop is not None:
        extras = cabinet.benchtop
        benchtop = BenchtopConfig(
            height_from_floor=extras.height_from_floor,
            thickness=extras.thickness,
            front_overhang=extras.front_overhang,
            left_overhang=extras.left_overhang,
            right_overhang=extras.right_overhang,
        )
    return CabinetConfig(
        id=cabinet.cabinet_id,
        type=cabinet.cabinet_type,
        dimensions=DimensionsConfig(
            width=cabinet.width, height=cabinet.height, depth=cabinet.depth
        ),
        position=PositionConfig(x=cabinet.x, y=cabinet.y, z=cabinet.position.z),
        view=cabinet.view_id,
        left_lock=cabinet.left_lock,
        right_lock=cabinet.right_lock,
        product_id=cabinet.product_id,
        drawers=drawers,
        door_enabled=cabinet.door_enabled,
        door_quantity=cabinet.door_quantity,
        shelf_count=cabinet.shelf_count,
        overhang_door=cabinet.overhang_door,
        parent_id=cabinet.parent_cabinet_id,
        parent_side=cabinet.parent_side,
        parent_y_offset=cabinet.parent_y_offset,
        appliance=appliance,
        benchtop=benchtop,
    )


def product_from_config(product_id: str, config: ProductConfig) -> ProductData:
    """Build catalog ProductData from its schema."""
    dims = {
        dim_id: DimensionEntry(
            dim_id=dim_id,
            value_type=entry.value_type,
            gd_id=entry.gd_id,
            min_value=entry.min,
            max_value=entry.max,
            default_value=entry.default_value,
            options=tuple(entry.options),
            sort_num=entry.sort_num,
            visible=entry.visible,
        )
        for dim_id, entry in config.dims.items()
    }
    gds = {
        gd_id: GDDefinition(
            gd_id=gd_id,
            name=gd.name,
            min_value=gd.min,
            max_value=gd.max,
            visible=gd.visible,
        )
        for gd_id, gd in config.gds.items()
    }
    return ProductData(
        product_id=product_id,
        dims=dims,
        gds=gds,
        gd_mapping={role: list(ids) for role, ids in config.gd_mapping.items()},
    )


def product_to_config(product: ProductData) -> ProductConfig:
    return ProductConfig(
        dims={
            dim_id: DimensionEntryConfig(
                gd_id=entry.gd_id,
                value_type=entry.value_type,
                min=entry.min_value,
                max=entry.max_value,
                default_value=entry.default_value,
                options=list(entry.options),
                sort_num=entry.sort_num,
                visible=entry.visible,
            )
            for dim_id, entry in product.dims.items()
        },
        gds={
            gd_id: GDConfig(
                name=gd.name, min=gd.min_value, max=gd.max_value, visible=gd.visible
            )
            for gd_id, gd in product.gds.items()
        },
        gd_mapping={role: list(ids) for role, ids in product.gd_mapping.items()},
    )
