"""Pydantic schemas for scene configuration files."""

from configurator.application.config.schemas.base import (
    SUPPORTED_VERSIONS,
    CabinetTypeConfig,
    DimensionsConfig,
    GDRoleConfig,
    PositionConfig,
    ValueTypeConfig,
    WallConfig,
)
from configurator.application.config.schemas.cabinet_schema import (
    ApplianceGapsConfig,
    BenchtopConfig,
    CabinetConfig,
    DrawersConfig,
)
from configurator.application.config.schemas.catalog_schema import (
    DimensionEntryConfig,
    GDConfig,
    ProductConfig,
)
from configurator.application.config.schemas.root import (
    EngineConfig,
    GroupMemberConfig,
    PanelStateConfig,
    SceneConfiguration,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ApplianceGapsConfig",
    "BenchtopConfig",
    "CabinetConfig",
    "CabinetTypeConfig",
    "DimensionEntryConfig",
    "DimensionsConfig",
    "DrawersConfig",
    "EngineConfig",
    "GDConfig",
    "GDRoleConfig",
    "GroupMemberConfig",
    "PanelStateConfig",
    "PositionConfig",
    "ProductConfig",
    "SceneConfiguration",
    "ValueTypeConfig",
    "WallConfig",
]
