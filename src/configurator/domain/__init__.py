"""Domain layer - cabinets, relations and the constraint engine."""

from .catalog import DimensionEntry, GDDefinition, ProductData
from .entities import NO_VIEW, ApplianceGaps, BenchtopExtras, Cabinet, Scene
from .errors import (
    ConstraintError,
    DependentDrawerError,
    DrawerBoundError,
    DrawerEditError,
    FormulaError,
    IllegalResizeError,
    UnknownCabinetError,
    ViewError,
)
from .events import EventBus
from .relations import GroupMember, GroupRelationStore, SyncRelationStore
from .value_objects import (
    CabinetType,
    Dimensions,
    GDRole,
    ScenePosition,
    ValueType,
    WallDimensions,
)
from .views import ViewManager

__all__ = [
    "ApplianceGaps",
    "BenchtopExtras",
    "Cabinet",
    "CabinetType",
    "ConstraintError",
    "DependentDrawerError",
    "DimensionEntry",
    "Dimensions",
    "DrawerBoundError",
    "DrawerEditError",
    "EventBus",
    "FormulaError",
    "GDDefinition",
    "GDRole",
    "GroupMember",
    "GroupRelationStore",
    "IllegalResizeError",
    "NO_VIEW",
    "ProductData",
    "Scene",
    "ScenePosition",
    "SyncRelationStore",
    "UnknownCabinetError",
    "ValueType",
    "ViewError",
    "ViewManager",
    "WallDimensions",
]
