"""Domain services: geometry resolvers and balancing rules."""

from .anchor import AnchorResult, apply_width_change, clamp_position_x, resolve_anchor
from .dependents import DependentComponentAligner
from .dimension_values import DimensionValueResolver, virtual_value
from .drawer_heights import (
    DrawerConstraint,
    DrawerEditSession,
    DrawerHeightBalancer,
    HeightSummary,
    HeightValidation,
)
from .gd_mapping import GDMapping, GDMappingRegistry
from .group_distributor import GroupDistribution, GroupProportionalDistributor
from .sync_distributor import SyncDistributor, SyncResult
from .view_cohort import ViewCohortMover
from .width_change import WidthChangeCoordinator, WidthChangeResult

__all__ = [
    "AnchorResult",
    "DependentComponentAligner",
    "DimensionValueResolver",
    "DrawerConstraint",
    "DrawerEditSession",
    "DrawerHeightBalancer",
    "GDMapping",
    "GDMappingRegistry",
    "GroupDistribution",
    "GroupProportionalDistributor",
    "HeightSummary",
    "HeightValidation",
    "SyncDistributor",
    "SyncResult",
    "ViewCohortMover",
    "WidthChangeCoordinator",
    "WidthChangeResult",
    "apply_width_change",
    "clamp_position_x",
    "resolve_anchor",
    "virtual_value",
]
