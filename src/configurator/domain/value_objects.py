"""Value objects for the configurator domain.

All measurements are in millimetres. Positions use scene coordinates where
``x`` is the cabinet's left edge, ``y`` its bottom edge and ``z`` the depth
offset from the back wall.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum


class CabinetType(str, Enum):
    """Closed set of placeable cabinet categories."""

    BASE = "base"
    TOP = "top"
    TALL = "tall"
    PANEL = "panel"
    FILLER = "filler"
    WARDROBE = "wardrobe"
    KICKER = "kicker"
    BULKHEAD = "bulkhead"
    BENCHTOP = "benchtop"
    UNDER_PANEL = "underPanel"
    APPLIANCE = "appliance"

    @property
    def is_centered(self) -> bool:
        """Kickers and bulkheads are positioned by their horizontal centre."""
        return self in (CabinetType.KICKER, CabinetType.BULKHEAD)

    @property
    def is_wall_mounted(self) -> bool:
        """Wall-mounted cabinets may move vertically; everything else sits on the floor."""
        return self is CabinetType.TOP

    @property
    def is_dependent(self) -> bool:
        """Types that are deleted together with their parent cabinet."""
        return self in DEPENDENT_CABINET_TYPES


DEPENDENT_CABINET_TYPES: frozenset[CabinetType] = frozenset(
    {
        CabinetType.KICKER,
        CabinetType.BULKHEAD,
        CabinetType.BENCHTOP,
        CabinetType.UNDER_PANEL,
        CabinetType.FILLER,
        CabinetType.PANEL,
    }
)


class ValueType(str, Enum):
    """How a product dimension is edited in the catalog."""

    RANGE = "range"
    SELECTION = "selection"


class GDRole(str, Enum):
    """Semantic role a global dimension plays for a cabinet."""

    WIDTH = "width"
    HEIGHT = "height"
    DEPTH = "depth"
    DOOR_OVERHANG = "doorOverhang"
    SHELF_QTY = "shelfQty"
    DRAWER_QTY = "drawerQty"
    DOOR_QTY = "doorQty"
    DRAWER_HEIGHT_0 = "drawerH1"
    DRAWER_HEIGHT_1 = "drawerH2"
    DRAWER_HEIGHT_2 = "drawerH3"
    DRAWER_HEIGHT_3 = "drawerH4"
    DRAWER_HEIGHT_4 = "drawerH5"

    @property
    def drawer_index(self) -> int | None:
        """Zero-based drawer index for drawer-height roles, else None."""
        if self.value.startswith("drawerH"):
            return int(self.value[len("drawerH") :]) - 1
        return None

    @classmethod
    def drawer_height(cls, index: int) -> "GDRole":
        """Return the drawer-height role for a zero-based drawer index."""
        if not 0 <= index < MAX_DRAWER_HEIGHT_ROLES:
            raise ValueError(
                f"Drawer index must be between 0 and {MAX_DRAWER_HEIGHT_ROLES - 1}"
            )
        return cls(f"drawerH{index + 1}")


MAX_DRAWER_HEIGHT_ROLES = 5


@dataclass(frozen=True)
class Dimensions:
    """Immutable cabinet dimensions in millimetres."""

    width: float
    height: float
    depth: float

    def __post_init__(self) -> None:
        for name in ("width", "height", "depth"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"Dimension {name} must be a non-negative number")

    def with_width(self, width: float) -> "Dimensions":
        return replace(self, width=width)

    def with_height(self, height: float) -> "Dimensions":
        return replace(self, height=height)

    def with_depth(self, depth: float) -> "Dimensions":
        return replace(self, depth=depth)


@dataclass(frozen=True)
class ScenePosition:
    """Position of a cabinet in scene coordinates.

    Unlike Dimensions, coordinates may be negative (for example a centred
    kicker near the left wall). Resolvers clamp ``x`` where required.
    """

    x: float
    y: float
    z: float = 0.0

    def moved(self, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> "ScenePosition":
        """Return a copy translated by the given deltas."""
        return ScenePosition(self.x + dx, self.y + dy, self.z + dz)

    def with_x(self, x: float) -> "ScenePosition":
        return replace(self, x=x)

    def with_y(self, y: float) -> "ScenePosition":
        return replace(self, y=y)


@dataclass(frozen=True)
class WallDimensions:
    """Back wall the cabinets are placed against."""

    length: float
    height: float

    def __post_init__(self) -> None:
        if self.length <= 0 or self.height <= 0:
            raise ValueError("Wall dimensions must be positive")
