"""Domain entities for the cabinet configurator."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator

from .errors import UnknownCabinetError
from .value_objects import CabinetType, Dimensions, ScenePosition, WallDimensions

logger = logging.getLogger(__name__)

NO_VIEW = "none"

DEFAULT_KICKER_HEIGHT = 100.0
MIN_VISUAL_DIMENSION = 10.0


@dataclass
class ApplianceGaps:
    """Clearance between an appliance shell and its visible body."""

    top: float = 0.0
    left: float = 0.0
    right: float = 0.0
    kicker_height: float = DEFAULT_KICKER_HEIGHT


@dataclass
class BenchtopExtras:
    """Benchtop-only settings. None means "use the catalog default"."""

    height_from_floor: float | None = None
    thickness: float | None = None
    front_overhang: float | None = None
    left_overhang: float | None = None
    right_overhang: float | None = None


@dataclass
class Cabinet:
    """A placed parametric cabinet.

    Geometry lives in the immutable ``dimensions`` and ``position`` value
    objects, which are replaced wholesale on every edit.

    Attributes:
        cabinet_id: Unique identifier within the scene.
        cabinet_type: Placement category, drives clamping and anchoring.
        dimensions: Width, height and depth in millimetres.
        position: Scene position. For kickers and bulkheads ``x`` is the
            horizontal centre, for everything else it is the left edge.
        view_id: View letter, or None / "none" when unassigned.
        left_lock: Keep the left edge fixed on width edits.
        right_lock: Keep the right edge fixed on width edits.
        product_id: Catalog product backing this cabinet, if any.
        parent_cabinet_id: Owning cabinet for dependent children.
        parent_side: Which side of the parent a filler/panel child is on.
    """

    cabinet_id: str
    cabinet_type: CabinetType
    dimensions: Dimensions
    position: ScenePosition = field(default_factory=lambda: ScenePosition(0.0, 0.0))
    view_id: str | None = None
    left_lock: bool = False
    right_lock: bool = False
    product_id: str | None = None
    drawer_enabled: bool = False
    drawer_quantity: int = 0
    drawer_heights: list[float] = field(default_factory=list)
    door_enabled: bool = False
    door_quantity: int = 0
    shelf_count: int = 0
    overhang_door: bool = False
    parent_cabinet_id: str | None = None
    parent_side: str | None = None
    parent_y_offset: float | None = None
    appliance_gaps: ApplianceGaps | None = None
    benchtop: BenchtopExtras | None = None

    def __post_init__(self) -> None:
        if not self.cabinet_id:
            raise ValueError("Cabinet id must not be empty")
        if self.drawer_quantity < 0:
            raise ValueError("Drawer quantity cannot be negative")
        if self.parent_side not in (None, "left", "right"):
            raise ValueError("parent_side must be 'left' or 'right'")

    @property
    def width(self) -> float:
        return self.dimensions.width

    @property
    def height(self) -> float:
        return self.dimensions.height

    @property
    def depth(self) -> float:
        return self.dimensions.depth

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    @property
    def left(self) -> float:
        """Absolute left edge."""
        if self.cabinet_type.is_centered:
            return self.position.x - self.width / 2
        return self.position.x

    @property
    def right(self) -> float:
        """Absolute right edge."""
        return self.left + self.width

    @property
    def center_x(self) -> float:
        return self.left + self.width / 2

    @property
    def bottom(self) -> float:
        return self.position.y

    @property
    def top(self) -> float:
        return self.position.y + self.height

    @property
    def has_view(self) -> bool:
        return self.view_id is not None and self.view_id != NO_VIEW

    @property
    def locks_both(self) -> bool:
        return self.left_lock and self.right_lock

    def x_for_left_edge(self, left: float) -> float:
        """Translate a left-edge coordinate into this cabinet's ``x`` convention."""
        if self.cabinet_type.is_centered:
            return left + self.width / 2
        return left

    def move_to(self, x: float | None = None, y: float | None = None) -> None:
        """Replace the position, keeping any coordinate that is not given."""
        self.position = ScenePosition(
            self.position.x if x is None else x,
            self.position.y if y is None else y,
            self.position.z,
        )

    def resize(
        self,
        width: float | None = None,
        height: float | None = None,
        depth: float | None = None,
    ) -> None:
        """Replace the dimensions, keeping any value that is not given."""
        self.dimensions = Dimensions(
            self.width if width is None else width,
            self.height if height is None else height,
            self.depth if depth is None else depth,
        )

    def enabled_drawer_heights(self) -> list[float]:
        """Heights of the drawers that are currently enabled."""
        if not self.drawer_enabled:
            return []
        return list(self.drawer_heights[: self.drawer_quantity])


@dataclass
class Scene:
    """All cabinets placed against one wall.

    Cabinets are kept in insertion order, which is also the membership
    order used when a view is queried.
    """

    wall: WallDimensions
    cabinets: dict[str, Cabinet] = field(default_factory=dict)

    def __iter__(self) -> Iterator[Cabinet]:
        return iter(self.cabinets.values())

    def __len__(self) -> int:
        return len(self.cabinets)

    def __contains__(self, cabinet_id: object) -> bool:
        return cabinet_id in self.cabinets

    def add(self, cabinet: Cabinet) -> Cabinet:
        if cabinet.cabinet_id in self.cabinets:
            raise ValueError(f"Duplicate cabinet id: {cabinet.cabinet_id}")
        self.cabinets[cabinet.cabinet_id] = cabinet
        return cabinet

    def get(self, cabinet_id: str) -> Cabinet | None:
        return self.cabinets.get(cabinet_id)

    def require(self, cabinet_id: str) -> Cabinet:
        """Return the cabinet or raise UnknownCabinetError."""
        cabinet = self.cabinets.get(cabinet_id)
        if cabinet is None:
            raise UnknownCabinetError(cabinet_id)
        return cabinet

    def children_of(self, cabinet_id: str) -> list[Cabinet]:
        return [c for c in self if c.parent_cabinet_id == cabinet_id]

    def remove(self, cabinet_id: str) -> list[str]:
        """Delete a cabinet and its dependent children.

        Children of a removed cabinet (kickers, benchtops, fillers and so on)
        are removed recursively. Relation stores and views are cleaned by the
        caller using the returned ids.

        Returns:
            Ids of every removed cabinet, the requested one first.
        """
        self.require(cabinet_id)
        removed: list[str] = []
        pending = [cabinet_id]
        while pending:
            current = pending.pop(0)
            if current not in self.cabinets:
                continue
            del self.cabinets[current]
            removed.append(current)
            pending.extend(
                c.cabinet_id
                for c in self
                if c.parent_cabinet_id == current and c.cabinet_type.is_dependent
            )
        logger.debug(f"Removed cabinets {removed}")
        return removed

    def effective_left_edge(self, cabinet: Cabinet) -> float:
        """Left edge including any filler or panel attached on the left side."""
        edge = cabinet.left
        for child in self.children_of(cabinet.cabinet_id):
            if child.parent_side == "left" and child.cabinet_type in (
                CabinetType.FILLER,
                CabinetType.PANEL,
            ):
                edge = min(edge, child.left)
        return edge

    def effective_right_edge(self, cabinet: Cabinet) -> float:
        """Right edge including any filler or panel attached on the right side."""
        edge = cabinet.right
        for child in self.children_of(cabinet.cabinet_id):
            if child.parent_side == "right" and child.cabinet_type in (
                CabinetType.FILLER,
                CabinetType.PANEL,
            ):
                edge = max(edge, child.right)
        return edge


def appliance_visual_dimensions(cabinet: Cabinet) -> Dimensions:
    """Visible body of an appliance once its gaps and kicker are removed.

    Width and height never drop below MIN_VISUAL_DIMENSION; depth is the
    shell depth.
    """
    gaps = cabinet.appliance_gaps or ApplianceGaps()
    width = max(MIN_VISUAL_DIMENSION, cabinet.width - gaps.left - gaps.right)
    height = max(MIN_VISUAL_DIMENSION, cabinet.height - gaps.top - gaps.kicker_height)
    return Dimensions(width, height, cabinet.depth)
