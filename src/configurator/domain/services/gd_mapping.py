"""Global dimension role mapping.

A product's catalog data declares which GD ids drive its width, height,
depth, door overhang, quantities and individual drawer heights. This module
turns that declaration into fast lookups and display badges.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..catalog import ProductData
from ..value_objects import GDRole

if TYPE_CHECKING:
    from ...contracts.protocols import ProductDataProvider

BADGE_LABELS: dict[GDRole, str] = {
    GDRole.WIDTH: "Width",
    GDRole.HEIGHT: "Height",
    GDRole.DEPTH: "Depth",
    GDRole.DOOR_OVERHANG: "Door Overhang",
    GDRole.SHELF_QTY: "Shelf Qty",
    GDRole.DRAWER_QTY: "Drawer Qty",
    GDRole.DOOR_QTY: "Door Qty",
}


@dataclass(frozen=True)
class GDMapping:
    """Role lookups for one product's GD ids."""

    roles: dict[GDRole, tuple[str, ...]] = field(default_factory=dict)

    @classmethod
    def from_product(cls, product: ProductData | None) -> "GDMapping":
        if product is None:
            return cls()
        return cls({role: tuple(ids) for role, ids in product.gd_mapping.items() if ids})

    def role_of(self, gd_id: str | None) -> GDRole | None:
        """First role that lists ``gd_id``, in role declaration order."""
        if gd_id is None:
            return None
        for role in GDRole:
            if gd_id in self.roles.get(role, ()):
                return role
        return None

    def gd_ids(self, role: GDRole) -> tuple[str, ...]:
        return self.roles.get(role, ())

    def is_width_gd(self, gd_id: str) -> bool:
        return gd_id in self.gd_ids(GDRole.WIDTH)

    def is_height_gd(self, gd_id: str) -> bool:
        return gd_id in self.gd_ids(GDRole.HEIGHT)

    def is_depth_gd(self, gd_id: str) -> bool:
        return gd_id in self.gd_ids(GDRole.DEPTH)

    def is_door_overhang_gd(self, gd_id: str) -> bool:
        return gd_id in self.gd_ids(GDRole.DOOR_OVERHANG)

    def is_shelf_qty_gd(self, gd_id: str) -> bool:
        return gd_id in self.gd_ids(GDRole.SHELF_QTY)

    def is_drawer_qty_gd(self, gd_id: str) -> bool:
        return gd_id in self.gd_ids(GDRole.DRAWER_QTY)

    def is_door_qty_gd(self, gd_id: str) -> bool:
        return gd_id in self.gd_ids(GDRole.DOOR_QTY)

    def drawer_height_index(self, gd_id: str) -> int | None:
        """Zero-based drawer index driven by ``gd_id``, or None."""
        role = self.role_of(gd_id)
        return role.drawer_index if role is not None else None

    def badge(self, gd_id: str) -> str | None:
        """Short label shown next to a dimension bound to ``gd_id``."""
        role = self.role_of(gd_id)
        if role is None:
            return None
        index = role.drawer_index
        if index is not None:
            return f"Drawer H{index + 1}"
        return BADGE_LABELS[role]


class GDMappingRegistry:
    """Caches a GDMapping per product id."""

    def __init__(self, products: "ProductDataProvider") -> None:
        self._products = products
        self._cache: dict[str, GDMapping] = {}

    def for_product(self, product_id: str | None) -> GDMapping:
        if product_id is None:
            return GDMapping()
        if product_id not in self._cache:
            self._cache[product_id] = GDMapping.from_product(
                self._products.get_product_data(product_id)
            )
        return self._cache[product_id]

    def invalidate(self, product_id: str | None = None) -> None:
        if product_id is None:
            self._cache.clear()
        else:
            self._cache.pop(product_id, None)
