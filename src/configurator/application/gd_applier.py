"""Reference implementation of the "apply GD value" contract.

The formula engine decides *what* value a view's global dimension should
have; this module decides what that value means for each cabinet in the
view. Width, height and depth go through the width-change coordinator so
locks, groups and the view cohort are honoured. Shelf, drawer and door
counts update the cabinet's configuration, drawer heights go through the
drawer balancer, and door overhang applies to every wall cabinet.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from configurator.domain.catalog import ProductData
from configurator.domain.entities import Cabinet, Scene
from configurator.domain.errors import InvalidDimensionError
from configurator.domain.services.dimension_values import DimensionValueResolver
from configurator.domain.services.drawer_heights import DrawerHeightBalancer
from configurator.domain.services.gd_mapping import GDMapping
from configurator.domain.services.width_change import WidthChangeCoordinator
from configurator.domain.value_objects import CabinetType, GDRole

if TYPE_CHECKING:
    from configurator.contracts.protocols import (
        DependentComponentUpdater,
        ViewMembershipProvider,
    )

logger = logging.getLogger(__name__)

MODAL_CHILD_TYPES = frozenset({CabinetType.FILLER, CabinetType.PANEL})


@dataclass(frozen=True)
class GDTarget:
    """One dimension of one cabinet mapped to the GD being applied."""

    cabinet: Cabinet
    dim_id: str
    mapping: GDMapping


def overhang_flag(value: Any) -> bool:
    """Interpret a door overhang value as on or off.

    Examples:
        >>> overhang_flag(1.0), overhang_flag(0), overhang_flag("Yes")
        (True, False, True)
    """
    if isinstance(value, (int, float)):
        return value > 0
    return str(value).strip().lower() in ("yes", "true", "1")


def is_modal_child(cabinet: Cabinet) -> bool:
    """Fillers and panels attached to a parent follow the parent's height and depth."""
    return cabinet.cabinet_type in MODAL_CHILD_TYPES and cabinet.parent_cabinet_id is not None


class ViewDimensionApplier:
    """Writes a GD value to every member of a view that uses it.

    Args:
        scene: Cabinets being configured.
        views: View membership provider.
        values: Dimension value resolver; applied values are persisted
            through it so ``dim()`` and ``viewGd()`` see them.
        coordinator: Applies width, height and depth edits.
        balancer: Drawer height balancer.
        dependents: Realigns attached components after door overhang edits.
    """

    def __init__(
        self,
        scene: Scene,
        views: "ViewMembershipProvider",
        values: DimensionValueResolver,
        coordinator: WidthChangeCoordinator,
        balancer: DrawerHeightBalancer | None = None,
        dependents: "DependentComponentUpdater | None" = None,
    ) -> None:
        self._scene = scene
        self._views = views
        self._values = values
        self._coordinator = coordinator
        self._balancer = balancer or DrawerHeightBalancer()
        self._dependents = dependents

    def targets(
        self, view_id: str, gd_id: str, products: dict[str, ProductData]
    ) -> list[GDTarget]:
        """Visible dimensions mapped to ``gd_id`` among the view's members."""
        targets: list[GDTarget] = []
        for cabinet_id in self._views.get_cabinets_in_view(view_id):
            cabinet = self._scene.get(cabinet_id)
            if cabinet is None or cabinet.product_id not in products:
                continue
            product = products[cabinet.product_id]
            mapping = GDMapping.from_product(product)
            for entry in product.dims_for_gd(gd_id):
                targets.append(GDTarget(cabinet, entry.dim_id, mapping))
        return targets

    def apply_gd_value(
        self,
        view_id: str,
        gd_id: str,
        value: float,
        products: dict[str, ProductData],
    ) -> list[str]:
        """Apply ``value`` to every view member mapped to ``gd_id``.

        The value is interpreted through the role the cabinet's product
        gives the GD, then saved to the cabinet's panel state. Targets that
        ignore the GD (a width on a cabinet locked at both edges, a height or
        depth on a modal child) keep their panel state as it was.

        Returns:
            Ids of the cabinets whose geometry or configuration changed.

        Raises:
            InvalidDimensionError: If a width, height or depth value is
                negative for any target.
            DrawerEditError: If a drawer height value is rejected for any
                target.

            Every target is checked before any of them is applied.
        """
        targets = [
            target
            for target in self.targets(view_id, gd_id, products)
            if not self._ignores(target, gd_id)
        ]
        if not targets:
            logger.debug(f"No cabinets in view {view_id} take {gd_id}")
            return []

        self._check_dimensions(targets, gd_id, value)
        self._check_drawer_edits(targets, gd_id, value)

        changed: list[str] = []
        for target in targets:
            changed.extend(self._apply_role(target, gd_id, value))
            self._values.set_value(target.cabinet.cabinet_id, target.dim_id, value)

        result = list(dict.fromkeys(changed))
        logger.debug(f"{view_id}:{gd_id} = {value} changed {result}")
        return result

    @staticmethod
    def _ignores(target: GDTarget, gd_id: str) -> bool:
        cabinet = target.cabinet
        role = target.mapping.role_of(gd_id)
        if role is GDRole.WIDTH and cabinet.locks_both:
            logger.debug(f"Skipping width of {cabinet.cabinet_id}: both edges locked")
            return True
        return role in (GDRole.HEIGHT, GDRole.DEPTH) and is_modal_child(cabinet)

    @staticmethod
    def _check_dimensions(targets: list[GDTarget], gd_id: str, value: float) -> None:
        if value >= 0:
            return
        for target in targets:
            role = target.mapping.role_of(gd_id)
            if role in (GDRole.WIDTH, GDRole.HEIGHT, GDRole.DEPTH):
                raise InvalidDimensionError(role.value, value, target.cabinet.cabinet_id)

    def _check_drawer_edits(self, targets: list[GDTarget], gd_id: str, value: float) -> None:
        for target in targets:
            index = target.mapping.drawer_height_index(gd_id)
            cabinet = target.cabinet
            if index is None or not self._has_drawer(cabinet, index):
                continue
            heights = cabinet.enabled_drawer_heights()
            if len(heights) < cabinet.drawer_quantity:
                heights = self._balancer.equal_split(cabinet.height, cabinet.drawer_quantity)
            self._balancer.validate_drawer_edit(
                heights, cabinet.drawer_quantity, index, value
            )

    @staticmethod
    def _has_drawer(cabinet: Cabinet, index: int) -> bool:
        return cabinet.drawer_enabled and 0 <= index < cabinet.drawer_quantity

    def _apply_role(self, target: GDTarget, gd_id: str, value: float) -> list[str]:
        cabinet = target.cabinet
        cabinet_id = cabinet.cabinet_id
        role = target.mapping.role_of(gd_id)

        if role is GDRole.WIDTH:
            if value == cabinet.width:
                return []
            return self._coordinator.change_width(cabinet_id, value).adjusted_ids

        if role is GDRole.HEIGHT:
            if value == cabinet.height:
                return []
            self._coordinator.change_height(cabinet_id, value)
            return [cabinet_id]

        if role is GDRole.DEPTH:
            if value == cabinet.depth:
                return []
            self._coordinator.change_depth(cabinet_id, value)
            return [cabinet_id]

        if role is GDRole.SHELF_QTY:
            cabinet.shelf_count = max(0, int(round(value)))
            return [cabinet_id]

        if role is GDRole.DRAWER_QTY:
            self._balancer.apply_quantity_change(cabinet, max(0, int(round(value))))
            return [cabinet_id]

        if role is GDRole.DOOR_QTY:
            cabinet.door_quantity = max(0, int(round(value)))
            return [cabinet_id]

        if role is GDRole.DOOR_OVERHANG:
            return self._apply_door_overhang(target.dim_id, value)

        index = target.mapping.drawer_height_index(gd_id)
        if index is not None:
            if not self._has_drawer(cabinet, index):
                return []
            self._balancer.edit_drawer(cabinet, index, value)
            return [cabinet_id]

        # Unmapped: only the stored value changes.
        if role is None and self._values.raw_value(cabinet_id, target.dim_id) != value:
            return [cabinet_id]
        return []

    def _apply_door_overhang(self, dim_id: str, value: float) -> list[str]:
        """Door overhang is a scene-wide setting of wall cabinets."""
        flag = overhang_flag(value)
        changed: list[str] = []
        for cabinet in self._scene:
            if cabinet.cabinet_type is not CabinetType.TOP:
                continue
            cabinet.overhang_door = flag
            if self._values.has_persisted(cabinet.cabinet_id):
                self._values.set_value(cabinet.cabinet_id, dim_id, value)
            if self._dependents is not None:
                self._dependents.update_dependents(cabinet.cabinet_id)
            changed.append(cabinet.cabinet_id)
        return changed
