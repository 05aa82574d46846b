"""Keeps dependent components attached to their parent cabinet.

Fillers and panels hang off a parent's left or right side; kickers sit under
base and tall cabinets; bulkheads fill the space above base, top and tall
cabinets up to the wall height; under-panels sit beneath top cabinets and
benchtops rest on base cabinets. After a parent moves or resizes, its
children are re-derived from the parent's geometry.
"""

from __future__ import annotations

import logging

from ..entities import Cabinet, Scene
from ..value_objects import CabinetType

logger = logging.getLogger(__name__)

FACE_THICKNESS = 16.0
DOOR_OVERHANG = 20.0
UNDER_PANEL_DEPTH_INSET = 20.0
BENCHTOP_DEPTH_EXTENSION = 20.0
DEFAULT_BENCHTOP_THICKNESS = 38.0
DEFAULT_BENCHTOP_FRONT_OVERHANG = 20.0

SIDE_CHILD_TYPES = (CabinetType.FILLER, CabinetType.PANEL)


class DependentComponentAligner:
    """Re-derives child geometry from a parent cabinet."""

    def __init__(self, scene: Scene) -> None:
        self._scene = scene

    def update_dependents(self, cabinet_id: str) -> list[str]:
        """Realign every child of ``cabinet_id``.

        Returns:
            Ids of the children that were realigned.
        """
        parent = self._scene.get(cabinet_id)
        if parent is None:
            return []

        updated: list[str] = []
        children = self._scene.children_of(cabinet_id)
        for child in children:
            if child.cabinet_type in SIDE_CHILD_TYPES:
                self._align_side_child(parent, child)
                updated.append(child.cabinet_id)

        parent_type = parent.cabinet_type
        for child in children:
            kind = child.cabinet_type
            if kind is CabinetType.KICKER and parent_type in (
                CabinetType.BASE,
                CabinetType.TALL,
            ):
                self._align_kicker(parent, child)
            elif kind is CabinetType.BULKHEAD and parent_type in (
                CabinetType.BASE,
                CabinetType.TOP,
                CabinetType.TALL,
            ):
                self._align_bulkhead(parent, child)
            elif kind is CabinetType.UNDER_PANEL and parent_type is CabinetType.TOP:
                self._align_under_panel(parent, child)
            elif kind is CabinetType.BENCHTOP and parent_type is CabinetType.BASE:
                self._align_benchtop(parent, child)
            else:
                continue
            updated.append(child.cabinet_id)

        if updated:
            logger.debug(f"Realigned dependents of {cabinet_id}: {updated}")
        return updated

    def _effective_span(
        self, parent: Cabinet, off_floor_only: bool = False
    ) -> tuple[float, float]:
        """(left, width) of the parent plus its side fillers and panels."""
        left, right = parent.left, parent.right
        for child in self._scene.children_of(parent.cabinet_id):
            if child.cabinet_type not in SIDE_CHILD_TYPES:
                continue
            if off_floor_only and child.y <= 0:
                continue
            left = min(left, child.left)
            right = max(right, child.right)
        return left, right - left

    def _align_side_child(self, parent: Cabinet, child: Cabinet) -> None:
        overhang = parent.cabinet_type is CabinetType.TOP and parent.overhang_door
        height = parent.height + (DOOR_OVERHANG if overhang else 0.0)
        y = parent.y - (DOOR_OVERHANG if overhang else 0.0)
        depth = parent.depth if child.cabinet_type is CabinetType.PANEL else child.depth
        child.resize(height=height, depth=depth)

        if child.parent_side == "left":
            x = child.x_for_left_edge(parent.left - child.width)
        elif child.parent_side == "right":
            x = child.x_for_left_edge(parent.right)
        else:
            x = child.x
        child.move_to(x=x, y=y)

    def _align_kicker(self, parent: Cabinet, kicker: Cabinet) -> None:
        left, width = self._effective_span(parent, off_floor_only=True)
        kicker.resize(width=width, height=max(0.0, parent.y), depth=FACE_THICKNESS)
        kicker.move_to(x=left + width / 2, y=0.0)

    def _align_bulkhead(self, parent: Cabinet, bulkhead: Cabinet) -> None:
        left, width = self._effective_span(parent)
        height = max(0.0, self._scene.wall.height - parent.top)
        bulkhead.resize(width=width, height=height, depth=FACE_THICKNESS)
        bulkhead.move_to(x=left + width / 2, y=parent.top)

    def _align_under_panel(self, parent: Cabinet, panel: Cabinet) -> None:
        left, width = self._effective_span(parent)
        depth = max(0.0, parent.depth - UNDER_PANEL_DEPTH_INSET)
        panel.resize(width=width, height=FACE_THICKNESS, depth=depth)
        panel.move_to(x=panel.x_for_left_edge(left), y=parent.y)

    def _align_benchtop(self, parent: Cabinet, benchtop: Cabinet) -> None:
        extras = benchtop.benchtop
        thickness = DEFAULT_BENCHTOP_THICKNESS
        front = DEFAULT_BENCHTOP_FRONT_OVERHANG
        left_overhang = right_overhang = 0.0
        if extras is not None:
            if extras.thickness is not None:
                thickness = extras.thickness
            if extras.front_overhang is not None:
                front = extras.front_overhang
            left_overhang = extras.left_overhang or 0.0
            right_overhang = extras.right_overhang or 0.0

        left, width = self._effective_span(parent)
        benchtop.resize(
            width=width + left_overhang + right_overhang,
            height=thickness,
            depth=parent.depth + BENCHTOP_DEPTH_EXTENSION + front,
        )
        benchtop.move_to(
            x=benchtop.x_for_left_edge(left - left_overhang),
            y=parent.top,
        )
