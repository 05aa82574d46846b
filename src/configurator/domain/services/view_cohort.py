"""Moves the members of a view together.

Dragging a view member translates every other member by the same delta.
Resizing one shifts its neighbours so the view keeps its layout. Members
already handled by group or sync resolution for the same event are excluded
by id so they are not shifted twice.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from ..entities import Cabinet, Scene
from .anchor import clamp_position_x

if TYPE_CHECKING:
    from ...contracts.protocols import DependentComponentUpdater, ViewMembershipProvider

logger = logging.getLogger(__name__)


class ViewCohortMover:
    """Translate, reposition and realign view cohorts."""

    def __init__(
        self,
        scene: Scene,
        views: "ViewMembershipProvider",
        dependents: "DependentComponentUpdater | None" = None,
    ) -> None:
        self._scene = scene
        self._views = views
        self._dependents = dependents

    def _cohort(
        self, cabinet: Cabinet, exclude_ids: Iterable[str] = ()
    ) -> list[Cabinet]:
        if not cabinet.has_view:
            return []
        excluded = set(exclude_ids) | {cabinet.cabinet_id}
        members = []
        for cid in self._views.get_cabinets_in_view(cabinet.view_id):
            if cid in excluded:
                continue
            member = self._scene.get(cid)
            if member is not None:
                members.append(member)
        return members

    def clamp_to_wall(self, cabinet: Cabinet) -> None:
        """Keep a cabinet inside the wall.

        Wall-mounted cabinets are clamped on both axes. Floor-standing
        cabinets are clamped horizontally only and keep their ``y``.
        """
        wall = self._scene.wall
        left = max(0.0, min(cabinet.left, wall.length - cabinet.width))
        x = cabinet.x_for_left_edge(left)
        if cabinet.cabinet_type.is_wall_mounted:
            y = max(0.0, min(cabinet.y, wall.height - cabinet.height))
            cabinet.move_to(x=x, y=y)
        else:
            cabinet.move_to(x=x)

    def translate(
        self,
        cabinet_id: str,
        dx: float,
        dy: float = 0.0,
        exclude_ids: Iterable[str] = (),
    ) -> list[str]:
        """Move the other members of a cabinet's view by (dx, dy).

        Floor-standing members ignore ``dy``.

        Returns:
            Ids of the members that were moved.
        """
        cabinet = self._scene.require(cabinet_id)
        moved: list[str] = []
        for member in self._cohort(cabinet, exclude_ids):
            if member.cabinet_type.is_wall_mounted:
                member.move_to(x=member.x + dx, y=member.y + dy)
            else:
                member.move_to(x=member.x + dx)
            self.clamp_to_wall(member)
            self._notify(member.cabinet_id)
            moved.append(member.cabinet_id)
        if moved:
            logger.debug(f"Translated view cohort of {cabinet_id} by ({dx}, {dy}): {moved}")
        return moved

    def reposition_after_resize(
        self,
        cabinet_id: str,
        delta: float,
        old_left: float,
        old_width: float,
        exclude_ids: Iterable[str] = (),
    ) -> list[str]:
        """Shift view neighbours after a width change of ``cabinet_id``.

        * left lock: members right of the old left edge move by ``+delta``;
        * right lock: members left of the old right edge move by ``-delta``;
        * no lock: members left of the old left edge move by ``-delta/2``
          and members right of it by ``+delta/2``.

        Resulting x values are clamped to the left wall only.

        Returns:
            Ids of the members that were shifted.
        """
        cabinet = self._scene.require(cabinet_id)
        if delta == 0:
            return []
        old_right = old_left + old_width
        shifted: list[str] = []
        for member in self._cohort(cabinet, exclude_ids):
            if cabinet.left_lock and not cabinet.right_lock:
                dx = delta if member.left > old_left else 0.0
            elif cabinet.right_lock and not cabinet.left_lock:
                dx = -delta if member.right < old_right else 0.0
            elif member.left < old_left:
                dx = -delta / 2
            elif member.left > old_left:
                dx = delta / 2
            else:
                dx = 0.0
            if dx == 0:
                continue
            left = member.left + dx
            if not member.cabinet_type.is_centered:
                left = clamp_position_x(left)
            member.move_to(x=member.x_for_left_edge(left))
            self._notify(member.cabinet_id)
            shifted.append(member.cabinet_id)
        return shifted

    def realign(self, view_id: str) -> list[str]:
        """Realign the dependent components of every member of a view."""
        realigned = []
        for cid in self._views.get_cabinets_in_view(view_id):
            member = self._scene.get(cid)
            if member is None:
                continue
            self._notify(cid)
            realigned.append(cid)
        logger.debug(f"Realigned view {view_id}: {realigned}")
        return realigned

    def realign_all(self, view_ids: Iterable[str]) -> dict[str, list[str]]:
        return {view_id: self.realign(view_id) for view_id in view_ids}

    def _notify(self, cabinet_id: str) -> None:
        if self._dependents is not None:
            self._dependents.update_dependents(cabinet_id)
