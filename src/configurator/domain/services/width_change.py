"""Per-event orchestration of cabinet dimension and position edits.

A width edit is resolved in this order:

1. sync: if two or more members of the cabinet's sync relation are
   selected, the synchronized cohort absorbs the edit and nothing else runs;
2. locks: a cabinet with both edges locked rejects the edit;
3. anchor: the cabinet is resized around its locked edge or centre;
4. group: paired cabinets receive their share of the delta;
5. view: remaining view members are repositioned, skipping anything the
   previous steps already adjusted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from ..entities import Scene
from ..errors import IllegalResizeError, InvalidDimensionError
from ..events import CabinetMoved, CabinetResized, EventBus, ResizeRejected
from ..relations import GroupRelationStore, SyncRelationStore
from .anchor import apply_width_change
from .drawer_heights import DrawerHeightBalancer
from .group_distributor import GroupDistribution, GroupProportionalDistributor
from .sync_distributor import SyncDistributor, SyncResult
from .view_cohort import ViewCohortMover

if TYPE_CHECKING:
    from ...contracts.protocols import DependentComponentUpdater, ViewMembershipProvider

logger = logging.getLogger(__name__)


@dataclass
class WidthChangeResult:
    """What a width edit touched."""

    cabinet_id: str
    old_width: float
    new_width: float
    old_x: float
    new_x: float
    sync: SyncResult | None = None
    group: GroupDistribution | None = None
    repositioned: list[str] = field(default_factory=list)

    @property
    def delta(self) -> float:
        return self.new_width - self.old_width

    @property
    def adjusted_ids(self) -> list[str]:
        """Every cabinet whose geometry changed, the edited one first."""
        ids = [self.cabinet_id]
        if self.sync is not None:
            ids += [cid for cid in self.sync.adjusted if cid != self.cabinet_id]
        if self.group is not None:
            ids += self.group.adjusted
        ids += self.repositioned
        return list(dict.fromkeys(ids))


class WidthChangeCoordinator:
    """Applies user edits to one scene using every constraint that applies."""

    def __init__(
        self,
        scene: Scene,
        groups: GroupRelationStore,
        syncs: SyncRelationStore,
        views: "ViewMembershipProvider",
        dependents: "DependentComponentUpdater | None" = None,
        balancer: DrawerHeightBalancer | None = None,
        events: EventBus | None = None,
    ) -> None:
        self._scene = scene
        self._groups = groups
        self._dependents = dependents
        self._balancer = balancer or DrawerHeightBalancer()
        self._events = events or EventBus()
        self.sync_distributor = SyncDistributor(scene, syncs)
        self.group_distributor = GroupProportionalDistributor(scene, groups)
        self.cohort = ViewCohortMover(scene, views, dependents)

    def change_width(
        self,
        cabinet_id: str,
        new_width: float,
        selected_ids: Iterable[str] = (),
    ) -> WidthChangeResult:
        """Resize a cabinet's width.

        Args:
            cabinet_id: Cabinet being edited.
            new_width: Requested width in millimetres.
            selected_ids: Current selection, used to activate sync cohorts.

        Returns:
            WidthChangeResult describing every adjusted cabinet.

        Raises:
            IllegalResizeError: If both edges are locked and no sync cohort
                is active. Nothing is mutated.
            InvalidDimensionError: If ``new_width`` is negative, or a synced
                member would have to shrink below zero.
        """
        if new_width < 0:
            raise InvalidDimensionError("width", new_width, cabinet_id)
        cabinet = self._scene.require(cabinet_id)
        old_width, old_x, old_left = cabinet.width, cabinet.x, cabinet.left

        sync = self.sync_distributor.distribute(cabinet_id, new_width, selected_ids)
        if sync is not None:
            result = WidthChangeResult(
                cabinet_id, old_width, cabinet.width, old_x, cabinet.x, sync=sync
            )
            self._realign(result.adjusted_ids)
            self._publish_resize(result)
            return result

        if cabinet.locks_both:
            error = IllegalResizeError(cabinet_id)
            self._events.publish(ResizeRejected(cabinet_id, error.message))
            raise error

        apply_width_change(cabinet, new_width)
        delta = new_width - old_width
        group = self.group_distributor.distribute(cabinet_id, delta)

        excluded = set(group.adjusted) | {
            cid for cid in self._scene.cabinets if self._groups.are_paired(cabinet_id, cid)
        }
        repositioned = self.cohort.reposition_after_resize(
            cabinet_id, delta, old_left, old_width, exclude_ids=excluded
        )

        result = WidthChangeResult(
            cabinet_id,
            old_width,
            new_width,
            old_x,
            cabinet.x,
            group=group,
            repositioned=repositioned,
        )
        self._realign([cabinet_id] + group.adjusted)
        self._publish_resize(result)
        logger.debug(
            f"Width of {cabinet_id} {old_width} -> {new_width}: adjusted {result.adjusted_ids}"
        )
        return result

    def change_height(self, cabinet_id: str, new_height: float) -> list[float]:
        """Resize a cabinet's height and rescale its drawers.

        Returns:
            The cabinet's drawer heights after rescaling.
        """
        if new_height < 0:
            raise InvalidDimensionError("height", new_height, cabinet_id)
        cabinet = self._scene.require(cabinet_id)
        old_height = cabinet.height
        cabinet.resize(height=new_height)
        heights = self._balancer.apply_height_change(cabinet, old_height)
        self._realign([cabinet_id])
        return heights

    def change_depth(self, cabinet_id: str, new_depth: float) -> None:
        if new_depth < 0:
            raise InvalidDimensionError("depth", new_depth, cabinet_id)
        self._scene.require(cabinet_id).resize(depth=new_depth)
        self._realign([cabinet_id])

    def move(
        self,
        cabinet_id: str,
        x: float,
        y: float | None = None,
        exclude_ids: Iterable[str] = (),
    ) -> list[str]:
        """Move a cabinet and drag its view cohort along.

        The moved cabinet is clamped to the wall first; the cohort follows
        by the delta that was actually applied.

        Returns:
            Ids of every cabinet that moved, the dragged one first.
        """
        cabinet = self._scene.require(cabinet_id)
        old_x, old_y = cabinet.x, cabinet.y
        cabinet.move_to(x=x, y=y if cabinet.cabinet_type.is_wall_mounted else None)
        self.cohort.clamp_to_wall(cabinet)
        dx, dy = cabinet.x - old_x, cabinet.y - old_y
        self._realign([cabinet_id])
        if dx == 0 and dy == 0:
            return [cabinet_id]

        moved = self.cohort.translate(cabinet_id, dx, dy, exclude_ids=exclude_ids)
        self._events.publish(CabinetMoved(cabinet_id, dx, dy, tuple(moved)))
        return [cabinet_id] + moved

    def _realign(self, cabinet_ids: Iterable[str]) -> None:
        if self._dependents is None:
            return
        for cid in cabinet_ids:
            if cid in self._scene:
                self._dependents.update_dependents(cid)

    def _publish_resize(self, result: WidthChangeResult) -> None:
        self._events.publish(
            CabinetResized(
                result.cabinet_id,
                result.old_width,
                result.new_width,
                tuple(result.adjusted_ids),
            )
        )
