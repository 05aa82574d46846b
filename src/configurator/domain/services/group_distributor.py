"""Proportional width distribution across paired cabinets."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..entities import Scene
from ..relations import GroupRelationStore
from .anchor import apply_width_change

logger = logging.getLogger(__name__)


@dataclass
class GroupDistribution:
    """Which paired cabinets were resized, and which were skipped."""

    adjusted: list[str] = field(default_factory=list)
    skipped_locked: list[str] = field(default_factory=list)
    skipped_missing: list[str] = field(default_factory=list)


class GroupProportionalDistributor:
    """Spread a width delta over an edited cabinet's group.

    Each member receives ``delta * percentage / 100`` and is re-anchored with
    its own lock flags. Members are independent of one another, so
    processing order does not matter.
    """

    def __init__(self, scene: Scene, groups: GroupRelationStore) -> None:
        self._scene = scene
        self._groups = groups

    def distribute(self, cabinet_id: str, delta: float) -> GroupDistribution:
        result = GroupDistribution()
        if delta == 0:
            return result

        for member in self._groups.members(cabinet_id):
            cabinet = self._scene.get(member.cabinet_id)
            if cabinet is None:
                result.skipped_missing.append(member.cabinet_id)
                continue
            if cabinet.locks_both:
                logger.debug(
                    f"Skipping grouped cabinet {cabinet.cabinet_id}: both edges locked"
                )
                result.skipped_locked.append(cabinet.cabinet_id)
                continue
            new_width = max(0.0, cabinet.width + delta * member.percentage / 100)
            apply_width_change(cabinet, new_width)
            result.adjusted.append(cabinet.cabinet_id)

        return result
