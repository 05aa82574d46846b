"""Synchronized resize of a selected sync cohort.

When two or more cabinets of a sync relation are selected together, a width
edit on one of them is absorbed by the others so the cohort stays contiguous
and its outer span stays where it is:

* if selected members exist to the right of the edited cabinet, they share
  ``-delta`` equally; the edited cabinet keeps its left edge and the
  rightmost member keeps its right edge;
* otherwise the members to the left share it; the edited cabinet keeps its
  right edge and the leftmost member keeps its left edge.

Members in between are shifted by the cumulative width change of the members
further out, so no gaps or overlaps open up. Unselected sync members stay
where they are; the span does not move, so nothing outside it needs to.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from ..entities import Cabinet, Scene
from ..errors import InvalidDimensionError
from ..relations import SyncRelationStore
from .anchor import clamp_position_x

logger = logging.getLogger(__name__)

MIN_SYNC_COHORT = 2


@dataclass
class SyncResult:
    """Cabinets touched by a synchronized resize.

    Attributes:
        adjusted: Selected cohort members that were resized, edited one first.
        old_span: (left, right) of the active cohort before the edit.
        new_span: (left, right) of the active cohort after the edit.
    """

    adjusted: list[str] = field(default_factory=list)
    old_span: tuple[float, float] = (0.0, 0.0)
    new_span: tuple[float, float] = (0.0, 0.0)


def _place(cabinet: Cabinet, left: float, width: float) -> None:
    cabinet.resize(width=width)
    x = cabinet.x_for_left_edge(left)
    if not cabinet.cabinet_type.is_centered:
        x = clamp_position_x(x)
    cabinet.move_to(x=x)


class SyncDistributor:
    """Resolves a width edit against the selected part of a sync cohort."""

    def __init__(self, scene: Scene, syncs: SyncRelationStore) -> None:
        self._scene = scene
        self._syncs = syncs

    def active_cohort(self, cabinet_id: str, selected_ids: Iterable[str]) -> list[Cabinet]:
        """Selected members of the cabinet's sync cohort, sorted by left edge."""
        selected = set(selected_ids) | {cabinet_id}
        members = [
            self._scene.get(cid)
            for cid in self._syncs.cohort(cabinet_id)
            if cid in selected
        ]
        return sorted((c for c in members if c is not None), key=lambda c: c.left)

    def distribute(
        self, cabinet_id: str, new_width: float, selected_ids: Iterable[str]
    ) -> SyncResult | None:
        """Apply a width edit across the active cohort.

        Args:
            cabinet_id: The edited cabinet.
            new_width: Its requested width.
            selected_ids: Currently selected cabinets. The edited cabinet is
                always treated as selected.

        Returns:
            SyncResult, or None when fewer than two cohort members are
            selected and the caller should fall through to lock and group
            handling.

        Raises:
            InvalidDimensionError: If an absorbing member would end up with a
                negative width. Nothing is mutated.
        """
        active = self.active_cohort(cabinet_id, selected_ids)
        if len(active) < MIN_SYNC_COHORT:
            return None

        index = next(i for i, c in enumerate(active) if c.cabinet_id == cabinet_id)
        edited = active[index]
        delta = new_width - edited.width
        old_span = (active[0].left, active[-1].right)
        result = SyncResult(old_span=old_span)
        if delta == 0:
            result.new_span = old_span
            return result

        right = active[index + 1 :]
        left = active[:index]
        absorbing = right or left
        share = -delta / len(absorbing)
        for member in absorbing:
            if member.width + share < 0:
                raise InvalidDimensionError("width", member.width + share, member.cabinet_id)

        cumulative = 0.0
        if right:
            _place(edited, edited.left, new_width)
            for member in reversed(right):
                new_right = member.right - cumulative
                member_width = member.width + share
                _place(member, new_right - member_width, member_width)
                cumulative += share
        else:
            _place(edited, edited.right - new_width, new_width)
            for member in left:
                _place(member, member.left + cumulative, member.width + share)
                cumulative += share

        result.adjusted = [edited.cabinet_id] + [
            c.cabinet_id for c in active if c is not edited
        ]
        result.new_span = (
            min(c.left for c in active),
            max(c.right for c in active),
        )
        logger.debug(
            f"Synced resize of {cabinet_id} by {delta}: span {old_span} -> {result.new_span}"
        )
        return result
