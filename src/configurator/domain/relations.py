"""Group (pairing) and sync relation stores.

Both stores are bidirectional: linking A to B also links B to A. The group
store re-derives normalized percentages after every mutation so that a
non-empty group list always sums to 100.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

PERCENT_TOTAL = 100.0
PERCENT_PLACES = 2


@dataclass(frozen=True)
class GroupMember:
    """A paired cabinet and the share of width deltas it receives."""

    cabinet_id: str
    percentage: float


def _round_pct(value: float) -> float:
    return round(value, PERCENT_PLACES)


def _clamp_pct(value: float) -> float:
    return max(0.0, min(PERCENT_TOTAL, value))


def even_split(cabinet_ids: list[str]) -> list[GroupMember]:
    """Split 100 evenly, rounded to 0.01, with the remainder on the first entry."""
    if not cabinet_ids:
        return []
    share = _round_pct(PERCENT_TOTAL / len(cabinet_ids))
    first = _round_pct(PERCENT_TOTAL - share * (len(cabinet_ids) - 1))
    return [GroupMember(cabinet_ids[0], first)] + [
        GroupMember(cid, share) for cid in cabinet_ids[1:]
    ]


def rescale(members: list[GroupMember]) -> list[GroupMember]:
    """Proportionally rescale percentages so they sum to 100.

    Falls back to an even split when every remaining share is zero.
    """
    if not members:
        return []
    total = math.fsum(m.percentage for m in members)
    if total <= 0:
        return even_split([m.cabinet_id for m in members])
    scaled = [_round_pct(m.percentage * PERCENT_TOTAL / total) for m in members]
    scaled[0] = _round_pct(PERCENT_TOTAL - math.fsum(scaled[1:]))
    return [GroupMember(m.cabinet_id, pct) for m, pct in zip(members, scaled)]


@dataclass
class GroupRelationStore:
    """Bidirectional pairing relation with normalized percentages."""

    _groups: dict[str, list[GroupMember]] = field(default_factory=dict)

    def members(self, cabinet_id: str) -> list[GroupMember]:
        """Group list of a cabinet; empty when it is not paired."""
        return list(self._groups.get(cabinet_id, []))

    def member_ids(self, cabinet_id: str) -> list[str]:
        return [m.cabinet_id for m in self._groups.get(cabinet_id, [])]

    def cabinet_ids(self) -> list[str]:
        """Cabinets that own a non-empty group list."""
        return list(self._groups)

    def total(self, cabinet_id: str) -> float:
        return math.fsum(m.percentage for m in self._groups.get(cabinet_id, []))

    def are_paired(self, first_id: str, second_id: str) -> bool:
        return second_id in self.member_ids(first_id) or first_id in self.member_ids(
            second_id
        )

    def add_member(self, cabinet_id: str, member_id: str) -> None:
        """Pair two cabinets, resetting both lists to an even split."""
        if cabinet_id == member_id:
            raise ValueError("A cabinet cannot be paired with itself")
        self._link(cabinet_id, member_id)
        self._link(member_id, cabinet_id)
        logger.debug(f"Paired {cabinet_id} with {member_id}")

    def _link(self, owner: str, member_id: str) -> None:
        ids = self.member_ids(owner)
        if member_id in ids:
            return
        ids.append(member_id)
        self._groups[owner] = even_split(ids)

    def remove_member(self, cabinet_id: str, member_id: str) -> None:
        """Unpair two cabinets and rescale what remains of both lists."""
        self._unlink(cabinet_id, member_id)
        self._unlink(member_id, cabinet_id)

    def _unlink(self, owner: str, member_id: str) -> None:
        members = self._groups.get(owner)
        if not members:
            return
        remaining = [m for m in members if m.cabinet_id != member_id]
        if remaining:
            self._groups[owner] = rescale(remaining)
        else:
            del self._groups[owner]

    def set_members(self, cabinet_id: str, members: list[GroupMember]) -> None:
        """Replace a group list verbatim (used when loading a saved scene).

        The list is rescaled so it sums to 100; reverse links are not added.
        """
        if members:
            self._groups[cabinet_id] = rescale(list(members))
        else:
            self._groups.pop(cabinet_id, None)

    def set_percentage(self, cabinet_id: str, member_id: str, percentage: float) -> None:
        """Edit one member's share; the others absorb the difference equally.

        The new share is clamped to [0, 100]. Every other entry changes by an
        equal part of the difference (clamped to [0, 100]) and any residual
        left by clamping or rounding goes to the first other entry that can
        take it.

        Raises:
            KeyError: If ``member_id`` is not in the cabinet's group list.
        """
        members = self.members(cabinet_id)
        index = next(
            (i for i, m in enumerate(members) if m.cabinet_id == member_id), None
        )
        if index is None:
            raise KeyError(f"{member_id} is not grouped with {cabinet_id}")

        new_pct = _round_pct(_clamp_pct(percentage))
        others = [i for i in range(len(members)) if i != index]
        if not others:
            self._groups[cabinet_id] = [GroupMember(member_id, PERCENT_TOTAL)]
            return

        diff = new_pct - members[index].percentage
        share = diff / len(others)
        values = [m.percentage for m in members]
        values[index] = new_pct
        for i in others:
            values[i] = _round_pct(_clamp_pct(values[i] - share))

        residual = PERCENT_TOTAL - math.fsum(values)
        for i in others:
            if abs(residual) < 1e-9:
                break
            adjusted = _round_pct(_clamp_pct(values[i] + residual))
            residual -= adjusted - values[i]
            values[i] = adjusted

        self._groups[cabinet_id] = [
            GroupMember(m.cabinet_id, v) for m, v in zip(members, values)
        ]

    def remove_cabinet(self, cabinet_id: str) -> None:
        """Drop a cabinet from every group, rescaling the lists it was in."""
        self._groups.pop(cabinet_id, None)
        for owner in list(self._groups):
            self._unlink(owner, cabinet_id)

    def to_dict(self) -> dict[str, list[GroupMember]]:
        return {k: list(v) for k, v in self._groups.items()}


@dataclass
class SyncRelationStore:
    """Bidirectional sync relation. Ordering is by x at evaluation time."""

    _syncs: dict[str, set[str]] = field(default_factory=dict)

    def link(self, cabinet_id: str, other_id: str) -> None:
        if cabinet_id == other_id:
            raise ValueError("A cabinet cannot be synced with itself")
        self._syncs.setdefault(cabinet_id, set()).add(other_id)
        self._syncs.setdefault(other_id, set()).add(cabinet_id)

    def link_all(self, cabinet_ids: list[str]) -> None:
        """Sync every listed cabinet with every other."""
        for i, first in enumerate(cabinet_ids):
            for second in cabinet_ids[i + 1 :]:
                self.link(first, second)

    def unlink(self, cabinet_id: str, other_id: str) -> None:
        for owner, target in ((cabinet_id, other_id), (other_id, cabinet_id)):
            linked = self._syncs.get(owner)
            if linked is None:
                continue
            linked.discard(target)
            if not linked:
                del self._syncs[owner]

    def synced_with(self, cabinet_id: str) -> set[str]:
        return set(self._syncs.get(cabinet_id, set()))

    def cohort(self, cabinet_id: str) -> set[str]:
        """The cabinet plus everything it is synced with."""
        return self.synced_with(cabinet_id) | {cabinet_id}

    def remove_cabinet(self, cabinet_id: str) -> None:
        for other in self.synced_with(cabinet_id):
            self.unlink(cabinet_id, other)
        self._syncs.pop(cabinet_id, None)

    def to_dict(self) -> dict[str, list[str]]:
        return {k: sorted(v) for k, v in self._syncs.items()}
