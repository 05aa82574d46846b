"""Lock-aware width anchoring.

A width edit has to decide which edge stays put. A locked edge never moves;
with no lock the edit is symmetric about the centre; with both edges locked
the edit is rejected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..entities import Cabinet
from ..errors import IllegalResizeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnchorResult:
    """Outcome of anchoring one width edit.

    Attributes:
        new_x: The cabinet's new ``x`` in its own convention (left edge, or
            centre for centred cabinets).
        new_width: The requested width.
        position_changed: Whether ``new_x`` differs from the old ``x``.
    """

    new_x: float
    new_width: float
    position_changed: bool


def clamp_position_x(x: float) -> float:
    """Clamp an x coordinate to the left wall."""
    return max(0.0, x)


def resolve_anchor(
    left_lock: bool,
    right_lock: bool,
    old_x: float,
    old_width: float,
    new_width: float,
    centered: bool = False,
    cabinet_id: str = "",
) -> AnchorResult:
    """Compute the new x for a width edit.

    Args:
        left_lock: Keep the left edge fixed.
        right_lock: Keep the right edge fixed.
        old_x: Current x. For ``centered`` cabinets this is the centre.
        old_width: Current width.
        new_width: Requested width.
        centered: Treat ``old_x`` as the horizontal centre. Centred results
            are not clamped.
        cabinet_id: Used only for the error raised on a double lock.

    Returns:
        AnchorResult with the resolved x.

    Raises:
        IllegalResizeError: If both edges are locked.

    Example:
        >>> resolve_anchor(False, False, 100, 600, 800).new_x
        0.0
    """
    if left_lock and right_lock:
        raise IllegalResizeError(cabinet_id)

    if centered:
        left = old_x - old_width / 2
        if left_lock:
            new_x = left + new_width / 2
        elif right_lock:
            new_x = left + old_width - new_width / 2
        else:
            new_x = old_x
        return AnchorResult(new_x, new_width, new_x != old_x)

    if left_lock:
        new_x = old_x
    elif right_lock:
        new_x = old_x + old_width - new_width
    else:
        center = old_x + old_width / 2
        new_x = center - new_width / 2

    new_x = clamp_position_x(new_x)
    return AnchorResult(new_x, new_width, new_x != old_x)


def apply_width_change(cabinet: Cabinet, new_width: float) -> AnchorResult:
    """Resize a cabinet in place using its own lock flags.

    Raises:
        IllegalResizeError: If the cabinet has both edges locked. The
            cabinet is left untouched.
    """
    result = resolve_anchor(
        cabinet.left_lock,
        cabinet.right_lock,
        cabinet.x,
        cabinet.width,
        new_width,
        centered=cabinet.cabinet_type.is_centered,
        cabinet_id=cabinet.cabinet_id,
    )
    logger.debug(
        f"Anchored {cabinet.cabinet_id}: width {cabinet.width} -> {new_width}, "
        f"x {cabinet.x} -> {result.new_x}"
    )
    cabinet.resize(width=new_width)
    cabinet.move_to(x=result.new_x)
    return result
