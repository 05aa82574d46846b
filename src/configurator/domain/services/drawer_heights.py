"""Drawer height balancing and validation.

Enabled drawers always fill the cabinet height. The last enabled drawer is
the dependent drawer: it is never edited directly and absorbs whatever the
other drawers leave over.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from ..entities import Cabinet
from ..errors import DependentDrawerError, DrawerBoundError, DrawerEditError

logger = logging.getLogger(__name__)

MIN_DRAWER_HEIGHT = 50.0
MAX_DRAWER_HEIGHT = 2000.0
CONSTRAINT_MAX_HEIGHT = 9999.0
HEIGHT_PLACES = 1
SUM_TOLERANCE = 0.1
MAX_REDISTRIBUTION_PASSES = 10


def round_height(value: float) -> float:
    """Round a drawer height to 0.1 mm."""
    return round(value, HEIGHT_PLACES)


@dataclass(frozen=True)
class DrawerConstraint:
    """Per-drawer bounds used when scaling to a new cabinet height."""

    min_height: float = MIN_DRAWER_HEIGHT
    max_height: float = CONSTRAINT_MAX_HEIGHT

    def __post_init__(self) -> None:
        if self.min_height > self.max_height:
            raise ValueError("Drawer constraint min is greater than max")

    def clamp(self, value: float) -> float:
        return max(self.min_height, min(self.max_height, value))


@dataclass
class HeightValidation:
    """Result of checking a set of drawer heights."""

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        self.errors.append(message)
        self.is_valid = False


@dataclass(frozen=True)
class HeightSummary:
    total_height: float
    used_height: float
    remaining_height: float
    drawer_count: int
    average_height: float


class DrawerHeightBalancer:
    """Balances and validates drawer heights for one cabinet height.

    Args:
        min_height: Smallest allowed drawer height.
        max_height: Largest allowed height for the dependent drawer.
    """

    def __init__(
        self,
        min_height: float = MIN_DRAWER_HEIGHT,
        max_height: float = MAX_DRAWER_HEIGHT,
    ) -> None:
        if min_height <= 0 or max_height < min_height:
            raise ValueError("Invalid drawer height bounds")
        self.min_height = min_height
        self.max_height = max_height

    def equal_split(self, height: float, quantity: int) -> list[float]:
        """Split ``height`` across ``quantity`` drawers.

        Shares are rounded to 0.1 mm and the last drawer takes the rounding
        residual so the heights sum to ``height`` exactly.

        Example:
            >>> DrawerHeightBalancer().equal_split(900, 3)
            [300.0, 300.0, 300.0]
        """
        if quantity <= 0:
            return []
        share = round_height(height / quantity)
        last = round_height(height - share * (quantity - 1))
        return [share] * (quantity - 1) + [last]

    def update_drawer_height(
        self,
        height: float,
        quantity: int,
        heights: list[float],
        index: int,
        new_height: float,
    ) -> list[float]:
        """Set one drawer and rebalance the rest.

        The edited height is rounded and clamped to ``[min_height, height]``.
        Every other drawer gets an equal share of what remains, floored at
        ``min_height``. If the result would overshoot the cabinet, or nothing
        remains, the heights fall back to an equal split. The dependent
        drawer absorbs any rounding residual.

        Raises:
            IndexError: If ``index`` is not an enabled drawer.
        """
        if not 0 <= index < quantity:
            raise IndexError(f"Drawer index {index} out of range for {quantity} drawers")
        if quantity == 1:
            return [round_height(height)]

        edited = round_height(max(self.min_height, min(height, new_height)))
        remaining = height - edited
        others = quantity - 1
        if remaining <= 0:
            logger.debug("No height left for the other drawers, using equal split")
            return self.equal_split(height, quantity)

        share = max(self.min_height, round_height(remaining / others))
        if edited + share * others > height + SUM_TOLERANCE:
            logger.debug("Rebalanced drawers overshoot the cabinet, using equal split")
            return self.equal_split(height, quantity)

        result = [share] * quantity
        result[index] = edited
        absorber = quantity - 1 if index != quantity - 1 else quantity - 2
        result[absorber] = round_height(
            height - math.fsum(h for i, h in enumerate(result) if i != absorber)
        )
        return result

    def project_dependent_height(
        self, heights: list[float], quantity: int, index: int, new_height: float
    ) -> float:
        """Dependent drawer height if drawer ``index`` changes to ``new_height``."""
        dependent = quantity - 1
        return heights[dependent] - (new_height - heights[index])

    def validate_drawer_edit(
        self,
        heights: list[float],
        quantity: int,
        index: int,
        new_height: float,
        min_height: float | None = None,
        max_height: float | None = None,
    ) -> float:
        """Check an edit before it is committed.

        Args:
            heights: Current enabled drawer heights.
            quantity: Number of enabled drawers.
            index: Drawer being edited.
            new_height: Requested height.
            min_height: Dependent drawer minimum, defaults to the balancer's.
            max_height: Dependent drawer maximum, defaults to the balancer's.

        Returns:
            The projected dependent drawer height.

        Raises:
            DependentDrawerError: If ``index`` is the dependent drawer.
            DrawerBoundError: If the projected dependent height is out of
                bounds.
            DrawerEditError: If the index or heights are inconsistent.
        """
        if not 0 <= index < quantity or len(heights) < quantity:
            raise DrawerEditError(f"Drawer {index + 1} is not an enabled drawer")
        if index == quantity - 1:
            raise DependentDrawerError(index)

        low = self.min_height if min_height is None else min_height
        high = self.max_height if max_height is None else max_height
        projected = self.project_dependent_height(heights, quantity, index, new_height)
        if projected < low:
            raise DrawerBoundError("min", low, projected)
        if projected > high:
            raise DrawerBoundError("max", high, projected)
        return projected

    def scale_to_height(
        self,
        heights: list[float],
        old_height: float,
        new_height: float,
        constraints: list[DrawerConstraint] | None = None,
    ) -> list[float]:
        """Scale heights proportionally to a new cabinet height.

        Without constraints an overshooting result falls back to an equal
        split. With constraints, clamped drawers hand their excess to the
        unclamped ones for up to ten passes, then any residual goes to the
        largest drawer.
        """
        quantity = len(heights)
        if quantity == 0:
            return []
        if old_height <= 0 or all(h <= 0 for h in heights):
            return self.equal_split(new_height, quantity)

        ratio = new_height / old_height
        scaled = [round_height(h * ratio) for h in heights]

        if not constraints:
            if math.fsum(scaled) > new_height + SUM_TOLERANCE:
                return self.equal_split(new_height, quantity)
            scaled[-1] = round_height(new_height - math.fsum(scaled[:-1]))
            return scaled

        bounds = [
            constraints[i] if i < len(constraints) else DrawerConstraint()
            for i in range(quantity)
        ]
        for _ in range(MAX_REDISTRIBUTION_PASSES):
            scaled = [round_height(b.clamp(h)) for h, b in zip(scaled, bounds)]
            residual = new_height - math.fsum(scaled)
            if abs(residual) < SUM_TOLERANCE:
                break
            if residual > 0:
                free = [i for i, b in enumerate(bounds) if scaled[i] < b.max_height]
            else:
                free = [i for i, b in enumerate(bounds) if scaled[i] > b.min_height]
            if not free:
                break
            share = residual / len(free)
            for i in free:
                scaled[i] = round_height(scaled[i] + share)

        residual = round_height(new_height - math.fsum(scaled))
        if residual:
            largest = max(range(quantity), key=lambda i: scaled[i])
            logger.warning(
                f"Drawer constraints left {residual}mm unassigned; "
                f"giving it to drawer {largest + 1}"
            )
            scaled[largest] = round_height(scaled[largest] + residual)
        return scaled

    def validate_heights(self, heights: list[float], total_height: float) -> HeightValidation:
        """Check minimums and that the heights fill the cabinet."""
        result = HeightValidation()
        for i, h in enumerate(heights):
            if h < self.min_height:
                result.add_error(
                    f"Drawer {i + 1} height {h:g}mm is below the minimum of "
                    f"{self.min_height:g}mm"
                )
        total = math.fsum(heights)
        if heights and abs(total - total_height) > SUM_TOLERANCE:
            result.add_error(
                f"Drawer heights sum to {total:g}mm but the cabinet is {total_height:g}mm"
            )
        return result

    def fits_minimum(self, total_height: float, quantity: int) -> bool:
        """Whether ``quantity`` drawers at the minimum height fit."""
        return quantity * self.min_height <= total_height + SUM_TOLERANCE

    def fits_maximum(self, total_height: float, quantity: int) -> bool:
        """Whether ``quantity`` drawers at the maximum height can fill the cabinet."""
        return quantity * self.max_height >= total_height - SUM_TOLERANCE

    def height_summary(self, heights: list[float], total_height: float) -> HeightSummary:
        used = round_height(math.fsum(heights))
        count = len(heights)
        return HeightSummary(
            total_height=total_height,
            used_height=used,
            remaining_height=round_height(total_height - used),
            drawer_count=count,
            average_height=round_height(used / count) if count else 0.0,
        )

    def apply_quantity_change(self, cabinet: Cabinet, quantity: int) -> list[float]:
        """Reset a cabinet's drawers to an equal split for a new quantity."""
        if quantity < 0:
            raise ValueError("Drawer quantity cannot be negative")
        cabinet.drawer_quantity = quantity
        cabinet.drawer_enabled = quantity > 0
        cabinet.drawer_heights = self.equal_split(cabinet.height, quantity)
        return list(cabinet.drawer_heights)

    def apply_height_change(
        self,
        cabinet: Cabinet,
        old_height: float,
        constraints: list[DrawerConstraint] | None = None,
    ) -> list[float]:
        """Rescale a cabinet's drawers after its height changed."""
        if not cabinet.drawer_enabled or cabinet.drawer_quantity == 0:
            return []
        heights = cabinet.enabled_drawer_heights()
        if len(heights) < cabinet.drawer_quantity:
            heights = self.equal_split(old_height, cabinet.drawer_quantity)
        cabinet.drawer_heights = self.scale_to_height(
            heights, old_height, cabinet.height, constraints
        )
        return list(cabinet.drawer_heights)

    def edit_drawer(self, cabinet: Cabinet, index: int, new_height: float) -> list[float]:
        """Validate and commit a single drawer edit on a cabinet.

        Raises:
            DrawerEditError: If the edit is rejected. The cabinet is unchanged.
        """
        quantity = cabinet.drawer_quantity
        if not cabinet.drawer_enabled or quantity == 0:
            raise DrawerEditError(f"Cabinet {cabinet.cabinet_id} has no drawers")
        heights = cabinet.enabled_drawer_heights()
        if len(heights) < quantity:
            heights = self.equal_split(cabinet.height, quantity)
        self.validate_drawer_edit(heights, quantity, index, new_height)
        cabinet.drawer_heights = self.update_drawer_height(
            cabinet.height, quantity, heights, index, new_height
        )
        logger.debug(
            f"Drawer {index + 1} of {cabinet.cabinet_id} set to {new_height}: "
            f"{cabinet.drawer_heights}"
        )
        return list(cabinet.drawer_heights)


class DrawerEditSession:
    """Tracks an in-progress drawer edit on one cabinet.

    While ``is_editing`` is set, ``resync`` leaves the heights alone so a
    half-typed value is not overwritten. ``commit`` validates and rebalances;
    ``cancel`` restores the heights captured by ``begin``.
    """

    def __init__(self, cabinet: Cabinet, balancer: DrawerHeightBalancer | None = None) -> None:
        self.cabinet = cabinet
        self.balancer = balancer or DrawerHeightBalancer()
        self.is_editing = False
        self._snapshot: list[float] = []

    def begin(self) -> None:
        self.is_editing = True
        self._snapshot = list(self.cabinet.drawer_heights)

    def preview(self, index: int, new_height: float) -> None:
        """Show a transient value without rebalancing."""
        if not self.is_editing:
            self.begin()
        if not 0 <= index < len(self.cabinet.drawer_heights):
            raise DrawerEditError(f"Drawer {index + 1} is not an enabled drawer")
        self.cabinet.drawer_heights[index] = new_height

    def commit(self, index: int, new_height: float) -> list[float]:
        """Validate against the pre-edit heights and rebalance.

        On rejection the pre-edit heights are restored and the error is
        re-raised.
        """
        if self.is_editing:
            self.cabinet.drawer_heights = list(self._snapshot)
        try:
            return self.balancer.edit_drawer(self.cabinet, index, new_height)
        except DrawerEditError:
            if self.is_editing:
                self.cabinet.drawer_heights = list(self._snapshot)
            raise
        finally:
            self.is_editing = False

    def cancel(self) -> None:
        if self.is_editing:
            self.cabinet.drawer_heights = list(self._snapshot)
        self.is_editing = False

    def resync(self) -> bool:
        """Re-derive heights from the cabinet when they no longer fill it.

        Returns:
            True if the heights were changed.
        """
        if self.is_editing:
            return False
        cabinet = self.cabinet
        if not cabinet.drawer_enabled or cabinet.drawer_quantity == 0:
            return False
        heights = cabinet.enabled_drawer_heights()
        if (
            len(heights) == cabinet.drawer_quantity
            and abs(math.fsum(heights) - cabinet.height) <= SUM_TOLERANCE
        ):
            return False
        cabinet.drawer_heights = self.balancer.equal_split(
            cabinet.height, cabinet.drawer_quantity
        )
        return True
