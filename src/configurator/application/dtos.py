"""Data Transfer Objects for the application layer."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from configurator.application.config.schemas import SceneConfiguration
    from configurator.domain.formula import RecalcReport


def _check_dimension(name: str, value: float | None, errors: list[str]) -> None:
    if value is None:
        return
    if not math.isfinite(value):
        errors.append(f"{name} must be a finite number")
    elif value < 0:
        errors.append(f"{name} cannot be negative")


@dataclass
class ResizeInput:
    """Input DTO for a dimension edit of one cabinet.

    Any of width, height and depth may be given; they are applied in that
    order. ``selection`` replaces the scene's saved selection when set.
    """

    cabinet_id: str
    width: float | None = None
    height: float | None = None
    depth: float | None = None
    selection: list[str] | None = None

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if not self.cabinet_id:
            errors.append("Cabinet id is required")
        if self.width is None and self.height is None and self.depth is None:
            errors.append("At least one of width, height or depth is required")
        _check_dimension("Width", self.width, errors)
        _check_dimension("Height", self.height, errors)
        _check_dimension("Depth", self.depth, errors)
        return errors


@dataclass
class MoveInput:
    """Input DTO for moving a cabinet to a new position."""

    cabinet_id: str
    x: float
    y: float | None = None

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not self.cabinet_id:
            errors.append("Cabinet id is required")
        if not math.isfinite(self.x) or (self.y is not None and not math.isfinite(self.y)):
            errors.append("Position must be finite")
        return errors


@dataclass
class DrawerEditInput:
    """Input DTO for drawer edits.

    Either ``quantity`` (reset to an equal split) or ``index`` together with
    ``height`` (edit one drawer, zero-based) must be given.
    """

    cabinet_id: str
    index: int | None = None
    height: float | None = None
    quantity: int | None = None

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not self.cabinet_id:
            errors.append("Cabinet id is required")
        if self.quantity is not None:
            if self.quantity < 0:
                errors.append("Drawer quantity cannot be negative")
            if self.index is not None or self.height is not None:
                errors.append("Give either a quantity or a drawer edit, not both")
        elif self.index is None or self.height is None:
            errors.append("A drawer edit needs both an index and a height")
        else:
            if self.index < 0:
                errors.append("Drawer index cannot be negative")
            _check_dimension("Drawer height", self.height, errors)
        return errors


@dataclass
class FormulaInput:
    """Input DTO for binding (or clearing, with a blank formula) a view's GD formula."""

    view_id: str
    gd_id: str
    formula: str | None = None

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not self.view_id:
            errors.append("View id is required")
        if not self.gd_id:
            errors.append("GD id is required")
        return errors


@dataclass
class EditOutput:
    """Output DTO of an edit applied to a scene.

    Attributes:
        config: The scene after the edit; the unchanged input on failure.
        changed_ids: Cabinets whose geometry or configuration changed.
        drawer_heights: Drawer heights of the edited cabinet, for drawer
            and height edits.
        report: Formula recalculation report, when formulas ran.
        errors: Error messages if the edit was rejected.
        error_type: Kind of rejection, e.g. ``illegal_resize`` or
            ``drawer_bound``.
    """

    config: "SceneConfiguration"
    changed_ids: list[str] = field(default_factory=list)
    drawer_heights: list[float] | None = None
    report: "RecalcReport | None" = None
    errors: list[str] = field(default_factory=list)
    error_type: str | None = None

    @property
    def is_valid(self) -> bool:
        """Check if the edit was applied."""
        return len(self.errors) == 0
