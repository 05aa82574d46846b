"""Exceptions raised by the constraint engine.

Validation failures are raised before any state is mutated, so callers can
surface the message to the user and leave the scene untouched.
"""

from __future__ import annotations


class ConstraintError(Exception):
    """Base class for rejected dimension edits and engine failures."""

    error_type = "constraint"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class IllegalResizeError(ConstraintError):
    """Raised when a width edit targets a cabinet with both edges locked."""

    error_type = "illegal_resize"

    def __init__(self, cabinet_id: str) -> None:
        self.cabinet_id = cabinet_id
        super().__init__(
            "Cannot resize width when both left and right edges are locked"
        )


class DrawerEditError(ConstraintError):
    """Raised when a drawer height edit cannot be committed."""

    error_type = "drawer_edit"


class DependentDrawerError(DrawerEditError):
    """Raised when the dependent (last) drawer is edited directly."""

    error_type = "dependent_drawer"

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(
            f"Drawer {index + 1} is the dependent drawer; its height follows the others"
        )


class DrawerBoundError(DrawerEditError):
    """Raised when an edit would push the dependent drawer out of bounds.

    Attributes:
        bound: Which bound was violated, ``"min"`` or ``"max"``.
        limit: The violated limit in millimetres.
        projected: The dependent drawer height the edit would have produced.
    """

    error_type = "drawer_bound"

    def __init__(self, bound: str, limit: float, projected: float) -> None:
        self.bound = bound
        self.limit = limit
        self.projected = projected
        if bound == "min":
            message = (
                f"Cannot increase height: Last drawer would be too small "
                f"(min {limit:g}mm)."
            )
        else:
            message = (
                f"Cannot decrease height: Last drawer would be too large "
                f"(max {limit:g}mm)."
            )
        super().__init__(message)


class FormulaError(ConstraintError):
    """Raised when a formula cannot be parsed or evaluated."""

    error_type = "formula"

    def __init__(self, message: str, formula: str | None = None) -> None:
        self.formula = formula
        super().__init__(message)


class ViewError(ConstraintError):
    """Raised for invalid view operations."""

    error_type = "view"


class UnknownCabinetError(ConstraintError):
    """Raised when an operation names a cabinet that is not in the scene."""

    error_type = "unknown_cabinet"

    def __init__(self, cabinet_id: str) -> None:
        self.cabinet_id = cabinet_id
        super().__init__(f"Cabinet not found: {cabinet_id}")


class InvalidDimensionError(ConstraintError):
    """Raised when a width, height or depth edit asks for an impossible size."""

    error_type = "invalid_dimension"

    def __init__(self, name: str, value: float, cabinet_id: str | None = None) -> None:
        self.name = name
        self.value = value
        self.cabinet_id = cabinet_id
        target = f" of {cabinet_id}" if cabinet_id else ""
        super().__init__(f"{name.capitalize()}{target} cannot be negative: {value:g}")
