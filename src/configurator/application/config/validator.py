"""Semantic validation of scene configurations.

Pydantic checks the shape of a scene file; this module checks that the
pieces fit together: referenced ids exist, group percentages add up, view
letters are valid, formulas parse and drawers fill their cabinets.
"""

import math
import string
from dataclasses import dataclass, field
from typing import Any

from configurator.application.config.schemas import SceneConfiguration
from configurator.domain.entities import NO_VIEW
from configurator.domain.errors import FormulaError
from configurator.domain.formula.interpreter import FormulaInterpreter

HOST_FUNCTION_NAMES = frozenset({"cab", "dim", "viewGd"})
GROUP_TOTAL_TOLERANCE = 0.01
DRAWER_SUM_TOLERANCE = 0.1


@dataclass
class ValidationError:
    """A blocking problem.

    Attributes:
        path: JSON path of the offending value, e.g. ``groups.c1[0].cabinet_id``.
        message: Human-readable description.
        value: The offending value.
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking concern, optionally with a suggested fix."""

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Errors and warnings collected while validating a scene."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 clean, 1 errors, 2 warnings only."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(ValidationWarning(path=path, message=message, suggestion=suggestion))
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def check_views(config: SceneConfiguration) -> ValidationResult:
    result = ValidationResult()
    seen: set[str] = set()
    for i, view_id in enumerate(config.views):
        path = f"views[{i}]"
        if len(view_id) != 1 or view_id not in string.ascii_uppercase:
            result.add_error(path, "View ids must be a single letter A-Z", view_id)
        elif view_id in seen:
            result.add_error(path, f"View {view_id} is declared more than once", view_id)
        seen.add(view_id)

    for i, cabinet in enumerate(config.cabinets):
        view_id = cabinet.view
        if view_id is None or view_id == NO_VIEW:
            continue
        if len(view_id) != 1 or view_id not in string.ascii_uppercase:
            result.add_error(f"cabinets[{i}].view", "Invalid view id", view_id)
        elif config.views and view_id not in seen:
            result.add_error(
                f"cabinets[{i}].view", f"View {view_id} is not declared", view_id
            )
    return result


def check_references(config: SceneConfiguration) -> ValidationResult:
    """Every id mentioned outside ``cabinets`` must name a cabinet or product."""
    result = ValidationResult()
    ids = config.cabinet_ids()

    for i, cabinet in enumerate(config.cabinets):
        if cabinet.product_id is not None and cabinet.product_id not in config.products:
            result.add_error(
                f"cabinets[{i}].product_id",
                f"Unknown product '{cabinet.product_id}'",
                cabinet.product_id,
            )
        if cabinet.parent_id is not None and cabinet.parent_id not in ids:
            result.add_error(
                f"cabinets[{i}].parent_id",
                f"Unknown parent cabinet '{cabinet.parent_id}'",
                cabinet.parent_id,
            )
        if cabinet.left_lock and cabinet.right_lock:
            result.add_warning(
                f"cabinets[{i}]",
                f"Cabinet '{cabinet.id}' has both edges locked; its width cannot be edited",
            )

    for owner, members in config.groups.items():
        if owner not in ids:
            result.add_error(f"groups.{owner}", f"Unknown cabinet '{owner}'", owner)
        for j, member in enumerate(members):
            if member.cabinet_id not in ids:
                result.add_error(
                    f"groups.{owner}[{j}].cabinet_id",
                    f"Unknown cabinet '{member.cabinet_id}'",
                    member.cabinet_id,
                )
            elif member.cabinet_id == owner:
                result.add_error(
                    f"groups.{owner}[{j}].cabinet_id",
                    "A cabinet cannot be grouped with itself",
                    owner,
                )
        total = math.fsum(m.percentage for m in members)
        if members and abs(total - 100.0) > GROUP_TOTAL_TOLERANCE:
            result.add_error(
                f"groups.{owner}",
                f"Group percentages sum to {total:g}, expected 100",
                total,
            )

    for owner, linked in config.syncs.items():
        for j, cid in enumerate([owner, *linked]):
            if cid not in ids:
                path = f"syncs.{owner}" if j == 0 else f"syncs.{owner}[{j - 1}]"
                result.add_error(path, f"Unknown cabinet '{cid}'", cid)

    for i, cid in enumerate(config.selection):
        if cid not in ids:
            result.add_error(f"selection[{i}]", f"Unknown cabinet '{cid}'", cid)

    for cid in config.panel_state:
        if cid not in ids:
            result.add_error(f"panel_state.{cid}", f"Unknown cabinet '{cid}'", cid)
    return result


def check_formulas(config: SceneConfiguration) -> ValidationResult:
    result = ValidationResult()
    interpreter = FormulaInterpreter()
    declared_views = set(config.views) | {
        c.view for c in config.cabinets if c.view not in (None, NO_VIEW)
    }
    for view_id, formulas in config.formulas.items():
        if view_id not in declared_views:
            result.add_error(f"formulas.{view_id}", f"Unknown view '{view_id}'", view_id)
        for gd_id, formula in formulas.items():
            try:
                interpreter.validate(formula, HOST_FUNCTION_NAMES)
            except FormulaError as e:
                result.add_error(f"formulas.{view_id}.{gd_id}", str(e), formula)
    return result


def check_drawers(config: SceneConfiguration) -> ValidationResult:
    result = ValidationResult()
    engine = config.engine
    for i, cabinet in enumerate(config.cabinets):
        drawers = cabinet.drawers
        if drawers is None or not drawers.enabled or not drawers.heights:
            continue
        total = math.fsum(drawers.heights)
        height = cabinet.dimensions.height
        if abs(total - height) > DRAWER_SUM_TOLERANCE:
            result.add_warning(
                f"cabinets[{i}].drawers.heights",
                f"Drawer heights sum to {total:g}mm but the cabinet is {height:g}mm",
                suggestion="Heights are rebalanced to an equal split when loaded",
            )
        for j, h in enumerate(drawers.heights):
            if h < engine.min_drawer_height:
                result.add_warning(
                    f"cabinets[{i}].drawers.heights[{j}]",
                    f"Drawer height {h:g}mm is below the {engine.min_drawer_height:g}mm minimum",
                )
    return result


def check_view_products(config: SceneConfiguration) -> ValidationResult:
    result = ValidationResult()
    for i, cabinet in enumerate(config.cabinets):
        if cabinet.view in (None, NO_VIEW):
            continue
        if cabinet.product_id is None or cabinet.product_id not in config.products:
            result.add_warning(
                f"cabinets[{i}]",
                f"Cabinet '{cabinet.id}' is in view {cabinet.view} but has no product data",
                suggestion="Formulas ignore cabinets without product data",
            )
    return result


def validate_config(config: SceneConfiguration) -> ValidationResult:
    """Run every semantic check on a schema-valid scene."""
    result = ValidationResult()
    result.merge(check_views(config))
    result.merge(check_references(config))
    result.merge(check_formulas(config))
    result.merge(check_drawers(config))
    result.merge(check_view_products(config))
    return result
