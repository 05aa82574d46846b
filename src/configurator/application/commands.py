"""Application commands (use cases) for scene edits.

Each command takes a scene configuration, applies one user edit through a
fresh ConfiguratorSession and returns the resulting configuration. Rejected
edits come back as errors on the output with the input scene unchanged.
"""

from __future__ import annotations

import logging
from typing import Callable

from configurator.application.config.schemas import SceneConfiguration
from configurator.application.config.validator import HOST_FUNCTION_NAMES
from configurator.application.dtos import (
    DrawerEditInput,
    EditOutput,
    FormulaInput,
    MoveInput,
    ResizeInput,
)
from configurator.application.session import ConfiguratorSession
from configurator.domain.errors import ConstraintError
from configurator.domain.formula import RecalcReport

logger = logging.getLogger(__name__)

SessionFactory = Callable[[SceneConfiguration], ConfiguratorSession]


class _SceneCommand:
    """Shared session handling for scene edit commands."""

    def __init__(self, session_factory: SessionFactory | None = None) -> None:
        self.session_factory = session_factory or ConfiguratorSession.from_config

    def _finish(
        self,
        session: ConfiguratorSession,
        changed_ids: list[str],
        recalculate: bool,
        drawer_heights: list[float] | None = None,
    ) -> EditOutput:
        report = None
        if recalculate:
            report = session.recalculate()
            changed_ids = list(dict.fromkeys(changed_ids + self._formula_changes(session, report)))
        session.close()
        return EditOutput(
            config=session.to_config(),
            changed_ids=changed_ids,
            drawer_heights=drawer_heights,
            report=report,
        )

    @staticmethod
    def _formula_changes(session: ConfiguratorSession, report: RecalcReport) -> list[str]:
        changed: list[str] = []
        for key in report.applied:
            view_id = key.split(":", 1)[0]
            changed.extend(session.views.get_cabinets_in_view(view_id))
        return changed


class ResizeCabinetCommand(_SceneCommand):
    """Command to change a cabinet's width, height and/or depth."""

    def execute(
        self,
        config: SceneConfiguration,
        request: ResizeInput,
        recalculate: bool = True,
    ) -> EditOutput:
        """Apply the resize.

        Args:
            config: Scene to edit.
            request: Cabinet and new dimensions.
            recalculate: Run formulas and realign views afterwards.

        Returns:
            EditOutput with the edited scene, or errors if the edit was
            rejected (for example both edges locked).
        """
        errors = request.validate()
        if errors:
            return EditOutput(config=config, errors=errors, error_type="invalid_request")

        session = self.session_factory(config)
        changed: list[str] = []
        drawer_heights = None
        try:
            if request.selection is not None:
                session.select(request.selection)
            if request.width is not None:
                changed += session.resize(request.cabinet_id, request.width).adjusted_ids
            if request.height is not None:
                drawer_heights = session.set_height(request.cabinet_id, request.height)
                changed.append(request.cabinet_id)
            if request.depth is not None:
                session.set_depth(request.cabinet_id, request.depth)
                changed.append(request.cabinet_id)
        except ConstraintError as e:
            logger.debug(f"Resize of {request.cabinet_id} rejected: {e}")
            session.close()
            return EditOutput(config=config, errors=[str(e)], error_type=e.error_type)

        return self._finish(
            session, list(dict.fromkeys(changed)), recalculate, drawer_heights
        )


class MoveCabinetCommand(_SceneCommand):
    """Command to move a cabinet and the rest of its view."""

    def execute(
        self,
        config: SceneConfiguration,
        request: MoveInput,
        recalculate: bool = True,
    ) -> EditOutput:
        errors = request.validate()
        if errors:
            return EditOutput(config=config, errors=errors, error_type="invalid_request")

        session = self.session_factory(config)
        try:
            moved = session.move(request.cabinet_id, request.x, request.y)
        except ConstraintError as e:
            session.close()
            return EditOutput(config=config, errors=[str(e)], error_type=e.error_type)
        return self._finish(session, moved, recalculate)


class EditDrawersCommand(_SceneCommand):
    """Command to change a cabinet's drawer quantity or one drawer height."""

    def execute(
        self,
        config: SceneConfiguration,
        request: DrawerEditInput,
        recalculate: bool = True,
    ) -> EditOutput:
        """Apply the drawer edit.

        Returns:
            EditOutput carrying the rebalanced heights, or the balancer's
            rejection message (for example "Cannot increase height: Last
            drawer would be too small (min 50mm).").
        """
        errors = request.validate()
        if errors:
            return EditOutput(config=config, errors=errors, error_type="invalid_request")

        session = self.session_factory(config)
        try:
            if request.quantity is not None:
                heights = session.set_drawer_quantity(request.cabinet_id, request.quantity)
            else:
                assert request.index is not None and request.height is not None
                heights = session.edit_drawer(request.cabinet_id, request.index, request.height)
        except ConstraintError as e:
            session.close()
            return EditOutput(config=config, errors=[str(e)], error_type=e.error_type)
        return self._finish(session, [request.cabinet_id], recalculate, heights)


class SetFormulaCommand(_SceneCommand):
    """Command to bind, replace or clear a view's GD formula."""

    def execute(
        self,
        config: SceneConfiguration,
        request: FormulaInput,
        recalculate: bool = True,
    ) -> EditOutput:
        errors = request.validate()
        if errors:
            return EditOutput(config=config, errors=errors, error_type="invalid_request")

        session = self.session_factory(config)
        try:
            if request.formula and request.formula.strip():
                session.engine.interpreter.validate(request.formula, HOST_FUNCTION_NAMES)
            session.set_formula(request.view_id, request.gd_id, request.formula)
        except ConstraintError as e:
            session.close()
            return EditOutput(config=config, errors=[str(e)], error_type=e.error_type)
        return self._finish(session, [], recalculate)


class RecalculateFormulasCommand(_SceneCommand):
    """Command to run every formula of a scene to its fixed point."""

    def execute(self, config: SceneConfiguration) -> EditOutput:
        return self._finish(self.session_factory(config), [], recalculate=True)
