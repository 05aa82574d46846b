"""Service factory for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from configurator.application.commands import (
        EditDrawersCommand,
        MoveCabinetCommand,
        RecalculateFormulasCommand,
        ResizeCabinetCommand,
        SessionFactory,
        SetFormulaCommand,
    )


@dataclass
class ServiceFactory:
    """Factory for creating command instances.

    Centralizes instantiation so the CLI and the API share one way of
    building sessions, and so tests can swap the session factory.

    Attributes:
        session_factory: Builds a ConfiguratorSession from a scene
            configuration. Defaults to ``ConfiguratorSession.from_config``.

    Example:
        ```python
        factory = ServiceFactory()
        output = factory.get_resize_command().execute(config, request)
        ```
    """

    session_factory: "SessionFactory | None" = None

    _resize_command: "ResizeCabinetCommand | None" = field(default=None, init=False, repr=False)
    _move_command: "MoveCabinetCommand | None" = field(default=None, init=False, repr=False)
    _drawers_command: "EditDrawersCommand | None" = field(default=None, init=False, repr=False)
    _formula_command: "SetFormulaCommand | None" = field(default=None, init=False, repr=False)
    _recalc_command: "RecalculateFormulasCommand | None" = field(
        default=None, init=False, repr=False
    )

    def get_resize_command(self) -> "ResizeCabinetCommand":
        if self._resize_command is None:
            from configurator.application.commands import ResizeCabinetCommand

            self._resize_command = ResizeCabinetCommand(self.session_factory)
        return self._resize_command

    def get_move_command(self) -> "MoveCabinetCommand":
        if self._move_command is None:
            from configurator.application.commands import MoveCabinetCommand

            self._move_command = MoveCabinetCommand(self.session_factory)
        return self._move_command

    def get_drawers_command(self) -> "EditDrawersCommand":
        if self._drawers_command is None:
            from configurator.application.commands import EditDrawersCommand

            self._drawers_command = EditDrawersCommand(self.session_factory)
        return self._drawers_command

    def get_formula_command(self) -> "SetFormulaCommand":
        if self._formula_command is None:
            from configurator.application.commands import SetFormulaCommand

            self._formula_command = SetFormulaCommand(self.session_factory)
        return self._formula_command

    def get_recalculate_command(self) -> "RecalculateFormulasCommand":
        if self._recalc_command is None:
            from configurator.application.commands import RecalculateFormulasCommand

            self._recalc_command = RecalculateFormulasCommand(self.session_factory)
        return self._recalc_command


# Default factory instance
_default_factory: ServiceFactory | None = None


def get_factory() -> ServiceFactory:
    """Get the default service factory."""
    global _default_factory
    if _default_factory is None:
        _default_factory = ServiceFactory()
    return _default_factory


def set_factory(factory: ServiceFactory | None) -> None:
    """Set a custom factory (for testing)."""
    global _default_factory
    _default_factory = factory


def reset_factory() -> None:
    """Reset the factory to default (for testing cleanup)."""
    global _default_factory
    _default_factory = None
