"""FastAPI dependency injection for configurator services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from configurator.application.commands import (
    EditDrawersCommand,
    MoveCabinetCommand,
    RecalculateFormulasCommand,
    ResizeCabinetCommand,
    SetFormulaCommand,
)
from configurator.application.factory import ServiceFactory, get_factory


@lru_cache(maxsize=1)
def get_service_factory() -> ServiceFactory:
    """Get cached ServiceFactory instance."""
    return get_factory()


def get_resize_command(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> ResizeCabinetCommand:
    return factory.get_resize_command()


def get_move_command(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> MoveCabinetCommand:
    return factory.get_move_command()


def get_drawers_command(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> EditDrawersCommand:
    return factory.get_drawers_command()


def get_formula_command(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> SetFormulaCommand:
    return factory.get_formula_command()


def get_recalculate_command(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> RecalculateFormulasCommand:
    return factory.get_recalculate_command()


# Type aliases for cleaner endpoint signatures
ResizeCommandDep = Annotated[ResizeCabinetCommand, Depends(get_resize_command)]
MoveCommandDep = Annotated[MoveCabinetCommand, Depends(get_move_command)]
DrawersCommandDep = Annotated[EditDrawersCommand, Depends(get_drawers_command)]
FormulaCommandDep = Annotated[SetFormulaCommand, Depends(get_formula_command)]
RecalculateCommandDep = Annotated[RecalculateFormulasCommand, Depends(get_recalculate_command)]
