"""Application layer - use cases and orchestration."""

from .commands import (
    EditDrawersCommand,
    MoveCabinetCommand,
    RecalculateFormulasCommand,
    ResizeCabinetCommand,
    SetFormulaCommand,
)
from .dtos import DrawerEditInput, EditOutput, FormulaInput, MoveInput, ResizeInput
from .gd_applier import ViewDimensionApplier
from .session import ConfiguratorSession, config_to_scene

__all__ = [
    "ConfiguratorSession",
    "DrawerEditInput",
    "EditDrawersCommand",
    "EditOutput",
    "FormulaInput",
    "MoveCabinetCommand",
    "MoveInput",
    "RecalculateFormulasCommand",
    "ResizeCabinetCommand",
    "ResizeInput",
    "SetFormulaCommand",
    "ViewDimensionApplier",
    "config_to_scene",
]
