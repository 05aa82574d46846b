"""CLI command implementations for the configurator application.

This package contains subcommands for the configurator CLI, including:
- validate: Validate a scene file
- resize, move, drawers: Apply a single edit to a scene
- formula, recalc: Edit and evaluate view formulas
"""

from configurator.cli.commands.edit import drawers_command, move_command, resize_command
from configurator.cli.commands.formulas import formula_command, recalc_command
from configurator.cli.commands.validate import validate_command

__all__ = [
    "drawers_command",
    "formula_command",
    "move_command",
    "recalc_command",
    "resize_command",
    "validate_command",
]
