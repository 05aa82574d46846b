"""Formula commands: bind a view formula and recalculate a scene."""

from pathlib import Path
from typing import Annotated

import typer

from configurator.application.dtos import FormulaInput
from configurator.application.factory import get_factory
from configurator.cli.commands.common import emit_output, load_scene


def formula_command(
    scene_file: Annotated[Path, typer.Argument(help="Path to the JSON scene file")],
    view_id: Annotated[str, typer.Argument(help="View letter, e.g. A")],
    gd_id: Annotated[str, typer.Argument(help="Global dimension id")],
    formula: Annotated[
        str | None,
        typer.Argument(help="Formula text; omit to remove the formula"),
    ] = None,
    no_recalc: Annotated[
        bool, typer.Option("--no-recalc", help="Store the formula without evaluating it")
    ] = False,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the edited scene here instead of stdout"),
    ] = None,
) -> None:
    """Bind, replace or remove a view's global dimension formula.

    Formulas may call cab(id, field), dim(id, dimId) and viewGd(view, gd).

    Example:
        configurator formula kitchen.json B gd-width "viewGd('A', 'gd-width') + 50"
    """
    config = load_scene(scene_file)
    request = FormulaInput(view_id=view_id, gd_id=gd_id, formula=formula)
    output = get_factory().get_formula_command().execute(
        config, request, recalculate=not no_recalc
    )
    emit_output(output, output_file)


def recalc_command(
    scene_file: Annotated[Path, typer.Argument(help="Path to the JSON scene file")],
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the recalculated scene here instead of stdout"),
    ] = None,
) -> None:
    """Evaluate every formula of a scene to its fixed point.

    Example:
        configurator recalc kitchen.json -o kitchen.json
    """
    config = load_scene(scene_file)
    output = get_factory().get_recalculate_command().execute(config)
    emit_output(output, output_file)
