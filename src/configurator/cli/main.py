"""Typer CLI for the cabinet configurator."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from configurator.application.session import ConfiguratorSession
from configurator.cli.commands import (
    drawers_command,
    formula_command,
    move_command,
    recalc_command,
    resize_command,
    validate_command,
)
from configurator.cli.commands.common import fmt, load_scene

app = typer.Typer(
    name="configurator",
    help="Resize, align and recalculate parametric cabinet scenes.",
)


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log engine decisions to stderr")
    ] = False,
) -> None:
    """Resize, align and recalculate parametric cabinet scenes."""
    if verbose:
        logging.basicConfig(format="%(levelname)s %(name)s: %(message)s", level=logging.DEBUG)


app.command(name="validate")(validate_command)
app.command(name="resize")(resize_command)
app.command(name="move")(move_command)
app.command(name="drawers")(drawers_command)
app.command(name="formula")(formula_command)
app.command(name="recalc")(recalc_command)


@app.command()
def show(
    scene_file: Annotated[Path, typer.Argument(help="Path to the JSON scene file")],
) -> None:
    """Show the cabinets of a scene with their edges, views and drawers."""
    config = load_scene(scene_file)
    session = ConfiguratorSession.from_config(config)

    wall = session.scene.wall
    typer.echo(f"Wall: {fmt(wall.length)} x {fmt(wall.height)} mm")
    typer.echo(f"Views: {', '.join(session.views.view_ids) or '-'}")
    typer.echo()
    typer.echo(f"{'ID':<12} {'TYPE':<11} {'VIEW':<5} {'LEFT':>8} {'WIDTH':>8} {'RIGHT':>8}  LOCKS")
    for cabinet in session.scene:
        locks = ("L" if cabinet.left_lock else "-") + ("R" if cabinet.right_lock else "-")
        typer.echo(
            f"{cabinet.cabinet_id:<12} {cabinet.cabinet_type.value:<11} "
            f"{cabinet.view_id or '-':<5} {fmt(cabinet.left):>8} "
            f"{fmt(cabinet.width):>8} {fmt(cabinet.right):>8}  {locks}"
        )
        if cabinet.drawer_enabled and cabinet.drawer_quantity:
            heights = ", ".join(fmt(h) for h in cabinet.enabled_drawer_heights())
            typer.echo(f"{'':<12} drawers: {heights}")

    formulas = session.engine.all_formulas()
    if formulas:
        typer.echo()
        typer.echo("Formulas:")
        for view_id, bound in formulas.items():
            for gd_id, formula in bound.items():
                typer.echo(f"  {view_id}.{gd_id} = {formula}")
    session.close()


if __name__ == "__main__":
    app()
