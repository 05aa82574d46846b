"""Scene edit commands: resize, move and drawers."""

from pathlib import Path
from typing import Annotated

import typer

from configurator.application.dtos import DrawerEditInput, MoveInput, ResizeInput
from configurator.application.factory import get_factory
from configurator.cli.commands.common import emit_output, load_scene, parse_ids

SceneArgument = Annotated[Path, typer.Argument(help="Path to the JSON scene file")]
CabinetArgument = Annotated[str, typer.Argument(help="Id of the cabinet to edit")]
OutputOption = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Write the edited scene here instead of stdout"),
]
NoRecalcOption = Annotated[
    bool,
    typer.Option("--no-recalc", help="Skip formula recalculation after the edit"),
]


def resize_command(
    scene_file: SceneArgument,
    cabinet_id: CabinetArgument,
    width: Annotated[
        float | None, typer.Option("--width", "-w", help="New width in mm")
    ] = None,
    height: Annotated[
        float | None, typer.Option("--height", "-h", help="New height in mm")
    ] = None,
    depth: Annotated[
        float | None, typer.Option("--depth", "-d", help="New depth in mm")
    ] = None,
    select: Annotated[
        str | None,
        typer.Option(
            "--select",
            "-s",
            help="Comma-separated selection; activates sync when 2+ synced cabinets are selected",
        ),
    ] = None,
    no_recalc: NoRecalcOption = False,
    output_file: OutputOption = None,
) -> None:
    """Resize a cabinet, honouring locks, groups, syncs and its view.

    Example:
        configurator resize kitchen.json c2 --width 650 -o kitchen.json
    """
    config = load_scene(scene_file)
    request = ResizeInput(
        cabinet_id=cabinet_id,
        width=width,
        height=height,
        depth=depth,
        selection=parse_ids(select),
    )
    output = get_factory().get_resize_command().execute(
        config, request, recalculate=not no_recalc
    )
    emit_output(output, output_file)


def move_command(
    scene_file: SceneArgument,
    cabinet_id: CabinetArgument,
    x: Annotated[float, typer.Option("--x", help="New left edge in mm")],
    y: Annotated[
        float | None,
        typer.Option("--y", help="New bottom in mm (wall cabinets only)"),
    ] = None,
    no_recalc: NoRecalcOption = False,
    output_file: OutputOption = None,
) -> None:
    """Move a cabinet; the rest of its view follows.

    Example:
        configurator move kitchen.json c1 --x 200
    """
    config = load_scene(scene_file)
    output = get_factory().get_move_command().execute(
        config, MoveInput(cabinet_id=cabinet_id, x=x, y=y), recalculate=not no_recalc
    )
    emit_output(output, output_file)


def drawers_command(
    scene_file: SceneArgument,
    cabinet_id: CabinetArgument,
    quantity: Annotated[
        int | None,
        typer.Option("--quantity", "-q", help="Reset to this many equal drawers"),
    ] = None,
    index: Annotated[
        int | None,
        typer.Option("--index", "-i", help="Drawer to edit, 1 = top drawer"),
    ] = None,
    height: Annotated[
        float | None,
        typer.Option("--height", "-h", help="New height of the edited drawer in mm"),
    ] = None,
    no_recalc: NoRecalcOption = False,
    output_file: OutputOption = None,
) -> None:
    """Change a cabinet's drawer count or one drawer's height.

    The last drawer absorbs every change and cannot be edited directly.

    Example:
        configurator drawers kitchen.json c1 --index 1 --height 400
    """
    config = load_scene(scene_file)
    request = DrawerEditInput(
        cabinet_id=cabinet_id,
        index=index - 1 if index is not None else None,
        height=height,
        quantity=quantity,
    )
    output = get_factory().get_drawers_command().execute(
        config, request, recalculate=not no_recalc
    )
    emit_output(output, output_file)
