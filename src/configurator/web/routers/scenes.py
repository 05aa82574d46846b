"""Scene edit endpoints: resize, move and drawers."""

from fastapi import APIRouter

from configurator.application.dtos import DrawerEditInput, MoveInput, ResizeInput
from configurator.web.dependencies import DrawersCommandDep, MoveCommandDep, ResizeCommandDep
from configurator.web.routers.common import load_scene, to_response
from configurator.web.schemas.requests import DrawersRequest, MoveRequest, ResizeRequest
from configurator.web.schemas.responses import EditResponseSchema

router = APIRouter(prefix="/scenes", tags=["scenes"])


@router.post("/resize", response_model=EditResponseSchema)
async def resize_cabinet(
    request: ResizeRequest, command: ResizeCommandDep
) -> EditResponseSchema:
    """Resize one cabinet and return the updated scene.

    A cabinet with both edges locked answers 422 with
    ``error_type="illegal_resize"``.
    """
    config = load_scene(request.scene)
    output = command.execute(
        config,
        ResizeInput(
            cabinet_id=request.cabinet_id,
            width=request.width,
            height=request.height,
            depth=request.depth,
            selection=request.selection,
        ),
        recalculate=request.recalculate,
    )
    return to_response(output)


@router.post("/move", response_model=EditResponseSchema)
async def move_cabinet(request: MoveRequest, command: MoveCommandDep) -> EditResponseSchema:
    """Move one cabinet; the rest of its view follows."""
    config = load_scene(request.scene)
    output = command.execute(
        config,
        MoveInput(cabinet_id=request.cabinet_id, x=request.x, y=request.y),
        recalculate=request.recalculate,
    )
    return to_response(output)


@router.post("/drawers", response_model=EditResponseSchema)
async def edit_drawers(
    request: DrawersRequest, command: DrawersCommandDep
) -> EditResponseSchema:
    """Change the drawer count or one drawer's height."""
    config = load_scene(request.scene)
    output = command.execute(
        config,
        DrawerEditInput(
            cabinet_id=request.cabinet_id,
            index=request.index,
            height=request.height,
            quantity=request.quantity,
        ),
        recalculate=request.recalculate,
    )
    return to_response(output)
