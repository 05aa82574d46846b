"""Formula endpoints."""

from fastapi import APIRouter

from configurator.application.dtos import FormulaInput
from configurator.web.dependencies import FormulaCommandDep, RecalculateCommandDep
from configurator.web.routers.common import load_scene, to_response
from configurator.web.schemas.requests import FormulaRequest, SceneRequest
from configurator.web.schemas.responses import EditResponseSchema

router = APIRouter(prefix="/formulas", tags=["formulas"])


@router.post("", response_model=EditResponseSchema)
async def set_formula(
    request: FormulaRequest, command: FormulaCommandDep
) -> EditResponseSchema:
    """Bind, replace or clear a view's GD formula."""
    config = load_scene(request.scene)
    output = command.execute(
        config,
        FormulaInput(view_id=request.view_id, gd_id=request.gd_id, formula=request.formula),
        recalculate=request.recalculate,
    )
    return to_response(output)


@router.post("/recalc", response_model=EditResponseSchema)
async def recalculate(
    request: SceneRequest, command: RecalculateCommandDep
) -> EditResponseSchema:
    """Evaluate every formula of the scene to its fixed point."""
    config = load_scene(request.scene)
    return to_response(command.execute(config))
