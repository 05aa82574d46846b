"""Scene validation endpoints."""

from fastapi import APIRouter

from configurator.application.config import load_config_from_dict, validate_config
from configurator.web.schemas.requests import SceneRequest
from configurator.web.schemas.responses import ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate_scene(request: SceneRequest) -> ValidationResultSchema:
    """Validate a scene without editing it.

    Schema problems are reported by the ConfigError handler as a 422;
    semantic problems come back here with ``is_valid`` false.
    """
    config = load_config_from_dict(request.scene)
    result = validate_config(config)
    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[{"message": e.message, "path": e.path} for e in result.errors],
        warnings=[{"message": w.message, "path": w.path} for w in result.warnings],
    )
