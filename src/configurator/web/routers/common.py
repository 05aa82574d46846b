"""Scene loading and response conversion shared by the edit routers."""

from typing import Any

from configurator.application.config import (
    SceneConfiguration,
    load_config_from_dict,
    validate_config,
)
from configurator.application.dtos import EditOutput
from configurator.web.exceptions import InvalidSceneError, SceneEditError
from configurator.web.schemas.responses import EditResponseSchema, RecalcSummarySchema


def load_scene(data: dict[str, Any]) -> SceneConfiguration:
    """Parse and validate a request scene.

    Raises:
        ConfigError: If the scene does not match the schema.
        InvalidSceneError: If the scene has semantic errors.
    """
    config = load_config_from_dict(data)
    result = validate_config(config)
    if not result.is_valid:
        raise InvalidSceneError(
            [{"path": e.path, "message": e.message} for e in result.errors]
        )
    return config


def to_response(output: EditOutput) -> EditResponseSchema:
    """Convert an EditOutput to the response schema.

    Raises:
        SceneEditError: If the command rejected the edit.
    """
    if not output.is_valid:
        raise SceneEditError(output.errors, output.error_type)

    formulas = None
    if output.report is not None:
        formulas = RecalcSummarySchema(
            passes=output.report.passes,
            applied=list(output.report.applied),
            errors=dict(output.report.errors),
        )
    return EditResponseSchema(
        scene=output.config.to_json_dict(),
        changed_ids=output.changed_ids,
        drawer_heights=output.drawer_heights,
        formulas=formulas,
    )
