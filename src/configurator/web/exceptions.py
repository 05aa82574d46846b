"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from configurator.application.config import ConfigError
from configurator.domain.errors import ConstraintError


class SceneEditError(Exception):
    """Raised when a command rejects an edit."""

    def __init__(self, errors: list[str], error_type: str | None = None) -> None:
        self.errors = errors
        self.error_type = error_type or "constraint"
        super().__init__(f"Edit rejected: {errors}")


class InvalidSceneError(Exception):
    """Raised when a scene parses but fails semantic validation."""

    def __init__(self, errors: list[dict]) -> None:
        self.errors = errors
        super().__init__(f"Invalid scene: {len(errors)} error(s)")


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": exc.error_type,
                "details": exc.details or None,
            },
        )

    @app.exception_handler(InvalidSceneError)
    async def invalid_scene_handler(
        request: Request, exc: InvalidSceneError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": "Scene failed validation",
                "error_type": "invalid_scene",
                "details": exc.errors,
            },
        )

    @app.exception_handler(SceneEditError)
    async def scene_edit_error_handler(
        request: Request, exc: SceneEditError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.errors[0] if exc.errors else "Edit rejected",
                "error_type": exc.error_type,
                "details": [{"message": e} for e in exc.errors],
            },
        )

    @app.exception_handler(ConstraintError)
    async def constraint_error_handler(
        request: Request, exc: ConstraintError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": exc.error_type,
                "details": None,
            },
        )
