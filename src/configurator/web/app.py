"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from configurator import __version__
from configurator.application.factory import ServiceFactory
from configurator.web.dependencies import get_service_factory
from configurator.web.exceptions import register_exception_handlers
from configurator.web.routers import formulas_router, scenes_router, validate_router


def create_app(
    factory: ServiceFactory | None = None,
    allow_origins: list[str] | None = None,
) -> FastAPI:
    """Build the configurator API.

    Every endpoint is stateless: the request carries the scene and the
    response returns the edited scene.

    Args:
        factory: Service factory the endpoints build their commands from.
            The process-wide default factory is used when omitted.
        allow_origins: CORS origins; any origin when omitted.
    """
    app = FastAPI(
        title="Cabinet Configurator API",
        description="Resize, align and recalculate parametric cabinet scenes",
        version=__version__,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins or ["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    if factory is not None:
        app.dependency_overrides[get_service_factory] = lambda: factory

    for router in (validate_router, scenes_router, formulas_router):
        app.include_router(router, prefix="/api/v1")

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "version": __version__}

    return app


# Application instance for uvicorn: ``uvicorn configurator.web.app:app``
app = create_app()
