"""API routers for the REST API."""

from configurator.web.routers.formulas import router as formulas_router
from configurator.web.routers.scenes import router as scenes_router
from configurator.web.routers.validate import router as validate_router

__all__ = [
    "formulas_router",
    "scenes_router",
    "validate_router",
]
