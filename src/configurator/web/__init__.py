"""FastAPI REST API for the cabinet configurator.

This module provides a stateless REST API: each request carries a scene,
applies one edit or a formula recalculation, and returns the new scene.

Usage:
    uvicorn configurator.web:app --reload
"""

from configurator.web.app import app, create_app

__all__ = ["app", "create_app"]
