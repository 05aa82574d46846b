"""Pydantic schemas for the REST API."""

from configurator.web.schemas.requests import (
    DrawersRequest,
    FormulaRequest,
    MoveRequest,
    ResizeRequest,
    SceneEditRequest,
    SceneRequest,
)
from configurator.web.schemas.responses import (
    EditResponseSchema,
    ErrorResponseSchema,
    RecalcSummarySchema,
    ValidationResultSchema,
)

__all__ = [
    # Requests
    "DrawersRequest",
    "FormulaRequest",
    "MoveRequest",
    "ResizeRequest",
    "SceneEditRequest",
    "SceneRequest",
    # Responses
    "EditResponseSchema",
    "ErrorResponseSchema",
    "RecalcSummarySchema",
    "ValidationResultSchema",
]
