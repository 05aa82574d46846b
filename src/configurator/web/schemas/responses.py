"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class ValidationResultSchema(BaseModel):
    """Response for scene validation."""

    is_valid: bool = Field(..., description="Whether the scene is valid")
    errors: list[dict[str, Any]] = Field(default_factory=list, description="Errors")
    warnings: list[dict[str, Any]] = Field(default_factory=list, description="Warnings")


class RecalcSummarySchema(BaseModel):
    """Outcome of a formula recalculation."""

    passes: int = Field(..., description="Evaluation passes that ran")
    applied: list[str] = Field(default_factory=list, description="Applied view:gd keys")
    errors: dict[str, str] = Field(
        default_factory=dict, description="Formulas that were skipped, with the reason"
    )


class EditResponseSchema(BaseModel):
    """Response for a scene edit."""

    scene: dict[str, Any] = Field(..., description="Scene after the edit")
    changed_ids: list[str] = Field(default_factory=list, description="Changed cabinets")
    drawer_heights: list[float] | None = Field(
        default=None, description="Drawer heights of the edited cabinet"
    )
    formulas: RecalcSummarySchema | None = Field(
        default=None, description="Formula recalculation summary"
    )


class ErrorResponseSchema(BaseModel):
    """Error response body."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error category")
    details: Any = Field(default=None, description="Additional details")
