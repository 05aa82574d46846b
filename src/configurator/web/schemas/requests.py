"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class SceneRequest(BaseModel):
    """Request carrying a full scene configuration."""

    scene: dict[str, Any] = Field(..., description="Scene configuration JSON")


class SceneEditRequest(SceneRequest):
    """Base for requests that edit a scene."""

    recalculate: bool = Field(
        default=True, description="Run formulas and realign views after the edit"
    )


class ResizeRequest(SceneEditRequest):
    """Request for resizing one cabinet."""

    cabinet_id: str = Field(..., min_length=1, description="Cabinet to resize")
    width: float | None = Field(default=None, ge=0, description="New width in mm")
    height: float | None = Field(default=None, ge=0, description="New height in mm")
    depth: float | None = Field(default=None, ge=0, description="New depth in mm")
    selection: list[str] | None = Field(
        default=None, description="Selection to use instead of the scene's saved one"
    )


class MoveRequest(SceneEditRequest):
    """Request for moving one cabinet."""

    cabinet_id: str = Field(..., min_length=1, description="Cabinet to move")
    x: float = Field(..., description="New left edge in mm")
    y: float | None = Field(default=None, description="New bottom in mm (wall cabinets)")


class DrawersRequest(SceneEditRequest):
    """Request for a drawer quantity change or a single drawer edit."""

    cabinet_id: str = Field(..., min_length=1, description="Cabinet whose drawers change")
    quantity: int | None = Field(default=None, ge=0, description="New drawer count")
    index: int | None = Field(default=None, ge=0, description="Zero-based drawer index")
    height: float | None = Field(default=None, gt=0, description="New drawer height in mm")


class FormulaRequest(SceneEditRequest):
    """Request for binding or clearing a view formula."""

    view_id: str = Field(..., min_length=1, max_length=1, description="View letter")
    gd_id: str = Field(..., min_length=1, description="Global dimension id")
    formula: str | None = Field(default=None, description="Formula; blank removes it")
