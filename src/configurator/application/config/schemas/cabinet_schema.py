"""Cabinet configuration schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from configurator.application.config.schemas.base import (
    CabinetTypeConfig,
    DimensionsConfig,
    PositionConfig,
)


class ApplianceGapsConfig(BaseModel):
    """Gaps between an appliance shell and its visible body."""

    model_config = ConfigDict(extra="forbid")

    top: float = Field(default=0.0, ge=0)
    left: float = Field(default=0.0, ge=0)
    right: float = Field(default=0.0, ge=0)
    kicker_height: float = Field(default=100.0, ge=0)


class BenchtopConfig(BaseModel):
    """Benchtop overrides. Omitted values use the catalog defaults."""

    model_config = ConfigDict(extra="forbid")

    height_from_floor: float | None = None
    thickness: float | None = Field(default=None, gt=0)
    front_overhang: float | None = Field(default=None, ge=0)
    left_overhang: float | None = Field(default=None, ge=0)
    right_overhang: float | None = Field(default=None, ge=0)


class DrawersConfig(BaseModel):
    """Drawer stack of a cabinet.

    Attributes:
        enabled: Whether the cabinet has drawers.
        quantity: Number of drawers.
        heights: Drawer heights from the top; empty means an equal split.
    """

    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    quantity: int = Field(default=0, ge=0, le=20)
    heights: list[float] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_heights_length(self) -> "DrawersConfig":
        if self.heights and len(self.heights) != self.quantity:
            raise ValueError(
                f"Expected {self.quantity} drawer heights, got {len(self.heights)}"
            )
        if any(h <= 0 for h in self.heights):
            raise ValueError("Drawer heights must be positive")
        return self


class CabinetConfig(BaseModel):
    """A placed cabinet.

    Attributes:
        id: Unique cabinet identifier.
        type: Cabinet category.
        dimensions: Width, height and depth in millimetres.
        position: Scene position.
        view: View letter, or "none".
        left_lock: Keep the left edge fixed on width edits.
        right_lock: Keep the right edge fixed on width edits.
        product_id: Catalog product backing the cabinet.
        parent_id: Parent of a dependent component.
        parent_side: Side of the parent a filler or panel hangs on.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    type: CabinetTypeConfig
    dimensions: DimensionsConfig
    position: PositionConfig = Field(default_factory=PositionConfig)
    view: str | None = None
    left_lock: bool = False
    right_lock: bool = False
    product_id: str | None = None
    drawers: DrawersConfig | None = None
    door_enabled: bool = False
    door_quantity: int = Field(default=0, ge=0)
    shelf_count: int = Field(default=0, ge=0)
    overhang_door: bool = False
    parent_id: str | None = None
    parent_side: Literal["left", "right"] | None = None
    parent_y_offset: float | None = None
    appliance: ApplianceGapsConfig | None = None
    benchtop: BenchtopConfig | None = None
