"""Catalog product data schemas."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from configurator.application.config.schemas.base import GDRoleConfig, ValueTypeConfig


class DimensionEntryConfig(BaseModel):
    """One editable product dimension.

    Attributes:
        gd_id: Global dimension the entry is bound to.
        value_type: ``range`` or ``selection``.
        min: Lower bound for range entries.
        max: Upper bound for range entries.
        default_value: Catalog default.
        options: Choices for selection entries.
        sort_num: Display order.
        visible: Hidden entries are skipped by view-level lookups.
    """

    model_config = ConfigDict(extra="forbid")

    gd_id: str | None = None
    value_type: ValueTypeConfig = ValueTypeConfig.RANGE
    min: float | None = None
    max: float | None = None
    default_value: float | str | None = None
    options: list[str] = Field(default_factory=list)
    sort_num: int = 0
    visible: bool = True

    @model_validator(mode="after")
    def validate_bounds(self) -> "DimensionEntryConfig":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) is greater than max ({self.max})")
        return self


class GDConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = ""
    min: float | None = None
    max: float | None = None
    visible: bool = True


class ProductConfig(BaseModel):
    """Catalog data for one product.

    ``gd_mapping`` lists the GD ids playing each role, for example
    ``{"width": ["gd-w"], "drawerH1": ["gd-d1"]}``.
    """

    model_config = ConfigDict(extra="forbid")

    dims: dict[str, DimensionEntryConfig] = Field(default_factory=dict)
    gds: dict[str, GDConfig] = Field(default_factory=dict)
    gd_mapping: dict[GDRoleConfig, list[str]] = Field(default_factory=dict)
