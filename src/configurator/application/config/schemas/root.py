"""Root scene configuration schema."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from configurator.application.config.schemas.base import SUPPORTED_VERSIONS, WallConfig
from configurator.application.config.schemas.cabinet_schema import CabinetConfig
from configurator.application.config.schemas.catalog_schema import ProductConfig


class GroupMemberConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    cabinet_id: str = Field(..., min_length=1)
    percentage: float = Field(..., ge=0, le=100)


class PanelStateConfig(BaseModel):
    """Persisted panel state of one cabinet."""

    model_config = ConfigDict(extra="forbid")

    values: dict[str, float | str] = Field(default_factory=dict)
    material_color: str | None = None


class EngineConfig(BaseModel):
    """Constraint engine tuning.

    Attributes:
        epsilon: Formula changes smaller than this are ignored.
        max_passes: Formula evaluation passes per recalculation.
        recalc_delay: Debounce delay for formula recomputation, seconds.
        realign_delay: Debounce delay for view realignment, seconds.
        min_drawer_height: Smallest allowed drawer height.
        max_drawer_height: Largest allowed dependent drawer height.
    """

    model_config = ConfigDict(extra="forbid")

    epsilon: float = Field(default=0.1, gt=0)
    max_passes: int = Field(default=3, ge=1, le=20)
    recalc_delay: float = Field(default=0.3, ge=0)
    realign_delay: float = Field(default=0.4, ge=0)
    min_drawer_height: float = Field(default=50.0, gt=0)
    max_drawer_height: float = Field(default=2000.0, gt=0)

    @model_validator(mode="after")
    def validate_drawer_bounds(self) -> "EngineConfig":
        if self.min_drawer_height > self.max_drawer_height:
            raise ValueError("min_drawer_height is greater than max_drawer_height")
        return self


class SceneConfiguration(BaseModel):
    """Root of a scene configuration file.

    Example:
        >>> config = SceneConfiguration(
        ...     schema_version="1.0",
        ...     wall={"length": 3600, "height": 2400},
        ...     cabinets=[{"id": "c1", "type": "base",
        ...                "dimensions": {"width": 600, "height": 720, "depth": 560}}],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    wall: WallConfig
    cabinets: list[CabinetConfig] = Field(default_factory=list)
    views: list[str] = Field(default_factory=list)
    groups: dict[str, list[GroupMemberConfig]] = Field(default_factory=dict)
    syncs: dict[str, list[str]] = Field(default_factory=dict)
    selection: list[str] = Field(default_factory=list)
    products: dict[str, ProductConfig] = Field(default_factory=dict)
    panel_state: dict[str, PanelStateConfig] = Field(default_factory=dict)
    formulas: dict[str, dict[str, str]] = Field(default_factory=dict)
    engine: EngineConfig = Field(default_factory=EngineConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minors of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v
        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v
        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @field_validator("cabinets")
    @classmethod
    def validate_unique_ids(cls, v: list[CabinetConfig]) -> list[CabinetConfig]:
        seen: set[str] = set()
        for cabinet in v:
            if cabinet.id in seen:
                raise ValueError(f"Duplicate cabinet id '{cabinet.id}'")
            seen.add(cabinet.id)
        return v

    def cabinet_ids(self) -> set[str]:
        return {c.id for c in self.cabinets}

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
