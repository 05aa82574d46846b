"""Shared enums and small models for scene configuration schemas."""

from pydantic import BaseModel, ConfigDict, Field

from configurator.domain.value_objects import CabinetType, GDRole, ValueType

# Version 1.0: Initial scene format
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

CabinetTypeConfig = CabinetType
GDRoleConfig = GDRole
ValueTypeConfig = ValueType


class WallConfig(BaseModel):
    """Back wall dimensions in millimetres."""

    model_config = ConfigDict(extra="forbid")

    length: float = Field(..., gt=0, le=100000)
    height: float = Field(..., gt=0, le=10000)


class DimensionsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)
    depth: float = Field(..., ge=0)


class PositionConfig(BaseModel):
    """Scene position. ``x`` is the left edge (centre for kickers and bulkheads)."""

    model_config = ConfigDict(extra="forbid")

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
