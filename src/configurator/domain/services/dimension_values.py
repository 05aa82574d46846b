"""Live product dimension values.

A cabinet's value for a catalog dimension is resolved in priority order:

1. type-specific virtual ids (``appliance:*``, ``benchtop:*``,
   ``fillerPanel:offTheFloor``), computed from the cabinet itself;
2. an explicit in-memory edit that has not been persisted yet;
3. the persisted panel state;
4. the catalog default for the dimension entry.

Missing data resolves to None; formula scopes turn that into 0.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

from ..entities import ApplianceGaps, Cabinet, Scene, appliance_visual_dimensions
from ..value_objects import CabinetType
from .dependents import DEFAULT_BENCHTOP_FRONT_OVERHANG, DEFAULT_BENCHTOP_THICKNESS

if TYPE_CHECKING:
    from ...contracts.protocols import PanelStateStore, ProductDataProvider

logger = logging.getLogger(__name__)

APPLIANCE_DIM_IDS = (
    "appliance:width",
    "appliance:height",
    "appliance:depth",
    "appliance:gapTop",
    "appliance:gapLeft",
    "appliance:gapRight",
    "appliance:kickerHeight",
)
BENCHTOP_DIM_IDS = (
    "benchtop:heightFromFloor",
    "benchtop:thickness",
    "benchtop:frontOverhang",
    "benchtop:leftOverhang",
    "benchtop:rightOverhang",
)
FILLER_OFF_THE_FLOOR = "fillerPanel:offTheFloor"


def to_number(value: Any) -> float | None:
    """Coerce a stored value to a finite float, or None."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def appliance_value(cabinet: Cabinet, dim_id: str) -> float | None:
    visual = appliance_visual_dimensions(cabinet)
    gaps = cabinet.appliance_gaps or ApplianceGaps()
    return {
        "appliance:width": visual.width,
        "appliance:height": visual.height,
        "appliance:depth": visual.depth,
        "appliance:gapTop": gaps.top,
        "appliance:gapLeft": gaps.left,
        "appliance:gapRight": gaps.right,
        "appliance:kickerHeight": gaps.kicker_height,
    }.get(dim_id)


def benchtop_value(cabinet: Cabinet, dim_id: str) -> float | None:
    extras = cabinet.benchtop
    height_from_floor = cabinet.y
    thickness = cabinet.height or DEFAULT_BENCHTOP_THICKNESS
    front = DEFAULT_BENCHTOP_FRONT_OVERHANG
    left = right = 0.0
    if extras is not None:
        if extras.height_from_floor is not None:
            height_from_floor = extras.height_from_floor
        if extras.thickness is not None:
            thickness = extras.thickness
        if extras.front_overhang is not None:
            front = extras.front_overhang
        left = extras.left_overhang or 0.0
        right = extras.right_overhang or 0.0
    return {
        "benchtop:heightFromFloor": height_from_floor,
        "benchtop:thickness": thickness,
        "benchtop:frontOverhang": front,
        "benchtop:leftOverhang": left,
        "benchtop:rightOverhang": right,
    }.get(dim_id)


def virtual_value(cabinet: Cabinet, dim_id: str) -> float | None:
    """Value of a type-specific virtual dimension id, or None."""
    kind = cabinet.cabinet_type
    if kind is CabinetType.APPLIANCE:
        return appliance_value(cabinet, dim_id)
    if kind is CabinetType.BENCHTOP:
        return benchtop_value(cabinet, dim_id)
    if kind in (CabinetType.FILLER, CabinetType.PANEL) and dim_id == FILLER_OFF_THE_FLOOR:
        if cabinet.parent_y_offset is not None:
            return cabinet.parent_y_offset
        return cabinet.y
    return None


class DimensionValueResolver:
    """Resolves and records live product dimension values."""

    def __init__(
        self,
        scene: Scene,
        panel_state: "PanelStateStore",
        products: "ProductDataProvider",
    ) -> None:
        self._scene = scene
        self._panel_state = panel_state
        self._products = products
        self._edits: dict[str, dict[str, Any]] = {}

    def set_edit(self, cabinet_id: str, dim_id: str, value: Any) -> None:
        """Record an in-progress edit that overrides persisted state."""
        self._edits.setdefault(cabinet_id, {})[dim_id] = value

    def clear_edits(self, cabinet_id: str | None = None) -> None:
        if cabinet_id is None:
            self._edits.clear()
        else:
            self._edits.pop(cabinet_id, None)

    def set_value(self, cabinet_id: str, dim_id: str, value: Any) -> None:
        """Persist a value and drop any stale in-memory edit for it."""
        self._panel_state.set_value(cabinet_id, dim_id, value)
        edits = self._edits.get(cabinet_id)
        if edits is not None:
            edits.pop(dim_id, None)
            if not edits:
                del self._edits[cabinet_id]

    def has_persisted(self, cabinet_id: str) -> bool:
        return self._panel_state.get(cabinet_id) is not None

    def raw_value(self, cabinet_id: str, dim_id: str) -> Any:
        """Stored or default value without numeric coercion."""
        edits = self._edits.get(cabinet_id, {})
        if dim_id in edits:
            return edits[dim_id]
        values = self._panel_state.get_values(cabinet_id)
        if dim_id in values:
            return values[dim_id]
        cabinet = self._scene.get(cabinet_id)
        if cabinet is None or cabinet.product_id is None:
            return None
        product = self._products.get_product_data(cabinet.product_id)
        if product is None or dim_id not in product.dims:
            return None
        return product.dims[dim_id].default()

    def value(self, cabinet_id: str, dim_id: str) -> float | None:
        """Live numeric value of a dimension, or None when unresolvable."""
        cabinet = self._scene.get(cabinet_id)
        if cabinet is None:
            return None

        virtual = virtual_value(cabinet, dim_id)
        if virtual is not None and math.isfinite(virtual):
            return virtual

        edits = self._edits.get(cabinet_id, {})
        if dim_id in edits:
            number = to_number(edits[dim_id])
            if number is not None:
                return number

        number = to_number(self._panel_state.get_values(cabinet_id).get(dim_id))
        if number is not None:
            return number

        if cabinet.product_id is None:
            return None
        product = self._products.get_product_data(cabinet.product_id)
        if product is None or dim_id not in product.dims:
            return None
        return to_number(product.dims[dim_id].default())
