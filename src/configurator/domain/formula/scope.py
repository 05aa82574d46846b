"""Read-only scene accessors exposed to formulas as ``cab``, ``dim`` and ``viewGd``."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable

from ..entities import NO_VIEW, ApplianceGaps, Scene, appliance_visual_dimensions
from ..value_objects import CabinetType
from ..services.dimension_values import DimensionValueResolver

if TYPE_CHECKING:
    from ...contracts.protocols import ProductDataProvider, ViewMembershipProvider

CABINET_FIELDS = ("x", "y", "z", "width", "height", "depth", "left", "right", "top", "bottom")
APPLIANCE_FIELDS = (
    "visualWidth",
    "visualHeight",
    "visualDepth",
    "gapTop",
    "gapLeft",
    "gapRight",
    "kickerHeight",
    "shellWidth",
    "shellHeight",
    "shellDepth",
)


class FormulaScope:
    """Resolves formula references against the live scene.

    The ``cabinet_field``, ``dim_value`` and ``view_gd_value`` methods return
    None when data is missing; ``host_functions`` wraps them so formulas see
    0 instead.
    """

    def __init__(
        self,
        scene: Scene,
        views: "ViewMembershipProvider",
        values: DimensionValueResolver,
        products: "ProductDataProvider",
    ) -> None:
        self._scene = scene
        self._views = views
        self._values = values
        self._products = products

    def cabinet_field(self, cabinet_id: str, field: str) -> float | None:
        cabinet = self._scene.get(cabinet_id)
        if cabinet is None:
            return None

        fields = {
            "x": cabinet.x,
            "y": cabinet.y,
            "z": cabinet.position.z,
            "width": cabinet.width,
            "height": cabinet.height,
            "depth": cabinet.depth,
            "top": cabinet.top,
            "bottom": cabinet.bottom,
        }
        if field in fields:
            return fields[field]
        if field == "left":
            return self._scene.effective_left_edge(cabinet)
        if field == "right":
            return self._scene.effective_right_edge(cabinet)

        if cabinet.cabinet_type is CabinetType.APPLIANCE and field in APPLIANCE_FIELDS:
            visual = appliance_visual_dimensions(cabinet)
            gaps = cabinet.appliance_gaps or ApplianceGaps()
            return {
                "visualWidth": visual.width,
                "visualHeight": visual.height,
                "visualDepth": visual.depth,
                "gapTop": gaps.top,
                "gapLeft": gaps.left,
                "gapRight": gaps.right,
                "kickerHeight": gaps.kicker_height,
                "shellWidth": cabinet.width,
                "shellHeight": cabinet.height,
                "shellDepth": cabinet.depth,
            }[field]
        return None

    def dim_value(self, cabinet_id: str, dim_id: str) -> float | None:
        return self._values.value(cabinet_id, dim_id)

    def view_gd_value(self, view_id: str, gd_id: str) -> float | None:
        """First visible dimension mapped to ``gd_id`` among the view's members."""
        if not view_id or view_id == NO_VIEW:
            return None
        for cabinet_id in self._views.get_cabinets_in_view(view_id):
            cabinet = self._scene.get(cabinet_id)
            if cabinet is None or cabinet.product_id is None:
                continue
            product = self._products.get_product_data(cabinet.product_id)
            if product is None:
                continue
            entries = product.dims_for_gd(gd_id)
            if not entries:
                continue
            value = self.dim_value(cabinet_id, entries[0].dim_id)
            if value is not None and math.isfinite(value):
                return value
        return None

    def host_functions(self) -> dict[str, Callable[..., float]]:
        """The ``cab``/``dim``/``viewGd`` table handed to the interpreter."""

        def cab(cabinet_id: str, field: str) -> float:
            return _or_zero(self.cabinet_field(str(cabinet_id), str(field)))

        def dim(cabinet_id: str, dim_id: str) -> float:
            return _or_zero(self.dim_value(str(cabinet_id), str(dim_id)))

        def view_gd(view_id: str, gd_id: str) -> float:
            return _or_zero(self.view_gd_value(str(view_id), str(gd_id)))

        return {"cab": cab, "dim": dim, "viewGd": view_gd}


def _or_zero(value: float | None) -> float:
    return value if value is not None else 0.0
