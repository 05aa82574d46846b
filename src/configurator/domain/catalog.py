"""Catalog product data: dimension entries and their GD mapping."""

from __future__ import annotations

from dataclasses import dataclass, field

from .value_objects import GDRole, ValueType


@dataclass(frozen=True)
class DimensionEntry:
    """One editable dimension of a catalog product.

    Attributes:
        dim_id: Identifier of the dimension within its product.
        value_type: Range (numeric slider) or selection (fixed options).
        gd_id: Global dimension this entry is bound to, if any.
        min_value: Lower bound for range entries.
        max_value: Upper bound for range entries.
        default_value: Catalog default.
        options: Allowed values for selection entries.
        sort_num: Display order within the product.
        visible: Hidden entries are ignored by view-level lookups.
    """

    dim_id: str
    value_type: ValueType = ValueType.RANGE
    gd_id: str | None = None
    min_value: float | None = None
    max_value: float | None = None
    default_value: float | str | None = None
    options: tuple[str, ...] = ()
    sort_num: int = 0
    visible: bool = True

    def __post_init__(self) -> None:
        if (
            self.min_value is not None
            and self.max_value is not None
            and self.min_value > self.max_value
        ):
            raise ValueError(f"Dimension {self.dim_id}: min is greater than max")

    def default(self) -> float | str:
        """Catalog default for this entry.

        Range defaults fall back to ``min`` and then 0, and are clamped to
        ``[min, max]``. Selection defaults fall back to the first option.
        """
        if self.value_type is ValueType.SELECTION:
            if self.default_value is not None:
                return self.default_value
            return self.options[0] if self.options else ""

        value = self.default_value
        if value is None:
            value = self.min_value if self.min_value is not None else 0.0
        try:
            number = float(value)
        except (TypeError, ValueError):
            number = 0.0
        if self.min_value is not None:
            number = max(self.min_value, number)
        if self.max_value is not None:
            number = min(self.max_value, number)
        return number


@dataclass(frozen=True)
class GDDefinition:
    """A global dimension and its catalog-level bounds."""

    gd_id: str
    name: str = ""
    min_value: float | None = None
    max_value: float | None = None
    visible: bool = True


@dataclass
class ProductData:
    """Catalog data for one product.

    ``gd_mapping`` maps each role to the GD ids that play it for this
    product, mirroring the catalog's per-product GD role mapping.
    """

    product_id: str
    dims: dict[str, DimensionEntry] = field(default_factory=dict)
    gds: dict[str, GDDefinition] = field(default_factory=dict)
    gd_mapping: dict[GDRole, list[str]] = field(default_factory=dict)

    def sorted_dims(self) -> list[DimensionEntry]:
        """Dimension entries in catalog display order."""
        return sorted(self.dims.values(), key=lambda d: d.sort_num)

    def dims_for_gd(self, gd_id: str, visible_only: bool = True) -> list[DimensionEntry]:
        return [
            d
            for d in self.dims.values()
            if d.gd_id == gd_id and (d.visible or not visible_only)
        ]
