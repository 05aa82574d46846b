"""In-memory implementations of the panel state and catalog contracts."""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable

from configurator.domain.catalog import ProductData

logger = logging.getLogger(__name__)


class InMemoryPanelStateStore:
    """Panel state kept in a dictionary keyed by cabinet id.

    Each entry holds a ``values`` mapping (dimension id to value) plus any
    extra presentation fields such as ``materialColor``.
    """

    def __init__(self, initial: dict[str, dict[str, Any]] | None = None) -> None:
        self._state: dict[str, dict[str, Any]] = {}
        for cabinet_id, state in (initial or {}).items():
            entry = copy.deepcopy(state)
            entry.setdefault("values", {})
            self._state[cabinet_id] = entry

    def get(self, cabinet_id: str) -> dict[str, Any] | None:
        state = self._state.get(cabinet_id)
        return copy.deepcopy(state) if state is not None else None

    def get_values(self, cabinet_id: str) -> dict[str, Any]:
        state = self._state.get(cabinet_id)
        if state is None:
            return {}
        return dict(state.get("values", {}))

    def set(self, cabinet_id: str, state: dict[str, Any]) -> None:
        entry = copy.deepcopy(state)
        entry.setdefault("values", {})
        self._state[cabinet_id] = entry

    def set_value(self, cabinet_id: str, dim_id: str, value: Any) -> None:
        entry = self._state.setdefault(cabinet_id, {"values": {}})
        entry.setdefault("values", {})[dim_id] = value

    def remove(self, cabinet_id: str) -> None:
        self._state.pop(cabinet_id, None)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return copy.deepcopy(self._state)


class CatalogProductDataProvider:
    """Product data held in memory, as loaded from a scene file."""

    def __init__(self, products: Iterable[ProductData] = ()) -> None:
        self._products: dict[str, ProductData] = {p.product_id: p for p in products}

    def get_product_data(self, product_id: str) -> ProductData | None:
        product = self._products.get(product_id)
        if product is None:
            logger.debug(f"No product data for {product_id}")
        return product

    def add(self, product: ProductData) -> None:
        self._products[product.product_id] = product

    def product_ids(self) -> list[str]:
        return list(self._products)

    def all(self) -> list[ProductData]:
        return list(self._products.values())
