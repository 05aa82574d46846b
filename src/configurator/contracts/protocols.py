"""Boundary protocols for the constraint engine.

The engine reads and writes scene state through these contracts. The
in-memory implementations in ``configurator.infrastructure`` and the
reference GD applier in ``configurator.application`` back the CLI, the API
and the tests; a hosting UI can supply its own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from configurator.domain.catalog import ProductData


@runtime_checkable
class ViewMembershipProvider(Protocol):
    """Answers which cabinets belong to a view.

    Example:
        ```python
        class StaticViews:
            def get_cabinets_in_view(self, view_id: str) -> list[str]:
                return {"A": ["c1", "c2"]}.get(view_id, [])
        ```
    """

    def get_cabinets_in_view(self, view_id: str) -> list[str]:
        """Member ids of ``view_id`` in membership order."""
        ...


@runtime_checkable
class PanelStateStore(Protocol):
    """Persisted per-cabinet panel state.

    The ``values`` mapping (dimension id to value) is the dimension-value
    cache consulted by ``dim()`` in formulas.
    """

    def get(self, cabinet_id: str) -> dict[str, Any] | None:
        """Full panel state for a cabinet, or None."""
        ...

    def get_values(self, cabinet_id: str) -> dict[str, Any]:
        """Dimension values for a cabinet; empty when nothing is stored."""
        ...

    def set_value(self, cabinet_id: str, dim_id: str, value: Any) -> None:
        """Persist one dimension value."""
        ...

    def remove(self, cabinet_id: str) -> None:
        """Drop all state for a cabinet."""
        ...


@runtime_checkable
class ProductDataProvider(Protocol):
    """Synchronous, cached access to catalog product data."""

    def get_product_data(self, product_id: str) -> "ProductData | None":
        """Product data, or None when the product is unknown."""
        ...


class GDValueApplier(Protocol):
    """Writes a global dimension value back to every cabinet that uses it.

    This is where width, height, depth, shelf count, drawer count and door
    overhang semantics are applied. The formula engine calls it and never
    mutates cabinets itself.
    """

    def apply_gd_value(
        self,
        view_id: str,
        gd_id: str,
        value: float,
        products: "dict[str, ProductData]",
    ) -> list[str]:
        """Apply ``value`` to the members of ``view_id`` mapped to ``gd_id``.

        Args:
            view_id: View whose members are updated.
            gd_id: Global dimension being set.
            value: New value.
            products: Product data of the view's members, keyed by product id.

        Returns:
            Ids of the cabinets that were changed. The engine only counts
            the formula as applied when this is not empty.

        Raises:
            ConstraintError: If the value is rejected. Nothing is applied.
        """
        ...


@runtime_checkable
class DependentComponentUpdater(Protocol):
    """Realigns components attached to a cabinet after it moved or resized."""

    def update_dependents(self, cabinet_id: str) -> list[str]:
        """Realign the dependents of ``cabinet_id`` and return their ids."""
        ...


class Scheduler(Protocol):
    """Runs callbacks after a delay. Returned handles can be cancelled."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> "ScheduledHandle":
        """Schedule ``callback`` to run ``delay`` seconds from now."""
        ...


class ScheduledHandle(Protocol):
    def cancel(self) -> None: ...


class Clock(Protocol):
    """Source of timestamps for last-evaluated bookkeeping."""

    def __call__(self) -> float: ...
