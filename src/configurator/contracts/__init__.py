"""Contracts module - protocols shared across layers.

Example:
    ```python
    from configurator.contracts import PanelStateStore, ProductDataProvider

    def live_width(store: PanelStateStore, cabinet_id: str) -> float:
        return float(store.get_values(cabinet_id).get("width", 0))
    ```
"""

from .protocols import (
    Clock as Clock,
    DependentComponentUpdater as DependentComponentUpdater,
    GDValueApplier as GDValueApplier,
    PanelStateStore as PanelStateStore,
    ProductDataProvider as ProductDataProvider,
    ScheduledHandle as ScheduledHandle,
    Scheduler as Scheduler,
    ViewMembershipProvider as ViewMembershipProvider,
)

__all__ = [
    "Clock",
    "DependentComponentUpdater",
    "GDValueApplier",
    "PanelStateStore",
    "ProductDataProvider",
    "ScheduledHandle",
    "Scheduler",
    "ViewMembershipProvider",
]
