"""Infrastructure layer - in-memory stores backing the engine's contracts."""

from .stores import CatalogProductDataProvider, InMemoryPanelStateStore

__all__ = [
    "CatalogProductDataProvider",
    "InMemoryPanelStateStore",
]
