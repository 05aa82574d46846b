"""Typed events emitted by the constraint engine.

Each engine instance owns its own EventBus; there is no global channel.
Subscribers register per event type and are called synchronously in
subscription order.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, TypeVar


@dataclass(frozen=True)
class CabinetResized:
    cabinet_id: str
    old_width: float
    new_width: float
    adjusted_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class CabinetMoved:
    cabinet_id: str
    dx: float
    dy: float
    moved_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class ResizeRejected:
    cabinet_id: str
    reason: str


@dataclass(frozen=True)
class DrawerEditRejected:
    cabinet_id: str
    index: int
    reason: str


@dataclass(frozen=True)
class FormulasApplied:
    """Emitted after a recalculation changed at least one value."""

    keys: tuple[str, ...]
    passes: int


@dataclass(frozen=True)
class ViewRealigned:
    view_ids: tuple[str, ...] = field(default_factory=tuple)


Event = TypeVar("Event")


class EventBus:
    """Per-instance synchronous observer registry."""

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable]] = defaultdict(list)

    def subscribe(self, event_type: type[Event], handler: Callable[[Event], None]) -> Callable[[], None]:
        """Register a handler; returns a callable that unsubscribes it."""
        self._handlers[event_type].append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)

        return unsubscribe

    def publish(self, event: object) -> None:
        for handler in list(self._handlers.get(type(event), [])):
            handler(event)
