"""Domain events emitted by a pool after each committed operation.

Events are for observers only: nothing inside the pool consumes them.
An EventBus keeps a bounded history of recent events and fans each event
out to subscribed listeners; every emission is also logged.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from typing import ClassVar

import structlog
from pydantic import BaseModel, ConfigDict

from dex.constants import DEFAULT_EVENT_HISTORY
from dex.models.types import Identifier, Uint256

logger = structlog.get_logger()


class PoolEvent(BaseModel):
    """Base class for pool events."""

    name: ClassVar[str] = "pool_event"

    model_config = ConfigDict(frozen=True)


class LiquidityAdded(PoolEvent):
    """A provider deposited both assets and received shares."""

    name: ClassVar[str] = "liquidity_added"

    provider: Identifier
    amount_a: Uint256
    amount_b: Uint256
    shares_minted: Uint256


class LiquidityRemoved(PoolEvent):
    """A provider burned shares and withdrew both assets."""

    name: ClassVar[str] = "liquidity_removed"

    provider: Identifier
    amount_a: Uint256
    amount_b: Uint256
    shares_burned: Uint256


class Swap(PoolEvent):
    """A trader exchanged one pooled asset for the other."""

    name: ClassVar[str] = "swap"

    trader: Identifier
    asset_in: Identifier
    asset_out: Identifier
    amount_in: Uint256
    amount_out: Uint256


EventListener = Callable[[PoolEvent], None]


class EventBus:
    """Synchronous fan-out of pool events to listeners.

    Usage:
        bus = EventBus(history_size=100)
        unsubscribe = bus.subscribe(lambda event: print(event.name))
        ...
        unsubscribe()
    """

    def __init__(self, history_size: int = DEFAULT_EVENT_HISTORY) -> None:
        if history_size < 0:
            raise ValueError(f"history_size cannot be negative: {history_size}")
        self._listeners: list[EventListener] = []
        self._history: deque[PoolEvent] = deque(maxlen=history_size)

    @property
    def history(self) -> list[PoolEvent]:
        """The most recent events, oldest first; older ones are dropped."""
        return list(self._history)

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """Register a listener. Returns a callable that removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: PoolEvent) -> None:
        """Record, log and dispatch an event.

        Events are emitted after the operation has committed, so a failing
        listener is logged and does not undo or fail the operation.
        """
        self._history.append(event)
        logger.info(event.name, **event.model_dump())

        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("event_listener_failed", event_name=event.name)

    def of_type(self, event_type: type[PoolEvent]) -> list[PoolEvent]:
        """Return the retained events of one type, oldest first."""
        return [event for event in self._history if isinstance(event, event_type)]


__all__ = [
    "PoolEvent",
    "LiquidityAdded",
    "LiquidityRemoved",
    "Swap",
    "EventListener",
    "EventBus",
]
