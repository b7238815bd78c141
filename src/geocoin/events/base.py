"""Publish/subscribe events for world-state changes.

The world model never talks to a renderer directly. It publishes events when
caches appear or go dormant, when coins change hands and when the player
moves; a map view, a status panel or a test subscribes to whichever it needs.

Example usage:
    bus = EventBus()

    def on_withdraw(event: CoinWithdrawnEvent) -> None:
        print(f"Took {event.coin} from {event.cell_key}")

    bus.subscribe(CoinWithdrawnEvent, on_withdraw)
    bus.publish(CoinWithdrawnEvent(cell_key="1,2", coin=coin))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from geocoin.board.base import Coin
    from geocoin.types import GeoPoint


@dataclass
class Event:
    """Base event class."""


@dataclass
class CacheMaterializedEvent(Event):
    """Fired when a cache becomes Active.

    Attributes:
        cell_key: Key of the cache's cell.
        coin_count: Number of coins the cache holds once active.
        restored: True if the cache came back from a dormant snapshot,
            False if it was freshly minted.
    """

    cell_key: str
    coin_count: int
    restored: bool


@dataclass
class CacheDemotedEvent(Event):
    """Fired when an Active cache is serialized to Dormant.

    Attributes:
        cell_key: Key of the cache's cell.
    """

    cell_key: str


@dataclass
class CoinWithdrawnEvent(Event):
    """Fired when the player takes a coin from a cache."""

    cell_key: str
    coin: Coin


@dataclass
class CoinDepositedEvent(Event):
    """Fired when the player leaves a coin in a cache."""

    cell_key: str
    coin: Coin


@dataclass
class PlayerMovedEvent(Event):
    """Fired when the player's position changes.

    Attributes:
        from_position: Position before the move.
        to_position: Position after the move.
    """

    from_position: GeoPoint
    to_position: GeoPoint


class EventBus:
    """Synchronous publish/subscribe hub.

    Handlers run in subscription order on the caller's thread. Not
    thread-safe; all calls are expected on the single event-handling thread.
    """

    def __init__(self) -> None:
        """Initialize the event bus with no listeners."""
        self.listeners: dict[type[Event], list[Callable[[Event], None]]] = {}

    def subscribe(self, event_type: type[Event], handler: Callable[[Event], None]) -> None:
        """Register a handler for an event type.

        Args:
            event_type: The event class to listen for.
            handler: Callable receiving the published event.
        """
        self.listeners.setdefault(event_type, []).append(handler)

    def publish(self, event: Event) -> None:
        """Dispatch an event to the handlers subscribed to its exact type.

        Exceptions raised by a handler propagate to the publisher.
        """
        for handler in list(self.listeners.get(type(event), [])):
            handler(event)
