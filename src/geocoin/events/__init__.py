"""Module for events."""

from geocoin.events.base import (
    CacheDemotedEvent,
    CacheMaterializedEvent,
    CoinDepositedEvent,
    CoinWithdrawnEvent,
    Event,
    EventBus,
    PlayerMovedEvent,
)

__all__ = [
    "CacheDemotedEvent",
    "CacheMaterializedEvent",
    "CoinDepositedEvent",
    "CoinWithdrawnEvent",
    "Event",
    "EventBus",
    "PlayerMovedEvent",
]
