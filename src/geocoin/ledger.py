"""Coin transfers between a cache and the player.

Both sides are stacks: withdraw pops the cache's most recent coin onto the
player's inventory, deposit pops the player's most recent coin into the
cache. Order is by recency, never by serial. Each call moves at most one coin
and never copies or drops one, so the combined multiset of cache and player
coins is unchanged by any sequence of calls.

An empty source is a normal boundary, not an error: the call returns None and
changes nothing.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from geocoin.events import CoinDepositedEvent, CoinWithdrawnEvent

if TYPE_CHECKING:
    from geocoin.board.base import Coin
    from geocoin.caches.base import Cache
    from geocoin.events import EventBus

logger = logging.getLogger(__name__)


class CoinLedger:
    """Moves single coins between a cache and a player inventory.

    The ledger owns no coins; it only relocates them between the two lists
    it is handed.

    Attributes:
        event_bus: Optional bus receiving CoinWithdrawnEvent/CoinDepositedEvent.
    """

    def __init__(self, event_bus: EventBus | None = None) -> None:
        """Initialize the ledger."""
        self.event_bus = event_bus

    def withdraw(self, cache: Cache, player_coins: list[Coin]) -> Coin | None:
        """Move the cache's most recent coin to the player.

        Args:
            cache: Active cache to take from.
            player_coins: Player inventory to append to.

        Returns:
            The coin moved, or None if the cache was empty.
        """
        if not cache.coins:
            logger.debug("Withdraw from empty cache %s ignored", cache.key)
            return None

        coin = cache.coins.pop()
        player_coins.append(coin)
        logger.debug("Withdrew %s from cache %s", coin, cache.key)

        if self.event_bus:
            self.event_bus.publish(CoinWithdrawnEvent(cell_key=cache.key, coin=coin))
        return coin

    def deposit(self, cache: Cache, player_coins: list[Coin]) -> Coin | None:
        """Move the player's most recent coin into the cache.

        Args:
            cache: Active cache to give to.
            player_coins: Player inventory to take from.

        Returns:
            The coin moved, or None if the player had no coins.
        """
        if not player_coins:
            logger.debug("Deposit into cache %s with empty inventory ignored", cache.key)
            return None

        coin = player_coins.pop()
        cache.coins.append(coin)
        logger.debug("Deposited %s into cache %s", coin, cache.key)

        if self.event_bus:
            self.event_bus.publish(CoinDepositedEvent(cell_key=cache.key, coin=coin))
        return coin
