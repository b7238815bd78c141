"""Unit tests for CoinLedger."""

import random
import unittest
from collections import Counter
from unittest.mock import MagicMock

from geocoin.board import Cell, Coin
from geocoin.caches import Cache
from geocoin.events import CoinDepositedEvent, CoinWithdrawnEvent
from geocoin.ledger import CoinLedger


class TestCoinLedger(unittest.TestCase):
    """Test LIFO withdraw/deposit."""

    def setUp(self) -> None:
        """Set up a cache with three coins and an empty player inventory."""
        self.cell = Cell(0, 0)
        self.cache = Cache(cell=self.cell, coins=[Coin(self.cell, 0), Coin(self.cell, 2), Coin(self.cell, 1)])
        self.player_coins: list[Coin] = []
        self.event_bus = MagicMock()
        self.ledger = CoinLedger(event_bus=self.event_bus)

    def test_withdraw_takes_most_recent_not_highest_serial(self) -> None:
        """Test that withdraw pops the last coin, not the highest serial."""
        coin = self.ledger.withdraw(self.cache, self.player_coins)

        assert coin == Coin(self.cell, 1)
        assert self.player_coins == [Coin(self.cell, 1)]
        assert self.cache.coins == [Coin(self.cell, 0), Coin(self.cell, 2)]

    def test_deposit_returns_most_recent_player_coin(self) -> None:
        """Test that deposit pops the player's last coin onto the cache."""
        other = Cell(9, 9)
        self.player_coins.extend([Coin(other, 0), Coin(other, 1)])

        coin = self.ledger.deposit(self.cache, self.player_coins)

        assert coin == Coin(other, 1)
        assert self.cache.coins[-1] == Coin(other, 1)
        assert self.player_coins == [Coin(other, 0)]

    def test_withdraw_then_deposit_restores_cache(self) -> None:
        """Test that a withdraw followed by a deposit is a no-op overall."""
        before = list(self.cache.coins)
        self.ledger.withdraw(self.cache, self.player_coins)
        self.ledger.deposit(self.cache, self.player_coins)
        assert self.cache.coins == before
        assert self.player_coins == []

    def test_withdraw_from_empty_cache(self) -> None:
        """Test that withdrawing from an empty cache returns None and changes nothing."""
        empty = Cache(cell=self.cell)
        self.player_coins.append(Coin(Cell(1, 1), 0))

        assert self.ledger.withdraw(empty, self.player_coins) is None
        assert self.player_coins == [Coin(Cell(1, 1), 0)]
        assert empty.coins == []
        self.event_bus.publish.assert_not_called()

    def test_deposit_with_empty_inventory(self) -> None:
        """Test that depositing with no coins returns None and changes nothing."""
        before = list(self.cache.coins)

        assert self.ledger.deposit(self.cache, self.player_coins) is None
        assert self.cache.coins == before
        self.event_bus.publish.assert_not_called()

    def test_withdraw_publishes_event(self) -> None:
        """Test that withdraw publishes CoinWithdrawnEvent."""
        coin = self.ledger.withdraw(self.cache, self.player_coins)

        event = self.event_bus.publish.call_args[0][0]
        assert isinstance(event, CoinWithdrawnEvent)
        assert event.cell_key == "0,0"
        assert event.coin == coin

    def test_deposit_publishes_event(self) -> None:
        """Test that deposit publishes CoinDepositedEvent."""
        self.ledger.withdraw(self.cache, self.player_coins)
        coin = self.ledger.deposit(self.cache, self.player_coins)

        event = self.event_bus.publish.call_args[0][0]
        assert isinstance(event, CoinDepositedEvent)
        assert event.coin == coin

    def test_works_without_event_bus(self) -> None:
        """Test that the ledger is usable with no event bus."""
        ledger = CoinLedger()
        assert ledger.withdraw(self.cache, self.player_coins) == Coin(self.cell, 1)

    def test_conservation_over_random_sequence(self) -> None:
        """Test that no coin is duplicated or lost across many transfers."""
        cells = [Cell(x, 0) for x in range(3)]
        caches = [Cache(cell=c, coins=[Coin(c, s) for s in range(4)]) for c in cells]
        census = Counter(coin for cache in caches for coin in cache.coins)
        rng = random.Random(1234)

        for _ in range(500):
            cache = rng.choice(caches)
            if rng.random() < 0.5:
                self.ledger.withdraw(cache, self.player_coins)
            else:
                self.ledger.deposit(cache, self.player_coins)
            current = Counter(self.player_coins) + Counter(coin for c in caches for coin in c.coins)
            assert current == census
