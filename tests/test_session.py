"""Integration tests for GameSession and create_game()."""

import tempfile
import unittest
from collections import Counter
from pathlib import Path

from geocoin import create_game
from geocoin.board import Cell, CellRegistry
from geocoin.events import CoinWithdrawnEvent, EventBus
from geocoin.session import GameSession
from geocoin.storage import FileStorage, MemoryStorage
from geocoin.types import GeoPoint


class ConstantRandom:
    """Luck source returning the same value for every key."""

    def __init__(self, constant: float) -> None:
        self.constant = constant

    def value(self, key: str) -> float:
        return self.constant


ORIGIN = GeoPoint(0.00005, 0.00005)


def make_session(storage: MemoryStorage, event_bus: EventBus | None = None) -> GameSession:
    """Build a session where every cell holds a cache of 2 coins."""
    registry = CellRegistry(tile_width=1e-4, visibility_radius=1, spawn_probability=1.0, random=ConstantRandom(0.5))
    return GameSession(storage=storage, registry=registry, origin=ORIGIN, event_bus=event_bus)


def census(session: GameSession) -> Counter:
    """Count every coin in caches and in the player's inventory."""
    return Counter(session.cache_store.iter_coins()) + Counter(session.state.coins)


class TestGameSession(unittest.TestCase):
    """Test the session control flow."""

    def setUp(self) -> None:
        """Start a session on empty storage."""
        self.storage = MemoryStorage()
        self.session = make_session(self.storage)
        self.caches = self.session.start()

    def test_start_materializes_view(self) -> None:
        """Test that a new session shows the caches around the origin."""
        keys = {cache.key for cache in self.caches}
        assert keys == {"-1,-1", "-1,0", "0,-1", "0,0"}
        assert all(len(cache.coins) == 2 for cache in self.caches)
        assert self.session.state.position == ORIGIN
        assert self.session.state.coins == []

    def test_withdraw_and_status_text(self) -> None:
        """Test taking a coin from a visible cache."""
        assert self.session.status_text() == "No coins yet..."
        cell = self.session.registry.canonical_cell(0, 0)

        coin = self.session.withdraw(cell)

        assert coin is not None
        assert coin.serial == 1
        assert self.session.state.coins == [coin]
        assert self.session.status_text() == "1 coins: 0.00:0.00#1"

    def test_deposit_into_visible_cache(self) -> None:
        """Test leaving a coin in a different cache."""
        coin = self.session.withdraw(self.session.registry.canonical_cell(0, 0))
        target = self.session.registry.canonical_cell(-1, -1)

        assert self.session.deposit(target) == coin
        assert self.session.cache_store.get_active("-1,-1").coins[-1] == coin
        assert self.session.state.coins == []

    def test_cache_out_of_view_is_refused(self) -> None:
        """Test that a cache outside the view cannot be used."""
        with self.assertLogs("geocoin.session", level="WARNING"):
            assert self.session.withdraw(Cell(50, 50)) is None
        assert self.session.state.coins == []

    def test_moving_demotes_caches_left_behind(self) -> None:
        """Test that stepping away turns old caches Dormant."""
        self.session.step("north")
        self.session.step("north")

        store = self.session.cache_store
        assert not store.is_active("-1,0")
        assert store.is_dormant("-1,0")
        assert {cache.key for cache in self.session.visible_caches()} == store.active_keys()

    def test_changes_survive_leaving_and_returning(self) -> None:
        """Test that a withdrawn coin stays gone after the cache goes Dormant."""
        coin = self.session.withdraw(self.session.registry.canonical_cell(-1, 0))
        self.session.move_by(0.001, 0.0)
        self.session.move_to(ORIGIN)

        cache = self.session.cache_store.get_active("-1,0")
        assert cache is not None
        assert coin not in cache.coins
        assert len(cache.coins) == 1

    def test_coins_conserved_through_play(self) -> None:
        """Test that moving and trading never creates or destroys coins."""
        before = census(self.session)
        self.session.withdraw(self.session.registry.canonical_cell(0, 0))
        self.session.withdraw(self.session.registry.canonical_cell(0, 0))
        self.session.step("east")
        self.session.deposit(self.session.registry.canonical_cell(0, 0))
        self.session.step("east")

        after = census(self.session)
        for coin, count in before.items():
            assert after[coin] == count

    def test_end_and_restart(self) -> None:
        """Test that a new session resumes where the last one ended."""
        taken = self.session.withdraw(self.session.registry.canonical_cell(0, 0))
        self.session.step("west")
        position = self.session.state.position
        trail = list(self.session.state.trail)
        self.session.end()

        assert self.session.cache_store.active_keys() == set()

        resumed = make_session(self.storage)
        resumed.start()

        assert resumed.state.position == position
        assert resumed.state.trail == trail
        assert resumed.state.coins == [taken]
        assert resumed.state.coins[0].cell is resumed.registry.canonical_cell(0, 0)
        resumed.move_to(ORIGIN)
        assert taken not in resumed.cache_store.get_active("0,0").coins

    def test_reset(self) -> None:
        """Test that reset erases storage and returns to the origin."""
        self.session.withdraw(self.session.registry.canonical_cell(0, 0))
        self.session.step("north")
        self.session.end()

        caches = self.session.reset()

        assert self.storage.items == {}
        assert self.session.state.position == ORIGIN
        assert self.session.state.coins == []
        assert self.session.state.trail == []
        assert all(len(cache.coins) == 2 for cache in caches)

    def test_events_reach_subscribers(self) -> None:
        """Test that ledger events flow through the session's bus."""
        received: list[CoinWithdrawnEvent] = []
        self.session.event_bus.subscribe(CoinWithdrawnEvent, received.append)

        self.session.withdraw(self.session.registry.canonical_cell(0, 0))

        assert len(received) == 1
        assert received[0].cell_key == "0,0"


class TestCreateGame(unittest.TestCase):
    """Test the create_game() helper."""

    def setUp(self) -> None:
        """Create a temporary directory."""
        self._tmp = tempfile.TemporaryDirectory()
        self.saves_dir = Path(self._tmp.name)

    def tearDown(self) -> None:
        """Remove the temporary directory."""
        self._tmp.cleanup()

    def test_create_game_round_trip(self) -> None:
        """Test that a file-backed game saves and resumes."""
        session = create_game(saves_dir=self.saves_dir)
        assert isinstance(session.persistence.storage, FileStorage)
        session.step("north")
        session.end()

        assert (self.saves_dir / "player_position.json").exists()

        resumed = create_game(saves_dir=self.saves_dir)
        assert resumed.state.position == session.state.position
        assert len(resumed.state.trail) == 1
