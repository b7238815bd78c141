"""Game session: wires the world model together and drives its lifecycle.

A GameSession owns one registry, cache store, ledger and player, plus the
persistence layer, and runs the control flow:

1. start(): restore stored state, then refresh the view.
2. Movement (step/move_by/move_to): move the player, then refresh the view.
3. withdraw()/deposit(): exchange coins with a visible Active cache.
4. end(): demote everything and write it to storage.

refresh_view() always demotes caches that left the view before
materializing the new visible set, so a key is never in both tables.

Everything is synchronous; each call completes its transition before
returning. A continuous location feed is just a series of move_to() calls.

Example usage:
    session = GameSession(storage=FileStorage())
    session.start()

    session.step("north")
    for cache in session.visible_caches():
        session.withdraw(cache.cell)

    session.end()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from geocoin.board.base import coin_to_display_string
from geocoin.board.registry import CellRegistry
from geocoin.caches.store import CacheStore
from geocoin.conf import settings
from geocoin.events import EventBus
from geocoin.ledger import CoinLedger
from geocoin.player.base import PlayerState
from geocoin.player.manager import PlayerManager
from geocoin.saves.persistence import SessionPersistence
from geocoin.storage import MemoryStorage
from geocoin.types import GeoPoint

if TYPE_CHECKING:
    from geocoin.board.base import Cell, Coin
    from geocoin.caches.base import Cache
    from geocoin.storage import KeyValueStorage

logger = logging.getLogger(__name__)


class GameSession:
    """One player's session in the world.

    Attributes:
        event_bus: Bus shared by every component.
        registry: Flyweight cell registry.
        cache_store: Owner of every cache.
        ledger: Coin transfer protocol.
        player: Player movement and state.
        persistence: Session save/restore.
        origin: Starting position for new sessions and resets.
    """

    def __init__(
        self,
        storage: KeyValueStorage | None = None,
        registry: CellRegistry | None = None,
        origin: GeoPoint | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        """Create the components of a session. Nothing is loaded until start().

        Args:
            storage: Durable storage. Defaults to an in-memory store.
            registry: Cell registry. Defaults to one configured from settings.
            origin: Starting position. Defaults to settings.ORIGIN_LAT/ORIGIN_LNG.
            event_bus: Event bus. A new one is created if omitted.
        """
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self.registry = registry if registry is not None else CellRegistry()
        self.origin = origin if origin is not None else GeoPoint(settings.ORIGIN_LAT, settings.ORIGIN_LNG)

        self.cache_store = CacheStore(self.registry, event_bus=self.event_bus)
        self.ledger = CoinLedger(event_bus=self.event_bus)
        self.player = PlayerManager(PlayerState(position=self.origin), event_bus=self.event_bus)
        self.persistence = SessionPersistence(
            storage if storage is not None else MemoryStorage(),
            self.registry,
            origin=self.origin,
        )

        self._visible_keys: set[str] = set()

    @property
    def state(self) -> PlayerState:
        """The player's state."""
        return self.player.state

    def start(self) -> list[Cache]:
        """Restore the stored session and materialize the caches in view.

        Returns:
            Caches visible from the restored position.
        """
        snapshot = self.persistence.restore()
        self.cache_store.load_dormant(snapshot.dormant)
        self.state.position = snapshot.position
        self.state.coins[:] = snapshot.coins
        self.state.trail[:] = snapshot.trail
        self._visible_keys.clear()
        logger.info("Session started at (%.6f, %.6f)", *self.state.position)
        return self.refresh_view()

    def end(self) -> dict[str, str]:
        """Save the session; every cache ends up Dormant.

        Returns:
            The storage bundle that was written.
        """
        bundle = self.persistence.save(self.cache_store, self.state)
        self._visible_keys.clear()
        logger.info("Session ended")
        return bundle

    def reset(self) -> list[Cache]:
        """Erase storage and start over at the origin.

        Returns:
            Caches visible from the origin.
        """
        self.persistence.clear()
        self.cache_store.clear()
        self.player.reset(self.origin)
        self._visible_keys.clear()
        logger.info("Session reset")
        return self.refresh_view()

    def refresh_view(self) -> list[Cache]:
        """Demote caches that left the view, then materialize the visible ones.

        Returns:
            Active caches for every visible cell.
        """
        visible = self.registry.cells_near(self.state.position)
        keys = {cell.key for cell in visible}
        self.cache_store.demote_out_of_view(keys)
        caches = [self.cache_store.materialize(cell) for cell in visible]
        self._visible_keys = keys
        logger.debug("View refreshed: %d caches visible", len(caches))
        return caches

    def visible_caches(self) -> list[Cache]:
        """Active caches currently in view."""
        return [cache for key in self._visible_keys if (cache := self.cache_store.get_active(key)) is not None]

    def step(self, direction: str) -> list[Cache]:
        """Move one step in a compass direction and refresh the view."""
        self.player.step(direction)
        return self.refresh_view()

    def move_by(self, d_lat: float, d_lng: float) -> list[Cache]:
        """Move by signed deltas and refresh the view."""
        self.player.move_by(d_lat, d_lng)
        return self.refresh_view()

    def move_to(self, point: GeoPoint) -> list[Cache]:
        """Move to an absolute position (e.g. a geolocation fix) and refresh."""
        self.player.move_to(point)
        return self.refresh_view()

    def _cache_in_view(self, cell: Cell) -> Cache | None:
        if cell.key not in self._visible_keys:
            logger.warning("Cache %s is not in view", cell.key)
            return None
        return self.cache_store.get_active(cell.key)

    def withdraw(self, cell: Cell) -> Coin | None:
        """Take the most recent coin from a visible cache.

        Returns:
            The coin taken, or None if the cache is empty or not in view.
        """
        cache = self._cache_in_view(cell)
        if cache is None:
            return None
        return self.ledger.withdraw(cache, self.state.coins)

    def deposit(self, cell: Cell) -> Coin | None:
        """Leave the player's most recent coin in a visible cache.

        Returns:
            The coin left, or None if the player has none or the cache is not in view.
        """
        cache = self._cache_in_view(cell)
        if cache is None:
            return None
        return self.ledger.deposit(cache, self.state.coins)

    def status_text(self) -> str:
        """Summarize the player's inventory for a status panel."""
        if not self.state.coins:
            return "No coins yet..."
        listing = ", ".join(coin_to_display_string(coin) for coin in self.state.coins)
        return f"{len(self.state.coins)} coins: {listing}"
