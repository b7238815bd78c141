"""Cache store: owns every cache and its Active/Dormant representation.

Once a cell has been visited its cache exists in exactly one of two forms:

1. Active: an in-memory Cache whose coin list the player can change.
2. Dormant: snapshot text, kept while the cell is out of view.

All transitions go through materialize() (new or Dormant -> Active) and
demote_out_of_view() (Active -> Dormant). Both leave the store consistent
before returning, so no caller ever sees a key in both tables or a cache
that is only half restored.

Memory stays bounded to the visible window plus the dormant snapshot table.

Example usage:
    store = CacheStore(registry)

    visible = registry.cells_near(player_position)
    store.demote_out_of_view({cell.key for cell in visible})
    caches = [store.materialize(cell) for cell in visible]

    # On session end
    store.demote_all()
    table = store.dormant_snapshots()
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from geocoin.board.base import Coin, parse_cell_key
from geocoin.caches.base import Cache
from geocoin.caches.snapshot import deserialize, serialize
from geocoin.conf import settings
from geocoin.events import CacheDemotedEvent, CacheMaterializedEvent
from geocoin.exceptions import MalformedSnapshotError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from geocoin.board.base import Cell
    from geocoin.board.registry import CellRegistry
    from geocoin.events import EventBus

logger = logging.getLogger(__name__)


class CacheStore:
    """Owns the Active and Dormant cache tables.

    Attributes:
        registry: Cell registry used for luck and owner canonicalization.
        max_initial_coins: Exclusive upper bound on coins in a fresh cache.
        event_bus: Optional bus receiving cache lifecycle events.
    """

    def __init__(
        self,
        registry: CellRegistry,
        max_initial_coins: int | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        """Initialize an empty store.

        Args:
            registry: Cell registry shared with the rest of the session.
            max_initial_coins: Defaults to settings.MAX_INITIAL_COINS.
            event_bus: Optional bus for CacheMaterializedEvent/CacheDemotedEvent.
        """
        self.registry = registry
        self.max_initial_coins = settings.MAX_INITIAL_COINS if max_initial_coins is None else max_initial_coins
        self.event_bus = event_bus

        self._active: dict[str, Cache] = {}
        self._dormant: dict[str, str] = {}

    def materialize(self, cell: Cell) -> Cache:
        """Return the Active cache for a cell, creating or restoring it as needed.

        - Never seen: mint the initial coins.
        - Dormant: decode the snapshot, then swap the entry into the Active
          table. A malformed snapshot is logged and the cache comes back empty.
        - Active: return the existing cache unchanged.

        Args:
            cell: Canonical cell to materialize.

        Returns:
            The Active cache for the cell.
        """
        key = cell.key
        cache = self._active.get(key)
        if cache is not None:
            return cache

        restored = key in self._dormant
        if restored:
            cache = self._restore(cell, self._dormant[key])
            del self._dormant[key]
        else:
            cache = self._mint(cell)
        self._active[key] = cache

        logger.debug(
            "Materialized cache %s with %d coins (%s)",
            key,
            len(cache.coins),
            "restored" if restored else "new",
        )
        if self.event_bus:
            self.event_bus.publish(CacheMaterializedEvent(cell_key=key, coin_count=len(cache.coins), restored=restored))
        return cache

    def initial_coin_count(self, cell: Cell) -> int:
        """Number of coins a never-visited cache at this cell starts with."""
        return math.floor(self.registry.random.value(f"{cell.key}:initialValue") * self.max_initial_coins)

    def _mint(self, cell: Cell) -> Cache:
        count = self.initial_coin_count(cell)
        return Cache(cell=cell, coins=[Coin(cell, serial) for serial in range(count)])

    def _restore(self, cell: Cell, snapshot: str) -> Cache:
        try:
            return deserialize(cell, snapshot, self.registry)
        except MalformedSnapshotError:
            logger.exception("Discarding unreadable snapshot for cache %s", cell.key)
            return Cache(cell=cell)

    def demote_out_of_view(self, visible_keys: Iterable[str]) -> None:
        """Move every Active cache whose key is not visible to Dormant.

        Must run before the next visible set is materialized.

        Args:
            visible_keys: Keys of the cells currently in view.
        """
        visible = set(visible_keys)
        for key in [k for k in self._active if k not in visible]:
            cache = self._active[key]
            self._dormant[key] = self.serialize(cache)
            del self._active[key]
            logger.debug("Demoted cache %s with %d coins", key, len(cache.coins))
            if self.event_bus:
                self.event_bus.publish(CacheDemotedEvent(cell_key=key))

    def demote_all(self) -> None:
        """Move every Active cache to Dormant."""
        self.demote_out_of_view(())

    def serialize(self, cache: Cache) -> str:
        """Encode a cache as snapshot text."""
        return serialize(cache)

    def deserialize(self, cell: Cell, snapshot: str) -> Cache:
        """Decode snapshot text into a cache for ``cell``.

        Raises:
            MalformedSnapshotError: If the snapshot cannot be parsed.
        """
        return deserialize(cell, snapshot, self.registry)

    def is_active(self, key: str) -> bool:
        """Check whether a cache is currently Active."""
        return key in self._active

    def is_dormant(self, key: str) -> bool:
        """Check whether a cache is currently Dormant."""
        return key in self._dormant

    def get_active(self, key: str) -> Cache | None:
        """Return the Active cache for a key, or None."""
        return self._active.get(key)

    def active_keys(self) -> set[str]:
        """Keys of all Active caches."""
        return set(self._active)

    def dormant_snapshots(self) -> dict[str, str]:
        """Copy of the Dormant snapshot table."""
        return dict(self._dormant)

    def load_dormant(self, table: Mapping[str, str]) -> None:
        """Replace all state with a Dormant table loaded from storage.

        Keys that are not valid cell keys, and values that are not text, are
        dropped with a warning. Snapshot contents are validated lazily when
        each cache is materialized.

        Args:
            table: Mapping of cell key to snapshot text.
        """
        self._active.clear()
        self._dormant.clear()
        for key, snapshot in table.items():
            try:
                parse_cell_key(key)
            except ValueError:
                logger.warning("Dropping dormant cache with invalid key %r", key)
                continue
            if not isinstance(snapshot, str):
                logger.warning("Dropping dormant cache %s with non-text snapshot", key)
                continue
            self._dormant[key] = snapshot
        logger.debug("Loaded %d dormant caches", len(self._dormant))

    def iter_coins(self) -> Iterator[Coin]:
        """Yield every coin held by any cache, Active or Dormant.

        Dormant snapshots that fail to decode contribute no coins.
        """
        for cache in self._active.values():
            yield from cache.coins
        for key, snapshot in self._dormant.items():
            try:
                yield from deserialize(self.registry.cell_for_key(key), snapshot, self.registry).coins
            except MalformedSnapshotError:
                logger.warning("Skipping unreadable snapshot for cache %s", key)

    def clear(self) -> None:
        """Forget every cache."""
        self._active.clear()
        self._dormant.clear()
        logger.debug("Cache store cleared")
