"""Geocoin - a deterministic world of collectible-coin caches on a geographic grid.

This package provides the world model behind a location-based coin game:
- Flyweight grid cells with deterministic cache placement
- Caches that go dormant as compact snapshots when out of view
- LIFO coin exchange between caches and the player
- Field-by-field session persistence to durable key-value storage

Quick start:
    from geocoin import create_game

    session = create_game()
    session.step("north")
    for cache in session.visible_caches():
        session.withdraw(cache.cell)
    session.end()

Alternative usage:
    # Access settings in your code
    from geocoin.conf import settings

    print(settings.TILE_DEGREES)  # 0.0001

    # Or customize settings programmatically
    settings.configure(
        NEIGHBORHOOD_SIZE=4,
        MAX_INITIAL_COINS=10,
    )
"""

__version__ = "0.1.0"

from geocoin.board import Cell, CellRegistry, Coin, coin_to_display_string
from geocoin.caches import Cache, CacheStore
from geocoin.conf import settings
from geocoin.events import EventBus
from geocoin.exceptions import GeocoinError, MalformedSessionFieldError, MalformedSnapshotError
from geocoin.helpers import create_game, setup_logging
from geocoin.ledger import CoinLedger
from geocoin.luck import SeededRandom, luck
from geocoin.player import PlayerManager, PlayerState
from geocoin.saves import SessionPersistence, SessionSnapshot
from geocoin.session import GameSession
from geocoin.storage import FileStorage, MemoryStorage
from geocoin.types import GeoBounds, GeoPoint, Segment

__all__ = [
    "Cache",
    "CacheStore",
    "Cell",
    "CellRegistry",
    "Coin",
    "CoinLedger",
    "EventBus",
    "FileStorage",
    "GameSession",
    "GeoBounds",
    "GeoPoint",
    "GeocoinError",
    "MalformedSessionFieldError",
    "MalformedSnapshotError",
    "MemoryStorage",
    "PlayerManager",
    "PlayerState",
    "SeededRandom",
    "Segment",
    "SessionPersistence",
    "SessionSnapshot",
    "__version__",
    "coin_to_display_string",
    "create_game",
    "luck",
    "settings",
    "setup_logging",
]
