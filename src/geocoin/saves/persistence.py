"""Session persistence: flush world state to storage and bring it back.

save() runs at session end. It demotes every Active cache so the whole world
is in snapshot form, gathers a SessionSnapshot, and lets each save provider
write its own field as JSON text under its own storage key.

restore() runs at session start. It begins from defaults (no caches, empty
inventory and trail, configured origin) and lets each provider overwrite its
field from storage. Each field is isolated:

- Missing key: the field keeps its default.
- Unparseable JSON or wrong structure: a warning is logged and the field
  keeps its default.
- Storage read failure or text that is not valid UTF-8: logged, and the
  field keeps its default.

Nothing here raises on bad stored data; a damaged save degrades to a fresh
field rather than a failed session.

Example usage:
    persistence = SessionPersistence(FileStorage(), registry)

    # Session start
    snapshot = persistence.restore()
    cache_store.load_dormant(snapshot.dormant)

    # Session end
    persistence.save(cache_store, player_state)
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from geocoin.conf import settings
from geocoin.exceptions import MalformedSessionFieldError
from geocoin.saves.base import SessionSnapshot
from geocoin.saves.loader import SaveLoader
from geocoin.types import GeoPoint

if TYPE_CHECKING:
    from geocoin.board.registry import CellRegistry
    from geocoin.caches.store import CacheStore
    from geocoin.player.base import PlayerState
    from geocoin.storage import KeyValueStorage

logger = logging.getLogger(__name__)


class SessionPersistence:
    """Saves and restores sessions through the installed save providers.

    Attributes:
        storage: Durable key-value storage.
        registry: Cell registry used to re-canonicalize restored coins.
        origin: Position used when no stored position is usable.
        loader: Save loader holding the provider instances.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        registry: CellRegistry,
        origin: GeoPoint | None = None,
        loader: SaveLoader | None = None,
    ) -> None:
        """Initialize persistence and instantiate the save providers.

        Args:
            storage: Where session fields are written.
            registry: Registry shared with the cache store.
            origin: Default position. Defaults to settings.ORIGIN_LAT/ORIGIN_LNG.
            loader: Custom save loader. Defaults to one driven by settings.INSTALLED_SAVES.
        """
        self.storage = storage
        self.registry = registry
        self.origin = origin if origin is not None else GeoPoint(settings.ORIGIN_LAT, settings.ORIGIN_LNG)
        self.loader = loader if loader is not None else SaveLoader(settings)
        self.loader.instantiate_all()

    def save(self, cache_store: CacheStore, player_state: PlayerState) -> dict[str, str]:
        """Demote every cache and write the session to storage.

        Args:
            cache_store: Store whose caches are all demoted to Dormant.
            player_state: Player position, inventory and trail.

        Returns:
            Mapping of storage key to the text written under it.

        Raises:
            OSError: If the storage backend fails to write.
        """
        cache_store.demote_all()

        snapshot = SessionSnapshot(
            position=player_state.position,
            dormant=cache_store.dormant_snapshots(),
            coins=list(player_state.coins),
            trail=list(player_state.trail),
        )
        self.loader.gather_state(snapshot)

        bundle: dict[str, str] = {}
        for name, data in self.loader.to_dict().items():
            text = json.dumps(data, separators=(",", ":"))
            try:
                self.storage.set_item(name, text)
            except OSError:
                logger.exception("Failed to write session field '%s'", name)
                raise
            bundle[name] = text

        logger.info(
            "Session saved: %d dormant caches, %d coins held, %d trail segments",
            len(snapshot.dormant),
            len(snapshot.coins),
            len(snapshot.trail),
        )
        return bundle

    def default_snapshot(self) -> SessionSnapshot:
        """Return the state of a brand-new session."""
        return SessionSnapshot(position=self.origin)

    def restore(self) -> SessionSnapshot:
        """Read the session back from storage, field by field.

        Returns:
            The restored snapshot; unusable fields hold their defaults.
        """
        snapshot = self.default_snapshot()
        self.loader.clear_all()

        for name, provider in self.loader.providers():
            try:
                text = self.storage.get_item(name)
            except OSError:
                logger.exception("Could not read session field '%s'; using default", name)
                continue
            except UnicodeDecodeError as e:
                logger.warning("Session field '%s' is not valid text (%s); using default", name, e)
                continue
            if text is None:
                logger.debug("No stored value for session field '%s'", name)
                continue

            try:
                data = json.loads(text)
            except (ValueError, RecursionError) as e:
                # ValueError covers JSONDecodeError and over-long integer literals
                logger.warning("Session field '%s' is not valid JSON (%s); using default", name, e)
                provider.clear()
                continue

            try:
                provider.from_dict(data)
            except MalformedSessionFieldError as e:
                logger.warning("%s; using default", e)
                provider.clear()

        self.loader.restore_state(snapshot, self.registry)
        logger.info(
            "Session restored: %d dormant caches, %d coins held, %d trail segments",
            len(snapshot.dormant),
            len(snapshot.coins),
            len(snapshot.trail),
        )
        return snapshot

    def clear(self) -> None:
        """Erase every stored session field."""
        self.storage.clear()
        self.loader.clear_all()
        logger.info("Session storage cleared")
