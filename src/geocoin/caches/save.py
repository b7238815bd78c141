"""Save provider for the dormant cache table."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar

from geocoin.exceptions import MalformedSessionFieldError
from geocoin.saves.base import BaseSaveProvider
from geocoin.saves.registry import SaveRegistry

if TYPE_CHECKING:
    from geocoin.board.registry import CellRegistry
    from geocoin.saves.base import SessionSnapshot

logger = logging.getLogger(__name__)


@SaveRegistry.register
class DormantCacheSaveProvider(BaseSaveProvider):
    """Persists the cell key -> snapshot text table.

    Snapshots are stored as opaque text; their contents are checked only when
    the cache is next materialized, so one bad cache never loses the table.
    """

    name: ClassVar[str] = "caches"
    priority: ClassVar[int] = 100

    def __init__(self) -> None:
        """Initialize with no state."""
        self._state: dict[str, str] | None = None

    def gather(self, snapshot: SessionSnapshot) -> None:
        """Copy the dormant table out of the snapshot."""
        self._state = dict(snapshot.dormant)
        logger.debug("Gathered %d dormant caches", len(self._state))

    def restore(self, snapshot: SessionSnapshot, registry: CellRegistry) -> bool:
        """Write the loaded dormant table into the snapshot."""
        if self._state is None:
            return False
        snapshot.dormant = dict(self._state)
        return True

    def to_dict(self) -> dict[str, Any]:
        """Serialize the dormant table."""
        return {"snapshots": dict(self._state or {})}

    def from_dict(self, data: Any) -> None:  # noqa: ANN401
        """Load the dormant table from decoded storage data."""
        if not isinstance(data, dict) or not isinstance(data.get("snapshots"), dict):
            raise MalformedSessionFieldError(self.name, "expected {'snapshots': {key: text}}")
        self._state = {
            str(key): snapshot for key, snapshot in data["snapshots"].items() if isinstance(snapshot, str)
        }
        dropped = len(data["snapshots"]) - len(self._state)
        if dropped:
            logger.warning("Dropped %d non-text cache snapshots", dropped)

    def clear(self) -> None:
        """Drop the table."""
        self._state = None
