"""Base class for save providers and the session snapshot they fill."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from geocoin.board.base import Coin
    from geocoin.board.registry import CellRegistry
    from geocoin.types import GeoPoint, Segment


@dataclass
class SessionSnapshot:
    """Everything that survives between sessions.

    Attributes:
        position: Player position.
        dormant: Mapping of cell key to dormant cache snapshot text.
        coins: Player inventory, oldest first.
        trail: Movement trail segments, oldest first.
    """

    position: GeoPoint
    dormant: dict[str, str] = field(default_factory=dict)
    coins: list[Coin] = field(default_factory=list)
    trail: list[Segment] = field(default_factory=list)


class BaseSaveProvider(ABC):
    """Abstract base class for save providers.

    Each provider owns one field of the session and is stored under its own
    key in durable storage, so a damaged field never blocks the others.

    Class Attributes:
        name: Unique identifier, also used as the storage key.
        priority: Processing order (lower values run first). Default is 100.

    Example:
        @SaveRegistry.register
        class StepCountSaveProvider(BaseSaveProvider):
            name: ClassVar[str] = "step_count"

            def gather(self, snapshot: SessionSnapshot) -> None:
                self._state = len(snapshot.trail)
            ...
    """

    name: ClassVar[str]
    priority: ClassVar[int] = 100

    @abstractmethod
    def gather(self, snapshot: SessionSnapshot) -> None:
        """Copy this provider's field out of the snapshot being saved.

        Args:
            snapshot: State collected from the cache store and player.
        """

    @abstractmethod
    def restore(self, snapshot: SessionSnapshot, registry: CellRegistry) -> bool:
        """Write this provider's loaded field into the snapshot being restored.

        Args:
            snapshot: Snapshot pre-filled with defaults.
            registry: Registry for re-canonicalizing any cells.

        Returns:
            True if state was restored, False if there was nothing to restore.
        """

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Serialize state for storage.

        Returns:
            Dictionary with serialized state (must be JSON-serializable).
        """

    @abstractmethod
    def from_dict(self, data: Any) -> None:  # noqa: ANN401
        """Load state from decoded storage data.

        Args:
            data: Decoded JSON previously produced by to_dict().

        Raises:
            MalformedSessionFieldError: If the data does not have the expected shape.
        """

    @abstractmethod
    def clear(self) -> None:
        """Drop any gathered or loaded state."""
