"""Save providers for player inventory, position and movement trail.

Each field is a separate provider so that a damaged trail, say, does not
cost the player their coins.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, ClassVar

from geocoin.board.base import Coin
from geocoin.caches.snapshot import parse_coin_data
from geocoin.exceptions import MalformedSessionFieldError
from geocoin.saves.base import BaseSaveProvider
from geocoin.saves.registry import SaveRegistry
from geocoin.types import GeoPoint, Segment

if TYPE_CHECKING:
    from geocoin.board.registry import CellRegistry
    from geocoin.saves.base import SessionSnapshot

logger = logging.getLogger(__name__)


def _point_from_data(data: Any) -> GeoPoint:  # noqa: ANN401
    """Decode a ``[lat, lng]`` pair.

    Raises:
        ValueError: If the pair is not two finite numbers.
    """
    if not isinstance(data, list) or len(data) != 2:  # noqa: PLR2004
        msg = f"Expected [lat, lng], got {data!r}"
        raise ValueError(msg)
    return GeoPoint(_coordinate(data[0]), _coordinate(data[1]))


def _coordinate(value: Any) -> float:  # noqa: ANN401
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"Expected a finite number, got {type(value).__name__}"
        raise ValueError(msg)
    try:
        number = float(value)
    except OverflowError:
        msg = "Coordinate is too large for a float"
        raise ValueError(msg) from None
    if not math.isfinite(number):
        msg = f"Expected a finite number, got {number!r}"
        raise ValueError(msg)
    return number


@SaveRegistry.register
class PlayerCoinsSaveProvider(BaseSaveProvider):
    """Persists the player's coin stack."""

    name: ClassVar[str] = "player_coins"
    priority: ClassVar[int] = 110

    def __init__(self) -> None:
        """Initialize with no state."""
        self._state: list[tuple[int, int, int]] | None = None

    def gather(self, snapshot: SessionSnapshot) -> None:
        """Copy the player's coins out of the snapshot."""
        self._state = [(c.cell.xindex, c.cell.yindex, c.serial) for c in snapshot.coins]

    def restore(self, snapshot: SessionSnapshot, registry: CellRegistry) -> bool:
        """Rebuild the coins with canonical owner cells."""
        if self._state is None:
            return False
        snapshot.coins = [Coin(registry.canonical_cell(x, y), serial) for x, y, serial in self._state]
        logger.debug("Restored %d player coins", len(snapshot.coins))
        return True

    def to_dict(self) -> dict[str, Any]:
        """Serialize the coin stack."""
        return {"coins": [list(coin) for coin in self._state or []]}

    def from_dict(self, data: Any) -> None:  # noqa: ANN401
        """Load and validate the coin stack."""
        if not isinstance(data, dict) or not isinstance(data.get("coins"), list):
            raise MalformedSessionFieldError(self.name, "expected {'coins': [[x, y, serial], ...]}")
        try:
            self._state = [parse_coin_data(item) for item in data["coins"]]
        except ValueError as e:
            raise MalformedSessionFieldError(self.name, str(e)) from e

    def clear(self) -> None:
        """Drop the coin stack."""
        self._state = None


@SaveRegistry.register
class PlayerPositionSaveProvider(BaseSaveProvider):
    """Persists the player's position as a {lat, lng} record."""

    name: ClassVar[str] = "player_position"
    priority: ClassVar[int] = 120

    def __init__(self) -> None:
        """Initialize with no state."""
        self._state: GeoPoint | None = None

    def gather(self, snapshot: SessionSnapshot) -> None:
        """Copy the position out of the snapshot."""
        self._state = GeoPoint(*snapshot.position)

    def restore(self, snapshot: SessionSnapshot, registry: CellRegistry) -> bool:
        """Write the loaded position into the snapshot."""
        if self._state is None:
            return False
        snapshot.position = self._state
        return True

    def to_dict(self) -> dict[str, Any]:
        """Serialize the position."""
        if self._state is None:
            return {}
        return {"lat": self._state.lat, "lng": self._state.lng}

    def from_dict(self, data: Any) -> None:  # noqa: ANN401
        """Load and validate the position."""
        if not isinstance(data, dict):
            raise MalformedSessionFieldError(self.name, "expected {'lat': ..., 'lng': ...}")
        if not data:
            self._state = None
            return
        try:
            self._state = GeoPoint(_coordinate(data.get("lat")), _coordinate(data.get("lng")))
        except ValueError as e:
            raise MalformedSessionFieldError(self.name, str(e)) from e

    def clear(self) -> None:
        """Drop the position."""
        self._state = None


@SaveRegistry.register
class MovementTrailSaveProvider(BaseSaveProvider):
    """Persists the movement trail as a list of [from, to] position pairs."""

    name: ClassVar[str] = "movement_trail"
    priority: ClassVar[int] = 130

    def __init__(self) -> None:
        """Initialize with no state."""
        self._state: list[Segment] | None = None

    def gather(self, snapshot: SessionSnapshot) -> None:
        """Copy the trail out of the snapshot."""
        self._state = list(snapshot.trail)

    def restore(self, snapshot: SessionSnapshot, registry: CellRegistry) -> bool:
        """Write the loaded trail into the snapshot."""
        if self._state is None:
            return False
        snapshot.trail = list(self._state)
        return True

    def to_dict(self) -> dict[str, Any]:
        """Serialize the trail."""
        return {
            "segments": [
                [[seg.start.lat, seg.start.lng], [seg.end.lat, seg.end.lng]] for seg in self._state or []
            ],
        }

    def from_dict(self, data: Any) -> None:  # noqa: ANN401
        """Load and validate the trail."""
        if not isinstance(data, dict) or not isinstance(data.get("segments"), list):
            raise MalformedSessionFieldError(self.name, "expected {'segments': [[[lat, lng], [lat, lng]], ...]}")
        segments: list[Segment] = []
        try:
            for item in data["segments"]:
                if not isinstance(item, list) or len(item) != 2:  # noqa: PLR2004
                    msg = f"Expected [from, to], got {item!r}"
                    raise ValueError(msg)
                segments.append(Segment(_point_from_data(item[0]), _point_from_data(item[1])))
        except ValueError as e:
            raise MalformedSessionFieldError(self.name, str(e)) from e
        self._state = segments

    def clear(self) -> None:
        """Drop the trail."""
        self._state = None
