"""Player movement.

The PlayerManager is the sink for movement commands: directional steps from
on-screen buttons, signed deltas, or absolute fixes from a geolocation feed.
Every real move extends the movement trail and publishes a PlayerMovedEvent.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from geocoin.conf import settings
from geocoin.events import PlayerMovedEvent
from geocoin.player.base import PlayerState
from geocoin.types import GeoPoint, Segment

if TYPE_CHECKING:
    from geocoin.events import EventBus

logger = logging.getLogger(__name__)


class PlayerManager:
    """Moves the player and records the trail.

    Attributes:
        state: The player's state, mutated in place.
        step_degrees: Distance covered by one step().
        event_bus: Optional bus receiving PlayerMovedEvent.
    """

    # Unit (d_lat, d_lng) per compass direction
    DIRECTIONS: ClassVar[dict[str, tuple[int, int]]] = {
        "north": (1, 0),
        "south": (-1, 0),
        "east": (0, 1),
        "west": (0, -1),
    }

    def __init__(
        self,
        state: PlayerState,
        step_degrees: float | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        """Initialize the manager around an existing state."""
        self.state = state
        self.step_degrees = settings.PLAYER_STEP_DEGREES if step_degrees is None else step_degrees
        self.event_bus = event_bus

    @property
    def position(self) -> GeoPoint:
        """Current player position."""
        return self.state.position

    def move_to(self, point: GeoPoint) -> bool:
        """Move the player to an absolute position.

        Args:
            point: Destination.

        Returns:
            True if the player moved, False if already at ``point``.
        """
        start = self.state.position
        if point == start:
            return False

        self.state.position = point
        self.state.trail.append(Segment(start, point))
        logger.debug("Player moved from (%.6f, %.6f) to (%.6f, %.6f)", *start, *point)

        if self.event_bus:
            self.event_bus.publish(PlayerMovedEvent(from_position=start, to_position=point))
        return True

    def move_by(self, d_lat: float, d_lng: float) -> bool:
        """Move the player by signed latitude/longitude deltas."""
        return self.move_to(self.state.position.offset(d_lat, d_lng))

    def step(self, direction: str) -> bool:
        """Move one step north, south, east or west.

        Raises:
            ValueError: If the direction is unknown.
        """
        try:
            unit_lat, unit_lng = self.DIRECTIONS[direction.lower()]
        except KeyError:
            msg = f"Unknown direction {direction!r}; expected one of {sorted(self.DIRECTIONS)}"
            raise ValueError(msg) from None
        return self.move_by(unit_lat * self.step_degrees, unit_lng * self.step_degrees)

    def reset(self, origin: GeoPoint) -> None:
        """Put the player back at ``origin`` with no coins and no trail."""
        self.state.position = GeoPoint(*origin)
        self.state.coins.clear()
        self.state.trail.clear()
        logger.debug("Player reset to (%.6f, %.6f)", *origin)
