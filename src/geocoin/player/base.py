"""Player state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from geocoin.board.base import Coin
    from geocoin.types import GeoPoint, Segment


@dataclass
class PlayerState:
    """Everything the player carries between events.

    Attributes:
        position: Current geographic position.
        coins: Inventory used as a stack; the last coin is the next to leave.
        trail: Segments travelled so far, oldest first.
    """

    position: GeoPoint
    coins: list[Coin] = field(default_factory=list)
    trail: list[Segment] = field(default_factory=list)
