"""Player state and movement."""

from geocoin.player.base import PlayerState
from geocoin.player.manager import PlayerManager

__all__ = ["PlayerManager", "PlayerState"]
