"""The cache entity held by a cell."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from geocoin.board.base import Cell, Coin


@dataclass
class Cache:
    """A cell's coin container in its Active form.

    The coin list is a stack: the last element is the most recently added
    coin and the first to leave.

    Attributes:
        cell: Canonical cell hosting the cache.
        coins: Coins currently held, oldest first.
    """

    cell: Cell
    coins: list[Coin] = field(default_factory=list)

    @property
    def key(self) -> str:
        """Key of the hosting cell."""
        return self.cell.key
