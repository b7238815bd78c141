"""Core value objects of the board: cells and coins."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Cell:
    """An integer-indexed square of the world grid.

    Cells are flyweights: obtain them from ``CellRegistry.canonical_cell()``
    so that every holder of a given (xindex, yindex) shares one instance.

    Attributes:
        xindex: Grid index along latitude.
        yindex: Grid index along longitude.
    """

    xindex: int
    yindex: int

    @property
    def key(self) -> str:
        """The "x,y" key used for caches, luck and storage."""
        return cell_key(self.xindex, self.yindex)

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True, slots=True)
class Coin:
    """A single collectible, identified by where it was minted.

    ``cell`` is the minting cell and never changes as the coin travels
    between caches and the player.

    Attributes:
        cell: Cell the coin was minted in.
        serial: Position of the coin in its cell's initial mint (0..n-1).
    """

    cell: Cell
    serial: int

    def __str__(self) -> str:
        return coin_to_display_string(self)


def cell_key(xindex: int, yindex: int) -> str:
    """Build the "x,y" key for a pair of grid indices."""
    return f"{xindex},{yindex}"


def parse_cell_key(key: str) -> tuple[int, int]:
    """Split an "x,y" key back into its grid indices.

    Only the exact form produced by cell_key() is accepted, so a key such as
    "+0,0" or " 0,0" never aliases cell (0, 0).

    Raises:
        ValueError: If the key is not in canonical "x,y" form.
    """
    parts = key.split(",")
    if len(parts) == 2:  # noqa: PLR2004
        try:
            xindex, yindex = int(parts[0]), int(parts[1])
        except ValueError:
            pass
        else:
            if cell_key(xindex, yindex) == key:
                return xindex, yindex
    msg = f"Invalid cell key: {key!r}"
    raise ValueError(msg)


def coin_to_display_string(coin: Coin) -> str:
    """Format a coin for display as "{ownerX}:{ownerY}#{serial}"."""
    return f"{coin.cell.xindex:.2f}:{coin.cell.yindex:.2f}#{coin.serial}"
