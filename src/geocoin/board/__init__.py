"""Grid cells, coins and the flyweight cell registry."""

from geocoin.board.base import Cell, Coin, cell_key, coin_to_display_string, parse_cell_key
from geocoin.board.registry import CellRegistry

__all__ = [
    "Cell",
    "CellRegistry",
    "Coin",
    "cell_key",
    "coin_to_display_string",
    "parse_cell_key",
]
