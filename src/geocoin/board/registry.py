"""Cell registry: flyweight cells and deterministic cache placement.

The registry is the only place cells are created. It converts geographic
points to cells and back to bounds, and decides which cells around a point
host a cache.

Cache placement is anchored to absolute world coordinates: the luck key of a
candidate is built from the candidate's own indices, never from the query
origin, so the same cells light up no matter where the player stands.

Example usage:
    registry = CellRegistry(tile_width=1e-4, visibility_radius=8, spawn_probability=0.1)

    here = GeoPoint(36.9894, -122.0627)
    cell = registry.cell_for_point(here)
    assert cell is registry.canonical_cell(cell.xindex, cell.yindex)

    for cache_cell in registry.cells_near(here):
        print(cache_cell.key, registry.bounds_for_cell(cache_cell))
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from geocoin.board.base import Cell, cell_key, parse_cell_key
from geocoin.conf import settings
from geocoin.luck import SeededRandom
from geocoin.types import GeoBounds, GeoPoint

if TYPE_CHECKING:
    from geocoin.luck import RandomSource

logger = logging.getLogger(__name__)


class CellRegistry:
    """Canonicalizes grid cells and computes cache-bearing neighborhoods.

    Attributes:
        tile_width: Cell edge length in degrees.
        visibility_radius: Default radius for cells_near().
        spawn_probability: Probability that a cell hosts a cache.
        random: Luck source used to gate cache placement.
    """

    def __init__(
        self,
        tile_width: float | None = None,
        visibility_radius: int | None = None,
        spawn_probability: float | None = None,
        random: RandomSource | None = None,
    ) -> None:
        """Initialize the registry, falling back to settings for omitted values.

        Args:
            tile_width: Cell edge length in degrees. Defaults to settings.TILE_DEGREES.
            visibility_radius: Default neighborhood radius. Defaults to settings.NEIGHBORHOOD_SIZE.
            spawn_probability: Cache probability. Defaults to settings.CACHE_SPAWN_PROBABILITY.
            random: Luck source. Defaults to a SeededRandom salted with settings.LUCK_SALT.
        """
        self.tile_width = settings.TILE_DEGREES if tile_width is None else tile_width
        self.visibility_radius = settings.NEIGHBORHOOD_SIZE if visibility_radius is None else visibility_radius
        self.spawn_probability = (
            settings.CACHE_SPAWN_PROBABILITY if spawn_probability is None else spawn_probability
        )
        self.random: RandomSource = random if random is not None else SeededRandom(settings.LUCK_SALT)

        if self.tile_width <= 0:
            msg = f"tile_width must be positive, got {self.tile_width}"
            raise ValueError(msg)

        self._known_cells: dict[tuple[int, int], Cell] = {}

    @property
    def known_cell_count(self) -> int:
        """Number of distinct cells created so far."""
        return len(self._known_cells)

    def canonical_cell(self, xindex: int, yindex: int) -> Cell:
        """Return the shared Cell for these indices, creating it on first use."""
        index = (xindex, yindex)
        cell = self._known_cells.get(index)
        if cell is None:
            cell = Cell(xindex, yindex)
            self._known_cells[index] = cell
        return cell

    def cell_for_key(self, key: str) -> Cell:
        """Return the canonical cell for an "x,y" key.

        Raises:
            ValueError: If the key is malformed.
        """
        xindex, yindex = parse_cell_key(key)
        return self.canonical_cell(xindex, yindex)

    def cell_for_point(self, point: GeoPoint) -> Cell:
        """Return the cell containing a geographic point.

        Uses floor division so that points just below zero land in cell -1.
        """
        return self.canonical_cell(
            math.floor(point.lat / self.tile_width),
            math.floor(point.lng / self.tile_width),
        )

    def bounds_for_cell(self, cell: Cell) -> GeoBounds:
        """Return the geographic rectangle covered by a cell."""
        return GeoBounds(
            GeoPoint(cell.xindex * self.tile_width, cell.yindex * self.tile_width),
            GeoPoint((cell.xindex + 1) * self.tile_width, (cell.yindex + 1) * self.tile_width),
        )

    def has_cache(self, xindex: int, yindex: int) -> bool:
        """Check whether the cell at these indices hosts a cache."""
        return self.random.value(cell_key(xindex, yindex)) < self.spawn_probability

    def cells_near(self, point: GeoPoint, radius: int | None = None) -> set[Cell]:
        """Return the cache-bearing cells around a point.

        Offsets span the half-open window [-radius, radius) on both axes, so
        a radius of R examines exactly 2R x 2R candidates.

        Args:
            point: Centre of the neighborhood.
            radius: Window radius in cells. Defaults to visibility_radius.

        Returns:
            Canonical cells whose luck falls below spawn_probability.
        """
        if radius is None:
            radius = self.visibility_radius

        origin = self.cell_for_point(point)
        result: set[Cell] = set()
        for dx in range(-radius, radius):
            for dy in range(-radius, radius):
                xindex = origin.xindex + dx
                yindex = origin.yindex + dy
                if self.has_cache(xindex, yindex):
                    result.add(self.canonical_cell(xindex, yindex))

        logger.debug("Found %d cache cells within %d of %s", len(result), radius, origin.key)
        return result
