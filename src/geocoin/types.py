"""Geographic value types shared across the package."""

from __future__ import annotations

from typing import NamedTuple


class GeoPoint(NamedTuple):
    """A latitude/longitude pair in degrees."""

    lat: float
    lng: float

    def offset(self, d_lat: float, d_lng: float) -> GeoPoint:
        """Return a new point shifted by the given deltas."""
        return GeoPoint(self.lat + d_lat, self.lng + d_lng)


class GeoBounds(NamedTuple):
    """Axis-aligned rectangle given by its south-west and north-east corners."""

    south_west: GeoPoint
    north_east: GeoPoint

    def contains(self, point: GeoPoint) -> bool:
        """Check whether a point lies inside the half-open rectangle."""
        return (
            self.south_west.lat <= point.lat < self.north_east.lat
            and self.south_west.lng <= point.lng < self.north_east.lng
        )


class Segment(NamedTuple):
    """One leg of the player's movement trail."""

    start: GeoPoint
    end: GeoPoint
