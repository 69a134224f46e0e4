"""Geometry value types shared by the codec, math and animation services."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 position in degrees."""

    lat: float
    lng: float


@dataclass(frozen=True)
class BoundingBox:
    """Min/max latitude and longitude envelope of a set of points."""

    south: float
    north: float
    west: float
    east: float


@dataclass(frozen=True)
class AnimationFrame:
    """
    One marker update produced while animating along a route.

    bearing is in [0, 360) degrees and progress in [0, 1].
    """

    lat: float
    lng: float
    bearing: float
    progress: float

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.lat, self.lng)
