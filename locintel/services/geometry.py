"""
Great-circle math and route measurements.

All functions take Coordinate values in degrees. Distances are in kilometres
on a spherical Earth.
"""

import math
from typing import Optional, Sequence

import numpy as np

from locintel.models import BoundingBox, Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_distance_km(p1: Coordinate, p2: Coordinate) -> float:
    """Great-circle distance between two points using the haversine formula."""
    lat1 = math.radians(p1.lat)
    lat2 = math.radians(p2.lat)
    dlat = lat2 - lat1
    dlng = math.radians(p2.lng - p1.lng)

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    # Clamp guards against a > 1 from rounding on antipodal points
    a = min(1.0, a)
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def initial_bearing_degrees(p1: Coordinate, p2: Coordinate) -> float:
    """
    Forward azimuth from p1 to p2.

    Returns:
        Bearing in [0, 360) degrees, 0 when both points coincide
    """
    lat1 = math.radians(p1.lat)
    lat2 = math.radians(p2.lat)
    dlng = math.radians(p2.lng - p1.lng)

    y = math.sin(dlng) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlng)

    bearing = (math.degrees(math.atan2(y, x)) + 360.0) % 360.0
    return 0.0 if bearing >= 360.0 else bearing


def interpolate(p1: Coordinate, p2: Coordinate, fraction: float) -> Coordinate:
    """Linear interpolation in lat/lng space (fine at route-segment scale)."""
    return Coordinate(
        lat=p1.lat + (p2.lat - p1.lat) * fraction,
        lng=p1.lng + (p2.lng - p1.lng) * fraction,
    )


def _as_array(points: Sequence[Coordinate]) -> np.ndarray:
    """Stack coordinates into an (n, 2) float array of (lat, lng)."""
    return np.array([(p.lat, p.lng) for p in points], dtype=float).reshape(-1, 2)


def bounding_box(points: Sequence[Coordinate]) -> Optional[BoundingBox]:
    """
    Compute the min/max envelope of a set of points.

    Returns:
        BoundingBox, or None if points is empty
    """
    if len(points) == 0:
        return None

    coords = _as_array(points)
    south, west = coords.min(axis=0)
    north, east = coords.max(axis=0)

    return BoundingBox(south=float(south), north=float(north), west=float(west), east=float(east))


def nearest_index(points: Sequence[Coordinate], target: Coordinate) -> int:
    """
    Index of the point closest to target by great-circle distance.

    Ties resolve to the first occurrence. Returns -1 for an empty sequence.
    """
    if len(points) == 0:
        return -1

    coords = np.radians(_as_array(points))
    lat = coords[:, 0]
    lng = coords[:, 1]
    target_lat = math.radians(target.lat)
    target_lng = math.radians(target.lng)

    # Haversine term is monotonic in distance, so compare it directly
    a = (np.sin((lat - target_lat) / 2) ** 2
         + np.cos(lat) * math.cos(target_lat) * np.sin((lng - target_lng) / 2) ** 2)

    return int(np.argmin(a))


def distance_along_route(points: Sequence[Coordinate], target: Coordinate) -> float:
    """
    Distance travelled from the start of the route to the point nearest target.

    Args:
        points: Route coordinates in travel order
        target: Current position, snapped to the nearest route vertex

    Returns:
        Distance in km (0.0 for an empty route)
    """
    end = nearest_index(points, target)

    total = 0.0
    for i in range(end):
        total += haversine_distance_km(points[i], points[i + 1])

    return total


def route_length_km(points: Sequence[Coordinate]) -> float:
    """Total length of a route; 0.0 for fewer than two points."""
    return sum((
        haversine_distance_km(points[i], points[i + 1])
        for i in range(len(points) - 1)
    ), 0.0)
