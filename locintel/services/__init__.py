"""Location intelligence services: indexing, codecs, geometry and animation."""
from locintel.services.animator import AnimationSession, AnimatorState, RouteAnimator, animate_along_route
from locintel.services.catalog import SAMPLE_LOCATIONS, LocationCatalogBuilder, PlaceSearch
from locintel.services.geometry import (
    bounding_box,
    distance_along_route,
    haversine_distance_km,
    initial_bearing_degrees,
    interpolate,
    nearest_index,
    route_length_km,
)
from locintel.services.polyline import decode_polyline, encode_polyline, normalize_geometry
from locintel.services.scheduler import AsyncioScheduler, ManualScheduler, Scheduler
from locintel.services.trie import TrieIndex, TrieNode

__all__ = [
    "AnimationSession",
    "AnimatorState",
    "AsyncioScheduler",
    "LocationCatalogBuilder",
    "ManualScheduler",
    "PlaceSearch",
    "RouteAnimator",
    "SAMPLE_LOCATIONS",
    "Scheduler",
    "TrieIndex",
    "TrieNode",
    "animate_along_route",
    "bounding_box",
    "decode_polyline",
    "distance_along_route",
    "encode_polyline",
    "haversine_distance_km",
    "initial_bearing_degrees",
    "interpolate",
    "nearest_index",
    "normalize_geometry",
    "route_length_km",
]
