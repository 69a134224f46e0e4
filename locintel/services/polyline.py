"""
Polyline encoding/decoding and route geometry normalization.

Routing services return geometries either as GeoJSON LineStrings, as
Google-style encoded polylines, or as raw coordinate arrays. Everything is
converted to a list of Coordinate values in (lat, lng) order.
"""

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any, List, Optional, Tuple

from locintel.exceptions import PolylineDecodeError
from locintel.models import Coordinate

logger = logging.getLogger(__name__)

PRECISION = 1e5


def decode_polyline(encoded: Optional[str]) -> List[Coordinate]:
    """
    Decode a Google Polyline encoded string into a list of coordinates.

    Args:
        encoded: Polyline encoded string (None or "" yields an empty route)

    Returns:
        List of Coordinate in the order they were encoded

    Raises:
        PolylineDecodeError: If the string ends in the middle of a value, a
            latitude has no matching longitude, or a character is out of range
    """
    if not encoded:
        return []

    coordinates = []
    index = 0
    lat = 0
    lng = 0

    while index < len(encoded):
        dlat, index = _decode_value(encoded, index)
        if index >= len(encoded):
            raise PolylineDecodeError("Latitude without longitude", index)
        dlng, index = _decode_value(encoded, index)

        lat += dlat
        lng += dlng
        coordinates.append(Coordinate(lat / PRECISION, lng / PRECISION))

    return coordinates


def _decode_value(encoded: str, index: int) -> Tuple[int, int]:
    """Decode one zig-zag delta starting at index; return (delta, next index)."""
    result = 0
    shift = 0
    while True:
        if index >= len(encoded):
            raise PolylineDecodeError("Truncated polyline value", index)
        b = ord(encoded[index]) - 63
        if b < 0 or b > 63:
            raise PolylineDecodeError(f"Invalid polyline character {encoded[index]!r}", index)
        index += 1
        result |= (b & 0x1f) << shift
        shift += 5
        if b < 0x20:
            break

    delta = ~(result >> 1) if (result & 1) else (result >> 1)
    return delta, index


def encode_polyline(coordinates: Sequence[Coordinate]) -> str:
    """
    Encode a sequence of coordinates into a Google Polyline string.

    Args:
        coordinates: Coordinates in (lat, lng) order

    Returns:
        Polyline encoded string
    """
    encoded = []
    prev_lat = 0
    prev_lng = 0

    for coord in coordinates:
        lat_int = _to_fixed(coord.lat)
        lng_int = _to_fixed(coord.lng)

        encoded.extend(_encode_value(lat_int - prev_lat))
        encoded.extend(_encode_value(lng_int - prev_lng))

        prev_lat = lat_int
        prev_lng = lng_int

    return ''.join(encoded)


def _to_fixed(value: float) -> int:
    """Scale degrees to 1e-5 units, rounding half away from zero."""
    scaled = math.floor(abs(value) * PRECISION + 0.5)
    return -scaled if value < 0 else scaled


def _encode_value(value: int) -> List[str]:
    """Encode a single coordinate delta value."""
    # Left shift and invert if negative
    value = ~(value << 1) if value < 0 else (value << 1)

    chunks = []
    while value >= 0x20:
        chunks.append(chr((0x20 | (value & 0x1f)) + 63))
        value >>= 5

    chunks.append(chr(value + 63))
    return chunks


def normalize_geometry(geometry: Any) -> List[Coordinate]:
    """
    Convert any supported route geometry into a list of coordinates.

    Accepted shapes:
        - {"type": "LineString", "coordinates": [[lng, lat], ...]}
        - an encoded polyline string
        - a sequence of [lng, lat] pairs, {"lat", "lng"} mappings or Coordinate values

    Unrecognized shapes produce an empty list, which callers treat as
    "nothing to draw".

    Raises:
        PolylineDecodeError: If a polyline string is malformed
    """
    if geometry is None:
        return []

    if isinstance(geometry, Mapping):
        if geometry.get("type") != "LineString":
            logger.debug("Unsupported geometry type %r", geometry.get("type"))
            return []
        pairs = geometry.get("coordinates")
        if not _is_sequence(pairs):
            logger.debug("LineString without a coordinate array")
            return []
        points = [_pair_to_coordinate(pair) for pair in pairs]
        return _complete_or_empty(points)

    if isinstance(geometry, str):
        return decode_polyline(geometry)

    if _is_sequence(geometry):
        return _complete_or_empty([_to_coordinate(item) for item in geometry])

    logger.debug("Unsupported geometry of type %s", type(geometry).__name__)
    return []


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _pair_to_coordinate(pair: Any) -> Optional[Coordinate]:
    """Swap a [lng, lat(, alt)] pair into a Coordinate."""
    if not _is_sequence(pair) or len(pair) < 2:
        return None
    try:
        return Coordinate(lat=float(pair[1]), lng=float(pair[0]))
    except (TypeError, ValueError):
        return None


def _to_coordinate(item: Any) -> Optional[Coordinate]:
    if isinstance(item, Coordinate):
        return item
    if isinstance(item, Mapping):
        if "lat" not in item or "lng" not in item:
            return None
        try:
            return Coordinate(lat=float(item["lat"]), lng=float(item["lng"]))
        except (TypeError, ValueError):
            return None
    if _is_sequence(item) and len(item) == 2:
        return _pair_to_coordinate(item)
    return None


def _complete_or_empty(points: List[Optional[Coordinate]]) -> List[Coordinate]:
    if any(point is None for point in points):
        logger.debug("Discarding geometry with %d unrecognized points",
                     sum(1 for point in points if point is None))
        return []
    return points
