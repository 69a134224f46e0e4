"""Building the autocomplete index from a place catalog."""
import logging
from typing import Any, Iterable, List, Mapping, Optional

from locintel.config import settings
from locintel.exceptions import CatalogError
from locintel.models import LocationRecord, LocationType
from locintel.services.trie import TrieIndex

logger = logging.getLogger(__name__)


# Demo catalog of Indian cities and landmarks
SAMPLE_LOCATIONS: List[Mapping[str, Any]] = [
    {"name": "Mumbai CST", "lat": 18.9401, "lng": 72.8352, "type": "landmark"},
    {"name": "Gateway of India", "lat": 18.9220, "lng": 72.8347, "type": "landmark"},
    {"name": "Delhi Red Fort", "lat": 28.6562, "lng": 77.2410, "type": "landmark"},
    {"name": "India Gate Delhi", "lat": 28.6129, "lng": 77.2295, "type": "landmark"},
    {"name": "Bangalore MG Road", "lat": 12.9716, "lng": 77.5946, "type": "location"},
    {"name": "Pune Shivaji Nagar", "lat": 18.5204, "lng": 73.8567, "type": "location"},
    {"name": "Chennai Marina Beach", "lat": 13.0500, "lng": 80.2824, "type": "landmark"},
    {"name": "Kolkata Victoria Memorial", "lat": 22.5448, "lng": 88.3426, "type": "landmark"},
    {"name": "Hyderabad Charminar", "lat": 17.3616, "lng": 78.4747, "type": "landmark"},
    {"name": "Jaipur Hawa Mahal", "lat": 26.9239, "lng": 75.8267, "type": "landmark"},
]


class LocationCatalogBuilder:
    """Turns raw catalog entries into a TrieIndex."""

    @staticmethod
    def build(records: Iterable[Mapping[str, Any]]) -> TrieIndex:
        """
        Index every record under its name and each of its aliases.

        Args:
            records: Mappings with name, lat, lng and optional type and aliases

        Returns:
            Populated TrieIndex. Records are inserted in input order, so a
            later record wins when two keys collide.

        Raises:
            CatalogError: If a record is missing a field or has an unknown type
        """
        index = TrieIndex()
        count = 0

        for position, raw in enumerate(records):
            record = LocationCatalogBuilder._make_record(raw, position)
            index.insert(record.name, record)

            aliases = raw.get("aliases") or []
            if isinstance(aliases, str):
                aliases = [aliases]
            for alias in aliases:
                # Fresh record per key so entries never share mutable state
                index.insert(alias, LocationCatalogBuilder._make_record(raw, position))
            count += 1

        logger.info("Built location index: %d records, %d keys", count, len(index))
        return index

    @staticmethod
    def _make_record(raw: Mapping[str, Any], position: int) -> LocationRecord:
        try:
            name = raw["name"]
            lat = float(raw["lat"])
            lng = float(raw["lng"])
        except KeyError as exc:
            raise CatalogError(f"missing field {exc.args[0]!r}", position) from exc
        except (TypeError, ValueError) as exc:
            raise CatalogError(f"invalid coordinates ({exc})", position) from exc

        if not isinstance(name, str):
            raise CatalogError("name must be a string", position)

        try:
            location_type = LocationType(raw.get("type") or LocationType.LOCATION.value)
        except ValueError as exc:
            raise CatalogError(f"unknown type {raw.get('type')!r}", position) from exc

        return LocationRecord(name=name, lat=lat, lng=lng, type=location_type)


class PlaceSearch:
    """Query façade used by origin/destination search boxes."""

    def __init__(
        self,
        index: TrieIndex,
        min_query_length: Optional[int] = None,
        max_results: Optional[int] = None,
    ):
        self.index = index
        self.min_query_length = (
            settings.AUTOCOMPLETE_MIN_QUERY_LENGTH if min_query_length is None else min_query_length
        )
        self.max_results = settings.AUTOCOMPLETE_MAX_RESULTS if max_results is None else max_results

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]], **kwargs) -> "PlaceSearch":
        return cls(LocationCatalogBuilder.build(records), **kwargs)

    def suggest(self, query: str) -> List[LocationRecord]:
        """
        Suggestions for partially typed text; too-short queries get none.

        Whitespace only counts against the minimum length check. The query
        itself is matched as typed, so "Pune " suggests names continuing
        with a space.
        """
        query = query or ""
        if len(query.strip()) < self.min_query_length:
            return []
        return self.index.autocomplete(query, self.max_results)

    def resolve(self, name: str) -> Optional[LocationRecord]:
        """Exact lookup of a submitted place name."""
        return self.index.search((name or "").strip())
