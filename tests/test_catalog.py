"""
Tests for building the place index and the search façade.

Run with: python -m pytest tests/test_catalog.py
"""

import pytest

from locintel.exceptions import CatalogError
from locintel.models import LocationRecord, LocationType
from locintel.services.catalog import SAMPLE_LOCATIONS, LocationCatalogBuilder, PlaceSearch


def test_build_indexes_names_and_aliases():
    index = LocationCatalogBuilder.build([
        {"name": "Mumbai CST", "lat": 18.9401, "lng": 72.8352, "type": "landmark",
         "aliases": ["Chhatrapati Shivaji Terminus", "VT Station"]},
    ])

    by_name = index.search("mumbai cst")
    by_alias = index.search("vt station")

    assert by_name == LocationRecord("Mumbai CST", 18.9401, 72.8352, LocationType.LANDMARK)
    assert by_alias == by_name
    assert by_alias is not by_name
    assert index.search("chhatrapati shivaji terminus").name == "Mumbai CST"
    assert len(index) == 3


def test_build_defaults_type_to_location():
    index = LocationCatalogBuilder.build([{"name": "Depot 4", "lat": 1, "lng": 2}])

    assert index.search("depot 4").type is LocationType.LOCATION


def test_build_later_record_wins_on_collision():
    index = LocationCatalogBuilder.build([
        {"name": "Central", "lat": 1, "lng": 1},
        {"name": "Station", "lat": 2, "lng": 2, "aliases": ["central"]},
    ])

    assert index.search("Central").name == "Station"


def test_build_accepts_single_alias_string():
    index = LocationCatalogBuilder.build([{"name": "Gateway of India", "lat": 1, "lng": 2, "aliases": "Gateway"}])

    assert index.search("gateway").name == "Gateway of India"
    assert index.search("g") is None


@pytest.mark.parametrize("record, message", [
    ({"lat": 1, "lng": 2}, "missing field 'name'"),
    ({"name": "No Lng", "lat": 1}, "missing field 'lng'"),
    ({"name": "Bad", "lat": "north", "lng": 2}, "invalid coordinates"),
    ({"name": "Odd", "lat": 1, "lng": 2, "type": "warehouse"}, "unknown type"),
    ({"name": 42, "lat": 1, "lng": 2}, "name must be a string"),
])
def test_build_rejects_malformed_records(record, message):
    with pytest.raises(CatalogError) as excinfo:
        LocationCatalogBuilder.build([{"name": "Fine", "lat": 0, "lng": 0}, record])

    assert excinfo.value.index == 1
    assert message in str(excinfo.value)


def test_sample_catalog():
    index = LocationCatalogBuilder.build(SAMPLE_LOCATIONS)

    assert len(index) == len(SAMPLE_LOCATIONS)
    assert [r.name for r in index.autocomplete("de")] == ["Delhi Red Fort"]
    assert index.search("jaipur hawa mahal").lat == pytest.approx(26.9239)


def test_place_search_minimum_query_length():
    search = PlaceSearch.from_records(SAMPLE_LOCATIONS, min_query_length=2)

    assert search.suggest("m") == []
    assert search.suggest("") == []
    assert search.suggest(None) == []
    assert search.suggest("   ") == []
    assert [r.name for r in search.suggest("mu")] == ["Mumbai CST"]


def test_place_search_matches_query_as_typed():
    search = PlaceSearch.from_records([
        {"name": "Pune", "lat": 18.52, "lng": 73.85},
        {"name": "Pune Station", "lat": 18.53, "lng": 73.87},
    ])

    assert [r.name for r in search.suggest("Pune")] == ["Pune", "Pune Station"]
    assert [r.name for r in search.suggest("Pune ")] == ["Pune Station"]
    assert search.suggest(" Pune") == []


def test_place_search_limit():
    search = PlaceSearch.from_records(
        [{"name": f"Depot {n}", "lat": 0, "lng": n} for n in range(20)],
        max_results=5,
    )

    assert len(search.suggest("depot")) == 5


def test_place_search_defaults_from_settings():
    from locintel.config import settings

    search = PlaceSearch.from_records(SAMPLE_LOCATIONS)

    assert search.min_query_length == settings.AUTOCOMPLETE_MIN_QUERY_LENGTH
    assert search.max_results == settings.AUTOCOMPLETE_MAX_RESULTS


def test_place_search_resolve():
    search = PlaceSearch.from_records(SAMPLE_LOCATIONS)

    assert search.resolve(" Gateway of India ").type is LocationType.LANDMARK
    assert search.resolve("Gateway") is None


def test_record_to_dict():
    record = LocationRecord("India Gate Delhi", 28.6129, 77.2295, LocationType.LANDMARK)

    assert record.to_dict() == {"name": "India Gate Delhi", "lat": 28.6129, "lng": 77.2295, "type": "landmark"}
    assert record.coordinate.lat == 28.6129
