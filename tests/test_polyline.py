"""
Tests for polyline decoding, encoding and geometry normalization.

Run with: python -m pytest tests/test_polyline.py
"""

import pytest

from locintel.exceptions import LocintelError, PolylineDecodeError
from locintel.models import Coordinate
from locintel.services.polyline import decode_polyline, encode_polyline, normalize_geometry

REFERENCE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"

# Recorded Strava activity around Los Angeles; the last character starts a
# latitude with no longitude after it.
LA_ACTIVITY = "ciwmEt~rqU@hAOPgEIO@MNMl@Bd@CRH~@BjCCnBB`CGVUD{AEuA?KBILBpEBl@C`LBLLB`Gs@LBFLR|@v@|BtAfFKJc@N}BjAIJC"


def test_decode_reference_vector():
    coords = decode_polyline(REFERENCE)

    assert coords == [
        Coordinate(pytest.approx(38.5), pytest.approx(-120.2)),
        Coordinate(pytest.approx(40.7), pytest.approx(-120.95)),
        Coordinate(pytest.approx(43.252), pytest.approx(-126.453)),
    ]


def test_decode_empty_input():
    assert decode_polyline("") == []
    assert decode_polyline(None) == []


def test_decode_activity():
    coords = decode_polyline(LA_ACTIVITY[:-1])

    assert len(coords) == 34
    assert coords[0].lat == pytest.approx(33.87554)
    assert coords[0].lng == pytest.approx(-118.39483)
    assert all(33.5 < c.lat < 34.2 for c in coords)
    assert all(-118.8 < c.lng < -118.0 for c in coords)


def test_decode_dangling_latitude_raises():
    with pytest.raises(PolylineDecodeError):
        decode_polyline(LA_ACTIVITY)

    with pytest.raises(PolylineDecodeError):
        decode_polyline("_p~iF")


def test_decode_truncated_group_raises():
    with pytest.raises(PolylineDecodeError) as excinfo:
        decode_polyline("_p~iF~ps|")

    assert excinfo.value.position == len("_p~iF~ps|")


def test_decode_invalid_character_raises():
    with pytest.raises(PolylineDecodeError):
        decode_polyline("_p~iF ps|U")


@pytest.mark.parametrize("encoded", ["\u00e9??", "??\x7f?", "_p~iF~ps|U\u00ff?"])
def test_decode_characters_above_tilde_raise(encoded):
    with pytest.raises(PolylineDecodeError):
        decode_polyline(encoded)


def test_decode_error_is_value_error():
    with pytest.raises(ValueError):
        decode_polyline("A")
    assert issubclass(PolylineDecodeError, LocintelError)


def test_encode_reference_vector():
    coords = [Coordinate(38.5, -120.2), Coordinate(40.7, -120.95), Coordinate(43.252, -126.453)]

    assert encode_polyline(coords) == REFERENCE
    assert encode_polyline([]) == ""


def test_round_trip_precision():
    coords = [
        Coordinate(18.94012, 72.83521),
        Coordinate(18.92204, 72.83474),
        Coordinate(-33.86785, 151.20732),
        Coordinate(0.0, 0.0),
    ]

    decoded = decode_polyline(encode_polyline(coords))

    assert len(decoded) == len(coords)
    for original, result in zip(coords, decoded):
        assert result.lat == pytest.approx(original.lat, abs=1e-5)
        assert result.lng == pytest.approx(original.lng, abs=1e-5)


def test_normalize_linestring_swaps_axes():
    geometry = {"type": "LineString", "coordinates": [[10, 20], [11, 21]]}

    assert normalize_geometry(geometry) == [Coordinate(20, 10), Coordinate(21, 11)]


def test_normalize_linestring_ignores_altitude():
    geometry = {"type": "LineString", "coordinates": [[72.8, 18.9, 12.0]]}

    assert normalize_geometry(geometry) == [Coordinate(18.9, 72.8)]


def test_normalize_polyline_string():
    assert normalize_geometry(REFERENCE) == decode_polyline(REFERENCE)


def test_normalize_polyline_string_propagates_decode_error():
    with pytest.raises(PolylineDecodeError):
        normalize_geometry("_p~iF")


def test_normalize_coordinate_arrays():
    assert normalize_geometry([[10, 20], (11, 21)]) == [Coordinate(20, 10), Coordinate(21, 11)]
    assert normalize_geometry([{"lat": 20, "lng": 10}]) == [Coordinate(20, 10)]


def test_normalize_passes_coordinates_through():
    point = Coordinate(1.5, 2.5)

    result = normalize_geometry([point, {"lat": 3, "lng": 4}, [6, 5]])

    assert result[0] is point
    assert result[1:] == [Coordinate(3, 4), Coordinate(5, 6)]


@pytest.mark.parametrize("geometry", [
    None,
    42,
    {"type": "Point", "coordinates": [1, 2]},
    {"type": "LineString"},
    {"type": "LineString", "coordinates": [[1]]},
    [[1, 2, 3]],
    [{"lat": 1}],
    ["abc"],
    [[1, 2], None],
])
def test_normalize_unrecognized_shapes_are_empty(geometry):
    assert normalize_geometry(geometry) == []


def test_normalize_empty_sequence():
    assert normalize_geometry([]) == []
