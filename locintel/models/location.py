"""Location record model for the place catalog."""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

from locintel.models.geometry import Coordinate


class LocationType(str, Enum):
    """Kind of place a catalog entry describes."""

    LANDMARK = "landmark"
    LOCATION = "location"


@dataclass(frozen=True)
class LocationRecord:
    """
    A named place that can be suggested by autocomplete.

    Records are immutable. The same record data may be indexed under several
    keys (canonical name and aliases).
    """

    name: str
    lat: float
    lng: float
    type: LocationType = LocationType.LOCATION

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.lat, self.lng)

    def to_dict(self) -> Dict[str, Union[str, float]]:
        return {
            "name": self.name,
            "lat": self.lat,
            "lng": self.lng,
            "type": self.type.value,
        }
