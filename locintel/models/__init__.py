"""Data models for the location intelligence toolkit."""
from locintel.models.geometry import AnimationFrame, BoundingBox, Coordinate
from locintel.models.location import LocationRecord, LocationType

__all__ = ["AnimationFrame", "BoundingBox", "Coordinate", "LocationRecord", "LocationType"]
