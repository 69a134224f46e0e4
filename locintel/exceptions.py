"""Exceptions raised by the location intelligence toolkit."""


class LocintelError(ValueError):
    """Base class for toolkit errors."""


class PolylineDecodeError(LocintelError):
    """Raised when an encoded polyline is truncated or contains invalid characters."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} (at offset {position})")
        self.position = position


class CatalogError(LocintelError):
    """Raised when a catalog record cannot be turned into a LocationRecord."""

    def __init__(self, message: str, index: int):
        super().__init__(f"Catalog record {index}: {message}")
        self.index = index
