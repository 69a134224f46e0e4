"""Location intelligence toolkit: place autocomplete and route geometry."""

__version__ = "0.1.0"
