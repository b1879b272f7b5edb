"""
Exception hierarchy for SkyLattice.

Configuration problems are fatal and raised before any grid construction
starts. Fetch problems are raised inside the service clients and converted
to an absent result before they reach the grid builder.
"""


class SkyLatticeError(Exception):
    """Base exception for all SkyLattice errors."""
    pass


class ConfigurationError(SkyLatticeError):
    """Raised when bounding box, cell size or credentials are invalid."""
    pass


class FetchError(SkyLatticeError):
    """Raised when an external weather or traffic lookup fails."""
    pass


class WeatherParseError(FetchError):
    """Raised when a weather payload is missing fields or is malformed."""
    pass
